# selfer/routers/schemas.py
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from selfer.models.channel import Participant, generate_participant_id


class ParticipantRequest(BaseModel):
    """참가자 프로필 (name만 필수, 나머지는 자유 형식 메타데이터)"""
    # name 누락은 422가 아니라 NAME_REQUIRED(400)로 응답하기 위해 Optional
    name: Optional[str] = None
    id: Optional[str] = None
    age: Optional[int] = None
    job: Optional[str] = None
    mbti: Optional[str] = None
    personality: Optional[str] = None
    interests: Union[List[str], str, None] = None

    def has_name(self) -> bool:
        return bool((self.name or "").strip())

    def to_participant(self) -> Participant:
        return Participant(
            id=(self.id or "").strip() or generate_participant_id(),
            name=(self.name or "").strip(),
            age=self.age,
            job=self.job,
            mbti=self.mbti.strip().upper() if self.mbti else None,
            personality=self.personality,
            interests=self.interests,
        )


class CreateChannelRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_participants: Optional[int] = Field(None, alias="targetParticipants", ge=1)
    host_info: Optional[ParticipantRequest] = Field(None, alias="hostInfo")


class TopicsRequest(BaseModel):
    code: Optional[str] = None
