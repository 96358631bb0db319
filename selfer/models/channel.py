# selfer/models/channel.py

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits
PARTICIPANT_ID_LENGTH = 7

STATUS_WAITING = "waiting"
STATUS_PLAYING = "playing"
CHANNEL_STATUSES = (STATUS_WAITING, STATUS_PLAYING)


def generate_channel_code() -> str:
    """
    영문 대문자 + 숫자 6자리 채널 코드 생성
    예: X7F2Q1
    """
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def generate_participant_id() -> str:
    """id 없이 들어온 참가자용 토큰"""
    return "".join(
        secrets.choice(string.ascii_lowercase + string.digits)
        for _ in range(PARTICIPANT_ID_LENGTH)
    )


def normalize_code(code: str) -> str:
    """조회/저장 키는 항상 대문자"""
    return (code or "").strip().upper()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_iso_z(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_iso(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return _utcnow()


@dataclass
class Participant:
    id: str
    name: str
    age: Optional[int] = None
    job: Optional[str] = None
    mbti: Optional[str] = None
    personality: Optional[str] = None
    # 리스트(이모지 선택형) 또는 자유 텍스트
    interests: Union[List[str], str, None] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        for key in ("age", "job", "mbti", "personality", "interests"):
            value = getattr(self, key)
            if value is not None:
                data[key] = list(value) if isinstance(value, list) else value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        interests = data.get("interests")
        if isinstance(interests, (list, tuple)):
            interests = [str(i) for i in interests]
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            age=data.get("age"),
            job=data.get("job"),
            mbti=data.get("mbti"),
            personality=data.get("personality"),
            interests=interests,
        )


@dataclass
class Channel:
    code: str = field(default_factory=generate_channel_code)
    participants: List[Participant] = field(default_factory=list)
    topics: List[str] = field(default_factory=list)
    current_topic_index: int = -1
    target_participants: Optional[int] = None
    status: str = STATUS_WAITING
    created_at: datetime = field(default_factory=_utcnow)

    def has_participant(self, participant_id: str) -> bool:
        return any(p.id == participant_id for p in self.participants)

    @property
    def current_topic(self) -> Optional[str]:
        if self.current_topic_index < 0 or not self.topics:
            return None
        return self.topics[self.current_topic_index]

    def to_dict(self) -> Dict[str, Any]:
        """클라이언트/저장소 공통 형태 (camelCase)"""
        return {
            "code": self.code,
            "participants": [p.to_dict() for p in self.participants],
            "topics": list(self.topics),
            "currentTopicIndex": self.current_topic_index,
            "targetParticipants": self.target_participants,
            "status": self.status,
            "createdAt": _to_iso_z(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Channel":
        return cls(
            code=normalize_code(data["code"]),
            participants=[Participant.from_dict(p) for p in data.get("participants") or []],
            topics=[str(t) for t in data.get("topics") or []],
            current_topic_index=int(data.get("currentTopicIndex", -1)),
            target_participants=data.get("targetParticipants"),
            status=data.get("status") or STATUS_WAITING,
            created_at=_parse_iso(data.get("createdAt")),
        )
