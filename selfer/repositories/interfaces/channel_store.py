# selfer/repositories/interfaces/channel_store.py
from __future__ import annotations
from typing import Protocol, Optional

from selfer.models.channel import Channel


class ChannelStore(Protocol):
    """
    채널 레코드 키-값 저장소
    - 키: 대문자 채널 코드
    - 값: 채널 전체 (부분 업데이트 없음, last-write-wins)
    """

    def get_channel(self, code: str) -> Optional[Channel]: ...

    def save_channel(self, channel: Channel) -> None: ...

    def delete_channel(self, code: str) -> bool: ...

    def channel_exists(self, code: str) -> bool: ...
