# selfer/repositories/memory/channel_store.py
from typing import Optional

from selfer.models.channel import Channel


class MemoryChannelStore:
    """단일 인스턴스/개발용 in-process 저장소"""

    def __init__(self):
        from selfer.repositories.memory import state as st
        self.st = st

    def get_channel(self, code: str) -> Optional[Channel]:
        return self.st.get_channel(code)

    def save_channel(self, channel: Channel) -> None:
        self.st.save_channel(channel)

    def delete_channel(self, code: str) -> bool:
        return self.st.delete_channel(code)

    def channel_exists(self, code: str) -> bool:
        return self.st.get_channel(code) is not None
