# selfer/services/channel_service.py
import logging
import threading
import weakref
from typing import Callable, List, Optional

from selfer.repositories.interfaces.channel_store import ChannelStore
from selfer.models.channel import (
    Channel,
    Participant,
    STATUS_PLAYING,
    generate_channel_code,
    normalize_code,
)

logger = logging.getLogger(__name__)

# 코드 충돌 시 재생성 횟수
MAX_CODE_ATTEMPTS = 5


class _ChannelLock:
    """weakref 가능한 Lock 래퍼"""
    __slots__ = ("_lock", "__weakref__")

    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc):
        self._lock.release()


# 채널 코드별 lock (같은 프로세스 안의 동시 read-modify-write 직렬화)
# 사용 중인 lock만 남음: 아무도 잡고 있지 않으면 엔트리가 사라짐
_channel_locks: "weakref.WeakValueDictionary[str, _ChannelLock]" = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()


def _lock_for(code: str) -> _ChannelLock:
    key = normalize_code(code)
    with _locks_guard:
        lock = _channel_locks.get(key)
        if lock is None:
            lock = _ChannelLock()
            _channel_locks[key] = lock
        return lock


class ChannelService:
    """
    ChannelStore 위의 read-modify-write 헬퍼

    - 모든 연산은 total: 채널 없음 / 토픽 없음은 False 또는 None으로 알림
    - 저장은 항상 채널 전체 덮어쓰기 (version 체크 없음)
    """

    def __init__(self, store: ChannelStore):
        self.store = store

    def get_channel(self, code: str) -> Optional[Channel]:
        if not normalize_code(code):
            return None
        return self.store.get_channel(code)

    def create_channel(
        self,
        target_participants: Optional[int] = None,
        host_info: Optional[Participant] = None,
    ) -> Channel:
        """채널 생성 (host가 있으면 participants[0])"""
        code = generate_channel_code()
        for _ in range(MAX_CODE_ATTEMPTS - 1):
            if not self.store.channel_exists(code):
                break
            logger.warning(f"[create_channel] 코드 충돌, 재생성: {code}")
            code = generate_channel_code()

        channel = Channel(
            code=code,
            participants=[host_info] if host_info else [],
            target_participants=target_participants,
        )
        self.store.save_channel(channel)
        logger.info(f"채널 생성: {channel.code} (target={target_participants}, host={bool(host_info)})")
        return channel

    def _mutate(self, code: str, fn: Callable[[Channel], bool]) -> bool:
        """
        채널 로드 -> fn 적용 -> fn이 True면 저장
        채널이 없으면 None을 넘기지 않고 False 반환
        """
        if not normalize_code(code):
            return False
        with _lock_for(code):
            channel = self.store.get_channel(code)
            if channel is None:
                return False
            changed = fn(channel)
            if changed:
                self.store.save_channel(channel)
            return True

    def add_participant(self, code: str, participant: Participant) -> bool:
        """
        참가자 추가
        - 채널 없음: False
        - 같은 id 재참가: 변경 없이 True (재시도 안전)
        """
        def _append(channel: Channel) -> bool:
            if channel.has_participant(participant.id):
                logger.debug(f"[add_participant] 이미 참가한 id: {participant.id} ({channel.code})")
                return False
            channel.participants.append(participant)
            return True

        return self._mutate(code, _append)

    def set_topics(self, code: str, topics: List[str]) -> bool:
        """토픽 전체 교체 + 인덱스 리셋 (0, 비어있으면 -1)"""
        def _replace(channel: Channel) -> bool:
            channel.topics = list(topics)
            channel.current_topic_index = 0 if channel.topics else -1
            return True

        return self._mutate(code, _replace)

    def next_topic(self, code: str) -> bool:
        """다음 토픽으로 (마지막 다음은 처음으로 순환)"""
        advanced = False

        def _advance(channel: Channel) -> bool:
            nonlocal advanced
            if not channel.topics:
                return False
            channel.current_topic_index = (channel.current_topic_index + 1) % len(channel.topics)
            advanced = True
            return True

        return self._mutate(code, _advance) and advanced

    def start_channel(self, code: str) -> bool:
        """waiting -> playing (되돌리기 없음, 이미 playing이면 그대로 True)"""
        def _start(channel: Channel) -> bool:
            if channel.status == STATUS_PLAYING:
                return False
            channel.status = STATUS_PLAYING
            return True

        return self._mutate(code, _start)

    def delete_channel(self, code: str) -> bool:
        if not normalize_code(code):
            return False
        with _lock_for(code):
            deleted = self.store.delete_channel(code)
        if deleted:
            logger.info(f"채널 삭제: {normalize_code(code)}")
        return deleted
