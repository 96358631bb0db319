# selfer/services/topic_service.py
import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import List, Optional

from selfer.services.channel_service import ChannelService
from selfer.services.topic_generator import TopicGenerator
from selfer.services.topic_prompts import FALLBACK_TOPICS
from selfer.utils.errors import ChannelNotFoundError, NotEnoughParticipantsError

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Using fallback topics due to AI error/missing key"


@dataclass
class TopicResult:
    topics: List[str]
    used_fallback: bool = False
    warning: Optional[str] = None


class TopicService:
    """
    채널 참가자 기반 토픽 생성
    - 생성기 실패/타임아웃은 에러로 올리지 않고 fallback 토픽으로 대체
    - 어느 경로든 결과는 set_topics로 저장
    """

    def __init__(self, channel_service: ChannelService, generator: TopicGenerator, timeout_sec: float = 20.0):
        self.channel_service = channel_service
        self.generator = generator
        self.timeout_sec = timeout_sec

    async def generate_for_channel(self, code: str) -> TopicResult:
        # 저장소 I/O와 채널 lock 대기는 이벤트 루프 밖에서
        loop = asyncio.get_running_loop()
        channel = await loop.run_in_executor(None, self.channel_service.get_channel, code)
        if not channel:
            raise ChannelNotFoundError()

        if len(channel.participants) < 1:
            raise NotEnoughParticipantsError()

        # executor future는 타임아웃 시 바로 취소됨 (스레드 작업은 백그라운드에서 종료)
        call = functools.partial(self.generator.generate, channel.participants)
        try:
            topics = await asyncio.wait_for(
                loop.run_in_executor(None, call),
                timeout=self.timeout_sec,
            )
            result = TopicResult(topics=list(topics))
        except asyncio.TimeoutError:
            logger.error(f"토픽 생성 타임아웃 ({self.timeout_sec}s, code={channel.code})")
            result = self._fallback()
        except Exception as e:
            logger.error(f"토픽 생성 오류 (code={channel.code}): {e}", exc_info=True)
            result = self._fallback()

        saved = await loop.run_in_executor(
            None, self.channel_service.set_topics, channel.code, result.topics
        )
        if not saved:
            # 생성 중에 채널이 삭제됨
            logger.warning(f"토픽 저장 실패: 채널 없음 (code={channel.code})")
            raise ChannelNotFoundError()
        return result

    @staticmethod
    def _fallback() -> TopicResult:
        return TopicResult(
            topics=list(FALLBACK_TOPICS),
            used_fallback=True,
            warning=FALLBACK_WARNING,
        )
