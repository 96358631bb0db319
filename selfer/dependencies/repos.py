# selfer/dependencies/repos.py
from fastapi import Depends

from selfer.config import settings
from selfer.services.channel_service import ChannelService
from selfer.services.topic_generator import TopicGenerator, get_topic_generator
from selfer.services.topic_service import TopicService


def _backend() -> str:
    # 설정 로드 시점에 1회 결정된 값
    return settings.repo_backend


# -----------------------------
# Factory Dependencies
# -----------------------------
def get_channel_store():
    if _backend() == "postgres":
        from selfer.db.db_session import get_db
        from selfer.repositories.postgres.channel_store import PostgresChannelStore
        db_gen = get_db()
        db = next(db_gen)
        try:
            yield PostgresChannelStore(db)
        finally:
            db_gen.close()
    else:
        from selfer.repositories.memory.channel_store import MemoryChannelStore
        yield MemoryChannelStore()


def get_channel_service(store=Depends(get_channel_store)) -> ChannelService:
    return ChannelService(store)


def get_generator() -> TopicGenerator:
    return get_topic_generator()


def get_topic_service(
    channel_service: ChannelService = Depends(get_channel_service),
    generator: TopicGenerator = Depends(get_generator),
) -> TopicService:
    return TopicService(channel_service, generator, timeout_sec=settings.topic_timeout_sec)
