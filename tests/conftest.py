from __future__ import annotations

import os
from typing import List, Sequence

# 설정 모듈 import 전에 고정 (로컬 .env 값보다 우선)
os.environ["ENVIRONMENT"] = "development"
os.environ["REPO_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["VERTEX_AI_PROJECT_ID"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from selfer.models.channel import Participant
from selfer.repositories.memory import state as memory_state
from selfer.repositories.memory.channel_store import MemoryChannelStore
from selfer.repositories.postgres.channel_store import PostgresChannelStore, create_table
from selfer.services.channel_service import ChannelService
from selfer.utils.errors import TopicGenerationError


class FakeGenerator:
    def __init__(self, topics: List[str] | None = None):
        self.topics = topics or ["Mina의 요즘 최애 취미는?", "주말에 뭐 하세요?"]
        self.calls: List[Sequence[Participant]] = []

    def generate(self, participants: Sequence[Participant]) -> List[str]:
        self.calls.append(list(participants))
        return list(self.topics)


class FailingGenerator:
    def __init__(self, exc: Exception | None = None):
        self.exc = exc or TopicGenerationError("GEMINI key missing")
        self.calls = 0

    def generate(self, participants: Sequence[Participant]) -> List[str]:
        self.calls += 1
        raise self.exc


@pytest.fixture(autouse=True)
def _clear_memory_store():
    memory_state.clear()
    yield
    memory_state.clear()


@pytest.fixture
def memory_store() -> MemoryChannelStore:
    return MemoryChannelStore()


@pytest.fixture
def sql_store():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    with Session(engine) as db:
        create_table(db)
        yield PostgresChannelStore(db)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def service(store) -> ChannelService:
    return ChannelService(store)


@pytest.fixture
def mina() -> Participant:
    return Participant(id="u1", name="Mina", age=27, mbti="ENFP", interests=["🎬", "☕"])


@pytest.fixture
def app():
    from selfer.main import app as fastapi_app
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c
