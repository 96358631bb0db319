from __future__ import annotations

import pytest

from selfer.models.channel import Participant
from selfer.services.topic_generator import VertexTopicGenerator, parse_topics
from selfer.services.topic_prompts import FALLBACK_TOPICS, build_topic_prompt, describe_participant
from selfer.utils.errors import TopicGenerationError


class _Response:
    def __init__(self, text: str):
        self.text = text


class _FakeModel:
    def __init__(self, text: str = "", exc: Exception | None = None):
        self.text = text
        self.exc = exc
        self.prompts = []
        self.configs = []

    def generate_content(self, prompt, generation_config=None):
        self.prompts.append(prompt)
        self.configs.append(generation_config)
        if self.exc:
            raise self.exc
        return _Response(self.text)


def _generator_with(model: _FakeModel) -> VertexTopicGenerator:
    gen = VertexTopicGenerator(project_id="demo-project", region="us-central1")
    gen._model = model
    return gen


def test_fallback_topics_are_five_korean_prompts() -> None:
    assert len(FALLBACK_TOPICS) == 5
    assert all(t.endswith("?") for t in FALLBACK_TOPICS)


def test_parse_topics_plain_array() -> None:
    assert parse_topics('["하나", "둘"]') == ["하나", "둘"]


def test_parse_topics_strips_markdown_fence_and_prose() -> None:
    text = '여기 질문입니다:\n```json\n["Mina의 최애 영화는?", "  ", "주말 계획은?"]\n```'

    assert parse_topics(text) == ["Mina의 최애 영화는?", "주말 계획은?"]


@pytest.mark.parametrize("text", ["", "질문을 만들 수 없습니다", "[not json]", "[]", '["", "  "]'])
def test_parse_topics_rejects_malformed_output(text: str) -> None:
    with pytest.raises(TopicGenerationError):
        parse_topics(text)


def test_describe_participant_fills_missing_fields() -> None:
    line = describe_participant(Participant(id="u1", name="Mina", interests=["🎬", "☕"]))

    assert "Name: Mina" in line
    assert "Age: N/A" in line
    assert "MBTI: N/A" in line
    assert "Interests: 🎬, ☕" in line


def test_build_topic_prompt_lists_every_participant() -> None:
    prompt = build_topic_prompt(
        [Participant(id="u1", name="Mina", mbti="ENFP"), Participant(id="u2", name="Jun", job="chef")]
    )

    assert "Name: Mina" in prompt and "MBTI: ENFP" in prompt
    assert "Name: Jun" in prompt and "Job: chef" in prompt
    assert "JSON array" in prompt


def test_generate_without_project_raises() -> None:
    gen = VertexTopicGenerator(project_id="", region="us-central1")

    with pytest.raises(TopicGenerationError):
        gen.generate([Participant(id="u1", name="Mina")])


def test_generate_returns_parsed_topics() -> None:
    model = _FakeModel('["Mina와 Jun의 공통 관심사는?", "무인도에 하나만 가져간다면?"]')
    gen = _generator_with(model)

    topics = gen.generate([Participant(id="u1", name="Mina"), Participant(id="u2", name="Jun")])

    assert topics == ["Mina와 Jun의 공통 관심사는?", "무인도에 하나만 가져간다면?"]
    assert "Name: Jun" in model.prompts[0]
    assert model.configs[0]["temperature"] == 0.9


def test_generate_wraps_provider_errors() -> None:
    gen = _generator_with(_FakeModel(exc=RuntimeError("quota exceeded")))

    with pytest.raises(TopicGenerationError):
        gen.generate([Participant(id="u1", name="Mina")])


def test_parse_topics_skips_booleans_and_nulls() -> None:
    assert parse_topics('[true, "a", 3, null, false]') == ["a", "3"]


def test_parse_topics_spans_first_to_last_bracket() -> None:
    # 두 배열이 섞이면 하나의 JSON으로 읽히지 않음
    with pytest.raises(TopicGenerationError):
        parse_topics('["a"] 그리고 ["b"]')
