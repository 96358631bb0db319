# selfer/services/topic_prompts.py
import logging
from typing import Iterable, List

from selfer.models.channel import Participant

logger = logging.getLogger(__name__)

TOPIC_COUNT = 5

# AI 생성 실패 시 사용하는 고정 토픽
FALLBACK_TOPICS: List[str] = [
    "최근에 가장 재미있게 본 영화나 드라마가 있나요?",
    "나만 아는 맛집이나 장소가 있을까요?",
    "다음에 기회가 된다면 꼭 가보고 싶은 여행지는 어디인가요?",
    "본인의 MBTI와 실제 성격이 얼마나 닮았다고 생각하시나요?",
    "인생의 터닝포인트가 되었던 사소한 경험이 있을까요?",
]

SYSTEM_PROMPT = "당신은 세계 최고의 아이스브레이킹 및 심리 전문가입니다."

USER_PROMPT_TEMPLATE = """아래 참가자들의 상세 프로필(이름, 나이, 직업, MBTI, 성격, 관심사)을 분석하여, 이들이 서로의 '새로운 면모'를 발견하고 깊이 있게 연결될 수 있는 질문 {topic_count}개를 생성하세요.

[참가자 데이터]
{participant_info}

[알고리즘 가이드라인]
1. **다양성 (Diversity)**: 다음 5가지 카테고리에서 하나씩 질문을 뽑으세요.
   - (1) 공통점 기반: 참가자들의 공통된 관심사나 성향에서 출발하는 질문
   - (2) 의외성 발견: 겉보기와는 다른 반전 매력을 끌어낼 수 있는 질문
   - (3) 가치관 탐색: 인생에서 중요하게 생각하는 가치나 철학에 대한 질문
   - (4) 가벼운 취향: 최근의 사소하지만 즐거운 일상에 대한 질문
   - (5) IF/상상력: 특정 상황을 가정하고 서로의 반응을 예측해보는 재미있는 질문
2. **개인화 (Personalization)**: 질문 안에 최소 1명 이상의 이름이나 관심사 키워드를 직접 언급하여 '우리만을 위한 질문'이라는 느낌을 주세요.
3. **톤앤매너**: 따뜻하고, 호기심 넘치며, 세련되게 질문하세요. "어떤 것을 좋아하세요?" 같은 뻔한 질문은 배제합니다.
4. **언어**: 반드시 한국어로 답변하세요.

Return ONLY the topics as a JSON array of strings. Do not include markdown formatting or 'json' tags.
Example format: ["질문1", "질문2", "질문3", "질문4", "질문5"]"""


def _fmt(value) -> str:
    if value is None or value == "" or value == []:
        return "N/A"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def describe_participant(p: Participant) -> str:
    """참가자 한 줄 요약 (프롬프트용)"""
    return (
        f"- Name: {p.name}, Age: {_fmt(p.age)}, Job: {_fmt(p.job)}, "
        f"MBTI: {_fmt(p.mbti)}, Personality: {_fmt(p.personality)}, "
        f"Interests: {_fmt(p.interests)}"
    )


def build_topic_prompt(participants: Iterable[Participant], topic_count: int = TOPIC_COUNT) -> str:
    participant_info = "\n".join(describe_participant(p) for p in participants)
    return USER_PROMPT_TEMPLATE.format(
        topic_count=topic_count,
        participant_info=participant_info,
    )
