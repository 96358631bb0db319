# selfer/services/topic_generator.py
import json
import logging
import os
import re
from typing import List, Optional, Protocol, Sequence

from selfer.models.channel import Participant
from selfer.services.topic_prompts import SYSTEM_PROMPT, TOPIC_COUNT, build_topic_prompt
from selfer.utils.errors import TopicGenerationError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json|```", re.IGNORECASE)
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class TopicGenerator(Protocol):
    """참가자 목록 -> 토픽 목록. 실패 시 TopicGenerationError"""

    def generate(self, participants: Sequence[Participant]) -> List[str]: ...


def parse_topics(text: str) -> List[str]:
    """
    모델 응답에서 토픽 JSON 배열 추출
    - ```json 펜스 제거
    - 첫 "[" 부터 마지막 "]" 까지를 하나의 배열로 파싱
    - 빈 문자열 제거
    """
    if not text:
        raise TopicGenerationError("모델이 텍스트를 반환하지 않았습니다")

    cleaned = _FENCE_RE.sub("", text).strip()
    match = _ARRAY_RE.search(cleaned)
    if not match:
        raise TopicGenerationError("응답에서 JSON 배열을 찾을 수 없습니다")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise TopicGenerationError(f"JSON 파싱 실패: {e}") from e

    if not isinstance(data, list):
        raise TopicGenerationError("응답이 배열 형식이 아닙니다")

    topics = [
        str(t).strip()
        for t in data
        if isinstance(t, (str, int, float)) and not isinstance(t, bool) and str(t).strip()
    ]
    if not topics:
        raise TopicGenerationError("생성된 토픽이 없습니다")
    return topics


class VertexTopicGenerator:
    """Vertex AI Gemini로 아이스브레이킹 토픽 생성"""

    def __init__(
        self,
        project_id: str,
        region: str,
        sa_file: str = "",
        model_name: str = "gemini-2.0-flash",
        topic_count: int = TOPIC_COUNT,
    ):
        self.project_id = project_id
        self.region = region
        self.sa_file = sa_file
        self.model_name = model_name
        self.topic_count = topic_count
        self._model = None

    def _load_credentials(self):
        """서비스 계정 인증 정보 로드 (없으면 ADC 사용)"""
        if not self.sa_file:
            return None
        if not os.path.exists(self.sa_file):
            logger.warning(f"서비스 계정 파일을 찾을 수 없습니다: {self.sa_file}")
            return None
        from google.oauth2 import service_account
        try:
            return service_account.Credentials.from_service_account_file(self.sa_file)
        except Exception as e:
            raise TopicGenerationError(f"서비스 계정 파일 로드 오류: {e}") from e

    def _get_model(self):
        if self._model is not None:
            return self._model

        if not self.project_id:
            raise TopicGenerationError("VERTEX_AI_PROJECT_ID missing")

        try:
            import vertexai
            from vertexai.generative_models import GenerativeModel

            vertexai.init(
                project=self.project_id,
                location=self.region,
                credentials=self._load_credentials(),
            )
            self._model = GenerativeModel(self.model_name, system_instruction=SYSTEM_PROMPT)
        except TopicGenerationError:
            raise
        except Exception as e:
            raise TopicGenerationError(f"Vertex AI 초기화 실패: {e}") from e

        logger.info(f"Vertex AI 초기화 완료: {self.project_id} / {self.region} ({self.model_name})")
        return self._model

    def generate(self, participants: Sequence[Participant]) -> List[str]:
        model = self._get_model()
        prompt = build_topic_prompt(participants, self.topic_count)

        config = {
            "temperature": 0.9,
            "top_p": 0.95,
            "max_output_tokens": 1024,
        }

        try:
            logger.info(f"토픽 생성 요청 중... (참가자 {len(participants)}명)")
            response = model.generate_content(prompt, generation_config=config)
            text = getattr(response, "text", "")
        except Exception as e:
            raise TopicGenerationError(f"토픽 생성 요청 실패: {e}") from e

        topics = parse_topics(text)
        logger.info(f"토픽 생성 완료 ({len(topics)}개)")
        return topics


_default_generator: Optional[VertexTopicGenerator] = None


def get_topic_generator() -> TopicGenerator:
    """설정 기반 기본 생성기 (프로세스당 1개)"""
    global _default_generator
    if _default_generator is None:
        from selfer.config import settings
        _default_generator = VertexTopicGenerator(
            project_id=settings.vertex_project_id,
            region=settings.vertex_region,
            sa_file=settings.vertex_sa_file,
            model_name=settings.vertex_model_text,
        )
    return _default_generator
