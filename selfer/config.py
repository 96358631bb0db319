"""
환경별 설정 관리
- 환경변수 로딩 (.env.{environment} / .env)
- 필수 변수 검증
- 타입 변환 및 기본값 설정
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

REPO_BACKENDS = ("memory", "postgres")


class Settings:
    """
    애플리케이션 설정 클래스

    환경 감지 우선순위:
      1. ENVIRONMENT 환경변수
      2. APP_ENV 환경변수
      3. 기본값: development
    """

    def __init__(self):
        # 환경 감지
        self.environment = self._get_environment()

        # 환경별 .env 파일 로드 (이미 설정된 환경변수는 유지)
        self._load_env_file()

        # 서버 설정
        self.port = int(os.getenv("PORT", "4001"))

        # 로깅 설정
        self.log_level = os.getenv("LOG_LEVEL", self._get_default_log_level())

        # CORS 설정
        self.cors_origins = os.getenv("CORS_ORIGINS", "")

        # 채널 저장소 선택 (프로세스당 1회 결정)
        self.repo_backend = os.getenv("REPO_BACKEND", "memory").lower().strip()  # memory | postgres
        if self.repo_backend not in REPO_BACKENDS:
            raise ValueError(
                f"지원하지 않는 REPO_BACKEND: {self.repo_backend} "
                f"(허용: {', '.join(REPO_BACKENDS)})"
            )

        # DB 설정 (postgres 모드면 필수)
        self.database_url = os.getenv("DATABASE_URL", "")
        if self.repo_backend == "postgres":
            self.database_url = self._get_required("DATABASE_URL")

        # Vertex AI (토픽 생성). 없으면 생성 시점에 fallback 토픽 사용
        self.vertex_project_id = os.getenv("VERTEX_AI_PROJECT_ID", "")
        self.vertex_region = os.getenv("VERTEX_AI_REGION", "us-central1")
        self.vertex_sa_file = os.getenv("VERTEX_AI_SERVICE_ACCOUNT_FILE", "")
        self.vertex_model_text = os.getenv("VERTEX_AI_MODEL_TEXT", "gemini-2.0-flash")
        self.topic_timeout_sec = float(os.getenv("TOPIC_GENERATION_TIMEOUT_SEC", "20"))

        # 설정 로드 완료 로그
        logger.info(f"환경 설정 로드 완료: {self.environment}")
        logger.info(f"   - 포트: {self.port}")
        logger.info(f"   - 로그 레벨: {self.log_level}")
        logger.info(f"   - REPO_BACKEND: {self.repo_backend}")

    def _get_environment(self) -> str:
        """
        현재 실행 환경을 판별

        Returns:
            development | staging | production
        """
        env = (
            os.getenv("ENVIRONMENT")
            or os.getenv("APP_ENV")
            or "development"
        ).lower()

        # 별칭 정규화
        alias = {
            "dev": "development",
            "local": "development",
            "prod": "production",
            "stage": "staging",
        }
        return alias.get(env, env)

    def _load_env_file(self) -> None:
        """
        환경별 .env 파일 로드

        우선순위:
          1. .env.{environment} (예: .env.production)
          2. .env (공통)
        """
        base_dir = Path(__file__).resolve().parent.parent
        env_file = base_dir / f".env.{self.environment}"

        if env_file.exists():
            logger.info(f"환경 파일 로드: {env_file}")
            load_dotenv(env_file, override=False)
        else:
            default_env = base_dir / ".env"
            if default_env.exists():
                logger.info(f"기본 환경 파일 로드: {default_env}")
                load_dotenv(default_env, override=False)

    def _get_required(self, key: str) -> str:
        """
        필수 환경변수 가져오기

        Raises:
            ValueError: 환경변수가 없을 때
        """
        value = os.getenv(key)
        if not value:
            raise ValueError(
                f"필수 환경변수 누락: {key}\n"
                f"   .env.{self.environment} 파일을 확인하세요."
            )
        return value

    def _get_default_log_level(self) -> str:
        """환경별 기본 로그 레벨 (DEBUG | INFO | WARNING)"""
        defaults = {
            "development": "DEBUG",
            "staging": "INFO",
            "production": "WARNING"
        }
        return defaults.get(self.environment, "INFO")

    def __repr__(self) -> str:
        """설정 정보 출력 (민감 정보 제외)"""
        return (
            f"Settings(\n"
            f"  environment={self.environment}\n"
            f"  port={self.port}\n"
            f"  log_level={self.log_level}\n"
            f"  repo_backend={self.repo_backend}\n"
            f"  vertex_region={self.vertex_region}\n"
            f"  vertex_model_text={self.vertex_model_text}\n"
            f"  cors_origins={self.cors_origins or '(not set)'}\n"
            f")"
        )


# 전역 설정 인스턴스
settings = Settings()
