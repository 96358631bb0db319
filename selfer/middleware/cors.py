"""
환경별 접근 제어를 위한 CORS 미들웨어 설정

  - development: 모든 origin 허용 (*)
  - staging/production: CORS_ORIGINS에 지정된 origin만 허용

허용 메서드: GET, POST, PATCH, DELETE, OPTIONS
허용 헤더: Content-Type
"""

import logging
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from selfer.config import settings

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type"]


def _parse_origins(raw: Optional[str]) -> List[str]:
    """
    콤마(,)로 구분된 origin 문자열을 리스트로 변환

    Example:
        >>> _parse_origins("https://a.com, https://b.com")
        ['https://a.com', 'https://b.com']
    """
    if not raw:
        return []
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def resolve_origins(env: str, raw_origins: Optional[str]) -> List[str]:
    if env == "development":
        return ["*"]
    if env in ("staging", "production"):
        origins = _parse_origins(raw_origins)
        if not origins:
            logger.warning(f"CORS_ORIGINS가 비어있습니다 (env={env}). 모든 cross-origin 요청이 차단됩니다")
        return origins
    logger.warning(f"알 수 없는 환경: {env}, CORS 모든 요청 차단")
    return []


def setup_cors(app: FastAPI) -> None:
    """FastAPI 앱에 환경별 CORS 설정을 적용"""
    allow_origins = resolve_origins(settings.environment, settings.cors_origins)
    logger.info(f"CORS 설정 완료 → env={settings.environment}, allow_origins={allow_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        max_age=600,
    )
