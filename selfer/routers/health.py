# selfer/routers/health.py
"""
공통 API 엔드포인트
- 헬스체크
"""

from fastapi import APIRouter

from selfer import __version__
from selfer.utils.response import success_response, to_json_response

router = APIRouter(tags=["common_health_check"])


@router.get("/v1/health")
def health_check():
    data = {
        "status": "healthy",
        "version": __version__,
        "service": "selfer-icebreaker",
    }
    return to_json_response(success_response(data, status_code=200))
