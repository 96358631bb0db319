# selfer/routers/topics.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from selfer.dependencies.repos import get_topic_service
from selfer.routers.schemas import TopicsRequest
from selfer.services.topic_service import TopicService
from selfer.utils.error_codes import ErrorCodes
from selfer.utils.errors import SelferError
from selfer.utils.response import error_response, success_response, to_json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/topics", tags=["topics"])


# 토픽 생성 (실패 시 fallback 토픽 + warning)
@router.post("")
async def generate_topics_api(
    payload: Optional[TopicsRequest] = Body(None),
    topic_service: TopicService = Depends(get_topic_service),
):
    code = (payload.code if payload else None) or ""
    if not code.strip():
        return to_json_response(error_response(
            message="Code is required",
            error_code=ErrorCodes.CODE_REQUIRED,
            status_code=400,
        ))

    try:
        result = await topic_service.generate_for_channel(code)
    except SelferError as e:
        return to_json_response(error_response(
            message=e.message,
            error_code=e.error_code,
            status_code=e.status_code,
        ))
    except Exception as e:
        logger.error(f"[generate_topics_api] error: {e}", exc_info=True)
        return to_json_response(error_response(
            message="Internal server error",
            error_code=ErrorCodes.INTERNAL_ERROR,
            status_code=500,
        ))

    data = {"topics": result.topics}
    if result.used_fallback:
        data["warning"] = result.warning
    return to_json_response(success_response(data=data, message=result.warning))
