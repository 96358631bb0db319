# selfer/routers/channels.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from selfer.dependencies.repos import get_channel_service
from selfer.routers.schemas import CreateChannelRequest, ParticipantRequest
from selfer.services.channel_service import ChannelService
from selfer.utils.error_codes import ErrorCodes
from selfer.utils.response import error_response, success_response, to_json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/channels", tags=["channels"])

ACTION_NEXT = ("next", "advance")
ACTION_START = ("start",)


def _not_found():
    return to_json_response(error_response(
        message="Channel not found",
        error_code=ErrorCodes.CHANNEL_NOT_FOUND,
        status_code=404,
    ))


def _code_required():
    return to_json_response(error_response(
        message="Code is required",
        error_code=ErrorCodes.CODE_REQUIRED,
        status_code=400,
    ))


def _internal_error(where: str, e: Exception):
    logger.error(f"[{where}] error: {e}", exc_info=True)
    return to_json_response(error_response(
        message="Internal server error",
        error_code=ErrorCodes.INTERNAL_ERROR,
        status_code=500,
    ))


# 채널 생성
@router.post("", status_code=201)
def create_channel_api(
    payload: Optional[CreateChannelRequest] = Body(None),
    service: ChannelService = Depends(get_channel_service),
):
    payload = payload or CreateChannelRequest()

    host = None
    if payload.host_info is not None:
        if not payload.host_info.has_name():
            return to_json_response(error_response(
                message="Name is required",
                error_code=ErrorCodes.NAME_REQUIRED,
                status_code=400,
            ))
        host = payload.host_info.to_participant()

    try:
        ch = service.create_channel(payload.target_participants, host)
        return to_json_response(success_response(data=ch.to_dict(), status_code=201))
    except Exception as e:
        return _internal_error("create_channel_api", e)


def _fetch(code: str, service: ChannelService):
    try:
        ch = service.get_channel(code)
        if not ch:
            return _not_found()
        return to_json_response(success_response(data=ch.to_dict()))
    except Exception as e:
        return _internal_error("fetch_channel_api", e)


# 채널 조회 (?code=)
@router.get("")
def fetch_channel_by_query_api(
    code: Optional[str] = Query(None, description="채널 코드"),
    service: ChannelService = Depends(get_channel_service),
):
    if not (code or "").strip():
        return _code_required()
    return _fetch(code, service)


# 채널 조회
@router.get("/{code}")
def fetch_channel_api(
    code: str = Path(..., description="채널 코드"),
    service: ChannelService = Depends(get_channel_service),
):
    return _fetch(code, service)


def _apply_action(code: str, action: Optional[str], service: ChannelService):
    act = (action or "").strip().lower()
    if act not in ACTION_NEXT + ACTION_START:
        return to_json_response(error_response(
            message="Invalid action",
            error_code=ErrorCodes.INVALID_ACTION,
            status_code=400,
        ))

    try:
        # next: 채널 없음 / 토픽 없음 모두 success=false (200)
        if act in ACTION_NEXT:
            ok = service.next_topic(code)
        else:
            ok = service.start_channel(code)
            if not ok:
                return _not_found()

        ch = service.get_channel(code)
        data = {"success": ok, "channel": ch.to_dict() if ch else None}
        return to_json_response(success_response(data=data))
    except Exception as e:
        return _internal_error("channel_action_api", e)


# 토픽 넘기기 / 시작 (?code=&action=)
@router.patch("")
def channel_action_by_query_api(
    code: Optional[str] = Query(None, description="채널 코드"),
    action: Optional[str] = Query(None, description="next | advance | start"),
    service: ChannelService = Depends(get_channel_service),
):
    if not (code or "").strip():
        return _code_required()
    return _apply_action(code, action, service)


# 토픽 넘기기 / 시작
@router.patch("/{code}")
def channel_action_api(
    code: str = Path(..., description="채널 코드"),
    action: Optional[str] = Query(None, description="next | advance | start"),
    service: ChannelService = Depends(get_channel_service),
):
    return _apply_action(code, action, service)


# 채널 참가
@router.post("/{code}/join")
def join_channel_api(
    code: str = Path(..., description="채널 코드"),
    payload: ParticipantRequest = Body(...),
    service: ChannelService = Depends(get_channel_service),
):
    if not payload.has_name():
        return to_json_response(error_response(
            message="Name is required",
            error_code=ErrorCodes.NAME_REQUIRED,
            status_code=400,
        ))

    participant = payload.to_participant()
    try:
        if not service.add_participant(code, participant):
            return _not_found()
        return to_json_response(success_response(
            data={"success": True, "participant": participant.to_dict()},
        ))
    except Exception as e:
        return _internal_error("join_channel_api", e)


# 채널 삭제
@router.delete("/{code}")
def delete_channel_api(
    code: str = Path(..., description="채널 코드"),
    service: ChannelService = Depends(get_channel_service),
):
    try:
        if not service.delete_channel(code):
            return _not_found()
        return to_json_response(success_response(data=None, message="Channel deleted"))
    except Exception as e:
        return _internal_error("delete_channel_api", e)
