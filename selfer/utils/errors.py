# selfer/utils/errors.py

from selfer.utils.error_codes import ErrorCodes


class SelferError(Exception):
    """도메인 예외 공통 베이스 (라우터에서 에러 응답으로 변환)"""
    error_code = ErrorCodes.INTERNAL_ERROR
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ChannelNotFoundError(SelferError):
    error_code = ErrorCodes.CHANNEL_NOT_FOUND
    status_code = 404
    message = "Channel not found"


class NotEnoughParticipantsError(SelferError):
    error_code = ErrorCodes.NOT_ENOUGH_PARTICIPANTS
    status_code = 400
    message = "At least one participant is required"


class TopicGenerationError(SelferError):
    """토픽 생성 실패 (키 누락, 응답 파싱 실패, provider 오류). 항상 fallback으로 흡수"""
    error_code = ErrorCodes.INTERNAL_ERROR
    status_code = 500
    message = "Topic generation failed"
