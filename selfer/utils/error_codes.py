# selfer/utils/error_codes.py

from enum import Enum

# 에러 코드 상수 정의

class ErrorCodes(str, Enum):
    """
    표준화된 에러 코드 상수 정의 (공통)
    Enum 상속 시 str을 함께 사용하면 문자열처럼 직접 사용 가능
    """
    CHANNEL_NOT_FOUND = "CHANNEL_NOT_FOUND"                 # 채널 없음 (404)
    CODE_REQUIRED = "CODE_REQUIRED"                         # 채널 코드 누락 (400)
    NAME_REQUIRED = "NAME_REQUIRED"                         # 참가자 이름 누락 (400)
    NOT_ENOUGH_PARTICIPANTS = "NOT_ENOUGH_PARTICIPANTS"     # 참가자 0명 (400)
    INVALID_ACTION = "INVALID_ACTION"                       # 지원하지 않는 action (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"                   # 요청 형식 오류 (422)
    INTERNAL_ERROR = "INTERNAL_ERROR"                       # 서버 내부 오류 (500)
