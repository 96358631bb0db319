# 응답 유틸리티 함수
# selfer/utils/response.py

from typing import Any, Optional, Dict, Tuple

from fastapi.responses import JSONResponse


# 성공 응답 유틸리티 함수

def success_response(
    data: Any,
    message: Optional[str] = None,
    status_code: int = 200
) -> Tuple[Dict[str, Any], int]:
    """
    모든 API에서 일관된 성공 응답 형식을 생성하는 래퍼 함수

    반환 형식:
    {
        "success": True,
        "data": { ... },
        "message": "optional message"
    }
    """
    response_body = {
        "success": True,
        "data": data,
        "message": message
    }

    return response_body, status_code


# 에러 응답 유틸리티 함수

def error_response(
    message: str,
    error_code: str,
    status_code: int = 400
) -> Tuple[Dict[str, Any], int]:
    """
    모든 API에서 일관된 에러 응답 형식을 생성하는 래퍼 함수

    반환 형식:
    {
        "success": False,
        "data": None,
        "message": "에러 메시지",
        "error_code": "ERROR_CODE"
    }
    """
    response_body = {
        "success": False,
        "data": None,             # 에러 응답 시 data는 항상 null(None)
        "message": message,
        "error_code": str(getattr(error_code, "value", error_code))
    }

    return response_body, status_code


def to_json_response(result: Tuple[Dict[str, Any], int]) -> JSONResponse:
    """(body, status_code) 튜플 -> JSONResponse"""
    body, status_code = result
    return JSONResponse(content=body, status_code=status_code)
