"""
API 응답 형식
성공: {"status": "success", "data": ...}
실패: {"status": "fail" | "error", "message": ..., "error"?: ...}
"""

from typing import Any, Dict, Optional


def success(data: Any = None, message: Optional[str] = None, **extra) -> Dict[str, Any]:
    """성공 응답 본문"""
    body: Dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return body


def failure(status_code: int, message: str, error: Optional[Any] = None, **extra) -> Dict[str, Any]:
    """오류 응답 본문 (4xx는 fail, 5xx는 error)"""
    body: Dict[str, Any] = {
        "status": "error" if status_code >= 500 else "fail",
        "message": message,
    }
    body.update(extra)
    if error is not None:
        body["error"] = error
    return body
