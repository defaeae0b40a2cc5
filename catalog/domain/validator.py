"""
입력값 검증 모듈
도메인 계층에서 공통으로 쓰는 숫자/필수값 검사
"""

import math
import re
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Union

from catalog.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_number(value: Any) -> bool:
    """유한한 숫자 여부 (bool 제외)"""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    if isinstance(value, Decimal) and not value.is_finite():
        return False
    return True


def require_non_negative_number(value: Any, field: str, message: Optional[str] = None):
    """0 이상의 숫자인지 검사"""
    if not is_number(value) or value < 0:
        raise ValidationError(message or f"Invalid {field} value. Must be a non-negative number.")
    return value


def require_stock(value: Any, message: Optional[str] = None) -> Union[int, float]:
    """재고 수량은 0 이상의 유한한 숫자 (정수는 정수 그대로 유지)"""
    if not is_number(value) or value < 0:
        raise ValidationError(message or "Invalid stock value. Must be a non-negative number.")
    return value if isinstance(value, int) else float(value)


def require_amount(value: Any) -> int:
    """증감 수량은 1 이상의 정수"""
    if value is None:
        raise ValidationError("Amount is required")
    if not is_number(value) or value <= 0 or value != int(value):
        raise ValidationError("Invalid amount value. Must be a positive integer.")
    return int(value)


def parse_threshold(value: Any, default: int) -> int:
    """
    저재고 기준값 해석

    Args:
        value: 요청 값 (None, 숫자 또는 쿼리 문자열)
        default: 값이 없을 때 사용할 기본 기준값

    Returns:
        0 이상의 정수 기준값
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError("Invalid threshold value") from None
    if not is_number(value) or value < 0 or value != int(value):
        raise ValidationError("Invalid threshold value")
    return int(value)


def require_fields(data: Dict[str, Any], fields: Iterable[str], message: str):
    """필수 필드 존재 검사 (빈 문자열도 누락으로 간주)"""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message, details={"field": field})


def validate_email(email: str) -> str:
    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address")
    return email
