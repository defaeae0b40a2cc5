"""
카탈로그 서비스 예외 정의
각 예외는 HTTP 상태 코드를 함께 가지며 API 계층에서 응답으로 변환된다
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """카탈로그 서비스 기본 예외"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """잘못되었거나 누락된 입력값"""

    status_code = 400


class InsufficientStockError(ValidationError):
    """차감하려는 수량이 현재 재고보다 많음"""

    def __init__(self, requested: int, available: int):
        super().__init__(
            "Not enough inventory available",
            details={"requested": requested, "available": available},
        )
        self.requested = requested
        self.available = available


class NotFoundError(CatalogError):
    """엔티티 또는 참조 대상이 존재하지 않음"""

    status_code = 404


class AuthenticationError(CatalogError):
    """인증 정보 누락 또는 검증 실패"""

    status_code = 401


class AuthorizationError(CatalogError):
    """권한 부족"""

    status_code = 403


class StoreError(CatalogError):
    """저장소 오류"""

    status_code = 500


class DuplicateKeyError(StoreError):
    """유니크 키 중복"""

    status_code = 400

    def __init__(self, table: str, fields: tuple, values: tuple):
        super().__init__(
            f"Duplicate value for {', '.join(fields)} in {table}",
            details={"table": table, "fields": list(fields), "values": list(values)},
        )
        self.table = table
        self.fields = fields


class VersionConflictError(StoreError):
    """낙관적 잠금 버전 불일치"""

    status_code = 409

    def __init__(self, table: str, record_id: str, expected: int, actual: int):
        super().__init__(
            f"Version conflict on {table}/{record_id}",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual
