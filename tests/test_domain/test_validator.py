"""
입력값 검증 함수 테스트
"""

import math
from decimal import Decimal

import pytest

from catalog.domain.validator import (
    is_number,
    parse_threshold,
    require_amount,
    require_fields,
    require_stock,
    validate_email,
)
from catalog.exceptions import ValidationError


class TestNumbers:
    """숫자 검사 테스트"""

    @pytest.mark.parametrize("value", [0, 1, 2.5, Decimal("3.10")])
    def test_is_number(self, value):
        assert is_number(value) is True

    @pytest.mark.parametrize("value", [None, "5", True, math.nan, math.inf, Decimal("NaN")])
    def test_is_not_number(self, value):
        assert is_number(value) is False

    def test_require_stock(self):
        assert require_stock(0) == 0
        assert require_stock(7.0) == 7
        assert require_stock(2.5) == 2.5
        assert isinstance(require_stock(3), int)

        for bad in (-1, -0.5, float("inf"), True, "3", None):
            with pytest.raises(ValidationError, match="Invalid stock value"):
                require_stock(bad)

    def test_require_amount(self):
        assert require_amount(3) == 3

        with pytest.raises(ValidationError, match="Amount is required"):
            require_amount(None)
        for bad in (0, -2, 1.5, "1"):
            with pytest.raises(ValidationError, match="Invalid amount value"):
                require_amount(bad)


class TestThreshold:
    """저재고 기준값 해석 테스트"""

    def test_default_when_missing(self):
        assert parse_threshold(None, 5) == 5
        assert parse_threshold("", 5) == 5
        assert parse_threshold("  ", 7) == 7

    def test_explicit_values(self):
        assert parse_threshold("0", 5) == 0
        assert parse_threshold("12", 5) == 12
        assert parse_threshold(3, 5) == 3

    @pytest.mark.parametrize("value", ["-1", -1, "abc", "2.5", 1.5])
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match="Invalid threshold value"):
            parse_threshold(value, 5)


class TestFields:
    def test_require_fields(self):
        require_fields({"a": 1, "b": "x"}, ("a", "b"), "All fields are required")

        with pytest.raises(ValidationError) as exc_info:
            require_fields({"a": 1, "b": "  "}, ("a", "b"), "All fields are required")
        assert exc_info.value.details == {"field": "b"}

    def test_validate_email(self):
        assert validate_email("  Admin@Example.COM ") == "admin@example.com"

        with pytest.raises(ValidationError):
            validate_email("not-an-email")
