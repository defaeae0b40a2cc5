"""
공통 모델 설정
API와 저장소 모두 camelCase 키를 사용한다
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DiscountType(str, Enum):
    """할인 방식"""

    PERCENTAGE = "percentage"  # 비율 할인
    FIXED = "fixed"  # 정액 할인


class CatalogModel(BaseModel):
    """카탈로그 모델 기본 클래스"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        extra="ignore",
        validate_default=True,
        allow_inf_nan=False,
    )

    def to_document(self, exclude_unset: bool = False) -> dict:
        """저장소 문서(dict)로 변환"""
        return self.model_dump(by_alias=True, exclude_unset=exclude_unset)
