"""
카테고리 데이터 모델
"""

from typing import Optional

from pydantic import Field

from .base import CatalogModel


class CategoryCreate(CatalogModel):
    name: str = Field(..., min_length=1, description="카테고리명 (유니크)")


class CategoryUpdate(CatalogModel):
    name: Optional[str] = Field(None, min_length=1)
