"""
사용자 데이터 모델
"""

from enum import Enum
from typing import Optional

from .base import CatalogModel


class Role(str, Enum):
    """사용자 역할"""

    ADMIN = "admin"
    USER = "user"


class RegisterRequest(CatalogModel):
    """회원가입 요청 (필수값 검사는 AccountService에서 수행)"""

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(CatalogModel):
    email: Optional[str] = None
    password: Optional[str] = None
