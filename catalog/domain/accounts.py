"""
계정 모듈
회원가입, 로그인, 액세스 토큰 발급/검증
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from catalog.config import Settings
from catalog.domain.policy import Principal
from catalog.domain.validator import require_fields, validate_email
from catalog.exceptions import AuthenticationError, DuplicateKeyError, ValidationError
from catalog.models.user import LoginRequest, RegisterRequest, Role
from catalog.monitoring import get_logger
from catalog.storage.base import BaseStorage

logger = get_logger(__name__)


def create_access_token(
    user_id: str, role: str, settings: Settings, expires_delta: Optional[timedelta] = None
) -> str:
    """액세스 토큰 생성"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.token_expire_hours))

    payload = {"user_id": user_id, "role": role, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Principal:
    """
    토큰 검증 후 호출자 정보 반환

    Raises:
        AuthenticationError: 만료되었거나 유효하지 않은 토큰
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token") from None

    user_id = payload.get("user_id")
    role = payload.get("role")
    if not user_id or not role:
        raise AuthenticationError("Invalid token")

    return Principal(user_id=user_id, role=role)


class AccountService:
    """사용자 계정 서비스"""

    def __init__(self, storage: BaseStorage, settings: Settings, hasher: Optional[PasswordHasher] = None):
        self.storage = storage
        self.settings = settings
        self.hasher = hasher or PasswordHasher()

    async def _hash_password(self, password: str) -> str:
        # argon2 해시는 CPU를 오래 쓰므로 스레드 풀에서 실행
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.hasher.hash, password)

    async def _verify_password(self, password_hash: str, password: str) -> bool:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.hasher.verify, password_hash, password)

    async def register(self, data: RegisterRequest) -> str:
        """
        회원가입

        Returns:
            발급된 액세스 토큰

        Raises:
            ValidationError: 필수값 누락, 잘못된 역할, 이메일 중복
        """
        fields: Dict[str, Any] = data.model_dump()
        require_fields(fields, ("username", "email", "password", "role"), "All fields are required")

        try:
            role = Role(data.role)
        except ValueError:
            raise ValidationError("Invalid role") from None

        email = validate_email(data.email)
        if await self.storage.find_one("users", {"email": email}):
            raise ValidationError("Email already registered")

        try:
            user = await self.storage.create(
                "users",
                {
                    "username": data.username,
                    "email": email,
                    "password": await self._hash_password(data.password),
                    "role": role.value,
                },
            )
        except DuplicateKeyError:
            raise ValidationError("Email already registered") from None

        logger.info(f"사용자 등록됨: {user['id']} ({role.value})")
        return create_access_token(user["id"], user["role"], self.settings)

    async def login(self, data: LoginRequest) -> str:
        """
        로그인

        Raises:
            ValidationError: 이메일 또는 비밀번호 불일치
        """
        if not data.email or not data.password:
            raise ValidationError("Invalid credentials")

        user = await self.storage.find_one("users", {"email": data.email.strip().lower()})
        if not user:
            raise ValidationError("Invalid credentials")

        try:
            await self._verify_password(user["password"], data.password)
        except (VerificationError, InvalidHashError):
            logger.warning(f"로그인 실패: {user['id']}")
            raise ValidationError("Invalid credentials") from None

        return create_access_token(user["id"], user["role"], self.settings)
