"""
접근 정책 모듈
인증된 주체의 역할을 권한(capability)으로 변환해 허용 여부를 판단한다.
프레임워크와 무관한 순수 함수로 구성된다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from catalog.exceptions import AuthorizationError
from catalog.models.user import Role


class Permission(str, Enum):
    """권한 목록"""

    CATALOG_READ = "catalog:read"
    CATALOG_WRITE = "catalog:write"
    INVENTORY_READ = "inventory:read"
    INVENTORY_WRITE = "inventory:write"
    PRICING_WRITE = "pricing:write"


ROLE_PERMISSIONS: Dict[Role, FrozenSet[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.USER: frozenset({Permission.CATALOG_READ}),
}

# 인증 없이 허용되는 권한
ANONYMOUS_PERMISSIONS: FrozenSet[Permission] = frozenset({Permission.CATALOG_READ})


@dataclass(frozen=True)
class Principal:
    """인증된 호출자"""

    user_id: str
    role: str

    @property
    def permissions(self) -> FrozenSet[Permission]:
        try:
            return ROLE_PERMISSIONS[Role(self.role)]
        except ValueError:
            # 알 수 없는 역할은 익명과 동일하게 취급
            return ANONYMOUS_PERMISSIONS


def authorize(principal: Optional[Principal], action: Permission, resource: Any = None) -> bool:
    """
    권한 판단

    Args:
        principal: 호출자 (None이면 익명)
        action: 요청 권한
        resource: 대상 리소스 (현재 정책은 리소스와 무관)

    Returns:
        허용 여부
    """
    granted = principal.permissions if principal else ANONYMOUS_PERMISSIONS
    return Permission(action) in granted


def check(principal: Optional[Principal], action: Permission, resource: Any = None) -> None:
    """권한이 없으면 AuthorizationError"""
    if not authorize(principal, action, resource):
        raise AuthorizationError(
            "Access denied",
            details={"action": Permission(action).value, "role": principal.role if principal else None},
        )
