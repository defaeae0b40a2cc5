"""
API 의존성 주입
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.config import Settings
from catalog.domain.accounts import AccountService, decode_access_token
from catalog.domain.catalog import CatalogManager
from catalog.domain.inventory import InventoryAdjuster
from catalog.domain.policy import Permission, Principal, check
from catalog.domain.pricing import PricingEngine
from catalog.domain.query import CatalogQuery
from catalog.exceptions import AuthenticationError
from catalog.storage.base import BaseStorage

# Bearer 토큰 스키마 (누락 시 직접 AuthenticationError 처리)
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """애플리케이션 설정 반환"""
    return request.app.state.settings


def get_storage(request: Request) -> BaseStorage:
    """스토리지 인스턴스 반환"""
    return request.app.state.storage


def get_query(
    storage: BaseStorage = Depends(get_storage), settings: Settings = Depends(get_app_settings)
) -> CatalogQuery:
    return CatalogQuery(storage, low_stock_threshold=settings.low_stock_threshold)


def get_catalog_manager(storage: BaseStorage = Depends(get_storage)) -> CatalogManager:
    return CatalogManager(storage)


def get_adjuster(
    storage: BaseStorage = Depends(get_storage), settings: Settings = Depends(get_app_settings)
) -> InventoryAdjuster:
    return InventoryAdjuster(storage, max_retries=settings.inventory_max_retries)


def get_pricing_engine(storage: BaseStorage = Depends(get_storage)) -> PricingEngine:
    return PricingEngine(storage)


def get_account_service(
    request: Request,
    storage: BaseStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(storage, settings, hasher=request.app.state.password_hasher)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    """Authorization 헤더의 토큰에서 호출자 정보 추출"""
    if credentials is None:
        raise AuthenticationError("Authentication required")
    return decode_access_token(credentials.credentials, settings)


def require_permission(action: Permission):
    """지정 권한을 요구하는 의존성 생성"""

    async def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        check(principal, action)
        return principal

    return dependency
