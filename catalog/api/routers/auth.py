"""
인증 API 엔드포인트
"""

from fastapi import APIRouter, Depends, status

from catalog.api.dependencies import get_account_service
from catalog.api.responses import success
from catalog.domain.accounts import AccountService
from catalog.models import LoginRequest, RegisterRequest

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, accounts: AccountService = Depends(get_account_service)):
    """회원가입 후 토큰 발급"""
    token = await accounts.register(body)
    return success({"token": token})


@router.post("/login")
async def login(body: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    """로그인 후 토큰 발급"""
    token = await accounts.login(body)
    return success({"token": token})
