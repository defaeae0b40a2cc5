#!/usr/bin/env python3
"""
카탈로그 관리 시스템 CLI
"""

import asyncio

import click
from loguru import logger

from catalog.config import get_settings
from catalog.domain.accounts import AccountService
from catalog.domain.catalog import CatalogManager
from catalog.exceptions import CatalogError
from catalog.models import CategoryCreate, ProductCreate, RegisterRequest, VariantCreate
from catalog.storage import create_storage

SAMPLE_CATALOG = {
    "Apparel": [
        {
            "product": {"name": "Classic T-Shirt", "price": 25.0, "discount": 10, "inventory": 40},
            "variants": [
                {"variantName": "T-Shirt S Black", "price": 25.0, "inventory": 12,
                 "attributes": {"size": "S", "color": "black", "material": "cotton"}},
                {"variantName": "T-Shirt M White", "price": 27.5, "inventory": 3,
                 "attributes": {"size": "M", "color": "white", "material": "cotton"}},
            ],
        },
        {
            "product": {"name": "Denim Jacket", "price": 89.99, "discount": 15,
                        "discountType": "fixed", "inventory": 4},
            "variants": [
                {"variantName": "Jacket L Blue", "price": 89.99, "inventory": 2,
                 "attributes": {"size": "L", "color": "blue", "material": "denim"}},
            ],
        },
    ],
    "Home": [
        {
            "product": {"name": "Ceramic Mug", "price": 12.0, "inventory": 120},
            "variants": [
                {"variantName": "Mug Red", "price": 12.0, "inventory": 60, "attributes": {"color": "red"}},
            ],
        },
    ],
}


@click.group()
def cli():
    """카탈로그 관리 시스템 CLI"""
    pass


@cli.command()
@click.option("--host", default=None, help="바인딩 주소")
@click.option("--port", default=None, type=int, help="포트")
@click.option("--reload", is_flag=True, help="코드 변경 시 자동 재시작")
def serve(host, port, reload):
    """API 서버 실행"""
    from catalog.api.main import run

    run(host=host, port=port, reload=reload)


@cli.command("create-admin")
@click.option("--username", required=True)
@click.option("--email", required=True)
@click.password_option()
def create_admin(username: str, email: str, password: str):
    """관리자 계정 생성"""
    settings = get_settings()
    if settings.storage_backend == "memory":
        logger.warning("memory 저장소에는 계정이 유지되지 않습니다 (STORAGE_BACKEND=json 권장)")

    accounts = AccountService(create_storage(settings), settings)
    request = RegisterRequest(username=username, email=email, password=password, role="admin")

    try:
        token = asyncio.run(accounts.register(request))
    except CatalogError as e:
        raise click.ClickException(e.message)

    logger.info(f"관리자 생성 완료: {email}")
    click.echo(token)


async def _seed(manager: CatalogManager) -> int:
    created = 0
    for category_name, entries in SAMPLE_CATALOG.items():
        await manager.create_category(CategoryCreate(name=category_name))
        for entry in entries:
            product = await manager.create_product(
                ProductCreate.model_validate({**entry["product"], "category": category_name})
            )
            created += 1
            for variant in entry["variants"]:
                await manager.create_variant(VariantCreate.model_validate({**variant, "product": product["id"]}))
    return created


@cli.command()
def seed():
    """샘플 카테고리/상품/변형 생성"""
    settings = get_settings()
    manager = CatalogManager(create_storage(settings))

    try:
        created = asyncio.run(_seed(manager))
    except CatalogError as e:
        raise click.ClickException(e.message)

    logger.info(f"샘플 상품 {created}개 생성 완료")


if __name__ == "__main__":
    cli()
