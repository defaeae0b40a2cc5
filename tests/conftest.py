"""
pytest 공통 fixtures 및 설정
"""

import os
import sys
from pathlib import Path

# 설정 모듈 import 전에 테스트 환경 변수 지정
os.environ["ENV"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["JWT_SECRET"] = "test-secret-key"

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from catalog.api.main import create_app
from catalog.config import Settings
from catalog.monitoring import global_metrics
from catalog.storage.memory_storage import MemoryStorage


@pytest.fixture
def test_settings():
    """테스트용 설정"""
    return Settings(
        env="test",
        log_level="DEBUG",
        storage_backend="memory",
        jwt_secret="test-secret-key",
        expose_error_details=False,
    )


@pytest.fixture
def storage():
    """빈 메모리 저장소"""
    return MemoryStorage()


@pytest.fixture
def fast_hasher():
    """테스트 속도를 위한 저비용 해시 설정"""
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def app(test_settings, storage, fast_hasher):
    """저장소가 주입된 테스트 앱"""
    application = create_app(settings=test_settings, storage=storage)
    application.state.password_hasher = fast_hasher
    return application


@pytest.fixture
def client(app):
    """API 테스트 클라이언트"""
    global_metrics.reset()
    return TestClient(app)


def _register(client: TestClient, role: str) -> str:
    response = client.post(
        "/api/auth/register",
        json={
            "username": f"{role}-user",
            "email": f"{role}@example.com",
            "password": "s3cret-pass",
            "role": role,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["token"]


@pytest.fixture
def admin_headers(client):
    """관리자 Authorization 헤더"""
    return {"Authorization": f"Bearer {_register(client, 'admin')}"}


@pytest.fixture
def user_headers(client):
    """일반 사용자 Authorization 헤더"""
    return {"Authorization": f"Bearer {_register(client, 'user')}"}


@pytest.fixture
def seeded(client, admin_headers):
    """
    API로 기본 카탈로그 생성

    Apparel: T-Shirt(25.0, 10%) / Jacket(80.0, fixed 15)
    Home: Mug(12.0)
    """
    for name in ("Apparel", "Home"):
        response = client.post("/api/categories", json={"name": name}, headers=admin_headers)
        assert response.status_code == 201, response.text

    def create_product(payload):
        response = client.post("/api/products", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def create_variant(payload):
        response = client.post("/api/variants", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    shirt = create_product(
        {"name": "Classic T-Shirt", "category": "Apparel", "price": 25.0, "discount": 10, "inventory": 40}
    )
    jacket = create_product(
        {
            "name": "Denim Jacket",
            "category": "Apparel",
            "price": 80.0,
            "discount": 15,
            "discountType": "fixed",
            "inventory": 3,
        }
    )
    mug = create_product({"name": "Ceramic Mug", "category": "Home", "price": 12.0, "inventory": 120})

    variants = {
        "shirt_s": create_variant(
            {
                "product": shirt["id"],
                "variantName": "T-Shirt S Black",
                "price": 25.0,
                "inventory": 12,
                "attributes": {"size": "S", "color": "black"},
            }
        ),
        "shirt_m": create_variant(
            {
                "product": shirt["id"],
                "variantName": "T-Shirt M White",
                "price": 30.0,
                "inventory": 0,
                "attributes": {"size": "M", "color": "white"},
            }
        ),
        "jacket_l": create_variant(
            {
                "product": jacket["id"],
                "variantName": "Jacket L Blue",
                "price": 80.0,
                "discount": 20,
                "inventory": 2,
                "attributes": {"size": "L", "color": "blue"},
            }
        ),
    }

    return {"shirt": shirt, "jacket": jacket, "mug": mug, "variants": variants}
