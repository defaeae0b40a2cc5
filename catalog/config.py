"""
설정 관리 모듈
환경 변수를 읽어 Pydantic 모델로 변환하여 타입 안전성 보장
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env 파일 로드
load_dotenv(dotenv_path=".env")


class Settings(BaseSettings):
    """전체 애플리케이션 설정"""

    # 환경
    env: Literal["development", "staging", "production", "test"] = Field(default="development")
    debug: bool = Field(default=False)

    # 로깅
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    # API 서버
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # 저장소
    storage_backend: Literal["memory", "json"] = Field(default="memory")
    local_data_path: Path = Field(default=Path("./data"))

    # 인증
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    token_expire_hours: int = Field(default=24, gt=0)

    # 재고
    low_stock_threshold: int = Field(default=5, ge=0)
    inventory_max_retries: int = Field(default=3, ge=0)

    # 오류 응답에 내부 메시지 포함 여부 (미지정 시 개발 환경에서만)
    expose_error_details: Optional[bool] = Field(default=None)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def create_log_path(cls, v):
        if v:
            path = Path(v)
            path.parent.mkdir(parents=True, exist_ok=True)
            return path
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip()
        if not v or v == "/":
            return ""
        return "/" + v.strip("/")

    @property
    def show_error_details(self) -> bool:
        """500 응답에 원본 예외 메시지를 노출할지 여부"""
        if self.expose_error_details is not None:
            return self.expose_error_details
        return self.is_development()

    def is_production(self) -> bool:
        """프로덕션 환경 여부"""
        return self.env == "production"

    def is_development(self) -> bool:
        """개발 환경 여부"""
        return self.env == "development"


@lru_cache()
def get_settings() -> Settings:
    """설정 싱글톤 인스턴스 반환"""
    return Settings()


# 전역 설정 인스턴스
settings = get_settings()
