"""Storage package"""

from catalog.storage.base import BaseStorage
from catalog.storage.json_storage import JSONStorage
from catalog.storage.memory_storage import MemoryStorage


def create_storage(settings) -> BaseStorage:
    """설정에 맞는 저장소 생성"""
    if settings.storage_backend == "json":
        return JSONStorage(base_path=str(settings.local_data_path))
    return MemoryStorage()


__all__ = ["BaseStorage", "JSONStorage", "MemoryStorage", "create_storage"]
