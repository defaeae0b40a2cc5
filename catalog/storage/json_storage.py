"""
JSON 파일 기반 저장소
DB 없이 로컬 파일에 테이블별로 문서 저장
"""

import json
from pathlib import Path
from threading import Lock

from loguru import logger

from catalog.exceptions import StoreError
from catalog.storage.memory_storage import MemoryStorage


class JSONStorage(MemoryStorage):
    """
    JSON 파일 저장소 구현

    메모리 캐시를 기준으로 동작하고 쓰기마다 해당 테이블 파일을 다시 기록한다
    (base_path/<table>.json)
    """

    def __init__(self, base_path: str = "./data"):
        """
        Args:
            base_path: 데이터 저장 경로
        """
        super().__init__()
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._file_lock = Lock()

        self._load_data()

    def _table_file(self, table: str) -> Path:
        return self.base_path / f"{table}.json"

    def _load_data(self):
        """파일에서 데이터 로드"""
        for path in sorted(self.base_path.glob("*.json")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    self._tables[path.stem] = json.load(f)
                logger.info(f"{path.stem} 데이터 {len(self._tables[path.stem])}개 로드됨")
            except (OSError, json.JSONDecodeError) as e:
                raise StoreError(f"Failed to load table {path.stem}: {e}") from e

    def _persist(self, table: str):
        """테이블을 파일에 저장"""
        with self._file_lock:
            try:
                with open(self._table_file(table), "w", encoding="utf-8") as f:
                    json.dump(self._tables.get(table, {}), f, ensure_ascii=False, indent=2, default=str)
            except OSError as e:
                logger.error(f"{table} 저장 실패: {e}")
                raise StoreError(f"Failed to persist table {table}") from e
