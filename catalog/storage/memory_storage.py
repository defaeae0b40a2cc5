"""
메모리 기반 저장소
프로세스 내 dict에 문서를 보관 (개발/테스트 기본 백엔드)
"""

import asyncio
import copy
from typing import Any, Dict, List, Optional, Sequence

from catalog.exceptions import DuplicateKeyError, VersionConflictError
from catalog.storage.base import BaseStorage, matches, resolve_field, sort_records, utcnow_iso


class MemoryStorage(BaseStorage):
    """메모리 저장소 구현"""

    def __init__(self):
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    def _table(self, table: str) -> Dict[str, Dict[str, Any]]:
        return self._tables.setdefault(table, {})

    def _check_unique(self, table: str, document: Dict[str, Any]):
        """유니크 키 중복 검사"""
        for fields in self.unique_keys.get(table, []):
            values = tuple(resolve_field(document, f) for f in fields)
            if any(v is None or not isinstance(v, (str, int, float)) for v in values):
                continue
            for other in self._table(table).values():
                if other["id"] == document["id"]:
                    continue
                if tuple(resolve_field(other, f) for f in fields) == values:
                    raise DuplicateKeyError(table, fields, values)

    def _persist(self, table: str):
        """변경 사항 반영 (하위 클래스에서 재정의)"""

    def _commit(self, table: str, record_id: str, document: Optional[Dict[str, Any]]):
        """
        문서 반영 후 저장 (document가 None이면 삭제)

        저장에 실패하면 메모리 상태를 이전으로 되돌리고 예외를 다시 발생시킨다.
        """
        rows = self._table(table)
        previous = rows.get(record_id)
        if document is None:
            rows.pop(record_id, None)
        else:
            rows[record_id] = document

        try:
            self._persist(table)
        except Exception:
            if previous is None:
                rows.pop(record_id, None)
            else:
                rows[record_id] = previous
            raise

    async def create(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        async with self._lock:
            document = self.new_document(data)
            self._check_unique(table, document)
            self._commit(table, document["id"], document)
            return copy.deepcopy(document)

    async def get(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        document = self._table(table).get(record_id)
        return copy.deepcopy(document) if document else None

    async def find(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        items = [doc for doc in self._table(table).values() if matches(doc, filters)]
        items = sort_records(items, sort)
        if limit is not None:
            items = items[:limit]
        return copy.deepcopy(items)

    async def update(
        self,
        table: str,
        record_id: str,
        changes: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        async with self._lock:
            current = self._table(table).get(record_id)
            if current is None:
                return None

            if expected_version is not None and current["version"] != expected_version:
                raise VersionConflictError(table, record_id, expected_version, current["version"])

            updated = {**current, **copy.deepcopy(changes)}
            # 식별/메타 필드는 변경 불가
            updated["id"] = current["id"]
            updated["createdAt"] = current["createdAt"]
            updated["version"] = current["version"] + 1
            updated["updatedAt"] = utcnow_iso()

            self._check_unique(table, updated)
            self._commit(table, record_id, updated)
            return copy.deepcopy(updated)

    async def delete(self, table: str, record_id: str) -> bool:
        async with self._lock:
            if record_id not in self._table(table):
                return False
            self._commit(table, record_id, None)
            return True

    async def clear_all(self):
        """모든 데이터 삭제 (테스트용)"""
        async with self._lock:
            tables = list(self._tables)
            self._tables.clear()
            for table in tables:
                self._persist(table)
