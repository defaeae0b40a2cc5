"""
저장소 기본 인터페이스
문서(dict) 단위로 테이블을 다루는 비동기 저장소 추상 클래스
"""

import copy
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

# 테이블별 유니크 키 (복합 키는 튜플)
UNIQUE_KEYS: Dict[str, List[Tuple[str, ...]]] = {
    "categories": [("name",)],
    "users": [("email",)],
    "inventory": [("product", "variantKey")],
}

_MISSING = object()

LOOKUPS: Dict[str, Callable[[Any, Any], bool]] = {
    "in": lambda value, arg: value in arg,
    "gt": lambda value, arg: value is not None and value > arg,
    "gte": lambda value, arg: value is not None and value >= arg,
    "lt": lambda value, arg: value is not None and value < arg,
    "lte": lambda value, arg: value is not None and value <= arg,
    "icontains": lambda value, arg: value is not None and str(arg).lower() in str(value).lower(),
}


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def resolve_field(record: Dict[str, Any], path: str) -> Any:
    """점(.) 경로로 중첩 문서 값 조회"""
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def split_lookup(key: str) -> Tuple[str, str]:
    """'price__gte' -> ('price', 'gte')"""
    field, sep, op = key.rpartition("__")
    if sep and op in LOOKUPS:
        return field, op
    return key, "eq"


def matches(record: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    """필터 조건 일치 여부"""
    for key, expected in (filters or {}).items():
        field, op = split_lookup(key)
        value = resolve_field(record, field)
        if value is _MISSING:
            value = None

        if op == "eq":
            if value != expected:
                return False
        else:
            try:
                if not LOOKUPS[op](value, expected):
                    return False
            except TypeError:
                # 타입이 달라 비교할 수 없는 값은 불일치로 간주
                return False
    return True


def sort_records(records: List[Dict[str, Any]], sort: Optional[Sequence[str]]) -> List[Dict[str, Any]]:
    """
    정렬 키 목록으로 정렬 ('-' 접두사는 내림차순)
    뒤쪽 키부터 안정 정렬을 반복하여 다중 키 정렬을 구현한다
    """
    result = list(records)
    for key in reversed(list(sort or [])):
        descending = key.startswith("-")
        field = key.lstrip("-")

        present, absent = [], []
        for record in result:
            value = resolve_field(record, field)
            (absent if value is _MISSING or value is None else present).append(record)

        present.sort(key=lambda r: resolve_field(r, field), reverse=descending)
        # 값이 없는 문서는 항상 뒤로
        result = present + absent
    return result


class BaseStorage(ABC):
    """
    저장소 추상 클래스

    문서 저장소 의미론을 따른다:
    - 단일 문서 쓰기는 직렬화된다
    - 여러 문서에 걸친 트랜잭션은 없다
    - 모든 문서는 id, createdAt, version 필드를 가진다
    """

    unique_keys: Dict[str, List[Tuple[str, ...]]] = UNIQUE_KEYS

    @abstractmethod
    async def create(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        문서 생성

        Args:
            table: 테이블명
            data: 문서 데이터

        Returns:
            id, createdAt, version이 채워진 문서

        Raises:
            DuplicateKeyError: 유니크 키 중복
        """

    @abstractmethod
    async def get(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        """ID로 문서 조회"""

    @abstractmethod
    async def find(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        조건 조회

        Args:
            table: 테이블명
            filters: 필드 조건 ('field', 'field__gte', 'attributes.size' 등)
            sort: 정렬 키 목록 ('-createdAt'은 내림차순)
            limit: 최대 개수

        Returns:
            문서 목록
        """

    @abstractmethod
    async def update(
        self,
        table: str,
        record_id: str,
        changes: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        문서 부분 수정

        Args:
            table: 테이블명
            record_id: 문서 ID
            changes: 변경할 필드
            expected_version: 지정 시 현재 버전과 다르면 VersionConflictError

        Returns:
            수정된 문서, 없으면 None
        """

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> bool:
        """문서 삭제 (하드 삭제)"""

    async def find_one(self, table: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """조건에 맞는 첫 문서"""
        records = await self.find(table, filters=filters, limit=1)
        return records[0] if records else None

    async def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        """조건에 맞는 문서 수"""
        return len(await self.find(table, filters=filters))

    async def close(self):
        """연결 정리"""

    @staticmethod
    def new_document(data: Dict[str, Any]) -> Dict[str, Any]:
        """저장할 새 문서 생성"""
        document = copy.deepcopy(data)
        document["id"] = uuid.uuid4().hex
        document.setdefault("createdAt", utcnow_iso())
        document["version"] = 1
        return document
