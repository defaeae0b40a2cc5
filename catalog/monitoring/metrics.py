"""
성능 메트릭 시스템
API 요청과 카탈로그 작업 메트릭 추적
"""

import statistics
import time
from collections import deque
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from .logger import get_logger

logger = get_logger(__name__)


class Metric:
    """개별 메트릭"""

    def __init__(self, name: str, metric_type: str = "gauge", window_size: int = 100):
        self.name = name
        self.metric_type = metric_type  # gauge, counter, histogram
        self.values = deque(maxlen=window_size)
        self._counter = 0
        self.created_at = datetime.now()

    def record(self, value: float):
        """값 기록"""
        if self.metric_type == "counter":
            self._counter += value
            self.values.append(self._counter)
        else:
            self.values.append(value)

    def increment(self, amount: float = 1):
        """카운터 증가"""
        if self.metric_type == "counter":
            self.record(amount)

    def get_value(self) -> float:
        """현재 값 조회"""
        if self.metric_type == "counter":
            return self._counter
        return self.values[-1] if self.values else 0

    def get_stats(self) -> Dict[str, float]:
        """통계 정보"""
        if not self.values:
            return {"count": 0, "mean": 0, "min": 0, "max": 0, "p50": 0, "p95": 0}

        values = list(self.values)
        sorted_values = sorted(values)
        count = len(values)

        return {
            "count": count,
            "mean": statistics.mean(values),
            "min": sorted_values[0],
            "max": sorted_values[-1],
            "p50": sorted_values[int(count * 0.5)],
            "p95": sorted_values[int(count * 0.95)] if count > 20 else sorted_values[-1],
        }


class MetricsCollector:
    """메트릭 수집기"""

    def __init__(self):
        self.metrics: Dict[str, Metric] = {}
        self._register_default_metrics()

    def _register_default_metrics(self):
        # API
        self.register("api.requests", "counter")
        self.register("api.errors", "counter")
        self.register("api.latency", "histogram")

        # 카탈로그
        self.register("catalog.queries", "counter")
        self.register("catalog.query_latency", "histogram")
        self.register("inventory.adjustments", "counter")
        self.register("inventory.conflicts", "counter")
        self.register("inventory.rejected", "counter")

    def register(self, name: str, metric_type: str = "gauge", window_size: int = 100) -> Metric:
        """메트릭 등록"""
        if name not in self.metrics:
            self.metrics[name] = Metric(name, metric_type, window_size)
        return self.metrics[name]

    def record(self, name: str, value: float):
        """값 기록"""
        if name not in self.metrics:
            self.register(name)
        self.metrics[name].record(value)

    def increment(self, name: str, amount: float = 1):
        """카운터 증가"""
        if name not in self.metrics:
            self.register(name, "counter")
        self.metrics[name].increment(amount)

    def get_metric(self, name: str) -> Optional[Metric]:
        return self.metrics.get(name)

    def _value(self, name: str) -> float:
        metric = self.metrics.get(name)
        return metric.get_value() if metric else 0

    def _stats(self, name: str) -> Dict[str, float]:
        metric = self.metrics.get(name) or Metric(name, "histogram")
        return metric.get_stats()

    def get_summary(self) -> Dict[str, Any]:
        """메트릭 요약"""
        total_requests = self._value("api.requests")
        total_errors = self._value("api.errors")

        return {
            "timestamp": datetime.now().isoformat(),
            "api": {
                "total_requests": total_requests,
                "total_errors": total_errors,
                "error_rate": total_errors / max(total_requests, 1),
                "latency": self._stats("api.latency"),
            },
            "catalog": {
                "queries": self._value("catalog.queries"),
                "latency": self._stats("catalog.query_latency"),
            },
            "inventory": {
                "adjustments": self._value("inventory.adjustments"),
                "conflicts": self._value("inventory.conflicts"),
                "rejected": self._value("inventory.rejected"),
            },
        }

    def reset(self):
        """모든 메트릭 초기화 (테스트용)"""
        self.metrics.clear()
        self._register_default_metrics()


class PerformanceTracker:
    """성능 추적기"""

    def __init__(self, metrics_collector: Optional[MetricsCollector] = None):
        self.metrics = metrics_collector or MetricsCollector()

    @asynccontextmanager
    async def track_async(self, operation: str, metric_name: Optional[str] = None):
        """비동기 작업 성능 추적"""
        start_time = time.perf_counter()
        error_occurred = False

        try:
            yield
        except Exception:
            error_occurred = True
            raise
        finally:
            duration = time.perf_counter() - start_time
            if metric_name:
                self.metrics.record(metric_name, duration)
            logger.performance(operation, duration, error=error_occurred)
