"""
로깅 시스템
loguru 기반 구조화 로깅, 요청 ID를 모든 로그에 전파
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request_id]} | "
    "{extra[name]}:{function}:{line} - {message}"
)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    json_logs: bool = False,
    backup_count: int = 5,
    console_output: bool = True,
):
    """
    로깅 시스템 초기화

    Args:
        log_level: 로그 레벨
        log_file: 로그 파일 경로 (지정 시 에러 전용 파일도 함께 생성)
        json_logs: JSON 형식 로그 사용 여부 (프로덕션)
        backup_count: 보관할 로그 파일 개수
        console_output: 콘솔 출력 여부
    """
    logger.remove()
    # 요청 밖에서 남긴 로그도 포맷 필드를 갖도록 기본값 지정
    logger.configure(extra={"name": "catalog", "request_id": "-"})

    level = log_level.upper()

    if console_output:
        if json_logs:
            logger.add(sys.stdout, level=level, format="{message}", serialize=True)
        else:
            logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=True)

    if not log_file:
        return

    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(log_file),
        level=level,
        format="{message}" if json_logs else FILE_FORMAT,
        serialize=json_logs,
        rotation="100 MB",
        retention=backup_count,
        compression="zip",
    )

    # 에러 전용 로그 파일
    logger.add(
        str(log_file.with_name(f"{log_file.stem}_error{log_file.suffix}")),
        level="ERROR",
        format=FILE_FORMAT + "\n{exception}",
        rotation="1 day",
        retention="30 days",
        compression="zip",
    )


def request_context(request_id: str):
    """블록 안에서 남기는 모든 로그에 request_id를 붙이는 컨텍스트"""
    return logger.contextualize(request_id=request_id)


class LoggerAdapter:
    """모듈 이름과 고정 컨텍스트를 가진 로거"""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context = context or {}
        self._logger = logger.bind(name=name, **self.context)

    def bind(self, **kwargs) -> "LoggerAdapter":
        """컨텍스트를 추가한 새 로거"""
        return LoggerAdapter(self.name, {**self.context, **kwargs})

    def _log(self, level: str, message: str, exception: bool = False, **kwargs):
        # depth=2: 호출한 쪽의 함수명/라인이 기록되도록
        self._logger.opt(depth=2, exception=exception).log(level, message, **kwargs)

    def debug(self, message: str, **kwargs):
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log("ERROR", message, **kwargs)

    def exception(self, message: str, **kwargs):
        """현재 처리 중인 예외의 traceback 포함"""
        self._log("ERROR", message, exception=True, **kwargs)

    def performance(self, operation: str, duration: float, **kwargs):
        """작업 소요 시간 로그"""
        self._logger.bind(operation=operation, duration=duration, **kwargs).debug(
            f"{operation} 소요 시간 {duration:.3f}s"
        )


def get_logger(name: str, **context) -> LoggerAdapter:
    """
    모듈 로거 생성

    Args:
        name: 로거 이름 (보통 __name__)
        **context: 모든 로그에 붙일 컨텍스트

    Returns:
        LoggerAdapter 인스턴스
    """
    return LoggerAdapter(name, context)
