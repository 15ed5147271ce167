"""
구조화된 로깅 설정 모듈

structlog 라이브러리를 사용하여 JSON 형식 로그를 파일로 출력하고,
컴포넌트 이름, 프로바이더 ID 등 메타데이터를 자동으로 포함합니다.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.processors import JSONRenderer
from structlog.stdlib import add_log_level

# JSON 직렬화 가능한 타입 정의
JSONSerializable = Union[str, int, float, bool, None, dict, list]

LOG_FILE_NAME = "cpm.log"
ERROR_LOG_FILE_NAME = "cpm-error.log"
DEBUG_LOG_FILE_NAME = "cpm-debug.log"


def _get_default_log_dir() -> Path:
    """
    기본 로그 디렉토리 경로 반환 (~/.cpm/logs)

    Returns:
        로그 디렉토리 경로
    """
    return Path.home() / ".cpm" / "logs"


def configure_structlog(
    log_dir: Optional[str] = None,
    log_level: str = "INFO",
    enable_json: bool = True,
    console_output: bool = False,
) -> None:
    """
    structlog를 설정합니다.

    대화형 메뉴 출력과 섞이지 않도록 기본적으로 파일에만 기록하고,
    console_output=True일 때만 stderr로도 출력합니다.

    Args:
        log_dir: 로그 파일 디렉토리 (None이면 ~/.cpm/logs 사용)
        log_level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_json: JSON 형식 출력 활성화 여부 (False시 콘솔 형식)
        console_output: 콘솔(stderr) 출력 추가 여부

    Example:
        >>> configure_structlog(log_dir=None, log_level="INFO", enable_json=True)
        >>> logger = get_logger(__name__, component="ProviderRegistry")
        >>> logger.info("Provider loaded", provider_id="@builtin/cpm-github")
    """
    log_path = Path(log_dir) if log_dir else _get_default_log_dir()
    log_path.mkdir(parents=True, exist_ok=True)

    # 프로세서 체인 설정
    processors = [
        structlog.contextvars.merge_contextvars,  # context vars 병합
        structlog.stdlib.add_logger_name,  # 로거 이름 추가
        add_log_level,  # 로그 레벨 추가
        structlog.processors.TimeStamper(fmt="iso"),  # ISO 8601 타임스탬프
        structlog.stdlib.PositionalArgumentsFormatter(),  # 위치 인자 포맷팅
        structlog.processors.StackInfoRenderer(),  # 스택 정보 렌더링
        structlog.processors.format_exc_info,  # 예외 정보 포맷팅
        structlog.processors.UnicodeDecoder(),  # 유니코드 디코딩
    ]

    if enable_json:
        processors.append(JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # 메인 로그: 5MB (모든 레벨의 로그)
    handlers = [
        logging.handlers.RotatingFileHandler(
            str(log_path / LOG_FILE_NAME),
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8"
        ),
    ]
    if console_output:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        handlers=handlers,
        force=True  # 기존 설정 덮어쓰기
    )

    # 에러 로그 전용 핸들러 추가
    error_handler = logging.handlers.RotatingFileHandler(
        str(log_path / ERROR_LOG_FILE_NAME),
        maxBytes=1 * 1024 * 1024,  # 1MB
        backupCount=3,
        encoding="utf-8"
    )
    error_handler.setLevel(logging.ERROR)
    logging.getLogger().addHandler(error_handler)

    # DEBUG 레벨이 활성화된 경우 디버그 로그 파일 추가
    if log_level.upper() == "DEBUG":
        debug_handler = logging.handlers.RotatingFileHandler(
            str(log_path / DEBUG_LOG_FILE_NAME),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=2,
            encoding="utf-8"
        )
        debug_handler.setLevel(logging.DEBUG)
        logging.getLogger().addHandler(debug_handler)


def get_logger(name: str, **context: JSONSerializable) -> structlog.stdlib.BoundLogger:
    """
    구조화된 로거를 가져옵니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용)
        **context: 기본 컨텍스트 (JSON 직렬화 가능한 타입만 허용)
                  예: component, provider_id, namespace 등

    Returns:
        BoundLogger 인스턴스 (메타데이터가 바인딩된 로거)

    Example:
        >>> logger = get_logger(__name__, component="ConfigStore")
        >>> logger.info("Config saved", file_path="/home/me/.cpm-config.json")
    """
    # configure_structlog 이전에 import된 모듈도 첫 사용 시점의 설정을 따름
    return structlog.get_logger(name, **context)
