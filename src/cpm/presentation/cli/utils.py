"""
CLI Presentation Utilities

로깅 초기화와 설정 값 표시용 헬퍼
"""

import os
from typing import Any

from ...domain.models import INHERIT, decode_value


def setup_logging(verbose: bool = False) -> None:
    """
    로깅 설정 (구조화된 로깅 사용)

    로그는 파일로만 기록되며, --verbose일 때만 콘솔에도 출력됩니다.

    Args:
        verbose: 상세 로깅 활성화 여부
    """
    from ...infrastructure.logging import configure_structlog

    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "INFO")
    log_format = os.getenv("LOG_FORMAT", "json")
    # LOG_DIR 미설정 시 기본 경로 (~/.cpm/logs)
    log_dir = os.getenv("LOG_DIR")

    configure_structlog(
        log_dir=log_dir,
        log_level=log_level,
        enable_json=(log_format == "json"),
        console_output=verbose
    )


def mask_secret(value: Any) -> str:
    """
    secret 값 마스킹

    Examples:
        >>> mask_secret("ghp_abcdef123456")
        'ghp_••••'
        >>> mask_secret(None)
        '(unset)'
    """
    if not value:
        return "(unset)"
    text = str(value)
    if len(text) <= 4:
        return "••••"
    return f"{text[:4]}••••"


def format_flag(value: Any) -> str:
    """boolean / INHERIT 값을 표시 문자열로 변환"""
    value = decode_value(value)
    if value is INHERIT:
        return "global"
    if value is True:
        return "on"
    if value is False:
        return "off"
    return "-"
