"""
환경 변수 유틸리티

.env 로드 및 설정 파일 경로 결정
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..logging import get_logger

logger = get_logger(__name__, component="EnvUtils")

CONFIG_PATH_ENV = "CPM_CONFIG_PATH"
DEFAULT_CONFIG_FILENAME = ".cpm-config.json"


def load_environment(cwd: Optional[Path] = None) -> bool:
    """
    현재 작업 디렉토리의 .env 파일 로드

    이미 설정된 환경 변수는 덮어쓰지 않습니다.

    Args:
        cwd: 기준 디렉토리 (None이면 현재 작업 디렉토리)

    Returns:
        .env 파일을 로드했으면 True
    """
    dotenv_path = (cwd or Path.cwd()) / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path, override=False)
        logger.debug(f"Loaded .env from {dotenv_path}")
        return True
    return False


def get_config_path() -> Path:
    """
    설정 파일 경로 반환

    우선순위:
    1. 환경변수 CPM_CONFIG_PATH (.env 포함)
    2. ~/.cpm-config.json

    Returns:
        설정 파일 경로
    """
    load_environment()
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILENAME
