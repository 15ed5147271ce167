"""
Configuration Infrastructure

JSON 파일 기반 설정 저장소와 환경 변수 처리
"""

from .store import JsonConfigStore, BACKUP_SUFFIX
from .env_utils import get_config_path, load_environment, CONFIG_PATH_ENV

__all__ = [
    "JsonConfigStore",
    "BACKUP_SUFFIX",
    "get_config_path",
    "load_environment",
    "CONFIG_PATH_ENV",
]
