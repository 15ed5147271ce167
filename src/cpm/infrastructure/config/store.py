"""
설정 저장소 구현

JsonConfigStore: 사용자별 JSON 파일 하나에 설정 문서를 저장/로드
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional

from ...application.ports import IConfigStore
from ...domain.errors import ErrorCode, handle_error
from ...domain.models import (
    ConfigDocument,
    Inherit,
    default_document,
    normalize_document,
)
from ..logging import get_logger
from .env_utils import get_config_path

logger = get_logger(__name__, component="ConfigStore")

BACKUP_SUFFIX = ".bak"

# 파싱 실패 시 백업 후 초기화할지 묻는 콜백 (경로 -> 승인 여부)
ConfirmReset = Callable[[Path], bool]


def _decline_reset(path: Path) -> bool:
    return False


def _json_default(value: Any) -> Any:
    if isinstance(value, Inherit):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonConfigStore(IConfigStore):
    """
    JSON 설정 저장소

    저장은 항상 문서 전체 덮어쓰기이며, 임시 파일에 쓴 뒤
    os.replace로 교체하여 부분 쓰기가 남지 않습니다.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        confirm_reset: Optional[ConfirmReset] = None
    ):
        """
        Args:
            config_path: 설정 파일 경로 (None이면 CPM_CONFIG_PATH 또는 ~/.cpm-config.json)
            confirm_reset: 파싱 실패 시 백업/초기화 승인 콜백 (None이면 항상 거부)
        """
        self.config_path = Path(config_path) if config_path else get_config_path()
        self.confirm_reset = confirm_reset or _decline_reset

    @property
    def backup_path(self) -> Path:
        return self.config_path.with_name(self.config_path.name + BACKUP_SUFFIX)

    def load(self) -> ConfigDocument:
        """
        설정 문서 로드

        - 파일이 없으면 기본 문서를 생성/저장 후 반환
        - JSON 파싱 실패 시 confirm_reset 승인 -> .bak으로 백업 후 재초기화,
          거부 -> ConfigError(CONFIG_PARSE_FAILED)

        Returns:
            정규화된 설정 문서

        Raises:
            ConfigError: I/O 실패 또는 복구 거부
        """
        if not self.config_path.exists():
            doc = default_document()
            self.save(doc)
            logger.info("Config created with defaults", file_path=str(self.config_path))
            return doc

        try:
            raw = self.config_path.read_bytes()
        except OSError as e:
            raise handle_error(
                ErrorCode.CONFIG_IO_FAILED,
                original_error=e,
                file_path=str(self.config_path)
            )

        try:
            # UnicodeDecodeError는 ValueError의 하위 클래스
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("최상위 값이 JSON 객체가 아닙니다")
        except ValueError as e:
            logger.error("Config parse failed", file_path=str(self.config_path), error=str(e))
            if not self.confirm_reset(self.config_path):
                raise handle_error(
                    ErrorCode.CONFIG_PARSE_FAILED,
                    original_error=e,
                    file_path=str(self.config_path)
                )
            self._backup()
            return self.load()

        return normalize_document(data)

    def save(self, doc: ConfigDocument) -> None:
        """
        설정 문서 전체 저장 (덮어쓰기)

        Args:
            doc: 설정 문서

        Raises:
            ConfigError: 쓰기 실패 시
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.config_path.parent),
                prefix=self.config_path.name,
                suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(doc, f, indent="\t", ensure_ascii=False, default=_json_default)
                os.replace(tmp_name, self.config_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise handle_error(
                ErrorCode.CONFIG_IO_FAILED,
                original_error=e,
                file_path=str(self.config_path)
            )
        logger.debug("Config saved", file_path=str(self.config_path))

    def get(self, dot_path: str, default: Any = None) -> Any:
        """
        점 경로로 값 조회

        Args:
            dot_path: 점 구분 경로 (예: "global.@builtin/cpm-github.token"), 빈 값이면 문서 전체
            default: 경로가 없을 때 반환할 값

        Returns:
            조회된 값 또는 default
        """
        return self.get_path(self.load(), dot_path, default)

    def set(self, dot_path: str, value: Any) -> None:
        """
        점 경로로 값 설정 후 즉시 저장

        Args:
            dot_path: 점 구분 경로
            value: 설정할 값
        """
        if not dot_path:
            return
        doc = self.load()
        self.set_path(doc, dot_path, value)
        self.save(doc)

    @staticmethod
    def get_path(doc: ConfigDocument, dot_path: str, default: Any = None) -> Any:
        """메모리 상의 문서에서 점 경로로 값 조회"""
        if not dot_path:
            return doc
        node: Any = doc
        for part in dot_path.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    @staticmethod
    def set_path(doc: ConfigDocument, dot_path: str, value: Any) -> None:
        """메모리 상의 문서에 점 경로로 값 설정 (중간 단계는 빈 객체로 생성)"""
        parts = dot_path.split(".")
        node = doc
        for part in parts[:-1]:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value

    def _backup(self) -> None:
        """손상된 설정 파일을 .bak으로 이동"""
        try:
            os.replace(self.config_path, self.backup_path)
        except OSError as e:
            raise handle_error(
                ErrorCode.CONFIG_IO_FAILED,
                original_error=e,
                file_path=str(self.config_path)
            )
        logger.warning(
            "Config backed up and reset",
            file_path=str(self.config_path),
            backup_path=str(self.backup_path)
        )
