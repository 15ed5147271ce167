"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping

import pytest

# Add src directory to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

# Environment setup: 로그는 임시 디렉토리로, 콘솔 출력 없음
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="cpm-test-logs-"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from cpm.domain.models import Provider, SettingDescriptor, default_document  # noqa: E402
from cpm.infrastructure.logging import configure_structlog, reset_tracked_errors  # noqa: E402

configure_structlog(log_dir=os.environ["LOG_DIR"], log_level="DEBUG")


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: 단위 테스트")
    config.addinivalue_line("markers", "integration: 통합 테스트")


class RecordingProvider(Provider):
    """
    테스트용 프로바이더

    호출된 명령을 calls에 (이름, 옵션)으로 기록하며,
    fail_on에 지정된 명령에서는 RuntimeError를 발생시킵니다.
    """

    def __init__(self, name: str, descriptors=None, fail_on=(), calls=None):
        self.name = name
        self._descriptors = descriptors
        self.fail_on = set(fail_on)
        self.calls: List[Any] = calls if calls is not None else []

    def menu(self, settings: Mapping[str, Any]):
        if self._descriptors is None:
            return None
        return [
            SettingDescriptor(**{**d, "value": settings.get(d["key"])})
            for d in self._descriptors
        ]

    def commands(self) -> Dict[str, Any]:
        return {command: self._bind(command) for command in ("install", "publish", "uninstall")}

    def _bind(self, command: str):
        async def run(opts):
            self.calls.append((self.name, command, dict(opts)))
            if command in self.fail_on:
                raise RuntimeError(f"{self.name} failed on {command}")
        return run

    def version(self):
        return "1.2.3"


@pytest.fixture
def document() -> Dict[str, Any]:
    """기본 설정 문서"""
    return default_document()


@pytest.fixture
def config_path(tmp_path) -> Path:
    """임시 설정 파일 경로 (파일은 아직 없음)"""
    return tmp_path / ".cpm-config.json"


@pytest.fixture(autouse=True)
def clean_tracked_errors():
    """테스트마다 오류 기록 초기화"""
    reset_tracked_errors()
    yield
    reset_tracked_errors()


@pytest.fixture
def recording_provider():
    """RecordingProvider 클래스"""
    return RecordingProvider
