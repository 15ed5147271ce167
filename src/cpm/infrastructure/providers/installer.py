"""
호스트 패키지 매니저 연동

PipInstaller: 현재 인터프리터의 pip로 외부 프로바이더 패키지 설치
"""

import subprocess
import sys
from typing import Optional

from ...application.ports import IPackageInstaller
from ..logging import get_logger

logger = get_logger(__name__, component="PipInstaller")


class PipInstaller(IPackageInstaller):
    """
    pip 기반 설치기

    `python -m pip install <package>`를 실행하며, 출력은 터미널로 그대로 전달됩니다.
    """

    def __init__(self, python_executable: Optional[str] = None):
        """
        Args:
            python_executable: pip를 실행할 파이썬 (None이면 현재 인터프리터)
        """
        self.python_executable = python_executable or sys.executable

    def install(self, package: str) -> bool:
        """
        패키지 설치

        Args:
            package: 배포 패키지 이름

        Returns:
            종료 코드가 0이면 True
        """
        command = [self.python_executable, "-m", "pip", "install", package]
        logger.info("Installing package", package=package)
        try:
            result = subprocess.run(command, check=False)
        except OSError as e:
            logger.error("pip execution failed", package=package, error=str(e))
            return False

        if result.returncode != 0:
            logger.warning("pip install failed", package=package, returncode=result.returncode)
            return False
        return True

    def pip_version(self) -> Optional[str]:
        """
        pip 버전 조회

        Returns:
            버전 문자열 (조회 실패 시 None)
        """
        try:
            result = subprocess.run(
                [self.python_executable, "-m", "pip", "--version"],
                capture_output=True,
                text=True,
                check=False
            )
        except OSError as e:
            logger.debug("pip version lookup failed", error=str(e))
            return None
        if result.returncode != 0:
            return None
        # "pip 24.0 from /path (python 3.12)"
        parts = result.stdout.split()
        return parts[1] if len(parts) > 1 else None
