"""
프로바이더 포트 (인터페이스)

IProviderRegistry: 설정된 프로바이더 로드 인터페이스
IPackageInstaller: 호스트 패키지 매니저 설치 인터페이스
"""

from abc import ABC, abstractmethod
from typing import List

from ...domain.models import ConfigDocument, LoadedProvider


class IProviderRegistry(ABC):
    """
    프로바이더 레지스트리 인터페이스

    Infrastructure 계층에서 구현됨
    """

    @abstractmethod
    def resolve(self, doc: ConfigDocument) -> List[LoadedProvider]:
        """
        설정 문서의 providers 목록을 로드

        로드 실패한 프로바이더는 건너뜁니다 (예외 없음).

        Args:
            doc: 설정 문서

        Returns:
            providers 순서대로 로드된 프로바이더 목록
        """
        pass


class IPackageInstaller(ABC):
    """호스트 패키지 매니저 인터페이스"""

    @abstractmethod
    def install(self, package: str) -> bool:
        """
        패키지 설치

        Args:
            package: 배포 패키지 이름

        Returns:
            설치 성공 여부
        """
        pass
