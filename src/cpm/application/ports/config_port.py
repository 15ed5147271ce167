"""
설정 저장소 포트 (인터페이스)

IConfigStore: 설정 문서 로드/저장 인터페이스
"""

from abc import ABC, abstractmethod
from typing import Any

from ...domain.models import ConfigDocument


class IConfigStore(ABC):
    """
    설정 저장소 인터페이스

    Infrastructure 계층에서 구현됨 (JSON 파일)
    """

    @abstractmethod
    def load(self) -> ConfigDocument:
        """
        설정 문서 로드 (없으면 기본 문서 생성)

        Returns:
            설정 문서

        Raises:
            ConfigError: I/O 실패 또는 복구를 거부한 파싱 실패
        """
        pass

    @abstractmethod
    def save(self, doc: ConfigDocument) -> None:
        """
        설정 문서 전체를 덮어써서 저장

        Args:
            doc: 설정 문서

        Raises:
            ConfigError: 쓰기 실패 시
        """
        pass

    @abstractmethod
    def get(self, dot_path: str, default: Any = None) -> Any:
        """점 경로로 값 조회 (없으면 default)"""
        pass

    @abstractmethod
    def set(self, dot_path: str, value: Any) -> None:
        """점 경로로 값 설정 후 저장 (중간 단계 자동 생성)"""
        pass
