"""
버전 정보 Use Case

cpm, 설정된 각 프로바이더, pip, python 버전을 순서대로 수집합니다.
"""

import platform
from importlib import metadata
from typing import Callable, Dict, Optional

from ... import __version__
from ..ports import IProviderRegistry
from ...domain.models import (
    ConfigDocument,
    distribution_name,
    is_builtin_provider_id,
    is_valid_provider_id,
)
from ...infrastructure.logging import get_logger

logger = get_logger(__name__, component="VersionInfo")

NOT_INSTALLED = "not installed"
NOT_FOUND = "not found"


def installed_version(distribution: str) -> Optional[str]:
    """설치된 배포 패키지 버전 (없으면 None)"""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


def collect_versions(
    doc: ConfigDocument,
    registry: IProviderRegistry,
    pip_version: Optional[Callable[[], Optional[str]]] = None
) -> Dict[str, str]:
    """
    버전 보고서 생성

    프로바이더 버전은 provider.version()을 우선 사용하고,
    없으면 설치된 배포 패키지 버전, 둘 다 없으면 "not installed"입니다.
    형식이 잘못된 providers 항목은 보고서에서 제외합니다.

    Args:
        doc: 설정 문서
        registry: 프로바이더 레지스트리
        pip_version: pip 버전 조회 함수 (선택)

    Returns:
        {"cpm": ..., <provider_id>: ..., "pip": ..., "python": ...}
    """
    versions: Dict[str, str] = {"cpm": __version__}

    loaded = {item.id: item.provider for item in registry.resolve(doc)}
    providers = doc.get("providers")
    for provider_id in (providers if isinstance(providers, list) else []):
        if not is_valid_provider_id(provider_id):
            logger.warning("Skipping malformed provider id", provider_id=repr(provider_id))
            continue
        version = None
        provider = loaded.get(provider_id)
        if provider is not None:
            version = provider.version()
        if version is None and not is_builtin_provider_id(provider_id):
            version = installed_version(distribution_name(provider_id))
        versions[provider_id] = version or NOT_INSTALLED

    pip = pip_version() if pip_version is not None else installed_version("pip")
    versions["pip"] = pip or NOT_FOUND
    versions["python"] = platform.python_version()

    logger.debug("Versions collected", versions=versions)
    return versions
