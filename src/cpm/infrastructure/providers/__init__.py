"""
Provider Infrastructure

프로바이더 로드/추가/제거와 pip 설치기
"""

from .registry import (
    AddProviderResult,
    ProviderRegistry,
    ProviderLoader,
    load_module_provider,
)
from .installer import PipInstaller
from .repo_registry import RepoInfoRegistry, RepoInfoFunction, repo_registry

__all__ = [
    "AddProviderResult",
    "ProviderRegistry",
    "ProviderLoader",
    "load_module_provider",
    "PipInstaller",
    "RepoInfoRegistry",
    "RepoInfoFunction",
    "repo_registry",
]
