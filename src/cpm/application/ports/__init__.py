"""
Application Ports

Infrastructure 계층이 구현하는 인터페이스
"""

from .config_port import IConfigStore
from .provider_port import IProviderRegistry, IPackageInstaller

__all__ = [
    "IConfigStore",
    "IProviderRegistry",
    "IPackageInstaller",
]
