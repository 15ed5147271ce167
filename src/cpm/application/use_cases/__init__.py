"""
Application Layer - Use Cases

명령 디스패치, 네임스페이스/패스코드 관리, 버전 보고
"""

from .command_dispatch import CommandDispatcher
from .namespace_management import add_namespace, remove_namespace
from .passcode_management import (
    has_passcode,
    verify_passcode,
    set_passcode,
    change_passcode,
    clear_passcode,
)
from .version_info import collect_versions, installed_version, NOT_INSTALLED, NOT_FOUND

__all__ = [
    "CommandDispatcher",
    "add_namespace",
    "remove_namespace",
    "has_passcode",
    "verify_passcode",
    "set_passcode",
    "change_passcode",
    "clear_passcode",
    "collect_versions",
    "installed_version",
    "NOT_INSTALLED",
    "NOT_FOUND",
]
