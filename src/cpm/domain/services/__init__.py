"""
도메인 서비스

설정 리졸버
"""

from .setting_resolver import (
    SettingChangeResult,
    resolve,
    cycle,
    apply_setting_change,
    toggle_setting,
    set_secret,
)

__all__ = [
    "SettingChangeResult",
    "resolve",
    "cycle",
    "apply_setting_change",
    "toggle_setting",
    "set_secret",
]
