"""
설정 값 도메인 모델

SettingKind: 설정 종류 (boolean / secret)
Inherit: 네임스페이스 범위에서 "전역 설정 사용"을 나타내는 태그 값
"""

from enum import Enum
from typing import Any, Union


class SettingKind(str, Enum):
    """설정 값 종류"""
    BOOLEAN = "boolean"
    SECRET = "secret"


class Inherit(Enum):
    """
    전역 설정 상속 태그

    네임스페이스 설정에서만 사용됩니다. JSON에는 "inherit-from-global"
    문자열로 저장되며, 메모리에서는 INHERIT 싱글턴으로 표현됩니다.
    """
    INHERIT = "inherit-from-global"

    def __repr__(self) -> str:
        return "INHERIT"


INHERIT = Inherit.INHERIT
INHERIT_SENTINEL = INHERIT.value

# True / False / INHERIT, secret은 문자열 또는 None
SettingValue = Union[bool, Inherit, str, None]


def decode_value(raw: Any, kind: SettingKind = SettingKind.BOOLEAN) -> SettingValue:
    """
    JSON에 저장된 값을 태그 값으로 변환

    secret 종류는 상속 대상이 아니므로 문자열 그대로 반환합니다.

    Args:
        raw: 저장된 원본 값
        kind: 설정 종류

    Returns:
        디코딩된 값 (True / False / INHERIT / 원본)
    """
    if kind is SettingKind.SECRET:
        return raw
    if raw is INHERIT or raw == INHERIT_SENTINEL:
        return INHERIT
    return raw


def encode_value(value: SettingValue) -> Any:
    """태그 값을 JSON 저장용 값으로 변환"""
    if value is INHERIT:
        return INHERIT_SENTINEL
    return value
