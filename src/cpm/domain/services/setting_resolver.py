"""
설정 리졸버

(namespace, provider, key)에 대한 유효 설정 값을 계산하고,
설정 메뉴의 값 순환 및 프로바이더 콜백 기반 변경을 처리합니다.

규칙:
- "global" 범위는 global[provider][key]를 그대로 반환
- 네임스페이스 값이 없음 / None / INHERIT이면 전역 값으로 한 단계만 폴백
- secret(토큰 등)은 폴백하지 않음 (네임스페이스 값이 None이어도 그대로)
"""

import inspect
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models.config_document import ConfigDocument, GLOBAL_SCOPE, scope_settings
from ..models.provider import SettingDescriptor
from ..models.setting import (
    INHERIT,
    SettingKind,
    SettingValue,
    decode_value,
    encode_value,
)
from ...infrastructure.logging import get_logger

logger = get_logger(__name__, component="SettingResolver")


@dataclass
class SettingChangeResult:
    """
    설정 변경 결과

    Attributes:
        accepted: 변경이 적용되었는지 여부
        value: 제안된 값 (태그 값)
        reason: 거부 사유 (거부된 경우)
    """
    accepted: bool
    value: SettingValue = None
    reason: Optional[str] = None


def resolve(
    doc: ConfigDocument,
    namespace: str,
    provider_id: str,
    key: str,
    kind: SettingKind = SettingKind.BOOLEAN
) -> Any:
    """
    유효 설정 값 계산

    Args:
        doc: 설정 문서
        namespace: "global" 또는 네임스페이스 이름
        provider_id: 프로바이더 식별자
        key: 설정 키
        kind: 설정 종류 (SECRET이면 폴백 없음)

    Returns:
        유효 값 (없으면 None)

    Example:
        >>> doc["namespaces"]["@foo"]["providers"]["@builtin/cpm-github"]["publish"] = "inherit-from-global"
        >>> doc["global"]["@builtin/cpm-github"]["publish"] = True
        >>> resolve(doc, "@foo", "@builtin/cpm-github", "publish")
        True
    """
    global_settings = scope_settings(doc, GLOBAL_SCOPE, provider_id) or {}
    global_value = global_settings.get(key)
    if namespace == GLOBAL_SCOPE:
        return global_value

    ns_settings = scope_settings(doc, namespace, provider_id) or {}
    raw = ns_settings.get(key)
    if kind is SettingKind.SECRET:
        return raw

    value = decode_value(raw, kind)
    if value is None or value is INHERIT:
        return global_value
    return value


def cycle(current: Any, is_namespace_scope: bool) -> SettingValue:
    """
    boolean 설정의 다음 값 계산

    - global 범위: True -> False -> True
    - 네임스페이스 범위: True -> False -> INHERIT -> True

    Args:
        current: 현재 값 (원본 또는 태그 값)
        is_namespace_scope: 네임스페이스 범위 여부

    Returns:
        다음 값
    """
    current = decode_value(current)
    if is_namespace_scope:
        if current is True:
            return False
        if current is False:
            return INHERIT
        return True
    return False if current is True else True


async def apply_setting_change(
    settings: Dict[str, Any],
    descriptor: SettingDescriptor,
    next_value: SettingValue,
    doc: Optional[ConfigDocument] = None,
    scope: str = GLOBAL_SCOPE
) -> SettingChangeResult:
    """
    설정 변경을 (콜백 승인 후) 적용

    콜백이 있으면 제안 값으로 먼저 호출합니다.
    - True 반환: 적용
    - 문자열 반환: 해당 문자열을 사유로 거부
    - 그 외: 일반 거부
    - 예외 발생: 거부 (상태 변경 없음)

    Args:
        settings: 대상 프로바이더 설정 딕셔너리 (적용 시 제자리 수정)
        descriptor: 설정 기술자
        next_value: 제안 값
        doc: 전체 설정 문서 (콜백에 전달)
        scope: 설정 범위 (콜백에 전달)

    Returns:
        SettingChangeResult
    """
    if descriptor.callback is not None:
        try:
            outcome = descriptor.callback(next_value, settings, doc, scope)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            logger.warning(
                "Setting callback raised",
                key=descriptor.key,
                scope=scope,
                error=str(e)
            )
            return SettingChangeResult(
                accepted=False,
                value=next_value,
                reason=f"콜백 오류: {e}"
            )

        if outcome is not True:
            reason = outcome if isinstance(outcome, str) else None
            logger.info(
                "Setting change rejected",
                key=descriptor.key,
                scope=scope,
                reason=reason
            )
            return SettingChangeResult(accepted=False, value=next_value, reason=reason)

    settings[descriptor.key] = encode_value(next_value)
    logger.debug("Setting changed", key=descriptor.key, scope=scope, value=encode_value(next_value))
    return SettingChangeResult(accepted=True, value=next_value)


async def toggle_setting(
    settings: Dict[str, Any],
    descriptor: SettingDescriptor,
    is_namespace_scope: bool,
    doc: Optional[ConfigDocument] = None,
    scope: str = GLOBAL_SCOPE
) -> SettingChangeResult:
    """
    boolean 설정을 다음 값으로 순환 (cycle + apply_setting_change)

    Args:
        settings: 대상 프로바이더 설정 딕셔너리
        descriptor: 설정 기술자
        is_namespace_scope: 네임스페이스 범위 여부
        doc: 전체 설정 문서
        scope: 설정 범위

    Returns:
        SettingChangeResult
    """
    next_value = cycle(settings.get(descriptor.key), is_namespace_scope)
    return await apply_setting_change(settings, descriptor, next_value, doc=doc, scope=scope)


def set_secret(settings: Dict[str, Any], key: str, value: Optional[str]) -> None:
    """secret 값 설정 (빈 문자열은 None으로 초기화)"""
    settings[key] = value or None
