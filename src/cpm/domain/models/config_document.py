"""
설정 문서 도메인 모델

설정 문서는 하나의 JSON 객체이며, 모든 리졸버/레지스트리 호출에
명시적으로 전달됩니다 (전역 싱글턴 없음).

{
    "passcode": null,
    "global": {provider_id: {key: value}},
    "namespaces": {name: {"providers": {provider_id: {key: value}}}},
    "providers": [provider_id, ...]
}
"""

import copy
from typing import Any, Dict, Optional

from .provider import builtin_provider_id

# 설정 문서 타입 (JSON 객체)
ConfigDocument = Dict[str, Any]

GLOBAL_SCOPE = "global"

# 이전 버전의 최상위 배열 이름
LEGACY_PROVIDERS_KEY = "sources"

DEFAULT_PROVIDER_SETTINGS: Dict[str, Dict[str, Any]] = {
    builtin_provider_id("github"): {"token": None, "publish": True, "releases": False},
    builtin_provider_id("npm"): {"token": None, "publish": True, "allowPrivate": False},
}


def default_document() -> ConfigDocument:
    """
    최초 실행 시 생성되는 기본 설정 문서

    Returns:
        기본 설정 문서 (매 호출마다 새 객체)
    """
    return {
        "passcode": None,
        "global": copy.deepcopy(DEFAULT_PROVIDER_SETTINGS),
        "namespaces": {},
        "providers": list(DEFAULT_PROVIDER_SETTINGS),
    }


def normalize_document(doc: ConfigDocument) -> ConfigDocument:
    """
    누락된 최상위 키를 채우고 레거시 스키마를 마이그레이션

    - passcode/global/namespaces/providers 누락 시 기본 형태로 채움
    - 'sources' 배열은 'providers'로 병합 후 제거
    - 네임스페이스마다 'providers' 맵 보장

    Args:
        doc: 설정 문서 (제자리에서 수정됨)

    Returns:
        같은 설정 문서
    """
    doc.setdefault("passcode", None)
    if not isinstance(doc.get("global"), dict):
        doc["global"] = {}
    if not isinstance(doc.get("namespaces"), dict):
        doc["namespaces"] = {}
    if not isinstance(doc.get("providers"), list):
        doc["providers"] = []

    legacy = doc.pop(LEGACY_PROVIDERS_KEY, None)
    if isinstance(legacy, list):
        for provider_id in legacy:
            if provider_id not in doc["providers"]:
                doc["providers"].append(provider_id)

    for name, ns in list(doc["namespaces"].items()):
        if not isinstance(ns, dict):
            ns = doc["namespaces"][name] = {}
        if not isinstance(ns.get("providers"), dict):
            ns["providers"] = {}

    return doc


def scope_settings(
    doc: ConfigDocument,
    scope: str,
    provider_id: str,
    create: bool = False
) -> Optional[Dict[str, Any]]:
    """
    범위(global 또는 네임스페이스)의 프로바이더 설정 객체 반환

    Args:
        doc: 설정 문서
        scope: "global" 또는 네임스페이스 이름
        provider_id: 프로바이더 식별자
        create: 없으면 빈 객체를 만들어 반환

    객체가 아닌 값(손으로 고친 설정의 true, 문자열 등)은 없는 것으로 취급하며,
    create=True이면 빈 객체로 교체합니다.

    Returns:
        설정 딕셔너리 (없고 create=False이면 None)
    """
    if scope == GLOBAL_SCOPE:
        container = _child_dict(doc, "global", create)
    else:
        namespaces = _child_dict(doc, "namespaces", create)
        if namespaces is None:
            return None
        if not isinstance(namespaces.get(scope), dict):
            if not create:
                return None
            namespaces[scope] = {"providers": {}}
        container = _child_dict(namespaces[scope], "providers", create)

    if container is None:
        return None
    settings = container.get(provider_id)
    if not isinstance(settings, dict):
        if not create:
            return None
        settings = container[provider_id] = {}
    return settings


def _child_dict(parent: Dict[str, Any], key: str, create: bool) -> Optional[Dict[str, Any]]:
    child = parent.get(key)
    if isinstance(child, dict):
        return child
    if not create:
        return None
    child = parent[key] = {}
    return child
