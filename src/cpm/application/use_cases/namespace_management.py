"""
네임스페이스 관리 Use Case

add_namespace: 네임스페이스 생성 (설정 키를 전역 상속으로 초기화)
remove_namespace: 네임스페이스 삭제
"""

from typing import Dict, Iterable

from ...domain.errors import ErrorCode, handle_error
from ...domain.models import (
    ConfigDocument,
    GLOBAL_SCOPE,
    INHERIT,
    LoadedProvider,
    encode_value,
)
from ...infrastructure.logging import get_logger, track_error

logger = get_logger(__name__, component="NamespaceManagement")


def add_namespace(
    doc: ConfigDocument,
    name: str,
    loaded_providers: Iterable[LoadedProvider]
) -> Dict[str, dict]:
    """
    네임스페이스 추가

    각 프로바이더가 기술하는 설정 키를 INHERIT로 채웁니다.
    secret(토큰)은 상속 대상이 아니므로 None으로 채웁니다.

    Args:
        doc: 설정 문서 (제자리 수정)
        name: 네임스페이스 이름 (예: "@acme")
        loaded_providers: 로드된 프로바이더 목록

    Returns:
        생성된 네임스페이스 객체

    Raises:
        SettingError: 이름이 비었거나 이미 존재하는 경우
    """
    name = (name or "").strip()
    if not name:
        raise handle_error(ErrorCode.NAMESPACE_INVALID, namespace=name, reason="이름이 비어 있습니다")
    if name == GLOBAL_SCOPE:
        raise handle_error(ErrorCode.NAMESPACE_INVALID, namespace=name, reason="예약된 이름입니다")

    namespaces = doc.setdefault("namespaces", {})
    if name in namespaces:
        raise handle_error(ErrorCode.NAMESPACE_INVALID, namespace=name, reason="이미 존재합니다")

    providers: Dict[str, dict] = {}
    for loaded in loaded_providers:
        settings = {}
        try:
            descriptors = loaded.describe({})
        except Exception as e:
            # 메뉴 기술에 실패한 프로바이더는 빈 설정으로 둠
            track_error(e, "namespace_seed", provider_id=loaded.id)
            descriptors = []
        for descriptor in descriptors:
            settings[descriptor.key] = None if descriptor.is_secret else encode_value(INHERIT)
        providers[loaded.id] = settings

    namespace = {"providers": providers}
    namespaces[name] = namespace
    logger.info("Namespace added", namespace=name, providers=list(providers))
    return namespace


def remove_namespace(doc: ConfigDocument, name: str) -> bool:
    """
    네임스페이스 삭제

    Args:
        doc: 설정 문서
        name: 네임스페이스 이름

    Returns:
        삭제되었으면 True (없던 이름이면 False)
    """
    removed = (doc.get("namespaces") or {}).pop(name, None) is not None
    if removed:
        logger.info("Namespace removed", namespace=name)
    return removed
