"""
프로바이더 계약 (도메인 모델)

모든 프로바이더 모듈이 만족해야 하는 인터페이스와
식별자 규칙을 정의합니다.

Provider: 프로바이더 기본 클래스 (설정 메뉴 기술 + 명령 테이블)
SettingDescriptor: 설정 항목 기술자
ProviderCommand: 디스패치 가능한 명령 이름
LoadedProvider: 로드된 프로바이더 (식별자 + 인스턴스)
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from .setting import SettingKind

PRODUCT_PREFIX = "cpm"
BUILTIN_SCOPE = "@builtin"
BUILTIN_PREFIX = f"{BUILTIN_SCOPE}/{PRODUCT_PREFIX}-"

# 'cpm-<name>' 또는 '@scope/cpm-<name>'
PROVIDER_ID_PATTERN = re.compile(
    rf"^{PRODUCT_PREFIX}-[\w-]+$|^@[^/\s]+/{PRODUCT_PREFIX}-[\w-]+$"
)


class ProviderCommand(str, Enum):
    """프로바이더 명령 이름"""
    INSTALL = "install"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    UNINSTALL = "uninstall"
    VERSION = "version"
    UPDATE = "update"
    INIT = "init"


# 설정 변경 콜백: (next_value, settings, document, scope) -> True | str | 기타
SettingCallback = Callable[..., Any]

# 명령 핸들러: 옵션 딕셔너리를 받는 코루틴 함수
CommandHandler = Callable[[Mapping[str, Any]], Awaitable[Any]]


@dataclass
class SettingDescriptor:
    """
    설정 항목 기술자

    설정 메뉴에 표시될 항목 하나를 기술합니다.

    Attributes:
        key: 설정 키 (예: "publish")
        label: 표시 이름
        kind: 값 종류 (boolean / secret)
        value: 현재 값
        enabled: 활성 조건 결과 (예: 토큰이 있어야 publish 가능)
        default: 패키지 기본값
        help: 비활성 상태일 때 표시할 도움말
        callback: 값 변경 전에 호출되는 프로바이더 콜백 (선택)
    """
    key: str
    label: str
    kind: SettingKind = SettingKind.BOOLEAN
    value: Any = None
    enabled: bool = True
    default: Any = None
    help: Optional[str] = None
    callback: Optional[SettingCallback] = None

    @property
    def is_secret(self) -> bool:
        return self.kind is SettingKind.SECRET


def token_only_descriptors(settings: Mapping[str, Any]) -> List[SettingDescriptor]:
    """
    menu()를 제공하지 않는 프로바이더를 위한 기본 기술자 (토큰만)

    Args:
        settings: 프로바이더 설정 딕셔너리

    Returns:
        토큰 항목 하나만 담은 리스트
    """
    return [
        SettingDescriptor(
            key="token",
            label="Token",
            kind=SettingKind.SECRET,
            value=settings.get("token"),
        )
    ]


class Provider(ABC):
    """
    프로바이더 기본 클래스

    프로바이더 모듈은 이 클래스의 인스턴스를 모듈 속성 `provider`로 노출합니다.
    menu()는 선택 구현이며, None을 반환하면 토큰 전용 기술자가 사용됩니다.
    """

    name: str = ""

    def menu(self, settings: Mapping[str, Any]) -> Optional[List[SettingDescriptor]]:
        """
        설정 메뉴 항목 기술

        Args:
            settings: 현재 범위의 프로바이더 설정

        Returns:
            SettingDescriptor 리스트 (미구현 시 None)
        """
        return None

    @abstractmethod
    def commands(self) -> Dict[str, CommandHandler]:
        """
        명령 테이블 반환

        Returns:
            명령 이름 -> 코루틴 함수 딕셔너리
        """
        pass

    def version(self) -> Optional[str]:
        """프로바이더 버전 (선택)"""
        return None

    def registry(self) -> Optional[str]:
        """레지스트리 URL (선택)"""
        return None


def describe_settings(
    provider: Provider,
    settings: Mapping[str, Any]
) -> List[SettingDescriptor]:
    """
    프로바이더의 설정 기술자를 반환 (menu 미구현 시 토큰 전용 기술자)

    Args:
        provider: 프로바이더 인스턴스
        settings: 현재 범위의 프로바이더 설정

    Returns:
        SettingDescriptor 리스트
    """
    descriptors = provider.menu(settings)
    if descriptors is None:
        return token_only_descriptors(settings)
    return list(descriptors)


@dataclass
class LoadedProvider:
    """로드된 프로바이더"""
    id: str
    provider: Provider

    def describe(self, settings: Mapping[str, Any]) -> List[SettingDescriptor]:
        return describe_settings(self.provider, settings)


def is_valid_provider_id(provider_id: Any) -> bool:
    """
    프로바이더 식별자 형식 검증

    Args:
        provider_id: 검증할 식별자

    Returns:
        'cpm-<name>' 또는 '@scope/cpm-<name>' 형식이면 True
    """
    return isinstance(provider_id, str) and bool(PROVIDER_ID_PATTERN.match(provider_id))


def is_builtin_provider_id(provider_id: str) -> bool:
    """'@builtin/cpm-<name>' 형식 여부"""
    return is_valid_provider_id(provider_id) and provider_id.startswith(BUILTIN_PREFIX)


def builtin_provider_id(name: str) -> str:
    """
    내장 프로바이더 이름으로 식별자 생성

    Examples:
        >>> builtin_provider_id("github")
        '@builtin/cpm-github'
    """
    return f"{BUILTIN_PREFIX}{name.replace('_', '-')}"


def builtin_module_name(provider_id: str) -> str:
    """
    내장 프로바이더 식별자를 cpm.providers 하위 모듈 이름으로 변환

    Examples:
        >>> builtin_module_name("@builtin/cpm-github-npm")
        'cpm.providers.github_npm'
    """
    local_name = provider_id[len(BUILTIN_PREFIX):]
    return f"cpm.providers.{local_name.replace('-', '_')}"


def distribution_name(provider_id: str) -> str:
    """
    외부 프로바이더 식별자를 설치할 배포 패키지 이름으로 변환

    Examples:
        >>> distribution_name("cpm-foo")
        'cpm-foo'
        >>> distribution_name("@acme/cpm-foo")
        'acme-cpm-foo'
    """
    if provider_id.startswith("@"):
        scope, name = provider_id[1:].split("/", 1)
        return f"{scope}-{name}"
    return provider_id


def external_module_name(provider_id: str) -> str:
    """
    외부 프로바이더 식별자를 import 가능한 모듈 이름으로 변환

    Examples:
        >>> external_module_name("@acme/cpm-foo")
        'acme_cpm_foo'
    """
    return re.sub(r"[^\w]", "_", distribution_name(provider_id))
