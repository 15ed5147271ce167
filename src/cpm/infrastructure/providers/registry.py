"""
프로바이더 레지스트리

설정 문서의 providers 목록에 있는 식별자를 프로바이더 인스턴스로 로드하고,
프로바이더 추가/제거 및 설정 정리를 담당합니다.

로드 규칙:
- 식별자 형식을 먼저 검증 (형식 오류 시 import 시도 없음)
- register_loader()로 등록된 로더가 우선
- '@builtin/cpm-<name>' -> cpm.providers.<name>
- 'cpm-foo' -> cpm_foo, '@acme/cpm-foo' -> acme_cpm_foo
- 모듈은 Provider 인스턴스를 `provider` 속성으로 노출해야 함
"""

import importlib
import pkgutil
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional

from ...application.ports import IPackageInstaller, IProviderRegistry
from ...domain.errors import (
    ErrorCode,
    ProviderAlreadyPresentError,
    ProviderInstallError,
    ProviderValidationError,
    handle_error,
)
from ...domain.models import (
    ConfigDocument,
    LoadedProvider,
    Provider,
    SettingDescriptor,
    builtin_module_name,
    builtin_provider_id,
    distribution_name,
    external_module_name,
    is_builtin_provider_id,
    is_valid_provider_id,
)
from ..logging import get_logger, track_error
from .installer import PipInstaller

logger = get_logger(__name__, component="ProviderRegistry")

# 프로바이더 팩토리
ProviderLoader = Callable[[], Provider]

BUILTIN_PACKAGE = "cpm.providers"


@dataclass
class AddProviderResult:
    """
    프로바이더 추가 결과

    Attributes:
        provider_id: 추가된 식별자
        package: 설치한 배포 패키지 (내장 프로바이더는 None)
    """
    provider_id: str
    package: Optional[str] = None


def load_module_provider(module_name: str) -> Provider:
    """
    모듈을 import하여 `provider` 속성을 반환

    Args:
        module_name: import할 모듈 이름

    Returns:
        Provider 인스턴스

    Raises:
        ImportError: 모듈을 찾을 수 없는 경우
        ProviderError: provider 속성이 없거나 Provider가 아닌 경우
    """
    module = importlib.import_module(module_name)
    provider = getattr(module, "provider", None)
    if not isinstance(provider, Provider):
        raise handle_error(
            ErrorCode.PROVIDER_INTERFACE_MISSING,
            log=False,
            module=module_name
        )
    return provider


class ProviderRegistry(IProviderRegistry):
    """
    프로바이더 레지스트리

    로드된 프로바이더는 인스턴스 단위로 캐시됩니다 (프로세스 실행 동안 1회 로드).
    """

    def __init__(self, installer: Optional[IPackageInstaller] = None):
        """
        Args:
            installer: 외부 프로바이더 설치기 (None이면 PipInstaller)
        """
        self.installer = installer or PipInstaller()
        self._loaders: Dict[str, ProviderLoader] = {}
        self._cache: Dict[str, Provider] = {}

    def register_loader(self, provider_id: str, loader: ProviderLoader) -> None:
        """
        식별자에 로더를 명시적으로 등록

        Args:
            provider_id: 프로바이더 식별자
            loader: Provider를 반환하는 팩토리

        Raises:
            ProviderValidationError: 식별자 형식 오류
        """
        if not is_valid_provider_id(provider_id):
            raise ProviderValidationError(provider_id)
        self._loaders[provider_id] = loader
        self._cache.pop(provider_id, None)

    def loader_for(self, provider_id: str) -> ProviderLoader:
        """식별자에 해당하는 로더 반환 (등록된 로더 우선)"""
        if provider_id in self._loaders:
            return self._loaders[provider_id]
        if is_builtin_provider_id(provider_id):
            return partial(load_module_provider, builtin_module_name(provider_id))
        return partial(load_module_provider, external_module_name(provider_id))

    def load(self, provider_id: str) -> Optional[Provider]:
        """
        프로바이더 하나를 로드 (실패 시 None, 예외 없음)

        Args:
            provider_id: 프로바이더 식별자

        Returns:
            Provider 인스턴스 또는 None
        """
        # 손으로 고친 설정에는 dict/list 같은 해시 불가 값이 올 수 있음
        if not is_valid_provider_id(provider_id):
            logger.warning("Skipping malformed provider id", provider_id=repr(provider_id))
            return None

        if provider_id in self._cache:
            return self._cache[provider_id]

        try:
            provider = self.loader_for(provider_id)()
        except Exception as e:
            # 서드파티 모듈의 import 시점 오류까지 포함해 로드 실패로 취급
            track_error(e, "provider_load", provider_id=provider_id)
            return None

        self._cache[provider_id] = provider
        logger.debug("Provider loaded", provider_id=provider_id)
        return provider

    def resolve(self, doc: ConfigDocument) -> List[LoadedProvider]:
        """
        설정 문서의 providers를 순서대로 로드

        Args:
            doc: 설정 문서

        Returns:
            로드에 성공한 프로바이더 목록
        """
        providers = doc.get("providers")
        if not isinstance(providers, list):
            return []

        loaded = []
        for provider_id in providers:
            provider = self.load(provider_id)
            if provider is not None:
                loaded.append(LoadedProvider(id=provider_id, provider=provider))
        return loaded

    def describe(
        self,
        loaded: LoadedProvider,
        settings: Mapping[str, Any]
    ) -> List[SettingDescriptor]:
        """프로바이더 설정 기술자 (menu 미구현 시 토큰 전용)"""
        return loaded.describe(settings)

    def add_provider(self, doc: ConfigDocument, provider_id: str) -> AddProviderResult:
        """
        프로바이더 추가

        외부 프로바이더는 먼저 패키지를 설치하고, 설치가 성공한 경우에만
        providers에 추가하고 global 및 모든 네임스페이스에 빈 설정 객체를 만듭니다.
        저장은 호출자가 담당합니다.

        Args:
            doc: 설정 문서 (성공 시 제자리 수정)
            provider_id: 프로바이더 식별자

        Returns:
            AddProviderResult

        Raises:
            ProviderValidationError: 식별자 형식 오류 (변경 없음)
            ProviderAlreadyPresentError: 이미 등록됨 (변경 없음)
            ProviderInstallError: 설치 실패 (변경 없음)
        """
        if not is_valid_provider_id(provider_id):
            raise ProviderValidationError(provider_id)

        if provider_id in (doc.get("providers") or []):
            raise ProviderAlreadyPresentError(provider_id)

        package = None
        if not is_builtin_provider_id(provider_id):
            package = distribution_name(provider_id)
            if not self.installer.install(package):
                raise ProviderInstallError(provider_id, package)

        doc.setdefault("providers", []).append(provider_id)
        doc.setdefault("global", {}).setdefault(provider_id, {})
        for ns in (doc.get("namespaces") or {}).values():
            ns.setdefault("providers", {}).setdefault(provider_id, {})

        logger.info("Provider added", provider_id=provider_id, package=package)
        return AddProviderResult(provider_id=provider_id, package=package)

    def remove_provider(self, doc: ConfigDocument, provider_id: str) -> bool:
        """
        프로바이더 제거 (providers, global, 모든 네임스페이스에서 삭제)

        확인 절차는 호출자(UI)가 담당합니다.

        Args:
            doc: 설정 문서
            provider_id: 프로바이더 식별자

        Returns:
            제거된 항목이 있으면 True
        """
        providers = doc.get("providers") or []
        removed = provider_id in providers
        doc["providers"] = [p for p in providers if p != provider_id]

        if (doc.get("global") or {}).pop(provider_id, None) is not None:
            removed = True
        for ns in (doc.get("namespaces") or {}).values():
            if (ns.get("providers") or {}).pop(provider_id, None) is not None:
                removed = True

        self._cache.pop(provider_id, None)
        if removed:
            logger.info("Provider removed", provider_id=provider_id)
        return removed

    def cleanup(self, doc: ConfigDocument) -> ConfigDocument:
        """
        설정 정리 (멱등)

        - 식별자 형식이 아닌 키의 설정 객체 제거
        - 빈 설정 객체 제거
        - providers를 올바른 식별자로 필터링 (중복 제거, 순서 유지)

        네임스페이스 자체({"providers": {}})는 유지됩니다.

        Args:
            doc: 설정 문서 (제자리 수정)

        Returns:
            같은 설정 문서
        """
        if isinstance(doc.get("global"), dict):
            _prune_settings_map(doc["global"])

        namespaces = doc.get("namespaces")
        for ns in (namespaces.values() if isinstance(namespaces, dict) else []):
            if isinstance(ns, dict) and isinstance(ns.get("providers"), dict):
                _prune_settings_map(ns["providers"])

        if isinstance(doc.get("providers"), list):
            kept: List[str] = []
            for provider_id in doc["providers"]:
                if is_valid_provider_id(provider_id) and provider_id not in kept:
                    kept.append(provider_id)
            doc["providers"] = kept

        return doc

    @staticmethod
    def available_builtins() -> List[str]:
        """
        cpm.providers에 포함된 내장 프로바이더 식별자 목록

        Returns:
            '@builtin/cpm-<name>' 목록 (이름순)
        """
        package = importlib.import_module(BUILTIN_PACKAGE)
        names = sorted(
            info.name for info in pkgutil.iter_modules(package.__path__)
            if not info.name.startswith("_")
        )
        return [builtin_provider_id(name) for name in names]


def _prune_settings_map(settings_map: Dict[str, Any]) -> None:
    """잘못된 키 또는 비어 있는 설정 객체 제거"""
    for key in list(settings_map):
        value = settings_map[key]
        if not is_valid_provider_id(key) or not isinstance(value, dict) or not value:
            del settings_map[key]
