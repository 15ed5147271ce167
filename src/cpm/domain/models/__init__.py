"""
도메인 모델

설정 문서, 설정 값, 프로바이더 계약
"""

from .setting import (
    SettingKind,
    Inherit,
    INHERIT,
    INHERIT_SENTINEL,
    SettingValue,
    decode_value,
    encode_value,
)
from .provider import (
    Provider,
    ProviderCommand,
    SettingDescriptor,
    LoadedProvider,
    CommandHandler,
    BUILTIN_PREFIX,
    PROVIDER_ID_PATTERN,
    describe_settings,
    token_only_descriptors,
    is_valid_provider_id,
    is_builtin_provider_id,
    builtin_provider_id,
    builtin_module_name,
    distribution_name,
    external_module_name,
)
from .config_document import (
    ConfigDocument,
    GLOBAL_SCOPE,
    DEFAULT_PROVIDER_SETTINGS,
    default_document,
    normalize_document,
    scope_settings,
)

__all__ = [
    "SettingKind",
    "Inherit",
    "INHERIT",
    "INHERIT_SENTINEL",
    "SettingValue",
    "decode_value",
    "encode_value",
    "Provider",
    "ProviderCommand",
    "SettingDescriptor",
    "LoadedProvider",
    "CommandHandler",
    "BUILTIN_PREFIX",
    "PROVIDER_ID_PATTERN",
    "describe_settings",
    "token_only_descriptors",
    "is_valid_provider_id",
    "is_builtin_provider_id",
    "builtin_provider_id",
    "builtin_module_name",
    "distribution_name",
    "external_module_name",
    "ConfigDocument",
    "GLOBAL_SCOPE",
    "DEFAULT_PROVIDER_SETTINGS",
    "default_document",
    "normalize_document",
    "scope_settings",
]
