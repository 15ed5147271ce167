"""
설정 값 / 프로바이더 식별자 도메인 모델 단위 테스트

- INHERIT 태그 값과 JSON 코덱 (secret 종류는 상속 해석 안 함)
- 프로바이더 식별자 형식 검증 및 모듈/배포 패키지 이름 변환
- menu() 미구현 프로바이더의 토큰 전용 기술자
"""

import pytest

from cpm.domain.models import (
    INHERIT,
    INHERIT_SENTINEL,
    Inherit,
    Provider,
    SettingKind,
    builtin_module_name,
    builtin_provider_id,
    decode_value,
    describe_settings,
    distribution_name,
    encode_value,
    external_module_name,
    is_builtin_provider_id,
    is_valid_provider_id,
)


@pytest.mark.unit
class TestSettingCodec:
    """태그 값 코덱 테스트"""

    def test_sentinel_decodes_to_inherit(self):
        """'inherit-from-global' 문자열은 INHERIT로 디코딩"""
        assert decode_value("inherit-from-global") is INHERIT
        assert INHERIT_SENTINEL == "inherit-from-global"

    def test_booleans_pass_through(self):
        assert decode_value(True) is True
        assert decode_value(False) is False
        assert decode_value(None) is None

    def test_secret_never_decodes_as_inherit(self):
        """secret 값은 센티널과 같은 문자열이어도 그대로 유지"""
        value = decode_value("inherit-from-global", SettingKind.SECRET)
        assert value == "inherit-from-global"
        assert value is not INHERIT

    def test_encode_inherit(self):
        assert encode_value(INHERIT) == "inherit-from-global"
        assert encode_value(True) is True
        assert encode_value(None) is None

    def test_inherit_is_singleton_enum(self):
        assert Inherit("inherit-from-global") is INHERIT
        assert repr(INHERIT) == "INHERIT"


@pytest.mark.unit
class TestProviderIds:
    """프로바이더 식별자 규칙 테스트"""

    @pytest.mark.parametrize("provider_id", [
        "cpm-foo",
        "cpm-foo-bar",
        "@acme/cpm-foo",
        "@builtin/cpm-github",
        "@builtin/cpm-github-npm",
    ])
    def test_valid_ids(self, provider_id):
        assert is_valid_provider_id(provider_id)

    @pytest.mark.parametrize("provider_id", [
        "bad name",
        "foo",
        "cpm-",
        "@acme/foo",
        "@acme/sub/cpm-foo",
        "",
        None,
        42,
    ])
    def test_invalid_ids(self, provider_id):
        assert not is_valid_provider_id(provider_id)

    def test_builtin_detection(self):
        assert is_builtin_provider_id("@builtin/cpm-npm")
        assert not is_builtin_provider_id("@acme/cpm-npm")
        assert not is_builtin_provider_id("cpm-npm")

    def test_builtin_names(self):
        assert builtin_provider_id("github_npm") == "@builtin/cpm-github-npm"
        assert builtin_module_name("@builtin/cpm-github-npm") == "cpm.providers.github_npm"

    def test_external_names(self):
        assert distribution_name("cpm-foo") == "cpm-foo"
        assert distribution_name("@acme/cpm-foo") == "acme-cpm-foo"
        assert external_module_name("cpm-foo") == "cpm_foo"
        assert external_module_name("@acme/cpm-foo-bar") == "acme_cpm_foo_bar"


class _CommandsOnly(Provider):
    def commands(self):
        return {}


@pytest.mark.unit
class TestDescribeSettings:
    """기술자 폴백 테스트"""

    def test_provider_without_menu_gets_token_descriptor(self):
        """menu()가 None이면 토큰 항목 하나만 기술"""
        descriptors = describe_settings(_CommandsOnly(), {"token": "abc"})

        assert len(descriptors) == 1
        assert descriptors[0].key == "token"
        assert descriptors[0].is_secret
        assert descriptors[0].value == "abc"
