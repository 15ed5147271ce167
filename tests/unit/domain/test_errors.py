"""
에러 코드 / 예외 클래스 단위 테스트
"""

import pytest

from cpm.domain.errors import (
    ConfigError,
    CpmError,
    ErrorCode,
    PasscodeMismatchError,
    ProviderAlreadyPresentError,
    ProviderError,
    ProviderInstallError,
    ProviderValidationError,
    SettingError,
    format_error_message,
    handle_error,
)


@pytest.mark.unit
class TestErrorCodes:
    """에러 코드 테스트"""

    def test_codes_and_categories(self):
        assert ErrorCode.CONFIG_IO_FAILED.code == 2001
        assert ErrorCode.CONFIG_PARSE_FAILED.category == "Config"
        assert ErrorCode.PROVIDER_INSTALL_FAILED.category == "Provider"
        assert ErrorCode.PASSCODE_MISMATCH.category == "Setting"
        assert ErrorCode.UNKNOWN_ERROR.category == "Other"

    def test_str(self):
        assert str(ErrorCode.CONFIG_IO_FAILED) == "CONFIG_IO_FAILED (2001)"


@pytest.mark.unit
class TestErrorMessages:
    """메시지 템플릿 테스트"""

    def test_format_with_context(self):
        message = format_error_message(ErrorCode.PROVIDER_INVALID_ID, provider_id="bad name")
        assert "bad name" in message

    def test_missing_key_appends_context(self):
        """템플릿 변수가 빠지면 컨텍스트를 덧붙여 반환"""
        message = format_error_message(ErrorCode.CONFIG_IO_FAILED, file_path="/tmp/x")
        assert "file_path=/tmp/x" in message


@pytest.mark.unit
class TestExceptions:
    """예외 클래스 테스트"""

    def test_original_error_added_to_context(self):
        original = OSError("Permission denied")
        error = ConfigError(ErrorCode.CONFIG_IO_FAILED, original_error=original, file_path="/x")

        assert error.context["error"] == "Permission denied"
        assert "Permission denied" in error.message
        assert str(error).startswith("[CONFIG_IO_FAILED (2001)]")

    def test_to_dict(self):
        error = ProviderValidationError("bad name")
        data = error.to_dict()

        assert data["error_code"] == "PROVIDER_INVALID_ID"
        assert data["error_number"] == 3002
        assert data["category"] == "Provider"
        assert data["context"] == {"provider_id": "bad name"}

    def test_provider_subclasses(self):
        assert isinstance(ProviderValidationError("x"), ProviderError)
        assert isinstance(ProviderAlreadyPresentError("cpm-x"), ProviderError)

        install_error = ProviderInstallError("@acme/cpm-x", "acme-cpm-x")
        assert install_error.package == "acme-cpm-x"
        assert "acme-cpm-x" in install_error.message

    def test_passcode_mismatch_is_setting_error(self):
        error = PasscodeMismatchError()
        assert isinstance(error, SettingError)
        assert error.error_code is ErrorCode.PASSCODE_MISMATCH


@pytest.mark.unit
class TestHandleError:
    """handle_error 테스트"""

    def test_maps_to_category_class(self):
        error = handle_error(ErrorCode.CONFIG_PARSE_FAILED, file_path="/x", error="bad json")
        assert isinstance(error, ConfigError)

        error = handle_error(ErrorCode.PROVIDER_INTERFACE_MISSING, module="cpm_foo")
        assert isinstance(error, ProviderError)

        error = handle_error(ErrorCode.NAMESPACE_INVALID, namespace="", reason="empty")
        assert isinstance(error, SettingError)

    def test_unmapped_code_uses_base_class(self):
        error = handle_error(ErrorCode.UNKNOWN_ERROR, log=False, error="?")
        assert type(error) is CpmError

    def test_returns_without_raising(self):
        original = ValueError("boom")
        error = handle_error(ErrorCode.CONFIG_IO_FAILED, original_error=original, file_path="/x")

        assert error.original_error is original
