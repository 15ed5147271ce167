"""에러 핸들러

cpm의 커스텀 예외 클래스 및 에러 처리 유틸리티를 제공합니다.
"""

from typing import Optional, Dict, Any
from .error_codes import ErrorCode
from .error_messages import format_error_message


class CpmError(Exception):
    """cpm의 기본 예외 클래스

    모든 cpm 커스텀 예외는 이 클래스를 상속합니다.

    Attributes:
        error_code: 에러 코드
        message: 에러 메시지
        context: 추가 컨텍스트 정보
        original_error: 원본 예외 (있는 경우)

    Examples:
        >>> raise ConfigError(
        ...     ErrorCode.CONFIG_IO_FAILED,
        ...     file_path="~/.cpm-config.json",
        ...     error="Permission denied"
        ... )
    """

    def __init__(
        self,
        error_code: ErrorCode,
        original_error: Optional[Exception] = None,
        **context: Any
    ):
        """에러 초기화

        Args:
            error_code: 에러 코드
            original_error: 원본 예외 (선택)
            **context: 에러 메시지에 포함할 컨텍스트 정보
        """
        self.error_code = error_code
        self.context = context
        self.original_error = original_error

        # 원본 에러가 있으면 context에 추가
        if original_error is not None and "error" not in self.context:
            self.context["error"] = str(original_error)

        self.message = format_error_message(error_code, **self.context)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """에러를 딕셔너리로 변환 (로깅용)

        Returns:
            에러 정보를 담은 딕셔너리
        """
        return {
            "error_code": self.error_code.name,
            "error_number": self.error_code.value,
            "category": self.error_code.category,
            "message": self.message,
            "context": self.context,
        }

    def __str__(self) -> str:
        """에러를 문자열로 반환"""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """에러의 상세 표현 반환"""
        return (
            f"{type(self).__name__}("
            f"error_code={self.error_code.name}, "
            f"message='{self.message}', "
            f"context={self.context})"
        )


# 카테고리별 예외 클래스
class ConfigError(CpmError):
    """Config 관련 에러 (I/O, 파싱)"""
    pass


class ProviderError(CpmError):
    """Provider 관련 에러"""
    pass


class ProviderValidationError(ProviderError):
    """프로바이더 식별자 형식 오류"""

    def __init__(self, provider_id: str):
        super().__init__(ErrorCode.PROVIDER_INVALID_ID, provider_id=provider_id)
        self.provider_id = provider_id


class ProviderAlreadyPresentError(ProviderError):
    """이미 등록된 프로바이더"""

    def __init__(self, provider_id: str):
        super().__init__(ErrorCode.PROVIDER_ALREADY_PRESENT, provider_id=provider_id)
        self.provider_id = provider_id


class ProviderInstallError(ProviderError):
    """프로바이더 패키지 설치 실패"""

    def __init__(self, provider_id: str, package: str):
        super().__init__(
            ErrorCode.PROVIDER_INSTALL_FAILED,
            provider_id=provider_id,
            package=package
        )
        self.provider_id = provider_id
        self.package = package


class SettingError(CpmError):
    """Setting/Namespace/Passcode 관련 에러"""
    pass


class PasscodeMismatchError(SettingError):
    """현재 패스코드 불일치"""

    def __init__(self):
        super().__init__(ErrorCode.PASSCODE_MISMATCH)


# 에러 코드별 예외 클래스 매핑
ERROR_CLASS_MAPPING: Dict[ErrorCode, type] = {
    ErrorCode.CONFIG_IO_FAILED: ConfigError,
    ErrorCode.CONFIG_PARSE_FAILED: ConfigError,
    ErrorCode.PROVIDER_LOAD_FAILED: ProviderError,
    ErrorCode.PROVIDER_INTERFACE_MISSING: ProviderError,
    ErrorCode.SETTING_CHANGE_REJECTED: SettingError,
    ErrorCode.NAMESPACE_INVALID: SettingError,
}


def handle_error(
    error_code: ErrorCode,
    original_error: Optional[Exception] = None,
    log: bool = True,
    **context: Any
) -> CpmError:
    """에러를 처리하고 적절한 예외를 반환

    Args:
        error_code: 에러 코드
        original_error: 원본 예외 (선택)
        log: 로깅 여부 (기본: True)
        **context: 에러 컨텍스트 정보

    Returns:
        적절한 CpmError 서브클래스 인스턴스

    Examples:
        >>> try:
        ...     path.read_text()
        ... except OSError as e:
        ...     raise handle_error(
        ...         ErrorCode.CONFIG_IO_FAILED,
        ...         original_error=e,
        ...         file_path=str(path)
        ...     )
    """
    error_class = ERROR_CLASS_MAPPING.get(error_code, CpmError)

    exception = error_class(
        error_code=error_code,
        original_error=original_error,
        **context
    )

    if log:
        # 순환 import 방지를 위해 여기서 import
        from ...infrastructure.logging import get_logger
        logger = get_logger(__name__)

        # 에러 레벨에 따라 다르게 로깅
        if error_code.value >= 9000:
            logger.critical(
                exception.message,
                error_code=error_code.name,
                **context,
                exc_info=original_error
            )
        elif error_code.value < 3000:
            logger.error(
                exception.message,
                error_code=error_code.name,
                **context,
                exc_info=original_error
            )
        else:
            logger.warning(
                exception.message,
                error_code=error_code.name,
                **context
            )

    return exception
