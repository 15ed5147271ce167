"""에러 메시지 템플릿

각 에러 코드에 대한 사용자 친화적인 메시지를 제공합니다.
"""

from typing import Dict, Any
from .error_codes import ErrorCode


# 에러 코드별 메시지 템플릿
ERROR_MESSAGES: Dict[ErrorCode, str] = {
    # Config 관련
    ErrorCode.CONFIG_IO_FAILED: (
        "설정 파일 '{file_path}'에 접근할 수 없습니다: {error}"
    ),
    ErrorCode.CONFIG_PARSE_FAILED: (
        "설정 파일 '{file_path}'의 형식이 올바르지 않습니다: {error}"
    ),
    # Provider 관련
    ErrorCode.PROVIDER_LOAD_FAILED: (
        "프로바이더 '{provider_id}'를 로드할 수 없습니다: {error}"
    ),
    ErrorCode.PROVIDER_INVALID_ID: (
        "프로바이더 이름 '{provider_id}'가 올바르지 않습니다. "
        "'cpm-<name>' 또는 '@scope/cpm-<name>' 형식이어야 합니다."
    ),
    ErrorCode.PROVIDER_ALREADY_PRESENT: (
        "프로바이더 '{provider_id}'는 이미 설정에 등록되어 있습니다."
    ),
    ErrorCode.PROVIDER_INSTALL_FAILED: (
        "프로바이더 패키지 '{package}' 설치에 실패했습니다. "
        "패키지 이름을 확인하고 다시 시도하세요."
    ),
    ErrorCode.PROVIDER_INTERFACE_MISSING: (
        "모듈 '{module}'에 'provider' 객체가 없습니다."
    ),
    # Setting 관련
    ErrorCode.SETTING_CHANGE_REJECTED: (
        "프로바이더가 '{key}' 설정 변경을 거부했습니다."
    ),
    ErrorCode.NAMESPACE_INVALID: (
        "네임스페이스 '{namespace}'를 사용할 수 없습니다: {reason}"
    ),
    ErrorCode.PASSCODE_MISMATCH: (
        "현재 패스코드가 일치하지 않습니다."
    ),
    # 기타
    ErrorCode.UNKNOWN_ERROR: (
        "알 수 없는 오류가 발생했습니다: {error}"
    ),
}


def get_error_message(error_code: ErrorCode) -> str:
    """에러 코드에 해당하는 메시지 템플릿 반환

    Args:
        error_code: 에러 코드

    Returns:
        메시지 템플릿 (없으면 기본 메시지)
    """
    return ERROR_MESSAGES.get(error_code, "알 수 없는 오류가 발생했습니다.")


def format_error_message(error_code: ErrorCode, **context: Any) -> str:
    """에러 메시지 템플릿에 컨텍스트를 채워 반환

    누락된 키가 있으면 템플릿 원문에 컨텍스트를 덧붙여 반환합니다.

    Args:
        error_code: 에러 코드
        **context: 템플릿 변수

    Returns:
        포맷팅된 에러 메시지

    Examples:
        >>> format_error_message(ErrorCode.PROVIDER_INVALID_ID, provider_id="bad name")
        "프로바이더 이름 'bad name'가 올바르지 않습니다. ..."
    """
    template = get_error_message(error_code)
    try:
        return template.format(**context)
    except KeyError:
        if context:
            details = ", ".join(f"{k}={v}" for k, v in context.items())
            return f"{template} ({details})"
        return template
