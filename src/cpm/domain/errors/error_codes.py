"""에러 코드 정의

cpm의 모든 에러를 카테고리별로 분류하여 관리합니다.
"""

from enum import Enum


class ErrorCode(Enum):
    """cpm 에러 코드

    에러 코드는 4자리 숫자로 구성되며, 앞 두 자리는 카테고리를 나타냅니다.

    Categories:
        20xx: Config 관련 에러
        30xx: Provider 관련 에러
        40xx: Setting 관련 에러
        90xx: 기타 에러
    """

    # ==================== Config 관련 (2000-2999) ====================
    CONFIG_IO_FAILED = 2001
    """설정 파일 읽기/쓰기 실패 (파일 없음 제외)"""

    CONFIG_PARSE_FAILED = 2002
    """설정 파일 JSON 파싱 실패"""

    # ==================== Provider 관련 (3000-3999) ====================
    PROVIDER_LOAD_FAILED = 3001
    """프로바이더 모듈 로드 실패"""

    PROVIDER_INVALID_ID = 3002
    """프로바이더 식별자 형식 오류"""

    PROVIDER_ALREADY_PRESENT = 3003
    """이미 등록된 프로바이더"""

    PROVIDER_INSTALL_FAILED = 3004
    """프로바이더 패키지 설치 실패"""

    PROVIDER_INTERFACE_MISSING = 3005
    """모듈이 provider 객체를 노출하지 않음"""

    # ==================== Setting 관련 (4000-4999) ====================
    SETTING_CHANGE_REJECTED = 4001
    """프로바이더 콜백이 설정 변경을 거부함"""

    NAMESPACE_INVALID = 4101
    """유효하지 않거나 중복된 네임스페이스"""

    PASSCODE_MISMATCH = 4201
    """현재 패스코드 불일치"""

    # ==================== 기타 (9000-9999) ====================
    UNKNOWN_ERROR = 9001
    """알 수 없는 에러"""

    def __str__(self) -> str:
        """에러 코드를 문자열로 반환 (예: 'CONFIG_IO_FAILED (2001)')"""
        return f"{self.name} ({self.value})"

    @property
    def code(self) -> int:
        """에러 코드 숫자 반환"""
        return self.value

    @property
    def category(self) -> str:
        """에러 카테고리 반환"""
        code = self.value
        if 2000 <= code < 3000:
            return "Config"
        elif 3000 <= code < 4000:
            return "Provider"
        elif 4000 <= code < 5000:
            return "Setting"
        else:
            return "Other"
