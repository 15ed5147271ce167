"""
패스코드 관리 Use Case

변경/삭제는 현재 패스코드 확인이 필요합니다.
"""

from typing import Optional

from ...domain.errors import PasscodeMismatchError
from ...domain.models import ConfigDocument
from ...infrastructure.logging import get_logger

logger = get_logger(__name__, component="PasscodeManagement")


def has_passcode(doc: ConfigDocument) -> bool:
    return bool(doc.get("passcode"))


def verify_passcode(doc: ConfigDocument, current: Optional[str]) -> None:
    """
    현재 패스코드 확인

    Raises:
        PasscodeMismatchError: 불일치
    """
    if not current or current != doc.get("passcode"):
        logger.warning("Passcode verification failed")
        raise PasscodeMismatchError()


def set_passcode(doc: ConfigDocument, new: str) -> bool:
    """
    패스코드 최초 설정 (이미 있으면 현재 값 확인이 필요하므로 change_passcode 사용)

    Args:
        doc: 설정 문서
        new: 새 패스코드 (빈 값이면 변경 없음)

    Returns:
        설정되었으면 True

    Raises:
        PasscodeMismatchError: 이미 패스코드가 있는 경우
    """
    if has_passcode(doc):
        raise PasscodeMismatchError()
    if not new:
        return False
    doc["passcode"] = new
    logger.info("Passcode set")
    return True


def change_passcode(doc: ConfigDocument, current: str, new: str) -> bool:
    """
    패스코드 변경

    Returns:
        변경되었으면 True (new가 비면 False)

    Raises:
        PasscodeMismatchError: current 불일치
    """
    verify_passcode(doc, current)
    if not new:
        return False
    doc["passcode"] = new
    logger.info("Passcode changed")
    return True


def clear_passcode(doc: ConfigDocument, current: str) -> None:
    """
    패스코드 삭제

    Raises:
        PasscodeMismatchError: current 불일치
    """
    verify_passcode(doc, current)
    doc["passcode"] = None
    logger.info("Passcode cleared")
