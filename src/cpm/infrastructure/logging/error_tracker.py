"""
복구 가능한 오류 기록

프로바이더 로드 실패, 네임스페이스 초기값 채우기 실패처럼 건너뛰고 계속 진행하는
오류를 로그에 남기고, 같은 프로세스 안에서 다시 조회할 수 있도록 보관합니다.
`cpm providers`는 이 기록으로 로드되지 않은 프로바이더의 원인을 보여 줍니다.
"""

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from .structured_logger import get_logger

logger = get_logger(__name__, component="ErrorTracker")

MAX_TRACKED_ERRORS = 100

_tracked: Deque["TrackedError"] = deque(maxlen=MAX_TRACKED_ERRORS)
_tracked_lock = threading.Lock()


@dataclass(frozen=True)
class TrackedError:
    """
    건너뛴 오류 한 건

    Attributes:
        context: 발생 지점 (예: "provider_load", "namespace_seed")
        error_type: 예외 클래스 이름
        message: 예외 메시지
        metadata: provider_id 등 추가 정보
    """
    context: str
    error_type: str
    message: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


def track_error(error: Exception, context: str, **metadata: Any) -> TrackedError:
    """
    오류를 기록하고 traceback과 함께 로그에 남김

    Args:
        error: 발생한 예외
        context: 발생 지점
        **metadata: 추가 정보 (provider_id 등)

    Returns:
        기록된 TrackedError
    """
    record = TrackedError(
        context=context,
        error_type=type(error).__name__,
        message=str(error),
        metadata=dict(metadata),
    )
    with _tracked_lock:
        _tracked.append(record)

    logger.error(
        "Error tracked",
        error_type=record.error_type,
        error_message=record.message,
        context=context,
        **metadata,
        exc_info=(type(error), error, error.__traceback__)
    )
    return record


def tracked_errors(context: Optional[str] = None, **match: Any) -> List[TrackedError]:
    """
    기록된 오류 조회 (오래된 순)

    Args:
        context: 발생 지점 필터 (None이면 전체)
        **match: metadata 값이 모두 일치하는 기록만 (예: provider_id="cpm-foo")

    Returns:
        TrackedError 목록
    """
    with _tracked_lock:
        records = list(_tracked)
    return [
        record for record in records
        if (context is None or record.context == context)
        and all(record.metadata.get(key) == value for key, value in match.items())
    ]


def reset_tracked_errors() -> None:
    with _tracked_lock:
        _tracked.clear()
