"""
구조화된 로깅 인프라

structlog 기반 로깅 시스템
"""

from .structured_logger import configure_structlog, get_logger
from .error_tracker import TrackedError, reset_tracked_errors, track_error, tracked_errors

__all__ = [
    "configure_structlog",
    "get_logger",
    "TrackedError",
    "track_error",
    "tracked_errors",
    "reset_tracked_errors",
]
