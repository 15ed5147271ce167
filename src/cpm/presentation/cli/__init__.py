"""
CLI Presentation

click 명령과 rich 기반 설정 메뉴
"""

from .main import cli, main, CliContext
from .config_menu import ConfigMenu, MenuIO
from .feedback import FeedbackMessage, FeedbackType

__all__ = [
    "cli",
    "main",
    "CliContext",
    "ConfigMenu",
    "MenuIO",
    "FeedbackMessage",
    "FeedbackType",
]
