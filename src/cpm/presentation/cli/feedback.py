"""
사용자 피드백 메시지

Rich 라이브러리로 성공/경고/오류/정보 메시지를 한 줄 또는 패널로 출력합니다.
"""

from enum import Enum
from typing import Optional

from rich.console import Console
from rich.panel import Panel


class FeedbackType(Enum):
    """피드백 메시지 타입"""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class FeedbackMessage:
    """
    피드백 메시지 출력

    Attributes:
        console: Rich Console 인스턴스
    """

    ICONS = {
        FeedbackType.SUCCESS: "✓",
        FeedbackType.WARNING: "⚠",
        FeedbackType.ERROR: "✗",
        FeedbackType.INFO: "ℹ",
    }

    COLORS = {
        FeedbackType.SUCCESS: "green",
        FeedbackType.WARNING: "yellow",
        FeedbackType.ERROR: "red",
        FeedbackType.INFO: "blue",
    }

    TITLES = {
        FeedbackType.SUCCESS: "성공",
        FeedbackType.WARNING: "경고",
        FeedbackType.ERROR: "오류",
        FeedbackType.INFO: "정보",
    }

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show(
        self,
        message: str,
        feedback_type: FeedbackType = FeedbackType.INFO,
        title: Optional[str] = None,
        details: Optional[str] = None,
        use_panel: bool = False
    ) -> None:
        """
        피드백 메시지 출력

        Args:
            message: 메시지 내용
            feedback_type: 피드백 타입
            title: 패널 타이틀 (없으면 타입별 기본값)
            details: 추가 상세 정보
            use_panel: Panel 사용 여부 (기본은 한 줄 출력)
        """
        icon = self.ICONS[feedback_type]
        color = self.COLORS[feedback_type]

        content = f"{icon} {message}"
        if details:
            content += f"\n[dim]{details}[/dim]"

        if use_panel:
            title = title or self.TITLES[feedback_type]
            self.console.print(
                Panel(content, title=f"[bold {color}]{title}[/bold {color}]", border_style=color)
            )
        else:
            self.console.print(f"[{color}]{content}[/{color}]")

    def success(self, message: str, **kwargs) -> None:
        self.show(message, FeedbackType.SUCCESS, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.show(message, FeedbackType.WARNING, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.show(message, FeedbackType.ERROR, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.show(message, FeedbackType.INFO, **kwargs)
