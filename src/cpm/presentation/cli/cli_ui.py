"""
CLI 렌더링 유틸리티

ConfigRenderer: 프로바이더/버전 표 출력
ErrorDisplay: 치명적 오류 진단 패널
"""

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...domain.errors import CpmError


class ConfigRenderer:
    """설정/버전 정보 표 렌더러"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_header(self, title: str, subtitle: Optional[str] = None) -> None:
        content = f"[bold cyan]{title}[/bold cyan]"
        if subtitle:
            content += f"\n[dim]{subtitle}[/dim]"
        self.console.print(Panel(content, border_style="cyan", box=box.ROUNDED))

    def print_providers_table(self, rows: List[Dict[str, Any]]) -> None:
        """
        프로바이더 목록 표 출력

        Args:
            rows: {"id", "loaded", "registry", "error"} 딕셔너리 목록
        """
        table = Table(title=f"프로바이더 (총 {len(rows)}개)", box=box.ROUNDED)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("상태", style="green")
        table.add_column("레지스트리", style="magenta")
        table.add_column("오류", style="red")

        for row in rows:
            status = "[green]loaded[/green]" if row.get("loaded") else "[red]not loaded[/red]"
            table.add_row(
                escape(row["id"]),
                status,
                escape(row.get("registry") or "-"),
                escape(row.get("error") or "-"),
            )

        self.console.print(table)

    def print_versions_table(self, versions: Dict[str, str]) -> None:
        table = Table(title="버전 정보", box=box.ROUNDED)
        table.add_column("이름", style="cyan", no_wrap=True)
        table.add_column("버전", style="green")
        for name, version in versions.items():
            table.add_row(escape(name), escape(str(version)))
        self.console.print(table)


class ErrorDisplay:
    """
    오류 진단 출력

    CpmError는 에러 코드와 메시지를, 그 외 예외는 타입과 메시지를 표시합니다.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def show_error(
        self,
        error: BaseException,
        traceback: Optional[str] = None
    ) -> None:
        if isinstance(error, CpmError):
            header = f"[bold red]{error.error_code.name}[/] ({error.error_code.code})"
            message = error.message
        else:
            header = f"[bold red]{type(error).__name__}[/]"
            message = str(error)

        content = f"{header}: {escape(message)}"
        if isinstance(error, CpmError) and error.original_error is not None:
            content += f"\n\n[dim]{escape(repr(error.original_error))}[/dim]"
        if traceback:
            content += f"\n\n[dim]Traceback:[/]\n{escape(traceback)}"

        self.console.print(
            Panel(content, title="[bold red]Error[/]", border_style="red", box=box.ROUNDED)
        )
