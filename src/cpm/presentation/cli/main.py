"""
cpm CLI 진입점

Examples:
    cpm --config                      # 대화형 설정 메뉴
    cpm --dumpconfig                  # 설정 문서 출력
    cpm install provider cpm-foo      # 프로바이더 추가 (pip 설치 포함)
    cpm uninstall provider cpm-foo    # 프로바이더 삭제
    cpm install left-pad              # 모든 프로바이더에 install 전달
    cpm version                       # 버전 정보
"""

import asyncio
import json
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.traceback import install as install_rich_traceback

from ...application.use_cases import CommandDispatcher, collect_versions
from ...domain.errors import CpmError, ProviderAlreadyPresentError, ProviderError
from ...domain.models import ConfigDocument, ProviderCommand, is_valid_provider_id
from ...infrastructure.config import JsonConfigStore, get_config_path, load_environment
from ...infrastructure.logging import get_logger, tracked_errors
from ...infrastructure.providers import PipInstaller, ProviderRegistry
from .cli_ui import ConfigRenderer, ErrorDisplay
from .config_menu import ConfigMenu, MenuIO
from .feedback import FeedbackMessage
from .utils import setup_logging

logger = get_logger(__name__, component="CLI")

FAREWELL = "cpm을 종료합니다"


def confirm_reset(path: Path) -> bool:
    """손상된 설정 파일 백업/초기화 여부 확인"""
    return Confirm.ask(
        f"[yellow]설정 파일 '{path}'을 읽을 수 없습니다. "
        f"백업(.bak) 후 기본 설정으로 초기화할까요?[/yellow]",
        default=False
    )


class CliContext:
    """
    명령 실행 컨텍스트

    설정 저장소, 프로바이더 레지스트리, 디스패처를 한 번만 생성해 공유합니다.
    테스트에서는 레지스트리나 콘솔을 주입할 수 있습니다.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        registry: Optional[ProviderRegistry] = None,
        console: Optional[Console] = None,
        verbose: bool = False
    ):
        self.config_path = config_path
        self.registry = registry
        self.console = console or Console()
        self.verbose = verbose
        self._store: Optional[JsonConfigStore] = None

    @property
    def store(self) -> JsonConfigStore:
        if self._store is None:
            self._store = JsonConfigStore(self.config_path, confirm_reset=confirm_reset)
        return self._store

    def get_registry(self) -> ProviderRegistry:
        if self.registry is None:
            self.registry = ProviderRegistry(installer=PipInstaller())
        return self.registry

    @property
    def feedback(self) -> FeedbackMessage:
        return FeedbackMessage(self.console)

    def load(self) -> ConfigDocument:
        return self.store.load()


@click.group(invoke_without_command=True)
@click.option("--config", "-c", "open_menu", is_flag=True, help="대화형 설정 메뉴 열기")
@click.option("--dumpconfig", is_flag=True, help="설정 문서를 JSON으로 출력")
@click.option(
    "--config-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="설정 파일 경로 (기본: ~/.cpm-config.json 또는 CPM_CONFIG_PATH)"
)
@click.option("--verbose", is_flag=True, help="상세 로깅 활성화 (콘솔 출력 포함)")
@click.pass_context
def cli(
    ctx: click.Context,
    open_menu: bool,
    dumpconfig: bool,
    config_path: Optional[Path],
    verbose: bool
):
    """
    cpm - 프로바이더 기반 패키지 매니저

    패키지 작업을 설정된 프로바이더(GitHub, npm 등)에 순서대로 위임합니다.
    """
    load_environment()
    setup_logging(verbose)

    if not isinstance(ctx.obj, CliContext):
        ctx.obj = CliContext()
    context: CliContext = ctx.obj
    context.verbose = context.verbose or verbose
    if config_path is not None:
        context.config_path = config_path
    elif context.config_path is None:
        context.config_path = get_config_path()

    if ctx.invoked_subcommand is not None:
        return

    if dumpconfig:
        doc = context.load()
        click.echo(json.dumps(doc, indent=2, ensure_ascii=False))
        return

    if open_menu:
        doc = context.load()
        menu = ConfigMenu(doc, context.store, context.get_registry(), io=MenuIO(context.console))
        asyncio.run(menu.run())
        return

    click.echo(ctx.get_help())


def _dispatch(context: CliContext, command: ProviderCommand, opts: Dict[str, Any]) -> List[str]:
    doc = context.load()
    dispatcher = CommandDispatcher(context.get_registry())
    invoked = asyncio.run(dispatcher.run_command(doc, command, opts))
    if not invoked:
        context.feedback.warning(f"'{command.value}' 명령을 처리한 프로바이더가 없습니다")
    return invoked


def _package_opts(package: Optional[str]) -> Dict[str, Any]:
    return {"package": package} if package else {}


@cli.command()
@click.argument("subject", required=False)
@click.argument("name", required=False)
@click.pass_obj
def install(context: CliContext, subject: Optional[str], name: Optional[str]):
    """
    패키지 설치 또는 프로바이더 추가

    \b
    cpm install [package]          모든 프로바이더에 install 전달
    cpm install provider <id>      프로바이더 패키지 설치 후 설정에 추가
    """
    if subject == "provider":
        if not name:
            raise click.UsageError("프로바이더 이름이 필요합니다: cpm install provider <id>")
        _install_provider(context, name)
        return
    _dispatch(context, ProviderCommand.INSTALL, _package_opts(subject))


def _install_provider(context: CliContext, provider_id: str) -> None:
    doc = context.load()
    registry = context.get_registry()
    try:
        result = registry.add_provider(doc, provider_id)
    except ProviderAlreadyPresentError as e:
        context.feedback.warning(e.message)
        return
    except ProviderError as e:
        context.feedback.error(e.message)
        sys.exit(1)

    registry.cleanup(doc)
    context.store.save(doc)
    details = f"설치한 패키지: {result.package}" if result.package else None
    context.feedback.success(f"프로바이더 '{provider_id}'를 설정에 추가했습니다", details=details)


@cli.command()
@click.argument("subject", required=False)
@click.argument("name", required=False)
@click.option("--yes", "-y", is_flag=True, help="확인 없이 삭제")
@click.pass_obj
def uninstall(context: CliContext, subject: Optional[str], name: Optional[str], yes: bool):
    """
    패키지 제거 또는 프로바이더 삭제

    \b
    cpm uninstall [package]             모든 프로바이더에 uninstall 전달
    cpm uninstall provider <id> [--yes] 설정에서 프로바이더 삭제
    """
    if subject == "provider":
        if not name:
            raise click.UsageError("프로바이더 이름이 필요합니다: cpm uninstall provider <id>")
        _uninstall_provider(context, name, yes)
        return
    _dispatch(context, ProviderCommand.UNINSTALL, _package_opts(subject))


def _uninstall_provider(context: CliContext, provider_id: str, yes: bool) -> None:
    doc = context.load()
    if provider_id not in (doc.get("providers") or []):
        context.feedback.warning(f"프로바이더 '{provider_id}'는 설정에 없습니다")
        return

    if not yes and not Confirm.ask(
        f"프로바이더 '{provider_id}'를 설정에서 삭제할까요?",
        default=False,
        console=context.console
    ):
        return

    registry = context.get_registry()
    if registry.remove_provider(doc, provider_id):
        registry.cleanup(doc)
        context.store.save(doc)
        context.feedback.success(f"프로바이더 '{provider_id}'를 삭제했습니다")


@cli.command()
@click.argument("package", required=False)
@click.pass_obj
def publish(context: CliContext, package: Optional[str]):
    """모든 프로바이더에 publish 전달"""
    _dispatch(context, ProviderCommand.PUBLISH, _package_opts(package))


@cli.command()
@click.argument("package", required=False)
@click.pass_obj
def unpublish(context: CliContext, package: Optional[str]):
    """모든 프로바이더에 unpublish 전달"""
    _dispatch(context, ProviderCommand.UNPUBLISH, _package_opts(package))


@cli.command()
@click.argument("package", required=False)
@click.pass_obj
def update(context: CliContext, package: Optional[str]):
    """모든 프로바이더에 update 전달"""
    _dispatch(context, ProviderCommand.UPDATE, _package_opts(package))


@cli.command()
@click.argument("package", required=False)
@click.pass_obj
def init(context: CliContext, package: Optional[str]):
    """모든 프로바이더에 init 전달"""
    _dispatch(context, ProviderCommand.INIT, _package_opts(package))


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="JSON으로 출력")
@click.pass_obj
def version(context: CliContext, as_json: bool):
    """cpm, 프로바이더, pip, python 버전 출력"""
    doc = context.load()
    versions = collect_versions(doc, context.get_registry(), pip_version=PipInstaller().pip_version)
    if as_json:
        click.echo(json.dumps(versions, indent=2, ensure_ascii=False))
    else:
        ConfigRenderer(context.console).print_versions_table(versions)


@cli.command(name="providers")
@click.pass_obj
def list_providers(context: CliContext):
    """설정된 프로바이더와 로드 상태 출력 (로드 실패 시 원인 포함)"""
    doc = context.load()
    loaded = {item.id: item.provider for item in context.get_registry().resolve(doc)}
    rows = []
    for provider_id in doc.get("providers") or []:
        if not is_valid_provider_id(provider_id):
            rows.append({"id": repr(provider_id), "loaded": False, "error": "잘못된 식별자"})
            continue
        provider = loaded.get(provider_id)
        faults = tracked_errors("provider_load", provider_id=provider_id)
        rows.append({
            "id": provider_id,
            "loaded": provider is not None,
            "registry": provider.registry() if provider is not None else None,
            "error": f"{faults[-1].error_type}: {faults[-1].message}" if faults and provider is None else None,
        })
    ConfigRenderer(context.console).print_providers_table(rows)


def main(argv: Optional[List[str]] = None) -> None:
    """
    console script 진입점

    - Ctrl+C / EOF / click.Abort: 안내 메시지 후 종료 코드 0
    - 설정 로드/저장 실패, 프로바이더 명령 실패: 진단 출력 후 종료 코드 1
    """
    install_rich_traceback(show_locals=False)
    verbose = "--verbose" in (argv if argv is not None else sys.argv[1:])

    try:
        exit_code = cli.main(args=argv, prog_name="cpm", standalone_mode=False)
    except (KeyboardInterrupt, EOFError, click.Abort):
        FeedbackMessage().warning(FAREWELL)
        sys.exit(0)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except CpmError as e:
        logger.error("Command failed", **e.to_dict())
        ErrorDisplay().show_error(e, traceback=traceback.format_exc() if verbose else None)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected error", error_type=type(e).__name__, error=str(e), exc_info=True)
        ErrorDisplay().show_error(e, traceback=traceback.format_exc() if verbose else None)
        sys.exit(1)

    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
