"""
대화형 설정 메뉴

메뉴 구성:
- Main: Passcode / Global Settings / Namespaces / Providers / Exit
- Passcode: 설정, 또는 변경/삭제 (현재 패스코드 확인 필요)
- Provider 목록: 범위(global 또는 네임스페이스)별 프로바이더 선택
- Provider 설정: 토큰 입력, boolean 설정 순환
- Namespaces: 네임스페이스 추가/선택/삭제
- Providers: 내장/외부 프로바이더 추가, 삭제(확인 후)

모든 하위 메뉴는 Back으로 상위 메뉴에 돌아가며, Exit만 메뉴를 종료합니다.
변경이 생길 때마다 cleanup 후 설정 파일 전체를 저장합니다.
"""

from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from ...application.ports import IConfigStore
from ...application.use_cases import (
    add_namespace,
    change_passcode,
    clear_passcode,
    has_passcode,
    remove_namespace,
    set_passcode,
    verify_passcode,
)
from ...domain.errors import (
    ErrorCode,
    PasscodeMismatchError,
    ProviderAlreadyPresentError,
    ProviderError,
    SettingError,
    format_error_message,
)
from ...domain.models import (
    ConfigDocument,
    GLOBAL_SCOPE,
    INHERIT,
    LoadedProvider,
    SettingDescriptor,
    decode_value,
    is_builtin_provider_id,
    is_valid_provider_id,
    scope_settings,
)
from ...domain.services.setting_resolver import resolve, set_secret, toggle_setting
from ...infrastructure.logging import get_logger
from ...infrastructure.providers import ProviderRegistry
from .cli_ui import ConfigRenderer
from .feedback import FeedbackMessage
from .utils import format_flag, mask_secret

logger = get_logger(__name__, component="ConfigMenu")

BACK = "back"
EXIT = "exit"

# (값, 표시 문자열)
Choice = Tuple[str, str]


class MenuIO:
    """
    rich 프롬프트 입출력

    테스트에서는 같은 메서드를 가진 객체로 교체합니다.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def select(self, title: str, choices: Sequence[Choice]) -> str:
        """번호 목록을 출력하고 선택된 값 반환"""
        self.console.print()
        self.console.print(f"[bold cyan]{title}[/bold cyan]")
        for index, (_, label) in enumerate(choices, 1):
            self.console.print(f"  [cyan]{index}.[/cyan] {label}")

        answer = Prompt.ask(
            "[bold green]선택[/bold green]",
            choices=[str(i) for i in range(1, len(choices) + 1)],
            show_choices=False,
            console=self.console
        )
        return choices[int(answer) - 1][0]

    def ask(self, message: str) -> str:
        return Prompt.ask(message, default="", show_default=False, console=self.console)

    def secret(self, message: str) -> str:
        return Prompt.ask(
            message,
            password=True,
            default="",
            show_default=False,
            console=self.console
        )

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)


class ConfigMenu:
    """
    설정 메뉴 상태 머신

    Attributes:
        doc: 설정 문서 (메뉴 동안 제자리 수정)
        store: 설정 저장소
        registry: 프로바이더 레지스트리
        io: 프롬프트 입출력
    """

    def __init__(
        self,
        doc: ConfigDocument,
        store: IConfigStore,
        registry: ProviderRegistry,
        io: Optional[MenuIO] = None
    ):
        self.doc = doc
        self.store = store
        self.registry = registry
        self.io = io or MenuIO()
        self.feedback = FeedbackMessage(self.io.console)

    def save(self) -> None:
        self.registry.cleanup(self.doc)
        self.store.save(self.doc)

    async def run(self) -> None:
        """메인 메뉴 (Exit 선택 시 종료)"""
        logger.info("Config menu opened")
        ConfigRenderer(self.io.console).print_header("cpm 설정", "변경 사항은 선택할 때마다 저장됩니다")
        while True:
            section = self.io.select("cpm 설정", [
                ("passcode", "Passcode"),
                ("global", "Global Settings"),
                ("namespaces", "Namespaces"),
                ("providers", "Providers"),
                (EXIT, "Exit"),
            ])
            if section == EXIT:
                logger.info("Config menu closed")
                return
            if section == "passcode":
                self.passcode_menu()
            elif section == "global":
                await self.provider_list_menu(GLOBAL_SCOPE)
            elif section == "namespaces":
                await self.namespace_list_menu()
            elif section == "providers":
                await self.providers_menu()

    # ==================== Passcode ====================

    def passcode_menu(self) -> None:
        while True:
            if has_passcode(self.doc):
                choices = [("change", "Change Passcode"), ("clear", "Clear Passcode")]
            else:
                choices = [("set", "Set Passcode")]
            action = self.io.select("Passcode", choices + [(BACK, "Back")])
            if action == BACK:
                return

            try:
                if action == "set":
                    if set_passcode(self.doc, self.io.secret("새 패스코드 (비우면 취소)")):
                        self.save()
                        self.feedback.success("패스코드가 설정되었습니다")
                    continue

                current = self.io.secret("현재 패스코드 (비우면 취소)")
                if not current:
                    continue

                if action == "change":
                    verify_passcode(self.doc, current)
                    if change_passcode(self.doc, current, self.io.secret("새 패스코드 (비우면 취소)")):
                        self.save()
                        self.feedback.success("패스코드가 변경되었습니다")
                elif action == "clear":
                    clear_passcode(self.doc, current)
                    self.save()
                    self.feedback.success("패스코드가 삭제되었습니다")
            except PasscodeMismatchError as e:
                self.feedback.error(e.message)

    # ==================== Provider 설정 ====================

    async def provider_list_menu(self, scope: str) -> None:
        """범위(global 또는 네임스페이스)의 프로바이더 선택"""
        label = scope_label(scope)
        loaded = self.registry.resolve(self.doc)
        if not loaded:
            self.feedback.warning(
                "로드된 프로바이더가 없습니다. providers 목록과 설치 상태를 확인하세요."
            )
            return

        while True:
            choices = [(item.id, escape(item.id)) for item in loaded]
            provider_id = self.io.select(f"{escape(label)} - 프로바이더 선택", choices + [(BACK, "Back")])
            if provider_id == BACK:
                return
            target = next(item for item in loaded if item.id == provider_id)
            await self.provider_settings_menu(scope, target)

    async def provider_settings_menu(self, scope: str, loaded: LoadedProvider) -> None:
        """프로바이더 설정 편집"""
        is_namespace = scope != GLOBAL_SCOPE
        header = f"{escape(scope_label(scope))} > {escape(loaded.id)}"

        while True:
            # cleanup이 빈 설정 객체를 지울 수 있으므로 매번 다시 조회
            settings = scope_settings(self.doc, scope, loaded.id, create=True)
            descriptors = self.registry.describe(loaded, settings)
            choices = [
                (d.key, self.describe_choice(scope, loaded.id, d, settings))
                for d in descriptors
            ]
            key = self.io.select(header, choices + [(BACK, "Back")])
            if key == BACK:
                return

            descriptor = next(d for d in descriptors if d.key == key)
            if descriptor.is_secret:
                set_secret(settings, key, self.io.secret(f"{descriptor.label} 입력 (비우면 삭제)"))
                self.save()
                self.feedback.success(f"{descriptor.label} 저장됨")
                continue

            result = await toggle_setting(
                settings,
                descriptor,
                is_namespace,
                doc=self.doc,
                scope=scope
            )
            if result.accepted:
                self.save()
            else:
                self.feedback.warning(
                    result.reason
                    or format_error_message(ErrorCode.SETTING_CHANGE_REJECTED, key=key)
                )

    def describe_choice(
        self,
        scope: str,
        provider_id: str,
        descriptor: SettingDescriptor,
        settings: dict
    ) -> str:
        """설정 항목 표시 문자열"""
        label = escape(descriptor.label)
        if descriptor.is_secret:
            return f"{label}: {mask_secret(settings.get(descriptor.key))}"

        raw = settings.get(descriptor.key)
        text = f"{label}: {format_flag(raw)}"
        if scope != GLOBAL_SCOPE and decode_value(raw) in (INHERIT, None):
            effective = resolve(self.doc, scope, provider_id, descriptor.key)
            text += f" [dim](global: {format_flag(effective)})[/dim]"
        if not descriptor.enabled and descriptor.help:
            text += f" [yellow](!)[/yellow] [dim]- {escape(descriptor.help)}[/dim]"
        return text

    # ==================== Namespaces ====================

    async def namespace_list_menu(self) -> None:
        while True:
            names = list(self.doc.get("namespaces") or {})
            choices: List[Choice] = [("add", "[green]+[/green] Add Namespace")]
            choices += [(f"ns:{name}", escape(name)) for name in names]
            if names:
                choices.append(("remove", "[red]-[/red] Remove Namespace"))
            choices.append((BACK, "Back"))

            action = self.io.select("Namespaces", choices)
            if action == BACK:
                return

            if action == "add":
                self.add_namespace()
            elif action == "remove":
                self.remove_namespace_menu(names)
            else:
                await self.provider_list_menu(action[len("ns:"):])

    def add_namespace(self) -> None:
        name = self.io.ask("새 네임스페이스 (@scope, 비우면 취소)")
        if not name:
            return
        try:
            add_namespace(self.doc, name, self.registry.resolve(self.doc))
        except SettingError as e:
            self.feedback.error(e.message)
            return
        self.save()
        self.feedback.success(f"네임스페이스 '{escape(name.strip())}' 추가됨")

    def remove_namespace_menu(self, names: List[str]) -> None:
        choices = [(name, escape(name)) for name in names]
        name = self.io.select("네임스페이스 삭제", choices + [(BACK, "Back")])
        if name == BACK:
            return
        if self.io.confirm(f"네임스페이스 '{escape(name)}'를 삭제할까요?", default=False):
            if remove_namespace(self.doc, name):
                self.save()
                self.feedback.success(f"네임스페이스 '{escape(name)}' 삭제됨")

    # ==================== Providers ====================

    async def providers_menu(self) -> None:
        while True:
            loaded = self.registry.resolve(self.doc)
            present = list(self.doc.get("providers") or [])
            prebuilt = [p for p in self.registry.available_builtins() if p not in present]

            choices: List[Choice] = [(f"provider:{item.id}", escape(item.id)) for item in loaded]
            choices += [
                (f"prebuilt:{provider_id}", f"[green]+[/green] Add Prebuilt: {escape(provider_id)}")
                for provider_id in prebuilt
            ]
            choices.append(("add-custom", "[green]+[/green] Add Custom Provider"))
            if present:
                choices.append(("remove", "[red]-[/red] Remove Provider"))
            choices.append((BACK, "Back"))

            action = self.io.select("Providers", choices)
            if action == BACK:
                return

            if action.startswith("provider:"):
                provider_id = action[len("provider:"):]
                target = next(item for item in loaded if item.id == provider_id)
                await self.provider_settings_menu(GLOBAL_SCOPE, target)
            elif action.startswith("prebuilt:"):
                self.add_provider(action[len("prebuilt:"):])
            elif action == "add-custom":
                provider_id = self.io.ask(
                    "프로바이더 패키지 이름 ('cpm-<name>' 또는 '@scope/cpm-<name>', 비우면 취소)"
                )
                if provider_id:
                    self.add_provider(provider_id.strip())
            elif action == "remove":
                self.remove_provider_menu()

    def add_provider(self, provider_id: str) -> None:
        if not is_builtin_provider_id(provider_id):
            self.feedback.info(f"'{escape(provider_id)}' 패키지 설치 중...")
        try:
            self.registry.add_provider(self.doc, provider_id)
        except ProviderAlreadyPresentError as e:
            self.feedback.warning(e.message)
            return
        except ProviderError as e:
            self.feedback.error(e.message)
            return
        self.save()
        self.feedback.success(f"프로바이더 '{escape(provider_id)}' 추가됨")

    def remove_provider_menu(self) -> None:
        while True:
            present = [p for p in self.doc.get("providers") or [] if is_valid_provider_id(p)]
            if not present:
                return
            choices = [(provider_id, escape(provider_id)) for provider_id in present]
            provider_id = self.io.select("프로바이더 삭제", choices + [(BACK, "Back")])
            if provider_id == BACK:
                return
            if self.io.confirm(f"프로바이더 '{escape(provider_id)}'를 설정에서 삭제할까요?", default=False):
                if self.registry.remove_provider(self.doc, provider_id):
                    self.save()
                    self.feedback.success(f"프로바이더 '{escape(provider_id)}' 삭제됨")


def scope_label(scope: str) -> str:
    return "Global Settings" if scope == GLOBAL_SCOPE else f"Namespace {scope}"
