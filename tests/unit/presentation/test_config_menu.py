"""
ConfigMenu 단위 테스트

프롬프트는 ScriptedIO로 대체하여 메뉴 흐름을 시나리오로 검증합니다.
"""

import io
import json
from collections import deque

import pytest
from rich.console import Console

from cpm.infrastructure.config import JsonConfigStore
from cpm.infrastructure.providers import ProviderRegistry
from cpm.presentation.cli import ConfigMenu
from cpm.presentation.cli.config_menu import BACK, EXIT

GITHUB = "@builtin/cpm-github"
NPM = "@builtin/cpm-npm"


class ScriptedIO:
    """미리 정한 응답을 순서대로 돌려주는 MenuIO 대체"""

    def __init__(self, selections=(), answers=(), secrets=(), confirms=()):
        self.console = Console(file=io.StringIO(), width=200)
        self.selections = deque(selections)
        self.answers = deque(answers)
        self.secrets = deque(secrets)
        self.confirms = deque(confirms)
        self.titles = []
        self.labels = []

    def select(self, title, choices):
        self.titles.append(title)
        self.labels.extend(choice[1] for choice in choices)
        value = self.selections.popleft()
        assert value in [choice[0] for choice in choices], f"{value!r} not offered in {title!r}"
        return value

    def ask(self, message):
        return self.answers.popleft()

    def secret(self, message):
        return self.secrets.popleft()

    def confirm(self, message, default=False):
        return self.confirms.popleft()

    @property
    def output(self):
        return self.console.file.getvalue()


@pytest.fixture
def store(config_path):
    return JsonConfigStore(config_path)


@pytest.fixture
def registry():
    return ProviderRegistry(installer=None)


def saved(store):
    return json.loads(store.config_path.read_text(encoding="utf-8"))


async def run_menu(document, store, registry, scripted):
    menu = ConfigMenu(document, store, registry, io=scripted)
    await menu.run()
    assert not scripted.selections, "unused selections"
    return menu


@pytest.mark.unit
class TestMainMenu:
    """메인 메뉴 테스트"""

    @pytest.mark.asyncio
    async def test_exit_without_changes(self, document, store, registry):
        scripted = ScriptedIO(selections=[EXIT])

        await run_menu(document, store, registry, scripted)

        assert not store.config_path.exists()
        assert scripted.titles == ["cpm 설정"]

    @pytest.mark.asyncio
    async def test_back_returns_to_main_menu(self, document, store, registry):
        scripted = ScriptedIO(selections=["namespaces", BACK, "providers", BACK, EXIT])

        await run_menu(document, store, registry, scripted)

        assert scripted.titles == ["cpm 설정", "Namespaces", "cpm 설정", "Providers", "cpm 설정"]

    @pytest.mark.asyncio
    async def test_global_settings_without_providers(self, store, registry):
        doc = {"passcode": None, "global": {}, "namespaces": {}, "providers": []}
        scripted = ScriptedIO(selections=["global", EXIT])

        await run_menu(doc, store, registry, scripted)

        assert "로드된 프로바이더가 없습니다" in scripted.output


@pytest.mark.unit
class TestProviderSettings:
    """프로바이더 설정 편집 테스트"""

    @pytest.mark.asyncio
    async def test_toggle_and_rejection_without_token(self, document, store, registry):
        """토큰 없이 publish 끄기는 허용, 다시 켜기는 거부"""
        scripted = ScriptedIO(selections=[
            "global", GITHUB, "publish", "publish", BACK, BACK, EXIT,
        ])

        await run_menu(document, store, registry, scripted)

        assert document["global"][GITHUB]["publish"] is False
        assert saved(store)["global"][GITHUB]["publish"] is False
        assert "A token is required to enable publishing." in scripted.output

    @pytest.mark.asyncio
    async def test_set_token_then_enable_releases(self, document, store, registry):
        scripted = ScriptedIO(
            selections=["global", GITHUB, "token", "releases", BACK, BACK, EXIT],
            secrets=["ghp_secret"],
        )

        await run_menu(document, store, registry, scripted)

        assert saved(store)["global"][GITHUB]["token"] == "ghp_secret"
        assert saved(store)["global"][GITHUB]["releases"] is True
        assert "ghp_secret" not in scripted.output

    @pytest.mark.asyncio
    async def test_empty_token_clears_value(self, document, store, registry):
        document["global"][GITHUB]["token"] = "old"
        scripted = ScriptedIO(
            selections=["providers", f"provider:{GITHUB}", "token", BACK, BACK, EXIT],
            secrets=[""],
        )

        await run_menu(document, store, registry, scripted)

        assert saved(store)["global"][GITHUB]["token"] is None

    @pytest.mark.asyncio
    async def test_non_dict_settings_replaced_when_edited(self, document, store, registry):
        """손으로 고친 설정의 true 값은 빈 설정 객체로 교체"""
        document["global"][GITHUB] = True
        scripted = ScriptedIO(
            selections=["global", GITHUB, "token", BACK, BACK, EXIT],
            secrets=["ghp_secret"],
        )

        await run_menu(document, store, registry, scripted)

        assert saved(store)["global"][GITHUB] == {"token": "ghp_secret"}

    @pytest.mark.asyncio
    async def test_namespace_toggle_cycles_to_inherit(self, document, store, registry):
        document["namespaces"]["@acme"] = {"providers": {GITHUB: {"publish": False}}}
        scripted = ScriptedIO(selections=[
            "namespaces", "ns:@acme", GITHUB, "publish", BACK, BACK, BACK, EXIT,
        ])

        await run_menu(document, store, registry, scripted)

        assert saved(store)["namespaces"]["@acme"]["providers"][GITHUB]["publish"] == "inherit-from-global"
        assert any("(global: on)" in label for label in scripted.labels)


@pytest.mark.unit
class TestNamespaces:
    """네임스페이스 메뉴 테스트"""

    @pytest.mark.asyncio
    async def test_add_namespace_seeds_inherit(self, document, store, registry):
        scripted = ScriptedIO(selections=["namespaces", "add", BACK, EXIT], answers=["@acme"])

        await run_menu(document, store, registry, scripted)

        namespace = saved(store)["namespaces"]["@acme"]["providers"]
        assert namespace[GITHUB] == {
            "token": None,
            "publish": "inherit-from-global",
            "releases": "inherit-from-global",
        }
        assert namespace[NPM]["allowPrivate"] == "inherit-from-global"

    @pytest.mark.asyncio
    async def test_add_duplicate_namespace_shows_error(self, document, store, registry):
        document["namespaces"]["@acme"] = {"providers": {}}
        scripted = ScriptedIO(selections=["namespaces", "add", BACK, EXIT], answers=["@acme"])

        await run_menu(document, store, registry, scripted)

        assert "이미 존재합니다" in scripted.output
        assert not store.config_path.exists()

    @pytest.mark.asyncio
    async def test_remove_namespace_requires_confirmation(self, document, store, registry):
        document["namespaces"]["@acme"] = {"providers": {}}
        scripted = ScriptedIO(
            selections=["namespaces", "remove", "@acme", "remove", "@acme", BACK, EXIT],
            confirms=[False, True],
        )

        await run_menu(document, store, registry, scripted)

        assert document["namespaces"] == {}
        assert saved(store)["namespaces"] == {}


@pytest.mark.unit
class TestProvidersMenu:
    """프로바이더 추가/삭제 메뉴 테스트"""

    @pytest.mark.asyncio
    async def test_add_prebuilt_provider(self, document, store, registry):
        scripted = ScriptedIO(selections=["providers", "prebuilt:@builtin/cpm-github-npm", BACK, EXIT])

        await run_menu(document, store, registry, scripted)

        assert saved(store)["providers"] == [GITHUB, NPM, "@builtin/cpm-github-npm"]

    @pytest.mark.asyncio
    async def test_add_custom_provider_with_bad_name(self, document, store, registry):
        scripted = ScriptedIO(selections=["providers", "add-custom", BACK, EXIT], answers=["bad name"])

        await run_menu(document, store, registry, scripted)

        assert "올바르지 않습니다" in scripted.output
        assert document["providers"] == [GITHUB, NPM]
        assert not store.config_path.exists()

    @pytest.mark.asyncio
    async def test_remove_provider_after_confirmation(self, document, store, registry):
        scripted = ScriptedIO(
            selections=["providers", "remove", NPM, BACK, BACK, EXIT],
            confirms=[True],
        )

        await run_menu(document, store, registry, scripted)

        doc = saved(store)
        assert doc["providers"] == [GITHUB]
        assert NPM not in doc["global"]

    @pytest.mark.asyncio
    async def test_custom_provider_without_menu_gets_token_only(
        self, store, registry, recording_provider
    ):
        registry.register_loader("cpm-custom", lambda: recording_provider("custom"))
        doc = {"passcode": None, "global": {}, "namespaces": {}, "providers": ["cpm-custom"]}
        scripted = ScriptedIO(
            selections=["global", "cpm-custom", "token", BACK, BACK, EXIT],
            secrets=["tok"],
        )

        await run_menu(doc, store, registry, scripted)

        assert saved(store)["global"] == {"cpm-custom": {"token": "tok"}}
        assert "Token: (unset)" in scripted.labels


@pytest.mark.unit
class TestPasscodeMenu:
    """패스코드 메뉴 테스트"""

    @pytest.mark.asyncio
    async def test_set_change_clear(self, document, store, registry):
        scripted = ScriptedIO(
            selections=["passcode", "set", "change", "change", "clear", BACK, EXIT],
            secrets=["1234", "wrong", "1234", "5678", "5678"],
        )

        await run_menu(document, store, registry, scripted)

        assert "현재 패스코드가 일치하지 않습니다." in scripted.output
        assert document["passcode"] is None
        assert saved(store)["passcode"] is None

    @pytest.mark.asyncio
    async def test_empty_current_passcode_cancels(self, document, store, registry):
        document["passcode"] = "1234"
        scripted = ScriptedIO(selections=["passcode", "clear", BACK, EXIT], secrets=[""])

        await run_menu(document, store, registry, scripted)

        assert document["passcode"] == "1234"
        assert not store.config_path.exists()

