"""
CLI 통합 테스트

click CliRunner로 명령을 실행하고, 실제 JSON 설정 파일 상태를 검증합니다.
외부 프로바이더 설치는 Mock 설치기로 대체합니다.
"""

import importlib
import json
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from cpm.domain.models import default_document
from cpm.infrastructure.providers import PipInstaller, ProviderRegistry
from cpm.presentation.cli import CliContext, cli, main

# 패키지 __init__의 main 함수와 구분하기 위해 모듈을 직접 가져옴
cli_main = importlib.import_module("cpm.presentation.cli.main")

GITHUB = "@builtin/cpm-github"
NPM = "@builtin/cpm-npm"


@pytest.fixture
def installer():
    installer = Mock()
    installer.install.return_value = True
    return installer


@pytest.fixture
def registry(installer):
    return ProviderRegistry(installer=installer)


@pytest.fixture
def invoke(config_path, registry):
    """CliContext를 주입하여 cpm 명령 실행"""
    runner = CliRunner()

    def _invoke(*args):
        context = CliContext(config_path=config_path, registry=registry, console=Console(width=200))
        return runner.invoke(cli, list(args), obj=context)

    return _invoke


def read_config(config_path):
    return json.loads(config_path.read_text(encoding="utf-8"))


def write_config(config_path, doc):
    config_path.write_text(json.dumps(doc), encoding="utf-8")


@pytest.mark.integration
class TestConfigCommands:
    """설정 관련 명령 테스트"""

    def test_dumpconfig_creates_default(self, invoke, config_path):
        result = invoke("--dumpconfig")

        assert result.exit_code == 0
        assert json.loads(result.output) == default_document()
        assert read_config(config_path) == default_document()

    def test_no_arguments_prints_help(self, invoke):
        result = invoke()

        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "install" in result.output

    def test_providers_command_lists_load_state(self, invoke, config_path):
        write_config(config_path, {"providers": [GITHUB, "cpm-missing-provider"]})

        result = invoke("providers")

        assert result.exit_code == 0
        assert GITHUB in result.output
        assert "https://github.com" in result.output
        assert "cpm-missing-provider" in result.output

    def test_providers_command_shows_load_error(self, invoke, config_path):
        write_config(config_path, {"providers": [GITHUB, "cpm-missing-provider"]})

        result = invoke("providers")

        assert result.exit_code == 0
        assert "ModuleNotFoundError" in result.output

    def test_hand_edited_providers_do_not_crash(self, invoke, config_path):
        write_config(config_path, {
            "global": {GITHUB: True},
            "providers": [GITHUB, {"bad": 1}, 42],
        })

        providers = invoke("providers")
        version = invoke("version", "--json")
        publish = invoke("publish")

        assert providers.exit_code == 0
        assert "잘못된 식별자" in providers.output
        assert version.exit_code == 0
        assert list(json.loads(version.output))[:2] == ["cpm", GITHUB]
        assert publish.exit_code == 0


@pytest.mark.integration
class TestProviderManagement:
    """install/uninstall provider 테스트"""

    def test_install_malformed_provider_fails(self, invoke, config_path, installer):
        result = invoke("install", "provider", "bad name")

        assert result.exit_code == 1
        assert "올바르지 않습니다" in result.output
        assert read_config(config_path)["providers"] == [GITHUB, NPM]
        installer.install.assert_not_called()

    def test_install_external_provider(self, invoke, config_path, installer):
        result = invoke("install", "provider", "@acme/cpm-foo")

        assert result.exit_code == 0, result.output
        installer.install.assert_called_once_with("acme-cpm-foo")
        assert "acme-cpm-foo" in result.output
        assert read_config(config_path)["providers"] == [GITHUB, NPM, "@acme/cpm-foo"]

    def test_install_failure_leaves_config_unchanged(self, invoke, config_path, installer):
        installer.install.return_value = False

        result = invoke("install", "provider", "cpm-nope")

        assert result.exit_code == 1
        assert read_config(config_path)["providers"] == [GITHUB, NPM]

    def test_install_duplicate_is_warning(self, invoke, config_path):
        result = invoke("install", "provider", GITHUB)

        assert result.exit_code == 0
        assert "이미 설정에 등록되어 있습니다" in result.output

    def test_install_provider_requires_name(self, invoke):
        result = invoke("install", "provider")

        assert result.exit_code == 2

    def test_uninstall_provider_with_yes(self, invoke, config_path):
        invoke("--dumpconfig")

        result = invoke("uninstall", "provider", NPM, "--yes")

        assert result.exit_code == 0
        doc = read_config(config_path)
        assert doc["providers"] == [GITHUB]
        assert NPM not in doc["global"]

    def test_uninstall_provider_declined(self, invoke, config_path):
        invoke("--dumpconfig")

        with patch.object(cli_main.Confirm, "ask", return_value=False):
            result = invoke("uninstall", "provider", NPM)

        assert result.exit_code == 0
        assert read_config(config_path)["providers"] == [GITHUB, NPM]

    def test_uninstall_unknown_provider(self, invoke):
        result = invoke("uninstall", "provider", "cpm-unknown", "--yes")

        assert result.exit_code == 0
        assert "설정에 없습니다" in result.output


@pytest.mark.integration
class TestDispatchCommands:
    """프로바이더 명령 전달 테스트"""

    def test_install_package_reaches_providers_in_order(
        self, invoke, config_path, registry, recording_provider
    ):
        calls = []
        registry.register_loader("cpm-one", lambda: recording_provider("one", calls=calls))
        registry.register_loader("cpm-two", lambda: recording_provider("two", calls=calls))
        write_config(config_path, {"providers": ["cpm-one", "cpm-two"]})

        result = invoke("install", "left-pad")

        assert result.exit_code == 0, result.output
        assert calls == [
            ("one", "install", {"package": "left-pad"}),
            ("two", "install", {"package": "left-pad"}),
        ]

    def test_provider_failure_propagates(self, invoke, config_path, registry, recording_provider):
        calls = []
        registry.register_loader(
            "cpm-one", lambda: recording_provider("one", fail_on=("publish",), calls=calls)
        )
        registry.register_loader("cpm-two", lambda: recording_provider("two", calls=calls))
        write_config(config_path, {"providers": ["cpm-one", "cpm-two"]})

        result = invoke("publish")

        assert result.exit_code == 1
        assert isinstance(result.exception, RuntimeError)
        assert calls == [("one", "publish", {})]

    def test_command_without_handlers_warns(self, invoke, config_path, registry, recording_provider):
        registry.register_loader("cpm-one", lambda: recording_provider("one"))
        write_config(config_path, {"providers": ["cpm-one"]})

        result = invoke("update", "left-pad")

        assert result.exit_code == 0
        assert "'update' 명령을 처리한 프로바이더가 없습니다" in result.output

    def test_version_json(self, invoke, config_path):
        with patch.object(PipInstaller, "pip_version", return_value="24.0"):
            result = invoke("version", "--json")

        assert result.exit_code == 0
        versions = json.loads(result.output)
        assert list(versions) == ["cpm", GITHUB, NPM, "pip", "python"]
        assert versions["pip"] == "24.0"


@pytest.mark.integration
class TestMainEntryPoint:
    """main() 종료 코드 테스트"""

    def test_dumpconfig_exits_zero(self, config_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config-path", str(config_path), "--dumpconfig"])

        assert exc_info.value.code == 0
        assert json.loads(capsys.readouterr().out)["providers"] == [GITHUB, NPM]

    def test_corrupt_config_declined_exits_one(self, config_path):
        config_path.write_text("{oops", encoding="utf-8")

        with patch.object(cli_main, "confirm_reset", return_value=False):
            with pytest.raises(SystemExit) as exc_info:
                main(["--config-path", str(config_path), "--dumpconfig"])

        assert exc_info.value.code == 1
        assert config_path.read_text(encoding="utf-8") == "{oops"

    def test_corrupt_config_accepted_resets(self, config_path):
        config_path.write_text("{oops", encoding="utf-8")

        with patch.object(cli_main, "confirm_reset", return_value=True):
            with pytest.raises(SystemExit) as exc_info:
                main(["--config-path", str(config_path), "--dumpconfig"])

        assert exc_info.value.code == 0
        assert read_config(config_path) == default_document()
        assert config_path.with_name(config_path.name + ".bak").read_text(encoding="utf-8") == "{oops"

    def test_usage_error_exit_code(self, config_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config-path", str(config_path), "no-such-command"])

        assert exc_info.value.code == 2

    def test_keyboard_interrupt_exits_zero(self, config_path):
        with patch.object(cli, "main", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main(["--config-path", str(config_path)])

        assert exc_info.value.code == 0

    def test_config_error_logged_with_error_details(self, config_path):
        config_path.write_text("{oops", encoding="utf-8")

        with patch.object(cli_main, "confirm_reset", return_value=False), \
                patch.object(cli_main, "logger") as logger:
            with pytest.raises(SystemExit):
                main(["--config-path", str(config_path), "--dumpconfig"])

        logger.error.assert_called_once()
        details = logger.error.call_args.kwargs
        assert details["error_code"] == "CONFIG_PARSE_FAILED"
        assert details["category"] == "Config"
        assert details["context"]["file_path"] == str(config_path)
