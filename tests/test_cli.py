from pathlib import Path

import pytest

import rephraser.cli as cli_mod
from rephraser.clients.openai_client import OpenAIClient
from rephraser.errors import AuthError, ConfigError


@pytest.fixture(autouse=True)
def patch_console(monkeypatch):
    printed = []

    class FakeConsole:
        def print(self, *args, **kwargs):
            printed.append(str(args[0]) if args else '')

    monkeypatch.setattr(cli_mod, 'console', FakeConsole())
    monkeypatch.setattr(cli_mod, 'setup_logging', lambda verbose=False, debug=False: None)
    return printed


@pytest.fixture
def delivered(monkeypatch):
    texts = []
    monkeypatch.setattr(cli_mod.OutputHandler, 'handle', lambda self, text: texts.append(text))
    return texts


def run_cli(*argv):
    """Run the CLI and return its exit code (0 when it returns normally)."""
    try:
        cli_mod.main(list(argv))
    except SystemExit as e:
        return e.code
    return 0


def test_parse_rephrase_arguments():
    args = cli_mod.parse_arguments(["--verbose", "rephrase", "polite", "Hello"])
    assert args.command == "rephrase"
    assert args.action == "polite"
    assert args.text == "Hello"
    assert args.verbose is True


def test_parse_config_set_arguments():
    args = cli_mod.parse_arguments(["config", "set", "llm.model", "gpt-4o"])
    assert (args.command, args.config_command, args.key, args.value) == ("config", "set", "llm.model", "gpt-4o")


def test_missing_command_exits():
    with pytest.raises(SystemExit) as exc:
        cli_mod.parse_arguments([])
    assert exc.value.code == 2


def test_list_actions_empty(isolated_config, patch_console):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("actions: []\n", encoding="utf-8")
    assert run_cli("list-actions") == 0
    assert any("No actions defined" in msg for msg in patch_console)


def test_list_actions_rows(monkeypatch):
    rows = []
    monkeypatch.setattr(cli_mod.Table, 'add_row', lambda self, *cells: rows.append(cells))
    assert run_cli("list-actions") == 0
    assert [r[0] for r in rows] == ["polite", "organize", "summarize"]


def test_rephrase_with_mock_provider(isolated_config, delivered):
    assert run_cli("config", "set", "llm.provider", "mock") == 0
    assert run_cli("rephrase", "polite", "こんにちは") == 0
    assert len(delivered) == 1
    assert "お元気でしょうか" in delivered[0]


def test_rephrase_unknown_action(patch_console, delivered):
    assert run_cli("rephrase", "nonexistent", "test") == 1
    assert any("Action 'nonexistent' not found" in msg for msg in patch_console)
    assert delivered == []


def test_rephrase_missing_api_key(patch_console, delivered):
    assert run_cli("rephrase", "polite", "Hello") == 1
    assert any("OPENAI_API_KEY" in msg for msg in patch_console)


def test_rephrase_provider_error_exits_1(monkeypatch, patch_console, delivered):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    async def rejected(self, prompt):
        raise AuthError("Incorrect API key provided")

    monkeypatch.setattr(OpenAIClient, 'complete', rejected)
    assert run_cli("rephrase", "polite", "Hello") == 1
    assert any("Incorrect API key provided" in msg for msg in patch_console)
    assert delivered == []


def test_config_init_and_path(isolated_config, capsys, patch_console):
    assert run_cli("config", "init") == 0
    assert isolated_config.is_file()
    assert any("Configuration initialized" in msg for msg in patch_console)

    assert run_cli("config", "init") == 1
    assert any("already exists" in msg for msg in patch_console)

    assert run_cli("config", "path") == 0
    assert Path(capsys.readouterr().out.strip()).resolve() == isolated_config.resolve()


def test_config_show(patch_console):
    assert run_cli("config", "show") == 0
    output = "\n".join(patch_console)
    assert "provider: openai" in output
    assert "polite" in output


def test_config_set_invalid_key(patch_console):
    assert run_cli("config", "set", "llm.nope", "1") == 1
    assert any("Invalid configuration key" in msg for msg in patch_console)


def test_explicit_config_flag(tmp_path, patch_console):
    custom = tmp_path / "custom.yaml"
    assert run_cli("--config", str(custom), "config", "set", "llm.model", "gpt-4o") == 0
    assert custom.is_file()
    assert "gpt-4o" in custom.read_text(encoding="utf-8")


def test_rephraser_errors_are_caught(monkeypatch, patch_console):
    def broken(manager):
        raise ConfigError("broken config")

    monkeypatch.setattr(cli_mod, 'list_actions', broken)
    assert run_cli("list-actions") == 1
    assert any("broken config" in msg for msg in patch_console)


def test_config_flag_moves_dotenv(tmp_path, monkeypatch, patch_console):
    custom = tmp_path / "custom" / "config.yaml"
    custom.parent.mkdir()
    (custom.parent / ".env").write_text("REPHRASER_HTTP_TIMEOUT=3\n", encoding="utf-8")
    seen = {}
    monkeypatch.setattr(cli_mod, 'rephrase', lambda action, text, manager, settings: seen.update(settings=settings))
    assert run_cli("--config", str(custom), "rephrase", "polite", "Hello") == 0
    assert seen["settings"].HTTP_TIMEOUT == 3
