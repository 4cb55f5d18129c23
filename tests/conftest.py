import pytest

from rephraser.actions import ActionResolver
from rephraser.utils.config import Config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point the config path at a temp dir and clear provider credentials."""
    config_path = tmp_path / "rephraser" / "config.yaml"
    monkeypatch.setenv("REPHRASER_CONFIG_PATH", str(config_path))
    for var in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "REPHRASER_VERBOSE", "REPHRASER_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    return config_path


@pytest.fixture
def default_config():
    return Config()


@pytest.fixture
def resolver(default_config):
    return ActionResolver.from_config(default_config)
