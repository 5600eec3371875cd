from __future__ import annotations

import os
from pathlib import Path

import pytest
from config import ConfigurationSet

from stepwise.config import ConfigError, create_config, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all STEPWISE__ env vars so tests are isolated from the caller's shell."""
    for key in list(os.environ):
        if key.startswith("STEPWISE__"):
            monkeypatch.delenv(key)


def test_create_config_returns_defaults() -> None:
    cfg = create_config(yaml_path="/nonexistent/stepwise.yaml")
    assert isinstance(cfg, ConfigurationSet)
    assert cfg["console.prompt"] == "What is your name? "
    assert cfg["console.greeting"] == "Hello, {name}!"
    assert cfg["directory.path"] == "directory.txt"


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    yaml_file = tmp_path / "stepwise.yaml"
    yaml_file.write_text("console:\n  greeting: 'Welcome, {name}.'\n")
    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["console.greeting"] == "Welcome, {name}."
    # Defaults still apply for unset keys
    assert cfg["console.prompt"] == "What is your name? "


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_file = tmp_path / "stepwise.yaml"
    yaml_file.write_text("directory:\n  path: from_yaml.txt\n")
    monkeypatch.setenv("STEPWISE__DIRECTORY__PATH", "from_env.txt")
    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["directory.path"] == "from_env.txt"


def test_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STEPWISE__DIRECTORY__PATH", "from_env.txt")
    cfg = create_config(yaml_path="/nonexistent/stepwise.yaml", overrides={"directory": {"path": "explicit.txt"}})
    assert cfg["directory.path"] == "explicit.txt"


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings(create_config(yaml_path="/nonexistent/stepwise.yaml"))
        assert settings.console.prompt == "What is your name? "
        assert settings.console.greeting == "Hello, {name}!"
        assert settings.directory_path == Path("directory.txt")

    def test_expands_user(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/stepwise.yaml", overrides={"directory": {"path": "~/people.txt"}})
        assert load_settings(cfg).directory_path == Path("~/people.txt").expanduser()

    def test_greeting_without_placeholder(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/stepwise.yaml", overrides={"console": {"greeting": "Hi!"}})
        with pytest.raises(ConfigError, match="placeholder"):
            load_settings(cfg)

    def test_greeting_with_unknown_placeholder(self) -> None:
        cfg = create_config(
            yaml_path="/nonexistent/stepwise.yaml", overrides={"console": {"greeting": "Hi {name} from {city}"}}
        )
        with pytest.raises(ConfigError, match="placeholder"):
            load_settings(cfg)

    def test_malformed_greeting(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/stepwise.yaml", overrides={"console": {"greeting": "Hi {name"}})
        with pytest.raises(ConfigError, match="not a valid template"):
            load_settings(cfg)

    def test_non_string_value(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "stepwise.yaml"
        yaml_file.write_text("console:\n  prompt: 42\n")
        with pytest.raises(ConfigError, match="console.prompt"):
            load_settings(create_config(yaml_path=str(yaml_file)))

    def test_missing_value(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/stepwise.yaml", defaults={"console": {"greeting": "Hi {name}"}})
        with pytest.raises(ConfigError, match="Missing configuration value 'console.prompt'"):
            load_settings(cfg)
