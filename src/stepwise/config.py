from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from string import Formatter

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml


class ConfigError(Exception):
    """Raised when a configuration value is missing or malformed."""


_DEFAULTS: dict[str, object] = {
    "console": {
        "prompt": "What is your name? ",
        "greeting": "Hello, {name}!",
    },
    "directory": {
        "path": "directory.txt",
    },
}


@dataclass(frozen=True)
class ConsoleSettings:
    prompt: str
    greeting: str


@dataclass(frozen=True)
class Settings:
    console: ConsoleSettings
    directory_path: Path


def create_config(
    yaml_path: str = "stepwise.yaml",
    env_prefix: str = "STEPWISE",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file. A missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``STEPWISE__CONSOLE__PROMPT``.
        defaults: Default configuration values.
        overrides: Values that win over every other layer, typically from CLI options.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _require_str(cfg: ConfigurationSet, key: str) -> str:
    try:
        value = cfg[key]
    except KeyError:
        raise ConfigError(f"Missing configuration value '{key}'") from None
    if not isinstance(value, str):
        raise ConfigError(f"Configuration value '{key}' must be a string, got {type(value).__name__}")
    return value


def _validate_greeting(greeting: str) -> None:
    try:
        fields = {name for _, name, _, _ in Formatter().parse(greeting) if name is not None}
    except ValueError as e:
        raise ConfigError(f"console.greeting is not a valid template: {e}") from None
    if fields != {"name"}:
        raise ConfigError(f"console.greeting must use exactly the '{{name}}' placeholder, got {sorted(fields)}")


def load_settings(cfg: ConfigurationSet | None = None) -> Settings:
    if cfg is None:
        cfg = create_config()
    greeting = _require_str(cfg, "console.greeting")
    _validate_greeting(greeting)
    return Settings(
        console=ConsoleSettings(prompt=_require_str(cfg, "console.prompt"), greeting=greeting),
        directory_path=Path(_require_str(cfg, "directory.path")).expanduser(),
    )
