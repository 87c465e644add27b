"""TOML configuration loader."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from capmesh.config.models import Config

CONFIG_ENV_VAR = "CAPMESH_CONFIG"

DEFAULT_CONFIG_TOML = """\
[mesh]
max_hops = 10
balancer = "round-robin"

[logging]
level = "INFO"
format = "console"

[[agents]]
name = "assistant"
description = "General-purpose assistant"
system = "You are a helpful assistant."
provides = ["general"]
response = "Hello from assistant."
"""


def get_config_path(path: Path | None = None) -> Path:
    """Resolve the config file: explicit path, then $CAPMESH_CONFIG, then ~/.capmesh."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.home() / ".capmesh" / "config.toml"


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def default_config() -> Config:
    return Config.model_validate(tomllib.loads(DEFAULT_CONFIG_TOML))


def load_config(path: Path | None = None) -> Config:
    """
    Load and validate configuration.

    A missing file at the default location yields the default config; a
    missing file that was asked for explicitly is an error.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    resolved = get_config_path(path)

    if not resolved.exists() and not explicit:
        return default_config()

    return Config.model_validate(load_toml(resolved))


def write_default_config(path: Path | None = None) -> tuple[Path, bool]:
    """Write the default config if none exists. Returns (path, created)."""
    resolved = get_config_path(path)
    if resolved.exists():
        return resolved, False
    resolved.parent.mkdir(parents=True, exist_ok=True)
    resolved.write_text(DEFAULT_CONFIG_TOML)
    return resolved, True
