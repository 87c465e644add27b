"""Configuration loading and mesh construction."""

from capmesh.config.factory import build_agent, build_mesh
from capmesh.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_TOML,
    default_config,
    get_config_path,
    load_config,
    write_default_config,
)
from capmesh.config.models import AgentSettings, Config, LoggingSettings, MeshSettings

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_TOML",
    "AgentSettings",
    "Config",
    "LoggingSettings",
    "MeshSettings",
    "build_agent",
    "build_mesh",
    "default_config",
    "get_config_path",
    "load_config",
    "write_default_config",
]
