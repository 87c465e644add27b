"""Configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from capmesh.mesh.balancer import BalancerKind
from capmesh.mesh.cycle import DEFAULT_MAX_HOPS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class MeshSettings(BaseModel):
    """Mesh construction settings."""

    model_config = ConfigDict(extra="forbid")

    # Non-positive values are accepted here and clamped by the cycle detector
    max_hops: int = DEFAULT_MAX_HOPS
    balancer: BalancerKind = BalancerKind.ROUND_ROBIN
    seed: int | None = None


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "INFO"
    format: Literal["console", "json"] = "console"
    # Wrap every configured agent with run logging
    log_runs: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class AgentSettings(BaseModel):
    """An offline agent declared in configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    id: str | None = None
    description: str = ""
    system: str = ""
    provides: list[str] = Field(default_factory=list)
    needs: list[str] = Field(default_factory=list)
    response: str = ""


class Config(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    mesh: MeshSettings = Field(default_factory=MeshSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    agents: list[AgentSettings] = Field(default_factory=list)
