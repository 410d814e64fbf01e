"""Resolved deployment configuration models.

These models are the boundary between loosely-typed inputs and command
synthesis: everything downstream of the input resolver reads a frozen
ResolvedConfig and never looks at raw inputs again.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .constants import DeploymentConstants
from .naming import chart_ref

_CONSTANTS = DeploymentConstants()


class PluginSpec(BaseModel):
    """A Helm plugin to install, identified by its source URL."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1, description="Plugin source URL or path")
    version: str | None = Field(default=None, description="Plugin version to pin")

    @field_validator("url", mode="before")
    @classmethod
    def _strip_url(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # JSON payloads may carry versions as numbers, e.g. 1.2
        if value is None or value == "":
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ResolvedConfig(BaseModel):
    """Normalized inputs for a single deployment run.

    Built once, before any external command runs, and immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    track: str = _CONSTANTS.DEFAULT_TRACK
    app_name: str = Field(min_length=1, description="The 'release' input")
    release: str = Field(min_length=1, description="Track-suffixed release name")
    namespace: str = Field(min_length=1)
    chart: str = Field(min_length=1)
    chart_version: str | None = None
    values: Mapping[str, Any] | str = Field(default_factory=dict, validate_default=True)
    value_files: tuple[str, ...] = ()
    plugins: tuple[PluginSpec, ...] = ()
    task: str | None = None
    version: str | None = None
    remove_canary: bool = False
    timeout: str | None = None
    dry_run: bool = False
    atomic: bool = True
    helm: str = _CONSTANTS.DEFAULT_HELM
    repo: str | None = None
    repo_alias: str | None = None
    repo_username: str | None = None
    repo_password: str | None = None

    @field_validator("values", mode="after")
    @classmethod
    def _freeze_values(cls, value: Mapping[str, Any] | str) -> Mapping[str, Any] | str:
        if isinstance(value, str):
            return value
        return MappingProxyType(dict(value))

    @field_serializer("values")
    def _values_as_dict(self, value: Mapping[str, Any] | str) -> dict[str, Any] | str:
        return value if isinstance(value, str) else dict(value)

    @property
    def chart_ref(self) -> str:
        """Chart reference passed to Helm."""
        return chart_ref(self.chart)

    @property
    def is_canary(self) -> bool:
        return self.track == _CONSTANTS.CANARY_TRACK

    @property
    def is_removal(self) -> bool:
        return self.task == _CONSTANTS.REMOVE_TASK

    @property
    def canary_release(self) -> str:
        """Name of the canary release paired with this app."""
        return f"{self.app_name}-{_CONSTANTS.CANARY_TRACK}"

    def redacted(self) -> dict[str, Any]:
        """Return the config as a dict safe to log or print."""
        data = self.model_dump(mode="json")
        if data.get("repo_password"):
            data["repo_password"] = "***"
        return data
