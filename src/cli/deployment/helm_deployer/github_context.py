"""GitHub Actions runner context.

Reads the workflow environment and the triggering webhook event so a
``deployment`` event can override inputs and receive status updates.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field


class GitHubContext(BaseModel):
    """Read-only view of the GitHub workflow run that invoked the deploy."""

    model_config = ConfigDict(frozen=True)

    event: dict[str, Any] = Field(default_factory=dict)
    repository: str = ""
    sha: str = ""
    server_url: str = "https://github.com"
    api_url: str = "https://api.github.com"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GitHubContext:
        """Build the context from GITHUB_* environment variables.

        A missing or unreadable event file yields an empty event, which
        simply means no deployment overrides apply.
        """
        env = os.environ if environ is None else environ
        event: dict[str, Any] = {}

        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).is_file():
            try:
                loaded = json.loads(Path(event_path).read_text())
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Could not read GitHub event {event_path}: {e}")
            else:
                if isinstance(loaded, dict):
                    event = loaded

        return cls(
            event=event,
            repository=env.get("GITHUB_REPOSITORY", ""),
            sha=env.get("GITHUB_SHA", ""),
            server_url=env.get("GITHUB_SERVER_URL") or "https://github.com",
            api_url=env.get("GITHUB_API_URL") or "https://api.github.com",
        )

    @property
    def deployment(self) -> dict[str, Any] | None:
        """The webhook's deployment object, if this run was a deployment event."""
        deployment = self.event.get("deployment")
        return deployment if isinstance(deployment, dict) else None

    @property
    def owner(self) -> str:
        return self.repository.partition("/")[0]

    @property
    def repo(self) -> str:
        return self.repository.partition("/")[2]

    @property
    def checks_url(self) -> str:
        """Link to the checks page of the commit being deployed."""
        return f"{self.server_url}/{self.owner}/{self.repo}/commit/{self.sha}/checks"
