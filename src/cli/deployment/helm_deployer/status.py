"""Deployment status reporting.

Records pending/success/failure on the GitHub deployment that triggered
the run. Reporting is fire-and-forget: it is skipped when there is no token
or no deployment, and any failure is logged as a warning only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx
from loguru import logger

from ..errors import StatusReportFailure, best_effort
from .constants import DeploymentConstants
from .github_context import GitHubContext


class DeploymentState(str, Enum):
    """States reported to the deployment-status API."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class DeploymentStatusReporter:
    """Posts deployment statuses to the GitHub API."""

    def __init__(
        self,
        context: GitHubContext,
        token: str | None,
        *,
        client: httpx.Client | None = None,
        constants: DeploymentConstants | None = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            context: GitHub run context holding the deployment
            token: Token allowed to create deployment statuses
            client: Optional HTTP client (a short-lived one is used otherwise)
            constants: Optional deployment constants
        """
        self.context = context
        self.token = token
        self._client = client
        self.constants = constants or DeploymentConstants()

    @property
    def enabled(self) -> bool:
        return bool(self.token) and self.context.deployment is not None

    def notify(self, state: DeploymentState) -> None:
        """Record a deployment state. Never raises."""
        deployment = self.context.deployment
        if not self.token or deployment is None:
            logger.debug("not setting deployment status")
            return

        with best_effort("set deployment status"):
            self._create_status(deployment, state)
            logger.debug(f"deployment status set to {state.value}")

    def _create_status(self, deployment: dict[str, Any], state: DeploymentState) -> None:
        url = (
            f"{self.context.api_url}/repos/{self.context.owner}/{self.context.repo}"
            f"/deployments/{deployment.get('id')}/statuses"
        )
        body = {
            "state": state.value,
            "log_url": self.context.checks_url,
            "target_url": self.context.checks_url,
        }
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": self.constants.STATUS_ACCEPT_HEADER,
        }

        try:
            if self._client is not None:
                response = self._client.post(url, json=body, headers=headers)
            else:
                with httpx.Client(
                    timeout=self.constants.STATUS_TIMEOUT_SECONDS
                ) as client:
                    response = client.post(url, json=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StatusReportFailure(
                f"HTTP {e.response.status_code} from {url}"
            ) from e
        except httpx.HTTPError as e:
            raise StatusReportFailure(str(e)) from e
