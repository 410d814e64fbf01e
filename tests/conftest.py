"""Shared fixtures for the helm-deploy test suite."""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from loguru import logger

from src.cli.deployment.helm_deployer.constants import DeploymentConstants
from src.cli.deployment.helm_deployer.github_context import GitHubContext
from src.cli.deployment.shell_commands.types import CommandResult


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own GitHub/Actions environment out of tests."""
    for var in list(os.environ):
        if var.startswith(("INPUT_", "GITHUB_")) or var in (
            "KUBECONFIG_FILE",
            "RUNNER_DEBUG",
        ):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop loguru sinks a CLI test bound to its captured streams."""
    yield
    logger.remove()


@pytest.fixture
def mock_runner() -> MagicMock:
    """Create a command runner whose commands all succeed."""
    runner = MagicMock()
    runner.run.return_value = CommandResult(success=True, returncode=0)
    return runner


@pytest.fixture
def constants(tmp_path: Path) -> DeploymentConstants:
    """Deployment constants pointing the plugin cache at a temp dir."""
    return DeploymentConstants(
        PLUGIN_DIR=tmp_path / "plugins",
        KUBECONFIG_PATH=tmp_path / "kubeconfig.yml",
    )


@pytest.fixture
def github_context() -> GitHubContext:
    """A push-triggered run: no deployment object."""
    return GitHubContext(repository="acme/web", sha="abc123")


@pytest.fixture
def deployment_context() -> GitHubContext:
    """A deployment-triggered run with top-level and payload overrides."""
    return GitHubContext(
        event={
            "deployment": {
                "id": 42,
                "task": "deploy",
                "namespace": "from-deployment",
                "payload": {"track": "canary", "version": "2.0.0"},
            }
        },
        repository="acme/web",
        sha="abc123",
    )
