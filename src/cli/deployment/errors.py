"""Deployment error taxonomy.

Every fatal failure raised while resolving inputs or driving Helm derives
from DeploymentError so the CLI can report it with one handler. Non-fatal
failures are converted into log lines by ``best_effort`` and never escape.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from loguru import logger


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class MissingRequiredInput(DeploymentError):
    """A required input resolved to an empty value."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Input required and not supplied: {name}")


class MissingRepoAlias(DeploymentError):
    """A chart repository was configured without an alias."""

    def __init__(self, repo: str):
        self.repo = repo
        super().__init__(
            "repo alias is required when you are setting a repository",
            details=f"Repository '{repo}' cannot be referenced by charts without "
            "an alias. Set the 'repo-alias' input.",
        )


class ToolInvocationFailure(DeploymentError):
    """An external tool exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, output: str = ""):
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"The process '{command[0]}' failed with exit code {returncode}",
            details=output or None,
        )


class PluginInstallFailure(DeploymentError):
    """Installing a Helm plugin failed."""

    def __init__(self, url: str, returncode: int, output: str = ""):
        self.url = url
        self.returncode = returncode
        super().__init__(
            f"Failed to install helm plugin {url} (exit code {returncode})",
            details=output or None,
        )


class StatusReportFailure(DeploymentError):
    """The deployment status could not be recorded. Never fatal."""


@contextmanager
def best_effort(action: str) -> Iterator[None]:
    """Run a block whose failure must not affect the deployment.

    Any exception raised inside the block is logged as a warning and
    discarded.

    Args:
        action: Short description used in the warning message

    Example:
        >>> with best_effort("remove plugin residue"):
        ...     shutil.rmtree(path)
    """
    try:
        yield
    except Exception as e:
        logger.warning(f"Failed to {action}: {e}")
