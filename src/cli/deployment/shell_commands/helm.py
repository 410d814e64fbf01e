"""Helm command abstractions.

This module synthesizes Helm argument vectors and runs them through the
command runner. Argument synthesis is kept in pure functions so the exact
command shape can be inspected (and rendered) without executing anything.

Two major versions of Helm are supported. They differ in how a release is
deleted, which is captured by the closed ``HelmVariant`` enumeration.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from .types import CommandResult

if TYPE_CHECKING:
    from ..helm_deployer.models import PluginSpec, ResolvedConfig
    from .runner import CommandRunner

CANARY_FLAGS = ("--set=service.enabled=false", "--set=ingress.enabled=false")


class HelmVariant(str, Enum):
    """Supported Helm major versions."""

    HELM3 = "helm3"
    HELM2 = "helm2"

    @classmethod
    def for_binary(cls, binary: str) -> HelmVariant:
        """Map the configured Helm binary onto a variant.

        Only the ``helm3`` binary gets Helm 3 semantics; any other binary is
        treated as a legacy Helm 2 install.
        """
        return cls.HELM3 if binary == cls.HELM3.value else cls.HELM2


# =============================================================================
# Argument synthesis
# =============================================================================


def format_value(value: Any) -> str:
    """Format a values entry the way Helm's --set parser expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def delete_args(variant: HelmVariant, namespace: str, release: str) -> list[str]:
    """Build the arguments deleting a release.

    Helm 3 scopes releases to a namespace and purges on delete, Helm 2
    needs an explicit --purge to free the release name.
    """
    if variant is HelmVariant.HELM3:
        return ["delete", "-n", namespace, release]
    return ["delete", "--purge", release]


def upgrade_args(config: ResolvedConfig) -> list[str]:
    """Build the ``upgrade --install`` arguments for a resolved config.

    Optional flags are only emitted when the corresponding setting is
    present, in a fixed order: dry-run, app name/version, chart version,
    timeout, value files, values, canary overrides, atomic.

    Args:
        config: Resolved deployment configuration

    Returns:
        Argument vector (without the binary)
    """
    args = [
        "upgrade",
        config.release,
        config.chart_ref,
        "--install",
        "--wait",
        f"--namespace={config.namespace}",
    ]

    if config.dry_run:
        args.append("--dry-run")
    if config.app_name:
        args.append(f"--set=app.name={config.app_name}")
    if config.version:
        args.append(f"--set=app.version={config.version}")
    if config.chart_version:
        args.append(f"--version={config.chart_version}")
    if config.timeout:
        args.append(f"--timeout={config.timeout}")

    for value_file in config.value_files:
        args.extend(["-f", value_file])

    if isinstance(config.values, Mapping):
        for key, value in config.values.items():
            args.extend(["--set", f"{key}={format_value(value)}"])
    elif config.values:
        # Undecodable values are handed to Helm as a raw --set expression
        args.extend(["--set", config.values])

    # Canary releases get no service or ingress of their own. Traffic
    # reaches them through the stable release's service.
    if config.is_canary:
        args.extend(CANARY_FLAGS)

    if config.atomic:
        args.append("--atomic")

    return args


def repo_add_args(
    alias: str,
    url: str,
    username: str | None = None,
    password: str | None = None,
) -> list[str]:
    """Build the arguments registering a chart repository."""
    args = ["repo", "add", alias, url]
    if username:
        args.append(f"--username={username}")
    if password:
        args.append(f"--password={password}")
    return args


def repo_update_args() -> list[str]:
    """Build the arguments refreshing all repository indexes."""
    return ["repo", "update"]


def plugin_install_args(plugin: PluginSpec) -> list[str]:
    """Build the arguments installing a Helm plugin."""
    args = ["plugin", "install", plugin.url]
    if plugin.version:
        args.extend(["--version", plugin.version])
    return args


# =============================================================================
# Execution
# =============================================================================


class HelmCommands:
    """Helm-related shell commands.

    Provides operations for:
    - Repository management (add, update)
    - Plugin installation
    - Release management (upgrade --install, delete)
    """

    def __init__(
        self,
        runner: CommandRunner,
        binary: str = HelmVariant.HELM3.value,
        on_output: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
            binary: Helm executable name; also selects the Helm variant
            on_output: Optional sink receiving each line of Helm output
        """
        self._runner = runner
        self.binary = binary
        self.variant = HelmVariant.for_binary(binary)
        self._on_output = on_output

    def _run(self, args: list[str], *, ignore_failure: bool = False) -> CommandResult:
        return self._runner.run(
            [self.binary, *args],
            ignore_failure=ignore_failure,
            on_output=self._on_output,
        )

    # =========================================================================
    # Repositories
    # =========================================================================

    def add_repo(
        self,
        alias: str,
        url: str,
        *,
        username: str | None = None,
        password: str | None = None,
    ) -> CommandResult:
        """Register a chart repository under an alias.

        Raises:
            ToolInvocationFailure: If Helm rejects the repository
        """
        return self._run(repo_add_args(alias, url, username, password))

    def update_repos(self) -> CommandResult:
        """Refresh the local index of every registered repository."""
        return self._run(repo_update_args())

    # =========================================================================
    # Plugins
    # =========================================================================

    def install_plugin(self, plugin: PluginSpec) -> CommandResult:
        """Install a Helm plugin.

        Failures are returned rather than raised so the caller can decide
        how to report them.
        """
        return self._run(plugin_install_args(plugin), ignore_failure=True)

    # =========================================================================
    # Release Management
    # =========================================================================

    def upgrade_install(self, config: ResolvedConfig) -> CommandResult:
        """Deploy or upgrade a release via ``helm upgrade --install``.

        Raises:
            ToolInvocationFailure: If the upgrade fails
        """
        return self._run(upgrade_args(config))

    def delete(
        self, namespace: str, release: str, *, ignore_failure: bool = False
    ) -> CommandResult:
        """Delete a release using the variant's delete semantics.

        Args:
            namespace: Namespace holding the release (Helm 3 only)
            release: Release name
            ignore_failure: Return a failed result instead of raising

        Raises:
            ToolInvocationFailure: If the delete fails and ignore_failure is False
        """
        return self._run(
            delete_args(self.variant, namespace, release),
            ignore_failure=ignore_failure,
        )
