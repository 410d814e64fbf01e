"""Helm deployment orchestration.

This module provides the HelmDeployer class which runs one deployment as a
fixed pipeline:

    Pending -> RepoSetup -> PluginSetup -> Deploying -> Success | Failure

Every stage runs its Helm invocations sequentially. The first hard failure
moves the run to Failure, which is reported to the deployment-status API
exactly once before the error is re-raised with its message intact.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import Any

from loguru import logger
from rich.console import Console
from rich.markup import escape

from ..errors import DeploymentError, MissingRepoAlias
from ..shell_commands import (
    CommandResult,
    CommandRunner,
    HelmCommands,
    HelmVariant,
    delete_args,
    plugin_install_args,
    repo_add_args,
    repo_update_args,
    upgrade_args,
)
from .cleanup import CleanupManager
from .constants import DeploymentConstants
from .environment import prepare_environment
from .github_context import GitHubContext
from .helm_release import HelmReleaseManager
from .inputs import InputResolver, build_config
from .models import ResolvedConfig
from .plugins import PluginInstaller
from .status import DeploymentState, DeploymentStatusReporter

__all__ = ["DeploymentStage", "HelmDeployer", "planned_commands"]


class DeploymentStage(str, Enum):
    """Pipeline stages of a deployment run."""

    PENDING = "pending"
    REPO_SETUP = "repo-setup"
    PLUGIN_SETUP = "plugin-setup"
    DEPLOYING = "deploying"
    SUCCESS = "success"
    FAILURE = "failure"


def planned_commands(config: ResolvedConfig) -> list[list[str]]:
    """List the Helm invocations a run would make, in order.

    Binary included. Nothing is executed.

    Raises:
        MissingRepoAlias: If a repository is set without an alias
    """
    helm = config.helm
    variant = HelmVariant.for_binary(helm)
    commands: list[list[str]] = []

    if config.repo:
        if not config.repo_alias:
            raise MissingRepoAlias(config.repo)
        commands.append(
            [
                helm,
                *repo_add_args(
                    config.repo_alias,
                    config.repo,
                    config.repo_username,
                    config.repo_password,
                ),
            ]
        )
        commands.append([helm, *repo_update_args()])

    for plugin in config.plugins:
        commands.append([helm, *plugin_install_args(plugin)])

    if config.remove_canary:
        commands.append(
            [helm, *delete_args(variant, config.namespace, config.canary_release)]
        )

    if config.is_removal:
        commands.append([helm, *delete_args(variant, config.namespace, config.release)])
    else:
        commands.append([helm, *upgrade_args(config)])

    return commands


class HelmDeployer:
    """Runs a single, stateless Helm deployment.

    Attributes:
        stage: Current pipeline stage
        config: Resolved configuration, once resolution succeeded
        resolver: Input resolver built from parameters and the deployment event
        reporter: Deployment-status reporter
    """

    def __init__(
        self,
        console: Console,
        parameters: Mapping[str, Any],
        context: GitHubContext | None = None,
        *,
        runner: CommandRunner | None = None,
        reporter: DeploymentStatusReporter | None = None,
        constants: DeploymentConstants | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        """Initialize the deployer.

        Args:
            console: Rich console for output
            parameters: Explicit inputs keyed by external name
            context: GitHub run context (read from the environment if omitted)
            runner: Command runner (a default runner if omitted)
            reporter: Status reporter (built from the "token" input if omitted)
            constants: Optional deployment constants
            environ: Environment to prepare for Helm (defaults to os.environ)
        """
        self.console = console
        self.context = context or GitHubContext.from_env()
        self.constants = constants or DeploymentConstants()
        self.runner = runner or CommandRunner()
        self.environ = environ
        self.resolver = InputResolver(parameters, self.context.deployment)
        self.reporter = reporter or DeploymentStatusReporter(
            self.context,
            self.resolver.parameter("token"),
            constants=self.constants,
        )
        self.stage = DeploymentStage.PENDING
        self.config: ResolvedConfig | None = None

    # =========================================================================
    # Public Interface
    # =========================================================================

    def resolve_config(self) -> ResolvedConfig:
        """Resolve inputs into the run configuration (once).

        Raises:
            MissingRequiredInput: If a required input is missing
        """
        if self.config is None:
            self.config = build_config(self.resolver, self.constants)
        return self.config

    def run(self) -> CommandResult:
        """Run the deployment pipeline.

        Returns:
            Result of the terminal upgrade or delete command

        Raises:
            DeploymentError: On the first failing stage, after the failure
                status has been reported
        """
        self._enter(DeploymentStage.PENDING)
        self.reporter.notify(DeploymentState.PENDING)

        try:
            result = self._run_stages()
        except DeploymentError as e:
            self._fail(e)
            raise
        except Exception as e:
            self._fail(e)
            raise DeploymentError(str(e)) from e

        self._enter(DeploymentStage.SUCCESS)
        self.reporter.notify(DeploymentState.SUCCESS)
        return result

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _run_stages(self) -> CommandResult:
        prepare_environment(self.environ, self.constants)
        config = self.resolve_config()

        helm = HelmCommands(self.runner, config.helm, on_output=self._print_helm_output)
        logger.debug(f'param: helm = "{config.helm}" ({helm.variant.value})')
        release_manager = HelmReleaseManager(helm, self.console)
        installer = PluginInstaller(
            helm, self.console, CleanupManager(self.console, self.constants)
        )

        self._enter(DeploymentStage.REPO_SETUP)
        release_manager.add_repository(config)

        self._enter(DeploymentStage.PLUGIN_SETUP)
        installer.install_all(config.plugins)

        self._enter(DeploymentStage.DEPLOYING)
        return release_manager.deploy_release(config)

    def _enter(self, stage: DeploymentStage) -> None:
        logger.debug(f"stage: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def _fail(self, error: Exception) -> None:
        self._enter(DeploymentStage.FAILURE)
        logger.error(str(error))
        self.reporter.notify(DeploymentState.FAILURE)

    def _print_helm_output(self, line: str) -> None:
        """Print Helm output in real-time."""
        self.console.print(f"  [dim]{escape(line)}[/dim]", highlight=False)
