"""Helm release management.

This module handles chart repository setup and the terminal deploy step:
``upgrade --install`` or deletion of the release, with optional removal of
the paired canary release beforehand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..errors import MissingRepoAlias

if TYPE_CHECKING:
    from rich.console import Console

    from ..shell_commands import CommandResult, HelmCommands
    from .models import ResolvedConfig


class HelmReleaseManager:
    """Manages chart repositories and Helm releases.

    Handles:
    - Optional chart repository registration and index refresh
    - Best-effort canary release removal
    - Release deletion (task "remove") or upgrade --install
    """

    def __init__(self, commands: HelmCommands, console: Console) -> None:
        """Initialize the Helm release manager.

        Args:
            commands: Helm command executor
            console: Rich console for output
        """
        self.commands = commands
        self.console = console

    def add_repository(self, config: ResolvedConfig) -> bool:
        """Register the configured chart repository, if any.

        Returns:
            True if a repository was added

        Raises:
            MissingRepoAlias: If a repository is set without an alias
            ToolInvocationFailure: If Helm fails to add or refresh repositories
        """
        if not config.repo:
            return False
        if not config.repo_alias:
            raise MissingRepoAlias(config.repo)

        logger.debug(
            f"adding custom repository {config.repo} with alias {config.repo_alias}"
        )
        self.console.print(
            f"[cyan]Adding chart repository {config.repo_alias} ({config.repo})[/cyan]"
        )
        self.commands.add_repo(
            config.repo_alias,
            config.repo,
            username=config.repo_username,
            password=config.repo_password,
        )
        self.commands.update_repos()
        return True

    def remove_canary(self, config: ResolvedConfig) -> None:
        """Delete the app's canary release, ignoring any failure."""
        logger.debug(f"removing canary {config.canary_release}")
        self.console.print(
            f"[cyan]Removing canary release {config.canary_release}[/cyan]"
        )
        result = self.commands.delete(
            config.namespace, config.canary_release, ignore_failure=True
        )
        if not result.success:
            logger.debug(
                f"canary removal exited with {result.returncode}, continuing"
            )

    def deploy_release(self, config: ResolvedConfig) -> CommandResult:
        """Run the terminal deploy step for a config.

        Removes the canary first when requested, then deletes the release for
        task "remove" or runs upgrade --install otherwise.

        Raises:
            ToolInvocationFailure: If the delete or upgrade fails
        """
        if config.remove_canary:
            self.remove_canary(config)

        if config.is_removal:
            self.console.print(
                f"[bold cyan]Deleting release {config.release}...[/bold cyan]"
            )
            result = self.commands.delete(config.namespace, config.release)
        else:
            self.console.print(
                f"[bold cyan]Deploying {config.chart_ref} as {config.release} "
                f"to namespace {config.namespace}...[/bold cyan]"
            )
            result = self.commands.upgrade_install(config)

        self.console.print(f"[green]✓ Release {config.release} done[/green]")
        return result
