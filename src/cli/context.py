"""CLI context and dependency container."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import click
import typer

from src.cli.deployment.helm_deployer.constants import DeploymentConstants
from src.cli.deployment.helm_deployer.github_context import GitHubContext
from src.cli.deployment.shell_commands import CommandRunner
from src.cli.shared.console import CLIConsole, console


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    runner: CommandRunner
    github: GitHubContext
    constants: DeploymentConstants
    parameters: Mapping[str, Any] = field(default_factory=dict)


def build_cli_context(parameters: Mapping[str, Any] | None = None) -> CLIContext:
    """Build a fresh CLIContext."""
    return CLIContext(
        console=console,
        runner=CommandRunner(),
        github=GitHubContext.from_env(),
        constants=DeploymentConstants(),
        parameters=dict(parameters or {}),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
