"""Shell command abstractions for Helm deployment operations.

This package provides a small interface over the external tools used
during deployment:

- runner: Process execution without a shell, with streamed output
- helm: Helm argument synthesis and execution

Usage:
    from src.cli.deployment.shell_commands import CommandRunner, HelmCommands

    helm = HelmCommands(CommandRunner(), binary="helm3")
    helm.update_repos()
"""

from .helm import (
    HelmCommands,
    HelmVariant,
    delete_args,
    plugin_install_args,
    repo_add_args,
    repo_update_args,
    upgrade_args,
)
from .runner import CommandRunner, redact_command
from .types import CommandResult

__all__ = [
    "CommandResult",
    "CommandRunner",
    "HelmCommands",
    "HelmVariant",
    "delete_args",
    "plugin_install_args",
    "redact_command",
    "repo_add_args",
    "repo_update_args",
    "upgrade_args",
]
