"""Helm plugin installation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from ..errors import PluginInstallFailure
from .cleanup import CleanupManager

if TYPE_CHECKING:
    from rich.console import Console

    from ..shell_commands import HelmCommands
    from .models import PluginSpec


class PluginInstaller:
    """Installs declared Helm plugins in order.

    The first failing install aborts the remaining plugins. After each
    successful install the plugin's residual clone directory is removed.
    """

    def __init__(
        self,
        commands: HelmCommands,
        console: Console,
        cleanup: CleanupManager | None = None,
    ) -> None:
        """Initialize the plugin installer.

        Args:
            commands: Helm command executor
            console: Rich console for output
            cleanup: Cleanup manager for the plugin cache
        """
        self.commands = commands
        self.console = console
        self.cleanup = cleanup or CleanupManager(console)

    def install_all(self, plugins: Iterable[PluginSpec]) -> int:
        """Install every plugin, returning how many were installed.

        Raises:
            PluginInstallFailure: On the first plugin that fails to install
        """
        installed = 0
        for plugin in plugins:
            if not plugin.url:
                logger.error("plugin.url could not be found")
                continue

            logger.debug(f"plugin: {plugin.url} version={plugin.version}")
            self.console.print(f"[cyan]Installing helm plugin {plugin.url}[/cyan]")

            result = self.commands.install_plugin(plugin)
            if not result.success:
                raise PluginInstallFailure(plugin.url, result.returncode, result.stdout)

            self.cleanup.remove_plugin_residue(plugin)
            installed += 1

        return installed
