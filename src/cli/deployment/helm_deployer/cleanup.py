"""Plugin cache cleanup.

``helm plugin install`` can leave its clone directory behind in the plugin
cache. On a cache volume shared across runs those directories pile up and
break later installs of the same plugin, so they are removed after every
install. Removal is best-effort.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ..errors import best_effort
from .constants import DeploymentConstants

if TYPE_CHECKING:
    from rich.console import Console

    from .models import PluginSpec

_TRAILING_SLASHES = re.compile(r"/+$")
_SEPARATOR_RUNS = re.compile(r"[:/]+")


def plugin_slug(url: str) -> str:
    """Return the directory name Helm derives from a plugin URL.

    Example:
        >>> plugin_slug("https://github.com/databus23/helm-diff/")
        'https-github.com-databus23-helm-diff'
    """
    return _SEPARATOR_RUNS.sub("-", _TRAILING_SLASHES.sub("", url.strip()))


class CleanupManager:
    """Removes residue left in the Helm plugin cache."""

    def __init__(
        self,
        console: Console,
        constants: DeploymentConstants | None = None,
    ) -> None:
        """Initialize the cleanup manager.

        Args:
            console: Rich console for output
            constants: Optional deployment constants
        """
        self.console = console
        self.constants = constants or DeploymentConstants()

    def residual_plugin_dir(self, plugin: PluginSpec) -> Path:
        """Path of the clone directory a plugin install may leave behind."""
        return self.constants.PLUGIN_DIR / plugin_slug(plugin.url)

    def remove_plugin_residue(self, plugin: PluginSpec) -> None:
        """Recursively remove a plugin's residual clone directory.

        Never raises; failures are logged as warnings.
        """
        clone_dir = self.residual_plugin_dir(plugin)
        if clone_dir.exists():
            logger.debug(f"{clone_dir} exists")
        else:
            logger.debug(f"{clone_dir} does not exist")

        with best_effort(f"remove plugin residue {clone_dir}"):
            try:
                shutil.rmtree(clone_dir)
            except FileNotFoundError:
                return
            self.console.print(f"[dim]Removed plugin residue {clone_dir}[/dim]")
