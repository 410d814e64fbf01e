"""Process environment preparation for Helm."""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path

from loguru import logger

from .constants import DeploymentConstants


def prepare_environment(
    environ: MutableMapping[str, str] | None = None,
    constants: DeploymentConstants | None = None,
) -> Path | None:
    """Point Helm at its home directory and materialize the kubeconfig.

    Sets XDG_DATA_HOME, XDG_CACHE_HOME and XDG_CONFIG_HOME to the Helm home.
    When KUBECONFIG_FILE holds a kubeconfig, writes it to disk and points
    KUBECONFIG at it.

    Args:
        environ: Environment to mutate (defaults to os.environ)
        constants: Optional deployment constants

    Returns:
        Path of the written kubeconfig, or None if none was supplied
    """
    env = os.environ if environ is None else environ
    constants = constants or DeploymentConstants()

    for var in constants.XDG_HOME_VARS:
        env[var] = constants.HELM_HOME

    kubeconfig = env.get(constants.KUBECONFIG_SOURCE_VAR)
    if not kubeconfig:
        logger.debug(f'env: KUBECONFIG="{env.get("KUBECONFIG", "")}"')
        return None

    path = constants.KUBECONFIG_PATH
    path.write_text(kubeconfig)
    path.chmod(0o600)
    env["KUBECONFIG"] = str(path)
    logger.debug(f'env: KUBECONFIG="{path}"')
    return path
