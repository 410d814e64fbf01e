"""Deployment constants and configuration.

This module centralizes all magic strings, paths, and default values
used throughout the deployment process.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DeploymentConstants:
    """Constants for Helm deployment.

    All attributes are class-level and immutable.
    """

    # Helm home used for data, cache and config (XDG_*_HOME)
    HELM_HOME: str = "/root/.helm/"
    XDG_HOME_VARS: tuple[str, ...] = (
        "XDG_DATA_HOME",
        "XDG_CACHE_HOME",
        "XDG_CONFIG_HOME",
    )

    # Where `helm plugin install` clones plugins under HELM_HOME
    PLUGIN_DIR: Path = Path("/root/.helm/helm/plugins/")

    # Generic chart bundled with the deploy image, selected with chart "app"
    APP_CHART_ALIAS: str = "app"
    APP_CHART_PATH: str = "/usr/src/charts/app"

    # Kubeconfig materialized from the KUBECONFIG_FILE environment variable
    KUBECONFIG_SOURCE_VAR: str = "KUBECONFIG_FILE"
    KUBECONFIG_PATH: Path = Path("./kubeconfig.yml")

    # Input defaults
    DEFAULT_TRACK: str = "stable"
    CANARY_TRACK: str = "canary"
    DEFAULT_HELM: str = "helm3"
    REMOVE_TASK: str = "remove"

    # GitHub deployment statuses
    STATUS_ACCEPT_HEADER: str = "application/vnd.github.ant-man-preview+json"
    STATUS_TIMEOUT_SECONDS: float = 30.0
