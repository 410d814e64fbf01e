"""Helm deployer package.

This package turns deployment inputs into a sequence of Helm invocations,
with each concern separated into its own module:

- inputs: Layered input resolution and decoding into a ResolvedConfig
- naming: Release naming and chart targeting
- helm_release: Repository setup and the terminal upgrade/delete step
- plugins: Helm plugin installation
- cleanup: Plugin cache residue removal
- status: Deployment-status reporting
- environment: Helm home and kubeconfig setup

The HelmDeployer class in deployer.py orchestrates these components.

Usage:
    from src.cli.deployment.helm_deployer import HelmDeployer

    deployer = HelmDeployer(console, {"release": "web", "namespace": "prod", "chart": "app"})
    deployer.run()
"""

from .cleanup import CleanupManager, plugin_slug
from .deployer import DeploymentStage, HelmDeployer, planned_commands
from .github_context import GitHubContext
from .helm_release import HelmReleaseManager
from .inputs import InputResolver, build_config
from .models import PluginSpec, ResolvedConfig
from .naming import chart_ref, release_name
from .plugins import PluginInstaller
from .status import DeploymentState, DeploymentStatusReporter

__all__ = [
    "HelmDeployer",
    "DeploymentStage",
    "planned_commands",
    # Component classes for testing/extension
    "CleanupManager",
    "DeploymentState",
    "DeploymentStatusReporter",
    "GitHubContext",
    "HelmReleaseManager",
    "InputResolver",
    "PluginInstaller",
    "PluginSpec",
    "ResolvedConfig",
    "build_config",
    "chart_ref",
    "plugin_slug",
    "release_name",
]
