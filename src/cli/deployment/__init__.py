"""Deployment package for Helm releases.

The package is organized into subpackages for modularity:
- shell_commands: Process execution and Helm argument synthesis
- helm_deployer: Input resolution and the deployment pipeline
"""

from .errors import DeploymentError
from .helm_deployer import HelmDeployer

__all__ = ["HelmDeployer", "DeploymentError"]
