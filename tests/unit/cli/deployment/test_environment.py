"""Tests for Helm environment preparation."""

from src.cli.deployment.helm_deployer.constants import DeploymentConstants
from src.cli.deployment.helm_deployer.environment import prepare_environment


def test_sets_helm_home(constants: DeploymentConstants) -> None:
    environ: dict[str, str] = {}

    assert prepare_environment(environ, constants) is None

    assert environ["XDG_DATA_HOME"] == "/root/.helm/"
    assert environ["XDG_CACHE_HOME"] == "/root/.helm/"
    assert environ["XDG_CONFIG_HOME"] == "/root/.helm/"
    assert "KUBECONFIG" not in environ


def test_materializes_kubeconfig(constants: DeploymentConstants) -> None:
    environ = {"KUBECONFIG_FILE": "apiVersion: v1\nkind: Config\n"}

    path = prepare_environment(environ, constants)

    assert path == constants.KUBECONFIG_PATH
    assert path.read_text() == "apiVersion: v1\nkind: Config\n"
    assert environ["KUBECONFIG"] == str(path)
