"""Helm deployment commands.

Inputs are given as global options (or as GitHub Actions ``INPUT_*``
environment variables) and shared by every command:

    helm-deploy --release web --namespace prod --chart app deploy
    helm-deploy --release web --namespace prod --chart app --track canary render
"""

from typing import Annotated, Any

import typer
from rich.markup import escape
from rich.table import Table

from src.cli.context import build_cli_context, get_cli_context
from src.cli.deployment.helm_deployer import HelmDeployer, planned_commands
from src.cli.deployment.helm_deployer.inputs import InputResolver, build_config
from src.cli.deployment.shell_commands import redact_command
from src.cli.shared.console import with_error_handling
from src.cli.shared.logging import configure_logging

# ---------------------------------------------------------------------------
# Input options
# ---------------------------------------------------------------------------


def _input(name: str, help_text: str) -> Any:
    """Option for an action input, also read from INPUT_<NAME> (hyphens kept)."""
    return typer.Option(
        f"--{name.replace('_', '-')}",
        envvar=f"INPUT_{name.replace('_', '-').upper()}",
        help=help_text,
        show_envvar=True,
    )


def inputs_callback(
    ctx: typer.Context,
    release: Annotated[
        str | None, _input("release", "App name; base of the release name")
    ] = None,
    namespace: Annotated[
        str | None, _input("namespace", "Kubernetes namespace")
    ] = None,
    chart: Annotated[
        str | None, _input("chart", "Chart reference, or 'app' for the bundled chart")
    ] = None,
    track: Annotated[
        str | None, _input("track", "Release track (stable, canary, ...)")
    ] = None,
    chart_version: Annotated[
        str | None, _input("chart_version", "Chart version to deploy")
    ] = None,
    values: Annotated[
        str | None, _input("values", "JSON object of --set values")
    ] = None,
    value_files: Annotated[
        str | None, _input("value_files", "JSON list of values files, or one path")
    ] = None,
    task: Annotated[
        str | None, _input("task", "'remove' deletes the release")
    ] = None,
    version: Annotated[
        str | None, _input("version", "App version, set as app.version")
    ] = None,
    remove_canary: Annotated[
        str | None, _input("remove_canary", "Delete the canary release first")
    ] = None,
    timeout: Annotated[
        str | None, _input("timeout", "Helm --timeout")
    ] = None,
    dry_run: Annotated[
        str | None, _input("dry-run", "Pass --dry-run to helm")
    ] = None,
    atomic: Annotated[
        str | None, _input("atomic", "Roll back failed upgrades (default true)")
    ] = None,
    helm: Annotated[
        str | None, _input("helm", "Helm binary: helm3 or a legacy helm")
    ] = None,
    repo: Annotated[
        str | None, _input("repo", "Chart repository URL")
    ] = None,
    repo_alias: Annotated[
        str | None, _input("repo-alias", "Chart repository alias")
    ] = None,
    repo_username: Annotated[
        str | None, _input("repo-username", "Chart repository username")
    ] = None,
    repo_password: Annotated[
        str | None, _input("repo-password", "Chart repository password")
    ] = None,
    plugins: Annotated[
        str | None, _input("plugins", "JSON list of plugins, or one plugin URL")
    ] = None,
    token: Annotated[
        str | None, _input("token", "Token for GitHub deployment statuses")
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging")] = False,
) -> None:
    """Collect deployment inputs for the selected command."""
    configure_logging(debug)

    # Keyed by external input name, as the resolver looks them up
    parameters = {
        "release": release,
        "namespace": namespace,
        "chart": chart,
        "track": track,
        "chart-version": chart_version,
        "values": values,
        "value-files": value_files,
        "task": task,
        "version": version,
        "remove-canary": remove_canary,
        "timeout": timeout,
        "dry-run": dry_run,
        "atomic": atomic,
        "helm": helm,
        "repo": repo,
        "repo-alias": repo_alias,
        "repo-username": repo_username,
        "repo-password": repo_password,
        "plugins": plugins,
        "token": token,
    }
    ctx.obj = build_cli_context(
        {key: value for key, value in parameters.items() if value is not None}
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@with_error_handling
def deploy(ctx: typer.Context) -> None:
    """Deploy (or remove) the release with Helm.

    Runs repository setup, plugin installation and the upgrade or delete,
    reporting pending/success/failure to the triggering GitHub deployment.
    """
    cli = get_cli_context(ctx)
    deployer = HelmDeployer(
        cli.console.console,
        cli.parameters,
        cli.github,
        runner=cli.runner,
        constants=cli.constants,
    )
    deployer.run()

    config = deployer.resolve_config()
    action = "removed" if config.is_removal else "deployed"
    cli.console.ok(f"Release {config.release} {action} in namespace {config.namespace}")


@with_error_handling
def render(ctx: typer.Context) -> None:
    """Show the resolved configuration and the Helm commands without running them."""
    cli = get_cli_context(ctx)
    resolver = InputResolver(cli.parameters, cli.github.deployment)
    config = build_config(resolver, cli.constants)

    table = Table(title="Resolved configuration", show_header=True)
    table.add_column("Input", style="cyan")
    table.add_column("Value")
    for key, value in config.redacted().items():
        table.add_row(key, escape(str(value)))
    cli.console.print(table)

    cli.console.print("\n[bold]Helm commands:[/bold]")
    for command in planned_commands(config):
        line = " ".join(redact_command(command))
        cli.console.print(f"  {escape(line)}", highlight=False)
