"""Main CLI application module.

This module provides the main entry point for the helm-deploy CLI, which
deploys a chart with Helm from declarative inputs and reports the outcome
to the GitHub deployment that triggered the run.

Commands:
- deploy: Repository setup, plugin installation, upgrade or delete
- render: Dry inspection of resolved inputs and Helm commands
"""

import typer
from dotenv import load_dotenv

from .commands import deploy, inputs_callback, render

# Create the main CLI application
app = typer.Typer(
    help="⎈ helm-deploy - Helm deployments driven by GitHub deployment events",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.callback()(inputs_callback)
app.command("deploy")(deploy)
app.command("render")(render)


def main() -> None:
    """Main entry point for the CLI."""
    # Local runs may keep INPUT_* and KUBECONFIG_FILE in a .env file
    load_dotenv(override=False)
    app()


if __name__ == "__main__":
    main()
