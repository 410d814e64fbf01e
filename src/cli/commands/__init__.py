"""CLI command modules.

Command Groups:
- deploy: Run the Helm deployment pipeline
- render: Print the resolved configuration and planned Helm commands
"""

from .deploy import deploy, inputs_callback, render

__all__ = ["deploy", "inputs_callback", "render"]
