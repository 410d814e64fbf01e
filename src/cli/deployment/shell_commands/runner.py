"""Command runner for executing external tools.

This module provides the base command execution functionality used by
the Helm command module. Commands are always passed to the OS as discrete
arguments, never through a shell, so chart names, values and file paths
cannot inject shell syntax.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from ..errors import ToolInvocationFailure
from .types import CommandResult


class CommandRunner:
    """Low-level command executor with consistent result handling.

    Runs one process at a time and blocks until it exits. Output is merged
    (stderr into stdout) and streamed line by line to an optional sink.
    """

    def __init__(self, working_dir: Path | None = None) -> None:
        """Initialize the command runner.

        Args:
            working_dir: Directory commands run from (defaults to the
                         current working directory at call time).
        """
        self.working_dir = working_dir

    def run(
        self,
        cmd: Sequence[str],
        *,
        ignore_failure: bool = False,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Execute a command and return its structured result.

        Args:
            cmd: Binary and arguments as a sequence
            ignore_failure: When True a non-zero exit is returned rather than raised
            on_output: Callback invoked with each non-empty output line

        Returns:
            CommandResult with success status, collected output, and return code

        Raises:
            ToolInvocationFailure: If the command fails and ignore_failure is False
        """
        logger.debug(f"exec: {' '.join(redact_command(cmd))}")

        try:
            process = subprocess.Popen(
                list(cmd),
                cwd=self.working_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # Merge stderr into stdout
                text=True,
                env=os.environ.copy(),
            )
        except FileNotFoundError as e:
            if ignore_failure:
                return CommandResult(success=False, stderr=str(e), returncode=127)
            raise ToolInvocationFailure(cmd, 127, str(e)) from e

        stdout_lines: list[str] = []

        # Closes the pipe and reaps the child on any exit from the block
        with process:
            if process.stdout:
                for line in iter(process.stdout.readline, ""):
                    line = line.rstrip("\n")
                    if line:
                        stdout_lines.append(line)
                        if on_output:
                            on_output(line)

            process.wait()

        result = CommandResult(
            success=process.returncode == 0,
            stdout="\n".join(stdout_lines),
            stderr="",  # stderr is merged into stdout
            returncode=process.returncode or 0,
        )

        if not result.success and not ignore_failure:
            raise ToolInvocationFailure(cmd, result.returncode, result.stdout)
        return result


def redact_command(cmd: Sequence[str]) -> list[str]:
    """Mask credentials before a command line is logged."""
    return [
        "--password=***" if arg.startswith("--password=") else arg for arg in cmd
    ]
