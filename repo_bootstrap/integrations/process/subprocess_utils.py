"""Utilities for running subprocesses.

Commands are always passed as argv lists (no shell) and their output is
captured, never streamed to the parent's terminal.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Result of running a command."""

    exit_code: int
    stdout: str
    stderr: str


class CommandRunner:
    """Runs OS commands with controlled environment and output capturing."""

    def run(
        self,
        *,
        args: list[str],
        cwd: str | Path | None = None,
        env: dict[str, str] | None = None,
        timeout_seconds: int | None = None,
    ) -> CommandResult:
        """Runs a command and captures stdout/stderr.

        Args:
            args: Command arguments (no shell).
            cwd: Working directory.
            env: Environment variables to merge with current environment.
            timeout_seconds: Optional timeout.

        Returns:
            Captured result.

        Raises:
            TimeoutError: If timeout is exceeded.
            OSError: If the process cannot be started or ``cwd`` does not exist.
        """

        merged_env = os.environ.copy()
        if env is not None:
            merged_env.update(env)

        logger.debug("Running command: args=%s cwd=%s", args[0] if args else "", cwd)
        try:
            completed = subprocess.run(
                args,
                cwd=str(cwd) if cwd is not None else None,
                env=merged_env,
                check=False,
                text=True,
                capture_output=True,
                timeout=timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise TimeoutError(
                f"Command timed out after {timeout_seconds} seconds: {args[0]}"
            ) from exc
        return CommandResult(
            exit_code=int(completed.returncode),
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
