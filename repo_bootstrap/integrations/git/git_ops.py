"""Git operations used to establish local working copies.

Success is decided by the git exit status only; stdout is never parsed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from repo_bootstrap.integrations.process.subprocess_utils import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

_NON_INTERACTIVE_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class GitCommandError(RuntimeError):
    """Raised when a git command fails."""

    def __init__(
        self,
        *,
        message: str,
        command_display: str | None = None,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        parts: list[str] = [message]
        if command_display:
            parts.append(f"command={command_display}")
        if exit_code is not None:
            parts.append(f"exit_code={exit_code}")
        if stderr:
            stderr_text = stderr.strip()
            if len(stderr_text) > 2000:
                stderr_text = stderr_text[-2000:]
            parts.append(f"stderr={stderr_text}")
        super().__init__(" | ".join(parts))
        self.message = message
        self.exit_code = exit_code
        self.stderr = stderr


class GitOps:
    """Runs the git CLI."""

    def __init__(
        self,
        *,
        runner: CommandRunner | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        self._runner = runner or CommandRunner()
        self._timeout_seconds = timeout_seconds

    def clone(self, *, url: str, cwd: str | Path) -> None:
        """Runs ``git clone <url>`` inside ``cwd``.

        Git creates a directory named after the repository under ``cwd``. Credential
        prompts are disabled so an inaccessible repository fails instead of waiting
        on stdin.

        Raises:
            GitCommandError: If git cannot be started, times out or exits non-zero.
        """

        args = ["git", "clone", url]
        result = self._run(args=args, cwd=cwd, env=_NON_INTERACTIVE_ENV)
        if result.exit_code != 0:
            error_msg = "git clone failed"
            if "403" in result.stderr or "Permission" in result.stderr or "denied" in result.stderr:
                error_msg = (
                    "git clone failed: Authentication or permission error. "
                    "Please verify that the repository is reachable with the local git credentials."
                )
            raise GitCommandError(
                message=error_msg,
                command_display=self._format_command_for_display(args),
                exit_code=result.exit_code,
                stderr=result.stderr,
            )

    def version(self) -> str:
        """Returns ``git --version`` output."""

        args = ["git", "--version"]
        result = self._run(args=args)
        if result.exit_code != 0:
            raise GitCommandError(
                message="git --version failed",
                command_display=self._format_command_for_display(args),
                exit_code=result.exit_code,
                stderr=result.stderr,
            )
        return result.stdout.strip()

    def _run(
        self,
        *,
        args: list[str],
        cwd: str | Path | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        try:
            return self._runner.run(
                args=args, cwd=cwd, env=env, timeout_seconds=self._timeout_seconds
            )
        except TimeoutError as exc:
            raise GitCommandError(
                message=f"git timed out after {self._timeout_seconds} seconds",
                command_display=self._format_command_for_display(args),
            ) from exc
        except OSError as exc:
            # Missing git binary or missing working directory.
            raise GitCommandError(
                message=f"failed to start git: {exc}",
                command_display=self._format_command_for_display(args),
            ) from exc

    @staticmethod
    def _format_command_for_display(args: list[str]) -> str:
        return " ".join(args)
