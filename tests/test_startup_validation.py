from __future__ import annotations

import asyncio

import httpx
import pytest

from repo_bootstrap.core.config import AppSettings
from repo_bootstrap.core.startup_validation import (
    ValidationError,
    validate_all,
    validate_git_available,
    validate_github_token,
)
from repo_bootstrap.integrations.git.git_ops import GitOps
from repo_bootstrap.integrations.process.subprocess_utils import CommandResult


class _GitRunner:
    def __init__(self, *, exit_code: int) -> None:
        self._exit_code = exit_code

    def run(self, *, args: list[str], cwd=None, env=None, timeout_seconds=None) -> CommandResult:
        return CommandResult(exit_code=self._exit_code, stdout="git version 2.43.0\n", stderr="")


def _transport(status_code: int) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/user"
        return httpx.Response(status_code, json={"login": "octocat"})

    return httpx.MockTransport(handler)


def test_validate_github_token_returns_login() -> None:
    login = asyncio.run(
        validate_github_token(
            token="token", api_base_url="https://api.github.test", transport=_transport(200)
        )
    )
    assert login == "octocat"


@pytest.mark.parametrize(
    ("status_code", "fragment"),
    [(401, "invalid or expired"), (403, "lacks required permissions"), (500, "status=500")],
)
def test_validate_github_token_maps_failures(status_code: int, fragment: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(
            validate_github_token(
                token="token",
                api_base_url="https://api.github.test",
                transport=_transport(status_code),
            )
        )
    assert fragment in str(excinfo.value)


def test_validate_git_available_reports_version() -> None:
    ops = GitOps(runner=_GitRunner(exit_code=0))  # type: ignore[arg-type]
    assert validate_git_available(git_ops=ops) == "git version 2.43.0"


def test_validate_all_collects_every_failure() -> None:
    settings = AppSettings(_env_file=None, github_token=None)
    ops = GitOps(runner=_GitRunner(exit_code=1))  # type: ignore[arg-type]
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(validate_all(settings=settings, git_ops=ops))
    message = str(excinfo.value)
    assert "GITHUB_TOKEN is required" in message
    assert "Git validation failed" in message


def test_validate_all_passes_with_working_token_and_git() -> None:
    settings = AppSettings(
        _env_file=None, github_token="token", github_api_base_url="https://api.github.test"
    )
    ops = GitOps(runner=_GitRunner(exit_code=0))  # type: ignore[arg-type]
    asyncio.run(validate_all(settings=settings, transport=_transport(200), git_ops=ops))
