"""Startup validation for required credentials and tools.

This module validates that the GitHub token works and that git is available
before the server accepts requests.
"""

from __future__ import annotations

import httpx

from repo_bootstrap.core.config import AppSettings
from repo_bootstrap.integrations.git.git_ops import GitCommandError, GitOps
from repo_bootstrap.integrations.github.github_client import (
    GitHubApiError,
    GitHubClient,
    GitHubClientConfig,
)


class ValidationError(RuntimeError):
    """Raised when validation fails."""


async def validate_github_token(
    *,
    token: str,
    api_base_url: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Validates GitHub token by fetching the authenticated user.

    Returns:
        Login of the token owner.

    Raises:
        ValidationError: If token is invalid or lacks required permissions.
    """
    client = GitHubClient(
        config=GitHubClientConfig(api_base_url=api_base_url, token=token),
        transport=transport,
    )
    try:
        user = await client.get_authenticated_user()
    except GitHubApiError as exc:
        if exc.status_code == 401:
            raise ValidationError(
                "GitHub token is invalid or expired. Please verify that GITHUB_TOKEN is correct."
            ) from exc
        if exc.status_code == 403:
            raise ValidationError(
                "GitHub token lacks required permissions. "
                "Please ensure the token can create repositories."
            ) from exc
        raise ValidationError(
            f"GitHub API error: status={exc.status_code}, message={exc.message}"
        ) from exc
    finally:
        await client.aclose()
    return user.login


def validate_git_available(*, git_ops: GitOps | None = None) -> str:
    """Validates that the git CLI can be started.

    Raises:
        ValidationError: If git is missing or broken.
    """
    ops = git_ops or GitOps()
    try:
        return ops.version()
    except GitCommandError as exc:
        raise ValidationError(f"git is not runnable: {exc.message}") from exc


async def validate_all(
    *,
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
    git_ops: GitOps | None = None,
) -> None:
    """Validates all required credentials and tools.

    Raises:
        ValidationError: If any validation fails.
    """
    errors: list[str] = []

    if not settings.github_token:
        errors.append("GITHUB_TOKEN is required but not set.")
    else:
        try:
            await validate_github_token(
                token=settings.github_token,
                api_base_url=settings.github_api_base_url,
                transport=transport,
            )
        except ValidationError as exc:
            errors.append(f"GitHub token validation failed: {exc}")

    try:
        validate_git_available(git_ops=git_ops)
    except ValidationError as exc:
        errors.append(f"Git validation failed: {exc}")

    if errors:
        error_message = "Startup validation failed:\n\n" + "\n".join(f"  - {err}" for err in errors)
        raise ValidationError(error_message)
