"""Errors surfaced by the repository service.

Each failure path raises a distinct subclass so callers can tell a missing
credential from a provider failure or a dangling remote repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repo_bootstrap.domain.models import InitializedRepo


class RepoServiceError(RuntimeError):
    """Base class for repository service failures."""


class MissingCredentialError(RepoServiceError):
    """Raised when a required credential is not configured.

    This is a configuration error and is raised before any network call.
    """

    def __init__(self, *, variable: str) -> None:
        super().__init__(f"{variable} env var must be populated.")
        self.variable = variable


class UnsupportedProviderError(RepoServiceError):
    """Raised when no handler is registered for a parameter or repo type."""

    def __init__(self, *, value: object) -> None:
        super().__init__(f"No repo handler registered for {type(value).__name__}.")
        self.value_type = type(value)


class RepoCreationError(RepoServiceError):
    """Raised when the provider rejects or fails a repository creation."""

    def __init__(self, *, name: str, owner: str, status_code: int | None, message: str) -> None:
        super().__init__(
            f"Failed to create repo {owner}/{name}: status={status_code}, message={message}"
        )
        self.name = name
        self.owner = owner
        self.status_code = status_code
        self.message = message


class RepoCloneError(RepoServiceError):
    """Raised when the local clone of a repository fails."""

    def __init__(self, *, url: str, path: str, message: str) -> None:
        super().__init__(f"Failed to clone {url} into {path}: {message}")
        self.url = url
        self.path = path


class EventValidationError(RepoServiceError):
    """Raised when the repository-created event cannot be built.

    The remote repository already exists when this is raised. ``repo`` is set
    by the handler so callers can reconcile or clean up.
    """

    def __init__(self, message: str, *, repo: InitializedRepo | None = None) -> None:
        super().__init__(message)
        self.repo = repo
