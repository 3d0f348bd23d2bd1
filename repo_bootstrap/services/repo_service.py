"""Repository service façade.

``RepoService`` is the interface callers depend on. ``LocalRepoService`` runs
the provider operations from the local machine (the repository itself is
remote) and dispatches each call to the handler registered for the variant
type of its argument.
"""

from __future__ import annotations

import logging

from repo_bootstrap.core.config import AppSettings
from repo_bootstrap.domain.errors import UnsupportedProviderError
from repo_bootstrap.domain.models import InitializedRepo, InitializedSource, RepoParams
from repo_bootstrap.events.sink import EventSink, LoggingEventSink
from repo_bootstrap.handlers.base import RepoHandler
from repo_bootstrap.handlers.github import GithubRepoHandler
from repo_bootstrap.integrations.git.git_ops import GitOps
from repo_bootstrap.integrations.github.github_client import GitHubClient, GitHubClientConfig


class RepoService:
    """Initializes and clones a project's source code repository."""

    async def initialize(self, params: RepoParams) -> InitializedRepo:
        """Creates the remote repository.

        Raises:
            RepoServiceError: If the repository can't be initialized.
        """

        raise NotImplementedError

    def clone_local(self, initialized_repo: InitializedRepo, path: str) -> InitializedSource:
        """Clones the repository to the local machine. Blocks until git exits.

        Raises:
            RepoServiceError: If the repository can't be cloned.
        """

        raise NotImplementedError


class LocalRepoService(RepoService):
    """``RepoService`` whose provider calls are issued from this process."""

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        *,
        settings: AppSettings,
        github_client: GitHubClient | None = None,
        git_ops: GitOps | None = None,
        event_sink: EventSink | None = None,
    ) -> None:
        self._settings = settings
        self._github_client = github_client
        self._git_ops = git_ops or GitOps(timeout_seconds=settings.git_clone_timeout_seconds)
        self._event_sink = event_sink or LoggingEventSink()
        self._handlers: dict[type, RepoHandler] = {}
        self.register_handler(
            GithubRepoHandler(
                client_provider=self._get_github_client,
                git_ops=self._git_ops,
                event_sink=self._event_sink,
                host_url=settings.github_host_url,
                event_source=settings.event_source,
            )
        )

    def register_handler(self, handler: RepoHandler) -> None:
        """Routes the handler's parameter and repo types to it."""

        self._handlers[handler.params_type] = handler
        self._handlers[handler.repo_type] = handler

    async def initialize(self, params: RepoParams) -> InitializedRepo:
        handler = self._handler_for(params)
        return await handler.create(params)

    def clone_local(self, initialized_repo: InitializedRepo, path: str) -> InitializedSource:
        handler = self._handler_for(initialized_repo)
        return handler.clone_local(initialized_repo, path)

    async def aclose(self) -> None:
        """Closes the shared GitHub client if one was opened."""

        if self._github_client is not None:
            await self._github_client.aclose()
            self._github_client = None

    def _handler_for(self, value: object) -> RepoHandler:
        handler = self._handlers.get(type(value))
        if handler is None:
            raise UnsupportedProviderError(value=value)
        return handler

    def _get_github_client(self) -> GitHubClient:
        # Checked on every call so a missing token fails before any request,
        # even when a client was injected.
        token = self._settings.require_github_token()
        if self._github_client is None:
            self._logger.debug(
                "Creating GitHub client: base_url=%s", self._settings.github_api_base_url
            )
            self._github_client = GitHubClient(
                config=GitHubClientConfig(
                    api_base_url=self._settings.github_api_base_url,
                    token=token,
                    timeout_seconds=self._settings.github_request_timeout_seconds,
                )
            )
        return self._github_client
