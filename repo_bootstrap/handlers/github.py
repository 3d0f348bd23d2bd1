"""GitHub repository handler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from repo_bootstrap.core.config import DEFAULT_EVENT_SOURCE
from repo_bootstrap.domain.errors import EventValidationError, RepoCloneError, RepoCreationError
from repo_bootstrap.domain.models import (
    GithubRepoParams,
    InitializedGithubRepo,
    InitializedSource,
    Organization,
    User,
)
from repo_bootstrap.events.repo_created import build_repository_created_event
from repo_bootstrap.events.sink import EventSink
from repo_bootstrap.handlers.base import RepoHandler
from repo_bootstrap.integrations.git.git_ops import GitCommandError, GitOps
from repo_bootstrap.integrations.github.github_client import (
    CreatedRepository,
    GitHubApiError,
    GitHubClient,
    NewRepository,
)


class GithubRepoHandler(RepoHandler):
    """Creates and clones GitHub repositories."""

    params_type = GithubRepoParams
    repo_type = InitializedGithubRepo

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        *,
        client_provider: Callable[[], GitHubClient],
        git_ops: GitOps,
        event_sink: EventSink,
        host_url: str = "https://github.com",
        event_source: str = DEFAULT_EVENT_SOURCE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        # client_provider raises MissingCredentialError when no token is configured.
        self._client_provider = client_provider
        self._git_ops = git_ops
        self._event_sink = event_sink
        self._host_url = host_url
        self._event_source = event_source
        self._clock = clock

    async def create(self, params: GithubRepoParams) -> InitializedGithubRepo:
        client = self._client_provider()
        new_repo = NewRepository(name=params.name, description=params.description)

        try:
            await self._post_new_repository(client, params=params, new_repo=new_repo)
        except GitHubApiError as exc:
            raise RepoCreationError(
                name=params.name,
                owner=params.owner,
                status_code=exc.status_code,
                message=exc.message,
            ) from exc

        self._logger.info("GitHub repo created: %s/%s", params.owner, params.name)
        created = InitializedGithubRepo(name=params.name, organization=params.organization)

        url = params.full_url(self._host_url)
        try:
            event = build_repository_created_event(
                owner=params.owner,
                name=params.name,
                url=url,
                view_url=url,
                source=self._event_source,
                clock=self._clock,
            )
        except EventValidationError as exc:
            # The remote repository exists; hand it back for reconciliation.
            exc.repo = created
            raise
        self._event_sink.emit(event)
        return created

    def clone_local(self, repo: InitializedGithubRepo, path: str) -> InitializedSource:
        clone_url = repo.full_url(self._host_url)
        self._logger.debug("Cloning %s into %s", clone_url, path)
        try:
            self._git_ops.clone(url=clone_url, cwd=path)
        except GitCommandError as exc:
            raise RepoCloneError(url=clone_url, path=path, message=str(exc)) from exc
        return InitializedSource(path=f"{path}/{repo.name}")

    @staticmethod
    async def _post_new_repository(
        client: GitHubClient, *, params: GithubRepoParams, new_repo: NewRepository
    ) -> CreatedRepository:
        owner = params.organization
        if isinstance(owner, Organization):
            return await client.create_org_repository(org=owner.name, repo=new_repo)
        if isinstance(owner, User):
            return await client.create_user_repository(repo=new_repo)
        raise TypeError(f"Unknown GitHub owner type: {type(owner).__name__}")
