"""GitHub REST API wrapper.

This module uses GitHub REST v3 endpoints. Authentication is performed via
``Authorization: Bearer <token>`` header. Requests are issued through a single
``httpx.AsyncClient`` that may be shared by concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError


class GitHubApiError(RuntimeError):
    """Raised when a GitHub API call does not produce a usable success response.

    ``status_code`` is None when no response was received.
    """

    def __init__(self, *, status_code: int | None, message: str) -> None:
        super().__init__(f"GitHub API error: status={status_code}, message={message}")
        self.status_code = status_code
        self.message = message


class NewRepository(BaseModel):
    """Body of a repository creation request."""

    name: str
    description: str
    private: bool = False
    has_issues: bool = True
    has_projects: bool = True
    has_wiki: bool = True


class CreatedRepository(BaseModel):
    """Subset of repository creation response fields."""

    id: int = Field(..., ge=1)
    name: str
    full_name: str
    html_url: str
    clone_url: str | None = None


class AuthenticatedUser(BaseModel):
    """Subset of ``GET /user`` response fields."""

    login: str


@dataclass(frozen=True)
class GitHubClientConfig:
    """GitHub client configuration."""

    api_base_url: str
    token: str
    timeout_seconds: float = 30.0


class GitHubClient:
    """Thin async wrapper around GitHub REST API."""

    def __init__(
        self,
        *,
        config: GitHubClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=self._config.api_base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self._config.token}",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "repo-bootstrap",
            },
            timeout=httpx.Timeout(self._config.timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Closes underlying HTTP client."""

        await self._client.aclose()

    async def create_user_repository(self, *, repo: NewRepository) -> CreatedRepository:
        """Creates a repository for the authenticated user."""

        return await self._create_repository("/user/repos", repo=repo)

    async def create_org_repository(self, *, org: str, repo: NewRepository) -> CreatedRepository:
        """Creates a repository in ``org``."""

        return await self._create_repository(f"/orgs/{quote(org, safe='')}/repos", repo=repo)

    async def get_authenticated_user(self) -> AuthenticatedUser:
        """Fetches the user the token belongs to."""

        resp = await self._request("GET", "/user")
        return self._parse(resp, AuthenticatedUser)

    async def _create_repository(self, path: str, *, repo: NewRepository) -> CreatedRepository:
        resp = await self._request("POST", path, json=repo.model_dump())
        return self._parse(resp, CreatedRepository)

    async def _request(
        self, method: str, path: str, *, json: dict[str, object] | None = None
    ) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise GitHubApiError(status_code=None, message=f"request failed: {exc}") from exc
        self._raise_for_error(resp)
        return resp

    @staticmethod
    def _parse(resp: httpx.Response, model: type[BaseModel]):
        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise GitHubApiError(
                status_code=resp.status_code,
                message=f"Unexpected payload for {model.__name__}.",
            ) from exc

    @staticmethod
    def _raise_for_error(resp: httpx.Response) -> None:
        if 200 <= resp.status_code < 300:
            return
        message = resp.text
        raise GitHubApiError(status_code=resp.status_code, message=message)
