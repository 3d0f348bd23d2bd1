"""Provider-tagged request and result types.

``RepoParams`` and ``InitializedRepo`` are unions discriminated by
``provider``. A new provider adds one variant to each union and registers a
handler for both types; existing variants are untouched.

Account and repository names are restricted to the characters GitHub allows,
so a name always stays a single URL path segment.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

GITHUB_NAME_PATTERN = r"^[A-Za-z0-9._-]+$"


def _reject_dot_segments(value: str) -> str:
    if value in {".", ".."}:
        raise ValueError("name must not be '.' or '..'")
    return value


GithubName = Annotated[
    str,
    StringConstraints(min_length=1, pattern=GITHUB_NAME_PATTERN),
    AfterValidator(_reject_dot_segments),
]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class User(_FrozenModel):
    """A personal GitHub account."""

    kind: Literal["user"] = "user"
    name: GithubName


class Organization(_FrozenModel):
    """A GitHub organization."""

    kind: Literal["organization"] = "organization"
    name: GithubName


GithubUser = Annotated[Union[User, Organization], Field(discriminator="kind")]


class _GithubRepoRef(_FrozenModel):
    provider: Literal["github"] = "github"
    name: GithubName = Field(..., description="Repository name.")
    organization: GithubUser

    @property
    def owner(self) -> str:
        return self.organization.name

    def full_url(self, host_url: str = "https://github.com") -> str:
        """Returns the canonical HTTPS URL of the repository."""

        return f"{host_url.rstrip('/')}/{self.owner}/{self.name}"


class GithubRepoParams(_GithubRepoRef):
    """Parameters for creating a GitHub repository."""

    description: str = ""


class InitializedGithubRepo(_GithubRepoRef):
    """A GitHub repository the API has confirmed exists."""


# Single-variant today. A second provider turns these into tagged unions:
#   RepoParams = Annotated[
#       Union[GithubRepoParams, GitlabRepoParams], Field(discriminator="provider")
#   ]
#   InitializedRepo = Annotated[
#       Union[InitializedGithubRepo, InitializedGitlabRepo], Field(discriminator="provider")
#   ]
RepoParams = GithubRepoParams
InitializedRepo = InitializedGithubRepo


class InitializedSource(_FrozenModel):
    """Location of a cloned working copy."""

    path: str
