"""CDEvents ``repository.created`` event.

Models follow the CDEvents 0.3.0 schema for
``dev.cdevents.repository.created.0.1.1``. Every formatted field is validated
when the model is constructed, so an event that exists is a valid event.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from repo_bootstrap.core.config import DEFAULT_EVENT_SOURCE
from repo_bootstrap.domain.errors import EventValidationError

REPOSITORY_CREATED_EVENT_TYPE = "dev.cdevents.repository.created.0.1.1"
CDEVENTS_SPEC_VERSION = "0.3.0"

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = (
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

_HTTP_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    try:
        _HTTP_URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"not an absolute http(s) URL: {value!r}") from exc
    return value


NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
SemVer = Annotated[str, StringConstraints(pattern=SEMVER_PATTERN)]
HttpUrlStr = Annotated[str, StringConstraints(min_length=1), AfterValidator(_check_http_url)]


class _EventModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class RepositoryCreatedEventContext(_EventModel):
    id: NonEmptyStr
    source: NonEmptyStr
    timestamp: AwareDatetime
    type: Literal["dev.cdevents.repository.created.0.1.1"] = REPOSITORY_CREATED_EVENT_TYPE
    version: SemVer


class RepositoryCreatedEventSubjectContent(_EventModel):
    name: NonEmptyStr
    owner: str | None = None
    url: HttpUrlStr
    view_url: HttpUrlStr | None = Field(default=None, alias="viewUrl")


class RepositoryCreatedEventSubject(_EventModel):
    id: NonEmptyStr
    source: str | None = None
    type: Literal["repository"] = "repository"
    content: RepositoryCreatedEventSubjectContent


class RepositoryCreatedEvent(_EventModel):
    """A repository was created on a hosting provider."""

    context: RepositoryCreatedEventContext
    subject: RepositoryCreatedEventSubject
    custom_data: Any | None = Field(default=None, alias="customData")
    custom_data_content_type: str | None = Field(default=None, alias="customDataContentType")

    def to_json(self) -> str:
        """Serializes with CDEvents field names, omitting unset optionals."""

        return self.model_dump_json(by_alias=True, exclude_none=True)


def build_repository_created_event(
    *,
    owner: str,
    name: str,
    url: str,
    view_url: str | None = None,
    source: str = DEFAULT_EVENT_SOURCE,
    clock: Callable[[], datetime] | None = None,
) -> RepositoryCreatedEvent:
    """Builds a validated ``repository.created`` event.

    Args:
        owner: User or organization that owns the repository.
        name: Repository name.
        url: Canonical repository URL.
        view_url: Browser URL; defaults to ``url``.
        source: Tag identifying this tool as the originator.
        clock: Returns the current time; defaults to UTC now.

    Raises:
        EventValidationError: If any field fails validation.
    """

    identifier = f"{owner}/{name}"
    timestamp = clock() if clock is not None else datetime.now(timezone.utc)
    try:
        return RepositoryCreatedEvent(
            context=RepositoryCreatedEventContext(
                id=identifier,
                source=source,
                timestamp=timestamp,
                version=CDEVENTS_SPEC_VERSION,
            ),
            subject=RepositoryCreatedEventSubject(
                id=identifier,
                source=source,
                content=RepositoryCreatedEventSubjectContent(
                    name=name,
                    owner=owner,
                    url=url,
                    view_url=view_url if view_url is not None else url,
                ),
            ),
        )
    except ValidationError as exc:
        raise EventValidationError(
            f"Invalid repository created event for {identifier}: {exc}"
        ) from exc
