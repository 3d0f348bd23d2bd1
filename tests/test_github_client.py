from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from repo_bootstrap.integrations.github.github_client import (
    GitHubApiError,
    GitHubClient,
    GitHubClientConfig,
    NewRepository,
)


def _client(handler) -> GitHubClient:
    return GitHubClient(
        config=GitHubClientConfig(api_base_url="https://api.github.test", token="secret"),
        transport=httpx.MockTransport(handler),
    )


def _created_payload(name: str, owner: str) -> dict[str, object]:
    return {
        "id": 1,
        "name": name,
        "full_name": f"{owner}/{name}",
        "html_url": f"https://github.com/{owner}/{name}",
        "clone_url": f"https://github.com/{owner}/{name}.git",
    }


def test_create_org_repository_posts_to_org_endpoint() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=_created_payload("tool", "acme"))

    async def scenario():
        client = _client(handler)
        try:
            return await client.create_org_repository(
                org="acme", repo=NewRepository(name="tool", description="d")
            )
        finally:
            await client.aclose()

    created = asyncio.run(scenario())
    assert created.full_name == "acme/tool"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/orgs/acme/repos"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"
    assert json.loads(request.content) == {
        "name": "tool",
        "description": "d",
        "private": False,
        "has_issues": True,
        "has_projects": True,
        "has_wiki": True,
    }


def test_create_user_repository_posts_to_user_endpoint() -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(201, json=_created_payload("tool", "octocat"))

    async def scenario():
        client = _client(handler)
        try:
            await client.create_user_repository(repo=NewRepository(name="tool", description=""))
        finally:
            await client.aclose()

    asyncio.run(scenario())
    assert paths == ["/user/repos"]


def test_error_status_raises_github_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "name already exists on this account"})

    async def scenario():
        client = _client(handler)
        try:
            await client.create_user_repository(repo=NewRepository(name="dup", description=""))
        finally:
            await client.aclose()

    with pytest.raises(GitHubApiError) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.status_code == 422
    assert "already exists" in excinfo.value.message


def test_transport_failure_raises_github_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        client = _client(handler)
        try:
            await client.get_authenticated_user()
        finally:
            await client.aclose()

    with pytest.raises(GitHubApiError) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.status_code is None


def test_unexpected_payload_raises_github_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json=["not", "an", "object"])

    async def scenario():
        client = _client(handler)
        try:
            await client.create_org_repository(
                org="acme", repo=NewRepository(name="tool", description="")
            )
        finally:
            await client.aclose()

    with pytest.raises(GitHubApiError) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.status_code == 201


def test_org_name_is_escaped_as_a_single_path_segment() -> None:
    raw_paths: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        raw_paths.append(request.url.raw_path)
        return httpx.Response(201, json=_created_payload("tool", "acme"))

    async def scenario():
        client = _client(handler)
        try:
            await client.create_org_repository(
                org="acme/teams?x=1#", repo=NewRepository(name="tool", description="")
            )
        finally:
            await client.aclose()

    asyncio.run(scenario())
    assert raw_paths == [b"/orgs/acme%2Fteams%3Fx%3D1%23/repos"]
