"""Tests for the GitHub pull request client (HTTP mocked)."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from vulnfixer.core.github import GitHubClient, PullRequestCreator
from vulnfixer.exceptions import PullRequestError


def _response(status: int, json_body: dict | None = None) -> httpx.Response:
    request = httpx.Request("POST", "https://api.github.com/repos/acme/shop/pulls")
    return httpx.Response(status, json=json_body or {}, request=request)


class TestGitHubClient:
    def test_satisfies_protocol(self):
        assert isinstance(GitHubClient("t"), PullRequestCreator)

    @pytest.mark.anyio
    async def test_create_pull_request(self):
        client = GitHubClient("t")
        with patch.object(
            client._client, "post", new_callable=AsyncMock, return_value=_response(201, {"number": 7})
        ) as post:
            await client.create_pull_request("acme", "shop", "fix", "main", "title", "body")

        post.assert_awaited_once_with(
            "/repos/acme/shop/pulls",
            json={"title": "title", "head": "fix", "base": "main", "body": "body"},
        )
        await client.close()

    @pytest.mark.anyio
    async def test_client_error_raises(self):
        client = GitHubClient("t")
        with patch.object(
            client._client,
            "post",
            new_callable=AsyncMock,
            return_value=_response(422, {"message": "A pull request already exists"}),
        ):
            with pytest.raises(PullRequestError, match="422"):
                await client.create_pull_request("acme", "shop", "fix", "main", "t", "b")
        await client.close()

    @pytest.mark.anyio
    async def test_server_error_retried(self):
        client = GitHubClient("t")
        responses = [_response(502), _response(201, {"number": 1})]
        with patch.object(client._client, "post", new_callable=AsyncMock, side_effect=responses) as post:
            with patch("asyncio.sleep", new_callable=AsyncMock) as sleep:
                await client.create_pull_request("acme", "shop", "fix", "main", "t", "b")
        assert post.await_count == 2
        sleep.assert_awaited_once()
        await client.close()

    @pytest.mark.anyio
    async def test_timeouts_exhaust_retries(self):
        client = GitHubClient("t")
        with patch.object(
            client._client,
            "post",
            new_callable=AsyncMock,
            side_effect=httpx.ReadTimeout("slow"),
        ) as post:
            with patch("asyncio.sleep", new_callable=AsyncMock):
                with pytest.raises(PullRequestError, match="timed out"):
                    await client.create_pull_request("acme", "shop", "fix", "main", "t", "b")
        assert post.await_count == 3
        await client.close()
