"""Async GitHub API client used to open fix pull requests."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, runtime_checkable

import httpx
import structlog

from vulnfixer.exceptions import PullRequestError

log = structlog.get_logger("vulnfixer.github")

_MAX_RETRIES = 3
_RETRY_BASE_DELAY = 1.0  # seconds


@runtime_checkable
class PullRequestCreator(Protocol):
    """Anything that can open a pull request on the hosting service."""

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> None: ...


class GitHubClient:
    """Thin async wrapper around the GitHub REST pulls endpoint."""

    def __init__(self, token: str, base_url: str = "https://api.github.com") -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "Authorization": f"token {token}",
            },
            timeout=30.0,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> None:
        """Open a pull request from *head* into *base*.

        Raises :class:`PullRequestError` if GitHub rejects the request.
        """
        payload = {"title": title, "head": head, "base": base, "body": body}
        resp = await self._post_with_retry(f"/repos/{owner}/{repo}/pulls", payload)
        if resp.status_code >= 300:
            raise PullRequestError(
                f"failed to create pull request {head} -> {base} "
                f"(HTTP {resp.status_code}): {resp.text.strip()}"
            )
        number = resp.json().get("number")
        log.info("github.pull_request_created", owner=owner, repo=repo, head=head, number=number)

    # ── internal ───────────────────────────────────────────────────────────

    async def _post_with_retry(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        """POST with exponential backoff on 5xx and timeout errors."""
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                resp = await self._client.post(url, json=payload)
                if resp.status_code < 500:
                    return resp
                log.warning(
                    "github.server_error",
                    url=url,
                    status=resp.status_code,
                    attempt=attempt + 1,
                    max_retries=_MAX_RETRIES,
                )
                last_exc = PullRequestError(
                    f"GitHub server error (HTTP {resp.status_code}) on {url}"
                )
            except httpx.TimeoutException as exc:
                log.warning(
                    "github.timeout",
                    url=url,
                    attempt=attempt + 1,
                    max_retries=_MAX_RETRIES,
                )
                last_exc = PullRequestError(f"timed out posting to {url}: {exc}")

            if attempt < _MAX_RETRIES - 1:
                delay = _RETRY_BASE_DELAY * (2**attempt)
                await asyncio.sleep(delay)

        raise last_exc  # type: ignore[misc]
