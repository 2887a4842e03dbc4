import asyncio
import subprocess
from urllib.parse import quote

import httpx

from sift.config import Config
from sift.constants import (
    CODE_CONTENT_MAX_LINES,
    CODE_SEARCH_LIMIT,
    GITHUB_API,
    GITHUB_SEARCH_MAX_PER_PAGE,
    REQUEST_TIMEOUT,
)
from sift.errors import AuthError, NetworkError, SearchError
from sift.logging import get_logger
from sift.ranking.types import RawResult
from sift.sources.base import CodeSearchSource
from sift.sources.http import check_response

_logger = get_logger(__name__)

_JSON_ACCEPT = "application/vnd.github+json"
_RAW_ACCEPT = "application/vnd.github.raw"


def resolve_github_token(config: Config) -> str:
    """GITHUB_TOKEN if set, otherwise whatever the gh CLI is logged in with."""
    if config.github_token:
        return config.github_token

    try:
        proc = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=10,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise AuthError("GitHub token not found. Set GITHUB_TOKEN or run `gh auth login`.", e) from e

    token = proc.stdout.strip()
    if not token:
        raise AuthError("GitHub token not found. Set GITHUB_TOKEN or run `gh auth login`.")
    return token


class GitHubCodeSearch(CodeSearchSource):
    name = "github"

    def __init__(
        self,
        token: str,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not token:
            raise AuthError("GitHub token not configured")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=GITHUB_API,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": _JSON_ACCEPT,
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _get(self, client: httpx.AsyncClient, path: str, **kwargs) -> httpx.Response:
        try:
            resp = await client.get(path, **kwargs)
        except httpx.TransportError as e:
            raise NetworkError(f"GitHub request failed: {e}", e) from e
        check_response(resp, "GitHub")
        return resp

    async def search(
        self,
        query: str,
        limit: int = CODE_SEARCH_LIMIT,
        language: str | None = None,
    ) -> list[RawResult]:
        q = f"{query} language:{language}" if language else query
        params = {"q": q, "per_page": min(max(limit, 1), GITHUB_SEARCH_MAX_PER_PAGE)}

        async with self._client() as client:
            resp = await self._get(client, "/search/code", params=params)
            items = resp.json().get("items", [])[:limit]

            repos = list(dict.fromkeys(item["repository"]["full_name"] for item in items))
            details = await asyncio.gather(*(self._repo_details(client, name) for name in repos))

        meta = dict(zip(repos, details, strict=True))
        _logger.info("code search complete", query=q, hits=len(items), repositories=len(repos))

        results = []
        for position, item in enumerate(items, start=1):
            repo = item["repository"]["full_name"]
            info = meta.get(repo, {})
            results.append(
                RawResult(
                    url=item.get("html_url") or "",
                    title=item.get("path") or item.get("name") or "",
                    path=item.get("path"),
                    repository=repo,
                    domain="github.com",
                    query=query,
                    score=item.get("score"),
                    stars=info.get("stargazers_count") or 0,
                    last_pushed=info.get("pushed_at"),
                    rank=position,
                )
            )
        return results

    async def _repo_details(self, client: httpx.AsyncClient, full_name: str) -> dict:
        try:
            resp = await self._get(client, f"/repos/{full_name}")
            data = resp.json()
        except (SearchError, ValueError) as e:
            _logger.warning("repository lookup failed, using neutral defaults", repository=full_name, error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    async def fetch_content(self, result: RawResult, max_lines: int = CODE_CONTENT_MAX_LINES) -> str:
        if not result.repository or not result.path:
            raise SearchError(f"Cannot fetch content without repository and path: {result.url}")

        async with self._client() as client:
            resp = await self._get(
                client,
                f"/repos/{result.repository}/contents/{quote(result.path)}",
                headers={"Accept": _RAW_ACCEPT},
            )

        lines = resp.text.splitlines()
        if len(lines) > max_lines:
            lines = [*lines[:max_lines], f"... [truncated, {len(lines) - max_lines} more lines]"]
        return "\n".join(lines)
