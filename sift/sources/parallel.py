from typing import Any

import httpx

from sift.constants import (
    PARALLEL_API,
    PARALLEL_MAX_QUERIES,
    PARALLEL_MAX_QUERY_LENGTH,
    PARALLEL_MIN_CHARS,
    PARALLEL_PROCESSORS,
    REQUEST_TIMEOUT,
)
from sift.errors import AuthError, NetworkError, ValidationError
from sift.logging import get_logger
from sift.ranking.types import RawResult
from sift.sources.base import WebSearchSource
from sift.sources.http import check_response
from sift.utils import extract_domain

_logger = get_logger(__name__)


def validate_search_options(
    objective: str | None,
    queries: list[str] | None,
    processor: str | None = None,
    max_results: int | None = None,
    max_chars: int | None = None,
) -> None:
    if not objective and not queries:
        raise ValidationError("Either objective or queries (or both) must be provided")

    if queries:
        if len(queries) > PARALLEL_MAX_QUERIES:
            raise ValidationError(f"Maximum {PARALLEL_MAX_QUERIES} search queries allowed per request")
        for query in queries:
            if len(query) > PARALLEL_MAX_QUERY_LENGTH:
                raise ValidationError(
                    f"Search query too long ({len(query)} chars). "
                    f"Maximum {PARALLEL_MAX_QUERY_LENGTH} characters per query."
                )

    if max_chars is not None and max_chars < PARALLEL_MIN_CHARS:
        raise ValidationError(f"max_chars_per_result must be at least {PARALLEL_MIN_CHARS} characters")

    if max_results is not None and max_results < 1:
        raise ValidationError("max_results must be at least 1")

    if processor and processor not in PARALLEL_PROCESSORS:
        raise ValidationError(f"Invalid processor: {processor}. Must be one of: {', '.join(PARALLEL_PROCESSORS)}")


def transform_results(data: Any, query: str) -> list[RawResult]:
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        return []

    results = []
    for position, r in enumerate(data["results"], start=1):
        url = r.get("url") or ""
        if not url:
            continue
        excerpts = r.get("excerpts")
        if isinstance(excerpts, list):
            excerpt = "\n\n".join(str(e) for e in excerpts)
        else:
            excerpt = r.get("excerpt") or ""
        results.append(
            RawResult(
                url=url,
                title=r.get("title") or "Untitled",
                excerpt=excerpt,
                domain=extract_domain(url),
                query=query,
                rank=position,
            )
        )
    return results


class ParallelSearch(WebSearchSource):
    name = "parallel"

    def __init__(
        self,
        api_key: str | None,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise AuthError(
                "PARALLEL_API_KEY environment variable not set. Get your API key at https://platform.parallel.ai/"
            )
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def search(
        self,
        objective: str,
        query: str | None,
        processor: str,
        max_results: int,
        max_chars: int,
    ) -> list[RawResult]:
        body: dict[str, Any] = {
            "objective": objective,
            "processor": processor,
            "max_results": max_results,
            "max_chars_per_result": max_chars,
        }
        if query:
            body["search_queries"] = [query]

        async with httpx.AsyncClient(base_url=PARALLEL_API, timeout=self._timeout, transport=self._transport) as client:
            try:
                resp = await client.post("/v1beta/search", headers={"x-api-key": self._api_key}, json=body)
            except httpx.TransportError as e:
                raise NetworkError("Network connection failed. Please check your internet connection.", e) from e
            check_response(resp, "Parallel")

        results = transform_results(resp.json(), query or objective)
        _logger.info("web search complete", query=query or objective, hits=len(results))
        return results
