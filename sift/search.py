import asyncio
import time
from dataclasses import dataclass, field

from sift.constants import (
    CODE_CONTENT_MAX_LINES,
    CODE_FETCH_COUNT,
    CODE_SEARCH_LIMIT,
    DEFAULT_TOP_N,
    PARALLEL_DEFAULT_PROCESSOR,
    PARALLEL_MAX_CHARS,
    PARALLEL_MAX_RESULTS,
)
from sift.logging import get_logger
from sift.ranking import (
    DeduplicatedResult,
    DiversityAnalysis,
    QueryBatch,
    ScoredResult,
    check_source_diversity,
    deduplicate_results,
    rank_results,
)
from sift.sources.base import CodeSearchSource, WebSearchSource
from sift.sources.parallel import validate_search_options

_logger = get_logger(__name__)


@dataclass
class CodeSearchOutcome:
    query: str
    results: list[ScoredResult]
    contents: dict[str, str] = field(default_factory=dict)
    total_hits: int = 0
    elapsed_ms: int = 0


@dataclass
class WebSearchOutcome:
    objective: str
    queries: list[str]
    results: list[DeduplicatedResult]
    diversity: DiversityAnalysis
    failed_queries: list[str] = field(default_factory=list)
    elapsed_ms: int = 0


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


async def run_code_search(
    source: CodeSearchSource,
    query: str,
    *,
    limit: int = CODE_SEARCH_LIMIT,
    top_n: int = DEFAULT_TOP_N,
    fetch: int = CODE_FETCH_COUNT,
    language: str | None = None,
    max_lines: int = CODE_CONTENT_MAX_LINES,
) -> CodeSearchOutcome:
    start = time.monotonic()

    hits = await source.search(query, limit=limit, language=language)
    ranked = rank_results(hits, top_n)

    to_fetch = ranked[: max(fetch, 0)]
    fetched = await asyncio.gather(
        *(source.fetch_content(r, max_lines) for r in to_fetch),
        return_exceptions=True,
    )

    contents: dict[str, str] = {}
    for result, content in zip(to_fetch, fetched, strict=True):
        if isinstance(content, Exception):
            _logger.warning("content fetch failed", url=result.url, error=str(content))
            continue
        contents[result.url] = content

    return CodeSearchOutcome(
        query=query,
        results=ranked,
        contents=contents,
        total_hits=len(hits),
        elapsed_ms=_elapsed_ms(start),
    )


async def run_parallel_search(
    source: WebSearchSource,
    objective: str,
    queries: list[str] | None = None,
    *,
    processor: str = PARALLEL_DEFAULT_PROCESSOR,
    max_results: int = PARALLEL_MAX_RESULTS,
    max_chars: int = PARALLEL_MAX_CHARS,
) -> WebSearchOutcome:
    """Run the objective and each extra query concurrently, then merge.

    A query that fails is left out of the merge; the run only fails when
    every query failed.
    """
    validate_search_options(objective, queries, processor, max_results, max_chars)
    start = time.monotonic()

    issued: list[str | None] = [None] if objective else []
    issued.extend(queries or [])
    labels = [q or objective for q in issued]

    responses = await asyncio.gather(
        *(
            source.search(
                objective or q,
                q,
                processor=processor,
                max_results=max_results,
                max_chars=max_chars,
            )
            for q in issued
        ),
        return_exceptions=True,
    )

    batches: dict[str, QueryBatch] = {}
    failed: list[str] = []
    errors: list[BaseException] = []
    for i, (label, response) in enumerate(zip(labels, responses, strict=True), start=1):
        if isinstance(response, BaseException):
            _logger.warning("search query failed", query=label, error=str(response))
            failed.append(label)
            errors.append(response)
            continue
        batches[f"search-{i}"] = QueryBatch(query=label, results=response)

    if errors and not batches:
        raise errors[0]

    merged = deduplicate_results(batches)[:max_results]
    diversity = check_source_diversity(merged)
    _logger.info(
        "parallel search complete",
        queries=len(issued),
        failed=len(failed),
        unique=len(merged),
        diverse=diversity.is_diverse,
    )

    return WebSearchOutcome(
        objective=objective,
        queries=labels,
        results=merged,
        diversity=diversity,
        failed_queries=failed,
        elapsed_ms=_elapsed_ms(start),
    )
