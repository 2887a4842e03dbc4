from collections.abc import Mapping

from sift.logging import get_logger
from sift.ranking.types import DeduplicatedResult, QueryBatch, raw_fields

_logger = get_logger(__name__)


def deduplicate_results(batches: Mapping[str, QueryBatch]) -> list[DeduplicatedResult]:
    """Merge results from several queries into one list keyed by URL.

    Every sighting counts, including repeats within a single batch. The
    merged entry keeps the best (lowest) rank seen. Output is ordered by
    source_count desc, then rank asc; remaining ties keep first-sighting order.
    """
    by_url: dict[str, DeduplicatedResult] = {}

    for batch in batches.values():
        for result in batch.results:
            existing = by_url.get(result.url)
            if existing is None:
                by_url[result.url] = DeduplicatedResult(
                    **raw_fields(result),
                    found_in_searches=[batch.query],
                    source_count=1,
                )
                continue

            existing.found_in_searches.append(batch.query)
            existing.source_count += 1
            if result.rank < existing.rank:
                existing.rank = result.rank

    merged = sorted(by_url.values(), key=lambda r: (-r.source_count, r.rank))
    _logger.debug("deduplicated results", batches=len(batches), unique=len(merged))
    return merged
