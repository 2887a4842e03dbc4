from datetime import UTC, datetime

from sift.constants import DEFAULT_TOP_N
from sift.logging import get_logger
from sift.ranking.scoring import quality_score
from sift.ranking.types import RawResult, ScoredResult, raw_fields

_logger = get_logger(__name__)


def rank_results(
    results: list[RawResult],
    top_n: int = DEFAULT_TOP_N,
    now: datetime | None = None,
) -> list[ScoredResult]:
    """Score, sort (stable, best first) and keep the top_n hits.

    Returns new ScoredResult objects with 1-based ranks; the input list and
    its items are left untouched.
    """
    if top_n <= 0 or not results:
        return []

    ref = now or datetime.now(UTC)
    scored = [ScoredResult(**raw_fields(r), quality_score=quality_score(r, ref)) for r in results]
    scored.sort(key=lambda r: r.quality_score, reverse=True)

    top = scored[:top_n]
    for position, result in enumerate(top, start=1):
        result.rank = position

    _logger.debug("ranked results", total=len(results), kept=len(top))
    return top
