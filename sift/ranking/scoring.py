import math
from datetime import UTC, datetime

from sift.constants import (
    BUILD_DIR_MARKERS,
    BUILD_DIR_PENALTY,
    COMPONENT_DIR_BONUS,
    COMPONENT_DIR_MARKERS,
    POPULARITY_FLOOR,
    POPULARITY_LOG_DIVISOR,
    POPULARITY_WEIGHT,
    RECENCY_STALE,
    RECENCY_STEPS,
    RECENCY_WEIGHT,
    RELEVANCE_MAX,
    RELEVANCE_WEIGHT,
    SHALLOW_PATH_PENALTY,
    SHALLOW_PATH_SEGMENTS,
    SOURCE_DIR_BONUS,
    SOURCE_DIR_MARKERS,
    STRUCTURE_BASE,
    STRUCTURE_WEIGHT,
    TYPED_EXTENSION_BONUS,
    TYPED_EXTENSIONS,
    VENDOR_DIR_MARKERS,
    VENDOR_DIR_PENALTY,
)
from sift.ranking.types import RawResult

_SECONDS_PER_DAY = 86400


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def popularity_score(stars: int | None) -> float:
    if not isinstance(stars, int | float) or math.isnan(stars) or stars <= 0:
        return POPULARITY_FLOOR
    return max(POPULARITY_FLOOR, _clamp(math.log10(stars + 1) / POPULARITY_LOG_DIVISOR))


def relevance_score(score: float | None) -> float:
    if not isinstance(score, int | float) or math.isnan(score):
        return 0.0
    return _clamp(score / RELEVANCE_MAX)


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def recency_score(last_pushed: str | None, now: datetime | None = None) -> float:
    pushed = parse_timestamp(last_pushed)
    if pushed is None:
        return RECENCY_STALE

    ref = now or datetime.now(UTC)
    if ref.tzinfo is None:
        ref = ref.replace(tzinfo=UTC)
    age_days = max(0.0, (ref - pushed).total_seconds() / _SECONDS_PER_DAY)
    for max_days, score in RECENCY_STEPS:
        if age_days < max_days:
            return score
    return RECENCY_STALE


def structure_score(path: str | None) -> float:
    """Heuristic for where a file lives in its repository.

    Source and component directories and typed extensions raise the score;
    vendored code, build output and shallow (config-like) paths lower it.
    """
    if not path or not path.strip("/"):
        return STRUCTURE_BASE

    normalized = "/" + path.lower().lstrip("/")
    score = STRUCTURE_BASE

    if any(marker in normalized for marker in SOURCE_DIR_MARKERS):
        score += SOURCE_DIR_BONUS
    if normalized.endswith(TYPED_EXTENSIONS):
        score += TYPED_EXTENSION_BONUS
    if any(marker in normalized for marker in COMPONENT_DIR_MARKERS):
        score += COMPONENT_DIR_BONUS
    if any(marker in normalized for marker in VENDOR_DIR_MARKERS):
        score -= VENDOR_DIR_PENALTY
    if any(marker in normalized for marker in BUILD_DIR_MARKERS):
        score -= BUILD_DIR_PENALTY

    segments = [s for s in normalized.split("/") if s]
    if len(segments) < SHALLOW_PATH_SEGMENTS:
        score -= SHALLOW_PATH_PENALTY

    return _clamp(score)


def quality_score(result: RawResult, now: datetime | None = None) -> float:
    return (
        POPULARITY_WEIGHT * popularity_score(result.stars)
        + RELEVANCE_WEIGHT * relevance_score(result.score)
        + RECENCY_WEIGHT * recency_score(result.last_pushed, now)
        + STRUCTURE_WEIGHT * structure_score(result.path)
    )
