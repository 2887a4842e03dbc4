from dataclasses import dataclass, field, fields


@dataclass
class RawResult:
    """One hit from an external search call, before scoring.

    Code search fills path/repository/score/stars/last_pushed; web search
    fills excerpt/domain and an API-order rank. Everything except url is
    optional and the scorer substitutes neutral defaults.
    """

    url: str
    title: str = ""
    path: str | None = None
    repository: str | None = None
    domain: str = ""
    excerpt: str = ""
    query: str = ""

    score: float | None = None
    stars: int = 0
    last_pushed: str | None = None

    # 1 = best; 0 until assigned
    rank: int = 0


@dataclass
class ScoredResult(RawResult):
    quality_score: float = 0.0


@dataclass
class DeduplicatedResult(RawResult):
    """Canonical result after merging several query batches by URL."""

    found_in_searches: list[str] = field(default_factory=list)
    source_count: int = 1


@dataclass
class QueryBatch:
    query: str
    results: list[RawResult]


@dataclass
class DiversityAnalysis:
    domain_counts: dict[str, int]
    is_diverse: bool
    top_domain: str
    top_domain_percentage: float


def raw_fields(result: RawResult) -> dict:
    """Plain RawResult attributes of any result, for copying into a subclass."""
    return {f.name: getattr(result, f.name) for f in fields(RawResult)}
