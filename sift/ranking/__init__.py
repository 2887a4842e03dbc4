from sift.ranking.dedup import deduplicate_results
from sift.ranking.diversity import check_source_diversity
from sift.ranking.ranker import rank_results
from sift.ranking.scoring import quality_score
from sift.ranking.types import DeduplicatedResult, DiversityAnalysis, QueryBatch, RawResult, ScoredResult

__all__ = [
    "DeduplicatedResult",
    "DiversityAnalysis",
    "QueryBatch",
    "RawResult",
    "ScoredResult",
    "check_source_diversity",
    "deduplicate_results",
    "quality_score",
    "rank_results",
]
