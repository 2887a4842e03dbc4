from sift.constants import DIVERSITY_THRESHOLD
from sift.ranking.types import DeduplicatedResult, DiversityAnalysis


def domain_counts(results: list[DeduplicatedResult]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for result in results:
        counts[result.domain] = counts.get(result.domain, 0) + 1
    return counts


def check_source_diversity(results: list[DeduplicatedResult]) -> DiversityAnalysis:
    # no data is not evidence of concentration
    if not results:
        return DiversityAnalysis(domain_counts={}, is_diverse=True, top_domain="", top_domain_percentage=0.0)

    counts = domain_counts(results)
    # max() keeps the first domain encountered among equal counts
    top_domain, top_count = max(counts.items(), key=lambda item: item[1])
    percentage = top_count * 100 / len(results)

    return DiversityAnalysis(
        domain_counts=counts,
        is_diverse=percentage < DIVERSITY_THRESHOLD,
        top_domain=top_domain,
        top_domain_percentage=percentage,
    )
