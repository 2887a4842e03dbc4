from pathlib import PurePosixPath

from sift.constants import DIVERSITY_THRESHOLD, TOP_DOMAINS_SHOWN
from sift.ranking.types import DiversityAnalysis
from sift.search import CodeSearchOutcome, WebSearchOutcome


def _seconds(ms: int) -> str:
    return f"{ms / 1000:.1f}s"


def format_diversity_analysis(analysis: DiversityAnalysis) -> str:
    if analysis.top_domain == "":
        return "No results to analyze"

    lines = [
        f"**Source Diversity:** {'✓ Diverse' if analysis.is_diverse else '⚠ Limited'}",
        f"**Top Domain:** {analysis.top_domain} ({analysis.top_domain_percentage:.0f}%)",
    ]
    if not analysis.is_diverse:
        lines.append(
            f"\n⚠ Warning: Over {DIVERSITY_THRESHOLD:.0f}% of results from single domain. Consider broadening search."
        )
    return "\n".join(lines)


def format_web_search_report(outcome: WebSearchOutcome) -> str:
    sections = [
        "# Parallel Search Results\n",
        f"**Query:** {outcome.objective}",
        f"**Results:** {len(outcome.results)}",
        f"**Execution:** {_seconds(outcome.elapsed_ms)}\n",
    ]

    if len(outcome.queries) > 1:
        sections.append("**Searches:**")
        sections.extend(f"- {q}" for q in outcome.queries)
        sections.append("")

    if outcome.failed_queries:
        sections.append("**Failed searches:** " + ", ".join(outcome.failed_queries) + "\n")

    if outcome.results:
        total = len(outcome.results)
        top = sorted(outcome.diversity.domain_counts.items(), key=lambda item: item[1], reverse=True)
        sections.append("**Top Domains:**")
        for domain, count in top[:TOP_DOMAINS_SHOWN]:
            sections.append(f"- {domain}: {count} results ({count / total * 100:.0f}%)")
        sections.append("")
        sections.append(format_diversity_analysis(outcome.diversity) + "\n")

    sections.append("---\n")

    for position, result in enumerate(outcome.results, start=1):
        sections.append(f"## {position}. [{result.title}]({result.url})\n")
        sections.append(f"**URL:** {result.url}")
        sections.append(f"**Domain:** {result.domain}")
        if result.source_count > 1:
            sections.append(f"**Found in {result.source_count} searches:** " + "; ".join(result.found_in_searches))
        sections.append("")
        if result.excerpt:
            sections.append("**Excerpt:**\n")
            sections.append(result.excerpt)
        sections.append("\n---\n")

    return "\n".join(sections)


def format_code_search_report(outcome: CodeSearchOutcome) -> str:
    sections = [
        "# GitHub Code Search Results\n",
        f"**Query:** {outcome.query}",
        f"**Results:** {len(outcome.results)} of {outcome.total_hits} hits",
        f"**Execution:** {_seconds(outcome.elapsed_ms)}\n",
        "---\n",
    ]

    for result in outcome.results:
        sections.append(f"## {result.rank}. {result.repository} · `{result.path}`\n")
        sections.append(f"**URL:** {result.url}")
        sections.append(f"**Stars:** {result.stars:,}")
        if result.last_pushed:
            sections.append(f"**Last pushed:** {result.last_pushed}")
        sections.append(f"**Quality:** {result.quality_score:.2f}\n")

        content = outcome.contents.get(result.url)
        if content is not None:
            extension = PurePosixPath(result.path or "").suffix.lstrip(".")
            sections.append(f"```{extension}\n{content}\n```\n")
        sections.append("---\n")

    return "\n".join(sections)
