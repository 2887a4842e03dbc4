import pytest

from sift.ranking.diversity import check_source_diversity
from sift.ranking.types import DeduplicatedResult


def make_result(domain: str, i: int = 0) -> DeduplicatedResult:
    return DeduplicatedResult(url=f"https://{domain}/{i}", title=f"{domain} {i}", domain=domain, rank=i + 1)


class TestCheckSourceDiversity:
    def test_empty_input_is_diverse(self):
        analysis = check_source_diversity([])
        assert analysis.is_diverse is True
        assert analysis.top_domain == ""
        assert analysis.top_domain_percentage == 0
        assert analysis.domain_counts == {}

    def test_even_split_is_diverse(self):
        results = [make_result(d) for d in ("a.com", "b.com", "c.com", "d.com")]
        analysis = check_source_diversity(results)
        assert analysis.is_diverse is True
        assert analysis.top_domain_percentage == 25

    def test_concentrated_results(self):
        results = [make_result("a.com", 0), make_result("a.com", 1), make_result("a.com", 2), make_result("b.com")]
        analysis = check_source_diversity(results)
        assert analysis.is_diverse is False
        assert analysis.top_domain == "a.com"
        assert analysis.top_domain_percentage == 75
        assert analysis.domain_counts == {"a.com": 3, "b.com": 1}

    def test_exactly_forty_percent_is_not_diverse(self):
        results = [make_result("a.com", 0), make_result("a.com", 1)] + [
            make_result(d) for d in ("b.com", "c.com", "d.com")
        ]
        analysis = check_source_diversity(results)
        assert analysis.top_domain_percentage == pytest.approx(40)
        assert analysis.is_diverse is False

    def test_just_under_threshold_is_diverse(self):
        results = [make_result("a.com", 0), make_result("a.com", 1)] + [
            make_result(d) for d in ("b.com", "c.com", "d.com", "e.com", "f.com")
        ]
        analysis = check_source_diversity(results)
        assert analysis.top_domain_percentage == pytest.approx(200 / 7)
        assert analysis.is_diverse is True

    def test_tie_goes_to_first_encountered(self):
        results = [make_result("b.com", 0), make_result("a.com", 0), make_result("a.com", 1), make_result("b.com", 1)]
        assert check_source_diversity(results).top_domain == "b.com"

    def test_single_result(self):
        analysis = check_source_diversity([make_result("only.com")])
        assert analysis.top_domain == "only.com"
        assert analysis.top_domain_percentage == 100
        assert analysis.is_diverse is False
