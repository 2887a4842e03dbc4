import copy

from sift.ranking.dedup import deduplicate_results
from sift.ranking.types import QueryBatch, RawResult


def make_result(path: str, rank: int, domain: str = "example.com") -> RawResult:
    return RawResult(
        url=f"https://{domain}/{path}",
        title=path.title(),
        excerpt=f"Excerpt for {path}",
        domain=domain,
        rank=rank,
    )


class TestDeduplicateResults:
    def test_empty_input(self):
        assert deduplicate_results({}) == []

    def test_empty_batches(self):
        batches = {"search-1": QueryBatch(query="q", results=[])}
        assert deduplicate_results(batches) == []

    def test_preserves_unique_results(self):
        batches = {
            "search-1": QueryBatch(query="test query", results=[make_result("1", 1), make_result("2", 2)]),
        }
        merged = deduplicate_results(batches)
        assert len(merged) == 2
        assert [r.source_count for r in merged] == [1, 1]
        assert merged[0].found_in_searches == ["test query"]

    def test_merges_by_url_across_batches(self):
        batches = {
            "search-1": QueryBatch(query="query 1", results=[make_result("duplicate", 1), make_result("unique1", 2)]),
            "search-2": QueryBatch(query="query 2", results=[make_result("duplicate", 1), make_result("unique2", 2)]),
        }
        merged = deduplicate_results(batches)
        assert len(merged) == 3

        duplicate = next(r for r in merged if r.url == "https://example.com/duplicate")
        assert duplicate.source_count == 2
        assert duplicate.found_in_searches == ["query 1", "query 2"]

    def test_keeps_best_rank(self):
        batches = {
            "search-1": QueryBatch(query="a", results=[make_result("article", 5)]),
            "search-2": QueryBatch(query="b", results=[make_result("article", 2)]),
        }
        merged = deduplicate_results(batches)
        assert len(merged) == 1
        assert merged[0].rank == 2

    def test_best_rank_not_overwritten_by_worse(self):
        batches = {
            "search-1": QueryBatch(query="a", results=[make_result("article", 1)]),
            "search-2": QueryBatch(query="b", results=[make_result("article", 7)]),
        }
        assert deduplicate_results(batches)[0].rank == 1

    def test_sorts_by_source_count_then_rank(self):
        batches = {
            "search-1": QueryBatch(
                query="query 1",
                results=[make_result("common", 3), make_result("rare-b", 4), make_result("rare-a", 1)],
            ),
            "search-2": QueryBatch(query="query 2", results=[make_result("common", 2)]),
            "search-3": QueryBatch(query="query 3", results=[make_result("common", 1)]),
        }
        merged = deduplicate_results(batches)
        assert [r.url.rsplit("/", 1)[-1] for r in merged] == ["common", "rare-a", "rare-b"]
        assert [r.source_count for r in merged] == [3, 1, 1]

    def test_equal_keys_keep_first_sighting_order(self):
        batches = {
            "search-1": QueryBatch(query="a", results=[make_result("x", 1)]),
            "search-2": QueryBatch(query="b", results=[make_result("y", 1)]),
        }
        merged = deduplicate_results(batches)
        assert [r.url for r in merged] == ["https://example.com/x", "https://example.com/y"]

    def test_duplicates_within_one_batch(self):
        batches = {
            "search-1": QueryBatch(query="only", results=[make_result("same", 4), make_result("same", 2)]),
        }
        merged = deduplicate_results(batches)
        assert len(merged) == 1
        assert merged[0].source_count == 2
        assert merged[0].found_in_searches == ["only", "only"]
        assert merged[0].rank == 2

    def test_keeps_first_sighting_fields(self):
        first = make_result("page", 3)
        second = RawResult(url=first.url, title="Other title", excerpt="other", domain="example.com", rank=1)
        batches = {
            "search-1": QueryBatch(query="a", results=[first]),
            "search-2": QueryBatch(query="b", results=[second]),
        }
        merged = deduplicate_results(batches)[0]
        assert merged.title == "Page"
        assert merged.excerpt == "Excerpt for page"

    def test_does_not_mutate_input(self):
        batches = {
            "search-1": QueryBatch(query="a", results=[make_result("p", 5)]),
            "search-2": QueryBatch(query="b", results=[make_result("p", 1)]),
        }
        snapshot = copy.deepcopy(batches)
        deduplicate_results(batches)
        assert batches == snapshot

    def test_deterministic(self):
        batches = {
            f"search-{i}": QueryBatch(query=f"q{i}", results=[make_result(str(j), j + 1) for j in range(i, i + 4)])
            for i in range(3)
        }
        assert deduplicate_results(batches) == deduplicate_results(batches)
