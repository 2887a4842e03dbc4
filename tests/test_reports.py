from datetime import datetime

import pytest

from sift.reports import report_filename, save_report
from sift.utils import extract_domain, generate_timestamp, sanitize_for_filename


class TestSanitizeForFilename:
    def test_basic(self):
        assert sanitize_for_filename("RAG System Architecture") == "rag-system-architecture"

    def test_removes_special_characters(self):
        assert sanitize_for_filename("What's new in C++ (2025)?") == "whats-new-in-c-2025"

    def test_collapses_hyphens_and_whitespace(self):
        assert sanitize_for_filename("  a  --  b   c ") == "a-b-c"

    def test_max_length(self):
        slug = sanitize_for_filename("word " * 30)
        assert len(slug) <= 50
        assert not slug.endswith("-")

    def test_strips_edge_hyphens(self):
        assert sanitize_for_filename("-leading and trailing-") == "leading-and-trailing"


class TestExtractDomain:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.example.com/path", "example.com"),
            ("https://docs.python.org/3/library/", "docs.python.org"),
            ("http://EXAMPLE.org", "example.org"),
            ("not a url", "unknown"),
            ("", "unknown"),
            ("https://[invalid", "unknown"),
        ],
    )
    def test_extract(self, url, expected):
        assert extract_domain(url) == expected


class TestTimestamp:
    def test_format(self):
        assert generate_timestamp(datetime(2026, 3, 4, 5, 6, 7)) == "20260304050607"


class TestSaveReport:
    def test_filename(self):
        assert report_filename("RAG chunking!", datetime(2026, 1, 2, 3, 4, 5)) == "20260102030405-rag-chunking.md"

    def test_writes_file(self, tmp_path):
        directory = tmp_path / "docs" / "research" / "parallel"
        path = save_report("# Report", directory, "My Topic", now=datetime(2026, 1, 2, 3, 4, 5))

        assert path == (directory / "20260102030405-my-topic.md").resolve()
        assert path.read_text(encoding="utf-8") == "# Report"
