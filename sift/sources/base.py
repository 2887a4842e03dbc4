from abc import ABC, abstractmethod

from sift.ranking.types import RawResult


class Source(ABC):
    name: str


class CodeSearchSource(Source):
    @abstractmethod
    async def search(self, query: str, limit: int, language: str | None = None) -> list[RawResult]: ...

    @abstractmethod
    async def fetch_content(self, result: RawResult, max_lines: int) -> str: ...


class WebSearchSource(Source):
    @abstractmethod
    async def search(
        self,
        objective: str,
        query: str | None,
        processor: str,
        max_results: int,
        max_chars: int,
    ) -> list[RawResult]: ...
