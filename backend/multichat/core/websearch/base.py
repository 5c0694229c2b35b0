from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SearchResult:
    title: str
    url: str
    snippet: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class BaseWebSearch:
    def search(self, query: str, num_results: int = 5) -> list[SearchResult]:
        raise NotImplementedError
