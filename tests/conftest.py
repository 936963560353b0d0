from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from mediaquery.tmdb.client import SearchResponse


def search_page(*results: Dict[str, Any], total_results: Optional[int] = None) -> SearchResponse:
    """Build a 200 search response carrying ``results``."""
    body = {
        "page": 1,
        "total_results": len(results) if total_results is None else total_results,
        "total_pages": 1 if results else 0,
        "results": list(results),
    }
    return SearchResponse(status_code=200, body=json.dumps(body))


def status(code: int) -> SearchResponse:
    return SearchResponse(status_code=code, body=json.dumps({"status_message": "error"}))


Responder = Union[SearchResponse, Callable[[str, str], SearchResponse]]


class FakeProvider:
    """Search provider that replays scripted responses and records every query."""

    def __init__(self, responses: Optional[List[Responder]] = None, default: Optional[Responder] = None) -> None:
        self.responses = list(responses or [])
        self.default = default if default is not None else search_page()
        self.calls: List[tuple[str, str]] = []

    def search(self, term: str, media_type: str) -> SearchResponse:
        self.calls.append((term, media_type))
        responder = self.responses.pop(0) if self.responses else self.default
        if callable(responder):
            return responder(term, media_type)
        return responder

    @property
    def terms(self) -> List[str]:
        return [term for term, _ in self.calls]


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def record_sleep(sleeps: List[float]) -> Callable[[float], None]:
    return sleeps.append
