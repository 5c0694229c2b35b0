import httpx
import pytest

from multichat.core.errors import SearchError
from multichat.core.websearch.providers.google_cse import GoogleCustomSearch


def _backend(handler):
    return GoogleCustomSearch(
        api_key="search-key",
        engine_id="engine-1",
        transport=httpx.MockTransport(handler),
    )


def test_search_maps_items_to_results():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json={
                "items": [
                    {"title": "Python", "link": "https://www.python.org/", "snippet": "Official site"},
                    {"title": "No link", "snippet": "dropped"},
                    {"title": "Docs", "link": "https://docs.python.org/3/"},
                ]
            },
        )

    results = _backend(handler).search("python", num_results=25)

    assert seen["key"] == "search-key"
    assert seen["cx"] == "engine-1"
    assert seen["q"] == "python"
    assert seen["num"] == "10"
    assert [item.url for item in results] == ["https://www.python.org/", "https://docs.python.org/3/"]
    assert results[1].snippet == ""


def test_search_without_items_returns_empty():
    results = _backend(lambda request: httpx.Response(200, json={})).search("nothing")

    assert results == []


def test_search_raises_on_http_error():
    backend = _backend(lambda request: httpx.Response(403, json={"error": "quota"}))

    with pytest.raises(httpx.HTTPStatusError):
        backend.search("python")


def test_requires_key_and_engine_id():
    with pytest.raises(SearchError):
        GoogleCustomSearch(api_key="", engine_id="engine-1")
    with pytest.raises(SearchError):
        GoogleCustomSearch(api_key="search-key", engine_id="")
