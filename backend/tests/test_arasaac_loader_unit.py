from __future__ import annotations

import httpx
import pytest

from pictolex.services.arasaac import ArasaacKeywordLoader
from pictolex.services.keyword_index import InMemoryKeywordIndex, KeywordIndexLoadError


class _FakeResponse:
    def __init__(self, payload=None, *, raises: Exception | None = None):
        self._payload = payload if payload is not None else [{"keyword": "gatto", "pictograms": [{"_id": 7}]}]
        self._raises = raises

    def raise_for_status(self) -> None:
        if self._raises is not None:
            raise self._raises

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeClient:
    def __init__(self, sequence: list[_FakeResponse | Exception]):
        self._sequence = sequence
        self.paths: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.paths)

    def get(self, path: str, **_kwargs) -> _FakeResponse:
        self.paths.append(path)
        event = self._sequence.pop(0)
        if isinstance(event, Exception):
            raise event
        return event


def _http_status_error(status_code: int, *, retry_after: str | None = None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.arasaac.org/api/keywords/it")
    headers = {"Retry-After": retry_after} if retry_after is not None else {}
    response = httpx.Response(status_code, request=request, headers=headers)
    return httpx.HTTPStatusError("status failure", request=request, response=response)


@pytest.fixture
def no_sleep(monkeypatch) -> list[float]:
    delays: list[float] = []
    monkeypatch.setattr("pictolex.services.arasaac.time.sleep", delays.append)
    return delays


def test_loader_fills_the_index(monkeypatch) -> None:
    loader = ArasaacKeywordLoader(language="IT")
    fake_client = _FakeClient([_FakeResponse()])
    monkeypatch.setattr(loader, "_ensure_client", lambda: fake_client)
    index = InMemoryKeywordIndex()

    count = loader.load_into(index)

    assert count == 1
    assert fake_client.paths == ["/keywords/it"]
    assert index.is_ready()
    assert index.lookup_ids("gatto") == frozenset({7})


def test_loader_retries_rate_limit_then_succeeds(monkeypatch, no_sleep) -> None:
    loader = ArasaacKeywordLoader(max_retries=3)
    fake_client = _FakeClient(
        [
            _FakeResponse(raises=_http_status_error(429, retry_after="0")),
            _FakeResponse(raises=_http_status_error(503)),
            _FakeResponse(payload={"words": ["gatto", "cane"]}),
        ]
    )
    monkeypatch.setattr(loader, "_ensure_client", lambda: fake_client)

    entries = loader.fetch_entries()

    assert [entry.keyword for entry in entries] == ["gatto", "cane"]
    assert fake_client.calls == 3
    # Retry-After: 0 skips the sleep; the second retry backs off exponentially.
    assert no_sleep == [1.0]


def test_loader_does_not_retry_client_errors(monkeypatch, no_sleep) -> None:
    loader = ArasaacKeywordLoader(max_retries=3)
    fake_client = _FakeClient([_FakeResponse(raises=_http_status_error(404))])
    monkeypatch.setattr(loader, "_ensure_client", lambda: fake_client)

    with pytest.raises(KeywordIndexLoadError):
        loader.fetch_entries()
    assert fake_client.calls == 1
    assert no_sleep == []


def test_loader_gives_up_after_transport_errors(monkeypatch, no_sleep) -> None:
    loader = ArasaacKeywordLoader(max_retries=2, backoff_seconds=0.1)
    fake_client = _FakeClient([httpx.ConnectError("down") for _ in range(3)])
    monkeypatch.setattr(loader, "_ensure_client", lambda: fake_client)
    index = InMemoryKeywordIndex()

    with pytest.raises(KeywordIndexLoadError):
        loader.load_into(index)

    assert fake_client.calls == 3
    assert no_sleep == pytest.approx([0.1, 0.2])
    assert not index.is_ready()
    assert index.error is not None


def test_loader_rejects_invalid_json(monkeypatch) -> None:
    loader = ArasaacKeywordLoader()
    fake_client = _FakeClient([_FakeResponse(payload=ValueError("bad json"))])
    monkeypatch.setattr(loader, "_ensure_client", lambda: fake_client)

    with pytest.raises(KeywordIndexLoadError):
        loader.fetch_entries()


def test_backoff_is_capped(monkeypatch, no_sleep) -> None:
    loader = ArasaacKeywordLoader(max_retries=1, max_backoff_seconds=2.0)
    fake_client = _FakeClient(
        [
            _FakeResponse(raises=_http_status_error(429, retry_after="60")),
            _FakeResponse(payload=[]),
        ]
    )
    monkeypatch.setattr(loader, "_ensure_client", lambda: fake_client)

    assert loader.fetch_entries() == []
    assert no_sleep == [2.0]


def test_loader_requires_a_language() -> None:
    with pytest.raises(KeywordIndexLoadError):
        ArasaacKeywordLoader(language="  ")


def test_source_and_close() -> None:
    loader = ArasaacKeywordLoader(language="es", base_url="https://example.test/api/")

    assert loader.source == "https://example.test/api/keywords/es"
    loader.close()
