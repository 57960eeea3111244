from __future__ import annotations

import json
import time

import pytest

from pictolex.core.config import Settings
from pictolex.services.keyword_index import InMemoryKeywordIndex, KeywordEntry


KEYWORD_ROWS = [
    {"keyword": "correre", "pictograms": [{"_id": 6465}, {"_id": 6466}]},
    {"keyword": "mangiare", "pictograms": [{"_id": 6456}]},
    {"keyword": "gatto", "pictograms": [{"_id": 7114}]},
    {"keyword": "io", "pictograms": [{"_id": 6632}]},
    {"keyword": "lui", "pictograms": [{"_id": 6480}]},
    {"keyword": "bello", "pictograms": [{"_id": 2280}]},
    {"keyword": "casa", "pictograms": [{"id": 2317}]},
    {"name": "fare"},
]


class FakeKeywordLoader:
    def __init__(self, keywords: list[str] | None = None, *, error: Exception | None = None):
        self.keywords = keywords or ["correre", "mangiare", "gatto"]
        self.error = error
        self.closed = False

    def load_into(self, index: InMemoryKeywordIndex) -> int:
        if self.error is not None:
            raise self.error
        return index.load(KeywordEntry(keyword=keyword) for keyword in self.keywords)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def keyword_file(tmp_path):
    path = tmp_path / "keywords_it.json"
    path.write_text(json.dumps(KEYWORD_ROWS), encoding="utf-8")
    return path


@pytest.fixture
def make_settings():
    def _make(**overrides) -> Settings:
        values = {
            "environment": "test",
            "app_name": "pictolex-backend-test",
            "host": "127.0.0.1",
            "port": 8001,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def fake_loader_factory():
    return lambda _settings: FakeKeywordLoader()


@pytest.fixture
def keyword_loader_cls():
    return FakeKeywordLoader


@pytest.fixture
def wait_for():
    def _wait(predicate, timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.01)
        return predicate()

    return _wait
