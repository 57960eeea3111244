from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol


logger = logging.getLogger(__name__)

SymbolId = int | str


class KeywordIndexLoadError(RuntimeError):
    """Raised when a keyword index source cannot be read or parsed."""


class KeywordIndexProvider(Protocol):
    def is_ready(self) -> bool:
        ...

    def contains(self, keyword: str) -> bool:
        ...

    def lookup_ids(self, keyword: str) -> frozenset[SymbolId]:
        ...


@dataclass(frozen=True)
class KeywordEntry:
    keyword: str
    symbol_ids: frozenset[SymbolId] = frozenset()


class NullKeywordIndex:
    """Stand-in used when no index was configured; never ready, knows nothing."""

    def is_ready(self) -> bool:
        return False

    def contains(self, keyword: str) -> bool:
        return False

    def lookup_ids(self, keyword: str) -> frozenset[SymbolId]:
        return frozenset()


def normalize_keyword(keyword: str) -> str:
    return keyword.strip().lower()


class InMemoryKeywordIndex:
    """Keyword -> symbol ids, filled once by a loader and read concurrently.

    ``load`` builds new tables off to the side and swaps them in under a lock,
    so readers see either the previous snapshot or the complete new one.
    """

    def __init__(self, entries: Iterable[KeywordEntry] | None = None, *, ready: bool = False):
        self._lock = threading.Lock()
        self._ids: Mapping[str, frozenset[SymbolId]] = {}
        self._known: frozenset[str] = frozenset()
        self._ready = False
        self._loading = False
        self._error: str | None = None
        if entries is not None:
            self.load(entries, ready=ready)

    @classmethod
    def from_keywords(cls, keywords: Iterable[str]) -> InMemoryKeywordIndex:
        return cls((KeywordEntry(keyword=keyword) for keyword in keywords), ready=True)

    def load(self, entries: Iterable[KeywordEntry], *, ready: bool = True) -> int:
        ids: dict[str, set[SymbolId]] = {}
        known: set[str] = set()
        for entry in entries:
            keyword = normalize_keyword(entry.keyword)
            if not keyword:
                continue
            known.add(keyword)
            if entry.symbol_ids:
                ids.setdefault(keyword, set()).update(entry.symbol_ids)

        frozen_ids = {keyword: frozenset(values) for keyword, values in ids.items()}
        with self._lock:
            self._ids = frozen_ids
            self._known = frozenset(known)
            self._ready = ready
            self._loading = False
            self._error = None
        return len(known)

    def mark_loading(self) -> None:
        with self._lock:
            self._loading = True

    def mark_failed(self, error: str) -> None:
        with self._lock:
            self._ready = False
            self._loading = False
            self._error = error

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def known_keywords(self) -> frozenset[str]:
        return self._known

    def is_ready(self) -> bool:
        return self._ready

    def contains(self, keyword: str) -> bool:
        return normalize_keyword(keyword) in self._known

    def lookup_ids(self, keyword: str) -> frozenset[SymbolId]:
        return self._ids.get(normalize_keyword(keyword), frozenset())

    def __len__(self) -> int:
        return len(self._known)


def _symbol_id(picto: Any) -> SymbolId | None:
    if isinstance(picto, (int, str)) and not isinstance(picto, bool):
        return picto
    if isinstance(picto, dict):
        value = picto.get("_id", picto.get("id"))
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return value
    return None


def _row_keyword(row: Any) -> str:
    if isinstance(row, str):
        return normalize_keyword(row)
    if isinstance(row, dict):
        raw = row.get("keyword") or row.get("name") or ""
        if isinstance(raw, str):
            return normalize_keyword(raw)
    return ""


def parse_keyword_payload(data: Any) -> list[KeywordEntry]:
    """Accept either ARASAAC shape: a list of keyword rows with pictograms,
    or ``{"words": [...]}`` with bare keywords."""
    if isinstance(data, list):
        entries: list[KeywordEntry] = []
        for row in data:
            keyword = _row_keyword(row)
            if not keyword:
                continue
            pictograms = row.get("pictograms") if isinstance(row, dict) else None
            if not isinstance(pictograms, list):
                pictograms = []
            ids = {
                symbol_id
                for symbol_id in (_symbol_id(picto) for picto in pictograms)
                if symbol_id is not None
            }
            entries.append(KeywordEntry(keyword=keyword, symbol_ids=frozenset(ids)))
        return entries

    if isinstance(data, dict) and isinstance(data.get("words"), list):
        return [
            KeywordEntry(keyword=keyword)
            for keyword in (_row_keyword(word) for word in data["words"])
            if keyword
        ]

    raise KeywordIndexLoadError("Keyword payload is neither a row list nor a words object.")


def load_keyword_file(path: Path) -> list[KeywordEntry]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise KeywordIndexLoadError(f"Could not read keyword file {path}: {exc}") from exc
    return parse_keyword_payload(data)


def populate_index(index: InMemoryKeywordIndex, entries: Iterable[KeywordEntry], *, source: str) -> int:
    count = index.load(entries)
    logger.info(
        "keyword_index_loaded",
        extra={"source": source, "keywords": count},
    )
    return count
