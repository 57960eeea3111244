from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import httpx

from pictolex.services.keyword_index import (
    InMemoryKeywordIndex,
    KeywordEntry,
    KeywordIndexLoadError,
    parse_keyword_payload,
    populate_index,
)


logger = logging.getLogger(__name__)

DEFAULT_ARASAAC_BASE_URL = "https://api.arasaac.org/api"
_RETRYABLE_STATUS = {429, 500, 502, 503, 504}


@dataclass
class ArasaacKeywordLoader:
    """Fetches the ARASAAC keyword list for one language."""

    language: str = "it"
    base_url: str = DEFAULT_ARASAAC_BASE_URL
    timeout_seconds: float = 20.0
    max_retries: int = 3
    backoff_seconds: float = 0.5
    max_backoff_seconds: float = 8.0
    _client: httpx.Client | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.language = self.language.strip().lower()
        if not self.language:
            raise KeywordIndexLoadError("A language code is required to load ARASAAC keywords.")
        self.base_url = self.base_url.rstrip("/")

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout_seconds)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def source(self) -> str:
        return f"{self.base_url}/keywords/{self.language}"

    def fetch_entries(self) -> list[KeywordEntry]:
        response = self._get_with_retry(f"/keywords/{self.language}")
        try:
            body = response.json()
        except ValueError as exc:
            raise KeywordIndexLoadError("ARASAAC keyword response was not valid JSON.") from exc
        return parse_keyword_payload(body)

    def load_into(self, index: InMemoryKeywordIndex) -> int:
        index.mark_loading()
        try:
            entries = self.fetch_entries()
        except KeywordIndexLoadError as exc:
            index.mark_failed(str(exc))
            raise
        return populate_index(index, entries, source=self.source)

    def _get_with_retry(self, path: str) -> httpx.Response:
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            try:
                response = self._ensure_client().get(path)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code if exc.response is not None else 0
                if status_code in _RETRYABLE_STATUS and attempt < self.max_retries:
                    self._sleep_before_retry(attempt=attempt, response=exc.response)
                    continue
                raise KeywordIndexLoadError(
                    f"ARASAAC keyword request failed with status {status_code}."
                ) from exc
            except httpx.HTTPError as exc:
                if attempt < self.max_retries:
                    self._sleep_before_retry(attempt=attempt, response=None)
                    continue
                raise KeywordIndexLoadError(f"ARASAAC keyword request failed: {exc}") from exc

        raise KeywordIndexLoadError("ARASAAC keyword request failed after retries.")

    def _sleep_before_retry(self, *, attempt: int, response: httpx.Response | None) -> None:
        retry_after = response.headers.get("Retry-After") if response is not None else None
        if retry_after:
            try:
                delay = float(retry_after)
            except ValueError:
                delay = self.backoff_seconds * (2**attempt)
        else:
            delay = self.backoff_seconds * (2**attempt)

        delay = max(0.0, min(delay, self.max_backoff_seconds))
        logger.warning(
            "keyword_fetch_retry",
            extra={"language": self.language, "attempt": attempt + 1, "delay_seconds": delay},
        )
        if delay > 0:
            time.sleep(delay)
