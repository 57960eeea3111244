from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from pictolex.services.arasaac import DEFAULT_ARASAAC_BASE_URL


DEFAULT_CORS_ORIGINS = ("http://127.0.0.1:4173", "http://localhost:4173")
_FALSE_VALUES = {"0", "false", "no"}


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True)
class Settings:
    environment: str
    app_name: str
    host: str
    port: int
    language: str = "it"
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    skip_stop_words: bool = True
    keyword_index_enabled: bool = True
    keyword_index_path: Path | None = None
    arasaac_base_url: str = DEFAULT_ARASAAC_BASE_URL
    http_timeout_seconds: float = 20.0
    variant_cache_size: int = 4096
    max_workers: int = 1


def load_settings() -> Settings:
    raw_cors_origins = os.getenv("PICTOLEX_CORS_ORIGINS", "")
    parsed_cors_origins = tuple(
        origin.strip()
        for origin in raw_cors_origins.split(",")
        if origin.strip()
    )
    return Settings(
        environment=os.getenv("PICTOLEX_ENV", "development"),
        app_name=os.getenv("PICTOLEX_APP_NAME", "pictolex-backend"),
        host=os.getenv("PICTOLEX_HOST", "127.0.0.1"),
        port=int(os.getenv("PICTOLEX_PORT", "8000")),
        language=os.getenv("PICTOLEX_LANGUAGE", "it").strip().lower() or "it",
        cors_origins=parsed_cors_origins or DEFAULT_CORS_ORIGINS,
        skip_stop_words=_env_flag("PICTOLEX_SKIP_STOP_WORDS"),
        keyword_index_enabled=_env_flag("PICTOLEX_KEYWORD_INDEX_ENABLED"),
        keyword_index_path=Path(os.getenv("PICTOLEX_KEYWORD_INDEX_PATH"))
        if os.getenv("PICTOLEX_KEYWORD_INDEX_PATH")
        else None,
        arasaac_base_url=os.getenv("PICTOLEX_ARASAAC_BASE_URL", DEFAULT_ARASAAC_BASE_URL),
        http_timeout_seconds=float(os.getenv("PICTOLEX_HTTP_TIMEOUT_SECONDS", "20")),
        variant_cache_size=int(os.getenv("PICTOLEX_VARIANT_CACHE_SIZE", "4096")),
        max_workers=int(os.getenv("PICTOLEX_MAX_WORKERS", "1")),
    )
