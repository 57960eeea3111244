from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Callable, Protocol

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pictolex.api.router import api_router
from pictolex.core.config import Settings, load_settings
from pictolex.core.logging import configure_logging
from pictolex.services.arasaac import ArasaacKeywordLoader
from pictolex.services.cache import LRUCache
from pictolex.services.keyword_index import (
    InMemoryKeywordIndex,
    KeywordIndexLoadError,
    load_keyword_file,
    populate_index,
)
from pictolex.services.matching import MatchingEngine

configure_logging()
logger = logging.getLogger(__name__)


class KeywordLoader(Protocol):
    def load_into(self, index: InMemoryKeywordIndex) -> int:
        ...

    def close(self) -> None:
        ...


def _default_keyword_loader_factory(settings: Settings) -> KeywordLoader:
    return ArasaacKeywordLoader(
        language=settings.language,
        base_url=settings.arasaac_base_url,
        timeout_seconds=settings.http_timeout_seconds,
    )


def _load_from_file(settings: Settings, index: InMemoryKeywordIndex) -> None:
    path = settings.keyword_index_path
    try:
        populate_index(index, load_keyword_file(path), source=str(path))
    except KeywordIndexLoadError as exc:
        index.mark_failed(str(exc))
        logger.exception("keyword_index_load_failed", extra={"source": str(path)})


def _load_from_loader(loader: KeywordLoader, index: InMemoryKeywordIndex) -> None:
    try:
        loader.load_into(index)
    except Exception as exc:
        index.mark_failed(str(exc))
        logger.exception("keyword_index_load_failed", extra={"loader": loader.__class__.__name__})
    finally:
        loader.close()


def create_app(
    settings: Settings | None = None,
    keyword_loader_factory: Callable[[Settings], KeywordLoader] = _default_keyword_loader_factory,
) -> FastAPI:
    app_settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        index = InMemoryKeywordIndex()
        load_task: asyncio.Task | None = None

        if not app_settings.keyword_index_enabled:
            logger.info("keyword_index_disabled")
        elif app_settings.keyword_index_path is not None:
            _load_from_file(app_settings, index)
        else:
            try:
                loader = keyword_loader_factory(app_settings)
            except Exception as exc:
                index.mark_failed(str(exc))
                logger.exception("keyword_loader_startup_failed")
            else:
                index.mark_loading()
                # Lookups made before this finishes are reported as inconclusive.
                load_task = asyncio.create_task(asyncio.to_thread(_load_from_loader, loader, index))

        app.state.keyword_index = index
        app.state.keyword_load_task = load_task
        app.state.engine = MatchingEngine(
            index,
            variant_cache=LRUCache(max_size=app_settings.variant_cache_size),
            max_workers=app_settings.max_workers,
        )

        logger.info(
            "backend_startup",
            extra={
                "environment": app_settings.environment,
                "host": app_settings.host,
                "port": app_settings.port,
                "language": app_settings.language,
                "keyword_index_enabled": app_settings.keyword_index_enabled,
                "keyword_index_ready": index.is_ready(),
                "keyword_index_source": str(app_settings.keyword_index_path or app_settings.arasaac_base_url),
            },
        )
        yield

        if load_task is not None and not load_task.done():
            load_task.cancel()
            with suppress(asyncio.CancelledError):
                await load_task

    app = FastAPI(title="Pictolex Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.keyword_index = None
    app.state.keyword_load_task = None
    app.state.engine = None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
