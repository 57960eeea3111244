from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from pictolex.api.schemas.v1.analyze import AnalyzeRequest, AnalyzeResponse
from pictolex.services.matching import MatchingEngine
from pictolex.services.use_cases.analyze import AnalyzePhraseUseCase

router = APIRouter()
logger = logging.getLogger(__name__)


def get_engine(request: Request) -> MatchingEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(
            status_code=503,
            detail="Analysis engine unavailable. Check backend logs.",
        )
    return engine


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_phrase(payload: AnalyzeRequest, request: Request) -> AnalyzeResponse:
    engine = get_engine(request)
    skip_stop_words = payload.skip_stop_words
    if skip_stop_words is None:
        skip_stop_words = request.app.state.settings.skip_stop_words
    response = AnalyzePhraseUseCase(engine).execute(
        payload.text,
        payload.lang,
        skip_stop_words=skip_stop_words,
    )
    if not response.index_ready:
        logger.info(
            "analyze_with_index_not_ready",
            extra={"lang": payload.lang, "tokens": len(response.tokens)},
        )
    return response
