from __future__ import annotations

from fastapi import APIRouter, Request

from pictolex.api.routes.analyze import get_engine
from pictolex.api.schemas.v1.analyze import (
    DepluralizeRequest,
    DepluralizeResponse,
    KeywordLookupResponse,
    TenseResponse,
    TermRequest,
    VariantsResponse,
)
from pictolex.nlp.sanitizer import sanitize

router = APIRouter()


@router.post("/variants", response_model=VariantsResponse)
def post_variants(payload: TermRequest, request: Request) -> VariantsResponse:
    engine = get_engine(request)
    variants = engine.generate_variants(payload.term, payload.lang)
    return VariantsResponse(term=payload.term, lang=payload.lang, variants=sorted(variants))


@router.post("/tense", response_model=TenseResponse)
def post_tense(payload: TermRequest, request: Request) -> TenseResponse:
    engine = get_engine(request)
    return TenseResponse(
        term=payload.term,
        lang=payload.lang,
        tense=engine.detect_tense(payload.term, payload.lang),
    )


@router.post("/depluralize", response_model=DepluralizeResponse)
def post_depluralize(payload: DepluralizeRequest, request: Request) -> DepluralizeResponse:
    engine = get_engine(request)
    return DepluralizeResponse(term=payload.term, forms=sorted(engine.depluralize_italian(payload.term)))


@router.get("/keywords/{keyword}", response_model=KeywordLookupResponse)
def get_keyword(keyword: str, request: Request) -> KeywordLookupResponse:
    index = get_engine(request).keyword_index
    normalized = sanitize(keyword)
    return KeywordLookupResponse(
        keyword=normalized,
        known=index.contains(normalized),
        symbol_ids=sorted(index.lookup_ids(normalized), key=str),
        index_ready=index.is_ready(),
    )
