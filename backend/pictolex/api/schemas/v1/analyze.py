from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


LanguageCode = Literal["it", "es", "en"]
TenseValue = Literal["past", "present", "future"]


class AnalyzeRequest(BaseModel):
    text: str = Field(...)
    lang: LanguageCode = "it"
    skip_stop_words: bool | None = None


class GrammaticalAnalysisModel(BaseModel):
    lemma: str | None
    gender: Literal["maschile", "femminile", "sconosciuto"] | None = None
    number: Literal["singolare", "plurale"] | None = None
    tense: TenseValue | None = None
    pronoun_class: str | None = None
    synonyms: list[str] = Field(default_factory=list)


class AnalyzedToken(BaseModel):
    token: str
    position: int
    sanitized: str
    query_term: str | None
    analysis: GrammaticalAnalysisModel
    match_source: Literal["exact", "variant", "pronoun", "none", "skipped"]
    candidates: list[str] = Field(default_factory=list)
    reason_tags: list[str] = Field(default_factory=list)
    inconclusive: bool = False
    symbol_ids: list[int | str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    tokens: list[AnalyzedToken]
    index_ready: bool


class TermRequest(BaseModel):
    term: str = Field(...)
    lang: LanguageCode = "it"


class VariantsResponse(BaseModel):
    term: str
    lang: LanguageCode
    variants: list[str]


class TenseResponse(BaseModel):
    term: str
    lang: LanguageCode
    tense: TenseValue | None


class DepluralizeRequest(BaseModel):
    term: str = Field(...)


class DepluralizeResponse(BaseModel):
    term: str
    forms: list[str]


class KeywordLookupResponse(BaseModel):
    keyword: str
    known: bool
    symbol_ids: list[int | str]
    index_ready: bool
