from pictolex.api.schemas.v1 import (
    AnalyzedToken,
    AnalyzeRequest,
    AnalyzeResponse,
    DepluralizeRequest,
    DepluralizeResponse,
    KeywordLookupResponse,
    TenseResponse,
    TermRequest,
    VariantsResponse,
)

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AnalyzedToken",
    "DepluralizeRequest",
    "DepluralizeResponse",
    "KeywordLookupResponse",
    "TenseResponse",
    "TermRequest",
    "VariantsResponse",
]
