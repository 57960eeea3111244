from pictolex.api.schemas.v1.analyze import (
    AnalyzedToken,
    AnalyzeRequest,
    AnalyzeResponse,
    DepluralizeRequest,
    DepluralizeResponse,
    GrammaticalAnalysisModel,
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
    "GrammaticalAnalysisModel",
    "KeywordLookupResponse",
    "TenseResponse",
    "TermRequest",
    "VariantsResponse",
]
