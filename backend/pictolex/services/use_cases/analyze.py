from __future__ import annotations

import threading

from pictolex.api.schemas.v1.analyze import (
    AnalyzedToken,
    AnalyzeResponse,
    GrammaticalAnalysisModel,
)
from pictolex.services.matching import MatchingEngine, TokenMatch


def _symbol_ids(engine: MatchingEngine, match: TokenMatch) -> list[int | str]:
    if match.query_term is None or match.match_source == "none":
        return []
    return sorted(engine.keyword_index.lookup_ids(match.query_term), key=str)


class AnalyzePhraseUseCase:
    def __init__(self, engine: MatchingEngine):
        self._engine = engine

    def execute(
        self,
        text: str,
        lang: str,
        *,
        skip_stop_words: bool = True,
        cancel_event: threading.Event | None = None,
    ) -> AnalyzeResponse:
        matches = self._engine.analyze_phrase(
            text,
            lang,
            skip_stop_words=skip_stop_words,
            cancel_event=cancel_event,
        )

        tokens: list[AnalyzedToken] = []
        for match in matches:
            analysis = match.analysis
            tokens.append(
                AnalyzedToken(
                    token=match.token,
                    position=match.position,
                    sanitized=match.sanitized,
                    query_term=match.query_term,
                    analysis=GrammaticalAnalysisModel(
                        lemma=analysis.lemma,
                        gender=analysis.gender,
                        number=analysis.number,
                        tense=analysis.tense,
                        pronoun_class=analysis.pronoun_class,
                        synonyms=list(analysis.synonyms),
                    ),
                    match_source=match.match_source,
                    candidates=list(match.candidates),
                    reason_tags=list(match.reason_tags),
                    inconclusive=match.inconclusive,
                    symbol_ids=_symbol_ids(self._engine, match),
                )
            )

        return AnalyzeResponse(tokens=tokens, index_ready=self._engine.keyword_index.is_ready())
