from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Literal, Protocol

from pictolex.nlp.candidate_ranker import merge_candidates, pick_first_known, rank_candidates
from pictolex.nlp.grammar import FUNCTION_WORD, GrammaticalAnalysis, merge_analysis
from pictolex.nlp.pronouns import DEFAULT_PRONOUN_RESOLVER, PronounResolver
from pictolex.nlp.sanitizer import sanitize
from pictolex.nlp.tables import (
    GENDER_MARKERS,
    LOCAL_SYNONYMS,
    NUMBER_MARKERS,
    Tense,
    is_stop_word,
)
from pictolex.nlp.tense import detect_tense
from pictolex.nlp.tokenizer import SurfaceToken, tokenize
from pictolex.nlp.variants import depluralize_italian, generate_variants
from pictolex.services.cache import LRUCache
from pictolex.services.keyword_index import KeywordIndexProvider, NullKeywordIndex


logger = logging.getLogger(__name__)

MatchSource = Literal["exact", "variant", "pronoun", "none", "skipped"]


class AnalysisCancelled(RuntimeError):
    """Raised when the caller cancels a phrase analysis in flight."""


class AnalysisProviderError(RuntimeError):
    """Raised by an external analysis provider that could not answer."""


class AnalysisProvider(Protocol):
    def analyze(self, text: str, lang: str) -> list[GrammaticalAnalysis] | None:
        ...


@dataclass(frozen=True)
class TokenMatch:
    token: str
    position: int
    sanitized: str
    query_term: str | None
    analysis: GrammaticalAnalysis
    match_source: MatchSource
    candidates: tuple[str, ...] = ()
    reason_tags: tuple[str, ...] = ()
    inconclusive: bool = False


class MatchingEngine:
    def __init__(
        self,
        keyword_index: KeywordIndexProvider | None = None,
        *,
        pronoun_resolver: PronounResolver | None = None,
        variant_cache: LRUCache[tuple[str, str], frozenset[str]] | None = None,
        analysis_provider: AnalysisProvider | None = None,
        max_workers: int = 1,
    ):
        self.keyword_index = keyword_index if keyword_index is not None else NullKeywordIndex()
        self.pronoun_resolver = pronoun_resolver or DEFAULT_PRONOUN_RESOLVER
        self.variant_cache = variant_cache
        self.analysis_provider = analysis_provider
        self.max_workers = max(1, max_workers)

    def generate_variants(self, term: str, lang: str) -> frozenset[str]:
        if self.variant_cache is None:
            return generate_variants(term, lang)
        key = (lang, term)
        cached = self.variant_cache.get(key)
        if cached is not None:
            return cached
        variants = generate_variants(term, lang)
        self.variant_cache.set(key, variants)
        return variants

    def detect_tense(self, term: str, lang: str) -> Tense | None:
        return detect_tense(term, lang)

    def depluralize_italian(self, term: str) -> frozenset[str]:
        return depluralize_italian(term)

    def analyze_token(
        self,
        token: SurfaceToken | str,
        lang: str,
        *,
        skip_stop_words: bool = True,
        previous: str | None = None,
    ) -> TokenMatch:
        surface = token if isinstance(token, SurfaceToken) else SurfaceToken(raw=token, position=0)
        key = sanitize(surface.raw)

        if not key:
            return self._skipped(surface, key, "empty_token")
        if skip_stop_words and is_stop_word(key, lang):
            return self._skipped(surface, key, "stop_word")

        pronoun = self.pronoun_resolver.resolve(key, lang)
        if pronoun is not None:
            candidates = merge_candidates([pronoun.search_term, key])
        else:
            candidates = rank_candidates(key, self.generate_variants(key, lang))

        index_ready = self.keyword_index.is_ready()
        matched = pick_first_known(candidates, self.keyword_index.contains)

        reason_tags: list[str] = []
        inconclusive = False
        if matched is None:
            query_term = pronoun.search_term if pronoun is not None else key
            match_source: MatchSource = "none"
            reason_tags.append("no_match")
            if not index_ready:
                reason_tags.append("index_not_ready")
                inconclusive = True
        elif pronoun is not None:
            query_term = matched
            match_source = "pronoun"
            reason_tags.append("pronoun_match")
        else:
            query_term = matched
            match_source = "exact" if matched == key else "variant"
            reason_tags.append("exact_match" if matched == key else "variant_match")

        if pronoun is not None:
            analysis = GrammaticalAnalysis(
                lemma=query_term,
                gender=pronoun.gender,
                number=pronoun.number,
                pronoun_class=pronoun.search_term,
            )
        else:
            tense = detect_tense(key, lang)
            if lang == "en" and previous == "will":
                tense = detect_tense(f"will {key}", lang)
            analysis = GrammaticalAnalysis(
                lemma=query_term,
                tense=tense,
                synonyms=LOCAL_SYNONYMS.get(lang, {}).get(key, ()),
            )

        return TokenMatch(
            token=surface.raw,
            position=surface.position,
            sanitized=key,
            query_term=query_term,
            analysis=analysis,
            match_source=match_source,
            candidates=tuple(candidates),
            reason_tags=tuple(reason_tags),
            inconclusive=inconclusive,
        )

    def analyze_phrase(
        self,
        text: str,
        lang: str,
        *,
        skip_stop_words: bool = True,
        cancel_event: threading.Event | None = None,
    ) -> list[TokenMatch]:
        tokens = tokenize(text)
        if not tokens:
            return []
        previous_keys = [None] + [sanitize(token.raw) for token in tokens[:-1]]

        def run(item: tuple[SurfaceToken, str | None]) -> TokenMatch:
            if cancel_event is not None and cancel_event.is_set():
                raise AnalysisCancelled("Phrase analysis was cancelled.")
            token, previous = item
            return self.analyze_token(
                token,
                lang,
                skip_stop_words=skip_stop_words,
                previous=previous,
            )

        work = list(zip(tokens, previous_keys, strict=True))
        try:
            if self.max_workers > 1 and len(work) > 1:
                executor = ThreadPoolExecutor(max_workers=self.max_workers)
                try:
                    # map() yields in submission order whatever the completion order.
                    results = list(executor.map(run, work))
                finally:
                    executor.shutdown(wait=True, cancel_futures=True)
            else:
                results = [run(item) for item in work]
        except AnalysisCancelled:
            logger.info("analysis_cancelled", extra={"lang": lang, "tokens": len(tokens)})
            raise

        results = self._fold_grammar_markers(results, lang)
        return self._merge_external_analyses(text, lang, results)

    def _skipped(self, surface: SurfaceToken, key: str, reason: str) -> TokenMatch:
        return TokenMatch(
            token=surface.raw,
            position=surface.position,
            sanitized=key,
            query_term=None,
            analysis=FUNCTION_WORD,
            match_source="skipped",
            reason_tags=(reason,),
        )

    def _fold_grammar_markers(self, results: list[TokenMatch], lang: str) -> list[TokenMatch]:
        """Words such as "femmina" or "plurale" annotate the preceding content
        word instead of being looked up on their own."""
        gender_markers = GENDER_MARKERS.get(lang, {})
        number_markers = NUMBER_MARKERS.get(lang, {})
        folded = list(results)
        for index, match in enumerate(folded):
            gender = gender_markers.get(match.sanitized)
            number = number_markers.get(match.sanitized)
            if gender is None and number is None:
                continue
            target = index - 1
            while target >= 0 and folded[target].query_term is None:
                target -= 1
            if target < 0:
                continue

            previous = folded[target]
            folded[target] = replace(
                previous,
                analysis=replace(
                    previous.analysis,
                    gender=gender or previous.analysis.gender,
                    number=number or previous.analysis.number,
                ),
            )
            folded[index] = replace(
                match,
                query_term=None,
                analysis=GrammaticalAnalysis(lemma=None, gender=gender, number=number),
                match_source="skipped",
                candidates=(),
                reason_tags=("grammar_marker",),
                inconclusive=False,
            )
        return folded

    def _merge_external_analyses(self, text: str, lang: str, results: list[TokenMatch]) -> list[TokenMatch]:
        if self.analysis_provider is None:
            return results
        try:
            external = self.analysis_provider.analyze(text, lang)
        except AnalysisProviderError:
            logger.warning("external_analysis_failed", extra={"lang": lang}, exc_info=True)
            return results
        if not external or len(external) != len(results):
            return results
        return [
            replace(match, analysis=merge_analysis(match.analysis, extra))
            if match.query_term is not None
            else match
            for match, extra in zip(results, external, strict=True)
        ]
