from pictolex.nlp.grammar import GrammaticalAnalysis, parse_analysis_lines
from pictolex.nlp.pronouns import PronounReading, PronounResolver
from pictolex.nlp.sanitizer import sanitize
from pictolex.nlp.tense import detect_tense
from pictolex.nlp.tokenizer import SurfaceToken, tokenize
from pictolex.nlp.variants import depluralize_italian, generate_variants

__all__ = [
    "GrammaticalAnalysis",
    "PronounReading",
    "PronounResolver",
    "SurfaceToken",
    "depluralize_italian",
    "detect_tense",
    "generate_variants",
    "parse_analysis_lines",
    "sanitize",
    "tokenize",
]
