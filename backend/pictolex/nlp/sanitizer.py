from __future__ import annotations

import re


# Elided articles and prepositions, mostly Italian: l'albero, dell'acqua, c'è.
ELISION_PREFIX_PATTERN = re.compile(
    r"^(l|un|dell|all|nell|sull|dall|c|d|n|s|t|v|m|qu)['\u2018\u2019]",
    flags=re.IGNORECASE,
)
PUNCTUATION_PATTERN = re.compile(r"[.,;:!?\"'()\[\]{}<>\u2018\u2019]")


def strip_elision(word: str) -> str:
    return ELISION_PREFIX_PATTERN.sub("", word, count=1)


def sanitize(word: str | None) -> str:
    if not word:
        return ""
    cleaned = strip_elision(word)
    return PUNCTUATION_PATTERN.sub("", cleaned.lower()).strip()
