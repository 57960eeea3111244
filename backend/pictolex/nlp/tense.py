from __future__ import annotations

import re

from pictolex.nlp.tables import IRREGULAR_FUTURE_TO_INF, Tense


_IT_FUTURE = re.compile(r"(er|ir)(ò|ai|à|emo|ete|anno)$")
_IT_PARTICIPLE = re.compile(r"(at|ut|it)[oaie]$")
_IT_IMPERFECT_ENDINGS = (
    "avo", "avi", "ava", "avamo", "avate", "avano",
    "evo", "evi", "eva", "evamo", "evate", "evano",
    "ivo", "ivi", "iva", "ivamo", "ivate", "ivano",
)
_IT_REMOTE_PAST_ENDINGS = (
    "ai", "asti", "ò", "ammo", "aste", "arono",
    "ei", "esti", "é", "emmo", "este", "erono", "etti", "ette", "ettero",
    "ii", "isti", "ì", "immo", "iste", "irono",
)

_ES_FUTURE = re.compile(r"(é|ás|á|emos|éis|án)$")
_ES_PAST = re.compile(r"(é|aste|ó|amos|asteis|aron|í|iste|ió|imos|isteis|ieron)$")

_EN_FUTURE = re.compile(r"^will\b")
_EN_PAST = re.compile(r"ed$")


def _italian_tense(word: str) -> Tense | None:
    if _IT_FUTURE.search(word):
        return "future"
    if word in IRREGULAR_FUTURE_TO_INF["it"]:
        return "future"
    if _IT_PARTICIPLE.search(word):
        return "past"
    if word.endswith(_IT_IMPERFECT_ENDINGS):
        return "past"
    if word.endswith(_IT_REMOTE_PAST_ENDINGS):
        return "past"
    # Untagged forms are mostly nouns and adjectives, not present-tense verbs.
    return None


def _spanish_tense(word: str) -> Tense | None:
    # Shared endings such as -é and -amos resolve to future: first match wins.
    if _ES_FUTURE.search(word):
        return "future"
    if _ES_PAST.search(word):
        return "past"
    return None


def _english_tense(word: str) -> Tense | None:
    if _EN_FUTURE.search(word):
        return "future"
    if _EN_PAST.search(word):
        return "past"
    return None


_DETECTORS = {
    "it": _italian_tense,
    "es": _spanish_tense,
    "en": _english_tense,
}


def detect_tense(term: str | None, lang: str) -> Tense | None:
    detector = _DETECTORS.get(lang)
    if detector is None or not term:
        return None
    return detector(term.lower())
