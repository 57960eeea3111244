"""Inflection reversal: from a surface form to the base forms worth looking up.

Each language gets one generator function. Rules are independent and only
ever add candidates, so the result is deliberately over-inclusive: a
participle cannot tell its conjugation class and an ``-a`` ending can be a
feminine adjective or a verb, so all readings are kept and the keyword index
lookup filters them later.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from pictolex.nlp.tables import IRREGULAR_FUTURE_TO_INF, IRREGULAR_PRESENT


MIN_CANDIDATE_LENGTH = 2


class _VariantCollector:
    """Accumulates candidates, dropping derived forms that are too short."""

    def __init__(self, term: str):
        self._items: set[str] = {term}

    def add(self, candidate: str | None) -> None:
        if candidate and len(candidate) >= MIN_CANDIDATE_LENGTH:
            self._items.add(candidate)

    def add_all(self, candidates: Iterable[str]) -> None:
        for candidate in candidates:
            self.add(candidate)

    def result(self) -> frozenset[str]:
        return frozenset(self._items)


def _root(word: str, suffix: str, min_root: int = 1) -> str | None:
    """Return ``word`` without ``suffix`` when at least ``min_root`` chars remain."""
    if not suffix or not word.endswith(suffix):
        return None
    root = word[: -len(suffix)]
    if len(root) < min_root:
        return None
    return root


def _undouble(root: str) -> str | None:
    if len(root) > 1 and root[-1] == root[-2]:
        return root[:-1]
    return None


def _adverb(word: str, out: _VariantCollector) -> None:
    """-mente adverbs are built on the feminine adjective (lentamente, rápidamente)."""
    if len(word) <= 6:
        return
    root = _root(word, "mente")
    if root is None:
        return
    out.add(root)
    if root.endswith("a"):
        out.add(root[:-1] + "o")
    elif root.endswith(("l", "r")):
        # facilmente -> facile
        out.add(root + "e")


# ---------------------------------------------------------------- Italian

_IT_INFINITIVES = ("are", "ere", "ire")
_IT_CLITICS = ("la", "lo", "li", "le", "mi", "ti", "si", "ci", "vi", "ne", "gli")
_IT_FULL_INFINITIVE_CLITIC = re.compile(r"(are|ere|ire)(" + "|".join(_IT_CLITICS) + r")$")
_IT_TRUNCATED_INFINITIVE_CLITIC = re.compile(r"(ar|er|ir)(" + "|".join(_IT_CLITICS) + r")$")
_IT_PARTICIPLE = re.compile(r"(at|it|ut)[oaie]$")

_IT_PRESENT = (
    (("o", "i", "a", "iamo", "ate", "ano"), ("are",)),
    (("o", "i", "e", "iamo", "ete", "ono"), ("ere",)),
    (("o", "i", "e", "iamo", "ite", "ono"), ("ire",)),
)
_IT_ISC_PRESENT = ("isco", "isci", "isce", "iscono")

_IT_IMPERFECT = {
    "are": ("avo", "avi", "ava", "avamo", "avate", "avano"),
    "ere": ("evo", "evi", "eva", "evamo", "evate", "evano"),
    "ire": ("ivo", "ivi", "iva", "ivamo", "ivate", "ivano"),
}

_IT_FUTURE_ENDINGS = ("ò", "ai", "à", "emo", "ete", "anno")

_IT_REMOTE_PAST = {
    "are": ("ai", "asti", "ò", "ammo", "aste", "arono"),
    "ere": ("ei", "esti", "é", "emmo", "este", "erono", "etti", "ette", "ettero"),
    "ire": ("ii", "isti", "ì", "immo", "iste", "irono"),
}

_IT_STATO = frozenset({"stato", "stata", "stati", "state"})


def _italian_clitics(word: str, out: _VariantCollector) -> None:
    match = _IT_FULL_INFINITIVE_CLITIC.search(word)
    if match:
        out.add(word[: -len(match.group(2))])
    # lavarsi, dargli, prenderlo: the infinitive loses its final -e
    match = _IT_TRUNCATED_INFINITIVE_CLITIC.search(word)
    if match and len(word) > len(match.group(0)):
        out.add(word[: -len(match.group(2))] + "e")


def _italian_future(word: str, out: _VariantCollector) -> None:
    for ending in _IT_FUTURE_ENDINGS:
        base = _root(word, "er" + ending)
        if base is not None:
            out.add(base + "are")
            out.add(base + "ere")
            if base.endswith(("c", "g")):
                # mangerò -> mangiare, comincerò -> cominciare
                out.add(base + "iare")
            if base.endswith(("ch", "gh")):
                # cercherò -> cercare, pagherò -> pagare
                out.add(base[:-1] + "are")
        base = _root(word, "ir" + ending)
        if base is not None:
            out.add(base + "ire")


def generate_italian_variants(term: str) -> frozenset[str]:
    out = _VariantCollector(term)
    word = term.lower()
    out.add(word)

    out.add(IRREGULAR_PRESENT["it"].get(word))
    out.add(IRREGULAR_FUTURE_TO_INF["it"].get(word))

    _italian_clitics(word, out)

    participle = _IT_PARTICIPLE.search(word)
    if participle and participle.start() > 0:
        stem = word[: participle.start()]
        out.add_all(stem + ending for ending in _IT_INFINITIVES)

    root = _root(word, "ando")
    if root is not None:
        out.add(root + "are")
    root = _root(word, "endo")
    if root is not None:
        out.add(root + "ere")
        out.add(root + "ire")

    for endings, infinitives in _IT_PRESENT:
        for suffix in endings:
            root = _root(word, suffix, min_root=2)
            if root is not None:
                out.add_all(root + infinitive for infinitive in infinitives)

    for suffix in _IT_ISC_PRESENT:
        root = _root(word, suffix)
        if root is not None:
            out.add(root + "ire")

    for infinitive, endings in _IT_IMPERFECT.items():
        for suffix in endings:
            root = _root(word, suffix, min_root=2)
            if root is not None:
                out.add(root + infinitive)

    _italian_future(word, out)

    for infinitive, endings in _IT_REMOTE_PAST.items():
        for suffix in endings:
            root = _root(word, suffix, min_root=2)
            if root is not None:
                out.add(root + infinitive)

    _adverb(word, out)

    root = _root(word, "a")
    if root is not None:
        out.add(root + "o")

    if word in _IT_STATO:
        out.add("stare")
        out.add("essere")

    return out.result()


# ---------------------------------------------------------------- Spanish

_ES_CLITICS = ("me", "te", "se", "nos", "os", "lo", "la", "los", "las", "le", "les")
_ES_PARTICIPLES = ("ado", "ada", "ados", "adas", "ido", "ida", "idos", "idas")

_ES_PRESENT = (
    (("o", "as", "a", "amos", "áis", "an"), ("ar",)),
    (("o", "es", "e", "emos", "éis", "en"), ("er", "ir")),
    (("o", "es", "e", "imos", "ís", "en"), ("ir",)),
)

# imperfect, preterite and future endings -> infinitive endings
_ES_FINITE = (
    (("aba", "abas", "ábamos", "abais", "aban"), ("ar",)),
    (("ía", "ías", "íamos", "íais", "ían"), ("er", "ir")),
    (("é", "aste", "ó", "amos", "asteis", "aron"), ("ar",)),
    (("í", "iste", "ió", "imos", "isteis", "ieron"), ("er", "ir")),
    (("aré", "arás", "ará", "aremos", "aréis", "arán"), ("ar",)),
    (("eré", "erás", "erá", "eremos", "eréis", "erán"), ("er",)),
    (("iré", "irás", "irá", "iremos", "iréis", "irán"), ("ir",)),
)


def _apply_suffix_table(
    word: str,
    table: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...],
    out: _VariantCollector,
    *,
    min_root: int,
) -> None:
    for endings, infinitives in table:
        for suffix in endings:
            root = _root(word, suffix, min_root=min_root)
            if root is not None:
                out.add_all(root + infinitive for infinitive in infinitives)


def generate_spanish_variants(term: str) -> frozenset[str]:
    out = _VariantCollector(term)
    word = term.lower()
    out.add(word)

    for clitic in _ES_CLITICS:
        out.add(_root(word, clitic, min_root=2))

    for suffix in _ES_PARTICIPLES:
        root = _root(word, suffix, min_root=2)
        if root is not None:
            out.add_all(root + infinitive for infinitive in ("ar", "er", "ir"))

    root = _root(word, "ando")
    if root is not None:
        out.add(root + "ar")
    for gerund in ("iendo", "yendo"):
        root = _root(word, gerund)
        if root is not None:
            out.add(root + "er")
            out.add(root + "ir")

    _apply_suffix_table(word, _ES_PRESENT, out, min_root=2)
    _apply_suffix_table(word, _ES_FINITE, out, min_root=2)

    _adverb(word, out)

    return out.result()


# ---------------------------------------------------------------- English

_VOWELS = frozenset("aeiouy")


def _english_reductions(
    root: str, out: _VariantCollector, *, i_to_y: bool = False, silent_e: bool = False
) -> None:
    out.add(root)
    out.add(_undouble(root))
    if i_to_y and root.endswith("i"):
        out.add(root[:-1] + "y")
    if silent_e and len(root) > 1 and root[-1] not in _VOWELS:
        # baked -> bake, making -> make
        out.add(root + "e")


def generate_english_variants(term: str) -> frozenset[str]:
    out = _VariantCollector(term)
    word = term.lower()
    out.add(word)

    root = _root(word, "ies")
    if root is not None:
        out.add(root + "y")
    out.add(_root(word, "es"))
    out.add(_root(word, "s"))

    root = _root(word, "ied")
    if root is not None:
        out.add(root + "y")
    root = _root(word, "ed")
    if root is not None:
        _english_reductions(root, out, silent_e=True)

    root = _root(word, "ing")
    if root is not None:
        _english_reductions(root, out, silent_e=True)
        if root.endswith("ie"):
            out.add(root[:-2] + "y")
        elif root.endswith("y") and len(root) > 1:
            # lying -> lie
            out.add(root[:-1] + "ie")

    for suffix in ("er", "est"):
        root = _root(word, suffix)
        if root is not None:
            _english_reductions(root, out, i_to_y=True)

    out.add(_root(word, "ly"))
    out.add(_root(word, "'s"))

    return out.result()


# ---------------------------------------------------------------- dispatch

_GENERATORS: dict[str, Callable[[str], frozenset[str]]] = {
    "it": generate_italian_variants,
    "es": generate_spanish_variants,
    "en": generate_english_variants,
}


def generate_variants(term: str, lang: str) -> frozenset[str]:
    generator = _GENERATORS.get(lang)
    if generator is None or not term:
        return frozenset({term})
    return generator(term)


def depluralize_italian(term: str | None) -> frozenset[str]:
    word = (term or "").lower().strip()
    if not word:
        return frozenset()
    results = {word}
    root = _root(word, "i")
    if root is not None:
        results.add(root + "o")
        results.add(root + "a")
    root = _root(word, "e")
    if root is not None:
        results.add(root + "a")
        results.add(root + "o")
    return frozenset(results)
