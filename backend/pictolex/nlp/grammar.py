"""Per-token grammatical analysis and the ``key:value|key:value`` line
format used by external analysers (one line per word)."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from pictolex.nlp.tables import Gender, Number, Tense


_VALID_GENDERS = {"maschile", "femminile", "sconosciuto"}
_VALID_NUMBERS = {"singolare", "plurale"}
_TENSE_WORDS: dict[str, Tense] = {
    "passato": "past",
    "past": "past",
    "pasado": "past",
    "presente": "present",
    "present": "present",
    "futuro": "future",
    "future": "future",
}
_LINE_SPLIT = re.compile(r"\n+")


@dataclass(frozen=True)
class GrammaticalAnalysis:
    lemma: str | None
    gender: Gender | None = None
    number: Number | None = None
    tense: Tense | None = None
    pronoun_class: str | None = None
    synonyms: tuple[str, ...] = ()

    @property
    def is_function_word(self) -> bool:
        return self.lemma is None


FUNCTION_WORD = GrammaticalAnalysis(lemma=None)


def _clean(text: str) -> str:
    return text.strip().lower().replace("`", "")


def parse_analysis_line(line: str) -> GrammaticalAnalysis:
    fields: dict[str, str] = {}
    synonyms: tuple[str, ...] = ()
    for part in line.split("|"):
        pieces = part.split(":")
        if len(pieces) != 2:
            continue
        key, value = _clean(pieces[0]), _clean(pieces[1])
        if key == "sinonimi":
            if value and value != "null":
                synonyms = tuple(item.strip() for item in value.split(";") if item.strip())
            continue
        if key in {"pronome_soggetto", "pronome_oggetto"}:
            key = "pronome"
        fields[key] = value

    lemma = fields.get("lemma") or None
    if lemma == "null":
        lemma = None
    gender = fields.get("genere")
    number = fields.get("numero")
    pronoun = fields.get("pronome")
    return GrammaticalAnalysis(
        lemma=lemma,
        gender=gender if gender in _VALID_GENDERS else None,
        number=number if number in _VALID_NUMBERS else None,
        tense=_TENSE_WORDS.get(fields.get("tempo", "")),
        pronoun_class=pronoun if pronoun and pronoun != "null" else None,
        synonyms=synonyms,
    )


def parse_analysis_lines(answer: str | None) -> list[GrammaticalAnalysis]:
    if not answer:
        return []
    lines = [line.strip() for line in _LINE_SPLIT.split(answer)]
    return [parse_analysis_line(line) for line in lines if line]


def merge_analysis(
    heuristic: GrammaticalAnalysis,
    external: GrammaticalAnalysis | None,
) -> GrammaticalAnalysis:
    """Overlay the fields an external analyser filled in on top of ours."""
    if external is None:
        return heuristic
    return replace(
        heuristic,
        lemma=external.lemma or heuristic.lemma,
        gender=external.gender or heuristic.gender,
        number=external.number or heuristic.number,
        tense=external.tense or heuristic.tense,
        pronoun_class=external.pronoun_class or heuristic.pronoun_class,
        synonyms=external.synonyms or heuristic.synonyms,
    )
