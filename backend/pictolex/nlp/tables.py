"""Static per-language tables shared by the variant generator, the tense
detector and the pronoun resolver.

Everything here is built once at import and never mutated afterwards.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping


Language = Literal["it", "es", "en"]
Gender = Literal["maschile", "femminile", "sconosciuto"]
Number = Literal["singolare", "plurale"]
Tense = Literal["past", "present", "future"]

SUPPORTED_LANGUAGES: tuple[Language, ...] = ("it", "es", "en")


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


STOP_WORDS: Mapping[str, frozenset[str]] = _frozen(
    {
        "it": frozenset(
            "il lo la i gli le un uno una del della dei degli delle "
            "di a da in con su per tra fra al allo alla ai agli alle "
            "dal dallo dalla dai dagli dalle nel nello nella nei negli nelle "
            "col coi sul sullo sulla sui sugli sulle e ed o oppure ma "
            "anche che se come più meno non mi ti si ci vi ne "
            "ho hai ha abbiamo avete hanno".split()
        ),
        "es": frozenset(
            "el la los las un una unos unas de a en con por para "
            "del al y o pero como más menos no me te se nos os le les".split()
        ),
        "en": frozenset(
            "the a an of to in on at for with by from as is was "
            "are be been have has had do does did will would can could "
            "may might must shall should and or but not no".split()
        ),
    }
)


# surface form -> infinitive
IRREGULAR_PRESENT: Mapping[str, Mapping[str, str]] = _frozen(
    {
        "it": _frozen(
            {
                "ho": "avere",
                "hai": "avere",
                "ha": "avere",
                "abbiamo": "avere",
                "avete": "avere",
                "hanno": "avere",
                "sono": "essere",
                "sei": "essere",
                "è": "essere",
                "siamo": "essere",
                "siete": "essere",
            }
        ),
        "es": _frozen({}),
        "en": _frozen({}),
    }
)


def _italian_future(stem: str) -> tuple[str, ...]:
    return tuple(stem + ending for ending in ("ò", "ai", "à", "emo", "ete", "anno"))


# infinitive -> {tense -> surface forms}
IRREGULAR_TENSES: Mapping[str, Mapping[str, Mapping[str, tuple[str, ...]]]] = _frozen(
    {
        "it": _frozen(
            {
                infinitive: _frozen({"future": _italian_future(stem)})
                for infinitive, stem in (
                    ("fare", "far"),
                    ("essere", "sar"),
                    ("avere", "avr"),
                    ("andare", "andr"),
                    ("potere", "potr"),
                    ("volere", "vorr"),
                    ("dovere", "dovr"),
                    ("bere", "berr"),
                    ("venire", "verr"),
                    ("tenere", "terr"),
                    ("porre", "porr"),
                    ("trarre", "trarr"),
                )
            }
        ),
        "es": _frozen({}),
        "en": _frozen({}),
    }
)


def irregular_forms(lang: str, tense: str) -> Mapping[str, str]:
    """Invert IRREGULAR_TENSES for one tense: surface form -> infinitive."""
    inverted: dict[str, str] = {}
    for infinitive, by_tense in IRREGULAR_TENSES.get(lang, {}).items():
        for surface in by_tense.get(tense, ()):
            inverted.setdefault(surface, infinitive)
    return _frozen(inverted)


IRREGULAR_FUTURE_TO_INF: Mapping[str, Mapping[str, str]] = _frozen(
    {lang: irregular_forms(lang, "future") for lang in SUPPORTED_LANGUAGES}
)


PRONOUNS: Mapping[str, frozenset[str]] = _frozen(
    {
        "it": frozenset(
            "io tu lui lei noi voi loro "
            "me te mi ti si ci vi ne gli le li la lo".split()
        ),
        "es": frozenset(
            "yo tú él ella nosotros nosotras vosotros vosotras ellos ellas "
            "me te se nos os lo la los las le les".split()
        ),
        "en": frozenset(
            "i you he she it we they me him her us them "
            "my your his hers our their".split()
        ),
    }
)


# Italian third-person object pronouns carry gender and number on their own.
OBJECT_PRONOUNS_IT: Mapping[str, Mapping[str, str]] = _frozen(
    {
        "lo": _frozen({"base": "lui", "gender": "maschile", "number": "singolare"}),
        "la": _frozen({"base": "lei", "gender": "femminile", "number": "singolare"}),
        "li": _frozen({"base": "loro", "gender": "maschile", "number": "plurale"}),
        "le": _frozen({"base": "loro", "gender": "femminile", "number": "plurale"}),
    }
)


PRONOUN_SEARCH_TERMS: Mapping[str, Mapping[str, str]] = _frozen(
    {
        "it": _frozen(
            {
                "me": "io",
                "mi": "io",
                "te": "tu",
                "ti": "tu",
                "ci": "noi",
                "vi": "voi",
                "lui": "lui",
                "lei": "lei",
                "lo": "lui",
                "la": "lei",
                "li": "loro",
                "le": "loro",
                "loro": "loro",
                "noi": "noi",
                "voi": "voi",
                "tu": "tu",
                "io": "io",
            }
        ),
        "es": _frozen({}),
        "en": _frozen({}),
    }
)


# subject pronoun -> (person, gender, number)
SUBJECT_PRONOUN_FEATURES: Mapping[str, Mapping[str, tuple[int, str | None, str | None]]] = _frozen(
    {
        "it": _frozen(
            {
                "io": (1, None, "singolare"),
                "tu": (2, None, "singolare"),
                "lui": (3, "maschile", "singolare"),
                "lei": (3, "femminile", "singolare"),
                "noi": (1, None, "plurale"),
                "voi": (2, None, "plurale"),
                "loro": (3, None, "plurale"),
            }
        ),
        "es": _frozen(
            {
                "yo": (1, None, "singolare"),
                "tú": (2, None, "singolare"),
                "él": (3, "maschile", "singolare"),
                "ella": (3, "femminile", "singolare"),
                "nosotros": (1, "maschile", "plurale"),
                "nosotras": (1, "femminile", "plurale"),
                "vosotros": (2, "maschile", "plurale"),
                "vosotras": (2, "femminile", "plurale"),
                "ellos": (3, "maschile", "plurale"),
                "ellas": (3, "femminile", "plurale"),
            }
        ),
        "en": _frozen(
            {
                "i": (1, None, "singolare"),
                "you": (2, None, None),
                "he": (3, "maschile", "singolare"),
                "she": (3, "femminile", "singolare"),
                "it": (3, None, "singolare"),
                "we": (1, None, "plurale"),
                "they": (3, None, "plurale"),
            }
        ),
    }
)


GENDER_MARKERS: Mapping[str, Mapping[str, Gender]] = _frozen(
    {
        "it": _frozen(
            {
                "femmina": "femminile",
                "femminile": "femminile",
                "maschio": "maschile",
                "maschile": "maschile",
            }
        ),
        "es": _frozen(
            {
                "femenino": "femminile",
                "femenina": "femminile",
                "masculino": "maschile",
                "masculina": "maschile",
            }
        ),
        "en": _frozen(
            {
                "female": "femminile",
                "feminine": "femminile",
                "male": "maschile",
                "masculine": "maschile",
            }
        ),
    }
)

NUMBER_MARKERS: Mapping[str, Mapping[str, Number]] = _frozen(
    {
        "it": _frozen({"singolare": "singolare", "plurale": "plurale"}),
        "es": _frozen({"singular": "singolare", "plural": "plurale"}),
        "en": _frozen({"singular": "singolare", "plural": "plurale"}),
    }
)


LOCAL_SYNONYMS: Mapping[str, Mapping[str, tuple[str, ...]]] = _frozen(
    {
        "it": _frozen(
            {
                "tante": ("molte", "numerose"),
                "tanti": ("molti", "numerosi"),
                "tanta": ("molta", "numerosa"),
                "tanto": ("molto", "numeroso"),
                "poche": ("poche", "poco"),
                "poca": ("poca", "pochi"),
                "poco": ("pochi", "poca"),
                "pochi": ("poco", "poche"),
                "ragazze": ("bambine", "giovani"),
                "ragazzi": ("bambini", "giovani"),
            }
        ),
        "es": _frozen({}),
        "en": _frozen({}),
    }
)


def is_supported_language(lang: str | None) -> bool:
    return lang in SUPPORTED_LANGUAGES


def is_stop_word(word: str, lang: str) -> bool:
    return word in STOP_WORDS.get(lang, frozenset())
