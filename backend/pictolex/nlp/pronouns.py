from __future__ import annotations

from dataclasses import dataclass

from pictolex.nlp.tables import (
    OBJECT_PRONOUNS_IT,
    PRONOUN_SEARCH_TERMS,
    PRONOUNS,
    SUBJECT_PRONOUN_FEATURES,
    Gender,
    Number,
)


@dataclass(frozen=True)
class PronounReading:
    surface: str
    search_term: str
    gender: Gender | None = None
    number: Number | None = None
    person: int | None = None


class PronounResolver:
    """Classifies pronouns and maps object forms to their subject equivalent.

    Only tokens that belong to the language's closed pronoun set are handled;
    ``resolve`` returns ``None`` for everything else.
    """

    def __init__(
        self,
        pronouns=PRONOUNS,
        search_terms=PRONOUN_SEARCH_TERMS,
        object_pronouns=OBJECT_PRONOUNS_IT,
        subject_features=SUBJECT_PRONOUN_FEATURES,
    ):
        self._pronouns = pronouns
        self._search_terms = search_terms
        self._object_pronouns = object_pronouns
        self._subject_features = subject_features

    def is_pronoun(self, word: str, lang: str) -> bool:
        return word.lower() in self._pronouns.get(lang, frozenset())

    def search_term(self, word: str, lang: str) -> str:
        normalized = word.lower()
        return self._search_terms.get(lang, {}).get(normalized, normalized)

    def resolve(self, word: str, lang: str) -> PronounReading | None:
        normalized = word.lower()
        if not self.is_pronoun(normalized, lang):
            return None

        search_term = self.search_term(normalized, lang)
        features = self._subject_features.get(lang, {}).get(search_term)
        person = features[0] if features else None
        gender = features[1] if features else None
        number = features[2] if features else None

        if lang == "it" and normalized in self._object_pronouns:
            mapped = self._object_pronouns[normalized]
            gender = mapped["gender"]
            number = mapped["number"]

        return PronounReading(
            surface=normalized,
            search_term=search_term,
            gender=gender,
            number=number,
            person=person,
        )


DEFAULT_PRONOUN_RESOLVER = PronounResolver()
