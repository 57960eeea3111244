from __future__ import annotations

import pytest

from pictolex.nlp.tense import detect_tense


@pytest.mark.parametrize(
    ("term", "expected"),
    [
        ("mangiavano", "past"),
        ("dormivo", "past"),
        ("mangiato", "past"),
        ("partite", "past"),
        ("parlarono", "past"),
        ("credettero", "past"),
        ("mangerò", "future"),
        ("dormiranno", "future"),
        ("farò", "future"),
        ("sarete", "future"),
        ("Andranno", "future"),
        ("gatto", None),
        ("casa", None),
        ("mangia", None),
    ],
)
def test_italian_tense(term: str, expected: str | None) -> None:
    assert detect_tense(term, "it") == expected


@pytest.mark.parametrize(
    ("term", "expected"),
    [
        ("hablarán", "future"),
        ("comerás", "future"),
        ("hablaron", "past"),
        ("comió", "past"),
        ("vivimos", "past"),
        ("casa", None),
    ],
)
def test_spanish_tense(term: str, expected: str | None) -> None:
    assert detect_tense(term, "es") == expected


def test_spanish_shared_endings_resolve_to_future() -> None:
    # -é closes both the preterite (hablé) and the future (hablaré).
    assert detect_tense("hablé", "es") == "future"
    assert detect_tense("hablaré", "es") == "future"


@pytest.mark.parametrize(
    ("term", "expected"),
    [
        ("will run", "future"),
        ("Will", "future"),
        ("jumped", "past"),
        ("run", None),
        ("willow", None),
    ],
)
def test_english_tense(term: str, expected: str | None) -> None:
    assert detect_tense(term, "en") == expected


def test_unknown_language_or_empty_term_has_no_tense() -> None:
    assert detect_tense("mangiavano", "fr") is None
    assert detect_tense("", "it") is None
    assert detect_tense(None, "en") is None
