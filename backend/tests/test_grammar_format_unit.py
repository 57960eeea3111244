from __future__ import annotations

from pictolex.nlp.grammar import (
    FUNCTION_WORD,
    GrammaticalAnalysis,
    merge_analysis,
    parse_analysis_line,
    parse_analysis_lines,
)


def test_parse_full_analysis_line() -> None:
    analysis = parse_analysis_line(
        "lemma:correre|genere:null|numero:singolare|tempo:presente"
        "|pronome_soggetto:io|sinonimi:andare;scappare"
    )

    assert analysis == GrammaticalAnalysis(
        lemma="correre",
        gender=None,
        number="singolare",
        tense="present",
        pronoun_class="io",
        synonyms=("andare", "scappare"),
    )


def test_null_lemma_marks_a_function_word() -> None:
    analysis = parse_analysis_line("lemma:null|genere:null|numero:null|tempo:null")

    assert analysis.is_function_word
    assert analysis == FUNCTION_WORD


def test_malformed_fields_are_ignored() -> None:
    analysis = parse_analysis_line("`Lemma`:`Gatto`|garbage|tempo:a:b|genere:neutro|tempo:passato")

    assert analysis.lemma == "gatto"
    assert analysis.gender is None
    assert analysis.tense == "past"


def test_object_pronoun_field_is_accepted() -> None:
    analysis = parse_analysis_line("lemma:lei|pronome_oggetto:lei|genere:femminile")

    assert analysis.pronoun_class == "lei"
    assert analysis.gender == "femminile"


def test_parse_analysis_lines_skips_blank_lines() -> None:
    parsed = parse_analysis_lines("lemma:gatto\n\n  \nlemma:casa|numero:plurale\n")

    assert [item.lemma for item in parsed] == ["gatto", "casa"]
    assert parsed[1].number == "plurale"
    assert parse_analysis_lines("") == []
    assert parse_analysis_lines(None) == []


def test_merge_analysis_prefers_external_fields_when_present() -> None:
    heuristic = GrammaticalAnalysis(lemma="correre", tense="past", number="singolare")
    external = GrammaticalAnalysis(lemma="corsa", gender="femminile", synonyms=("gara",))

    merged = merge_analysis(heuristic, external)

    assert merged == GrammaticalAnalysis(
        lemma="corsa",
        gender="femminile",
        number="singolare",
        tense="past",
        synonyms=("gara",),
    )
    assert merge_analysis(heuristic, None) is heuristic
