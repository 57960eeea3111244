from __future__ import annotations

from fastapi.testclient import TestClient

from pictolex.main import create_app


def _client(make_settings, keyword_file, **overrides) -> TestClient:
    settings = make_settings(keyword_index_path=keyword_file, **overrides)
    return TestClient(create_app(settings=settings))


def test_analyze_endpoint_returns_query_terms_in_order(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        response = client.post("/api/analyze", json={"text": "Il gatto corro", "lang": "it"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["index_ready"] is True
    tokens = payload["tokens"]
    assert [token["token"] for token in tokens] == ["Il", "gatto", "corro"]
    assert [token["query_term"] for token in tokens] == [None, "gatto", "correre"]
    assert tokens[0]["analysis"]["lemma"] is None
    assert tokens[0]["reason_tags"] == ["stop_word"]
    assert tokens[1]["symbol_ids"] == [7114]
    assert tokens[2]["match_source"] == "variant"
    assert tokens[2]["symbol_ids"] == [6465, 6466]


def test_analyze_endpoint_uses_configured_stop_word_default(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file, skip_stop_words=False) as client:
        default = client.post("/api/analyze", json={"text": "il gatto"})
        explicit = client.post("/api/analyze", json={"text": "il gatto", "skip_stop_words": True})

    assert default.json()["tokens"][0]["query_term"] == "il"
    assert explicit.json()["tokens"][0]["query_term"] is None


def test_analyze_endpoint_reports_grammar(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        response = client.post("/api/analyze", json={"text": "gatto femmina lui", "lang": "it"})

    tokens = response.json()["tokens"]
    assert tokens[0]["analysis"]["gender"] == "femminile"
    assert tokens[1]["reason_tags"] == ["grammar_marker"]
    assert tokens[2]["match_source"] == "pronoun"
    assert tokens[2]["analysis"]["pronoun_class"] == "lui"


def test_analyze_endpoint_handles_empty_text(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        response = client.post("/api/analyze", json={"text": "   "})

    assert response.status_code == 200
    assert response.json()["tokens"] == []


def test_analyze_endpoint_rejects_unsupported_language(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        response = client.post("/api/analyze", json={"text": "bonjour", "lang": "fr"})

    assert response.status_code == 422


def test_variants_endpoint_returns_sorted_variants(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        response = client.post("/api/variants", json={"term": "corro", "lang": "it"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["term"] == "corro"
    assert payload["variants"] == sorted(payload["variants"])
    assert {"corro", "correre"} <= set(payload["variants"])


def test_tense_endpoint(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        past = client.post("/api/tense", json={"term": "mangiavano", "lang": "it"})
        none = client.post("/api/tense", json={"term": "gatto", "lang": "it"})

    assert past.json()["tense"] == "past"
    assert none.json()["tense"] is None


def test_depluralize_endpoint(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        response = client.post("/api/depluralize", json={"term": "case"})

    assert response.json() == {"term": "case", "forms": ["casa", "case", "caso"]}


def test_keyword_lookup_endpoint(make_settings, keyword_file) -> None:
    with _client(make_settings, keyword_file) as client:
        known = client.get("/api/keywords/Casa")
        unknown = client.get("/api/keywords/cane")

    assert known.json() == {
        "keyword": "casa",
        "known": True,
        "symbol_ids": [2317],
        "index_ready": True,
    }
    assert unknown.json()["known"] is False
    assert unknown.json()["symbol_ids"] == []
