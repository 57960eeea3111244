from __future__ import annotations

import re
from dataclasses import dataclass


_NO_BREAK_SPACES = re.compile("[\u00a0\u2007\u202f]")
_CURLY_APOSTROPHES = re.compile("[\u2018\u2019]")


@dataclass(frozen=True)
class SurfaceToken:
    raw: str
    position: int


def normalize_apostrophes(token: str) -> str:
    return _CURLY_APOSTROPHES.sub("'", token)


def tokenize(text: str | None) -> list[SurfaceToken]:
    if not text:
        return []
    spaced = _NO_BREAK_SPACES.sub(" ", text)
    words = [normalize_apostrophes(segment) for segment in spaced.split()]
    return [SurfaceToken(raw=word, position=index) for index, word in enumerate(words) if word]


def tokenize_words(text: str | None) -> list[str]:
    return [token.raw for token in tokenize(text)]
