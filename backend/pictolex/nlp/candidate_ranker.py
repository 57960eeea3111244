from __future__ import annotations

from collections.abc import Callable, Iterable


def normalize_candidate(text: str) -> str:
    return " ".join(text.strip().split()).lower()


def merge_candidates(*groups: Iterable[str]) -> list[str]:
    merged: list[str] = []
    seen: set[str] = set()

    for group in groups:
        for raw in group:
            candidate = normalize_candidate(raw)
            if not candidate or candidate in seen:
                continue
            seen.add(candidate)
            merged.append(candidate)

    return merged


def rank_candidates(surface: str, candidates: Iterable[str]) -> list[str]:
    """Deterministic lookup order: the surface form first, then the closest
    reductions by length, ties broken alphabetically."""
    normalized_surface = normalize_candidate(surface)
    unique = merge_candidates(candidates)

    def sort_key(candidate: str) -> tuple[int, int, str]:
        return (
            0 if candidate == normalized_surface else 1,
            abs(len(normalized_surface) - len(candidate)),
            candidate,
        )

    return sorted(unique, key=sort_key)


def pick_first_known(
    candidates: Iterable[str],
    is_known: Callable[[str], bool],
) -> str | None:
    for candidate in candidates:
        if is_known(candidate):
            return candidate
    return None
