"""Locale tag helpers shared by message resolution and number formatting."""

from __future__ import annotations


def normalize_locale(tag: str | None) -> str | None:
    """Normalize `ko_KR`, `ko-kr` and friends to `ko-KR` style tags."""
    if tag is None:
        return None
    cleaned = tag.strip().replace("_", "-")
    if not cleaned:
        return None
    parts = cleaned.split("-")
    language = parts[0].lower()
    rest = [part.upper() if len(part) == 2 else part for part in parts[1:] if part]
    return "-".join([language, *rest])


def locale_candidates(tag: str | None, default: str) -> list[str]:
    """Return lookup order: full tag, its language, then the default locale."""
    candidates: list[str] = []
    for value in (normalize_locale(tag), normalize_locale(default)):
        if value is None:
            continue
        for candidate in (value, value.split("-")[0]):
            if candidate not in candidates:
                candidates.append(candidate)
    return candidates


def parse_accept_language(header: str | None) -> str | None:
    """Return the highest-priority tag of an Accept-Language header."""
    if not header:
        return None

    best_tag: str | None = None
    best_quality = -1.0
    for raw_entry in header.split(","):
        entry = raw_entry.strip()
        if not entry:
            continue
        tag, _, params = entry.partition(";")
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        tag = tag.strip()
        if tag == "*" or not tag:
            continue
        if quality > best_quality:
            best_tag, best_quality = tag, quality
    return normalize_locale(best_tag)
