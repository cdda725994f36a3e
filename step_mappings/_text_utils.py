"""Small string helpers used when rendering generated source."""

from __future__ import annotations


def surround(text: str, *, with_: str) -> str:
    """Return *text* wrapped in *with_* on both sides, without escaping."""
    return f"{with_}{text}{with_}"


def upper_case_first_letter(text: str) -> str:
    """Return *text* with only its first character upper-cased."""
    return text[:1].upper() + text[1:]
