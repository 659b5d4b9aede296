"""Small text helpers used across the engine."""

from __future__ import annotations

_ASCII_LOWER = "abcdefghijklmnopqrstuvwxyz"
_ASCII_UPPER = _ASCII_LOWER.upper()
_TO_UPPER = str.maketrans(_ASCII_LOWER, _ASCII_UPPER)
_TO_LOWER = str.maketrans(_ASCII_UPPER, _ASCII_LOWER)


def text_cmp(text1: str | None, text2: str | None) -> bool:
    """Return True when both texts are present and equal."""
    if text1 is None or text2 is None:
        return False
    return text1 == text2


def to_upper_case(text: str) -> str:
    """Upper-case the ASCII letters of ``text``, leaving other characters alone."""
    return text.translate(_TO_UPPER)


def to_lower_case(text: str) -> str:
    """Lower-case the ASCII letters of ``text``, leaving other characters alone."""
    return text.translate(_TO_LOWER)