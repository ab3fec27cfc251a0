# toolkit/core/alphabet.py
from __future__ import annotations

from enum import IntFlag

LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = "_+"


class Alphabet(IntFlag):
    LETTERS = 1
    DIGITS = 2
    SYMBOLS = 4

    ALPHANUMERIC = LETTERS | DIGITS
    ALL = LETTERS | DIGITS | SYMBOLS

    def characters(self) -> str:
        chars = ""
        if self & Alphabet.LETTERS:
            chars += LETTERS
        if self & Alphabet.DIGITS:
            chars += DIGITS
        if self & Alphabet.SYMBOLS:
            chars += SYMBOLS
        return chars
