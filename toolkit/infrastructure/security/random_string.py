# toolkit/infrastructure/security/random_string.py
from __future__ import annotations

import secrets

from toolkit.core.alphabet import Alphabet


class RandomStringGenerator:
    DEFAULT_ALPHABET = Alphabet.ALL

    @classmethod
    def generate(cls, n: int, *, alphabet: Alphabet | None = None) -> str:
        if n < 0:
            raise ValueError("Tamanho inválido (n >= 0).")

        source = (alphabet if alphabet is not None else cls.DEFAULT_ALPHABET).characters()
        if not source:
            raise ValueError("Alfabeto vazio.")

        # cada posição é sorteada de forma independente e uniforme
        size = len(source)
        return "".join(source[secrets.randbelow(size)] for _ in range(n))


def random_string(n: int, alphabet: Alphabet = Alphabet.ALL) -> str:
    return RandomStringGenerator.generate(n, alphabet=alphabet)
