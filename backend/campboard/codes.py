# backend/campboard/codes.py
from __future__ import annotations

import random
from typing import Set

CONSONANTS = "BCDFGHJKLMNPQRSTVWXYZ"
VOWELS = "AEIOU"
DIGITS = "0123456789"
MAX_ATTEMPTS = 100


def generate_camper_code(name: str, bunk_id: str, rng: random.Random | None = None) -> str:
    """Memorable code: up to two initials, bunk letter, 3 digits (e.g. IAA482)."""
    rng = rng or random
    initials = "".join(w[0].upper() for w in name.split() if w)[:2]
    bunk_letter = bunk_id[:1].upper()
    return f"{initials}{bunk_letter}{rng.randint(100, 999)}"


def generate_unique_code(existing: Set[str], rng: random.Random | None = None) -> str:
    """Consonant-vowel-consonant + 3 digits, retried while it collides."""
    rng = rng or random
    code = ""
    for _ in range(MAX_ATTEMPTS):
        code = (
            rng.choice(CONSONANTS)
            + rng.choice(VOWELS)
            + rng.choice(CONSONANTS)
            + "".join(rng.choice(DIGITS) for _ in range(3))
        )
        if code not in existing:
            return code
    return code


def assign_code(name: str, bunk_id: str, existing: Set[str]) -> str:
    code = generate_camper_code(name, bunk_id)
    if code in existing:
        code = generate_unique_code(existing)
    return code
