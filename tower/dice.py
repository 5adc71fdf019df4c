"""Random numbers for dice rolls, drawn from a secure source."""

from __future__ import annotations

import secrets


def random_int(num: int) -> int:
    """Return an integer from 0 to num - 1."""
    if num <= 0:
        raise ValueError(f"num must be positive, got {num}")
    return secrets.randbelow(num)


def dice_roll(num: int) -> int:
    """Return an integer from 1 to num."""
    return random_int(num) + 1


def random_between(low: int, high: int) -> int:
    """Return an integer between low and high inclusive."""
    return dice_roll(high - low + 1) + low - 1