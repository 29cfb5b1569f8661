"""
Random number generation for position placement.

Placement randomness only decides which position a participant lands on,
never who is admitted, so stdlib random.Random is sufficient. The generator
is always created here and passed into an experiment explicitly; the
module-level random functions are never used.
"""

import random
import secrets

SEED_BYTES = 32


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed is a non-empty hex string.

    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    if not seed_hex:
        raise ValueError("Seed must not be empty")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


def generate_seed() -> str:
    """Generate a random seed as a hex string (64 chars / 256 bits)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def create_placement_rng(seed_hex: str | None = None) -> random.Random:
    """
    Create the RNG used to draw free positions.

    With no seed, placements are unpredictable. With a seed, the same
    sequence of play_round() calls yields the same placements.
    """
    if seed_hex is None:
        return random.Random()  # noqa: S311
    validate_seed_hex(seed_hex)
    return random.Random(int(seed_hex, 16))  # noqa: S311
