"""
Wheel face layout and outcome targeting.

Every wheel with the same win probability shows the same 40-segment pattern;
the three wheels on screen differ only by their rotation offset. The pattern
is derived from the probability through a small seeded LCG so that it never
touches the process-wide random source.
"""

from __future__ import annotations

import math
import random
from functools import lru_cache
from typing import Callable, List, Sequence, Tuple

SEGMENT_COUNT = 40
SEGMENT_ANGLE = 360 / SEGMENT_COUNT
WHEEL_ROTATIONS: Tuple[int, ...] = (0, 120, 240)
SPIN_EXTRA_DEGREES = 720

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def lcg(seed: int) -> Callable[[], float]:
    """Return a draw function yielding values in [0, 1) from ``seed``."""
    state = seed

    def draw() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return state / LCG_MODULUS

    return draw


def deterministic_shuffle(items: Sequence, seed: int) -> List:
    """Fisher-Yates shuffle driven by ``lcg(seed)``; same seed, same order."""
    draw = lcg(seed)
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(draw() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def win_segment_count(probability: float) -> int:
    # Half rounds up.
    return int(math.floor(probability * SEGMENT_COUNT + 0.5))


@lru_cache(maxsize=None)
def segment_pattern(probability: float) -> Tuple[bool, ...]:
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be within [0, 1], got {probability}")
    wins = win_segment_count(probability)
    base = [True] * wins + [False] * (SEGMENT_COUNT - wins)
    return tuple(deterministic_shuffle(base, int(math.floor(probability * 1000))))


def landing_angle(
    probability: float,
    outcome_win: bool,
    rotation_offset: float = 0,
    animate: bool = False,
    rng=None,
) -> float:
    """
    Final wheel angle (degrees) at which a segment showing ``outcome_win`` sits
    under the pointer. Animated spins add two full turns and end on the same
    face as the static case.
    """
    rng = rng if rng is not None else random.Random()
    pattern = segment_pattern(probability)
    candidates = [i for i, win in enumerate(pattern) if win == outcome_win]
    if not candidates:
        raise ValueError(f"wheel with probability {probability} has no {'win' if outcome_win else 'loss'} segment")
    index = candidates[int(rng.random() * len(candidates))]
    # Keep the offset strictly inside the segment.
    within = min(rng.random() * SEGMENT_ANGLE, SEGMENT_ANGLE - 1e-9)
    angle = index * SEGMENT_ANGLE + within + rotation_offset
    if animate:
        angle += SPIN_EXTRA_DEGREES
    return angle


def segment_at_angle(probability: float, angle: float, rotation_offset: float = 0) -> bool:
    """Outcome shown by a wheel resting at ``angle``."""
    index = int(((angle - rotation_offset) % 360) // SEGMENT_ANGLE) % SEGMENT_COUNT
    return segment_pattern(probability)[index]
