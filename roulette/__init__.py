from roulette.matrix import (
    FALLBACK_ROWS,
    MAX_ATTEMPTS,
    PROBABILITY_TIERS,
    OutcomeMatrix,
    build_outcome_matrix,
    is_valid_matrix,
    try_generate,
)
from roulette.models import BlockType, MiniBlockPair, Trial, TrialSequence
from roulette.sequence import build_trial_sequence
from roulette.wheel import WHEEL_ROTATIONS, deterministic_shuffle, landing_angle, segment_pattern

__all__ = [
    "FALLBACK_ROWS",
    "MAX_ATTEMPTS",
    "PROBABILITY_TIERS",
    "WHEEL_ROTATIONS",
    "BlockType",
    "MiniBlockPair",
    "OutcomeMatrix",
    "Trial",
    "TrialSequence",
    "build_outcome_matrix",
    "build_trial_sequence",
    "deterministic_shuffle",
    "is_valid_matrix",
    "landing_angle",
    "segment_pattern",
    "try_generate",
]
