"""
Mini-block outcome matrix for the roulette agency task.

Rows are win-probability tiers (0.2, 0.4, 0.6, 0.8), columns are mini-blocks.
Row r carries exactly r + 1 wins and no mini-block may be all wins or all losses.

    Example:
          MB1  MB2  MB3  MB4  MB5
    0.2 [  0    0    1    0    0  ]  <- 1 win
    0.4 [  1    0    0    1    0  ]  <- 2 wins
    0.6 [  1    1    0    0    1  ]  <- 3 wins
    0.8 [  1    1    1    1    0  ]  <- 4 wins
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

PROBABILITY_TIERS: Tuple[float, ...] = (0.2, 0.4, 0.6, 0.8)
NUM_TIERS = len(PROBABILITY_TIERS)
NUM_MINI_BLOCKS = 5
WINS_PER_ROW: Tuple[int, ...] = (1, 2, 3, 4)
MAX_ATTEMPTS = 1000

# Rows are tiers, columns are mini-blocks (not tiers).
FALLBACK_ROWS: Tuple[Tuple[int, ...], ...] = (
    (0, 0, 1, 0, 0),
    (1, 0, 0, 1, 0),
    (1, 1, 0, 0, 1),
    (1, 1, 1, 1, 0),
)


class OutcomeMatrix(BaseModel):
    """Predetermined win (1) / loss (0) per (tier, mini-block)."""

    model_config = ConfigDict(frozen=True)

    rows: Tuple[Tuple[int, ...], ...]
    attempts: int = Field(1, ge=0)
    is_fallback: bool = False

    @field_validator("rows")
    @classmethod
    def _check_rows(cls, rows: Tuple[Tuple[int, ...], ...]) -> Tuple[Tuple[int, ...], ...]:
        if len(rows) != NUM_TIERS or any(len(row) != NUM_MINI_BLOCKS for row in rows):
            raise ValueError(f"outcome matrix must be {NUM_TIERS}x{NUM_MINI_BLOCKS}")
        if any(v not in (0, 1) for row in rows for v in row):
            raise ValueError("outcome matrix entries must be 0 or 1")
        if not is_valid_matrix(rows):
            raise ValueError(f"outcome matrix violates win-count or mini-block bounds: {rows}")
        return rows

    def outcome(self, tier_index: int, mini_block_index: int) -> bool:
        return self.rows[tier_index][mini_block_index] == 1

    def row_sums(self) -> List[int]:
        return [sum(row) for row in self.rows]

    def column_sums(self) -> List[int]:
        return [sum(row[col] for row in self.rows) for col in range(NUM_MINI_BLOCKS)]

    def to_list(self) -> List[List[int]]:
        return [list(row) for row in self.rows]


def _fisher_yates(items: List, rng) -> List:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def shuffled(items: Sequence, rng=None) -> List:
    """Return a Fisher-Yates shuffled copy of ``items`` using ``rng.random()``."""
    return _fisher_yates(list(items), rng if rng is not None else random.Random())


def random_permutation(n: int, rng) -> List[int]:
    return _fisher_yates(list(range(n)), rng)


def apply_column_permutation(rows: Sequence[Sequence[int]], permutation: Sequence[int]) -> List[List[int]]:
    return [[row[permutation[i]] for i in range(len(permutation))] for row in rows]


def is_valid_matrix(rows: Sequence[Sequence[int]]) -> bool:
    if len(rows) != NUM_TIERS or any(len(row) != NUM_MINI_BLOCKS for row in rows):
        return False
    for row, expected in zip(rows, WINS_PER_ROW):
        if sum(row) != expected:
            return False
    for col in range(NUM_MINI_BLOCKS):
        column_sum = sum(row[col] for row in rows)
        if column_sum == 0 or column_sum == NUM_TIERS:
            return False
    return True


def _candidate(rng) -> List[List[int]]:
    rows = []
    for wins in WINS_PER_ROW:
        template = [1] * wins + [0] * (NUM_MINI_BLOCKS - wins)
        rows.append(_fisher_yates(template, rng))
    # One permutation for every row keeps each row's win count intact.
    return apply_column_permutation(rows, random_permutation(NUM_MINI_BLOCKS, rng))


def try_generate(max_attempts: int = MAX_ATTEMPTS, rng=None) -> Optional[OutcomeMatrix]:
    """Sample candidates until one validates; ``None`` when attempts run out."""
    rng = rng if rng is not None else random.Random()
    for attempt in range(1, max_attempts + 1):
        rows = _candidate(rng)
        if is_valid_matrix(rows):
            logger.debug("Outcome matrix generated after %d attempt(s): %s", attempt, rows)
            return OutcomeMatrix(rows=tuple(tuple(r) for r in rows), attempts=attempt)
    return None


def fallback_matrix(attempts: int = MAX_ATTEMPTS) -> OutcomeMatrix:
    return OutcomeMatrix(rows=FALLBACK_ROWS, attempts=attempts, is_fallback=True)


def build_outcome_matrix(rng=None, max_attempts: int = MAX_ATTEMPTS) -> OutcomeMatrix:
    matrix = try_generate(max_attempts, rng)
    if matrix is not None:
        return matrix
    logger.warning(
        "Outcome matrix generation failed after %d attempts, using non-random fallback matrix %s",
        max_attempts,
        [list(r) for r in FALLBACK_ROWS],
    )
    return fallback_matrix(max_attempts)
