from __future__ import annotations

import random
from typing import List, Optional

from roulette.matrix import NUM_MINI_BLOCKS, PROBABILITY_TIERS, OutcomeMatrix, build_outcome_matrix, shuffled
from roulette.models import BlockType, MiniBlockPair, Trial, TrialSequence


def _block(matrix: OutcomeMatrix, mb: int, block_type: BlockType) -> List[Trial]:
    return [
        Trial(
            mini_block=mb + 1,
            block_type=block_type,
            probability=probability,
            outcome_win=matrix.outcome(tier, mb),
            agency=block_type is BlockType.agency,
        )
        for tier, probability in enumerate(PROBABILITY_TIERS)
    ]


def build_trial_sequence(
    num_mini_blocks: int = NUM_MINI_BLOCKS,
    rng=None,
    matrix: Optional[OutcomeMatrix] = None,
) -> TrialSequence:
    """
    Build paired agency / no-agency blocks for each mini-block.

    Both blocks of a pair read their outcomes from the same matrix column, keyed
    by tier, then get two independent presentation-order shuffles.
    """
    if not 1 <= num_mini_blocks <= NUM_MINI_BLOCKS:
        raise ValueError(f"num_mini_blocks must be between 1 and {NUM_MINI_BLOCKS}, got {num_mini_blocks}")
    rng = rng if rng is not None else random.Random()
    if matrix is None:
        matrix = build_outcome_matrix(rng)

    pairs: List[MiniBlockPair] = []
    for mb in range(num_mini_blocks):
        pairs.append(
            MiniBlockPair(
                mini_block_number=mb + 1,
                agency_block=shuffled(_block(matrix, mb, BlockType.agency), rng),
                no_agency_block=shuffled(_block(matrix, mb, BlockType.no_agency), rng),
            )
        )
    return TrialSequence(trials_by_mini_block=tuple(pairs), matrix=matrix)
