import random
from collections import Counter

import numpy as np
import pytest

from roulette.matrix import PROBABILITY_TIERS, fallback_matrix
from roulette.models import BlockType
from roulette.sequence import build_trial_sequence


def test_sequence_has_five_pairs_of_four_trials_one_per_tier():
    seq = build_trial_sequence(5, rng=random.Random(3))
    assert len(seq.trials_by_mini_block) == 5
    for n, pair in enumerate(seq.trials_by_mini_block, start=1):
        assert pair.mini_block_number == n
        for block in (pair.agency_block, pair.no_agency_block):
            assert len(block) == 4
            assert sorted(t.probability for t in block) == list(PROBABILITY_TIERS)
            assert all(t.mini_block == n for t in block)
        assert all(t.agency and t.block_type is BlockType.agency for t in pair.agency_block)
        assert all(not t.agency and t.block_type is BlockType.no_agency for t in pair.no_agency_block)


def test_outcomes_match_by_tier_across_paired_blocks():
    seq = build_trial_sequence(rng=random.Random(11))
    for mb, pair in enumerate(seq.trials_by_mini_block):
        agency = {t.probability: t.outcome_win for t in pair.agency_block}
        no_agency = {t.probability: t.outcome_win for t in pair.no_agency_block}
        assert agency == no_agency
        for tier, p in enumerate(PROBABILITY_TIERS):
            assert agency[p] == seq.matrix.outcome(tier, mb)


def test_win_rate_per_tier_equals_matrix_rate_in_both_conditions():
    seq = build_trial_sequence(rng=random.Random(5))
    wins = Counter()
    for pair in seq.trials_by_mini_block:
        for t in pair.agency_block + pair.no_agency_block:
            if t.outcome_win:
                wins[(t.probability, t.agency)] += 1
    for tier, p in enumerate(PROBABILITY_TIERS):
        assert wins[(p, True)] == tier + 1
        assert wins[(p, False)] == tier + 1


def test_explicit_matrix_is_used_as_given():
    matrix = fallback_matrix()
    seq = build_trial_sequence(3, rng=random.Random(0), matrix=matrix)
    assert seq.matrix is matrix
    assert len(seq.trials_by_mini_block) == 3


@pytest.mark.parametrize("n", [0, 6])
def test_mini_block_count_out_of_range_is_rejected(n):
    with pytest.raises(ValueError):
        build_trial_sequence(n)


def test_agency_and_no_agency_orders_are_independent():
    rng = random.Random(2024)
    agency_pos, no_agency_pos = [], []
    for _ in range(400):
        seq = build_trial_sequence(rng=rng)
        for pair in seq.trials_by_mini_block:
            agency_pos.append([t.probability for t in pair.agency_block].index(0.2))
            no_agency_pos.append([t.probability for t in pair.no_agency_block].index(0.2))
    agency_arr = np.array(agency_pos)
    no_agency_arr = np.array(no_agency_pos)
    same = float(np.mean(agency_arr == no_agency_arr))
    assert 0.2 < same < 0.3
    assert abs(np.corrcoef(agency_arr, no_agency_arr)[0, 1]) < 0.1


def test_generated_blocks_cannot_be_mutated_in_place():
    seq = build_trial_sequence(rng=random.Random(12))
    assert isinstance(seq.trials_by_mini_block, tuple)
    pair = seq.trials_by_mini_block[0]
    assert isinstance(pair.agency_block, tuple)
    assert isinstance(pair.no_agency_block, tuple)
    with pytest.raises(TypeError):
        pair.agency_block[0] = pair.no_agency_block[0]
