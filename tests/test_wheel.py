import random

import pytest

from roulette.wheel import (
    SEGMENT_COUNT,
    SPIN_EXTRA_DEGREES,
    WHEEL_ROTATIONS,
    deterministic_shuffle,
    landing_angle,
    lcg,
    segment_at_angle,
    segment_pattern,
)


@pytest.mark.parametrize("p,wins", [(0.2, 8), (0.4, 16), (0.6, 24), (0.8, 32)])
def test_pattern_length_and_win_count(p, wins):
    pattern = segment_pattern(p)
    assert len(pattern) == SEGMENT_COUNT
    assert sum(pattern) == wins


def test_pattern_is_deterministic_without_cache():
    first = segment_pattern.__wrapped__(0.2)
    second = segment_pattern.__wrapped__(0.2)
    assert first == second
    assert sum(first) == 8


def test_pattern_ignores_global_random_state():
    random.seed(1)
    a = segment_pattern.__wrapped__(0.6)
    random.seed(2)
    b = segment_pattern.__wrapped__(0.6)
    assert a == b


def test_lcg_first_draw():
    draw = lcg(200)
    assert draw() == 43257 / 233280


def test_deterministic_shuffle_is_a_permutation():
    items = list(range(40))
    out = deterministic_shuffle(items, 400)
    assert sorted(out) == items
    assert out == deterministic_shuffle(items, 400)
    assert items == list(range(40))


@pytest.mark.parametrize("p", [0.2, 0.4, 0.6, 0.8])
@pytest.mark.parametrize("outcome", [True, False])
def test_landing_angle_hits_requested_outcome_on_every_wheel(p, outcome):
    rng = random.Random(17)
    for offset in WHEEL_ROTATIONS:
        for _ in range(20):
            angle = landing_angle(p, outcome, offset, rng=rng)
            assert segment_at_angle(p, angle, offset) is outcome


def test_animated_spin_ends_on_same_face_two_turns_later():
    static = landing_angle(0.4, True, 120, animate=False, rng=random.Random(8))
    animated = landing_angle(0.4, True, 120, animate=True, rng=random.Random(8))
    assert animated == static + SPIN_EXTRA_DEGREES
    assert segment_at_angle(0.4, animated, 120) is True


def test_landing_angle_without_matching_segment_raises():
    with pytest.raises(ValueError):
        landing_angle(1.0, False)


class TopRandom:
    """Draws the largest float below 1.0."""

    def random(self) -> float:
        return 1 - 2**-53


@pytest.mark.parametrize("p", [0.2, 0.4, 0.6, 0.8])
@pytest.mark.parametrize("offset", WHEEL_ROTATIONS)
def test_landing_angle_stays_on_segment_at_upper_edge(p, offset):
    for outcome in (True, False):
        angle = landing_angle(p, outcome, offset, rng=TopRandom())
        assert segment_at_angle(p, angle, offset) is outcome
