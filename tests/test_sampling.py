import itertools
import math

import pytest

from spider_rectgen import RandomEngine


def fixed(*values):
    return RandomEngine(source=itertools.cycle(values).__next__)


def test_rnd_uses_injected_source_and_counts_draws():
    engine = fixed(0.1, 0.2)
    assert [engine.rnd() for _ in range(3)] == [0.1, 0.2, 0.1]
    assert engine.draws == 3


def test_default_source_is_in_unit_interval():
    engine = RandomEngine(seed=0)
    values = [engine.rnd() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_bernoulli_is_inclusive_at_p():
    assert fixed(0.3).bernoulli(0.3) == 1
    assert fixed(0.3).bernoulli(0.29) == 0
    assert fixed(0.0).bernoulli(0.0) == 1


def test_bernoulli_frequency():
    engine = RandomEngine(seed=5)
    hits = sum(engine.bernoulli(0.25) for _ in range(20_000))
    assert abs(hits / 20_000 - 0.25) < 0.02


def test_uniform():
    assert fixed(0.25).uniform(2.0, 6.0) == 3.0
    assert fixed(0.0).uniform(-1.0, 1.0) == -1.0


def test_normal_uses_sine_branch_of_two_draws():
    engine = fixed(math.exp(-0.5), 0.25)
    # sqrt(-2 ln u1) = 1 and sin(2 pi u2) = 1
    assert engine.normal(3.0, 2.0) == pytest.approx(5.0)
    assert engine.draws == 2

    engine = fixed(math.exp(-0.5), 0.75)
    assert engine.normal(0.0, 1.0) == pytest.approx(-1.0)


def test_normal_moments():
    engine = RandomEngine(seed=11)
    values = [engine.normal(0.5, 0.1) for _ in range(20_000)]
    mean = sum(values) / len(values)
    var = sum((v - mean) ** 2 for v in values) / len(values)
    assert mean == pytest.approx(0.5, abs=0.005)
    assert math.sqrt(var) == pytest.approx(0.1, rel=0.05)


def test_normal_at_zero_draw_is_not_an_error():
    value = fixed(0.0, 0.25).normal(0.0, 1.0)
    assert not math.isfinite(value)


def test_dice():
    assert fixed(0.0).dice(5) == 1
    assert fixed(0.39).dice(5) == 2
    assert fixed(0.999).dice(5) == 5
