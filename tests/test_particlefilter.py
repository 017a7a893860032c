import math
from dataclasses import dataclass

import pytest

from gridslam.particlefilter import (
    AuxiliaryEvolver,
    Evolver,
    UniformResampler,
    neff,
    normalize,
    repeat_indexes,
    resample_indexes,
    rle,
    to_log_form,
    to_normal_form,
)


@dataclass
class Particle:
    value: float
    weight: float

    def __float__(self):
        return self.weight


def test_to_normal_form_scales_by_maximum():
    values, lmax = to_normal_form([0.0, -1.0, 2.0])
    assert lmax == 2.0
    assert values[2] == 1.0
    assert all(0 < v <= 1 for v in values)


def test_log_form_round_trip():
    logs = [0.5, -1.5, 3.0]
    values, lmax = to_normal_form(logs)
    back = to_log_form(values, -lmax)
    assert back == pytest.approx(logs)


def test_resample_concentrated_weight():
    assert resample_indexes([0.0, 0.0, 1.0, 0.0]) == [2, 2, 2, 2]
    assert resample_indexes([0.0, 0.0, 1.0, 0.0], 7) == [2] * 7


def test_resample_uniform_keeps_each_once():
    assert resample_indexes([1.0] * 5) == [0, 1, 2, 3, 4]


def test_resample_indexes_sorted_and_valid():
    weights = [0.1, 0.5, 0.05, 0.3, 0.05]
    for _ in range(20):
        indexes = resample_indexes(weights, 12)
        assert len(indexes) == 12
        assert indexes == sorted(indexes)
        assert all(0 <= i < len(weights) for i in indexes)


def test_resample_empty_raises():
    with pytest.raises(ValueError):
        resample_indexes([])


def test_repeat_indexes():
    assert repeat_indexes([2, 0, 0], ["a", "b", "c"]) == ["c", "a", "a"]
    with pytest.raises(ValueError):
        repeat_indexes([0], ["a", "b"])


def test_neff_bounds():
    assert neff([2.0] * 8) == pytest.approx(8)
    assert neff([0.0, 5.0, 0.0]) == pytest.approx(1)


def test_normalize_sums_to_one():
    result = normalize([1.0, 3.0, 4.0])
    assert math.fsum(result) == pytest.approx(1.0)
    assert result[1] == pytest.approx(3 * result[0])


def test_rle():
    assert rle([1, 1, 2, 2, 2, 1]) == [(1, 2), (2, 3), (1, 1)]
    assert rle([]) == []


def test_uniform_resampler_resets_weights():
    particles = [Particle(i, w) for i, w in enumerate([0.2, 0.0, 0.8])]
    resampled = UniformResampler().resample(particles, 4)
    assert len(resampled) == 4
    assert all(p.weight == pytest.approx(0.25) for p in resampled)
    assert all(p.value != 1 for p in resampled)
    assert particles[0].weight == 0.2


def test_uniform_resampler_neff():
    particles = [Particle(i, 1.0) for i in range(6)]
    assert UniformResampler().neff(particles) == pytest.approx(6)
    assert UniformResampler().resample_indexes(particles) == list(range(6))


class Shift:
    def __init__(self, amount):
        self.amount = amount

    def evolve(self, p):
        return Particle(p.value + self.amount, p.weight)


def test_evolver_moves_every_particle():
    result = Evolver(Shift(10)).evolve([Particle(1, 1.0), Particle(2, 1.0)])
    assert [p.value for p in result] == [11, 12]


class OnlyValue:
    def __init__(self, wanted):
        self.wanted = wanted

    def likelihood(self, p):
        return 2.0 if p.value == self.wanted else 0.0


def test_auxiliary_evolver_follows_likely_particle():
    particles = [Particle(0, 1.0), Particle(5, 1.0), Particle(9, 1.0)]
    evolver = AuxiliaryEvolver(Shift(1), Shift(0), OnlyValue(5))
    result = evolver.evolve(particles)
    assert len(result) == 3
    assert all(p.value == 6 for p in result)
    assert all(p.weight == 0.0 for p in result)