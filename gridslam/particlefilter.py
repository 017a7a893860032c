"""Particle-filter helpers: weight forms, systematic resampling and evolvers."""

from __future__ import annotations

import copy
import math
import random
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

_rng = random.Random()


def to_normal_form(weights: Sequence[float]) -> Tuple[List[float], float]:
    """Turn log weights into ``exp(w - max)``; returns the values and the maximum."""
    lmax = max((float(w) for w in weights), default=-math.inf)
    return [math.exp(float(w) - lmax) for w in weights], lmax


def to_log_form(weights: Sequence[float], lmax: float) -> List[float]:
    """Turn weights into ``log(w) - lmax``."""
    return [math.log(float(w)) - lmax for w in weights]


def _systematic(weights: Sequence[float], nparticles: int) -> Tuple[List[int], int]:
    weights = [float(w) for w in weights]
    if not weights:
        raise ValueError("no weights to resample")
    n = nparticles if nparticles > 0 else len(weights)
    interval = sum(weights) / n
    target = interval * _rng.random()
    indexes: List[int] = []
    cumulative = 0.0
    for i, w in enumerate(weights):
        cumulative += w
        while len(indexes) < n and cumulative > target:
            indexes.append(i)
            target += interval
    return indexes, n


def resample_indexes(weights: Sequence[float], nparticles: int = 0) -> List[int]:
    """Systematic resampling: indexes of the chosen weights, in ascending order.

    ``nparticles`` sets how many to draw; 0 draws as many as there are weights.
    Slots left unfilled by rounding hold index 0.
    """
    indexes, n = _systematic(weights, nparticles)
    return indexes + [0] * (n - len(indexes))


def repeat_indexes(indexes: Sequence[int], particles: Sequence[Any]) -> List[Any]:
    """Pick ``particles[i]`` for every index."""
    if len(indexes) != len(particles):
        raise ValueError("indexes and particles differ in length")
    return [particles[i] for i in indexes]


def neff(weights: Sequence[float]) -> float:
    """Effective sample size of unnormalised weights."""
    total = sum(weights)
    return 1.0 / sum((w / total) ** 2 for w in weights)


def normalize(weights: Sequence[float]) -> List[float]:
    """Scale weights so that they sum to one."""
    total = sum(weights)
    return [w / total for w in weights]


def rle(values: Sequence[Any]) -> List[Tuple[Any, int]]:
    """Run-length encoding as ``(value, count)`` pairs."""
    runs: List[Tuple[Any, int]] = []
    for v in values:
        if runs and runs[-1][0] == v:
            runs[-1] = (v, runs[-1][1] + 1)
        else:
            runs.append((v, 1))
    return runs


class UniformResampler:
    """Systematic resampler over particles that convert to their weight with float().

    Resampled particles are shallow copies whose ``weight`` attribute is reset.
    """

    def resample_indexes(self, weights: Sequence[Any], nparticles: int = 0) -> List[int]:
        return resample_indexes([float(w) for w in weights], nparticles)

    def resample(self, particles: Sequence[Any], nparticles: int = 0) -> List[Any]:
        """Resampled copies of the particles, each with weight ``1/n``."""
        indexes, n = _systematic([float(p) for p in particles], nparticles)
        uniform_weight = 1.0 / n
        resampled = []
        for i in indexes:
            particle = copy.copy(particles[i])
            particle.weight = uniform_weight
            resampled.append(particle)
        return resampled

    def neff(self, particles: Sequence[Any]) -> float:
        """Effective sample size, ``sum(w)**2 / sum(w**2)``."""
        weights = [float(p) for p in particles]
        return sum(weights) ** 2 / sum(w * w for w in weights)


@dataclass
class Evolver:
    """Moves every particle through ``evolution_model.evolve``."""

    evolution_model: Any

    def evolve(self, particles: Sequence[Any]) -> List[Any]:
        return [self.evolution_model.evolve(p) for p in particles]


@dataclass
class AuxiliaryEvolver:
    """Auxiliary particle filter step.

    Particles are first weighted by the likelihood of a cheap prediction
    (``qualification_model``), resampled on that, then moved by
    ``evolution_model``; each result's ``weight`` is its likelihood divided
    by the first-stage weight of its parent.
    """

    evolution_model: Any
    qualification_model: Any
    likelihood_model: Any

    def evolve(self, particles: Sequence[Any]) -> List[Any]:
        observation_weights = [
            self.likelihood_model.likelihood(self.qualification_model.evolve(p))
            for p in particles
        ]
        indexes = UniformResampler().resample_indexes(observation_weights)
        evolved = []
        for i in indexes:
            particle = self.evolution_model.evolve(particles[i])
            particle.weight = self.likelihood_model.likelihood(particle) / observation_weights[i]
            evolved.append(particle)
        return evolved