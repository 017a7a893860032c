"""Gaussian sampling and evaluation, and 3D pose covariances."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from gridslam.point import OrientedPoint

Vector3 = Tuple[float, float, float]
Matrix3 = Tuple[Vector3, Vector3, Vector3]

_rng = random.Random()


def _nonzero_uniform() -> float:
    while True:
        r = _rng.random()
        if r != 0.0:
            return r


def _polar_gaussian(sigma: float) -> float:
    """Zero-mean Gaussian draw using the polar Box-Muller transform."""
    while True:
        x1 = 2.0 * _nonzero_uniform() - 1.0
        x2 = 2.0 * _nonzero_uniform() - 1.0
        w = x1 * x1 + x2 * x2
        if 0.0 < w <= 1.0:
            return sigma * x2 * math.sqrt(-2.0 * math.log(w) / w)


def sample_gaussian(sigma: float, seed: int = 0) -> float:
    """Draw from a zero-mean Gaussian; a nonzero ``seed`` reseeds the generator first."""
    if seed != 0:
        _rng.seed(seed)
    if sigma == 0:
        return 0.0
    return _polar_gaussian(sigma)


def eval_gaussian(sigma_square: float, delta: float) -> float:
    """Density of a zero-mean Gaussian; non-positive variances are replaced by 1e-4."""
    if sigma_square <= 0:
        sigma_square = 1e-4
    return math.exp(-0.5 * delta * delta / sigma_square) / math.sqrt(
        2 * math.pi * sigma_square
    )


def eval_log_gaussian(sigma_square: float, delta: float) -> float:
    """Log density of a zero-mean Gaussian; non-positive variances become 1e-4."""
    if sigma_square <= 0:
        sigma_square = 1e-4
    return -0.5 * delta * delta / sigma_square - 0.5 * math.log(
        2 * math.pi * sigma_square
    )


def sample_uniform_int(maximum: int) -> int:
    """Uniform integer in [0, maximum)."""
    return int(maximum * _rng.random())


def sample_uniform_double(minimum: float, maximum: float) -> float:
    """Uniform float between ``minimum`` and ``maximum``."""
    return minimum + _rng.random() * (maximum - minimum)


@dataclass(frozen=True)
class Covariance3:
    """Symmetric covariance of an (x, y, theta) pose."""

    xx: float = 0.0
    yy: float = 0.0
    tt: float = 0.0
    xy: float = 0.0
    xt: float = 0.0
    yt: float = 0.0

    def __add__(self, other: Covariance3) -> Covariance3:
        if not isinstance(other, Covariance3):
            return NotImplemented
        return Covariance3(
            self.xx + other.xx,
            self.yy + other.yy,
            self.tt + other.tt,
            self.xy + other.xy,
            self.xt + other.xt,
            self.yt + other.yt,
        )

    def as_array(self) -> np.ndarray:
        return np.array(
            [
                [self.xx, self.xy, self.xt],
                [self.xy, self.yy, self.yt],
                [self.xt, self.yt, self.tt],
            ],
            dtype=float,
        )


def _to_matrix3(m: np.ndarray) -> Matrix3:
    return tuple(tuple(float(v) for v in row) for row in m)  # type: ignore[return-value]


_ZERO_MATRIX: Matrix3 = ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))


@dataclass(frozen=True)
class EigenCovariance3:
    """Eigen decomposition of a pose covariance.

    ``evec[i][k]`` is component ``i`` of the eigenvector for ``eval[k]``.
    """

    eval: Vector3 = (0.0, 0.0, 0.0)
    evec: Matrix3 = _ZERO_MATRIX

    @classmethod
    def from_covariance(cls, cov: Covariance3) -> EigenCovariance3:
        """Decompose a covariance; eigenvalues come in ascending order."""
        values, vectors = np.linalg.eigh(cov.as_array())
        return cls(tuple(float(v) for v in values), _to_matrix3(vectors))

    def rotate(self, angle: float) -> EigenCovariance3:
        """Rotate the eigenvectors by ``angle`` in the x-y plane."""
        c, s = math.cos(angle), math.sin(angle)
        rotation = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        return EigenCovariance3(self.eval, _to_matrix3(rotation @ np.array(self.evec)))

    def sample(self) -> OrientedPoint:
        """Draw a zero-mean pose perturbation with this covariance."""
        noise = []
        for value in self.eval:
            v = sample_gaussian(math.sqrt(value)) if value >= 0 else 0.0
            noise.append(0.0 if math.isnan(v) else v)
        x, y, theta = (np.array(self.evec) @ np.array(noise)).tolist()
        return OrientedPoint(x, y, math.atan2(math.sin(theta), math.cos(theta)))


@dataclass(frozen=True)
class Gaussian3:
    """A Gaussian over poses."""

    mean: OrientedPoint = field(default_factory=OrientedPoint)
    covariance: EigenCovariance3 = field(default_factory=EigenCovariance3)
    cov: Covariance3 = field(default_factory=Covariance3)

    def eval(self, p: OrientedPoint) -> float:
        """Log likelihood of pose ``p``, summed along the eigen axes."""
        dtheta = p.theta - self.mean.theta
        q = (
            p.x - self.mean.x,
            p.y - self.mean.y,
            math.atan2(math.sin(dtheta), math.cos(dtheta)),
        )
        evec = self.covariance.evec
        total = 0.0
        for k, variance in enumerate(self.covariance.eval):
            projected = sum(evec[i][k] * q[i] for i in range(3))
            total += eval_log_gaussian(variance, projected)
        return total


def gaussian_from_samples(
    poses: Iterable[OrientedPoint], weights: Optional[Sequence[float]] = None
) -> Gaussian3:
    """Estimate a pose Gaussian from samples.

    With weights, sums are divided by the total weight. Without weights,
    every sample counts once and the sums are divided by ``n + 1``.
    """
    poses = list(poses)
    if weights is None:
        weighted = [(p, 1.0) for p in poses]
        wcum = 1.0 + len(poses)
    else:
        weighted = list(zip(poses, weights, strict=True))
        wcum = sum(w for _, w in weighted)

    s = sum(w * math.sin(p.theta) for p, w in weighted) / wcum
    c = sum(w * math.cos(p.theta) for p, w in weighted) / wcum
    mean = OrientedPoint(
        sum(w * p.x for p, w in weighted) / wcum,
        sum(w * p.y for p, w in weighted) / wcum,
        math.atan2(s, c),
    )

    xx = yy = tt = xy = xt = yt = 0.0
    for p, w in weighted:
        dx, dy = p.x - mean.x, p.y - mean.y
        dt = p.theta - mean.theta
        dt = math.atan2(math.sin(dt), math.cos(dt))
        xx += w * dx * dx
        yy += w * dy * dy
        tt += w * dt * dt
        xy += w * dx * dy
        yt += w * dy * dt
        xt += w * dx * dt
    cov = Covariance3(
        xx / wcum, yy / wcum, tt / wcum, xy / wcum, xt / wcum, yt / wcum
    )
    return Gaussian3(mean, EigenCovariance3.from_covariance(cov), cov)