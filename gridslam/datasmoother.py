"""Parzen-window smoothing of weighted 1D samples, with sampling and fit measures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO, Tuple

from gridslam.point import MAXDOUBLE
from gridslam.stat import sample_gaussian, sample_uniform_double


@dataclass
class DataPoint:
    """A sample position ``x`` with its weight ``y``."""

    x: float = 0.0
    y: float = 0.0


def _grid(start: float, stop: float, step: float) -> Iterator[float]:
    """Yield start, start+step, ... while not past ``stop``, accumulating the step."""
    if step <= 0:
        raise ValueError("step must be positive")
    x = start
    while x <= stop:
        yield x
        x += step


class DataSmoother:
    """Gaussian kernel density over weighted samples."""

    def __init__(self, parzen_window: float) -> None:
        self.reset(parzen_window)

    def reset(self, parzen_window: float) -> None:
        """Drop all data and set a new kernel width."""
        self.data: List[DataPoint] = []
        self._cumulated: List[float] = []
        self._integral: float = -1.0
        self.parzen_window = parzen_window
        self.lower = MAXDOUBLE
        self.upper = -MAXDOUBLE
        self._last_step = 0.001

    def _require_data(self) -> None:
        if not self.data:
            raise ValueError("the smoother holds no data")

    def set_min_to_zero(self) -> None:
        """Shift all weights so that the smallest becomes zero."""
        if self.data:
            minval = min(d.y for d in self.data)
            for d in self.data:
                d.y -= minval
        self._cumulated.clear()

    def add(self, x: float, p: float) -> None:
        """Add a sample at ``x`` with weight ``p``."""
        self.data.append(DataPoint(x, p))
        self._integral = -1.0
        margin = 3.0 * self.parzen_window
        self.lower = min(self.lower, x - margin)
        self.upper = max(self.upper, x + margin)
        self._cumulated.clear()

    def integrate(self, step: float) -> float:
        """Integrate the smoothed density over its whole range and remember the result."""
        self._last_step = step
        self._integral = sum(
            self.smoothed_data(x) * step for x in _grid(self.lower, self.upper, step)
        )
        return self._integral

    def integral(self, step: float, x_to: float) -> float:
        """Integrate the smoothed density from the lower bound up to ``x_to``."""
        return sum(self.smoothed_data(x) * step for x in _grid(self.lower, x_to, step))

    def smoothed_data(self, x: float) -> float:
        """Density of the smoothed data at ``x``."""
        self._require_data()
        p = 0.0
        sum_y = 0.0
        for d in self.data:
            dist = abs(x - d.x)
            p += d.y * math.exp(-0.5 * (dist / self.parzen_window) ** 2)
            sum_y += d.y
        denom = math.sqrt(2.0 * math.pi) * sum_y * self.parzen_window
        return p * (1.0 / denom)

    def sample_numeric(self, step: float) -> float:
        """Draw from the smoothed density by numeric integration over a grid."""
        self._require_data()
        if self._integral < 0 or step != self._last_step:
            self.integrate(step)
        r = sample_uniform_double(0.0, self._integral)
        total = 0.0
        for x in _grid(self.lower, self.upper, step):
            total += self.smoothed_data(x) * step
            if total > r:
                return x - 0.5 * step
        return self.upper

    def _compute_cumulated(self) -> None:
        self._require_data()
        total = 0.0
        self._cumulated = []
        for d in self.data:
            total += d.y
            self._cumulated.append(total)

    def _ensure_cumulated(self) -> float:
        self._require_data()
        if not self._cumulated:
            self._compute_cumulated()
        return self._cumulated[-1]

    def sample(self) -> float:
        """Draw one sample: pick a data point, then add kernel noise."""
        maxval = self._ensure_cumulated()
        target = sample_uniform_double(0.0, maxval)
        total = 0.0
        for d, cum in zip(self.data, self._cumulated):
            total += cum
            if total >= target:
                return d.x + sample_gaussian(self.parzen_window)
        raise RuntimeError("sampling failed: weights are not non-negative")

    def sample_multiple(self, num: int) -> List[float]:
        """Draw ``num`` samples in one sorted sweep over the data."""
        maxval = self._ensure_cumulated()
        randoms = sorted(sample_uniform_double(0.0, maxval) for _ in range(num))
        samples: List[float] = []
        total = 0.0
        j = 0
        for d, cum in zip(self.data, self._cumulated):
            if j >= num:
                break
            total += cum
            while j < num and total >= randoms[j]:
                samples.append(d.x + sample_gaussian(self.parzen_window))
                j += 1
        return samples

    def approx_gauss(self, step: float) -> Tuple[float, float]:
        """Return the (mean, sigma) of a Gaussian fitted to the smoothed density."""
        self._require_data()
        grid = list(_grid(self.lower, self.upper, step))
        values = [self.smoothed_data(x) for x in grid]
        total = sum(values)
        mean = sum(x * d for x, d in zip(grid, values)) / total
        var = sum((x - mean) ** 2 * d for x, d in zip(grid, values)) / total
        return mean, math.sqrt(var)

    @staticmethod
    def gauss(x: float, mean: float, sigma: float) -> float:
        """Normal density at ``x``."""
        return 1.0 / (math.sqrt(2.0 * math.pi) * sigma) * math.exp(
            -0.5 * ((x - mean) / sigma) ** 2
        )

    def cramer_von_mises_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Sum of squared differences between the two cumulative distributions."""
        p = 0.0
        sint = 0.0
        gint = 0.0
        for x in _grid(self.lower, self.upper, step):
            sint += self.smoothed_data(x) * step
            gint += self.gauss(x, mean, sigma) * step
            p += (sint - gint) ** 2
        return p

    def kld_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Kullback-Leibler divergence from the smoothed density to a Gaussian.

        Raises ValueError when the two masses over the range differ by more than 0.1.
        """
        p = 0.0
        sd = 0.0
        sg = 0.0
        for x in _grid(self.lower, self.upper, step):
            d = 1e-10 + self.smoothed_data(x)
            g = 1e-10 + self.gauss(x, mean, sigma)
            sd += d
            sg += g
            p += d * math.log(d / g)
        sd *= step
        sg *= step
        if abs(sd - sg) > 0.1:
            raise ValueError("the densities have different mass over the range")
        return p * step

    def dump_data(self, stream: TextIO) -> None:
        """Write the raw samples as ``x y`` lines."""
        for d in self.data:
            stream.write("%f %f\n" % (d.x, d.y))

    def dump_smoothed_data(self, stream: TextIO, step: float) -> None:
        """Write the smoothed density over its range as ``x density`` lines."""
        for x in _grid(self.lower, self.upper, step):
            stream.write("%f %f\n" % (x, self.smoothed_data(x)))

    @property
    def last_integral(self) -> Optional[float]:
        """The last value computed by :meth:`integrate`, if still valid."""
        return None if self._integral < 0 else self._integral