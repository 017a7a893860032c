"""Greedy pose refinement by coordinate-wise hill climbing on a likelihood."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

from gridslam.point import OrientedPoint, absolute_difference

Likelihood = Callable[[Any, Any, OrientedPoint, float], float]


@dataclass
class OptimizerParams:
    discretization: float
    angular_step: float
    linear_step: float
    iterations: int
    max_range: float


class Move(enum.Enum):
    """A trial step, as multipliers of the (linear, linear, angular) step sizes."""

    FORWARD = (1, 0, 0)
    BACKWARD = (-1, 0, 0)
    LEFT = (0, 1, 0)
    RIGHT = (0, -1, 0)
    TURN_RIGHT = (0, 0, -1)
    TURN_LEFT = (0, 0, 1)

    def apply(self, pose: OrientedPoint, lstep: float, astep: float) -> OrientedPoint:
        dx, dy, dtheta = self.value
        return OrientedPoint(
            pose.x + dx * lstep if dx else pose.x,
            pose.y + dy * lstep if dy else pose.y,
            pose.theta + dtheta * astep if dtheta else pose.theta,
        )


class Optimizer:
    """Refines a pose by trying the six moves and halving the steps when stuck.

    ``likelihood(map, reading, pose, max_range)`` scores a pose. The local map
    is made by ``map_factory(discretization)`` and must offer ``clear()`` and
    ``update(reading, pose, max_range)``. Readings carry a ``pose`` attribute.
    """

    def __init__(
        self,
        params: OptimizerParams,
        likelihood: Likelihood,
        map_factory: Callable[[float], Any],
    ) -> None:
        self.params = params
        self.likelihood = likelihood
        self.lmap = map_factory(params.discretization)

    def gradient_descent(self, old_reading: Any, new_reading: Any) -> OrientedPoint:
        """Pose of ``new_reading`` relative to ``old_reading``, refined against the old scan."""
        self.lmap.clear()
        self.lmap.update(old_reading, OrientedPoint(0, 0, 0), self.params.max_range)
        delta = absolute_difference(new_reading.pose, old_reading.pose)
        return self._climb(self.lmap, new_reading, delta)

    def gradient_descent_in_map(
        self, reading: Any, pose: OrientedPoint, local_map: Any
    ) -> OrientedPoint:
        """Refine ``pose`` for ``reading`` against a given map."""
        return self._climb(local_map, reading, pose)

    def _score(self, local_map: Any, reading: Any, pose: OrientedPoint) -> float:
        return self.likelihood(local_map, reading, pose, self.params.max_range)

    def _climb(self, local_map: Any, reading: Any, start: OrientedPoint) -> OrientedPoint:
        best_pose = start
        best_score = self._score(local_map, reading, best_pose)
        lstep, astep = self.params.linear_step, self.params.angular_step
        it = 0
        while True:
            it_pose, it_score = best_pose, best_score
            while True:
                test_pose, test_score = it_pose, it_score
                for move in Move:
                    candidate = move.apply(it_pose, lstep, astep)
                    score = self._score(local_map, reading, candidate)
                    if score > test_score:
                        test_pose, test_score = candidate, score
                if test_score > it_score:
                    it_pose, it_score = test_pose, test_score
                else:
                    break
            if it_score > best_score:
                best_pose, best_score = it_pose, it_score
            else:
                it += 1
                lstep *= 0.5
                astep *= 0.5
            if it >= self.params.iterations:
                return best_pose