"""Forward/sideward/rotate robot motion increments."""

from __future__ import annotations

import math
from dataclasses import dataclass

from gridslam.point import OrientedPoint, normalize_angle


@dataclass(frozen=True)
class FSRMovement:
    """A motion expressed as forward, sideward and rotational components."""

    f: float = 0.0
    s: float = 0.0
    r: float = 0.0

    def normalized(self) -> FSRMovement:
        """Return the movement with its rotation in [-pi, pi)."""
        return FSRMovement(self.f, self.s, normalize_angle(self.r))

    def inverted(self) -> FSRMovement:
        """Return the movement that undoes this one."""
        c, s = math.cos(self.r), math.sin(self.r)
        return FSRMovement(
            -c * self.f - s * self.s,
            s * self.f - c * self.s,
            -self.r,
        ).normalized()

    def compose(self, other: FSRMovement) -> FSRMovement:
        """Return this movement followed by ``other``."""
        c, s = math.cos(self.r), math.sin(self.r)
        return FSRMovement(
            c * other.f - s * other.s + self.f,
            s * other.f + c * other.s + self.s,
            self.r + other.r,
        ).normalized()

    def move(self, pt: OrientedPoint) -> OrientedPoint:
        """Apply this movement to a pose."""
        c, s = math.cos(pt.theta), math.sin(pt.theta)
        return OrientedPoint(
            pt.x + self.f * c - self.s * s,
            pt.y + self.f * s + self.s * c,
            self.r + pt.theta,
        ).normalized()

    @classmethod
    def between(cls, pt1: OrientedPoint, pt2: OrientedPoint) -> FSRMovement:
        """Return the movement that takes pose ``pt1`` to pose ``pt2``."""
        dx, dy = pt2.x - pt1.x, pt2.y - pt1.y
        c, s = math.cos(pt1.theta), math.sin(pt1.theta)
        return cls(dy * s + dx * c, dy * c - dx * s, pt2.theta - pt1.theta).normalized()


def frame_transformation(
    reference_frame1: OrientedPoint,
    reference_frame2: OrientedPoint,
    pt_frame1: OrientedPoint,
) -> OrientedPoint:
    """Map a pose from frame 1 to frame 2, given one reference pose seen in both."""
    zero = OrientedPoint()
    itrans_ref1 = FSRMovement.between(zero, reference_frame1).inverted()
    trans_ref2 = FSRMovement.between(zero, reference_frame2)
    trans_pt = FSRMovement.between(zero, pt_frame1)
    return trans_ref2.compose(itrans_ref1).compose(trans_pt).move(zero)