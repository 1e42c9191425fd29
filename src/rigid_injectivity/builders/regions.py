"""
Non-Injective Regions
=====================

Rectangles in remainder space [-1/2, 1/2)^2. If rho(x) falls in region i
and the matching neighbour x + e_i is in the set, x and x + e_i have the
same digitized image.

For theta in [0, pi/2] (cos, sin >= 0):

    index  name   neighbour   rectangle [lo, hi) x [lo, hi)
    -----  -----  ---------   ---------------------------------------
      1    up     (0, 1)      [sin - 1/2, 1/2) x [-1/2, 1/2 - cos)
      2    right  (1, 0)      [-1/2, 1/2 - cos) x [-1/2, 1/2 - sin)
      3    down   (0, -1)     [-1/2, 1/2 - sin) x [cos - 1/2, 1/2)
      4    left   (-1, 0)     [cos - 1/2, 1/2) x [sin - 1/2, 1/2)

DERIVATION (up): U(x + (0,1)) = U(x) + (-sin, cos). Same cell iff
    rho_x - sin >= -1/2  and  rho_y + cos < 1/2;
the other two inequalities hold automatically. Upper bounds are open
because halves round up.

Down and left are the point reflections of up and right, so checking up
and right over every point of a set covers every 4-adjacent pair.
"""

from dataclasses import dataclass
from typing import Tuple

from ..spec.constants import HALF, REGION_DOWN, REGION_LEFT, REGION_RIGHT, REGION_UP
from ..operators.rotation import angle_cos_sin
from ..operators.surds import Surd


@dataclass(frozen=True)
class Rectangle:
    """Half-open axis-aligned rectangle [lower, upper) with exact corners."""
    lower: Tuple[Surd, Surd]
    upper: Tuple[Surd, Surd]

    def __contains__(self, point) -> bool:
        return all(lo <= c < hi for lo, c, hi in zip(self.lower, point, self.upper))

    def approx(self):
        """Float corners for printing."""
        return (tuple(float(v) for v in self.lower), tuple(float(v) for v in self.upper))


def _rect(x_lo, y_lo, x_hi, y_hi) -> Rectangle:
    coerce = Surd.coerce
    return Rectangle((coerce(x_lo), coerce(y_lo)), (coerce(x_hi), coerce(y_hi)))


def non_injective_region(index: int, angle, t) -> Rectangle:
    """
    Non-injective region of the given index (1 up, 2 right, 3 down, 4 left).

    Args:
        index: region index
        angle: Pythagorean or hinge angle in [0, pi/2]
        t: translation (needed to evaluate hinge angles)
    """
    c, s = angle_cos_sin(angle, t)
    if index == REGION_UP:
        return _rect(s - HALF, -HALF, HALF, HALF - c)
    if index == REGION_RIGHT:
        return _rect(-HALF, -HALF, HALF - c, HALF - s)
    if index == REGION_DOWN:
        return _rect(-HALF, c - HALF, HALF - s, HALF)
    if index == REGION_LEFT:
        return _rect(c - HALF, s - HALF, HALF, HALF)
    raise ValueError(f"Region index must be 1..4, got {index!r}")
