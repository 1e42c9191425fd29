"""
Lattice Neighbourhoods
======================

Pure lookups on a finite point set. The input is never modified.
"""

from typing import Iterable, List

from ..spec.constants import NEIGHBOR_OFFSETS
from ..spec.errors import PointNotInSet
from ..spec.structures import Point, validate_point


def four_neighborhood(points: Iterable[Point], x) -> List[Point]:
    """
    Return [x] followed by the 4-neighbours of x that are in points.

    Raises:
        PointNotInSet: x is not in points
    """
    x = validate_point(x)
    members = points if isinstance(points, (set, frozenset)) else set(points)
    if x not in members:
        raise PointNotInSet(f"The point {x} is not in the set")
    neighborhood = [x]
    for dx, dy in NEIGHBOR_OFFSETS:
        y = (x[0] + dx, x[1] + dy)
        if y in members:
            neighborhood.append(y)
    return neighborhood
