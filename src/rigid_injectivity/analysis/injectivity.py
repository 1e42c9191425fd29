"""
Injectivity at a Fixed Angle
============================

Region test: x witnesses non-injectivity with x + (0,1) when rho(x) is in
the up region, and with x + (1,0) when rho(x) is in the right region
(builders/regions.py). Scanning up and right over all points covers
every 4-adjacent pair once.

Two flavours:
    find_colliding_pairs    digitization AT the angle (halves round up)
    find_collisions_after   digitization just PAST the angle; at a hinge
                            the point on the critical line is already in
                            the cell it is entering

Public entry point:
    check_injectivity(p, q, t, points) -> set of points that collide at
    the Pythagorean angle generated by (p, q). Empty set = injective.
"""

from typing import Iterable, List, Set, Tuple

from ..builders.regions import non_injective_region
from ..operators.rotation import digitize_after, remainder_map
from ..spec.constants import REGION_NEIGHBOR, REGION_RIGHT, REGION_UP
from ..spec.structures import (
    Point,
    PythagoreanAngle,
    validate_point,
    validate_point_set,
    validate_translation,
)

Pair = Tuple[Point, Point]

_FORWARD_REGIONS = (REGION_UP, REGION_RIGHT)


def forward_regions(angle, t):
    """(index, rectangle) for the up and right regions of an angle."""
    return [(index, non_injective_region(index, angle, t)) for index in _FORWARD_REGIONS]


def region_violations(angle, t, x, points, regions=None) -> List[Pair]:
    """
    Pairs (x, neighbour) that share a digitized image at this angle.

    Args:
        angle: Pythagorean or hinge angle in [0, pi/2]
        t: translation
        x: integer point
        points: the set the neighbour must belong to
        regions: precomputed forward_regions(angle, t), optional
    """
    x = validate_point(x)
    members = points if isinstance(points, (set, frozenset)) else set(points)
    if regions is None:
        regions = forward_regions(angle, t)

    rho = remainder_map(angle, t, x)
    pairs = []
    for index, region in regions:
        dx, dy = REGION_NEIGHBOR[index]
        y = (x[0] + dx, x[1] + dy)
        if y in members and rho in region:
            pairs.append((x, y))
    return pairs


def find_colliding_pairs(angle, t, points: Iterable) -> List[Pair]:
    """All 4-adjacent pairs of points with the same image at this angle."""
    t = validate_translation(t)
    points = validate_point_set(points)
    members = frozenset(points)
    regions = forward_regions(angle, t)
    pairs = []
    for x in points:
        pairs.extend(region_violations(angle, t, x, members, regions))
    return pairs


def find_collisions_after(angle, t, points: Iterable) -> List[Pair]:
    """All 4-adjacent pairs with the same image on (angle, angle + eps)."""
    t = validate_translation(t)
    points = validate_point_set(points)
    members = frozenset(points)
    images = {}
    pairs = []
    for x in points:
        for index in _FORWARD_REGIONS:
            dx, dy = REGION_NEIGHBOR[index]
            y = (x[0] + dx, x[1] + dy)
            if y not in members:
                continue
            for z in (x, y):
                if z not in images:
                    images[z] = digitize_after(angle, t, z)
            if images[x] == images[y]:
                pairs.append((x, y))
    return pairs


def colliding_pairs(p, q, t, points: Iterable) -> List[Pair]:
    """Colliding pairs at the Pythagorean angle generated by (p, q)."""
    angle = PythagoreanAngle.from_generators(p, q)
    return find_colliding_pairs(angle, t, points)


def check_injectivity(p, q, t, points: Iterable) -> Set[Point]:
    """
    Subset of points whose image is shared with a 4-neighbour.

    Args:
        p, q: generators of a primitive Pythagorean triple (gcd 1, p - q odd)
        t: translation, pair of exact rationals
        points: finite set of integer points

    Returns:
        set of witnesses; empty iff the digitized motion is injective on points
    """
    witnesses = set()
    for x, y in colliding_pairs(p, q, t, points):
        witnesses.add(x)
        witnesses.add(y)
    return witnesses
