"""
Injectivity Range - sweep over hinge angles
===========================================

Starting from the Pythagorean angle theta_0 generated by (p, q), walk
forward through the hinge angles of every point and find the angle at
which the digitized motion stops being injective on the set.

STATE:
    bracket = (lower, upper), lower fixed at angle 0, upper starts at
    arccos(21/29) (~43.6 deg) and only ever shrinks. It is threaded
    through the point loop; points are processed in input order.

PER POINT x (N = x and its 4-neighbours in the set):
    1. N collides at theta_0        -> NON_INJECTIVE_AT_BASE, stop
    2. alpha = closest_upper_hinge(x, theta_0); none -> next point
    3. while lower < alpha < upper:
           N collides at alpha, or just past alpha -> upper = alpha, break
           otherwise accept alpha, alpha = next hinge (none -> break)
    4. keep only accepted angles still inside the bracket

RESULT:
    RangeResult.status
        NON_INJECTIVE_AT_BASE   base rotation already non-injective
        BOUNDARY_FOUND          upper bound tightened at least once
        NO_BOUNDARY_IN_BRACKET  no collision below the initial upper bound
    RangeResult.hinges          accepted hinge angles, in acceptance order
    RangeResult.upper           final upper bound
    RangeResult.upper_history   every upper bound held (strictly decreasing)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from ..builders.lattice import four_neighborhood
from ..operators.compare import angle_order
from ..spec.constants import BRACKET_LOWER_TRIPLE, BRACKET_UPPER_TRIPLE
from ..spec.errors import InvalidHingeAngle, NoValidHinge
from ..spec.structures import (
    Angle,
    HingeAngle,
    Point,
    PythagoreanAngle,
    Translation,
    as_angle,
    validate_point_set,
    validate_translation,
)
from .injectivity import find_colliding_pairs, find_collisions_after
from .search import closest_upper_hinge

logger = logging.getLogger(__name__)


class RangeStatus(Enum):
    NON_INJECTIVE_AT_BASE = "non_injective_at_base"
    BOUNDARY_FOUND = "boundary_found"
    NO_BOUNDARY_IN_BRACKET = "no_boundary_in_bracket"


class SearchBracket:
    """
    Open angle interval (lower, upper) with a decrease-only upper bound.
    """

    def __init__(self, lower, upper, t):
        self.t = validate_translation(t)
        self.lower = as_angle(lower)
        self.upper = as_angle(upper)
        if angle_order(self.lower, self.upper, self.t) >= 0:
            raise ValueError(f"Empty bracket: lower {self.lower} is not below upper {self.upper}")
        self.history: List[Angle] = [self.upper]

    def contains(self, angle) -> bool:
        """lower < angle < upper."""
        return (angle_order(self.lower, angle, self.t) < 0
                and angle_order(angle, self.upper, self.t) < 0)

    def tighten(self, angle) -> None:
        """Move the upper bound down to angle. Never widens."""
        angle = as_angle(angle)
        if angle_order(angle, self.upper, self.t) > 0:
            raise ValueError(f"Refusing to widen bracket: {angle} is above {self.upper}")
        self.upper = angle
        self.history.append(angle)

    @property
    def tightened(self) -> bool:
        return len(self.history) > 1


@dataclass
class RangeResult:
    status: RangeStatus
    base: PythagoreanAngle
    lower: Angle
    upper: Angle
    hinges: List[HingeAngle] = field(default_factory=list)
    upper_history: List[Angle] = field(default_factory=list)
    witnesses: List[Tuple[Point, Point]] = field(default_factory=list)

    @property
    def injective_at_base(self) -> bool:
        return self.status is not RangeStatus.NON_INJECTIVE_AT_BASE


def reduce_hinge_set(hinges: Iterable, lower, upper, t) -> List[HingeAngle]:
    """Hinge angles strictly between lower and upper, order preserved."""
    t = validate_translation(t)
    return [
        h for h in hinges
        if angle_order(lower, h, t) < 0 and angle_order(h, upper, t) < 0
    ]


def _breaks_injectivity(alpha: HingeAngle, t: Translation, neighborhood: List[Point]) -> bool:
    return bool(find_colliding_pairs(alpha, t, neighborhood)
                or find_collisions_after(alpha, t, neighborhood))


def _sweep_point(x: Point, base: PythagoreanAngle, t: Translation,
                 neighborhood: List[Point], bracket: SearchBracket,
                 accepted: List[HingeAngle]) -> None:
    try:
        alpha = closest_upper_hinge(x, base, t)
    except NoValidHinge:
        logger.debug("point %s: no hinge above the base angle", x)
        return

    while bracket.contains(alpha):
        if _breaks_injectivity(alpha, t, neighborhood):
            logger.debug("point %s: injectivity breaks at %s, tightening upper bound",
                         x, alpha.as_tuple())
            bracket.tighten(alpha)
            return
        accepted.append(alpha)
        logger.debug("point %s: accepted %s", x, alpha.as_tuple())
        try:
            alpha = closest_upper_hinge(x, alpha, t)
        except (NoValidHinge, InvalidHingeAngle):
            logger.debug("point %s: sweep exhausted", x)
            return


def check_injectivity_range(p, q, t, points: Iterable,
                            lower=None, upper=None) -> RangeResult:
    """
    Sweep hinge angles above the Pythagorean angle of (p, q).

    Args:
        p, q: generators of a primitive Pythagorean triple
        t: translation, pair of exact rationals
        points: finite set of integer points (iteration order matters)
        lower, upper: optional bracket angles (default 0 and arccos(21/29))

    Returns:
        RangeResult
    """
    base = PythagoreanAngle.from_generators(p, q)
    t = validate_translation(t)
    points = validate_point_set(points)
    members = frozenset(points)

    bracket = SearchBracket(
        lower if lower is not None else BRACKET_LOWER_TRIPLE,
        upper if upper is not None else BRACKET_UPPER_TRIPLE,
        t,
    )
    accepted: List[HingeAngle] = []

    for x in points:
        neighborhood = four_neighborhood(members, x)
        witnesses = find_colliding_pairs(base, t, neighborhood)
        if witnesses:
            logger.debug("point %s: base rotation already non-injective", x)
            return RangeResult(
                status=RangeStatus.NON_INJECTIVE_AT_BASE,
                base=base,
                lower=bracket.lower,
                upper=bracket.upper,
                upper_history=list(bracket.history),
                witnesses=witnesses,
            )

        _sweep_point(x, base, t, neighborhood, bracket, accepted)
        accepted = reduce_hinge_set(accepted, bracket.lower, bracket.upper, t)

    status = RangeStatus.BOUNDARY_FOUND if bracket.tightened else RangeStatus.NO_BOUNDARY_IN_BRACKET
    return RangeResult(
        status=status,
        base=base,
        lower=bracket.lower,
        upper=bracket.upper,
        hinges=accepted,
        upper_history=list(bracket.history),
    )
