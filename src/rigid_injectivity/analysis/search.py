"""
Closest Upper Hinge
===================

Given a point p and an angle theta (Pythagorean or hinge), find the
smallest hinge angle of p strictly above theta.

ALGORITHM:
    1. v = R(theta) p,  U = v + t  (exact)
    2. x = cell of U on (theta, theta + eps): exact halves are rounded in
       the direction the point is moving (operators/rotation.py)
    3. Per axis, the next crossing of a half-grid line. Moving towards
       smaller x the line ahead is x = x1 - 1/2, reached with x decreasing
       (root +1). If that line is out of reach the coordinate turns round
       first and the next crossing is the line behind, x = x1 + 1/2, with
       x increasing (root -1). Symmetric for x increasing and for y:

           motion         ahead (k, root)     behind (k, root)
           ------         ---------------     ----------------
           x down         (x1 - 1, +1)        (x1, -1)
           x up           (x1, -1)            (x1 - 1, +1)
           y up           (x2, +1)            (x2 - 1, -1)
           y down         (x2 - 1, -1)        (x2, +1)

       h = (p1, p2, kx, 0, rx),  g = (p1, p2, ky, 1, ry)
    4. Drop candidates that do not exist for t (check_hinge: out of reach,
       or past pi) or are not strictly above theta. None left ->
       NoValidHinge. Otherwise the smaller one (h on ties).

The result is always strictly above theta, and no crossing of p lies
strictly between theta and the result, so iterating walks through every
critical angle of p in [0, pi] and ends with NoValidHinge.
"""

import logging
from typing import List

from ..operators.compare import angle_order
from ..operators.hinge import check_hinge, hinge_radicand
from ..operators.rotation import digitize_after, motion_directions, rotate
from ..spec.constants import AXIS_X, AXIS_Y, ROOT_MINUS, ROOT_PLUS
from ..spec.errors import NoValidHinge
from ..spec.structures import HingeAngle, as_angle, validate_point, validate_translation

logger = logging.getLogger(__name__)


def _next_crossing(p, axis, ahead, behind, t) -> HingeAngle:
    h = HingeAngle(p[0], p[1], ahead[0], axis, ahead[1])
    if hinge_radicand(h, t) >= 0:
        return h
    return HingeAngle(p[0], p[1], behind[0], axis, behind[1])


def hinge_candidates(p, angle, t) -> List[HingeAngle]:
    """
    The next x-line and y-line crossings of p after this angle.

    Raises:
        NoValidHinge: p is the origin (it does not move)
    """
    p = validate_point(p)
    t = validate_translation(t)
    angle = as_angle(angle)

    if p == (0, 0):
        raise NoValidHinge("The origin has no hinge angles")

    v = rotate(angle, p, t)
    x1, x2 = digitize_after(angle, t, p)
    x_decreasing, y_decreasing = motion_directions(v)

    if x_decreasing:
        h = _next_crossing(p, AXIS_X, (x1 - 1, ROOT_PLUS), (x1, ROOT_MINUS), t)
    else:
        h = _next_crossing(p, AXIS_X, (x1, ROOT_MINUS), (x1 - 1, ROOT_PLUS), t)
    if y_decreasing:
        g = _next_crossing(p, AXIS_Y, (x2 - 1, ROOT_MINUS), (x2, ROOT_PLUS), t)
    else:
        g = _next_crossing(p, AXIS_Y, (x2, ROOT_PLUS), (x2 - 1, ROOT_MINUS), t)

    logger.debug("point %s at %s: cell (%d, %d), candidates %s %s",
                 p, angle, x1, x2, h.as_tuple(), g.as_tuple())
    return [h, g]

def closest_upper_hinge(p, angle, t) -> HingeAngle:
    """
    Smallest hinge angle of p strictly greater than angle.

    Args:
        p: integer point
        angle: Pythagorean or hinge angle
        t: translation, pair of exact rationals

    Returns:
        HingeAngle

    Raises:
        NoValidHinge: both critical lines are out of reach or behind
    """
    t = validate_translation(t)
    angle = as_angle(angle)

    above = []
    for candidate in hinge_candidates(p, angle, t):
        check = check_hinge(candidate, t)
        if not check.valid:
            logger.debug("candidate %s rejected: %s", candidate.as_tuple(), check.reason)
            continue
        if angle_order(candidate, angle, t) <= 0:
            logger.debug("candidate %s rejected: not above current angle", candidate.as_tuple())
            continue
        above.append(candidate)

    if not above:
        raise NoValidHinge(f"Both hinge angles are not valid for point {tuple(p)} above {angle}")
    if len(above) == 2 and angle_order(above[1], above[0], t) < 0:
        return above[1]
    return above[0]
