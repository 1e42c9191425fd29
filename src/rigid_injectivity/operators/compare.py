"""
Angle Comparison
================

All angles live in [0, pi], where arccos is decreasing, so

    theta_x < theta_y   <=>   cos_x > cos_y

and comparing angles is comparing two surds (compare_surds). Nothing is
evaluated in floating point.

Entry points keep the conventions of the published procedure:
    compare_hinge_to_pythagorean(h, P, t) -> 1 if P > h else 0
    compare_hinge_to_hinge(h, g, t)       -> 1 if g > h, 0 if g < h,
                                             ANGLES_EQUAL (-1) if equal
    compare_angles(h, g, t)               -> dispatch on the kind of g

NOTE: ANGLES_EQUAL = -1 overlaps the "0 or 1" answers. Check for equality
first, or use angle_order() which returns a plain -1/0/1 ordering.
"""

from ..spec.constants import ANGLES_EQUAL, SECOND_GREATER, SECOND_NOT_GREATER
from ..spec.errors import InvalidHingeAngle
from ..spec.structures import HingeAngle, PythagoreanAngle, as_angle, validate_translation
from .rotation import angle_cos_sin
from .surds import compare_surds


def angle_order(x, y, t) -> int:
    """sign(theta_x - theta_y): -1, 0 or 1."""
    t = validate_translation(t)
    cos_x, _ = angle_cos_sin(x, t)
    cos_y, _ = angle_cos_sin(y, t)
    return -compare_surds(cos_x, cos_y)


def compare_hinge_to_pythagorean(h, angle, t) -> int:
    """1 if the Pythagorean angle is bigger than the hinge angle, 0 otherwise."""
    h = as_angle(h)
    angle = as_angle(angle)
    if not isinstance(h, HingeAngle):
        raise InvalidHingeAngle(f"Expected a hinge angle, got {h!r}")
    if not isinstance(angle, PythagoreanAngle):
        raise InvalidHingeAngle(f"Expected a Pythagorean angle, got {angle!r}")
    return SECOND_GREATER if angle_order(angle, h, t) > 0 else SECOND_NOT_GREATER


def compare_hinge_to_hinge(h, g, t) -> int:
    """
    Compare two hinge angles.

    Returns:
        ANGLES_EQUAL (-1) if h and g are the same hinge or the same angle,
        1 if g is bigger than h, 0 if g is smaller.
    """
    h = as_angle(h)
    g = as_angle(g)
    if not (isinstance(h, HingeAngle) and isinstance(g, HingeAngle)):
        raise InvalidHingeAngle(f"Expected two hinge angles, got {h!r}, {g!r}")
    if h == g:
        # still validated: an imaginary hinge is not equal to anything
        angle_cos_sin(h, t)
        return ANGLES_EQUAL
    order = angle_order(g, h, t)
    if order == 0:
        return ANGLES_EQUAL
    return SECOND_GREATER if order > 0 else SECOND_NOT_GREATER


def compare_angles(h, g, t) -> int:
    """Compare hinge h with g, a Pythagorean (3 entries) or hinge (4 or 5 entries) angle."""
    validate_translation(t)
    g = as_angle(g)
    if isinstance(g, PythagoreanAngle):
        return compare_hinge_to_pythagorean(h, g, t)
    return compare_hinge_to_hinge(h, g, t)
