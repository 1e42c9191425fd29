"""
Hinge Angle Model
=================

A hinge (p1, p2, k, s, root) is a rotation angle at which p = (p1, p2),
rotated and translated by t, lands on the half-grid line

    s = 0:  x = k + 1/2        s = 1:  y = k + 1/2

DEFINITIONS (t_s = t[s]):
    m   = k - t_s + 1/2            (offset of the line from the rotation centre)
    r^2 = p1^2 + p2^2
    l   = sqrt(r^2 - m^2)          (radicand must be >= 0)

    The orbit of p meets the line at two angles, one per sign of l:

    s = 0:  cos = (p1*m + root*p2*l) / r^2,   sin = (root*p1*l - p2*m) / r^2
    s = 1:  cos = (p2*m + root*p1*l) / r^2,   sin = (p1*m - root*p2*l) / r^2

    At the crossing the velocity component normal to the line is root*l,
    so root = +1 is the crossing where x decreases (s = 0) or y increases
    (s = 1), and root = -1 the other one.

VALIDITY:
    r^2 - m^2 < 0  -> the line is out of reach of the orbit of p
    r^2 == 0       -> the origin has no orbit, no hinge
    sin < 0        -> the crossing lies in (pi, 2*pi), outside [0, pi]
    All are reported through HingeCheck (a tagged result), not raised,
    because "this candidate does not exist" is a normal search outcome.
    validate_hinge() raises InvalidHingeAngle for callers that want that.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple

from ..spec.constants import AXIS_X, HALF
from ..spec.errors import InvalidHingeAngle
from ..spec.structures import HingeAngle, as_angle, validate_translation
from .surds import Surd


@dataclass(frozen=True)
class HingeCheck:
    """Outcome of checking a hinge against a translation."""
    hinge: HingeAngle
    radicand: Fraction
    reason: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.reason is None


def _as_hinge(h) -> HingeAngle:
    h = as_angle(h)
    if not isinstance(h, HingeAngle):
        raise InvalidHingeAngle(f"Expected a hinge angle, got {h!r}")
    return h


def hinge_offset(h: HingeAngle, t) -> Fraction:
    """m = k - t_s + 1/2."""
    t = validate_translation(t)
    return h.k - t[h.s] + HALF


def hinge_radicand(h: HingeAngle, t) -> Fraction:
    """r^2 - m^2."""
    m = hinge_offset(h, t)
    return h.p1 * h.p1 + h.p2 * h.p2 - m * m


def _cos_sin(h: HingeAngle, t, radicand: Fraction) -> Tuple[Surd, Surd]:
    # radicand >= 0 and r^2 > 0 assumed
    m = hinge_offset(h, t)
    r2 = h.p1 * h.p1 + h.p2 * h.p2
    if h.s == AXIS_X:
        cos = Surd(Fraction(h.p1) * m / r2, Fraction(h.root * h.p2, r2), radicand)
        sin = Surd(-Fraction(h.p2) * m / r2, Fraction(h.root * h.p1, r2), radicand)
    else:
        cos = Surd(Fraction(h.p2) * m / r2, Fraction(h.root * h.p1, r2), radicand)
        sin = Surd(Fraction(h.p1) * m / r2, Fraction(-h.root * h.p2, r2), radicand)
    return cos, sin


def check_hinge(h, t) -> HingeCheck:
    """
    Check whether a hinge exists for translation t.

    Shape errors still raise (InvalidHingeAngle): those are caller bugs.
    """
    h = _as_hinge(h)
    radicand = hinge_radicand(h, t)
    if h.p1 == 0 and h.p2 == 0:
        return HingeCheck(h, radicand, "the origin has no hinge angles")
    if radicand < 0:
        return HingeCheck(h, radicand, "half-grid index out of reach (negative radicand)")
    _, sin = _cos_sin(h, t, radicand)
    if sin.sign() < 0:
        return HingeCheck(h, radicand, "crossing lies outside [0, pi] (negative sine)")
    return HingeCheck(h, radicand)


def _checked(h, t) -> HingeCheck:
    check = check_hinge(h, t)
    if not check.valid:
        raise InvalidHingeAngle(f"The angle {check.hinge.as_tuple()} is not valid: {check.reason}")
    return check


def validate_hinge(h, t) -> HingeAngle:
    """Raise InvalidHingeAngle unless h is a real hinge angle for t."""
    return _checked(h, t).hinge


def hinge_cosine(h, t) -> Surd:
    """Exact cosine of the hinge angle."""
    check = _checked(h, t)
    return _cos_sin(check.hinge, t, check.radicand)[0]


def hinge_sine(h, t) -> Surd:
    """Exact (non-negative) sine of the hinge angle."""
    check = _checked(h, t)
    return _cos_sin(check.hinge, t, check.radicand)[1]
