"""
Rotation, Digitization and the Remainder Map
============================================

Exact versions of

    U(x)       = R(theta) x + t
    D(x)       = round(U(x))                 (halves rounded up)
    rho(x)     = U(x) - D(x)  in [-1/2, 1/2)^2

for theta a Pythagorean or a hinge angle. Matrices are numpy object
arrays of Surd, so the usual `R @ x + t` reads as in the float world while
every entry stays exact.

DIRECTION OF MOTION:
    Under increasing theta, v = R(theta) x moves counter-clockwise around
    the rotation centre:  dv/dtheta = (-v_y, v_x),  d2v/dtheta2 = -v.
    x-coordinate decreasing  <=>  v_y > 0, or v_y == 0 and v_x > 0
    y-coordinate decreasing  <=>  v_x < 0, or v_x == 0 and v_y > 0
    (the second clause is the tangency case, decided by curvature).

    digitize_after() rounds exact half-integer ties in that direction,
    which is the digitization on (theta, theta + eps).
"""

from typing import Tuple

import numpy as np

from ..spec.structures import PythagoreanAngle, as_angle, validate_point, validate_translation
from .hinge import hinge_cosine, hinge_sine
from .surds import Surd, floor_surd, is_half_integer, round_half_up


def angle_cos_sin(angle, t) -> Tuple[Surd, Surd]:
    """Exact (cos, sin) of a Pythagorean or hinge angle."""
    angle = as_angle(angle)
    if isinstance(angle, PythagoreanAngle):
        return Surd.rational(angle.cos), Surd.rational(angle.sin)
    return hinge_cosine(angle, t), hinge_sine(angle, t)


def rotation_matrix(angle, t) -> np.ndarray:
    """2x2 object array [[cos, -sin], [sin, cos]]."""
    c, s = angle_cos_sin(angle, t)
    return np.array([[c, -s], [s, c]], dtype=object)


def rotate(angle, x, t) -> np.ndarray:
    """R(angle) x, without translation."""
    x = validate_point(x)
    return rotation_matrix(angle, t).dot(np.array(x, dtype=object))


def rigid_image(angle, t, x) -> np.ndarray:
    """U(x) = R(angle) x + t."""
    tt = validate_translation(t)
    return rotate(angle, x, tt) + np.array(tt, dtype=object)


def digitize(angle, t, x) -> Tuple[int, int]:
    """Lattice point nearest to U(x), halves rounded up."""
    u = rigid_image(angle, t, x)
    return round_half_up(u[0]), round_half_up(u[1])


def remainder_map(angle, t, x) -> Tuple[Surd, Surd]:
    """rho(x) = U(x) - round(U(x)), both components in [-1/2, 1/2)."""
    u = rigid_image(angle, t, x)
    return u[0] - round_half_up(u[0]), u[1] - round_half_up(u[1])


def motion_directions(v) -> Tuple[bool, bool]:
    """
    (x_decreasing, y_decreasing) for a rotated vector v = R x.

    v = 0 does not move; both flags are then False.
    """
    sx = Surd.coerce(v[0]).sign()
    sy = Surd.coerce(v[1]).sign()
    x_decreasing = sy > 0 or (sy == 0 and sx > 0)
    y_decreasing = sx < 0 or (sx == 0 and sy > 0)
    return x_decreasing, y_decreasing


def _round_toward(value: Surd, decreasing: bool) -> int:
    if is_half_integer(value):
        n = floor_surd(value)
        return n if decreasing else n + 1
    return round_half_up(value)


def digitize_after(angle, t, x) -> Tuple[int, int]:
    """
    Digitization of x just past the angle.

    Identical to digitize() unless a coordinate of U(x) sits exactly on a
    half-grid line; the tie then goes to the cell the point is entering.
    """
    tt = validate_translation(t)
    v = rotate(angle, x, tt)
    u = v + np.array(tt, dtype=object)
    if np.all(v == 0):
        return round_half_up(u[0]), round_half_up(u[1])
    x_decreasing, y_decreasing = motion_directions(v)
    return _round_toward(u[0], x_decreasing), _round_toward(u[1], y_decreasing)
