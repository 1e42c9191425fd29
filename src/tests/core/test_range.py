"""
Tests for the injectivity range sweep
=====================================

check_injectivity_range(p, q, t, points): walk hinge angles above the
Pythagorean angle, accept those that keep the set injective, and shrink
the upper bound at the first one that does not.

Reference case (3, 2), t = 0, base ~22.6 deg:
    (0, 1) and (1, 1) meet AT (0,1,-1,0) = 30 deg and just AFTER
    (1,1,0,0) ~ 24.3 deg, so the bound ends at (1,1,0,0).

Run: python -m pytest tests/core/test_range.py -v
"""

import logging
import sys
import os
from fractions import Fraction

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from rigid_injectivity import RangeStatus, check_injectivity_range
from rigid_injectivity.analysis import SearchBracket, reduce_hinge_set
from rigid_injectivity.analysis.injectivity import find_colliding_pairs, find_collisions_after
from rigid_injectivity.operators import angle_cos_sin, angle_order
from rigid_injectivity.spec import (
    BRACKET_LOWER_TRIPLE,
    BRACKET_UPPER_TRIPLE,
    ROOT_MINUS,
    HingeAngle,
    PythagoreanAngle,
    as_angle,
)

T0 = (0, 0)


# =============================================================================
# R1: Known results
# =============================================================================

def test_boundary_found():
    """R1.1: Upper bound 43.6 -> 30 -> 24.3 deg."""
    result = check_injectivity_range(3, 2, T0, [(0, 1), (1, 1)])
    assert result.status is RangeStatus.BOUNDARY_FOUND
    assert result.injective_at_base
    assert result.upper == HingeAngle(1, 1, 0, 0)
    assert result.hinges == []
    assert result.upper_history == [
        as_angle(BRACKET_UPPER_TRIPLE),
        HingeAngle(0, 1, -1, 0),
        HingeAngle(1, 1, 0, 0),
    ]
    assert result.base == PythagoreanAngle.from_generators(3, 2)
    assert result.lower == as_angle(BRACKET_LOWER_TRIPLE)


def test_boundary_found_left_of_centre():
    """R1.1b: Both bounds sit on the lower root: y = -1/2 and y = 1/2 crossed going down."""
    result = check_injectivity_range(3, 2, T0, [(-1, 0), (-1, 1)])
    assert result.status is RangeStatus.BOUNDARY_FOUND
    assert result.upper == HingeAngle(-1, 1, 0, 1, ROOT_MINUS)
    assert result.upper_history == [
        as_angle(BRACKET_UPPER_TRIPLE),
        HingeAngle(-1, 0, -1, 1, ROOT_MINUS),
        HingeAngle(-1, 1, 0, 1, ROOT_MINUS),
    ]
    assert _degrees(result.upper, T0) == pytest.approx(24.295, abs=0.01)


def test_order_dependence():
    """R1.2: Same final bound, shorter history when (1,1) goes first."""
    result = check_injectivity_range(3, 2, T0, [(1, 1), (0, 1)])
    assert result.status is RangeStatus.BOUNDARY_FOUND
    assert result.upper == HingeAngle(1, 1, 0, 0)
    assert len(result.upper_history) == 2


def test_no_boundary_lone_point():
    """R1.3: A lone point never collides; 30 deg is accepted, 60 deg is past the bracket."""
    result = check_injectivity_range(3, 2, T0, [(1, 0)])
    assert result.status is RangeStatus.NO_BOUNDARY_IN_BRACKET
    assert result.hinges == [HingeAngle(1, 0, 0, 1)]
    assert result.upper == as_angle(BRACKET_UPPER_TRIPLE)
    assert len(result.upper_history) == 1


def test_origin_only():
    """R1.4: The origin has no hinges."""
    result = check_injectivity_range(3, 2, T0, [(0, 0)])
    assert result.status is RangeStatus.NO_BOUNDARY_IN_BRACKET
    assert result.hinges == []


def test_non_injective_at_base():
    """R1.5: (4,1) already merges (1,0) and (1,1)."""
    result = check_injectivity_range(4, 1, T0, [(1, 0), (1, 1)])
    assert result.status is RangeStatus.NON_INJECTIVE_AT_BASE
    assert not result.injective_at_base
    assert result.witnesses == [((1, 0), (1, 1))]
    assert result.hinges == []


def test_custom_upper_bound():
    """R1.6: Hinges on the bound itself are not inside the open bracket."""
    result = check_injectivity_range(3, 2, T0, [(1, 0)], upper=HingeAngle(1, 0, 0, 1))
    assert result.status is RangeStatus.NO_BOUNDARY_IN_BRACKET
    assert result.hinges == []
    assert result.upper == HingeAngle(1, 0, 0, 1)


def test_empty_point_set():
    """R1.7: Nothing to sweep."""
    result = check_injectivity_range(3, 2, T0, [])
    assert result.status is RangeStatus.NO_BOUNDARY_IN_BRACKET
    assert result.upper_history == [as_angle(BRACKET_UPPER_TRIPLE)]


def test_sweep_logs_decisions(caplog):
    """R1.8: Accept / tighten decisions go to the debug log."""
    with caplog.at_level(logging.DEBUG, logger="rigid_injectivity"):
        check_injectivity_range(3, 2, T0, [(1, 0)])
        check_injectivity_range(3, 2, T0, [(0, 1), (1, 1)])
    messages = [r.getMessage() for r in caplog.records]
    assert any("accepted" in m for m in messages)
    assert any("tightening" in m for m in messages)


# =============================================================================
# R2: Search bracket
# =============================================================================

def test_bracket_contains_is_open():
    """R2.1: lower < angle < upper, endpoints excluded."""
    b = SearchBracket(BRACKET_LOWER_TRIPLE, BRACKET_UPPER_TRIPLE, T0)
    assert b.contains(HingeAngle(1, 1, 0, 0))
    assert b.contains(HingeAngle(1, 0, 0, 1))
    assert not b.contains(HingeAngle(1, 0, 0, 0))
    assert not b.contains(as_angle(BRACKET_LOWER_TRIPLE))
    assert not b.contains(as_angle(BRACKET_UPPER_TRIPLE))


def test_bracket_tighten_only_decreases():
    """R2.2: Tightening records history and refuses to widen."""
    b = SearchBracket(BRACKET_LOWER_TRIPLE, BRACKET_UPPER_TRIPLE, T0)
    assert not b.tightened
    b.tighten(HingeAngle(1, 0, 0, 1))
    assert b.tightened
    assert b.upper == HingeAngle(1, 0, 0, 1)
    with pytest.raises(ValueError, match="widen"):
        b.tighten(HingeAngle(1, 0, 0, 0))
    assert len(b.history) == 2


def test_bracket_must_be_nonempty():
    """R2.3: lower must be below upper."""
    with pytest.raises(ValueError, match="Empty bracket"):
        SearchBracket(BRACKET_UPPER_TRIPLE, BRACKET_LOWER_TRIPLE, T0)


def test_reduce_hinge_set():
    """R2.4: Keep angles strictly inside, in order."""
    hinges = [HingeAngle(1, 0, 0, 1), HingeAngle(1, 1, 0, 0), HingeAngle(1, 0, 0, 0)]
    kept = reduce_hinge_set(hinges, BRACKET_LOWER_TRIPLE, HingeAngle(1, 0, 0, 1), T0)
    assert kept == [HingeAngle(1, 1, 0, 0)]


# =============================================================================
# R3: Invariants over small blocks
# =============================================================================

CASES = [
    (3, 2, (0, 0)),
    (3, 2, (Fraction(1, 3), Fraction(1, 4))),
    (4, 3, (0, 0)),
    (4, 3, (Fraction(1, 5), Fraction(-2, 5))),
    (5, 4, (Fraction(1, 2), Fraction(1, 3))),
    (2, 1, (0, 0)),
    (3, 2, (Fraction(-1, 3), Fraction(-3, 7))),
]


def _block(n, start=0):
    return [(i, j) for i in range(start, start + n) for j in range(start, start + n)]


@pytest.mark.parametrize("start", [0, -1])
@pytest.mark.parametrize("p, q, t", CASES)
def test_range_invariants(p, q, t, start):
    """R3.1: Bounds only shrink, accepted hinges lie inside and above the base."""
    result = check_injectivity_range(p, q, t, _block(3, start))
    base = result.base

    if result.status is RangeStatus.NON_INJECTIVE_AT_BASE:
        assert result.witnesses
        assert find_colliding_pairs(base, t, _block(3, start))
        return

    history = result.upper_history
    assert history[0] == as_angle(BRACKET_UPPER_TRIPLE)
    assert history[-1] == result.upper
    for a, b in zip(history, history[1:]):
        assert angle_order(b, a, t) < 0
    assert (result.status is RangeStatus.BOUNDARY_FOUND) == (len(history) > 1)

    for h in result.hinges:
        assert angle_order(base, h, t) < 0
        assert angle_order(h, result.upper, t) < 0
        assert angle_order(result.lower, h, t) < 0


@pytest.mark.parametrize("start", [0, -1])
@pytest.mark.parametrize("p, q, t", CASES)
def test_tightened_bounds_are_real_collisions(p, q, t, start):
    """R3.2: Every hinge the bound moved to breaks injectivity at or just past it."""
    pts = _block(3, start)
    result = check_injectivity_range(p, q, t, pts)
    for h in result.upper_history[1:]:
        assert find_colliding_pairs(h, t, pts) or find_collisions_after(h, t, pts)


@pytest.mark.parametrize("start", [0, -1])
@pytest.mark.parametrize("p, q, t", CASES)
def test_accepted_hinges_keep_injectivity(p, q, t, start):
    """R3.3: Accepted hinges were checked on the neighbourhood of their point."""
    pts = _block(3, start)
    result = check_injectivity_range(p, q, t, pts)
    for h in result.hinges:
        assert h.point in pts


# =============================================================================
# R4: Cross-check against a float angle scan
# =============================================================================

def _degrees(angle, t):
    c, s = angle_cos_sin(angle, t)
    return float(np.degrees(np.arctan2(float(s), float(c))))


def _float_collision_angles(points, t, thetas):
    """Sampled angles at which two points share a rounded image (halves round up)."""
    pts = np.array(points, dtype=float)
    shift = np.array([float(t[0]), float(t[1])])
    hits = []
    for theta in thetas:
        c, s = np.cos(theta), np.sin(theta)
        u = pts.dot(np.array([[c, s], [-s, c]])) + shift
        cells = np.floor(u + 0.5)
        if len(np.unique(cells, axis=0)) < len(points):
            hits.append(theta)
    return hits


SCAN_SETS = [
    [(-1, 0), (-1, 1)],
    [(0, 1), (1, 1)],
    [(1, -1), (1, 0), (0, -1)],
    _block(3, start=-1),
    _block(2, start=-2),
]


@pytest.mark.parametrize("points", SCAN_SETS)
@pytest.mark.parametrize("t", [(0, 0), (Fraction(1, 3), Fraction(1, 4))])
def test_no_float_collision_below_the_bound(points, t):
    """R4.1: Strictly between base and the final bound no sampled angle collides."""
    result = check_injectivity_range(3, 2, t, points)
    if result.status is RangeStatus.NON_INJECTIVE_AT_BASE:
        assert _float_collision_angles(points, t, [np.radians(_degrees(result.base, t))])
        return
    lo = np.radians(_degrees(result.base, t))
    hi = np.radians(_degrees(result.upper, t))
    thetas = np.linspace(lo, hi, 4001)[1:-1]
    assert _float_collision_angles(points, t, thetas) == []


def test_float_collision_just_past_the_bound():
    """R4.2: (-1,0), (-1,1) collide right after ~24.3 deg, as the exact bound says."""
    points = [(-1, 0), (-1, 1)]
    result = check_injectivity_range(3, 2, T0, points)
    hi = np.radians(_degrees(result.upper, T0))
    thetas = np.linspace(hi, hi + np.radians(0.1), 201)[1:]
    hits = _float_collision_angles(points, T0, thetas)
    assert hits
    assert np.degrees(hits[0]) == pytest.approx(24.295, abs=0.01)
