"""
Injectivity Scan for a Digitized Pythagorean Rigid Motion
=========================================================

QUESTION: Is the digitized rigid motion (rotation by the Pythagorean angle
of (p, q), translation t, rounding) injective on a finite point set, and
how far can the angle be increased before injectivity breaks?

INPUTS
------

  - p, q: generators of a primitive Pythagorean triple (gcd 1, p - q odd)
  - t: translation, two exact rationals ("1/3", "0.25", "2")
  - points: explicit list ("0,0 0,1 1,0") or an N x N block (--block N)

OUTPUTS
-------

  - Witnesses of non-injectivity at the base angle
  - With --range: status of the hinge sweep, the accepted hinge angles and
    the final upper bound, in exact form plus degrees for reading

EXAMPLE:
    python src/scripts/01_injectivity_scan.py --p 4 --q 1 --points "0,0 0,1 1,0 1,1"

    p=4 q=1 t=(0, 0)  base angle 61.927513 deg
    witnesses: (1, 0) (1, 1)

Decisions are exact; the degree values are printed for orientation only.
"""

import logging
import sys
from fractions import Fraction
from pathlib import Path


# Find src directory robustly (works from any location)
def _find_src():
    """Find src/ by looking for rigid_injectivity/ subdirectory."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # max 10 levels up
        if (current / 'rigid_injectivity').is_dir():
            return current
        candidate = current / 'src'
        if (candidate / 'rigid_injectivity').is_dir():
            return candidate
        current = current.parent
    raise RuntimeError("Cannot find src/rigid_injectivity directory")


sys.path.insert(0, str(_find_src()))

import numpy as np
from rigid_injectivity import HingeAngle, PythagoreanAngle, RigidMotionError
from rigid_injectivity.analysis import check_injectivity, check_injectivity_range
from rigid_injectivity.operators import angle_cos_sin
from rigid_injectivity.spec.constants import REPORT_DIGITS


def parse_point(text):
    """'x,y' -> (x, y)."""
    parts = text.split(',')
    if len(parts) != 2:
        raise ValueError(f"Point must look like 'x,y', got {text!r}")
    return int(parts[0]), int(parts[1])


def block(n):
    """N x N block of lattice points starting at the origin."""
    return [(i, j) for i in range(n) for j in range(n)]


def angle_degrees(angle, t):
    """Float degrees of an exact angle, for printing."""
    if isinstance(angle, PythagoreanAngle):
        return angle.approx_degrees()
    c, s = angle_cos_sin(angle, t)
    return float(np.degrees(np.arctan2(float(s), float(c))))


def describe(angle, t):
    if isinstance(angle, HingeAngle):
        label = f"hinge {angle.as_tuple()}"
    else:
        label = f"cos={angle.cos} sin={angle.sin}"
    return f"{label:<28} {angle_degrees(angle, t):.{REPORT_DIGITS}f} deg"


def run_scan(p, q, t, points, sweep=False):
    base = PythagoreanAngle.from_generators(p, q)

    print("=" * 60)
    print("INJECTIVITY SCAN")
    print("=" * 60)
    print(f"p={p} q={q} t=({t[0]}, {t[1]})  base angle {base.approx_degrees():.{REPORT_DIGITS}f} deg")
    print(f"points: {len(points)}")

    witnesses = check_injectivity(p, q, t, points)
    if witnesses:
        print("witnesses: " + " ".join(str(w) for w in sorted(witnesses)))
    else:
        print("witnesses: none (injective at base angle)")

    if not sweep:
        return witnesses

    result = check_injectivity_range(p, q, t, points)
    print(f"\n--- HINGE SWEEP ---")
    print(f"status: {result.status.value}")
    print(f"upper bound: {describe(result.upper, t)}")
    for i, h in enumerate(result.upper_history[:-1]):
        print(f"  upper[{i}]  {describe(h, t)}")
    print(f"accepted hinges: {len(result.hinges)}")
    for h in result.hinges:
        print(f"  {describe(h, t)}")
    return result


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Injectivity of a digitized Pythagorean rigid motion")
    parser.add_argument("--p", type=int, required=True, help="First triple generator")
    parser.add_argument("--q", type=int, required=True, help="Second triple generator")
    parser.add_argument("--t", type=Fraction, nargs=2, default=[Fraction(0), Fraction(0)],
                        metavar=("T1", "T2"), help="Translation (exact rationals)")
    parser.add_argument("--points", type=str, default="", help="Points as 'x,y x,y ...'")
    parser.add_argument("--block", type=int, default=0, help="Use an N x N block of points")
    parser.add_argument("--range", dest="sweep", action="store_true", help="Run the hinge-angle sweep")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    pts = [parse_point(s) for s in args.points.split()] if args.points else block(args.block)
    if not pts:
        parser.error("no points given (use --points or --block)")

    try:
        run_scan(args.p, args.q, tuple(args.t), pts, sweep=args.sweep)
    except RigidMotionError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)
