"""
Rigid Injectivity Source Code
=============================

Exact decision procedures for digitized rigid motions of Z^2: rotate by a
Pythagorean or hinge angle, translate by a rational vector, round to the
lattice, and ask whether two points of a finite set land in the same cell.

Modules:
    rigid_injectivity - surd arithmetic, hinge angles, injectivity checks,
                        the hinge-angle sweep over a search bracket
    scripts           - command line scans (01_injectivity_scan.py)
    tests             - pytest suite, tests/core

Requirements:
    Python >= 3.9      dataclasses with defaults, typing generics
    numpy >= 1.20      rotation matrices are object arrays of exact Surd
                       entries; .dot() must keep them exact

Every angle decision uses fractions and Surd comparisons. Floats appear
only as the starting guess of a floor and in printed degrees.
"""

import sys

if sys.version_info < (3, 9):
    raise ImportError(f"rigid_injectivity requires Python >= 3.9, got {sys.version}")

# object-array dot products of exact surds
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"rigid_injectivity requires numpy >= 1.20, got {np.__version__}")
