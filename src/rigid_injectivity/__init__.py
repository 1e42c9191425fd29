"""
RIGID_INJECTIVITY - Injectivity of digitized Pythagorean rigid motions
======================================================================

Exact arithmetic only. NO floats in decisions. NO plotting.

Structure:
    spec/       - Constants, errors, input contract (angles, translations, point sets)
    operators/  - Exact surds, hinge model, rotation/remainder map, angle comparison
    builders/   - Non-injective regions, lattice neighbourhoods
    analysis/   - check_injectivity, closest_upper_hinge, check_injectivity_range

Reference:
    K. Pluta, P. Romon, Y. Kenmochi, N. Passat,
    "Bijective Digitized Rigid Motions on Subsets of the Plane",
    J. Math. Imaging Vis. (2017), doi:10.1007/s10851-017-0706-8
"""

from . import spec
from . import operators
from . import builders
from . import analysis

from .spec import HingeAngle, PythagoreanAngle, RigidMotionError
from .analysis import (
    check_injectivity,
    check_injectivity_range,
    closest_upper_hinge,
    RangeResult,
    RangeStatus,
)

__version__ = "1.1.0"
