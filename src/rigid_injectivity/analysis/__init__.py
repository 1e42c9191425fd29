"""
Analysis functions - depend on operators and builders layers.

Includes:
- injectivity: region test and check_injectivity at a fixed angle
- search: closest upper hinge angle of a point
- injectivity_range: hinge-angle sweep (check_injectivity_range)
"""

from .injectivity import (
    region_violations,
    find_colliding_pairs,
    find_collisions_after,
    colliding_pairs,
    check_injectivity,
)
from .search import hinge_candidates, closest_upper_hinge
from .injectivity_range import (
    RangeStatus,
    RangeResult,
    SearchBracket,
    reduce_hinge_set,
    check_injectivity_range,
)
