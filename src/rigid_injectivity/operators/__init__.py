"""Exact operators - surds, hinge model, rotation/remainder map, angle comparison."""

from .surds import (
    Surd,
    compare_surds,
    floor_surd,
    round_half_up,
    is_half_integer,
    square_free_decomposition,
)

from .hinge import (
    HingeCheck,
    check_hinge,
    validate_hinge,
    hinge_offset,
    hinge_radicand,
    hinge_cosine,
    hinge_sine,
)

from .rotation import (
    angle_cos_sin,
    rotation_matrix,
    rotate,
    rigid_image,
    digitize,
    digitize_after,
    remainder_map,
    motion_directions,
)

from .compare import (
    angle_order,
    compare_hinge_to_pythagorean,
    compare_hinge_to_hinge,
    compare_angles,
)
