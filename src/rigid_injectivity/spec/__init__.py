"""Input contract, constants and error taxonomy."""

from .constants import (
    HALF,
    AXIS_X,
    AXIS_Y,
    ROOT_PLUS,
    ROOT_MINUS,
    REGION_UP,
    REGION_RIGHT,
    REGION_DOWN,
    REGION_LEFT,
    REGION_INDICES,
    REGION_NEIGHBOR,
    NEIGHBOR_OFFSETS,
    ANGLES_EQUAL,
    SECOND_GREATER,
    SECOND_NOT_GREATER,
    BRACKET_LOWER_TRIPLE,
    BRACKET_UPPER_TRIPLE,
)
from .errors import (
    RigidMotionError,
    InvalidTripleGenerators,
    InvalidTranslation,
    InvalidPointSet,
    InvalidAngle,
    InvalidHingeAngle,
    NoValidHinge,
    PointNotInSet,
)
from .structures import (
    Point,
    Translation,
    PythagoreanAngle,
    HingeAngle,
    Angle,
    as_angle,
    validate_generators,
    validate_translation,
    validate_point,
    validate_point_set,
)
