"""Static constructions - non-injective regions and lattice neighbourhoods."""

from .regions import Rectangle, non_injective_region
from .lattice import four_neighborhood
