"""Territory computation services."""

from .boolean import intersect
from .normalizer import normalize
from .partition import build_partition
from .service import compute_territories, partition_cells

__all__ = [
    "build_partition",
    "intersect",
    "normalize",
    "compute_territories",
    "partition_cells",
]
