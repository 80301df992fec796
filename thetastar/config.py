import math

# Grid settings
# World units per grid cell; None means world coordinates are grid indices
DEFAULT_TILE_SIZE = None
# Raw cell value that marks a walkable cell; None means any nonzero value
DEFAULT_WALKABLE_VALUE = None

# Search settings
# Maximum number of node extractions per search; None disables the cap
MAX_SEARCH_ITERATIONS = None
# Neighbor deltas (dx, dy) in row-major order; fixes expansion order
NEIGHBOR_OFFSETS = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)

# Node state sentinels
# Cost of a node not yet reached by the current search
COST_UNKNOWN = math.inf
# Parent id of a node without a parent
NO_PARENT = -1

# Frontier membership states
STATE_NEW = 0
STATE_OPEN = 1
STATE_CLOSED = 2
