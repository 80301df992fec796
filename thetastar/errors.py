"""
Exceptions raised at the boundaries of the pathfinding package.

An unreachable target is not an error: ``ThetaStar.search`` returns ``None``.
"""


class ThetaStarError(Exception):
    """Base class for all pathfinding errors."""


class MalformedGridError(ThetaStarError, ValueError):
    """Raised when a grid is empty, ragged or not two-dimensional."""


class OutOfBoundsError(ThetaStarError, IndexError):
    """Raised when a search endpoint lies outside the grid."""

    def __init__(self, role: str, x: float, y: float) -> None:
        super().__init__(f"{role} ({x}, {y}) is outside the grid")
        self.role = role
        self.x = x
        self.y = y


class SearchLimitExceeded(ThetaStarError):
    """Raised when a search extracts more nodes than its iteration cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"search exceeded {limit} iterations")
        self.limit = limit
