"""Exception hierarchy for Penroute."""


class PenrouteError(Exception):
    """Base exception for all Penroute errors."""

    pass


class InvalidInputError(PenrouteError):
    """Malformed input such as NaN coordinates or an empty sampling grid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class GeometryError(PenrouteError):
    """Errors in geometric calculations."""

    pass


class EmptyPolygonError(GeometryError):
    """A polygon without any vertex has no bounding rectangle."""

    def __init__(self, context: str = "polygon") -> None:
        self.context = context
        super().__init__(f"Empty {context} has no bounding rectangle")


class TourError(PenrouteError):
    """A tour solver returned an ordering that is not a permutation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid tour: {reason}")


class CellProcessingError(PenrouteError):
    """Error sampling or routing a specific Voronoi cell."""

    def __init__(self, cell_index: int, reason: str) -> None:
        self.cell_index = cell_index
        self.reason = reason
        super().__init__(f"Error processing cell {cell_index}: {reason}")
