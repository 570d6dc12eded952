"""Bounding-box filtering for itinerary queries.

An itinerary is approximated by the axis-aligned rectangle spanned by the two
endpoint coordinates. Stations away from the direct path but inside the
rectangle are kept.
"""

from dataclasses import dataclass

from prix_carburants.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in latitude/longitude space."""

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @classmethod
    def from_corners(cls, start: Coordinate, end: Coordinate) -> "BoundingBox":
        """Build the box spanned by two opposite corners, in any order."""
        return cls(
            min_latitude=min(start.latitude, end.latitude),
            max_latitude=max(start.latitude, end.latitude),
            min_longitude=min(start.longitude, end.longitude),
            max_longitude=max(start.longitude, end.longitude),
        )

    def contains(self, point: Coordinate) -> bool:
        """Check whether the point lies inside the box, edges included."""
        return (
            self.min_latitude <= point.latitude <= self.max_latitude
            and self.min_longitude <= point.longitude <= self.max_longitude
        )


def is_within(start: Coordinate, end: Coordinate, point: Coordinate) -> bool:
    """Check whether point lies in the bounding box between start and end."""
    return BoundingBox.from_corners(start, end).contains(point)
