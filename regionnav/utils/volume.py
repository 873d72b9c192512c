"""Axis-aligned box volumes used for regions and for the in-memory spatial world."""
import math
from dataclasses import dataclass
from typing import Optional

from regionnav.utils.vector import Vector


@dataclass(frozen=True, eq=True)
class Volume:
    """An axis-aligned box given by its center and full size.

    Containment is inclusive of the faces, like engine collider bounds.
    """
    center: Vector
    size: Vector

    def __hash__(self):
        """Return the hash value of the volume."""
        return hash((self.center, self.size))

    @property
    def min(self) -> Vector:
        """Lowest corner of the box."""
        return self.center - self.size / 2

    @property
    def max(self) -> Vector:
        """Highest corner of the box."""
        return self.center + self.size / 2

    @property
    def extents(self) -> Vector:
        """Half size of the box."""
        return self.size / 2

    def contains(self, point: Vector) -> bool:
        """Check whether a point lies inside the box or on its faces."""
        lo, hi = self.min, self.max
        return (lo.x <= point.x <= hi.x and
                lo.y <= point.y <= hi.y and
                lo.z <= point.z <= hi.z)

    def closest_point(self, point: Vector) -> Vector:
        """Return the point of the box closest to ``point`` (the point itself when inside)."""
        lo, hi = self.min, self.max
        return Vector(
            min(max(point.x, lo.x), hi.x),
            min(max(point.y, lo.y), hi.y),
            min(max(point.z, lo.z), hi.z),
        )

    def sqr_distance(self, point: Vector) -> float:
        """Squared distance from a point to the box, zero when the point is inside."""
        return self.closest_point(point).sqr_distance(point)

    def intersects_sphere(self, center: Vector, radius: float) -> bool:
        """Check whether a sphere overlaps the box."""
        return self.sqr_distance(center) <= radius * radius

    def ray_intersection(self, origin: Vector, direction: Vector, max_distance: float) -> Optional[float]:
        """Distance along a ray at which it enters the box (slab method).

        Args:
            origin: Start of the ray.
            direction: Direction of the ray; normalized internally.
            max_distance: Length of the ray.

        Returns:
            Entry distance in ``[0, max_distance]``, ``0`` if the origin is inside,
            or None if the ray misses the box within its length.
        """
        unit = direction.normalize()
        if unit == Vector.zero():
            return 0.0 if self.contains(origin) else None

        t_near, t_far = 0.0, max_distance
        lo, hi = self.min, self.max
        for o, d, a, b in ((origin.x, unit.x, lo.x, hi.x),
                           (origin.y, unit.y, lo.y, hi.y),
                           (origin.z, unit.z, lo.z, hi.z)):
            if abs(d) < 1e-9:
                if o < a or o > b:
                    return None
                continue
            t1 = (a - o) / d
            t2 = (b - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        return t_near if not math.isinf(t_near) else None

    def to_dict(self):
        """Convert the volume to dictionary representation."""
        return {
            'center': list(self.center.to_tuple()),
            'size': list(self.size.to_tuple()),
        }
