"""Path node module: a pose of the local search and of the delivered path."""
from typing import Optional, Tuple, Union

from regionnav.utils.vector import Vector

MAX_EXCURSION_COUNT = 255


class PathNode:
    """A timed pose: position, heading and the links the local search needs.

    Attributes:
        position: Position of the agent.
        direction: Unit heading on the ``x``/``z`` plane.
        time_moment: Time elapsed since the start of the path.
        region_index: Explicit region override; when set, region resolution
            returns this region without a containment test.
        excursion: Generations spent outside the start region.
        cost: Elapsed planning time ``g`` of the local search.
        parent: Previous node of the path.
    """

    def __init__(self, position: Vector, direction: Vector, time_moment: float = 0.0,
                 parent: 'PathNode' = None, region_index: int = None):
        """Initialize a path node."""
        self.position = Vector(position)
        self.direction = Vector(direction)
        self.time_moment = time_moment
        self.parent: Optional[PathNode] = parent
        self.region_index = region_index
        self.excursion = 0
        self.cost = 0.0

    def __repr__(self):
        """Return a readable representation of the node."""
        region = f', region={self.region_index}' if self.region_index is not None else ''
        return f'PathNode(position={self.position}, direction={self.direction}, t={self.time_moment:.2f}{region})'

    def distance(self, other: Union['PathNode', Vector]) -> float:
        """Euclidean distance to another node or point."""
        target = other.position if isinstance(other, PathNode) else other
        return self.position.distance(target)

    def spawn_child(self, step_length: float, steering_angle: float, time_delta: float) -> 'PathNode':
        """Turn by ``steering_angle`` degrees, then move ``step_length`` along the new heading."""
        heading = self.direction.rotate_about_up(steering_angle)
        return PathNode(self.position + heading * step_length, heading, self.time_moment + time_delta, parent=self)

    def to_grid(self, delta_dist: float) -> Tuple[int, int, int, int]:
        """Quantize the planar position and heading for duplicate detection."""
        return (
            int(round(self.position.x / delta_dist)),
            int(round(self.position.z / delta_dist)),
            int(round(self.direction.x / delta_dist)),
            int(round(self.direction.z / delta_dist)),
        )

    def increment_excursion(self, parent_excursion: int) -> None:
        """Count one more generation outside the start region, saturating at 255."""
        self.excursion = min(parent_excursion + 1, MAX_EXCURSION_COUNT)

    def copy(self, parent: 'PathNode' = None, region_index: int = None) -> 'PathNode':
        """Same pose with new links."""
        return PathNode(self.position, self.direction, self.time_moment, parent=parent, region_index=region_index)
