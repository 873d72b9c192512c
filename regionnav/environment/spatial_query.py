"""Spatial query interface: the read-only view of the physical world used by the planners."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Set

from regionnav.utils.vector import Vector
from regionnav.utils.volume import Volume


@dataclass(frozen=True)
class TaggedVolume:
    """A volume of the world carrying a tag such as ``Ground``, ``Box`` or ``Portal``."""
    tag: str
    volume: Volume
    name: str = None


@dataclass(frozen=True)
class Hit:
    """Result of a segment cast against one volume.

    Attributes:
        distance: Distance from the cast origin to the entry point.
        point: Entry point.
        target: The volume that was hit.
    """
    distance: float
    point: Vector
    target: TaggedVolume

    @property
    def tag(self) -> str:
        """Tag of the volume that was hit."""
        return self.target.tag

    @property
    def volume(self) -> Volume:
        """Geometry of the volume that was hit."""
        return self.target.volume


class SpatialQuery(ABC):
    """Collision and ground-contact queries the planners depend on.

    Implementations must be read-only and re-entrant: queries may run on the planning
    worker thread while the host keeps reading the same world.
    """

    @abstractmethod
    def contains(self, point: Vector) -> bool:
        """Check whether any volume of the world contains ``point``."""

    @abstractmethod
    def overlap(self, point: Vector, radius: float) -> Set[TaggedVolume]:
        """Volumes overlapping the sphere of ``radius`` around ``point``."""

    @abstractmethod
    def ground_probe(self, point: Vector) -> bool:
        """Check whether there is ground directly beneath ``point`` within the probe distance."""

    @abstractmethod
    def segment_cast(self, origin: Vector, direction: Vector, max_distance: float) -> List[Hit]:
        """Volumes hit by a segment, sorted by distance from ``origin``."""

    def is_walkable(self, point: Vector, agent_radius: float, obstacle_tag: str) -> bool:
        """Ground support beneath the point and no obstacle within the agent radius."""
        if not self.ground_probe(point):
            return False
        return not any(hit.tag == obstacle_tag for hit in self.overlap(point, agent_radius))
