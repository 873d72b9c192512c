"""Region module: Box, Portal and Platform regions of the planning graph.

Each region is a closed sub-volume of the level. Box regions are the nodes the global
search walks over; Portal and Platform regions bridge two boxes and define how an agent
gets from one to the other.
"""
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Set, Tuple

from regionnav.exceptions import ConfigurationError
from regionnav.utils.vector import Vector
from regionnav.utils.volume import Volume


class RegionKind(Enum):
    """Variants of a region."""
    BOX = 'box'
    PORTAL = 'portal'
    PLATFORM = 'platform'


class BaseRegion(ABC):
    """Common part of every region: index, volume, neighbors and search scratch fields.

    Attributes:
        index: Stable index assigned when the graph is built.
        volume: Volume used for containment and distance queries.
        neighbors: Indices of the neighboring boxes; always empty for portals and platforms.
        cost: Best known cost of the running global search.
        parent: Predecessor in the running global search.
    """
    kind: RegionKind = None

    def __init__(self, index: int, volume: Volume, max_speed: float, name: str = None):
        """Initialize a region.

        Args:
            index: Region index.
            volume: Region volume.
            max_speed: Agent speed used to turn distances into traversal times.
            name: Optional display name; never used for wiring.
        """
        self.index = index
        self.volume = volume
        self.max_speed = max_speed
        self.name = name or f'{self.kind.value}_{index}'
        self.neighbors: Set[int] = set()

        self.cost = math.inf
        self.parent: Optional['BaseRegion'] = None

    def __repr__(self):
        """Return a readable representation of the region."""
        return f'{type(self).__name__}(index={self.index}, name={self.name}, center={self.center})'

    @property
    def center(self) -> Vector:
        """Center of the region volume."""
        return self.volume.center

    def contains(self, point: Vector) -> bool:
        """Check whether a point belongs to the region."""
        return self.volume.contains(point)

    def sqr_distance_to(self, point: Vector) -> float:
        """Squared distance from a point to the closest point of the region."""
        return self.volume.sqr_distance(point)

    def reset_search_state(self) -> None:
        """Clear the scratch fields before a new global search."""
        self.cost = math.inf
        self.parent = None

    def travel_time(self, source: Vector, target: Vector) -> float:
        """Time to walk in a straight line between two points at full speed."""
        return source.distance(target) / self.max_speed

    @abstractmethod
    def transfer_time(self, now: float, dest: 'BaseRegion') -> float:
        """Time to get from this region into ``dest``.

        Args:
            now: Simulation time at which the transfer starts.
            dest: Destination region.

        Returns:
            Traversal time in simulation time units.

        Raises:
            ConfigurationError: If no cost is defined for this pair of regions.
        """

    def _undefined_transfer(self, dest: 'BaseRegion') -> ConfigurationError:
        """Error raised by ``transfer_time`` for a pair of regions without a defined cost."""
        return ConfigurationError(
            f'Transfer time from {self.kind.value} region {self.index} '
            f'to {dest.kind.value} region {dest.index} is undefined'
        )


class BoxRegion(BaseRegion):
    """A box of navigable space; the nodes of the global search."""
    kind = RegionKind.BOX

    def __init__(self, index: int, volume: Volume, max_speed: float, name: str = None):
        """Initialize a box region."""
        super().__init__(index, volume, max_speed, name)
        # neighbor box index -> platform bridging to it
        self.platform_links: Dict[int, 'PlatformRegion'] = {}

    def transfer_time(self, now: float, dest: BaseRegion) -> float:
        """Center-to-center walking time, plus the platform ride when a platform links the boxes."""
        if dest.kind is RegionKind.BOX:
            platform = self.platform_links.get(dest.index)
            if platform is not None:
                return self.travel_time(self.center, platform.center) + platform.transfer_time(now, dest)
            return self.travel_time(self.center, dest.center)
        raise self._undefined_transfer(dest)


class PortalRegion(BaseRegion):
    """A static zero-cost bridge between two box regions."""
    kind = RegionKind.PORTAL

    def __init__(self, index: int, volume: Volume, max_speed: float, between: Tuple[int, int], name: str = None):
        """Initialize a portal region.

        Args:
            between: The two box indices the portal bridges; their order carries no meaning.
        """
        super().__init__(index, volume, max_speed, name)
        self.between = frozenset(between)

    def bridges(self, a: int, b: int) -> bool:
        """Check whether the portal links boxes ``a`` and ``b``."""
        return self.between == frozenset((a, b))

    def entry_point(self, source_index: int) -> Vector:
        """Point the agent walks to before crossing; the same from both sides."""
        return self.center

    def transfer_time(self, now: float, dest: BaseRegion) -> float:
        """The portal adds no cost: time from its center into one of its bridged boxes."""
        if dest.kind is RegionKind.BOX and dest.index in self.between:
            return self.travel_time(self.center, dest.center)
        raise self._undefined_transfer(dest)


class PlatformRegion(BaseRegion):
    """A platform rotating around a fixed center, carrying the agent between two boxes.

    The platform turns by ``rotation_speed`` degrees per second about the vertical axis
    through ``rotation_center``. ``anchor`` is its physical reference point at ``phase_time``.
    """
    kind = RegionKind.PLATFORM

    def __init__(
        self,
        index: int,
        volume: Volume,
        max_speed: float,
        from_region: BoxRegion,
        to_region: BoxRegion,
        rotation_center: Vector,
        rotation_speed: float,
        rotation_radius: float,
        anchor: Vector = None,
        phase_time: float = 0.0,
        reference_speed: float = 40.0,
        crossing_factor: float = 5.0,
        name: str = None,
    ):
        """Initialize a platform region.

        Args:
            from_region: Box the platform departs from.
            to_region: Box the platform arrives at.
            rotation_center: Center of the circular motion.
            rotation_speed: Angular speed, degrees per second.
            rotation_radius: Radius of the circular motion.
            anchor: Physical reference point at ``phase_time``; defaults to the volume center.
            phase_time: Clock value at which the platform occupied ``anchor``.
            reference_speed: Crossing calibration constant.
            crossing_factor: Crossing calibration multiplier.
        """
        super().__init__(index, volume, max_speed, name)
        if from_region.kind is not RegionKind.BOX or to_region.kind is not RegionKind.BOX:
            raise ConfigurationError(f'Platform {index} must link two box regions')
        self.from_region = from_region
        self.to_region = to_region
        self.rotation_center = rotation_center
        self.rotation_speed = rotation_speed
        self.rotation_radius = rotation_radius
        self.anchor = anchor if anchor is not None else volume.center
        self.phase_time = phase_time
        self.reference_speed = reference_speed
        self.crossing_factor = crossing_factor

    @property
    def between(self) -> frozenset:
        """Indices of the two boxes the platform links."""
        return frozenset((self.from_region.index, self.to_region.index))

    def bridges(self, a: int, b: int) -> bool:
        """Check whether the platform links boxes ``a`` and ``b``, in either orientation."""
        return self.between == frozenset((a, b))

    def crossing_duration(self) -> float:
        """Time spent riding the platform; inversely proportional to its angular speed.

        Raises:
            ConfigurationError: If the platform does not move.
        """
        if self.rotation_speed <= 0:
            raise ConfigurationError(f'Platform {self.index} has non-positive rotation speed {self.rotation_speed}')
        return self.crossing_factor * (self.reference_speed / self.rotation_speed)

    def rotated_point(self, point: Vector, time_delta: float) -> Vector:
        """Rotate a point backwards around the platform axis by ``time_delta`` seconds of motion."""
        offset = point - self.rotation_center
        return self.rotation_center + offset.rotate_about_up(-self.rotation_speed * time_delta)

    def rotated_heading(self, heading: Vector, time_delta: float) -> Vector:
        """Rotate a heading backwards by ``time_delta`` seconds of platform motion."""
        return heading.rotate_about_up(-self.rotation_speed * time_delta)

    def anchor_at(self, time: float) -> Vector:
        """Position of the anchor point at simulation time ``time``."""
        offset = self.anchor - self.rotation_center
        return self.rotation_center + offset.rotate_about_up(self.rotation_speed * (time - self.phase_time))

    def entry_point(self, source_index: int) -> Vector:
        """Boarding point: the point of the source box closest to the platform anchor."""
        source = self.from_region if source_index == self.from_region.index else self.to_region
        return source.volume.closest_point(self.anchor)

    def transfer_time(self, now: float, dest: BaseRegion) -> float:
        """Ride duration plus the walk from the platform center into the destination box."""
        if dest.kind is RegionKind.BOX and dest.index in self.between:
            return self.crossing_duration() + self.travel_time(self.center, dest.center)
        raise self._undefined_transfer(dest)
