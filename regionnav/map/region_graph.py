"""Region graph module: the level decomposed into regions and the adjacency between them."""
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple, Union

from regionnav.config import Config
from regionnav.exceptions import ConfigurationError
from regionnav.map.level_data import LevelData
from regionnav.map.region import BaseRegion, BoxRegion, PlatformRegion, PortalRegion, RegionKind
from regionnav.map.rendezvous import Rendezvous, compute_rendezvous
from regionnav.utils.logger import Logger
from regionnav.utils.vector import Vector


class RegionGraph:
    """Regions of a level and the links between box regions.

    Regions are indexed in build order: boxes first (their index equals their position
    in the level file), then portals, then platforms. Every portal or platform makes the
    two boxes it bridges neighbors of each other; the bridges themselves have no neighbors.

    Attributes:
        regions: All regions, indexed by ``region.index``.
        finish_point: Goal point authored in the level, if any.
    """

    def __init__(self, config: Config = None):
        """Initialize an empty graph.

        Args:
            config: Configuration providing the movement speed and rendezvous constants.
        """
        self.config = config or Config()
        self.logger = Logger.get_logger('RegionGraph')
        self.regions: List[BaseRegion] = []
        self.finish_point: Optional[Vector] = None
        self._portals: Dict[FrozenSet[int], PortalRegion] = {}
        self._platforms: Dict[FrozenSet[int], PlatformRegion] = {}

    def __len__(self):
        """Number of regions."""
        return len(self.regions)

    def __iter__(self) -> Iterator[BaseRegion]:
        """Iterate over all regions in index order."""
        return iter(self.regions)

    def __str__(self):
        """Return a summary of the graph."""
        boxes = sum(1 for region in self.regions if region.kind is RegionKind.BOX)
        return f'RegionGraph with {boxes} boxes, {len(self._portals)} portals and {len(self._platforms)} platforms'

    @classmethod
    def from_level(cls, level: LevelData, config: Config = None) -> 'RegionGraph':
        """Build a graph from validated level data."""
        graph = cls(config)
        graph.build(level)
        return graph

    @classmethod
    def from_json_file(cls, file_path: str, config: Config = None) -> 'RegionGraph':
        """Build a graph from a level file."""
        return cls.from_level(LevelData.from_json_file(file_path), config)

    def build(self, level: LevelData) -> None:
        """Create the regions of a level and wire their adjacency.

        Args:
            level: Validated level data.

        Raises:
            ConfigurationError: If the graph was already built.
        """
        if self.regions:
            raise ConfigurationError('Region graph is already built')

        max_speed = float(self.config['movement.max_speed'])
        for box in level.boxes:
            self.regions.append(BoxRegion(len(self.regions), box.to_volume(), max_speed, box.name))

        for portal in level.portals:
            region = PortalRegion(len(self.regions), portal.to_volume(), max_speed, portal.between, portal.name)
            self.regions.append(region)
            self._link(*portal.between)
            self._portals.setdefault(region.between, region)

        reference_speed = float(self.config['rendezvous.reference_speed'])
        crossing_factor = float(self.config['rendezvous.crossing_factor'])
        for platform in level.platforms:
            source, target = (self.regions[i] for i in platform.between)
            region = PlatformRegion(
                len(self.regions),
                platform.to_volume(),
                max_speed,
                from_region=source,
                to_region=target,
                rotation_center=Vector(platform.rotation_center),
                rotation_speed=platform.rotation_speed,
                rotation_radius=platform.rotation_radius,
                anchor=platform.anchor_point(),
                phase_time=platform.phase_time,
                reference_speed=reference_speed,
                crossing_factor=crossing_factor,
                name=platform.name,
            )
            self.regions.append(region)
            self._link(*platform.between)
            self._platforms.setdefault(region.between, region)
            source.platform_links.setdefault(target.index, region)
            target.platform_links.setdefault(source.index, region)

        self.finish_point = Vector(level.finish_point)
        self.logger.info(str(self))

    def _link(self, a: int, b: int) -> None:
        # bridges keep no neighbors of their own; their boxes are in `between`
        self.regions[a].neighbors.add(b)
        self.regions[b].neighbors.add(a)

    def region_by_index(self, index: int) -> Optional[BaseRegion]:
        """Get a region by index.

        Returns:
            The region, or None if the index is out of range.
        """
        if 0 <= index < len(self.regions):
            return self.regions[index]
        return None

    def box_regions(self) -> List[BoxRegion]:
        """All box regions in index order."""
        return [region for region in self.regions if region.kind is RegionKind.BOX]

    def neighbors_of(self, region: BaseRegion) -> List[BaseRegion]:
        """Neighbor regions of a region, sorted by index."""
        return [self.regions[i] for i in sorted(region.neighbors)]

    def region_containing(self, point: Vector, explicit_override: int = None) -> Optional[BaseRegion]:
        """Resolve the box region a point belongs to.

        Args:
            point: Query point.
            explicit_override: Box index attached to the point; when set it is used
                directly, without any containment test.

        Returns:
            The override box, else the first box containing the point, else None.
            An override that names no box gives None.
        """
        if explicit_override is not None:
            region = self.region_by_index(explicit_override)
            if region is None or region.kind is not RegionKind.BOX:
                return None
            return region
        for region in self.regions:
            if region.kind is RegionKind.BOX and region.contains(point):
                return region
        return None

    def nearest_region(self, point: Vector) -> Tuple[Optional[BoxRegion], float]:
        """Closest box region to a point and its distance, for diagnostics."""
        best, best_sqr = None, float('inf')
        for region in self.box_regions():
            sqr = region.sqr_distance_to(point)
            if sqr < best_sqr:
                best, best_sqr = region, sqr
        return best, best_sqr ** 0.5

    def _index_of(self, region: Union[BaseRegion, int]) -> int:
        return region if isinstance(region, int) else region.index

    def is_platform_between(self, a: Union[BaseRegion, int], b: Union[BaseRegion, int]) -> bool:
        """Check whether a platform links two boxes, in either orientation."""
        return self.platform_between(a, b) is not None

    def platform_between(self, a: Union[BaseRegion, int], b: Union[BaseRegion, int]) -> Optional[PlatformRegion]:
        """Platform linking two boxes, if any."""
        return self._platforms.get(frozenset((self._index_of(a), self._index_of(b))))

    def portal_between(self, a: Union[BaseRegion, int], b: Union[BaseRegion, int]) -> Optional[PortalRegion]:
        """Portal linking two boxes, if any."""
        return self._portals.get(frozenset((self._index_of(a), self._index_of(b))))

    def bridge_between(self, a: Union[BaseRegion, int], b: Union[BaseRegion, int]) -> Optional[BaseRegion]:
        """Region to walk into when going from box ``a`` to box ``b``: the portal if one exists, else the platform."""
        portal = self.portal_between(a, b)
        if portal is not None:
            return portal
        return self.platform_between(a, b)

    def platform_into(self, target: Union[BaseRegion, int], source: Union[BaseRegion, int] = None) -> PlatformRegion:
        """Platform carrying the agent into box ``target``.

        Args:
            target: Box the agent lands in.
            source: Box the agent boards from. When given, the platform linking the two
                boxes is used whichever way it was authored; otherwise only a platform
                whose destination is ``target`` qualifies.

        Raises:
            ConfigurationError: If no such platform exists.
        """
        index = self._index_of(target)
        if source is not None:
            platform = self.platform_between(source, index)
            if platform is None:
                raise ConfigurationError(f'No platform links region {self._index_of(source)} to region {index}')
            return platform
        for platform in self._platforms.values():
            if platform.to_region.index == index:
                return platform
        raise ConfigurationError(f'No platform leads into region {index}')

    def platform_rendezvous(self, target: Union[BaseRegion, int], agent_pose, now: float,
                            source: Union[BaseRegion, int] = None) -> Rendezvous:
        """Jump and leave times for boarding the platform into ``target``.

        Args:
            target: Box region the platform carries the agent into.
            agent_pose: Fixed boarding pose; a Vector or any object with a ``position``.
            now: Current simulation time.
            source: Box the agent boards from; see ``platform_into``.

        Raises:
            ConfigurationError: If no platform leads into ``target`` or the platform does not move.
        """
        platform = self.platform_into(target, source)
        position = getattr(agent_pose, 'position', agent_pose)
        rendezvous = compute_rendezvous(
            platform,
            position,
            now,
            time_step=float(self.config['rendezvous.time_step']),
            min_wait=float(self.config['rendezvous.min_wait']),
            lead_time=float(self.config['rendezvous.lead_time']),
        )
        self.logger.debug(f'Rendezvous with platform {platform.index} at {position}: {rendezvous}')
        return rendezvous

    def reset_search_state(self) -> None:
        """Clear the global search scratch fields of every region."""
        for region in self.regions:
            region.reset_search_state()
