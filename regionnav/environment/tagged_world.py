"""In-memory spatial world made of tagged axis-aligned volumes."""
from typing import Iterable, List, Optional, Set

from regionnav.config import Config
from regionnav.environment.spatial_query import Hit, SpatialQuery, TaggedVolume
from regionnav.utils.logger import Logger
from regionnav.utils.quadtree import Footprint, QuadTree
from regionnav.utils.vector import Vector
from regionnav.utils.volume import Volume

GROUND_TAG = 'Ground'
PORTAL_TAG = 'Portal'
FINISH_TAG = 'Finish'


class TaggedVolumeWorld(SpatialQuery):
    """Spatial queries answered from a list of tagged volumes.

    A ``Ground`` volume supports the agent when it lies directly beneath it within the
    probe distance. Obstacles are volumes carrying the configured obstacle tag; portals
    and the finish point are added as their own tags so segment casts can detect them.
    """

    def __init__(self, volumes: Iterable[TaggedVolume] = (), ground_probe_distance: float = 5.0,
                 ground_tags: Iterable[str] = (GROUND_TAG,)):
        """Initialize the world.

        Args:
            volumes: Initial tagged volumes.
            ground_probe_distance: Length of the downward ground probe.
            ground_tags: Tags of volumes that count as ground.
        """
        self.volumes: List[TaggedVolume] = list(volumes)
        self.ground_probe_distance = ground_probe_distance
        self.ground_tags = frozenset(ground_tags)
        self._tree: Optional[QuadTree[TaggedVolume]] = None
        self.logger = Logger.get_logger('TaggedVolumeWorld')

    @classmethod
    def from_level(cls, level, config: Config = None) -> 'TaggedVolumeWorld':
        """Build the world of a level: its ``world`` volumes, its portals and its finish point.

        Args:
            level: Validated LevelData.
            config: Configuration providing the ground probe distance.
        """
        config = config or Config()
        world = cls(ground_probe_distance=float(config['spatial.ground_probe_distance']))
        for item in level.world:
            world.add(item.tag, item.to_volume(), item.name)
        for portal in level.portals:
            world.add(PORTAL_TAG, portal.to_volume(), portal.name)
        world.add(FINISH_TAG, Volume(Vector(level.finish_point), Vector(1, 1, 1)), 'finish')
        world.logger.info(f'World built with {len(world.volumes)} volumes')
        return world

    @classmethod
    def from_dicts(cls, items: Iterable[dict], **kwargs) -> 'TaggedVolumeWorld':
        """Build a world from ``{'tag': ..., 'center': [...], 'size': [...]}`` dictionaries."""
        world = cls(**kwargs)
        for item in items:
            world.add(item['tag'], Volume(Vector(item['center']), Vector(item['size'])), item.get('name'))
        return world

    def add(self, tag: str, volume: Volume, name: str = None) -> TaggedVolume:
        """Add a tagged volume to the world."""
        tagged = TaggedVolume(tag, volume, name)
        self.volumes.append(tagged)
        self._tree = None
        return tagged

    def _candidates(self, lo: Vector, hi: Vector) -> List[TaggedVolume]:
        if self._tree is None:
            self._tree = self._build_tree()
        if self._tree is None:
            return []
        return self._tree.retrieve(Footprint.around(lo, hi))

    def _build_tree(self) -> Optional[QuadTree[TaggedVolume]]:
        footprints = [Footprint.around(item.volume.min, item.volume.max) for item in self.volumes]
        tree = QuadTree.covering(footprints)
        if tree is not None:
            for footprint, item in zip(footprints, self.volumes):
                tree.insert(footprint, item)
        return tree

    def contains(self, point: Vector) -> bool:
        """Check whether any volume contains ``point``."""
        return any(item.volume.contains(point) for item in self._candidates(point, point))

    def overlap(self, point: Vector, radius: float) -> Set[TaggedVolume]:
        """Volumes overlapping the sphere of ``radius`` around ``point``."""
        reach = Vector(radius, radius, radius)
        return {item for item in self._candidates(point - reach, point + reach)
                if item.volume.intersects_sphere(point, radius)}

    def ground_probe(self, point: Vector) -> bool:
        """Cast a ray straight down and report whether it meets a ground volume."""
        down = Vector(0, -1, 0)
        bottom = point + down * self.ground_probe_distance
        for item in self._candidates(bottom, point):
            if item.tag in self.ground_tags and \
                    item.volume.ray_intersection(point, down, self.ground_probe_distance) is not None:
                return True
        return False

    def segment_cast(self, origin: Vector, direction: Vector, max_distance: float) -> List[Hit]:
        """Volumes hit by the segment from ``origin`` along ``direction``, nearest first."""
        unit = direction.normalize()
        end = origin + unit * max_distance
        hits = []
        for item in self._candidates(origin, end):
            distance = item.volume.ray_intersection(origin, unit, max_distance)
            if distance is not None:
                hits.append(Hit(distance, origin + unit * distance, item))
        hits.sort(key=lambda hit: hit.distance)
        return hits
