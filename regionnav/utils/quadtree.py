"""Quadtree over the walkable ``x``/``z`` plane, used as the broad phase of spatial queries."""
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from regionnav.utils.vector import Vector

T = TypeVar('T')


@dataclass(frozen=True)
class Footprint:
    """Axis-aligned rectangle on the ``x``/``z`` plane.

    (x, z) is the lowest corner of the rectangle.
    """
    x: float
    z: float
    width: float
    depth: float

    @classmethod
    def around(cls, lo: Vector, hi: Vector) -> 'Footprint':
        """Footprint of the box spanned by two corners."""
        x0, x1 = sorted((lo.x, hi.x))
        z0, z1 = sorted((lo.z, hi.z))
        return cls(x0, z0, x1 - x0, z1 - z0)

    def intersects(self, other: 'Footprint') -> bool:
        """Check whether two footprints overlap; touching edges count."""
        return not (other.x > self.x + self.width or other.x + other.width < self.x or
                    other.z > self.z + self.depth or other.z + other.depth < self.z)


class QuadTree(Generic[T]):
    """Quadtree storing items by their footprint.

    Attributes:
        bounds: The footprint covered by this node.
        max_objects: Maximum number of items before splitting.
        max_levels: Maximum depth of the tree.
        level: Depth of this node.
        nodes: Child nodes, empty for a leaf.
    """

    def __init__(self, bounds: Footprint, max_objects=8, max_levels=5, level=0):
        """Initialize a new quadtree node."""
        self.bounds = bounds
        self.max_objects = max_objects
        self.max_levels = max_levels
        self.level = level
        self.footprints: List[Footprint] = []
        self.items: List[T] = []
        self.nodes: List[QuadTree[T]] = []

    def __len__(self):
        """Number of items stored in this subtree, counting items spanning several leaves once per leaf."""
        if self.nodes:
            return sum(len(node) for node in self.nodes)
        return len(self.items)

    def split(self):
        """Split this node into four quadrants and push its items down."""
        half_w = self.bounds.width / 2
        half_d = self.bounds.depth / 2
        x, z = self.bounds.x, self.bounds.z
        self.nodes = [
            QuadTree(Footprint(qx, qz, half_w, half_d), self.max_objects, self.max_levels, self.level + 1)
            for qx, qz in ((x, z), (x + half_w, z), (x, z + half_d), (x + half_w, z + half_d))
        ]
        footprints, items = self.footprints, self.items
        self.footprints, self.items = [], []
        for footprint, item in zip(footprints, items):
            self.insert(footprint, item)

    def relevant_nodes(self, footprint: Footprint) -> List['QuadTree[T]']:
        """Child nodes whose quadrant overlaps ``footprint``."""
        return [node for node in self.nodes if node.bounds.intersects(footprint)]

    def insert(self, footprint: Footprint, item: T):
        """Insert an item with its footprint."""
        if self.nodes:
            for node in self.relevant_nodes(footprint):
                node.insert(footprint, item)
            return
        self.footprints.append(footprint)
        self.items.append(item)
        if len(self.items) > self.max_objects and self.level < self.max_levels:
            self.split()

    def retrieve(self, footprint: Footprint) -> List[T]:
        """Items whose footprint overlaps ``footprint``, without duplicates."""
        found: List[T] = []
        seen = set()
        self._collect(footprint, found, seen)
        return found

    def _collect(self, footprint: Footprint, found: List[T], seen: set):
        if self.nodes:
            for node in self.relevant_nodes(footprint):
                node._collect(footprint, found, seen)
            return
        for item_footprint, item in zip(self.footprints, self.items):
            if id(item) not in seen and item_footprint.intersects(footprint):
                seen.add(id(item))
                found.append(item)

    def clear(self):
        """Remove every item and child node."""
        self.footprints = []
        self.items = []
        self.nodes = []

    @classmethod
    def covering(cls, footprints: List[Footprint], margin: float = 1.0) -> Optional['QuadTree[T]']:
        """Create an empty tree whose root covers all ``footprints``; None when there are none."""
        if not footprints:
            return None
        x0 = min(f.x for f in footprints) - margin
        z0 = min(f.z for f in footprints) - margin
        x1 = max(f.x + f.width for f in footprints) + margin
        z1 = max(f.z + f.depth for f in footprints) + margin
        return cls(Footprint(x0, z0, x1 - x0, z1 - z0))
