"""Local Planner module: kinematic best-first search from a pose to a nearby goal pose."""
import math
from typing import List, Optional

from regionnav.config import Config
from regionnav.environment.spatial_query import SpatialQuery
from regionnav.exceptions import NoNavigableRegionError
from regionnav.local_planner.movement_properties import MovementProperties
from regionnav.local_planner.path_node import PathNode
from regionnav.map.region import BaseRegion, RegionKind
from regionnav.map.region_graph import RegionGraph
from regionnav.utils.logger import Logger
from regionnav.utils.priority_queue import PriorityQueue
from regionnav.utils.vector import Vector


class LocalPlanner:
    """Plans short kinematically plausible paths within and around one region.

    Nodes are expanded in order of ``elapsed time + straight-line time to goal``.
    Successors either stay in place (optionally turning) or step forward along one of
    the steering angles of the movement profile. Each quantized pose is queued at most
    once per search, and nodes wandering too long outside the start region are dropped.
    """

    def __init__(self, region_graph: RegionGraph, spatial: SpatialQuery, config: Config = None):
        """Initialize the Local Planner.

        Args:
            region_graph: Graph used to resolve the start region.
            spatial: Walkability and segment-cast queries.
            config: Configuration; defaults to the graph's.
        """
        self.region_graph = region_graph
        self.spatial = spatial
        self.config = config or region_graph.config
        self.max_expansions = int(self.config['local_planner.max_expansions'])
        self.max_excursion = int(self.config['local_planner.max_excursion'])
        self.agent_radius = float(self.config['spatial.agent_radius'])
        self.obstacle_tag = self.config['spatial.obstacle_tag']
        self.default_properties = MovementProperties.from_config(self.config)
        self.last_expansions = 0
        self.logger = Logger.get_logger('LocalPlanner')

    def find_path(self, start: PathNode, finish: PathNode,
                  properties: MovementProperties = None) -> Optional[List[PathNode]]:
        """Search a path from ``start`` to ``finish``.

        Args:
            start: Start pose; its region override, if any, selects the start region.
            finish: Goal pose.
            properties: Movement profile; defaults to the configured one.

        Returns:
            Poses from start to goal inclusive, or None if no path was found within
            the expansion cap.

        Raises:
            NoNavigableRegionError: If the start pose lies outside every region.
        """
        properties = properties or self.default_properties
        start_region = self.region_graph.region_containing(start.position, start.region_index)
        if start_region is None:
            nearest, distance = self.region_graph.nearest_region(start.position)
            raise NoNavigableRegionError(start.position, nearest.index if nearest else None, distance)

        self.last_expansions = 0
        if start.distance(finish) < properties.epsilon:
            return [start.copy(region_index=start.region_index)]

        root = start.copy()
        opened: PriorityQueue[PathNode] = PriorityQueue()
        visited = {root.to_grid(properties.delta_dist)}
        opened.enqueue(root, self.heuristic(root, finish, properties))

        last = None
        while not opened.empty() and self.last_expansions < self.max_expansions:
            current = opened.dequeue()
            self.last_expansions += 1

            if current.excursion > self.max_excursion:
                continue
            if current.distance(finish) < properties.epsilon or self._crosses_goal(current, finish):
                last = PathNode(finish.position, finish.direction, current.time_moment, parent=current.parent)
                break
            if self._within_reach(current, finish, properties):
                arrival = current.time_moment + current.distance(finish) / properties.max_speed
                last = PathNode(finish.position, finish.direction, arrival, parent=current)
                break

            for child in self.get_neighbours(current, properties):
                cell = child.to_grid(properties.delta_dist)
                if cell in visited:
                    continue
                if not start_region.contains(child.position):
                    child.increment_excursion(current.excursion)
                else:
                    child.excursion = current.excursion
                child.cost = current.cost + properties.delta_time
                opened.enqueue(child, child.cost + self.heuristic(child, finish, properties))
                visited.add(cell)

        if last is None:
            self.logger.warning(
                f'Path not found from {start.position} to {finish.position} '
                f'after {self.last_expansions} expansions'
            )
            return None
        path = self._reconstruct_path(last)
        self.logger.debug(f'Path of {len(path)} nodes found after {self.last_expansions} expansions')
        return path

    def find_path_to_region(self, start: PathNode, region: BaseRegion, properties: MovementProperties = None,
                            source_index: int = None) -> Optional[List[PathNode]]:
        """Search a path to the entry pose of a portal or platform region.

        Args:
            start: Start pose.
            region: Portal or Platform region to walk into.
            properties: Movement profile.
            source_index: Box the agent leaves from; selects the platform boarding side.

        Returns:
            Poses from start to the entry pose, or None if no path was found.
        """
        target = region.entry_point(source_index)
        if region.kind is RegionKind.PLATFORM:
            target = Vector(target.x, start.position.y, target.z)
        return self.find_path(start, PathNode(target, start.direction), properties)

    def get_neighbours(self, node: PathNode, properties: MovementProperties) -> List[PathNode]:
        """Walkable successors of a node: waits and in-place turns first, then steps."""
        neighbours = []
        for step_length in (0.0, properties.step_length):
            for angle in properties.steering_angles():
                if step_length == 0.0 and angle != 0.0:
                    child = PathNode(node.position, node.direction.rotate_about_up(angle),
                                     node.time_moment + properties.delta_time, parent=node)
                else:
                    child = node.spawn_child(step_length, angle, properties.delta_time)
                if self.spatial.is_walkable(child.position, self.agent_radius, self.obstacle_tag):
                    neighbours.append(child)
        return neighbours

    @staticmethod
    def heuristic(node: PathNode, finish: PathNode, properties: MovementProperties) -> float:
        """Straight-line travel time to the goal at full speed."""
        return node.distance(finish) / properties.max_speed

    def _crosses_goal(self, node: PathNode, finish: PathNode) -> bool:
        """Check whether the step from the parent to ``node`` passed over a walkable goal.

        The step counts as crossing when the goal lies within the agent radius of the
        segment between the two poses.
        """
        if node.parent is None:
            return False
        gap = segment_distance(finish.position, node.parent.position, node.position)
        if gap > self.agent_radius:
            return False
        return self.spatial.is_walkable(finish.position, self.agent_radius, self.obstacle_tag)

    def _within_reach(self, node: PathNode, finish: PathNode, properties: MovementProperties) -> bool:
        """Check whether the goal is less than one step away along a clear straight line."""
        if node.distance(finish) >= properties.step_length:
            return False
        return self._clear_line(node.position, finish.position, properties)

    def _clear_line(self, source: Vector, target: Vector, properties: MovementProperties) -> bool:
        offset = target - source
        length = source.distance(target)
        if length == 0:
            return self.spatial.is_walkable(target, self.agent_radius, self.obstacle_tag)
        hits = self.spatial.segment_cast(source, offset, length)
        if any(hit.tag == self.obstacle_tag for hit in hits):
            return False
        spacing = self.agent_radius or properties.delta_dist
        samples = max(1, int(math.ceil(length / spacing)))
        return all(
            self.spatial.is_walkable(source + offset * (i / samples), self.agent_radius, self.obstacle_tag)
            for i in range(1, samples + 1)
        )

    @staticmethod
    def _reconstruct_path(last: PathNode) -> List[PathNode]:
        path = []
        current = last
        while current is not None:
            path.append(current)
            current = current.parent
        path.reverse()
        return path


def segment_distance(point: Vector, start: Vector, end: Vector) -> float:
    """Distance from ``point`` to the segment between ``start`` and ``end``."""
    span = end - start
    sqr_length = span.x ** 2 + span.y ** 2 + span.z ** 2
    if sqr_length == 0:
        return point.distance(start)
    t = ((point.x - start.x) * span.x + (point.y - start.y) * span.y + (point.z - start.z) * span.z) / sqr_length
    t = max(0.0, min(1.0, t))
    return point.distance(start + span * t)
