"""Global Planner module: best-first search over regions and sequencing of each request.

Every request walks the agent at most one region further. The global search decides
which region comes next; the local planner produces the poses to its bridge. When the
bridge is a platform, the following request answers with the platform timing instead.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from regionnav.exceptions import NoNavigableRegionError
from regionnav.global_planner.planner_state import PlannerState
from regionnav.local_planner.local_planner import LocalPlanner
from regionnav.local_planner.movement_properties import MovementProperties
from regionnav.local_planner.path_node import PathNode
from regionnav.map.region import BaseRegion
from regionnav.map.region_graph import RegionGraph
from regionnav.map.rendezvous import Rendezvous
from regionnav.utils.logger import Logger
from regionnav.utils.priority_queue import PriorityQueue

PathReadyCallback = Callable[[Optional[List[PathNode]], Optional[int]], None]
PlatformTransitionCallback = Callable[[float, float], None]


class PlanStatus(Enum):
    """Outcome of a planning request."""
    PATH_READY = 'path_ready'
    PLATFORM_TRANSITION = 'platform_transition'
    PATH_NOT_FOUND = 'path_not_found'
    UNREACHABLE = 'unreachable'

    def __str__(self):
        """Return the name of the status."""
        return self.name


@dataclass
class PlanResult:
    """Everything a planning request produced.

    Attributes:
        status: Outcome of the request.
        region_sequence: Region indices from the start region to the destination region.
        path: Poses to follow; empty for a platform transition, None on failure.
        entered_region: Region the path leads into, when it crosses a bridge.
        rendezvous: Platform jump and leave times, for a platform transition.
    """
    status: PlanStatus
    region_sequence: List[int] = field(default_factory=list)
    path: Optional[List[PathNode]] = None
    entered_region: Optional[int] = None
    rendezvous: Optional[Rendezvous] = None

    @property
    def succeeded(self) -> bool:
        """True when the request produced a path or platform timing."""
        return self.status in (PlanStatus.PATH_READY, PlanStatus.PLATFORM_TRANSITION)


def deliver(result: PlanResult, on_path_ready: PathReadyCallback = None,
            on_platform_transition: PlatformTransitionCallback = None) -> None:
    """Invoke the callbacks matching a result.

    A platform transition answers both callbacks: the timing first, then an empty path
    so a caller waiting for a path is released.
    """
    if result.status is PlanStatus.PLATFORM_TRANSITION:
        if on_platform_transition is not None:
            on_platform_transition(result.rendezvous.jump_time, result.rendezvous.leave_time)
        if on_path_ready is not None:
            on_path_ready([], None)
        return
    if on_path_ready is not None:
        on_path_ready(result.path, result.entered_region)


class GlobalPlanner:
    """Plans over the region graph and delegates pose-level planning to the local planner."""

    def __init__(self, region_graph: RegionGraph, local_planner: LocalPlanner):
        """Initialize the Global Planner.

        Args:
            region_graph: Graph searched between regions.
            local_planner: Planner producing the poses inside a region.
        """
        self.region_graph = region_graph
        self.local_planner = local_planner
        self.logger = Logger.get_logger('GlobalPlanner')

    def find_global_path(self, start: BaseRegion, finish: BaseRegion, now: float) -> Optional[List[int]]:
        """Find the cheapest region sequence between two regions.

        Args:
            start: Start region.
            finish: Destination region.
            now: Simulation time, forwarded to the transfer costs.

        Returns:
            Region indices from ``start`` to ``finish`` inclusive, or None if
            ``finish`` is unreachable.
        """
        self.region_graph.reset_search_state()
        opened: PriorityQueue[BaseRegion] = PriorityQueue()
        closed = set()

        start.cost = 0.0
        opened.enqueue(start, start.transfer_time(now, finish) if start is not finish else 0.0)

        while not opened.empty():
            current = opened.dequeue()
            if current.index in closed:
                continue
            if current.index == finish.index:
                return self._reconstruct_path(current)
            closed.add(current.index)

            for neighbor in self.region_graph.neighbors_of(current):
                if neighbor.index in closed:
                    continue
                tentative = current.cost + current.transfer_time(now, neighbor)
                if tentative < neighbor.cost:
                    neighbor.cost = tentative
                    neighbor.parent = current
                    heuristic = neighbor.transfer_time(now, finish) if neighbor is not finish else 0.0
                    opened.enqueue(neighbor, tentative + heuristic)

        self.logger.warning(f'Region {finish.index} is unreachable from region {start.index}')
        return None

    def plan(
        self,
        start: PathNode,
        finish: PathNode,
        now: float,
        properties: MovementProperties = None,
        state: PlannerState = None,
        on_path_ready: PathReadyCallback = None,
        on_platform_transition: PlatformTransitionCallback = None,
    ) -> Tuple[PlanResult, PlannerState]:
        """Answer one planning request.

        Args:
            start: Current pose of the agent.
            finish: Goal pose.
            now: Current simulation time.
            properties: Movement profile; defaults to the configured one.
            state: State returned by the previous request; Idle when omitted.
            on_path_ready: Called with the path and the entered region.
            on_platform_transition: Called with the platform jump and leave times.

        Returns:
            The result of the request and the state to pass to the next one.

        Raises:
            NoNavigableRegionError: If the start or finish pose lies outside every region.
            ConfigurationError: If the level defines no cost or no platform where one is needed.
        """
        state = state or PlannerState.idle()
        result, next_state = self._plan(start, finish, now, properties, state)
        self.logger.info(f'{result.status} via regions {result.region_sequence}, next state {next_state.mode}')
        deliver(result, on_path_ready, on_platform_transition)
        return result, next_state

    def _plan(self, start: PathNode, finish: PathNode, now: float, properties: Optional[MovementProperties],
              state: PlannerState) -> Tuple[PlanResult, PlannerState]:
        if state.is_platform_pending:
            rendezvous = self.region_graph.platform_rendezvous(state.region_index, state.boarding_pose, now,
                                                             source=state.source_index)
            result = PlanResult(PlanStatus.PLATFORM_TRANSITION, [state.region_index], [], None, rendezvous)
            return result, PlannerState.idle()

        start_region = self._resolve(start)
        finish_region = self._resolve(finish)

        if start_region.index == finish_region.index:
            path = self.local_planner.find_path(start, finish, properties)
            status = PlanStatus.PATH_READY if path is not None else PlanStatus.PATH_NOT_FOUND
            return PlanResult(status, [start_region.index], path), PlannerState.idle()

        sequence = self.find_global_path(start_region, finish_region, now)
        if sequence is None:
            return PlanResult(PlanStatus.UNREACHABLE), PlannerState.idle()

        source, target = sequence[0], sequence[1]
        bridge = self.region_graph.bridge_between(source, target)
        path = self.local_planner.find_path_to_region(start, bridge, properties, source_index=source)
        if path is None:
            return PlanResult(PlanStatus.PATH_NOT_FOUND, sequence), PlannerState.idle()

        last = path[-1]
        path.append(PathNode(last.position, last.direction, last.time_moment, parent=last, region_index=target))
        result = PlanResult(PlanStatus.PATH_READY, sequence, path, target)
        if self.region_graph.is_platform_between(source, target):
            return result, PlannerState.platform_pending(target, path[-1], source)
        return result, PlannerState.idle()

    def _resolve(self, pose: PathNode) -> BaseRegion:
        region = self.region_graph.region_containing(pose.position, pose.region_index)
        if region is None:
            nearest, distance = self.region_graph.nearest_region(pose.position)
            raise NoNavigableRegionError(pose.position, nearest.index if nearest else None, distance)
        return region

    @staticmethod
    def _reconstruct_path(last: BaseRegion) -> List[int]:
        sequence = []
        current = last
        while current is not None:
            sequence.append(current.index)
            current = current.parent
        sequence.reverse()
        return sequence
