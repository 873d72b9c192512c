"""RegionNav: hierarchical motion planning over a region graph.

A level is split into box regions linked by static portals and rotating platforms.
The global planner searches the region graph, the local planner produces kinematic
paths inside a region, and the planning service runs requests off the caller's thread.
"""
from regionnav.config import Config
from regionnav.environment import SpatialQuery, TaggedVolumeWorld
from regionnav.exceptions import (ConfigurationError, NavigationError,
                                  NoNavigableRegionError, PlanningBusyError)
from regionnav.global_planner import (GlobalPlanner, PlannerState, PlanResult,
                                      PlanStatus, PlanningService, PlanTicket)
from regionnav.local_planner import LocalPlanner, MovementProperties, PathNode
from regionnav.map import LevelData, RegionGraph, RegionKind, Rendezvous
from regionnav.utils.vector import Vector

__version__ = '0.1.0'

__all__ = [
    'Config', 'ConfigurationError', 'GlobalPlanner', 'LevelData', 'LocalPlanner', 'MovementProperties',
    'NavigationError', 'NoNavigableRegionError', 'PathNode', 'PlanResult', 'PlanStatus', 'PlanTicket',
    'PlannerState', 'PlanningBusyError', 'PlanningService', 'RegionGraph', 'RegionKind', 'Rendezvous',
    'SpatialQuery', 'TaggedVolumeWorld', 'Vector',
]
