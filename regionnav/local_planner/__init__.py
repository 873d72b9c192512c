"""Local planning package: kinematic search between nearby poses."""
from regionnav.local_planner.local_planner import LocalPlanner
from regionnav.local_planner.movement_properties import MovementProperties
from regionnav.local_planner.path_node import PathNode

__all__ = ['LocalPlanner', 'MovementProperties', 'PathNode']
