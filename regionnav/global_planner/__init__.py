"""Global planning package: region-level search, request sequencing and the planning service."""
from regionnav.global_planner.global_planner import (GlobalPlanner, PlanResult,
                                                     PlanStatus, deliver)
from regionnav.global_planner.planner_state import PlannerMode, PlannerState
from regionnav.global_planner.planning_service import PlanningService, PlanTicket

__all__ = ['GlobalPlanner', 'PlanResult', 'PlanStatus', 'PlanTicket', 'PlannerMode', 'PlannerState',
           'PlanningService', 'deliver']
