"""Planner state module: what the global planner remembers between two requests."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from regionnav.local_planner.path_node import PathNode


class PlannerMode(Enum):
    """Modes of the global planner."""
    IDLE = 'idle'
    PLATFORM_PENDING = 'platform_pending'

    def __str__(self):
        """Return the name of the mode."""
        return self.name


@dataclass(frozen=True)
class PlannerState:
    """Immutable state passed into and returned from every planning request.

    Attributes:
        mode: Current mode.
        region_index: Region the pending platform carries the agent into.
        boarding_pose: Pose the agent waits at before jumping on the platform.
        source_index: Region the agent boards the platform from.
    """
    mode: PlannerMode = PlannerMode.IDLE
    region_index: Optional[int] = None
    boarding_pose: Optional[PathNode] = None
    source_index: Optional[int] = None

    @classmethod
    def idle(cls) -> 'PlannerState':
        """State with nothing pending."""
        return cls()

    @classmethod
    def platform_pending(cls, region_index: int, boarding_pose: PathNode,
                         source_index: int = None) -> 'PlannerState':
        """State waiting for the next request to deliver platform timing."""
        return cls(PlannerMode.PLATFORM_PENDING, region_index, boarding_pose, source_index)

    @property
    def is_idle(self) -> bool:
        """True when nothing is pending."""
        return self.mode is PlannerMode.IDLE

    @property
    def is_platform_pending(self) -> bool:
        """True when the next request must deliver platform timing."""
        return self.mode is PlannerMode.PLATFORM_PENDING
