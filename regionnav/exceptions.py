"""Exceptions raised by the planners."""


class NavigationError(Exception):
    """Base class for planner errors."""
    pass


class NoNavigableRegionError(NavigationError):
    """Raised when a pose lies outside every region of the level."""

    def __init__(self, point, nearest_index=None, nearest_distance=None):
        """Build the message from the offending point and the closest region, if any."""
        self.point = point
        self.nearest_index = nearest_index
        self.nearest_distance = nearest_distance
        message = f'No navigable region contains point {point}'
        if nearest_index is not None:
            message += f' (nearest region {nearest_index} at distance {nearest_distance:.2f})'
        super().__init__(message)


class ConfigurationError(NavigationError):
    """Raised for level authoring mistakes, such as a missing platform or an undefined transfer cost."""
    pass


class PlanningBusyError(NavigationError):
    """Raised when a planning request is issued while another one is still outstanding."""
    pass
