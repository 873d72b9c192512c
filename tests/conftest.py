"""
conftest.py: pytest fixtures shared across the test suite.

Provides two small levels, the region graphs and worlds built from them, and planners
wired on top, so individual test modules stay short and focused.

Both levels keep the agent on the ``y = 0`` plane with ground slabs beneath it. Most
goals sit on the lattice reached by straight steps of the default movement profile
(``max_speed * delta_time = 2.5``), so the expected paths are exact; the off-lattice
cases assert on the path shape instead.
"""
import pytest

from regionnav.config import Config
from regionnav.environment import TaggedVolumeWorld
from regionnav.global_planner import GlobalPlanner, PlanningService
from regionnav.local_planner import LocalPlanner, MovementProperties, PathNode
from regionnav.map import LevelData, RegionGraph
from regionnav.utils.vector import Vector


def make_level(**overrides) -> LevelData:
    """Two rooms joined by a portal, with a floor under both."""
    data = {
        'boxes': [
            {'center': [0, 1, 0], 'size': [10, 4, 10]},
            {'center': [10, 1, 0], 'size': [10, 4, 10]},
        ],
        'portals': [
            {'center': [5, 0, 0], 'size': [1, 1, 1], 'between': [0, 1]},
        ],
        'finish_point': [12.5, 0, 0],
        'world': [
            {'tag': 'Ground', 'center': [10, -1, 0], 'size': [40, 1, 20]},
        ],
    }
    data.update(overrides)
    return LevelData.model_validate(data)


def pose(x, y=0.0, z=0.0, heading=(1, 0, 0), region=None) -> PathNode:
    """Shorthand for a pose on the walking plane."""
    return PathNode(Vector(x, y, z), Vector(heading), region_index=region)


# =========================================================================
# Configuration
# =========================================================================

@pytest.fixture
def config() -> Config:
    """Default configuration."""
    return Config()


@pytest.fixture
def properties(config) -> MovementProperties:
    """Default movement profile."""
    return MovementProperties.from_config(config)


# =========================================================================
# Two rooms joined by a portal
# =========================================================================

@pytest.fixture
def two_room_level() -> LevelData:
    """Rooms 0 and 1 with a portal at x = 5."""
    return make_level()


@pytest.fixture
def two_room_graph(two_room_level, config) -> RegionGraph:
    """Region graph of the two-room level: boxes 0 and 1, portal 2."""
    return RegionGraph.from_level(two_room_level, config)


@pytest.fixture
def two_room_world(two_room_level, config) -> TaggedVolumeWorld:
    """Spatial world of the two-room level."""
    return TaggedVolumeWorld.from_level(two_room_level, config)


@pytest.fixture
def local_planner(two_room_graph, two_room_world, config) -> LocalPlanner:
    """Local planner over the two-room level."""
    return LocalPlanner(two_room_graph, two_room_world, config)


@pytest.fixture
def planner(two_room_graph, local_planner) -> GlobalPlanner:
    """Global planner over the two-room level."""
    return GlobalPlanner(two_room_graph, local_planner)


# =========================================================================
# Portal then rotating platform
# =========================================================================

@pytest.fixture
def platform_level() -> LevelData:
    """Hall 0 -> portal -> landing 1 -> platform -> tower 2.

    The platform turns at 20 degrees per second around (25, 0, 0), so a ride lasts
    ``5 * 40 / 20 = 10`` seconds. Region indices: boxes 0-2, portal 3, platform 4.
    """
    return LevelData.model_validate({
        'boxes': [
            {'center': [0, 1, 0], 'size': [10, 4, 10]},
            {'center': [10, 1, 0], 'size': [10, 4, 10]},
            {'center': [40, 1, 0], 'size': [10, 4, 10]},
        ],
        'portals': [
            {'center': [5, 0, 0], 'size': [1, 1, 1], 'between': [0, 1]},
        ],
        'platforms': [
            {
                'center': [16, 0, 0],
                'size': [2, 1, 2],
                'between': [1, 2],
                'rotation_center': [25, 0, 0],
                'rotation_speed': 20.0,
                'rotation_radius': 9.0,
            },
        ],
        'finish_point': [40, 0, 0],
        'world': [
            {'tag': 'Ground', 'center': [7.5, -1, 0], 'size': [25, 1, 20]},
            {'tag': 'Ground', 'center': [40, -1, 0], 'size': [12, 1, 20]},
        ],
    })


@pytest.fixture
def platform_graph(platform_level, config) -> RegionGraph:
    """Region graph of the platform level."""
    return RegionGraph.from_level(platform_level, config)


@pytest.fixture
def platform_planner(platform_level, platform_graph, config) -> GlobalPlanner:
    """Global planner over the platform level."""
    world = TaggedVolumeWorld.from_level(platform_level, config)
    return GlobalPlanner(platform_graph, LocalPlanner(platform_graph, world, config))


@pytest.fixture
def platform_service(platform_planner):
    """Planning service over the platform level, shut down after the test."""
    service = PlanningService(platform_planner)
    yield service
    service.shutdown()


class CallbackRecorder:
    """Records every callback invocation in order."""

    def __init__(self):
        self.calls = []

    def on_path_ready(self, path, entered_region):
        self.calls.append(('path', path, entered_region))

    def on_platform_transition(self, jump_time, leave_time):
        self.calls.append(('platform', jump_time, leave_time))


@pytest.fixture
def recorder() -> CallbackRecorder:
    """Fresh callback recorder."""
    return CallbackRecorder()
