"""
test_local_planner.py: Unit tests for PathNode and the kinematic local search.

Covers:
    - PathNode stepping, quantization, excursion saturation
    - straight-line paths and the start-at-goal shortcut
    - walkability filtering of successors
    - excursion bound, expansion cap, repeatable failures
    - paths towards a platform boarding point
"""
import pytest

from regionnav.config import Config
from regionnav.exceptions import NoNavigableRegionError
from regionnav.local_planner import LocalPlanner, PathNode
from regionnav.local_planner.path_node import MAX_EXCURSION_COUNT
from regionnav.utils.vector import Vector
from regionnav.utils.volume import Volume

from conftest import pose


def positions(path):
    return [node.position for node in path]


class TestPathNode:

    def test_spawn_child(self):
        node = pose(0)
        child = node.spawn_child(2.5, 90, 0.5)
        assert child.direction == Vector(0, 0, -1)
        assert child.position == Vector(0, 0, -2.5)
        assert child.time_moment == pytest.approx(0.5)
        assert child.parent is node

    def test_to_grid(self):
        assert pose(2.5, 0, 1).to_grid(0.5) == (5, 2, 2, 0)
        assert pose(2.5, 3, 1).to_grid(0.5) == pose(2.5, 0, 1).to_grid(0.5)

    def test_excursion_saturates(self):
        node = pose(0)
        node.increment_excursion(MAX_EXCURSION_COUNT)
        assert node.excursion == MAX_EXCURSION_COUNT
        node.increment_excursion(3)
        assert node.excursion == 4

    def test_copy_drops_links(self):
        node = PathNode(Vector(1, 0, 0), Vector(1, 0, 0), parent=pose(0), region_index=1)
        copy = node.copy()
        assert copy.parent is None
        assert copy.region_index is None
        assert copy.position == node.position


class TestFindPath:

    def test_straight_path(self, local_planner):
        path = local_planner.find_path(pose(0), pose(5))
        assert positions(path) == [Vector(0, 0, 0), Vector(2.5, 0, 0), Vector(5, 0, 0)]
        assert path[0].parent is None
        assert all(node.parent is prev for prev, node in zip(path, path[1:]))
        assert path[-1].time_moment == pytest.approx(1.0)

    def test_start_at_goal(self, local_planner):
        path = local_planner.find_path(pose(0, region=0), pose(0.05))
        assert len(path) == 1
        assert path[0].position == Vector(0, 0, 0)
        assert path[0].region_index == 0
        assert local_planner.last_expansions == 0

    def test_goal_off_lattice_is_reached_within_epsilon(self, local_planner):
        path = local_planner.find_path(pose(0), pose(5.05))
        assert path[-1].position == Vector(5.05, 0, 0)
        assert path[-2].position == Vector(2.5, 0, 0)

    def test_outside_every_region(self, local_planner):
        with pytest.raises(NoNavigableRegionError) as info:
            local_planner.find_path(pose(0, 0, 50), pose(0))
        assert info.value.nearest_index == 0

    def test_successors_blocked_by_obstacle(self, local_planner, properties):
        local_planner.spatial.add('Box', Volume(Vector(5, 0.5, 0), Vector(1, 1, 1)), 'crate')
        children = local_planner.get_neighbours(pose(2.5), properties)
        assert len(children) == 5
        assert all(child.position == Vector(2.5, 0, 0) for child in children)

    def test_successors_need_ground(self, local_planner, properties):
        assert local_planner.get_neighbours(pose(0, 0, 12), properties) == []


class TestOffLatticeGoals:

    @pytest.mark.parametrize('goal', [(3.3, 0, 2.7), (-2, 0, 1), (4, 0, -3.1)])
    def test_reaches_goal_between_lattice_points(self, local_planner, goal):
        path = local_planner.find_path(pose(0), pose(*goal))
        assert path is not None
        assert path[0].position == Vector(0, 0, 0)
        assert path[-1].position == Vector(*goal)
        assert all(node.parent is prev for prev, node in zip(path, path[1:]))
        # one step plus the crossing tolerance at most
        assert all(prev.distance(node) <= 2.5 + 1.0 for prev, node in zip(path, path[1:]))

    def test_goal_within_one_step(self, two_room_graph, two_room_world):
        config = Config(overrides={'local_planner': {'max_expansions': 1}})
        planner = LocalPlanner(two_room_graph, two_room_world, config)
        path = planner.find_path(pose(0), pose(2.3))
        assert positions(path) == [Vector(0, 0, 0), Vector(2.3, 0, 0)]
        assert path[-1].time_moment == pytest.approx(2.3 / 5)

    def test_wall_blocks_the_direct_step(self, two_room_graph, two_room_world):
        two_room_world.add('Box', Volume(Vector(1, 0, 0), Vector(0.2, 2, 4)), 'wall')
        config = Config(overrides={'local_planner': {'max_expansions': 1}})
        planner = LocalPlanner(two_room_graph, two_room_world, config)
        assert planner.find_path(pose(0), pose(2.3)) is None

    def test_unwalkable_goal_is_never_spliced(self, local_planner):
        local_planner.spatial.add('Box', Volume(Vector(3.3, 0.5, 2.7), Vector(1, 1, 1)), 'crate')
        assert local_planner.find_path(pose(0), pose(3.3, 0, 2.7)) is None

    def test_step_passing_over_the_goal(self, local_planner):
        node = pose(2.5)
        node.parent = pose(0)
        assert local_planner._crosses_goal(node, pose(1.2, 0, 0.6))
        assert not local_planner._crosses_goal(node, pose(1.2, 0, 1.6))
        assert not local_planner._crosses_goal(pose(2.5), pose(2.5, 0, 0.5))


class TestSearchLimits:

    def test_unreachable_goal_is_repeatable(self, local_planner):
        first = local_planner.find_path(pose(0), pose(0, 0, 30))
        first_expansions = local_planner.last_expansions
        second = local_planner.find_path(pose(0), pose(0, 0, 30))
        assert first is None and second is None
        assert 0 < first_expansions <= 1000
        assert local_planner.last_expansions == first_expansions

    def test_expansion_cap(self, two_room_graph, two_room_world):
        config = Config(overrides={'local_planner': {'max_expansions': 2}})
        planner = LocalPlanner(two_room_graph, two_room_world, config)
        assert planner.find_path(pose(0), pose(5)) is None
        assert planner.last_expansions == 2

    def test_excursion_bound(self, local_planner):
        # the goal lies three steps beyond the start region
        assert local_planner.find_path(pose(0, region=0), pose(12.5)) is None

    def test_wider_excursion_bound(self, two_room_graph, two_room_world):
        config = Config(overrides={'local_planner': {'max_excursion': 3}})
        planner = LocalPlanner(two_room_graph, two_room_world, config)
        path = planner.find_path(pose(0, region=0), pose(12.5))
        assert positions(path) == [Vector(x, 0, 0) for x in (0, 2.5, 5, 7.5, 10, 12.5)]
        assert [node.excursion for node in path[:-1]] == [0, 0, 0, 1, 2]


class TestFindPathToRegion:

    def test_boarding_point_at_start_height(self, platform_planner):
        local = platform_planner.local_planner
        platform = platform_planner.region_graph.region_by_index(4)
        path = local.find_path_to_region(pose(5, 0.5, 0, region=1), platform, source_index=1)
        assert path[-1].position == Vector(15, 0.5, 0)
        assert len(path) == 5

    def test_portal_center(self, local_planner, two_room_graph):
        portal = two_room_graph.region_by_index(2)
        path = local_planner.find_path_to_region(pose(0), portal, source_index=0)
        assert path[-1].position == Vector(5, 0, 0)
