#!/usr/bin/env python3
"""Plan a route through a level file and print every request of the journey.

Each planning request moves the agent at most one region further. The script replays
the journey the way a host would: follow the delivered path, wait for the platform,
ride it, and ask again until the finish point is reached.

Example:
    python scripts/plan_route.py --level levels/platform_crossing.json --start 0 0 0 --heading 1 0 0
"""
import argparse
import sys

from regionnav import (Config, GlobalPlanner, LevelData, LocalPlanner, NavigationError, PathNode,
                       PlanStatus, PlanningService, RegionGraph, TaggedVolumeWorld, Vector)
from regionnav.utils.logger import Logger


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Plan a route through a region graph level.')
    parser.add_argument('--level', required=True, help='Path to the level JSON file')
    parser.add_argument('--config', default=None, help='Optional YAML config merged over the defaults')
    parser.add_argument('--start', nargs=3, type=float, required=True, metavar=('X', 'Y', 'Z'))
    parser.add_argument('--heading', nargs=3, type=float, default=[1.0, 0.0, 0.0], metavar=('X', 'Y', 'Z'))
    parser.add_argument('--goal', nargs=3, type=float, default=None, metavar=('X', 'Y', 'Z'),
                        help='Goal point; defaults to the finish point of the level')
    parser.add_argument('--max-requests', type=int, default=20)
    return parser.parse_args(argv)


def format_path(path):
    """One line per pose."""
    return '\n'.join(f'    {node!r}' for node in path)


def run(args) -> int:
    """Replay the journey; returns the process exit code."""
    config = Config(args.config)
    Logger.configure_from(config)
    level = LevelData.from_json_file(args.level)
    graph = RegionGraph.from_level(level, config)
    world = TaggedVolumeWorld.from_level(level, config)
    planner = GlobalPlanner(graph, LocalPlanner(graph, world, config))

    goal = PathNode(Vector(args.goal) if args.goal else graph.finish_point, Vector(args.heading))
    agent = PathNode(Vector(args.start), Vector(args.heading))
    now = 0.0

    with PlanningService(planner) as service:
        for request in range(1, args.max_requests + 1):
            pending = service.state
            result = service.request(agent, goal, now).result()
            print(f'[{request}] t={now:.2f} {result.status} regions={result.region_sequence}')

            if result.status is PlanStatus.PLATFORM_TRANSITION:
                jump_time, leave_time = result.rendezvous
                print(f'    jump at {jump_time:.2f}, leave at {leave_time:.2f}')
                # the ride ends on the platform-side face of the destination box
                target = graph.region_by_index(result.region_sequence[0])
                platform = graph.platform_into(target, pending.source_index)
                landing = target.volume.closest_point(platform.center)
                agent = PathNode(Vector(landing.x, agent.position.y, landing.z), agent.direction,
                                 region_index=target.index)
                now = max(now, leave_time)
                continue

            if not result.succeeded:
                print('    no route')
                return 1

            print(format_path(result.path))
            last = result.path[-1]
            now += last.time_moment
            agent = PathNode(last.position, last.direction, region_index=last.region_index)
            if result.entered_region is None and agent.distance(goal) < planner.local_planner.default_properties.epsilon:
                print('Finish reached')
                return 0
    print(f'Gave up after {args.max_requests} requests')
    return 1


def main(argv=None) -> int:
    """Entry point."""
    args = parse_args(argv)
    try:
        return run(args)
    except (NavigationError, FileNotFoundError, ValueError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
