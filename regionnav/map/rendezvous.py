"""Rendezvous module: when to jump onto a rotating platform and when to leave it.

The agent waits at a fixed boarding pose while the platform sweeps around its center.
Instead of moving the platform forward in time, the agent pose is rotated backwards
around the platform axis for every candidate wait, and the wait whose rotated pose lands
closest to the platform's current anchor wins.
"""
from typing import NamedTuple

import numpy as np

from regionnav.map.region import PlatformRegion
from regionnav.utils.logger import Logger
from regionnav.utils.vector import Vector


class Rendezvous(NamedTuple):
    """Absolute boarding and alighting times."""
    jump_time: float
    leave_time: float


def sample_waits(horizon: float, time_step: float) -> np.ndarray:
    """Candidate waits ``time_step, 2 * time_step, ...`` up to ``horizon`` inclusive."""
    count = int(np.floor(horizon / time_step + 1e-9))
    return np.arange(1, max(count, 1) + 1, dtype=float) * time_step


def compute_rendezvous(
    platform: PlatformRegion,
    position: Vector,
    now: float,
    time_step: float = 0.02,
    min_wait: float = 0.5,
    lead_time: float = 1.0,
) -> Rendezvous:
    """Compute the jump and leave times for an agent waiting at ``position``.

    Args:
        platform: Platform to board.
        position: Fixed boarding position of the agent.
        now: Current simulation time.
        time_step: Sampling step of the candidate waits.
        min_wait: Waits not longer than this are never chosen.
        lead_time: The agent jumps this long before the platform arrives.

    Returns:
        Rendezvous with ``jump_time = now + wait - lead_time`` and
        ``leave_time = jump_time + crossing duration``.

    Raises:
        ConfigurationError: If the platform does not move.
    """
    crossing = platform.crossing_duration()
    waits = sample_waits(2 * crossing, time_step)

    # rotate the agent backwards by the platform motion of every candidate wait
    center = platform.rotation_center
    angles = np.radians(-platform.rotation_speed * waits)
    rel_x = position.x - center.x
    rel_z = position.z - center.z
    xs = center.x + rel_x * np.cos(angles) + rel_z * np.sin(angles)
    zs = center.z - rel_x * np.sin(angles) + rel_z * np.cos(angles)

    anchor = platform.anchor_at(now)
    distances = np.sqrt((xs - anchor.x) ** 2 + (position.y - anchor.y) ** 2 + (zs - anchor.z) ** 2)

    eligible = np.flatnonzero(waits > min_wait)
    if eligible.size:
        # argmin returns the first of equal minima, so the earliest wait wins ties
        best = eligible[np.argmin(distances[eligible])]
    else:
        Logger.get_logger('Rendezvous').warning(
            f'No boarding wait above {min_wait} within {2 * crossing:.2f} for platform {platform.index}, '
            f'falling back to the first sample'
        )
        best = 0

    jump = float(waits[best]) - lead_time
    return Rendezvous(now + jump, now + jump + crossing)
