"""Movement properties module: the kinematic profile the local search expands with."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from regionnav.config import Config


class MovementProperties(BaseModel):
    """Movement profile of an agent.

    Attributes:
        max_speed: Forward speed, units per second.
        rotation_angle: Max steering angle of one step, degrees.
        angle_steps: ``k``; the search tries ``2k + 1`` steering angles.
        epsilon: Distance under which the goal counts as reached.
        delta_time: Duration of one search generation.
        delta_dist: Resolution of the duplicate-detection grid.
    """
    model_config = ConfigDict(frozen=True)

    max_speed: float = Field(5.0, gt=0)
    rotation_angle: float = Field(30.0, ge=0)
    angle_steps: int = Field(2, ge=0)
    epsilon: float = Field(0.1, gt=0)
    delta_time: float = Field(0.5, gt=0)
    delta_dist: float = Field(0.5, gt=0)

    @classmethod
    def from_config(cls, config: Config) -> 'MovementProperties':
        """Build the default profile from the ``movement`` section of a Config."""
        return cls(**config.section('movement'))

    @property
    def step_length(self) -> float:
        """Distance covered by one step successor."""
        return self.max_speed * self.delta_time

    def steering_angles(self) -> List[float]:
        """The ``2k + 1`` steering angles, from ``-rotation_angle`` to ``+rotation_angle``."""
        if self.angle_steps == 0:
            return [0.0]
        return [i * self.rotation_angle / self.angle_steps for i in range(-self.angle_steps, self.angle_steps + 1)]
