"""Level data module: pydantic models of the level-authoring input.

A level file is a JSON document of the form::

    {
      "boxes":     [{"center": [x, y, z], "size": [sx, sy, sz]}],
      "portals":   [{"center": [...], "size": [...], "between": [a, b]}],
      "platforms": [{"center": [...], "size": [...], "between": [from, to],
                     "rotation_center": [...], "rotation_speed": 1.0,
                     "rotation_radius": 10.0, "anchor": [...], "phase_time": 0.0}],
      "finish_point": [x, y, z],
      "world": [{"tag": "Ground", "center": [...], "size": [...]}]
    }

Box regions are indexed by their position in ``boxes``. ``between`` pairs name box
indices and are validated here, so the region graph never has to guess adjacency.
"""
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from regionnav.utils.load_json import load_json
from regionnav.utils.vector import Vector
from regionnav.utils.volume import Volume

Triple = Tuple[float, float, float]


class VolumeModel(BaseModel):
    """An authored axis-aligned volume."""
    center: Triple
    size: Triple
    name: Optional[str] = None

    @field_validator('size')
    @classmethod
    def _check_size(cls, value):
        if any(component <= 0 for component in value):
            raise ValueError(f'volume size must be positive, got {value}')
        return value

    def to_volume(self) -> Volume:
        """Convert to a geometry Volume."""
        return Volume(Vector(self.center), Vector(self.size))


class BoxVolume(VolumeModel):
    """A box region of navigable space."""
    pass


class PortalVolume(VolumeModel):
    """A static portal bridging two box regions."""
    between: Tuple[int, int]


class PlatformVolume(VolumeModel):
    """A platform rotating around a fixed center, carrying the agent between two boxes.

    Attributes:
        between: (from, to) box indices.
        rotation_center: Center of the circular motion.
        rotation_speed: Angular speed in degrees per second.
        rotation_radius: Radius of the circular motion.
        anchor: Physical reference point of the platform at ``phase_time``; defaults to the center.
        phase_time: Clock value at which the platform occupied ``anchor``.
    """
    between: Tuple[int, int]
    rotation_center: Triple
    rotation_speed: float = 1.0
    rotation_radius: float = 10.0
    anchor: Optional[Triple] = None
    phase_time: float = 0.0

    @field_validator('rotation_radius')
    @classmethod
    def _check_radius(cls, value):
        if value < 0:
            raise ValueError(f'rotation radius must not be negative, got {value}')
        return value

    def anchor_point(self) -> Vector:
        """Return the authored anchor, falling back to the platform center."""
        return Vector(self.anchor if self.anchor is not None else self.center)


class WorldVolume(VolumeModel):
    """A tagged volume of the physical world, consumed by TaggedVolumeWorld."""
    tag: str


class LevelData(BaseModel):
    """The whole level-authoring input."""
    boxes: List[BoxVolume] = Field(min_length=1)
    portals: List[PortalVolume] = Field(default_factory=list)
    platforms: List[PlatformVolume] = Field(default_factory=list)
    finish_point: Triple
    world: List[WorldVolume] = Field(default_factory=list)

    @model_validator(mode='after')
    def _check_links(self):
        box_count = len(self.boxes)
        for kind, items in (('portal', self.portals), ('platform', self.platforms)):
            for i, item in enumerate(items):
                a, b = item.between
                if a == b:
                    raise ValueError(f'{kind} {i} links box {a} to itself')
                for index in (a, b):
                    if not 0 <= index < box_count:
                        raise ValueError(f'{kind} {i} references box {index}, but only {box_count} boxes exist')
        return self

    @classmethod
    def from_json_file(cls, file_path: str) -> 'LevelData':
        """Load and validate a level file.

        Raises:
            FileNotFoundError: If the file cannot be read.
            pydantic.ValidationError: If the document does not describe a valid level.
        """
        return cls.model_validate(load_json(file_path))
