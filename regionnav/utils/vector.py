"""Three-dimensional vector utilities module, providing Vector class and related operations.

The level uses engine-style axes: ``y`` is up and the walkable plane is ``x``/``z``.
"""
import math
from dataclasses import dataclass


@dataclass
class Vector:
    """Three-dimensional vector class.

    Coordinates are rounded to 4 decimals on construction, and equality is tolerant,
    so positions produced by repeated stepping compare equal to authored ones.

    Attributes:
        x: X coordinate.
        y: Y coordinate (up).
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    def __init__(self, x, y=None, z=None):
        """Initialize the vector.

        Accepts three scalars, a list/tuple of three numbers, a dict with ``x``/``y``/``z``
        keys, a string like ``'(1, 2, 3)'`` or another Vector.

        Args:
            x: X coordinate, or a whole vector in one of the formats above.
            y: Y coordinate.
            z: Z coordinate.
        """
        if y is None and isinstance(x, Vector):
            coords = (x.x, x.y, x.z)
        elif y is None and isinstance(x, (list, tuple)):
            if len(x) != 3:
                raise ValueError(f'Invalid vector sequence length: {x}')
            coords = x
        elif y is None and isinstance(x, str):
            clean_str = x.replace(' ', '').strip('()[]{}')
            coords = clean_str.split(',')
            if len(coords) != 3:
                raise ValueError(f'Invalid vector string format: {x}')
        elif y is None and isinstance(x, dict):
            coords = (x.get('x', 0), x.get('y', 0), x.get('z', 0))
        else:
            coords = (x, y if y is not None else 0.0, z if z is not None else 0.0)

        self.x = round(float(coords[0]), 4)
        self.y = round(float(coords[1]), 4)
        self.z = round(float(coords[2]), 4)

    @classmethod
    def zero(cls) -> 'Vector':
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def up(cls) -> 'Vector':
        """Return the unit up vector."""
        return cls(0.0, 1.0, 0.0)

    def normalize(self) -> 'Vector':
        """Normalize the vector.

        Returns:
            Normalized vector, or the zero vector if the length is zero.
        """
        magnitude = math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)
        if magnitude == 0:
            return Vector.zero()
        return Vector(self.x / magnitude, self.y / magnitude, self.z / magnitude)

    def rotate_about_up(self, degrees: float) -> 'Vector':
        """Rotate the vector around the vertical axis.

        A positive angle turns ``+z`` towards ``+x`` (clockwise seen from above).

        Args:
            degrees: Rotation angle in degrees.

        Returns:
            Rotated vector; ``y`` is unchanged.
        """
        angle = math.radians(degrees)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector(
            self.x * cos_a + self.z * sin_a,
            self.y,
            -self.x * sin_a + self.z * cos_a,
        )

    def __add__(self, other: 'Vector') -> 'Vector':
        """Vector addition."""
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector') -> 'Vector':
        """Vector subtraction."""
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> 'Vector':
        """Vector negation."""
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, other: float) -> 'Vector':
        """Vector multiplication by a scalar."""
        return Vector(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> 'Vector':
        """Vector division by a scalar."""
        return Vector(self.x / other, self.y / other, self.z / other)

    def distance(self, other: 'Vector') -> float:
        """Calculate the Euclidean distance to another vector."""
        return math.sqrt(self.sqr_distance(other))

    def sqr_distance(self, other: 'Vector') -> float:
        """Calculate the squared Euclidean distance to another vector."""
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2

    def _grid_key(self) -> tuple:
        # equality and hashing both use the 1e-3 grid
        return (round(self.x * 1000), round(self.y * 1000), round(self.z * 1000))

    def __eq__(self, other: 'Vector') -> bool:
        """Check if two vectors are equal.

        Coordinates are compared on a 1e-3 grid, allowing small errors.
        """
        if not isinstance(other, Vector):
            return False
        return self._grid_key() == other._grid_key()

    def __hash__(self) -> int:
        """Calculate hash value of the vector, consistent with the tolerant equality."""
        return hash(self._grid_key())

    def dot(self, other: 'Vector') -> float:
        """Calculate dot product with another vector."""
        return round(self.x * other.x + self.y * other.y + self.z * other.z, 4)

    def cross(self, other: 'Vector') -> 'Vector':
        """Calculate cross product with another vector."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Calculate length of the vector."""
        return round(math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2), 4)

    def to_tuple(self) -> tuple:
        """Return the coordinates as an ``(x, y, z)`` tuple."""
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        """Return a compact readable representation."""
        return f'({self.x}, {self.y}, {self.z})'
