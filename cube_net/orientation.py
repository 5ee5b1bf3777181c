"""
orientation.py — Quarter-Turn Orientation Algebra
===================================================

Cardinal directions and the four-element rotation group used to glue
cube faces together.

Direction convention (clockwise, y grows downward):
    NORTH=0  (0, -1)
    EAST=1   (1, 0)
    SOUTH=2  (0, 1)
    WEST=3   (-1, 0)

An Orientation counts clockwise quarter turns, so it composes with a
direction index directly: resolve(o, d) = (o + d) % 4.
"""

from enum import IntEnum


# ============================================================
# Directions
# ============================================================

NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3

DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
EDGE_NAMES = 'NESW'

STEPS = {
    NORTH: (0, -1),
    EAST:  (1, 0),
    SOUTH: (0, 1),
    WEST:  (-1, 0),
}


def edge_name(direction):
    """Edge letter for a direction index."""
    return EDGE_NAMES[direction % 4]


def edge_index(name):
    """Direction index for an edge letter 'N', 'E', 'S' or 'W'."""
    if name not in ('N', 'E', 'S', 'W'):
        raise ValueError(f"Unknown edge: {name}")
    return EDGE_NAMES.index(name)


def opposite(direction):
    return (direction + 2) % 4


def turn_left(direction):
    return (direction - 1) % 4


def turn_right(direction):
    return (direction + 1) % 4


def perpendicular(direction):
    """The two directions at right angles to `direction`, ascending."""
    return tuple(sorted((turn_left(direction), turn_right(direction))))


def is_vertical(direction):
    return direction % 2 == 0


# ============================================================
# Orientation group
# ============================================================

class Orientation(IntEnum):
    """Clockwise quarter turns applied when crossing a seam."""
    SAME = 0
    ONE_CLOCKWISE = 1
    TWO_CLOCKWISE = 2
    THREE_CLOCKWISE = 3


def combine(a, b):
    """Compose two rotations: quarter-turn counts summed mod 4."""
    return Orientation((int(a) + int(b)) % 4)


def invert(o):
    """Inverse rotation: combine(o, invert(o)) == SAME."""
    return Orientation((4 - int(o)) % 4)


def resolve(o, direction):
    """Rotate a direction index by `o` clockwise quarter turns."""
    return (int(o) + direction) % 4


# ============================================================
# Cell rotation within a face
# ============================================================

def rotate_cell(x, y, size, o):
    """
    Rotate a local cell `o` clockwise quarter turns inside a size×size face.

    One quarter turn maps (x, y) -> (size-1-y, x): the top-left cell goes
    to the top-right, matching a heading change NORTH -> EAST.

    Args:
        x, y: local cell coordinates in [0, size)
        size: face edge length
        o: Orientation (or its integer count)

    Returns:
        (x, y) in the rotated frame
    """
    for _ in range(int(o) % 4):
        x, y = size - 1 - y, x
    return x, y
