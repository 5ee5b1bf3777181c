"""
connectivity.py — Cube-Net Face Graph
=======================================

Folds a flat net of six square faces into a cube by inferring which
edges glue together and how a heading rotates across each seam.

Faces are numbered in row-major scan order over face-grid positions.
Each face has four connection slots indexed by direction (N, E, S, W).

Connection semantics:
    faces[a].connections[d] = Connection(b, o)
    Leaving face a through edge d enters face b with heading resolve(o, d).
    The mirror lives on b at edge opposite(resolve(o, d)) and carries
    invert(o).

Resolution:
    1. Net-adjacent faces (above / left) are glued with SAME.
    2. Corner rule, iterated to a fixed point: if face F reaches V through
       a direction P perpendicular to the missing direction D, and V
       reaches a third face T in the direction D maps to, then F, V, T
       share a cube vertex and F's edge D glues to T.

Corner k of a face sits between edges k and k+1:
    0 = NE, 1 = SE, 2 = SW, 3 = NW
"""

from typing import NamedTuple, Optional, Tuple

from .errors import MalformedNet
from .net import ABSENT, face_block, face_grid_shape
from .orientation import (
    DIRECTIONS, NORTH, STEPS, WEST, Orientation, combine, edge_name, invert,
    opposite, perpendicular, resolve,
)


FACES_PER_CUBE = 6
CONNECTIONS_PER_CUBE = 24   # 12 seams, both directions
MAX_PASSES = 12


class Connection(NamedTuple):
    face_id: int
    orientation: Orientation


class Face(NamedTuple):
    """One square of the net; connections indexed by direction."""
    id: int
    face_row: int
    face_col: int
    connections: Tuple[Optional[Connection], ...]


class FaceGraph(NamedTuple):
    """Resolved cube: face edge length plus the six faces."""
    size: int
    faces: Tuple[Face, ...]


# ============================================================
# Corner rule
# ============================================================

# (parity of the missing direction, sign of dx*dy) -> base quarter turn,
# where (dx, dy) = step(via_direction) + step(direction).
# Parity 0 is a vertical edge (N/S), parity 1 horizontal (E/W).
CORNER_TURN = {
    (0, -1): Orientation.ONE_CLOCKWISE,
    (0, +1): Orientation.THREE_CLOCKWISE,
    (1, +1): Orientation.ONE_CLOCKWISE,
    (1, -1): Orientation.THREE_CLOCKWISE,
}


def corner_turn(direction, via_direction):
    """Base rotation for gluing `direction` around the corner at `via_direction`."""
    if via_direction not in perpendicular(direction):
        raise ValueError(
            f"{edge_name(via_direction)} is not perpendicular to {edge_name(direction)}")
    sx, sy = STEPS[via_direction]
    tx, ty = STEPS[direction]
    return CORNER_TURN[(direction % 2, (sx + tx) * (sy + ty))]


def infer_connection(slots, face_id, direction, via_direction):
    """
    Derive the connection for an unresolved edge from one known neighbour.

    Args:
        slots: per-face connection slots, slots[face][direction]
        face_id: face with the missing edge
        direction: the missing edge
        via_direction: a resolved edge perpendicular to `direction`

    Returns:
        Connection, or None if the corner is not yet known
    """
    link = slots[face_id][via_direction]
    if link is None:
        return None
    via_id, via_orientation = link
    target = slots[via_id][resolve(via_orientation, direction)]
    if target is None or target.face_id == face_id:
        return None
    orientation = combine(
        combine(corner_turn(direction, via_direction), via_orientation),
        target.orientation)
    return Connection(target.face_id, orientation)


def mirror_of(face_id, direction, connection):
    """(direction, Connection) the destination face holds back to face_id."""
    back = opposite(resolve(connection.orientation, direction))
    return back, Connection(face_id, invert(connection.orientation))


def _install(slots, face_id, direction, connection):
    back, mirror = mirror_of(face_id, direction, connection)
    for owner, slot, value in ((face_id, direction, connection),
                               (connection.face_id, back, mirror)):
        existing = slots[owner][slot]
        if existing is not None and existing != value:
            raise MalformedNet(
                f"Conflicting seam at face {owner} edge {edge_name(slot)}: "
                f"{tuple(existing)} vs {tuple(value)}")
        slots[owner][slot] = value


def _count(slots):
    return sum(c is not None for face in slots for c in face)


# ============================================================
# Graph construction
# ============================================================

def scan_faces(grid, size):
    """
    Locate populated face blocks in row-major order.

    Returns:
        list of (face_row, face_col)
    """
    if size <= 0:
        raise MalformedNet(f"Face size must be positive, got {size}")
    positions = []
    rows, cols = face_grid_shape(grid, size)
    for face_row in range(rows):
        for face_col in range(cols):
            block = face_block(grid, size, face_row, face_col)
            filled = block != ABSENT
            if not filled.any():
                continue
            if not filled.all():
                raise MalformedNet(
                    f"Face block at ({face_row}, {face_col}) is only partly filled")
            positions.append((face_row, face_col))
    return positions


def build_face_graph(grid, size, max_passes=MAX_PASSES, verbose=False):
    """
    Build the fully resolved face graph for a cube net.

    Args:
        grid: (rows, cols) tile grid from net.parse_net
        size: face edge length
        max_passes: cap on corner-rule passes
        verbose: print resolution progress

    Returns:
        FaceGraph with 24 connections

    Raises:
        MalformedNet: not six complete faces, or the net cannot be stitched
    """
    positions = scan_faces(grid, size)
    if len(positions) != FACES_PER_CUBE:
        raise MalformedNet(
            f"Expected {FACES_PER_CUBE} faces, found {len(positions)}")

    index = {pos: face_id for face_id, pos in enumerate(positions)}
    slots = [[None] * 4 for _ in positions]

    # Flat seams never rotate the heading
    for face_id, (face_row, face_col) in enumerate(positions):
        up = index.get((face_row - 1, face_col))
        left = index.get((face_row, face_col - 1))
        if up is not None:
            _install(slots, face_id, NORTH, Connection(up, Orientation.SAME))
        if left is not None:
            _install(slots, face_id, WEST, Connection(left, Orientation.SAME))

    if verbose:
        print(f"Face graph: size={size}, {_count(slots)} flat connections")

    passes = 0
    while _count(slots) < CONNECTIONS_PER_CUBE:
        if passes >= max_passes:
            raise MalformedNet(f"Net not resolved after {max_passes} passes")
        passes += 1
        before = _count(slots)

        for face_id in range(len(slots)):
            for direction in DIRECTIONS:
                if slots[face_id][direction] is not None:
                    continue
                for via_direction in perpendicular(direction):
                    connection = infer_connection(slots, face_id, direction, via_direction)
                    if connection is not None:
                        _install(slots, face_id, direction, connection)
                        break

        added = _count(slots) - before
        if verbose:
            print(f"  Pass {passes}: +{added} ({_count(slots)}/{CONNECTIONS_PER_CUBE})")
        if added == 0:
            raise MalformedNet(
                f"No new connection in pass {passes} "
                f"({before}/{CONNECTIONS_PER_CUBE} resolved)")

    for face_id, face_slots in enumerate(slots):
        neighbours = {c.face_id for c in face_slots}
        if len(neighbours) != 4 or face_id in neighbours:
            raise MalformedNet(f"Face {face_id} has neighbours {sorted(neighbours)}")

    faces = tuple(
        Face(face_id, face_row, face_col, tuple(slots[face_id]))
        for face_id, (face_row, face_col) in enumerate(positions))
    return FaceGraph(size, faces)


# ============================================================
# Queries
# ============================================================

def connection_slots(graph):
    """Per-face connection slots, the shape infer_connection expects."""
    return [face.connections for face in graph.faces]


def connection_count(graph):
    return _count(connection_slots(graph))


def face_offset(graph, face_id):
    """Global (x, y) of a face's top-left tile."""
    face = graph.faces[face_id]
    return face.face_col * graph.size, face.face_row * graph.size


def face_id_at(graph, x, y):
    """Face owning global tile (x, y), or None."""
    for face in graph.faces:
        x0, y0 = face_offset(graph, face.id)
        if x0 <= x < x0 + graph.size and y0 <= y < y0 + graph.size:
            return face.id
    return None


def edge_table(graph):
    """
    The 12 seams as (face_a, edge_a, face_b, edge_b, orientation).

    Each seam is listed once, from the side with the smaller
    (face, direction) pair; orientation is the a -> b rotation.
    """
    edges = []
    for face in graph.faces:
        for direction, connection in enumerate(face.connections):
            back, _ = mirror_of(face.id, direction, connection)
            if (face.id, direction) < (connection.face_id, back):
                edges.append((face.id, edge_name(direction),
                              connection.face_id, edge_name(back),
                              connection.orientation))
    return edges


def corner_groups(graph):
    """
    Group face corners that meet at the same cube vertex.

    Seam endpoints are paired, then closed transitively.

    Returns:
        list of sorted [(face_id, corner), ...] groups of three
    """
    corner_map = {}
    for face in graph.faces:
        for direction, connection in enumerate(face.connections):
            o = int(connection.orientation)
            pairs = (
                ((face.id, direction), (connection.face_id, (direction + 1 + o) % 4)),
                ((face.id, (direction - 1) % 4), (connection.face_id, (direction + 2 + o) % 4)),
            )
            for key_a, key_b in pairs:
                corner_map.setdefault(key_a, {key_a}).add(key_b)
                corner_map.setdefault(key_b, {key_b}).add(key_a)

    # Transitive closure
    changed = True
    while changed:
        changed = False
        for key in list(corner_map.keys()):
            group = set(corner_map[key])
            for member in list(group):
                new = corner_map[member]
                if not new.issubset(group):
                    group.update(new)
                    changed = True
            corner_map[key] = group

    seen = set()
    groups = []
    for group in corner_map.values():
        frozen = frozenset(group)
        if frozen not in seen and len(group) == 3:
            seen.add(frozen)
            groups.append(sorted(group))
    return sorted(groups)
