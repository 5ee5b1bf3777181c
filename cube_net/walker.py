"""
walker.py — Walking the Folded Cube Surface
=============================================

A walker carries (face, local x, local y, heading). Moves are processed
one tile at a time; leaving a face goes through the seam stored for the
current heading, rotating both the entry cell and the heading by the
seam's orientation.

Tiles are read from the haloed surface (halo.surface_tiles): a
(6, size+2, size+2) array whose ghost ring already holds the tile across
each seam, so a step off a face sees its destination without a second
lookup.

Password: 1000 * (row + 1) + 4 * (col + 1) + facing, with global row/col
and facing E=0, S=1, W=2, N=3.
"""

from numbers import Integral
from typing import NamedTuple

from .connectivity import face_offset
from .errors import InvalidWalk
from .net import ABSENT, TURN_LEFT, TURN_RIGHT, WALL
from .orientation import EAST, STEPS, edge_name, resolve, rotate_cell, turn_left, turn_right


class WalkerState(NamedTuple):
    face_id: int
    x: int
    y: int
    heading: int


def initial_state(graph):
    """Top-left tile of the first face, heading east."""
    return WalkerState(graph.faces[0].id, 0, 0, EAST)


def surface_tile(tiles, face_id, x, y):
    """Tile code at local (x, y); x or y of -1 or size reads the ghost ring."""
    return int(tiles[face_id, y + 1, x + 1])


def turn(state, instruction):
    if instruction == TURN_LEFT:
        return state._replace(heading=turn_left(state.heading))
    if instruction == TURN_RIGHT:
        return state._replace(heading=turn_right(state.heading))
    raise ValueError(f"Unknown turn: {instruction!r}")


def cross_edge(graph, state):
    """
    State just across the edge the walker faces, ignoring walls.

    The stepped-out cell is wrapped into [0, size) as if the neighbour lay
    flat beside the current face, then rotated into the neighbour's frame.
    """
    connection = graph.faces[state.face_id].connections[state.heading]
    if connection is None:
        raise InvalidWalk(
            f"Face {state.face_id} has no seam on edge {edge_name(state.heading)}")
    size = graph.size
    dx, dy = STEPS[state.heading]
    x, y = rotate_cell((state.x + dx) % size, (state.y + dy) % size, size,
                       connection.orientation)
    return WalkerState(connection.face_id, x, y,
                       resolve(connection.orientation, state.heading))


def step(graph, tiles, state):
    """
    Advance one tile.

    Args:
        graph: resolved FaceGraph
        tiles: haloed surface from halo.surface_tiles
        state: current WalkerState

    Returns:
        new WalkerState, or None if a wall blocks the move
    """
    size = graph.size
    dx, dy = STEPS[state.heading]
    x, y = state.x + dx, state.y + dy
    if 0 <= x < size and 0 <= y < size:
        candidate = state._replace(x=x, y=y)
    else:
        candidate = cross_edge(graph, state)

    code = surface_tile(tiles, state.face_id, x, y)
    if code == ABSENT:
        raise InvalidWalk(
            f"Tile ({candidate.x}, {candidate.y}) of face {candidate.face_id} is absent")
    if code == WALL:
        return None
    return candidate


def move(graph, tiles, state, steps):
    """Up to `steps` tiles forward, stopping at the first wall."""
    for _ in range(steps):
        nxt = step(graph, tiles, state)
        if nxt is None:
            break
        state = nxt
    return state


def is_move(instruction):
    """Non-negative integer step count; bools are not moves."""
    return (isinstance(instruction, Integral) and not isinstance(instruction, bool)
            and instruction >= 0)


def walk(graph, tiles, instructions, state=None, verbose=False):
    """
    Follow an instruction list over the cube surface.

    Args:
        graph: resolved FaceGraph
        tiles: haloed surface from halo.surface_tiles
        instructions: sequence of 'L', 'R' or non-negative ints
        state: starting WalkerState (default: initial_state(graph))
        verbose: print the state after each instruction

    Returns:
        final WalkerState
    """
    if state is None:
        state = initial_state(graph)
    for i, instruction in enumerate(instructions):
        if isinstance(instruction, str) and instruction in (TURN_LEFT, TURN_RIGHT):
            state = turn(state, instruction)
        elif is_move(instruction):
            state = move(graph, tiles, state, int(instruction))
        else:
            raise ValueError(f"Unknown instruction: {instruction!r}")
        if verbose:
            print(f"  [{i:4d}] {instruction!s:>4}  face={state.face_id} "
                  f"x={state.x} y={state.y} heading={edge_name(state.heading)}")
    return state


# ============================================================
# Scoring
# ============================================================

def global_position(graph, state):
    """Global (col, row) of the walker."""
    x0, y0 = face_offset(graph, state.face_id)
    return x0 + state.x, y0 + state.y


def facing_value(heading):
    """E=0, S=1, W=2, N=3."""
    return (heading - EAST) % 4


def password(graph, state):
    col, row = global_position(graph, state)
    return 1000 * (row + 1) + 4 * (col + 1) + facing_value(state.heading)
