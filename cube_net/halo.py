"""
Tile Halo Exchange — ghost rings for cube faces, jit-compiled per seam

Each face block (size, size) is padded to (size+2, size+2). After the
exchange, the ghost cell beyond edge E of face A holds the tile a walker
enters when it steps off A through E at that position. Ghost corners stay
ABSENT: three faces meet at a cube vertex, so there is no diagonal
neighbour.

Static arguments (faces, edges, orientation, size) are frozen with
functools.partial and every seam swap is jit-compiled once.
"""

from functools import partial

import jax
import jax.numpy as jnp
import numpy as np

from .connectivity import edge_table
from .net import ABSENT, face_block


def create_communication_schedule(graph):
    """
    12 seam swaps.

    Format: ((face_a, edge_a), (face_b, edge_b), orientation) where
    orientation is the a -> b quarter-turn count.
    """
    return tuple(((a, ea), (b, eb), int(o))
                 for a, ea, b, eb, o in edge_table(graph))


def face_blocks(graph, grid):
    """(6, size, size) stack of face tiles in face-id order."""
    return jnp.asarray(np.stack([
        face_block(grid, graph.size, face.face_row, face.face_col)
        for face in graph.faces]))


def extend_to_include_ghosts(blocks):
    """(6, size, size) -> (6, size+2, size+2) with an ABSENT ghost ring."""
    return jnp.pad(blocks, ((0, 0), (1, 1), (1, 1)), constant_values=ABSENT)


def extract_interior(blocks_ghosts, size):
    return blocks_ghosts[:, 1:size+1, 1:size+1]


def extract_boundary_data(flat_neighbour, edge, size):
    """
    Strip of a neighbour, already rotated into this face's frame, that
    borders `edge`.
    """
    if edge == "N":    # neighbour's bottom row
        return flat_neighbour[size-1, :]
    elif edge == "S":  # neighbour's top row
        return flat_neighbour[0, :]
    elif edge == "E":  # neighbour's left column
        return flat_neighbour[:, 0]
    elif edge == "W":  # neighbour's right column
        return flat_neighbour[:, size-1]
    else:
        raise ValueError(f"Unknown edge: {edge}")


def set_ghost_data(face_ghosts, edge, data, size):
    """Write (size,) values into the ghost strip beyond `edge`."""
    if edge == "N":
        return face_ghosts.at[0, 1:size+1].set(data)
    elif edge == "S":
        return face_ghosts.at[size+1, 1:size+1].set(data)
    elif edge == "E":
        return face_ghosts.at[1:size+1, size+1].set(data)
    elif edge == "W":
        return face_ghosts.at[1:size+1, 0].set(data)
    else:
        raise ValueError(f"Unknown edge: {edge}")


def exchange_edge_pair(blocks_ghosts, face_a, edge_a, face_b, edge_b,
                       orientation, size):
    """
    Bidirectional exchange across one seam.

    A neighbour seen from this face's frame is the neighbour's block
    rotated counter-clockwise (rot90) by the seam orientation.
    """
    interior_a = blocks_ghosts[face_a, 1:size+1, 1:size+1]
    interior_b = blocks_ghosts[face_b, 1:size+1, 1:size+1]

    data_to_a = extract_boundary_data(
        jnp.rot90(interior_b, orientation), edge_a, size)
    data_to_b = extract_boundary_data(
        jnp.rot90(interior_a, (4 - orientation) % 4), edge_b, size)

    blocks_ghosts = blocks_ghosts.at[face_a].set(
        set_ghost_data(blocks_ghosts[face_a], edge_a, data_to_a, size))
    blocks_ghosts = blocks_ghosts.at[face_b].set(
        set_ghost_data(blocks_ghosts[face_b], edge_b, data_to_b, size))
    return blocks_ghosts


def make_halo_exchange(graph, verbose=False):
    """
    Build a jit-compiled exchange over all 12 seams of `graph`.

    Returns:
        function (6, size+2, size+2) -> (6, size+2, size+2)
    """
    size = graph.size
    exchange_functions = []

    if verbose:
        print("Pre-compiling halo exchange functions...")

    for (face_a, edge_a), (face_b, edge_b), orientation in create_communication_schedule(graph):
        exchange_fn = partial(
            exchange_edge_pair,
            face_a=face_a, edge_a=edge_a,
            face_b=face_b, edge_b=edge_b,
            orientation=orientation, size=size
        )
        exchange_functions.append(jax.jit(exchange_fn))
        if verbose:
            print(f"  ({face_a},{edge_a}) <-> ({face_b},{edge_b}) [{orientation}]")

    def cube_halo_exchange(blocks_ghosts):
        for exchange_fn in exchange_functions:
            blocks_ghosts = exchange_fn(blocks_ghosts)
        return blocks_ghosts

    return jax.jit(cube_halo_exchange)


def exchange_tile_halos(graph, grid, halo_exchange_fn=None):
    """
    Convenience function: cut faces, extend, exchange.

    Returns:
        (6, size+2, size+2) tile codes with filled ghost rings
    """
    blocks_ghosts = extend_to_include_ghosts(face_blocks(graph, grid))
    if halo_exchange_fn is not None:
        return halo_exchange_fn(blocks_ghosts)
    for (face_a, edge_a), (face_b, edge_b), orientation in create_communication_schedule(graph):
        blocks_ghosts = exchange_edge_pair(
            blocks_ghosts, face_a, edge_a, face_b, edge_b, orientation, graph.size)
    return blocks_ghosts


def surface_tiles(graph, grid, halo_exchange_fn=None):
    """
    Haloed surface the walker reads from, as a host numpy array.

    Returns:
        (6, size+2, size+2) int8 tile codes
    """
    return np.asarray(exchange_tile_halos(graph, grid, halo_exchange_fn))
