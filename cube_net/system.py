"""
system.py — Full Cube Walk Assembly
=====================================

Text in, password out: parse the net, size the faces, resolve the face
graph, fill the face halos, walk the instructions.
"""

from .connectivity import build_face_graph
from .halo import make_halo_exchange, surface_tiles
from .net import face_size, parse_net
from .walker import initial_state, password, walk


def make_cube_walk(text, verbose=False):
    """
    Run the whole pipeline on puzzle text.

    Args:
        text: net map, blank line, instruction line
        verbose: print graph resolution and walk progress

    Returns:
        dict with keys:
            grid:          (rows, cols) int8 tile grid
            size:          face edge length
            graph:         resolved FaceGraph
            halo_exchange: jit-compiled ghost-ring exchange for the graph
            tiles:         (6, size+2, size+2) haloed surface
            instructions:  parsed instruction list
            start:         initial WalkerState
            state:         final WalkerState
            password:      integer score of the final state
    """
    grid, instructions = parse_net(text)
    size = face_size(grid)
    graph = build_face_graph(grid, size, verbose=verbose)
    halo_exchange = make_halo_exchange(graph, verbose=verbose)
    tiles = surface_tiles(graph, grid, halo_exchange)
    start = initial_state(graph)
    state = walk(graph, tiles, instructions, state=start, verbose=verbose)

    return {
        'grid': grid,
        'size': size,
        'graph': graph,
        'halo_exchange': halo_exchange,
        'tiles': tiles,
        'instructions': instructions,
        'start': start,
        'state': state,
        'password': password(graph, state),
    }
