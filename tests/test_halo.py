"""
test_halo.py — Tile Halo Exchange Tests
=========================================

Verifies:
  - Ghost cells hold exactly the tile a walker enters across each seam
  - Ghost corners stay ABSENT (no diagonal neighbour at a cube vertex)
  - Pre-compiled and plain exchanges agree
"""

import itertools

import numpy as np
import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cube_net.halo import (
    create_communication_schedule, exchange_tile_halos, extend_to_include_ghosts,
    extract_interior, face_blocks, make_halo_exchange, set_ghost_data,
    extract_boundary_data, surface_tiles,
)
from cube_net.net import ABSENT, tile
from cube_net.orientation import DIRECTIONS, EAST, NORTH, SOUTH, WEST
from cube_net.walker import WalkerState, cross_edge


def edge_cell(heading, k, size):
    """Local cell k along the edge faced by `heading`, and its ghost index."""
    return {
        NORTH: ((k, 0), (0, 1 + k)),
        SOUTH: ((k, size - 1), (size + 1, 1 + k)),
        EAST:  ((size - 1, k), (1 + k, size + 1)),
        WEST:  ((0, k), (1 + k, 0)),
    }[heading]


class TestSchedule:

    def test_12_swaps(self, sample_graph):
        schedule = create_communication_schedule(sample_graph)
        assert len(schedule) == 12
        faces = [f for (fa, _), (fb, _), _ in schedule for f in (fa, fb)]
        assert all(faces.count(f) == 4 for f in range(6))


class TestGhostCells:

    def test_interior_unchanged(self, sample_graph, sample_grid):
        ghosts = exchange_tile_halos(sample_graph, sample_grid)
        assert ghosts.shape == (6, 6, 6)
        blocks = np.asarray(face_blocks(sample_graph, sample_grid))
        np.testing.assert_array_equal(np.asarray(extract_interior(ghosts, 4)), blocks)

    def test_ghosts_match_walker(self, sample_graph, sample_grid):
        size = sample_graph.size
        ghosts = np.asarray(exchange_tile_halos(sample_graph, sample_grid))
        for face, heading, k in itertools.product(range(6), DIRECTIONS, range(size)):
            (x, y), (gi, gj) = edge_cell(heading, k, size)
            across = cross_edge(sample_graph, WalkerState(face, x, y, heading))
            dest = sample_graph.faces[across.face_id]
            expected = tile(sample_grid, size, dest.face_row, dest.face_col,
                            across.x, across.y)
            assert int(ghosts[face, gi, gj]) == expected, \
                f"Face {face} heading {heading} k={k}"

    def test_known_wall_ghost(self, sample_graph, sample_grid):
        """Face 2 north ghost at x=2 is the wall at global (8, 2)."""
        ghosts = np.asarray(exchange_tile_halos(sample_graph, sample_grid))
        assert int(ghosts[2, 0, 3]) == 2

    def test_corners_absent(self, sample_graph, sample_grid):
        ghosts = np.asarray(exchange_tile_halos(sample_graph, sample_grid))
        for i, j in itertools.product((0, 5), repeat=2):
            assert (ghosts[:, i, j] == ABSENT).all()

    def test_open_cube_ghosts_filled(self, sample_graph, open_sample_grid):
        ghosts = np.asarray(exchange_tile_halos(sample_graph, open_sample_grid))
        ring = np.ones((6, 6), dtype=bool)
        ring[1:5, 1:5] = False
        for i, j in itertools.product((0, 5), repeat=2):
            ring[i, j] = False
        assert (ghosts[:, ring] != ABSENT).all()


class TestPrecompiled:

    def test_jit_matches_plain(self, sample_graph, sample_grid, capsys):
        halo_fn = make_halo_exchange(sample_graph, verbose=True)
        assert "Pre-compiling" in capsys.readouterr().out
        fast = exchange_tile_halos(sample_graph, sample_grid, halo_fn)
        slow = exchange_tile_halos(sample_graph, sample_grid)
        np.testing.assert_array_equal(np.asarray(fast), np.asarray(slow))

    def test_surface_tiles_on_host(self, sample_graph, sample_grid):
        tiles = surface_tiles(sample_graph, sample_grid)
        assert isinstance(tiles, np.ndarray)
        np.testing.assert_array_equal(
            tiles, np.asarray(exchange_tile_halos(sample_graph, sample_grid)))

    def test_extend_pads_with_absent(self, sample_graph, sample_grid):
        ghosts = np.asarray(extend_to_include_ghosts(face_blocks(sample_graph, sample_grid)))
        assert ghosts.shape == (6, 6, 6)
        assert (ghosts[:, 0, :] == ABSENT).all()
        assert (ghosts[:, :, 5] == ABSENT).all()


class TestEdgeValidation:

    def test_unknown_edge(self, sample_graph, sample_grid):
        blocks = face_blocks(sample_graph, sample_grid)
        with pytest.raises(ValueError):
            extract_boundary_data(blocks[0], "X", 4)
        with pytest.raises(ValueError):
            set_ghost_data(extend_to_include_ghosts(blocks)[0], "X", blocks[0][0], 4)
