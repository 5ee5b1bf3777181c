"""
conftest.py — Shared pytest fixtures for the cube-net test suite
"""

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cube_net.connectivity import build_face_graph
from cube_net.halo import surface_tiles
from cube_net.net import FLOOR, WALL, parse_net

from netgen import SAMPLE_TEXT, net_variants, open_grid


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT


@pytest.fixture
def sample_grid():
    grid, _ = parse_net(SAMPLE_TEXT)
    return grid


@pytest.fixture
def sample_instructions():
    _, instructions = parse_net(SAMPLE_TEXT)
    return instructions


@pytest.fixture
def sample_graph(sample_grid):
    return build_face_graph(sample_grid, 4)


@pytest.fixture
def sample_tiles(sample_graph, sample_grid):
    """Haloed sample surface the walker reads from."""
    return surface_tiles(sample_graph, sample_grid)


@pytest.fixture
def open_sample_grid(sample_grid):
    """Sample layout with every wall replaced by floor."""
    grid = sample_grid.copy()
    grid[grid == WALL] = FLOOR
    return grid


@pytest.fixture
def open_sample_tiles(sample_graph, open_sample_grid):
    return surface_tiles(sample_graph, open_sample_grid)


@pytest.fixture
def cube_nets():
    """(pattern, open grid) for every net variant at face size 3."""
    return [(p, open_grid(p, 3)) for p in net_variants()]
