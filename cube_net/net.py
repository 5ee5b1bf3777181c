"""
net.py — Tile Grid Construction for Cube Nets
===============================================

Turns the puzzle text into a rectangular numpy tile grid plus an
instruction list, and answers tile queries in face-local coordinates.

Text layout:
    ' '  absent (outside the net)
    '.'  open floor
    '#'  wall
A blank line separates the map from a single instruction line such as
``10R5L5R10L4R5L5``.

Grid layout: grid[row, col] with row = global y, col = global x.
Face (face_row, face_col) owns rows face_row*size .. face_row*size+size-1
and the matching columns.
"""

import math
import re

import numpy as np

from .errors import MalformedNet


# ============================================================
# Tile codes
# ============================================================

ABSENT = 0
FLOOR = 1
WALL = 2

TILE_CODES = {' ': ABSENT, '.': FLOOR, '#': WALL}
TILE_CHARS = {code: char for char, code in TILE_CODES.items()}

TURN_LEFT = 'L'
TURN_RIGHT = 'R'


# ============================================================
# Parsing
# ============================================================

def parse_instructions(line):
    """
    Split an instruction line into turns and step counts.

    Args:
        line: e.g. "10R5L5"

    Returns:
        list like [10, 'R', 5, 'L', 5]; turns are 'L'/'R', moves are ints
    """
    line = line.strip()
    tokens = re.findall(r'\d+|[LR]', line)
    if ''.join(tokens) != line:
        raise ValueError(f"Unparseable instruction line: {line!r}")
    return [tok if tok in (TURN_LEFT, TURN_RIGHT) else int(tok) for tok in tokens]


def grid_from_rows(rows):
    """Build an int8 tile grid from map rows, right-padding with ABSENT."""
    width = max((len(r) for r in rows), default=0)
    grid = np.full((len(rows), width), ABSENT, dtype=np.int8)
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char not in TILE_CODES:
                raise MalformedNet(f"Unknown map character {char!r} at ({x}, {y})")
            grid[y, x] = TILE_CODES[char]
    return grid


def parse_net(text):
    """
    Parse puzzle text into (grid, instructions).

    Leading blank lines are ignored; the first blank line after the map
    ends it. A missing instruction line gives an empty instruction list.
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)

    rows = []
    rest = []
    for i, line in enumerate(lines):
        if not line.strip():
            rest = lines[i + 1:]
            break
        rows.append(line.rstrip('\r\n'))

    if not rows:
        raise MalformedNet("Net text contains no map rows")

    instructions = []
    for line in rest:
        if line.strip():
            instructions = parse_instructions(line)
            break

    return grid_from_rows(rows), instructions


def render_grid(grid):
    """Inverse of grid_from_rows, trailing absent tiles trimmed."""
    return '\n'.join(
        ''.join(TILE_CHARS[int(c)] for c in row).rstrip() for row in grid)


# ============================================================
# Face size
# ============================================================

def face_size_from_tile_count(tile_count):
    """
    Edge length of one face given the number of filled tiles in the net.

    A cube has six equal square faces, so tile_count / 6 must be a
    perfect square.
    """
    if tile_count <= 0 or tile_count % 6 != 0:
        raise MalformedNet(f"{tile_count} tiles cannot form six equal faces")
    area = tile_count // 6
    size = math.isqrt(area)
    if size * size != area:
        raise MalformedNet(f"Per-face area {area} is not a perfect square")
    return size


def face_size(grid):
    return face_size_from_tile_count(int(np.count_nonzero(grid != ABSENT)))


# ============================================================
# Tile queries
# ============================================================

def tile(grid, size, face_row, face_col, x, y):
    """
    Tile code at local (x, y) of the face at (face_row, face_col).

    Positions outside the grid array are ABSENT.
    """
    row = face_row * size + y
    col = face_col * size + x
    if row < 0 or col < 0 or row >= grid.shape[0] or col >= grid.shape[1]:
        return ABSENT
    return int(grid[row, col])


def face_block(grid, size, face_row, face_col):
    """(size, size) view of one face; short blocks are padded with ABSENT."""
    block = np.full((size, size), ABSENT, dtype=grid.dtype)
    part = grid[face_row * size:(face_row + 1) * size,
                face_col * size:(face_col + 1) * size]
    block[:part.shape[0], :part.shape[1]] = part
    return block


def face_grid_shape(grid, size):
    """Number of face rows and columns the grid spans."""
    return (-(-grid.shape[0] // size), -(-grid.shape[1] // size))
