#!/usr/bin/env python
"""
walk_cube_net.py — Fold a Net and Walk It
===========================================

Reads a net + instruction file, folds it into a cube and prints the
final password.

Usage:
    python walk_cube_net.py input.txt
    python walk_cube_net.py input.txt --edges      # also print the seam table
    python walk_cube_net.py input.txt --verbose    # resolution + walk trace
"""

import argparse
import sys

from cube_net.connectivity import edge_table
from cube_net.errors import InvalidWalk, MalformedNet
from cube_net.orientation import edge_name
from cube_net.system import make_cube_walk


def print_edges(graph):
    print(f"{'face':>4} {'edge':>4}   {'face':>4} {'edge':>4}   orientation")
    for face_a, edge_a, face_b, edge_b, orientation in edge_table(graph):
        print(f"{face_a:4d} {edge_a:>4}   {face_b:4d} {edge_b:>4}   {orientation.name}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fold a cube net and walk it")
    parser.add_argument('path', help='Net + instruction file')
    parser.add_argument('--edges', action='store_true',
                        help='Print the 12 inferred seams')
    parser.add_argument('--verbose', action='store_true',
                        help='Print resolution passes and every instruction')
    args = parser.parse_args(argv)

    with open(args.path) as f:
        text = f.read()

    try:
        result = make_cube_walk(text, verbose=args.verbose)
    except (MalformedNet, InvalidWalk) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.edges:
        print_edges(result['graph'])

    state = result['state']
    print(f"Final: face={state.face_id} x={state.x} y={state.y} "
          f"heading={edge_name(state.heading)}")
    print(result['password'])
    return 0


if __name__ == '__main__':
    sys.exit(main())
