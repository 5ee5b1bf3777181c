"""
cube_net — Cube-Net Folding and Surface Walking
=================================================

Folds a flat six-face net into a cube, then walks a marker over the
folded surface.

Modules:
    orientation  — directions, quarter-turn Orientation group, cell rotation
    errors       — MalformedNet, InvalidWalk
    net          — text parsing, tile grid, face size, tile lookup
    connectivity — face graph builder (flat seams + corner rule), seam table,
                   cube corner groups
    walker       — tile-by-tile walk, seam crossing, password
    halo         — ghost-ring exchange of face blocks (jax)
    system       — text -> password assembly
"""
