"""
errors.py — Fatal error kinds for net folding and walking.
"""


class MalformedNet(ValueError):
    """The tile grid is not the unfolding of a cube."""


class InvalidWalk(RuntimeError):
    """A walk needed a seam or tile that a resolved graph must have."""
