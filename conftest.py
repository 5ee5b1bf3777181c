"""Root conftest.py — --runslow gate for the exhaustive all-nets sweeps."""

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False,
        help="sweep every rotation/reflection of the 11 cube nets"
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: exhaustive net sweep, needs --runslow")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
