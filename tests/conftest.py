import os
from pathlib import Path

import pytest

# Marker applied to every test collected below each directory
_DIRECTORY_MARKERS = {
    "domain": "domain",
    "application": "application",
    "bdd": "bdd",
    "integration": "integration",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Protean config overlay to run the suite against",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the storefront domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    for item in items:
        parts = Path(str(item.fspath)).parts
        for directory, marker in _DIRECTORY_MARKERS.items():
            if directory in parts:
                item.add_marker(getattr(pytest.mark, marker))
                break

        if item.get_closest_marker("integration") and not item.get_closest_marker("fast"):
            item.add_marker(pytest.mark.slow)
