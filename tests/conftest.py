import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from roomgrid.layout import GridLayoutGenerator, LayoutConfig, RecordingSink  # noqa: E402


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "structure: invariant sweeps over many seeds")


@pytest.fixture(autouse=True)
def _quiet_layout_logs(monkeypatch):
    """Keep generator chatter out of captured stdout unless a test opts in."""
    monkeypatch.setenv("ROOMGRID_LOG_LEVEL", "warn")
    monkeypatch.delenv("ROOMGRID_LOG_JSON", raising=False)
    yield


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def make_generator(sink):
    """Build a generator over the shared RecordingSink.

    Usage: gen = make_generator(grid_size_x=3, grid_size_y=3, rng=SequenceRandom([0.9]))
    """

    def _make(rng=None, **cfg):
        return GridLayoutGenerator(LayoutConfig(**cfg), sink=sink, rng=rng)

    return _make
