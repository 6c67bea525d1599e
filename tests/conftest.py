import numpy as np
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-exhaustive",
        action="store_true",
        help="Run the long round-trip sweeps over every value of a width",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "exhaustive: long round-trip sweeps over every value of a width",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-exhaustive"):
        return
    skip = pytest.mark.skip(reason="need --run-exhaustive option to run")
    for item in items:
        if "exhaustive" in item.keywords:
            item.add_marker(skip)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rng():
    """Seeded generator so random phrases are the same on every run."""
    return np.random.default_rng(0x7B1D)


@pytest.fixture(params=[1, 3, 8, 13, 32])
def width(request):
    """A spread of widths: single bit, sub-byte, byte, odd, word-ish."""
    return request.param
