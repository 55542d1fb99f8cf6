"""Shared test fixtures for the timewarp test suite."""

import pytest
import tempfile
import shutil
from pathlib import Path
import sys

import numpy as np

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from timewarp.utils.logging import setup_logger, shutdown_logging


@pytest.fixture(scope="function", autouse=True)
def cleanup_logging():
    """Clean up logging after each test."""
    yield
    shutdown_logging()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def logger():
    """Create a test logger."""
    logger = setup_logger("test", level="DEBUG")
    yield logger
    shutdown_logging()


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def scalar_pair():
    """Two scalar sequences of unequal length with a known alignment."""
    sequence1 = np.array([0, 1, 2, 4, 5, 2, 3, 1, 0, 0])
    sequence2 = np.array([2, 4, 5, 6, 6, 5, 5, 4, 3, 1, 0, 0])
    return sequence1, sequence2


@pytest.fixture
def vector_pair():
    """Two 2-component sequences sampled over time (time on the last axis)."""
    x1 = np.linspace(0, 5, 40)
    x2 = np.log(np.linspace(1, np.exp(5), 55))
    sequence1 = np.outer([0.3, -0.7], np.sin(x1))
    sequence2 = np.outer([0.7, 0.3], np.sin(x2))
    return sequence1, sequence2


def monotonic_paths(length1, length2):
    """Enumerate every monotonic path from (0, 0) to the last cell."""
    def walk(i, j):
        if (i, j) == (length1 - 1, length2 - 1):
            yield [(i, j)]
            return
        for di, dj in ((1, 0), (0, 1), (1, 1)):
            ni, nj = i + di, j + dj
            if ni < length1 and nj < length2:
                for rest in walk(ni, nj):
                    yield [(i, j)] + rest
    
    return list(walk(0, 0))


def assert_valid_path(path1, path2, length1, length2):
    """Assert boundary anchoring and unit monotonic steps."""
    path1 = np.asarray(path1)
    path2 = np.asarray(path2)
    assert len(path1) == len(path2)
    assert (path1[0], path2[0]) == (0, 0)
    assert (path1[-1], path2[-1]) == (length1 - 1, length2 - 1)
    
    step1 = np.diff(path1)
    step2 = np.diff(path2)
    assert set(step1.tolist()) <= {0, 1}
    assert set(step2.tolist()) <= {0, 1}
    assert np.all(step1 + step2 > 0)


pytest.monotonic_paths = monotonic_paths
pytest.assert_valid_path = assert_valid_path
