#!/usr/bin/env python3
# =============================================================================
# numdump - Pytest Configuration
# =============================================================================

import sys

import numpy as np
import pytest

import numdump


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "posix: marks tests that rely on POSIX file permissions"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection."""
    skip_posix = pytest.mark.skip(reason="requires POSIX file permissions")

    for item in items:
        if "posix" in item.keywords and sys.platform.startswith("win"):
            item.add_marker(skip_posix)


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test against the default configuration."""
    monkeypatch.delenv(numdump.config.ENV_MAX_ELEMENTS, raising=False)
    monkeypatch.delenv(numdump.config.ENV_LOG_LEVEL, raising=False)
    numdump.reset_config()
    yield
    monkeypatch.undo()
    numdump.reset_config()


@pytest.fixture
def sample_data():
    """Sample data for tests."""
    return [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]


@pytest.fixture
def sample_numpy_f32():
    """Sample NumPy array float32."""
    return np.array([1.0, 2.0, 3.0, 4.0], dtype=np.float32)


@pytest.fixture
def sample_numpy_f64():
    """Sample NumPy array float64."""
    return np.array([1.0, 2.0, 3.0, 4.0], dtype=np.float64)


@pytest.fixture
def out_path(tmp_path):
    """Destination file inside a per-test temporary directory."""
    return tmp_path / "out.bin"


@pytest.fixture
def read_floats():
    """Decode a dump as native-order float32."""
    def _read(path):
        return np.fromfile(str(path), dtype=np.float32)
    return _read
