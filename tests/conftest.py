"""Shared test fixtures for revtrack."""

import pytest

from revtrack_core.config.models import RevtrackConfig
from revtrack_core.freshness.clock import ManualClock
from revtrack_core.registry.models import PackageId, PackageLocation


@pytest.fixture
def manual_clock():
    return ManualClock(1000.0)


@pytest.fixture
def sample_config():
    return RevtrackConfig()


@pytest.fixture
def pkg_id():
    return PackageId(name="Example", uuid="7876af07-990d-54b4-ab0e-23690620f79a")


@pytest.fixture
def project(tmp_path):
    """A small package tree with sources in two directories."""
    root = tmp_path / "Example"
    (root / "src").mkdir(parents=True)
    (root / "src" / "Example.py").write_text("x = 1\n")
    (root / "src" / "util.py").write_text("def helper(): pass\n")
    (root / "test").mkdir()
    (root / "test" / "runtests.py").write_text("assert True\n")
    return root


@pytest.fixture
def pkg_location(project, pkg_id):
    return PackageLocation(package=pkg_id, base_dir=str(project))
