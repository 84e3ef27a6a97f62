"""Shared fixtures for the publishing configurator tests."""

from pathlib import Path

import pytest

from pubconfig.models import Component
from pubconfig.registry import PublishingRegistry


@pytest.fixture
def registry():
    return PublishingRegistry()


@pytest.fixture
def java_component():
    return Component("java", (Path("build/libs/terra-1.0.jar"),))


@pytest.fixture
def components(java_component):
    return {"java": java_component}


@pytest.fixture
def build_dir(tmp_path):
    libs = tmp_path / "build" / "libs"
    libs.mkdir(parents=True)
    (libs / "terra-1.0.jar").write_bytes(b"PK")
    return tmp_path / "build"
