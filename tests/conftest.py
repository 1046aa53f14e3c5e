"""Pytest configuration for raygeom tests.

Taichi must be initialized once per session before any BatchIntersector
allocates fields. The host-side geometry tests do not need it, but running
it for every session keeps test order irrelevant.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Double precision
    keeps kernel results comparable with the float64 host code.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield
