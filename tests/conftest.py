"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level fields every tiray module allocates.
    """
    ti.init(arch=ti.cpu, random_seed=42, default_fp=ti.f64, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Reset scene, camera and render target state around each test.

    This ensures tests are isolated from each other.
    """
    # Import here so Taichi is initialized before any field is touched
    from tiray.camera.camera import _camera_state
    from tiray.core.renderer import reset_render_target
    from tiray.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        reset_render_target()
        _camera_state.clear()

    _clear_all()

    yield

    _clear_all()
