"""Shared fixtures for calibview tests."""

from dataclasses import replace
from unittest.mock import Mock

import pytest

from calibview.core.types import (
    AABB, ControlPointsCallbacks, ControlPointsPanelProps, ImageState
)


@pytest.fixture
def scenario_aabb():
    """Placement of a 1600x800 image in an 800x600 viewport with 20px padding."""
    return AABB(20.0, 110.0, 780.0, 490.0)


@pytest.fixture
def image_state():
    return ImageState(url="photo.jpg", width=1600, height=800)


@pytest.fixture
def callbacks():
    """Callback receiver that records every outbound update."""
    return Mock(spec=ControlPointsCallbacks)


@pytest.fixture
def make_props(image_state, callbacks):
    """Factory for panel props; keyword arguments replace individual fields."""
    def factory(**overrides):
        props = ControlPointsPanelProps(image_state=image_state, callbacks=callbacks)
        return replace(props, **overrides)
    return factory
