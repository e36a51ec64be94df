"""Tests for the control points panel render cycle."""

from dataclasses import replace
from unittest.mock import Mock

import pytest

from calibview.core.enums import CalibrationMode, ControlKind
from calibview.core.panel import ControlPointsPanel, Overlay3D, RenderFrame
from calibview.core.types import GlobalSettings, ImageState, Point2D, SolverResult, ViewportState


@pytest.fixture
def panel():
    panel = ControlPointsPanel()
    panel.on_resize(800, 600)
    return panel


class TestRenderCycle:
    """Test layout and control resolution through the panel."""

    def test_scenario_layout(self, panel, make_props):
        frame = panel.render(make_props())

        assert isinstance(frame, RenderFrame)
        assert frame.is_renderable
        assert frame.image_aabb.as_tuple() == pytest.approx((20, 110, 780, 490))
        assert frame.image == "photo.jpg"
        assert frame.viewport == ViewportState(800, 600)

    def test_controls_follow_calibration_mode(self, panel, make_props):
        one = panel.render(make_props())
        two = panel.render(make_props(
            global_settings=GlobalSettings(calibration_mode=CalibrationMode.TWO_VANISHING_POINT)
        ))

        assert ControlKind.HORIZON in [c.kind for c in one.controls]
        assert ControlKind.HORIZON not in [c.kind for c in two.controls]

    def test_image_opacity_is_passed_through(self, panel, make_props):
        frame = panel.render(make_props(global_settings=GlobalSettings(image_opacity=0.4)))

        assert frame.image_opacity == pytest.approx(0.4)

    def test_custom_pad(self, make_props):
        panel = ControlPointsPanel(pad=0)
        panel.on_resize(800, 400)

        frame = panel.render(make_props())

        assert frame.image_aabb.as_tuple() == pytest.approx((0, 0, 800, 400))

    def test_injected_image_plane_converter(self, make_props):
        converter = Mock(return_value=Point2D(0.0, 0.0))
        panel = ControlPointsPanel(image_plane_converter=converter)
        panel.on_resize(800, 600)

        frame = panel.render(make_props(
            solver_result=SolverResult(vanishing_points=[Point2D(0.3, 0.1)])
        ))

        assert frame.controls[0].vanishing_point == pytest.approx((20, 110))
        converter.assert_called_once_with(Point2D(0.3, 0.1), 1600, 800)


class TestNotYetRenderable:
    """Test the states where no layout exists."""

    def test_before_first_measurement(self, make_props):
        frame = ControlPointsPanel().render(make_props())

        assert not frame.is_renderable
        assert frame.image is None
        assert frame.controls == []

    @pytest.mark.parametrize("size", [(None, 600), (800, None), (0, 600)])
    def test_partial_measurement(self, make_props, size):
        panel = ControlPointsPanel()
        panel.on_resize(*size)

        frame = panel.render(make_props())

        assert frame.image_aabb is None
        assert frame.controls == []

    def test_image_size_unknown(self, panel, make_props):
        frame = panel.render(make_props(image_state=ImageState(url="photo.jpg")))

        assert not frame.is_renderable

    def test_no_image(self, panel, make_props):
        frame = panel.render(make_props(image_state=ImageState(width=1600, height=800)))

        assert panel.image_handle is None
        assert not frame.is_renderable

    def test_resize_makes_frame_renderable(self, make_props):
        panel = ControlPointsPanel()
        props = make_props()

        assert not panel.render(props).is_renderable
        panel.on_resize(800, 600)
        assert panel.render(props).is_renderable


class TestImageHandle:
    """Test that a fresh handle is created only when the URL changes."""

    def test_loader_called_once_per_url(self, image_state):
        loader = Mock(side_effect=lambda url: f"handle:{url}")
        panel = ControlPointsPanel(image_loader=loader)

        panel.update_image(image_state)
        panel.update_image(image_state)
        panel.update_image(replace(image_state, width=100, height=50))

        loader.assert_called_once_with("photo.jpg")
        assert panel.image_handle == "handle:photo.jpg"

    def test_url_change_replaces_handle(self, image_state):
        loader = Mock(side_effect=lambda url: f"handle:{url}")
        panel = ControlPointsPanel(image_loader=loader)

        panel.update_image(image_state)
        panel.update_image(replace(image_state, url="other.jpg"))

        assert loader.call_count == 2
        assert panel.image_handle == "handle:other.jpg"

    def test_clearing_url_drops_handle(self, image_state):
        panel = ControlPointsPanel()

        panel.update_image(image_state)
        panel.update_image(ImageState())

        assert panel.image_handle is None

    def test_render_uses_loaded_handle(self, make_props):
        loader = Mock(return_value="pixels")
        panel = ControlPointsPanel(image_loader=loader)
        panel.on_resize(800, 600)

        panel.render(make_props())
        frame = panel.render(make_props())

        assert frame.image == "pixels"
        loader.assert_called_once()


class TestCallbacks:
    """Test that drags reach the host in relative coordinates."""

    def test_origin_drag_through_panel(self, panel, make_props, callbacks):
        frame = panel.render(make_props())
        origin = next(c for c in frame.controls if c.kind == ControlKind.ORIGIN)

        origin.on_drag(Point2D(210, 395))

        callbacks.on_origin_drag.assert_called_once_with(Point2D(0.25, 0.75))

    def test_render_does_not_report(self, panel, make_props, callbacks):
        panel.render(make_props())

        assert callbacks.method_calls == []


class TestOverlay3D:
    """Test the gate on the 3D overlay drawn beneath the image."""

    def test_present_once_laid_out(self, panel, make_props):
        solver_result = SolverResult(vanishing_points=[Point2D(0, 0)])
        settings = GlobalSettings(image_opacity=0.3)

        frame = panel.render(make_props(solver_result=solver_result, global_settings=settings))

        overlay = frame.overlay_3d
        assert isinstance(overlay, Overlay3D)
        assert overlay.image_aabb == frame.image_aabb
        assert (overlay.viewport_width, overlay.viewport_height) == (800, 600)
        assert overlay.solver_result is solver_result
        assert overlay.global_settings is settings

    def test_absent_without_layout(self, make_props):
        panel = ControlPointsPanel()
        panel.on_resize(800, None)

        assert panel.render(make_props()).overlay_3d is None

    def test_absent_without_image(self, panel, make_props):
        frame = panel.render(make_props(image_state=ImageState()))

        assert frame.overlay_3d is None

    def test_requires_measured_viewport(self, panel, make_props, scenario_aabb):
        assert panel.overlay_3d(scenario_aabb, make_props()) is not None
        panel.on_resize(None, 600)
        assert panel.overlay_3d(scenario_aabb, make_props()) is None
