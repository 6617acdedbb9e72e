"""
Tests for building the application context from configuration.
"""
import pytest

from app_context import create_app_context
from easing import identity, quadratic_in_out
from enums import EasingKind, EditAction
from time_sources import SimulatedTicker


def test_context_from_config(test_config_manager, fake_clock):
    source = SimulatedTicker(1000, clock=fake_clock)
    context = create_app_context(test_config_manager, time_source=source)

    assert context.model.as_tuples() == [(0.0, 0.0), (0.5, 0.0), (1.0, 0.0)]
    assert context.model.min_gap == 0.01
    assert context.model.easing is identity
    assert context.easing_kind == EasingKind.IDENTITY
    assert (context.mapper.width, context.mapper.height) == (400, 200)
    assert context.handle_radius == 10
    assert context.driver.time_source is source
    assert context.driver.max_speed == 6


def test_default_time_source_is_simulated(test_config_manager):
    context = create_app_context(test_config_manager)
    assert isinstance(context.driver.time_source, SimulatedTicker)
    assert context.driver.time_source.duration == 1000


def test_invalid_easing_falls_back(test_config_manager):
    test_config_manager.set_setting("curve", "easing", "elastic")
    context = create_app_context(test_config_manager)
    assert context.easing_kind == EasingKind.QUADRATIC_IN_OUT
    assert context.model.easing is quadratic_in_out


def test_headless_session_hits_model_points(test_config_manager):
    context = create_app_context(test_config_manager)
    # Middle point of the 400x200 canvas
    assert context.session.pointer_down(200, 100) == EditAction.DRAG_STARTED
    assert context.session.target is context.model.points[1]


def test_geometry_provider_override(test_config_manager):
    context = create_app_context(test_config_manager, geometry_provider=lambda: [])
    assert context.session.pointer_down(200, 100) == EditAction.NONE


def test_set_easing(test_config_manager):
    context = create_app_context(test_config_manager)
    context.set_easing("quadratic-in-out")
    assert context.easing_kind == EasingKind.QUADRATIC_IN_OUT
    assert context.model.easing is quadratic_in_out

    with pytest.raises(ValueError):
        context.set_easing("elastic")
    assert context.easing_kind == EasingKind.QUADRATIC_IN_OUT


def test_set_time_source(test_config_manager, fake_clock):
    context = create_app_context(test_config_manager)
    source = SimulatedTicker(2000, clock=fake_clock)
    context.set_time_source(source)
    assert context.driver.time_source is source
