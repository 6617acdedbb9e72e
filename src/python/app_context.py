"""
AppContext: owns the curve, its coordinate mapper, the edit session and the
playback driver for one editor window.

The UI layer builds one context and hands it to the canvas and the frame
loop; nothing reaches the curve through module globals.
"""

import logging
from dataclasses import dataclass

from config_manager import ConfigManager
from coordinate_mapper import CoordinateMapper
from curve_model import DEFAULT_MIN_GAP, CurveModel
from custom_types import TimeSource
from easing import get_easing
from edit_session import EditSession, GeometryProvider, point_geometry
from enums import EasingKind
from playback_driver import DEFAULT_MAX_SPEED, PlaybackDriver
from time_sources import DEFAULT_DURATION_MS, SimulatedTicker

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    model: CurveModel
    mapper: CoordinateMapper
    session: EditSession
    driver: PlaybackDriver
    handle_radius: float
    easing_kind: EasingKind

    def set_easing(self, kind: str | EasingKind) -> None:
        """Switch the curve's easing by name.

        Raises:
            ValueError: If the name is not a known easing
        """
        easing = get_easing(kind)
        self.easing_kind = EasingKind(kind)
        self.model.set_easing(easing)
        logger.info("Easing set to %s", self.easing_kind)

    def set_time_source(self, time_source: TimeSource) -> None:
        self.driver.time_source = time_source

    def default_geometry(self):
        """Handle geometry computed from the model, for use without a renderer."""
        return point_geometry(self.model, self.mapper, self.handle_radius)


def create_app_context(
    cfg: ConfigManager,
    time_source: TimeSource | None = None,
    geometry_provider: GeometryProvider | None = None
) -> AppContext:
    """Build an AppContext from configuration.

    Args:
        cfg: Loaded configuration
        time_source: Playback clock, defaults to a SimulatedTicker
        geometry_provider: Renderer's handle geometry; defaults to geometry
            computed from the model (headless use)

    Returns:
        The wired AppContext
    """
    curve_cfg = cfg.get_curve_config()
    playback_cfg = cfg.get_playback_config()
    canvas_cfg = cfg.get_canvas_config()

    easing_name = curve_cfg.get("easing", EasingKind.QUADRATIC_IN_OUT)
    try:
        easing_kind = EasingKind(easing_name)
    except ValueError:
        logger.warning("Invalid easing '%s', using '%s'", easing_name, EasingKind.QUADRATIC_IN_OUT)
        easing_kind = EasingKind.QUADRATIC_IN_OUT

    model = CurveModel(
        points=cfg.get_default_points(),
        easing=get_easing(easing_kind),
        min_gap=curve_cfg.get("minPointGap", DEFAULT_MIN_GAP)
    )
    mapper = CoordinateMapper(canvas_cfg.get("width", 600), canvas_cfg.get("height", 300))

    if time_source is None:
        time_source = SimulatedTicker(playback_cfg.get("simulatedDurationMs", DEFAULT_DURATION_MS))

    driver = PlaybackDriver(
        model,
        time_source,
        max_speed=playback_cfg.get("maxSpeed", DEFAULT_MAX_SPEED),
        enforce_trim=playback_cfg.get("enforceTrim", True)
    )

    handle_radius = float(canvas_cfg.get("handleRadius", 11))
    session = EditSession(model, mapper, geometry_provider or (lambda: []))
    context = AppContext(
        model=model,
        mapper=mapper,
        session=session,
        driver=driver,
        handle_radius=handle_radius,
        easing_kind=easing_kind
    )
    if geometry_provider is None:
        session.geometry_provider = context.default_geometry

    logger.debug("AppContext created: %d points, easing %s", len(model), easing_kind)
    return context
