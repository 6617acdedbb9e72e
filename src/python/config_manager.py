import json
import pathlib
import sys
import logging
from typing import Any

from custom_types import CanvasConfig, CurveConfig, GestureConfig, PlaybackConfig

logger = logging.getLogger(__name__)

class ConfigManager:
    """Manages application configuration, including colors, fonts, strings and curve settings"""

    colors: dict[str, str]
    fonts: dict[str, str]
    strings: dict[str, Any]
    ui: dict[str, Any]
    curve: dict[str, Any]
    playback: dict[str, Any]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """Initialize the ConfigManager with an optional custom path.

        Args:
            cfg_path: Path to the config.json file (defaults to standard location if None)
            exit_on_error: Whether to exit the program on configuration errors
        """
        self.colors = {}
        self.fonts = {}
        self.strings = {}
        self.ui = {}
        self.curve = {}
        self.playback = {}
        self.exit_on_error = exit_on_error
        self._cfg = {}

        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()

        self.load_config()

    def _default_config_path(self) -> pathlib.Path:
        """Get the default path to the config.json file."""
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def _fail(self, message: str, exc_type: type[Exception] = RuntimeError) -> None:
        logger.error(message)
        if self.exit_on_error:
            sys.exit(1)
        raise exc_type(message)

    def load_config(self) -> None:
        """Load master configuration from the configured path."""
        try:
            with open(self.cfg_path, 'r') as f:
                self._cfg = json.load(f)
        except Exception as e:
            self._fail(f"Critical error loading configuration '{self.cfg_path}': {e}")

        # Validate and assign sections
        try:
            c = self._cfg["colors"]
            self.colors = c["palette"]
            self.fonts = c["fonts"]
            self.strings = self._cfg["strings"]
            self.ui = self._cfg["ui"]
            self.curve = self._cfg["curve"]
            self.playback = self._cfg["playback"]
        except KeyError as e:
            self._fail(f"Configuration missing key: {e}", KeyError)

        logger.debug("Loaded configuration from %s", self.cfg_path)

    def get_color(self, key: str, default: str | None = None) -> str:
        """Get a color hex string from the palette by key"""
        return self.colors.get(key, default or "#000000")

    def get_qt_color(self, key: str, default: str | None = None) -> Any:
        """Get a palette color as a QColor"""
        from PyQt6.QtGui import QColor
        return QColor(self.get_color(key, default))

    def get_font(self, key: str = "primary") -> str:
        """Get a font name by key"""
        return self.fonts.get(key, "Helvetica")

    def get_string(self, category: str, key: str, default: str | None = None) -> str:
        """Get a string resource by category and key"""
        if category in self.strings and key in self.strings[category]:
            return self.strings[category][key]
        return default or key

    def get_nested_string(self, path: str, default: str | None = None) -> str | list[Any]:
        """Get a string resource by dot-notation path (e.g., 'ui.windowTitle')"""
        parts = path.split('.')
        current: Any = self.strings

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default or path

        return current if isinstance(current, (str, list)) else default or path

    def get_ui_setting(self, category: str, key: str, default: Any = None) -> Any:
        """Get a UI setting value by category and key"""
        if category in self.ui and key in self.ui[category]:
            return self.ui[category][key]
        return default

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get a generic setting from the master config"""
        section_data = self._cfg.get(section, {})
        if not isinstance(section_data, dict):
            return default
        return section_data.get(key, default)

    def set_setting(self, section: str, key: str, value: Any) -> None:
        """Set a setting in memory (does not persist to file).

        Args:
            section: Configuration section (e.g., 'curve', 'playback')
            key: Setting key within the section
            value: Value to set
        """
        if section not in self._cfg:
            self._cfg[section] = {}
        self._cfg[section][key] = value
        if section == "curve":
            self.curve = self._cfg[section]
        elif section == "playback":
            self.playback = self._cfg[section]

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        """Get a logging configuration setting"""
        return self.get_setting("logging", key, default)

    # ============================================================================
    # Curve and Playback Accessors
    # ============================================================================

    def get_curve_config(self) -> CurveConfig:
        """Get curve configuration.

        Returns:
            dict: Curve configuration with keys:
                - easing: Easing name ('quadratic-in-out', 'bezier-in-out', 'identity')
                - minPointGap: Minimum x distance between neighbouring points
                - defaultPoints: List of [x, y] pairs for a fresh curve
        """
        return self.curve

    def get_default_points(self) -> list[tuple[float, float]] | None:
        """Get the starting curve as (x, y) tuples, None to use the built-in default."""
        points = self.curve.get("defaultPoints")
        if not points:
            return None
        return [(float(x), float(y)) for x, y in points]

    def get_playback_config(self) -> PlaybackConfig:
        """Get playback configuration.

        Returns:
            dict: Playback configuration with keys:
                - maxSpeed: Speed gained at full curve bias
                - timeSource: 'video', 'simulated' or 'scrubbing'
                - simulatedDurationMs: Loop length of the simulated clock
                - enforceTrim: Whether playback is kept inside the trimmed window
                - videoPath: Video opened at startup (empty for none)
        """
        return self.playback

    # ============================================================================
    # UI Configuration Accessors
    # ============================================================================

    def get_canvas_config(self) -> CanvasConfig:
        """Get curve canvas configuration.

        Returns:
            dict: Canvas configuration with keys:
                - width, height: Initial canvas size in pixels
                - handleRadius: Point handle radius (also the hit radius)
                - ghostRadius: Ghost cursor radius
                - labelSpacer: Padding of the FAST/SLOW labels
                - curveSamples: Number of samples used to draw the curve
        """
        if "canvas" in self.ui:
            return self.ui["canvas"]
        return {"width": 600, "height": 300, "handleRadius": 11, "ghostRadius": 10,
                "labelSpacer": 5, "curveSamples": 200}

    def get_gesture_config(self) -> GestureConfig:
        """Get pointer gesture configuration.

        Returns:
            dict: Gesture configuration with keys:
                - longPressMs: Hold time that removes a point
                - longPressSlop: Pointer travel in pixels that cancels a long press
        """
        if "gestures" in self.ui:
            return self.ui["gestures"]
        return {"longPressMs": 600, "longPressSlop": 6}

    def get_frame_interval(self, default: int = 16) -> int:
        """Get the frame loop interval in milliseconds."""
        return self.get_ui_setting("frameLoop", "intervalMs", default)


# Create a singleton instance
config = ConfigManager()
