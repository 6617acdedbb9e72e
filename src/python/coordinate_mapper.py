"""
CoordinateMapper: convert between normalized curve space and canvas pixels.
"""

from custom_types import NormalizedPoint, ScreenPoint


class CoordinateMapper:
    """Map curve points (x in [0, 1], y in [-1, 1]) to a width x height viewport.

    y = -1 maps to the top edge and y = 1 to the bottom edge.
    """

    def __init__(self, width: float, height: float, pixel_ratio: float = 1.0):
        self.width = float(width)
        self.height = float(height)
        self.pixel_ratio = float(pixel_ratio)

    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        """Reconfigure the viewport size and device pixel ratio."""
        self.width = float(width)
        self.height = float(height)
        self.pixel_ratio = float(pixel_ratio)

    def to_screen(self, x: float, y: float) -> ScreenPoint:
        """Normalized (x, y) to pixel coordinates."""
        return (self.width * x, (y + 1) * 0.5 * self.height)

    def to_normalized(self, sx: float, sy: float) -> NormalizedPoint:
        """Pixel coordinates to normalized (x, y)."""
        # Collapsed viewport (minimized window) maps everything to the midline
        if self.width <= 0 or self.height <= 0:
            return (0.0, 0.0)
        return (sx / self.width, sy * 2 / self.height - 1)

    @property
    def device_size(self) -> tuple[int, int]:
        """Backing store size in device pixels."""
        return (round(self.width * self.pixel_ratio), round(self.height * self.pixel_ratio))
