#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

World coordinates have the y-axis pointing up; screen pixels have it pointing
down, so the transform flips y around the viewport center.
"""
import math
from typing import Iterable, Optional, Sequence, Tuple

from .constants import (
    DEFAULT_PIXELS_PER_UNIT,
    MAX_PIXELS_PER_UNIT,
    MIN_PIXELS_PER_UNIT,
    SAFE_COORD_LIMIT,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector import clamp


class Camera2D:
    """
    Simple 2D camera that maps world coordinates (simulation units) to screen pixels.
    """

    def __init__(self, center=(0.0, 0.0), pixels_per_unit=DEFAULT_PIXELS_PER_UNIT):
        self.center = [center[0], center[1]]
        self.ppu = pixels_per_unit
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Sequence[float]) -> Tuple[float, float]:
        cx, cy = self.center
        px = (pos[0] - cx) * self.ppu + self.viewport_size[0] / 2
        py = -(pos[1] - cy) * self.ppu + self.viewport_size[1] / 2
        return (px, py)

    def screen_to_world(self, screen: Sequence[float]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) / self.ppu + cx
        wy = -(screen[1] - self.viewport_size[1] / 2) / self.ppu + cy
        return (wx, wy)

    def scale_length(self, length: float) -> float:
        """World length to pixels."""
        return length * self.ppu

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        """Zoom in by factor, keeping the world point under pivot_screen fixed."""
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.ppu = clamp(self.ppu * factor, MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)
        if before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])

    def pan_pixels(self, dx_pixels, dy_pixels):
        """Move the view so the scene follows a drag of (dx, dy) pixels."""
        self.center[0] -= dx_pixels / self.ppu
        self.center[1] += dy_pixels / self.ppu

    def frame(self, points: Iterable[Sequence[float]], margin: float = 1.3) -> None:
        """Center on the given world points and zoom so all of them fit."""
        pts = [p for p in points if math.isfinite(p[0]) and math.isfinite(p[1])]
        if not pts:
            self.center = [0.0, 0.0]
            self.ppu = DEFAULT_PIXELS_PER_UNIT
            return
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        minx, maxx = min(xs), max(xs)
        miny, maxy = min(ys), max(ys)
        self.center = [(minx + maxx) / 2, (miny + maxy) / 2]
        width = (maxx - minx) * margin + 1.0
        height = (maxy - miny) * margin + 1.0
        ppu_x = max(self.viewport_size[0], 1) / width
        ppu_y = max(self.viewport_size[1], 1) / height
        self.ppu = clamp(min(ppu_x, ppu_y), MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)


def safe_point(pt) -> Optional[Tuple[int, int]]:
    """Integer pixel for pt, or None if it is non-finite or far outside any viewport."""
    try:
        x, y = int(pt[0]), int(pt[1])
    except (ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None
