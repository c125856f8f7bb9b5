"""Trapezoid batches and the depth-tested span buffer they are drawn into."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

BATCH_CAPACITY = 8


def _lanes(value: float = 0.0) -> list[float]:
    return [value] * BATCH_CAPACITY


@dataclass
class TrapezoidBatch:
    """Up to eight screen-space trapezoids walked scanline by scanline.

    Each lane holds one trapezoid: the x of its left and right edges, how
    far each edge moves per scanline, its vertical extent
    ``start_y <= y < end_y``, a constant depth and a colour.
    """

    count: int = 0
    left_x: list[float] = field(default_factory=_lanes)
    right_x: list[float] = field(default_factory=_lanes)
    left_slope: list[float] = field(default_factory=_lanes)
    right_slope: list[float] = field(default_factory=_lanes)
    start_y: list[float] = field(default_factory=_lanes)
    end_y: list[float] = field(default_factory=_lanes)
    depth: list[float] = field(default_factory=_lanes)
    color: list[int] = field(default_factory=lambda: [0] * BATCH_CAPACITY)
    active_mask: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.count <= BATCH_CAPACITY:
            raise ValueError(f"batch count must be between 0 and {BATCH_CAPACITY}")

    def is_active(self) -> bool:
        """Whether any trapezoid is active on the current scanline."""
        return self.active_mask != 0

    def update_active_mask(self, current_y: float) -> None:
        """Set bit i for every trapezoid i that covers ``current_y``."""
        mask = 0
        for lane, (start, end) in enumerate(zip(self.start_y[: self.count], self.end_y[: self.count])):
            if start <= current_y < end:
                mask |= 1 << lane
        self.active_mask = mask


class SpanBuffer:
    """A rectangle of colour and depth values filled by horizontal spans.

    Pixels are addressed by a linear index ``y * width + x``. Depth starts at
    infinity and colour at zero; a write lands only where its depth is
    strictly nearer than the stored one.
    """

    __slots__ = ("width", "height", "color", "depth")

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("buffer dimensions must be positive")
        self.width = width
        self.height = height
        size = width * height
        self.color: list[int] = [0] * size
        self.depth: list[float] = [math.inf] * size

    def __repr__(self) -> str:
        return f"SpanBuffer(width={self.width}, height={self.height})"

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.color):
            raise IndexError(f"pixel index out of range: {index}")

    def fill_span(self, y: int, x_start: int, x_end: int, depth: float, color: int) -> None:
        """Write ``color`` over ``x_start <= x < x_end`` on row ``y`` where it passes the depth test.

        The span is clamped to the row; an empty span writes nothing.
        """
        if not 0 <= y < self.height:
            raise IndexError(f"row out of range: {y}")
        x_start = min(max(x_start, 0), self.width - 1)
        x_end = min(max(x_end, 0), self.width)
        if x_start >= x_end:
            return

        row = y * self.width
        depths = self.depth
        colors = self.color
        for index in range(row + x_start, row + x_end):
            if depth < depths[index]:
                depths[index] = depth
                colors[index] = color

    def color_at(self, index: int) -> int:
        self._check_index(index)
        return self.color[index]

    def depth_at(self, index: int) -> float:
        self._check_index(index)
        return self.depth[index]

    def set_color_at(self, index: int, color: int) -> None:
        self._check_index(index)
        self.color[index] = color

    def set_depth_at(self, index: int, depth: float) -> None:
        self._check_index(index)
        self.depth[index] = depth