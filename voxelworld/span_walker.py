"""Scanline rasterization of projected axis-aligned quads.

Vertical edges of an axis-aligned quad stay vertical on screen when the
camera is upright. Each quad therefore becomes a trapezoid with zero
slopes, and it is drawn as a run of horizontal spans.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .block_type import BlockType
from .spans import BATCH_CAPACITY, SpanBuffer, TrapezoidBatch

# Widens the far edges slightly so that adjacent quads leave no sub-pixel gaps.
_EDGE_EPSILON = 0.001

_BLOCK_COLORS = {
    BlockType.AIR: 0x00000000,
    BlockType.GRASS: 0x00FF00FF,
    BlockType.DIRT: 0x8B4513FF,
    BlockType.STONE: 0x808080FF,
}


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class ProjectedQuad:
    """Screen bounds of a projected quad in normalized device coordinates.

    x runs from -1 (left) to 1 (right) and y from -1 (bottom) to 1 (top).
    The quad is drawn at the constant depth ``depth_near``.
    """

    screen_x_min: float
    screen_y_min: float
    screen_x_max: float
    screen_y_max: float
    depth_near: float
    block_type: int = 0


class SpanWalkerRasterizer:
    """Draws projected quads into a span buffer of the viewport's size."""

    def __init__(self, viewport_width: int, viewport_height: int) -> None:
        if viewport_width <= 0 or viewport_height <= 0:
            raise ValueError("viewport dimensions must be positive")
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height

    def __repr__(self) -> str:
        return f"SpanWalkerRasterizer({self.viewport_width}, {self.viewport_height})"

    def rasterize_quads(
        self,
        quads: Iterable[ProjectedQuad],
        target: SpanBuffer,
        visibility_mask: int | None = None,
    ) -> None:
        """Draw every visible quad into ``target`` with depth testing.

        Bit i of ``visibility_mask`` marks quad i as visible; ``None``
        makes every quad visible.
        """
        for batch in self.setup_batches(quads, visibility_mask):
            self.rasterize_batch(target, batch)

    def setup_batches(
        self, quads: Iterable[ProjectedQuad], visibility_mask: int | None = None
    ) -> list[TrapezoidBatch]:
        """Turn visible, on-screen quads into batches of up to eight trapezoids."""
        batches: list[TrapezoidBatch] = []
        current = TrapezoidBatch()
        for quad in self._screen_quads(quads, visibility_mask):
            x_min, y_min, x_max, y_max, depth, color = quad
            lane = current.count
            current.left_x[lane] = x_min
            current.right_x[lane] = x_max
            current.left_slope[lane] = 0.0
            current.right_slope[lane] = 0.0
            current.start_y[lane] = y_min
            current.end_y[lane] = y_max
            current.depth[lane] = depth
            current.color[lane] = color
            current.active_mask |= 1 << lane
            current.count += 1
            if current.count == BATCH_CAPACITY:
                batches.append(current)
                current = TrapezoidBatch()
        if current.count:
            batches.append(current)
        return batches

    def _screen_quads(
        self, quads: Iterable[ProjectedQuad], visibility_mask: int | None
    ) -> Iterator[tuple[float, float, float, float, float, int]]:
        width = float(self.viewport_width)
        height = float(self.viewport_height)
        for index, quad in enumerate(quads):
            if visibility_mask is not None and not (visibility_mask >> index) & 1:
                continue
            x_min = max((quad.screen_x_min + 1.0) * 0.5 * width, 0.0)
            y_min = max((1.0 - quad.screen_y_max) * 0.5 * height, 0.0)
            x_max = min((quad.screen_x_max + 1.0) * 0.5 * width + _EDGE_EPSILON, width)
            y_max = min((1.0 - quad.screen_y_min) * 0.5 * height + _EDGE_EPSILON, height)
            if x_min >= width or y_min >= height or x_max <= 0.0 or y_max <= 0.0:
                continue
            yield x_min, y_min, x_max, y_max, quad.depth_near, self.block_color(quad.block_type)

    def rasterize_batch(self, target: SpanBuffer, batch: TrapezoidBatch) -> None:
        """Walk a batch scanline by scanline, sampling at pixel centres.

        The batch passed in is left unchanged.
        """
        if batch.count == 0:
            return
        work = dataclasses.replace(
            batch, left_x=list(batch.left_x), right_x=list(batch.right_x)
        )
        lanes = range(work.count)
        min_y = min(work.start_y[lane] for lane in lanes)
        max_y = max(work.end_y[lane] for lane in lanes)

        current_y = math.floor(min_y)
        end_y = math.ceil(max_y)
        while current_y < end_y and current_y < target.height:
            if current_y >= 0:
                work.update_active_mask(current_y + 0.5)
                if work.is_active():
                    for lane in lanes:
                        if not (work.active_mask >> lane) & 1:
                            continue
                        target.fill_span(
                            current_y,
                            _round_half_away(work.left_x[lane]),
                            _round_half_away(work.right_x[lane]),
                            work.depth[lane],
                            work.color[lane],
                        )
            # Edges advance on every scanline so later-starting trapezoids stay in place.
            for lane in lanes:
                work.left_x[lane] += work.left_slope[lane]
                work.right_x[lane] += work.right_slope[lane]
            current_y += 1

    def block_color(self, block_type: int) -> int:
        """RGBA colour for a stored block type byte; unknown values draw as air."""
        return _BLOCK_COLORS[BlockType.from_u8(block_type)]