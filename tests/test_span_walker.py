import pytest

from voxelworld.spans import SpanBuffer, TrapezoidBatch
from voxelworld.span_walker import ProjectedQuad, SpanWalkerRasterizer

GRASS = 0x00FF00FF
DIRT = 0x8B4513FF
STONE = 0x808080FF


def filled(buffer):
    return sum(1 for c in buffer.color if c != 0)


def quad(x0, y0, x1, y1, depth=0.5, block=1):
    return ProjectedQuad(x0, y0, x1, y1, depth, block)


def test_single_quad_fills_correctly():
    buffer = SpanBuffer(100, 100)
    walker = SpanWalkerRasterizer(100, 100)
    walker.rasterize_quads([quad(-0.6, -0.2, -0.4, 0.0)], buffer, 1)
    count = filled(buffer)
    assert 80 <= count <= 120
    assert buffer.color_at(55 * 100 + 25) == GRASS
    assert buffer.color_at(55 * 100 + 35) == 0


def test_depth_testing():
    buffer = SpanBuffer(100, 100)
    walker = SpanWalkerRasterizer(100, 100)
    walker.rasterize_quads([quad(-0.5, -0.5, 0.5, 0.5, 0.7, 1)], buffer, 1)
    walker.rasterize_quads([quad(-0.3, -0.3, 0.3, 0.3, 0.3, 2)], buffer, 1)
    center = 50 * 100 + 50
    assert abs(buffer.depth_at(center) - 0.3) < 0.1
    assert buffer.color_at(center) == DIRT
    # Outside the near quad the far quad remains.
    assert buffer.depth_at(50 * 100 + 27) == 0.7


def test_multiple_quads_in_packet():
    buffer = SpanBuffer(200, 200)
    walker = SpanWalkerRasterizer(200, 200)
    quads = [quad(-0.8, -0.4, -0.2, 0.4, 0.5, 1), quad(0.2, -0.4, 0.8, 0.4, 0.5, 2)]
    walker.rasterize_quads(quads, buffer, 0b11)
    assert buffer.color_at(100 * 200 + 50) == GRASS
    assert buffer.color_at(100 * 200 + 150) == DIRT
    assert buffer.color_at(100 * 200 + 100) == 0
    assert 9000 <= filled(buffer) <= 10200


def test_visibility_mask():
    buffer = SpanBuffer(100, 100)
    walker = SpanWalkerRasterizer(100, 100)
    quads = [quad(-0.5, -0.5, 0.5, 0.5, 0.5, i + 1) for i in range(3)]
    walker.rasterize_quads(quads, buffer, 0b010)
    assert filled(buffer) > 0
    assert buffer.color_at(50 * 100 + 50) == DIRT


def test_screen_boundary_clipping():
    buffer = SpanBuffer(100, 100)
    walker = SpanWalkerRasterizer(100, 100)
    walker.rasterize_quads([quad(-2.0, -2.0, 0.0, 0.0)], buffer, 1)
    count = filled(buffer)
    assert 1500 <= count <= 3000
    assert buffer.color_at(99 * 100 + 0) == GRASS
    assert buffer.color_at(0) == 0


def test_empty_packet():
    buffer = SpanBuffer(100, 100)
    SpanWalkerRasterizer(100, 100).rasterize_quads([], buffer, 0)
    assert filled(buffer) == 0


def test_all_invisible():
    buffer = SpanBuffer(100, 100)
    quads = [quad(-0.5, -0.5, 0.5, 0.5) for _ in range(4)]
    SpanWalkerRasterizer(100, 100).rasterize_quads(quads, buffer, 0)
    assert filled(buffer) == 0


def test_no_mask_means_all_visible():
    buffer = SpanBuffer(100, 100)
    SpanWalkerRasterizer(100, 100).rasterize_quads([quad(-0.5, -0.5, 0.5, 0.5)], buffer)
    assert buffer.color_at(50 * 100 + 50) == GRASS


def test_simple_quad_center_pixel():
    buffer = SpanBuffer(128, 128)
    walker = SpanWalkerRasterizer(128, 128)
    walker.rasterize_quads([quad(-0.5, -0.5, 0.5, 0.5, 0.5, 1)], buffer, 1)
    center = 64 * 128 + 64
    assert buffer.color_at(center) != 0
    assert buffer.depth_at(center) == 0.5


@pytest.mark.parametrize(
    "block, expected",
    [(0, 0x00000000), (1, GRASS), (2, DIRT), (3, STONE), (200, 0x00000000)],
)
def test_block_color(block, expected):
    assert SpanWalkerRasterizer(10, 10).block_color(block) == expected


def test_setup_batches_splits_into_eights():
    walker = SpanWalkerRasterizer(100, 100)
    batches = walker.setup_batches([quad(-0.5, -0.5, 0.5, 0.5)] * 9, None)
    assert [b.count for b in batches] == [8, 1]
    assert batches[0].active_mask == 0xFF
    assert batches[1].active_mask == 0x1


def test_setup_batches_screen_conversion():
    walker = SpanWalkerRasterizer(100, 100)
    (batch,) = walker.setup_batches([quad(-0.5, -0.5, 0.5, 0.5, 0.25, 3)], 1)
    assert batch.left_x[0] == pytest.approx(25.0)
    assert batch.right_x[0] == pytest.approx(75.001)
    assert batch.start_y[0] == pytest.approx(25.0)
    assert batch.end_y[0] == pytest.approx(75.001)
    assert batch.left_slope[0] == 0.0
    assert batch.depth[0] == 0.25
    assert batch.color[0] == STONE


def test_setup_batches_skips_offscreen():
    walker = SpanWalkerRasterizer(100, 100)
    quads = [quad(1.5, -0.5, 2.0, 0.5), quad(-0.5, -3.0, 0.5, -1.5)]
    assert walker.setup_batches(quads, None) == []


def test_rasterize_batch_single_trapezoid():
    buffer = SpanBuffer(128, 128)
    batch = TrapezoidBatch(count=1)
    batch.left_x[0], batch.right_x[0] = 10.0, 100.0
    batch.start_y[0], batch.end_y[0] = 20.0, 60.0
    batch.depth[0], batch.color[0] = 0.5, 0xFF0000FF
    SpanWalkerRasterizer(128, 128).rasterize_batch(buffer, batch)
    assert filled(buffer) == 90 * 40
    assert buffer.color_at(20 * 128 + 10) == 0xFF0000FF
    assert buffer.color_at(59 * 128 + 99) == 0xFF0000FF
    assert buffer.color_at(60 * 128 + 50) == 0
    assert buffer.color_at(19 * 128 + 50) == 0


def test_rasterize_batch_with_slopes_leaves_batch_unchanged():
    buffer = SpanBuffer(64, 64)
    batch = TrapezoidBatch(count=1)
    batch.left_x[0], batch.right_x[0] = 10.0, 20.0
    batch.left_slope[0], batch.right_slope[0] = 1.0, 1.0
    batch.start_y[0], batch.end_y[0] = 0.0, 5.0
    batch.depth[0], batch.color[0] = 0.5, 7
    SpanWalkerRasterizer(64, 64).rasterize_batch(buffer, batch)
    for y in range(5):
        row = [x for x in range(64) if buffer.color_at(y * 64 + x) == 7]
        assert row == list(range(10 + y, 20 + y))
    assert batch.left_x[0] == 10.0
    assert batch.right_x[0] == 20.0


def test_rasterize_batch_overlapping_depth():
    buffer = SpanBuffer(128, 128)
    batch = TrapezoidBatch(count=3)
    batch.left_x[:3] = [20.0, 40.0, 60.0]
    batch.right_x[:3] = [80.0, 100.0, 120.0]
    batch.start_y[:3] = [30.0, 40.0, 50.0]
    batch.end_y[:3] = [70.0, 80.0, 90.0]
    batch.depth[:3] = [0.7, 0.5, 0.3]
    batch.color[:3] = [1, 2, 3]
    SpanWalkerRasterizer(128, 128).rasterize_batch(buffer, batch)
    assert buffer.color_at(60 * 128 + 70) == 3
    assert buffer.color_at(45 * 128 + 50) == 2
    assert buffer.color_at(35 * 128 + 30) == 1
    assert buffer.depth_at(60 * 128 + 70) == 0.3


def test_rasterize_batch_clips_negative_rows():
    buffer = SpanBuffer(32, 32)
    batch = TrapezoidBatch(count=1)
    batch.left_x[0], batch.right_x[0] = 0.0, 4.0
    batch.left_slope[0], batch.right_slope[0] = 1.0, 1.0
    batch.start_y[0], batch.end_y[0] = -3.0, 2.0
    batch.depth[0], batch.color[0] = 0.5, 9
    SpanWalkerRasterizer(32, 32).rasterize_batch(buffer, batch)
    assert [x for x in range(32) if buffer.color_at(x) == 9] == [3, 4, 5, 6]
    assert filled(buffer) == 8


def test_invalid_viewport():
    with pytest.raises(ValueError):
        SpanWalkerRasterizer(0, 10)