# voxelworld

A small, dependency-free toolkit for block worlds:

- **Blocks** (`voxelworld.block_type`): `BlockType` (`AIR`, `GRASS`, `DIRT`,
  `STONE`) with solidity, base RGB colour and texture index, and the
  one-field `BlockData` cell value.
- **Chunks** (`voxelworld.chunk`): 32×32×32 `Chunk` objects that keep a
  single value while every cell is the same (sky, deep rock) and switch to
  full per-cell storage on the first `set_block`. `Chunk.generate_terrain`
  fills a chunk from a deterministic Perlin height field. It puts grass on the
  surface, two layers of dirt under it, and stone below that.
- **Textures** (`voxelworld.texture`): 8×8, 16-colour `MicroTexture` tiles
  and a `TextureAtlas` that holds one tile per block type. `sample(u, v)`
  wraps coordinates so tiles repeat.
- **World streaming** (`voxelworld.world`): `World` loads the chunks inside a
  spherical view distance around the camera, a bounded number per `update`
  call. It drops chunks that lie more than two chunks outside that sphere.
- **Span rasterization** (`voxelworld.spans`, `voxelworld.span_walker`):
  `SpanWalkerRasterizer` draws screen-aligned quads (`ProjectedQuad`,
  coordinates in normalised device space) into a depth-tested colour and
  depth buffer (`SpanBuffer`). It works one horizontal span at a time, in
  batches of up to eight (`TrapezoidBatch`).

## Blocks and chunks

```python
from voxelworld.block_type import BlockData, BlockType
from voxelworld.chunk import Chunk, coords_to_index, index_to_coords

chunk = Chunk.uniform((0, 0, 0), BlockType.AIR)
assert chunk.is_uniform()

chunk.set_block(1, 2, 3, BlockData(BlockType.STONE))
assert not chunk.is_uniform()
assert chunk.get_block(1, 2, 3).is_solid()

index = coords_to_index(1, 2, 3)
assert index_to_coords(index) == (1, 2, 3)

terrain = Chunk.generate_terrain((0, 0, 0))
```

`generate_terrain` handles some chunks without filling every cell:

- A chunk that lies wholly above the terrain comes back as uniform air.
- A chunk that lies well below the terrain comes back as uniform stone.

Most of a world therefore costs almost no memory. Local coordinates outside
`0..32` raise `IndexError`. `BlockType.from_u8` decodes unknown byte values
as air.

## Streaming a world

```python
from voxelworld.world import World, WorldConfig, world_to_chunk_pos

world = World(WorldConfig(view_distance=2, frustum_culling=False, max_chunks_per_frame=3))

camera = (0.0, 0.0, 0.0)
while world.update(camera):
    pass  # each call generates at most max_chunks_per_frame chunks

print(world.chunk_count())
print(world_to_chunk_pos((-1.0, -1.0, -1.0)))  # (-1, -1, -1)
visible = world.get_visible_chunks(camera)
```

`update` returns `True` when it generated at least one chunk. Chunks beyond
the unload distance are dropped only by a call that did not reach the
per-call generation limit.

Other members of `World`:

- `generate_region(min_pos, max_pos)` fills an inclusive box of chunk
  positions in one go.
- `set_view_distance` changes the radius at run time, never below one chunk.
- `get_visible_chunks_frustum(camera_position, frustum)` also drops chunks
  that a frustum rejects. The frustum can be any object with an
  `intersects_aabb(min_corner, max_corner)` method. It is used only when
  `WorldConfig.frustum_culling` is on and a frustum is given.
- `chunk_bounds(pos)` returns a chunk's world-space corners.

## Textures

```python
from voxelworld.texture import TextureAtlas, rgb565_to_argb32

atlas = TextureAtlas()
grass = atlas.textures[1]
argb = grass.sample(3, 5)            # 0xAARRGGBB, alpha 0xFF
assert grass.sample(11, 13) == argb  # coordinates wrap every 8 texels
assert rgb565_to_argb32(0xFFFF) == 0xFFFFFFFF
```

`BlockType.texture_id()` gives each block type's index into
`TextureAtlas.textures`.

## Rasterizing quads

```python
from voxelworld.span_walker import ProjectedQuad, SpanWalkerRasterizer
from voxelworld.spans import SpanBuffer

buffer = SpanBuffer(100, 100)
walker = SpanWalkerRasterizer(100, 100)
quad = ProjectedQuad(-0.6, -0.2, -0.4, 0.0, depth_near=0.5, block_type=1)
walker.rasterize_quads([quad], buffer, visibility_mask=0b1)
print(sum(c != 0 for c in buffer.color))  # a 10x10 block of pixels
```

`SpanWalkerRasterizer` converts each visible quad to pixel bounds for its
viewport, clipped to the screen. Bit *i* of `visibility_mask` marks quad *i*
as visible, and `None` draws every quad. Rows are sampled at pixel centres.
The far edges are widened by a tiny epsilon so that adjacent quads do not
leave sub-pixel gaps.

A `SpanBuffer` starts with colour 0 and depth infinity. A pixel is written
only when the new depth is strictly nearer than the stored one, so quads can
be drawn in any order. `block_color` maps a block type byte to the RGBA
colour used for drawing.

Use `setup_batches` and `rasterize_batch` directly to inspect or build the
eight-quad batches yourself. `rasterize_batch` leaves the batch it is given
unchanged. `SpanBuffer.fill_span` draws a single depth-tested horizontal run.

## What this package does not do

There is no camera, view frustum or projection code here. Quads must already
be projected to normalised device coordinates. The package also does not:

- turn chunks into meshes;
- rasterize general triangles;
- open a window or show the buffer on screen;
- provide a command-line program.

`SpanBuffer` holds plain Python lists of colour and depth values. Getting
them onto a display or into an image file is up to the caller.