"""Cubic chunks of voxels with compact storage for uniform chunks."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from .block_type import BlockData, BlockType

CHUNK_SIZE = 32
CHUNK_VOLUME = CHUNK_SIZE * CHUNK_SIZE * CHUNK_SIZE

TERRAIN_SEED = 12345
_TERRAIN_SCALE = 0.01
_TERRAIN_AMPLITUDE = 20.0

# Shared immutable block records; a chunk's list can reference them freely.
_BLOCKS = {block_type: BlockData(block_type) for block_type in BlockType}


def coords_to_index(x: int, y: int, z: int) -> int:
    """Linear index of local coordinates (x fastest, then y, then z)."""
    return z * CHUNK_SIZE * CHUNK_SIZE + y * CHUNK_SIZE + x


def index_to_coords(index: int) -> tuple[int, int, int]:
    """Local coordinates of a linear index."""
    z, remainder = divmod(index, CHUNK_SIZE * CHUNK_SIZE)
    y, x = divmod(remainder, CHUNK_SIZE)
    return x, y, z


class _Perlin:
    """Seeded two-dimensional gradient noise with values in [-1, 1]."""

    _GRADIENTS = (
        (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
        (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
    )

    def __init__(self, seed: int) -> None:
        table = list(range(256))
        random.Random(seed).shuffle(table)
        self._perm = table + table

    @staticmethod
    def _fade(t: float) -> float:
        return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)

    def _grad(self, hashed: int, x: float, y: float) -> float:
        gx, gy = self._GRADIENTS[hashed & 7]
        return gx * x + gy * y

    def get(self, x: float, y: float) -> float:
        xi = math.floor(x)
        yi = math.floor(y)
        xf = x - xi
        yf = y - yi
        cx = xi & 255
        cy = yi & 255
        p = self._perm
        aa = p[p[cx] + cy]
        ab = p[p[cx] + cy + 1]
        ba = p[p[cx + 1] + cy]
        bb = p[p[cx + 1] + cy + 1]
        u = self._fade(xf)
        v = self._fade(yf)
        bottom = self._grad(aa, xf, yf) + u * (self._grad(ba, xf - 1.0, yf) - self._grad(aa, xf, yf))
        top_left = self._grad(ab, xf, yf - 1.0)
        top = top_left + u * (self._grad(bb, xf - 1.0, yf - 1.0) - top_left)
        value = bottom + v * (top - bottom)
        return max(-1.0, min(1.0, value))


_TERRAIN_NOISE = _Perlin(TERRAIN_SEED)


def _terrain_height(world_x: int, world_z: int) -> int:
    noise = _TERRAIN_NOISE.get(world_x * _TERRAIN_SCALE, world_z * _TERRAIN_SCALE)
    return int(noise * _TERRAIN_AMPLITUDE)


def _check_local(x: int, y: int, z: int) -> None:
    if not (0 <= x < CHUNK_SIZE and 0 <= y < CHUNK_SIZE and 0 <= z < CHUNK_SIZE):
        raise IndexError(f"local coordinates out of range: {(x, y, z)}")


class Chunk:
    """A CHUNK_SIZE cube of voxels at an integer chunk position.

    A chunk whose voxels are all the same type stores only that type;
    it turns into a full block list on the first write.
    """

    __slots__ = ("position", "_uniform", "_blocks")

    def __init__(self, position: Sequence[int], data: BlockType | Sequence[BlockData]) -> None:
        self.position: tuple[int, int, int] = tuple(int(c) for c in position)  # type: ignore[assignment]
        if len(self.position) != 3:
            raise ValueError("chunk position must have three components")
        if isinstance(data, BlockType):
            self._uniform: BlockType | None = data
            self._blocks: list[BlockData] | None = None
        else:
            blocks = list(data)
            if len(blocks) != CHUNK_VOLUME:
                raise ValueError(f"expected {CHUNK_VOLUME} blocks, got {len(blocks)}")
            self._uniform = None
            self._blocks = blocks

    def __repr__(self) -> str:
        kind = f"uniform {self._uniform.name}" if self._uniform is not None else "varied"
        return f"Chunk(position={self.position}, {kind})"

    @classmethod
    def uniform(cls, position: Sequence[int], block_type: BlockType) -> Chunk:
        return cls(position, BlockType(block_type))

    @classmethod
    def varied(cls, position: Sequence[int], blocks: Sequence[BlockData]) -> Chunk:
        return cls(position, blocks)

    def get_block(self, x: int, y: int, z: int) -> BlockData:
        _check_local(x, y, z)
        if self._blocks is None:
            return _BLOCKS[self._uniform]
        return self._blocks[coords_to_index(x, y, z)]

    def get_block_index(self, index: int) -> BlockData:
        if not 0 <= index < CHUNK_VOLUME:
            raise IndexError(f"block index out of range: {index}")
        if self._blocks is None:
            return _BLOCKS[self._uniform]
        return self._blocks[index]

    def is_uniform(self) -> bool:
        return self._blocks is None

    def varied_blocks(self) -> list[BlockData] | None:
        """The full block list, or None for a uniform chunk."""
        return self._blocks

    def uniform_block_type(self) -> BlockType | None:
        """The single block type of a uniform chunk, or None."""
        return self._uniform

    def set_block(self, x: int, y: int, z: int, block: BlockData) -> None:
        _check_local(x, y, z)
        if self._blocks is None:
            self._blocks = [_BLOCKS[self._uniform]] * CHUNK_VOLUME
            self._uniform = None
        self._blocks[coords_to_index(x, y, z)] = block

    @classmethod
    def generate_terrain(cls, position: Sequence[int]) -> Chunk:
        """Generate a chunk of noise-based terrain for a chunk position."""
        cx, cy, cz = (int(c) for c in position)
        off_x, off_y, off_z = cx * CHUNK_SIZE, cy * CHUNK_SIZE, cz * CHUNK_SIZE

        heights = [
            [_terrain_height(off_x + x, off_z + z) for x in range(CHUNK_SIZE)]
            for z in range(CHUNK_SIZE)
        ]
        min_height = min(min(row) for row in heights)
        max_height = max(max(row) for row in heights)

        if off_y > max_height:
            return cls.uniform((cx, cy, cz), BlockType.AIR)
        if off_y + CHUNK_SIZE < min_height - 10:
            return cls.uniform((cx, cy, cz), BlockType.STONE)

        air = _BLOCKS[BlockType.AIR]
        grass = _BLOCKS[BlockType.GRASS]
        dirt = _BLOCKS[BlockType.DIRT]
        stone = _BLOCKS[BlockType.STONE]

        blocks: list[BlockData] = []
        for row in heights:
            for y in range(CHUNK_SIZE):
                world_y = off_y + y
                for height in row:
                    if world_y > height:
                        blocks.append(air)
                    elif world_y == height:
                        blocks.append(grass)
                    elif world_y > height - 3:
                        blocks.append(dirt)
                    else:
                        blocks.append(stone)
        return cls.varied((cx, cy, cz), blocks)

    @classmethod
    def generate_test_solid(cls, position: Sequence[int]) -> Chunk:
        """A fully stone chunk stored as a block list."""
        return cls.varied(position, [_BLOCKS[BlockType.STONE]] * CHUNK_VOLUME)