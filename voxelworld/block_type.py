"""Block types and the compact per-voxel block record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class BlockType(IntEnum):
    """Kinds of block a voxel can hold, stored as a single byte."""

    AIR = 0
    GRASS = 1
    DIRT = 2
    STONE = 3

    def is_solid(self) -> bool:
        """Whether the block occupies space (everything except air)."""
        return _IS_SOLID[self]

    def is_air(self) -> bool:
        return self is BlockType.AIR

    def color(self) -> tuple[int, int, int]:
        """Base RGB colour of the block."""
        return _COLORS[self]

    def texture_id(self) -> int:
        """Index of this block's texture in the texture atlas."""
        return _TEXTURE_IDS[self]

    @classmethod
    def from_u8(cls, value: int) -> BlockType:
        """Decode a stored byte; unknown values decode as air."""
        try:
            return cls(value)
        except ValueError:
            return cls.AIR


BLOCK_TYPE_COUNT = len(BlockType)

_IS_SOLID = {
    BlockType.AIR: False,
    BlockType.GRASS: True,
    BlockType.DIRT: True,
    BlockType.STONE: True,
}

_COLORS = {
    BlockType.AIR: (0, 0, 0),
    BlockType.GRASS: (34, 139, 34),
    BlockType.DIRT: (139, 69, 19),
    BlockType.STONE: (128, 128, 128),
}

_TEXTURE_IDS = {
    BlockType.AIR: 0,
    BlockType.GRASS: 1,
    BlockType.DIRT: 2,
    BlockType.STONE: 3,
}


@dataclass(frozen=True, slots=True)
class BlockData:
    """Data stored for a single voxel."""

    block_type: BlockType = BlockType.AIR

    def is_solid(self) -> bool:
        return self.block_type.is_solid()

    @classmethod
    def air(cls) -> BlockData:
        return cls(BlockType.AIR)