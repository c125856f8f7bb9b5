"""Small 8x8 palette textures and the block texture atlas."""

from __future__ import annotations

from dataclasses import dataclass, field

TEXTURE_SIZE = 8
PALETTE_SIZE = 16
INDEX_BYTES = TEXTURE_SIZE * TEXTURE_SIZE // 2


@dataclass(frozen=True)
class MicroTexture:
    """An 8x8 texture of 4-bit palette indices over a 16-colour ARGB palette.

    Indices are packed two per byte: the high nibble holds the even x pixel,
    the low nibble the odd one.
    """

    palette: tuple[int, ...]
    indices: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "palette", tuple(self.palette))
        object.__setattr__(self, "indices", bytes(self.indices))
        if len(self.palette) != PALETTE_SIZE:
            raise ValueError(f"palette must hold {PALETTE_SIZE} colours")
        if len(self.indices) != INDEX_BYTES:
            raise ValueError(f"indices must hold {INDEX_BYTES} bytes")

    def sample(self, u: int, v: int) -> int:
        """ARGB colour at (u, v); coordinates wrap every 8 pixels."""
        pixel = ((v & 7) << 3) | (u & 7)
        byte = self.indices[pixel >> 1]
        palette_index = (byte >> 4) & 0xF if pixel & 1 == 0 else byte & 0xF
        return self.palette[palette_index]


def rgb565_to_argb32(c: int) -> int:
    """Expand an RGB565 colour to opaque ARGB32 by bit replication."""
    r = (c >> 11) & 0x1F
    g = (c >> 5) & 0x3F
    b = c & 0x1F
    r8 = (r << 3) | (r >> 2)
    g8 = (g << 2) | (g >> 4)
    b8 = (b << 3) | (b >> 2)
    return 0xFF000000 | (r8 << 16) | (g8 << 8) | b8


def create_checkerboard(c1: int, c2: int) -> MicroTexture:
    """Checkerboard of two RGB565 colours; palette slots 0 and 1 are used."""
    palette = [0] * PALETTE_SIZE
    palette[0] = rgb565_to_argb32(c1)
    palette[1] = rgb565_to_argb32(c2)

    indices = bytearray(INDEX_BYTES)
    for pixel in range(TEXTURE_SIZE * TEXTURE_SIZE):
        y, x = divmod(pixel, TEXTURE_SIZE)
        color_index = (x + y) % 2
        indices[pixel // 2] |= color_index << 4 if pixel % 2 == 0 else color_index
    return MicroTexture(tuple(palette), bytes(indices))


def create_noise(base: int, dark: int) -> MicroTexture:
    """Pseudo-random mix of two RGB565 colours."""
    base_argb = rgb565_to_argb32(base)
    dark_argb = rgb565_to_argb32(dark)
    palette = tuple(base_argb if i % 2 == 0 else dark_argb for i in range(PALETTE_SIZE))

    indices = bytearray()
    seed = 12345
    for _ in range(INDEX_BYTES):
        seed = (seed * 1103515245 + 12345) & 0xFFFFFFFF
        indices.append((seed >> 16) & 0xFF)
    return MicroTexture(palette, bytes(indices))


def _default_textures() -> list[MicroTexture]:
    return [
        create_checkerboard(0xF81F, 0x0000),  # air / unused: debug magenta
        create_noise(0x03E0, 0x02E0),  # grass
        create_noise(0x8A22, 0x71C2),  # dirt
        create_noise(0x8410, 0x73AE),  # stone
    ]


@dataclass
class TextureAtlas:
    """Textures for every block type, indexed by BlockType.texture_id()."""

    textures: list[MicroTexture] = field(default_factory=_default_textures)