"""The voxel world: chunk streaming around a camera and visibility queries."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

from .chunk import CHUNK_SIZE, Chunk

ChunkPos = tuple[int, int, int]
Vec3 = tuple[float, float, float]


class Frustum(Protocol):
    """Anything that can test an axis-aligned box against a view volume."""

    def intersects_aabb(self, min_corner: Vec3, max_corner: Vec3) -> bool: ...


@dataclass
class WorldConfig:
    """Tuning for chunk streaming and culling."""

    view_distance: int = 8
    """View distance in chunks, as a radius around the camera's chunk."""
    frustum_culling: bool = True
    """Whether frustum culling is applied on top of distance culling."""
    max_chunks_per_frame: int = 4
    """Most chunks generated by a single update."""


def world_to_chunk_pos(world_pos: Sequence[float]) -> ChunkPos:
    """Chunk position containing a world-space point."""
    x, y, z = world_pos
    return (
        math.floor(x / CHUNK_SIZE),
        math.floor(y / CHUNK_SIZE),
        math.floor(z / CHUNK_SIZE),
    )


def chunk_bounds(chunk_pos: Sequence[int]) -> tuple[Vec3, Vec3]:
    """World-space (min, max) corners of a chunk."""
    min_corner = tuple(float(c * CHUNK_SIZE) for c in chunk_pos)
    max_corner = tuple(c + CHUNK_SIZE for c in min_corner)
    return min_corner, max_corner  # type: ignore[return-value]


def _distance_sq(a: ChunkPos, b: ChunkPos) -> int:
    return sum((p - q) ** 2 for p, q in zip(a, b))


def _cube(center: ChunkPos, radius: int) -> Iterator[ChunkPos]:
    cx, cy, cz = center
    for x in range(cx - radius, cx + radius + 1):
        for y in range(cy - radius, cy + radius + 1):
            for z in range(cz - radius, cz + radius + 1):
                yield (x, y, z)


class World:
    """Chunks generated on demand and kept around the camera."""

    def __init__(self, config: WorldConfig | None = None) -> None:
        self.config = dataclasses.replace(config) if config is not None else WorldConfig()
        self._chunks: dict[ChunkPos, Chunk] = {}
        self._last_camera_chunk: ChunkPos | None = None

    def get_or_generate_chunk(self, chunk_pos: Sequence[int]) -> Chunk:
        """The chunk at a position, generating its terrain if absent."""
        key = tuple(int(c) for c in chunk_pos)
        chunk = self._chunks.get(key)  # type: ignore[arg-type]
        if chunk is None:
            chunk = Chunk.generate_terrain(key)
            self._chunks[key] = chunk  # type: ignore[index]
        return chunk

    def update(self, camera_position: Sequence[float]) -> bool:
        """Stream chunks around the camera; True if any chunk was generated.

        At most ``max_chunks_per_frame`` chunks are generated per call. Chunks
        farther than the view distance plus two are unloaded, but only on a
        call that did not hit the generation limit.
        """
        camera_chunk = world_to_chunk_pos(camera_position)
        self._last_camera_chunk = camera_chunk

        view_distance = self.config.view_distance
        limit_sq = view_distance * view_distance
        generated = 0

        for pos in _cube(camera_chunk, view_distance):
            if _distance_sq(pos, camera_chunk) > limit_sq or pos in self._chunks:
                continue
            self._chunks[pos] = Chunk.generate_terrain(pos)
            generated += 1
            if generated >= self.config.max_chunks_per_frame:
                return True

        unload_sq = (view_distance + 2) ** 2
        self._chunks = {
            pos: chunk
            for pos, chunk in self._chunks.items()
            if _distance_sq(pos, camera_chunk) <= unload_sq
        }
        return generated > 0

    def get_visible_chunks(self, camera_position: Sequence[float]) -> list[Chunk]:
        """Chunks within the view distance of the camera (no frustum test)."""
        camera_chunk = world_to_chunk_pos(camera_position)
        limit_sq = self.config.view_distance ** 2
        return [
            chunk
            for pos, chunk in self._chunks.items()
            if _distance_sq(pos, camera_chunk) <= limit_sq
        ]

    def get_visible_chunks_frustum(
        self, camera_position: Sequence[float], frustum: Frustum | None
    ) -> list[Chunk]:
        """Chunks within the view distance that also pass the frustum test.

        The frustum is consulted only when frustum culling is enabled and a
        frustum is given.
        """
        camera_chunk = world_to_chunk_pos(camera_position)
        limit_sq = self.config.view_distance ** 2
        use_frustum = self.config.frustum_culling and frustum is not None

        visible = []
        for pos, chunk in self._chunks.items():
            if _distance_sq(pos, camera_chunk) > limit_sq:
                continue
            if use_frustum and not frustum.intersects_aabb(*chunk_bounds(pos)):  # type: ignore[union-attr]
                continue
            visible.append(chunk)
        return visible

    def get_all_chunks(self) -> list[Chunk]:
        return list(self._chunks.values())

    def chunk_count(self) -> int:
        return len(self._chunks)

    def generate_region(self, min_pos: Sequence[int], max_pos: Sequence[int]) -> None:
        """Generate every missing chunk in the inclusive box between two positions."""
        (x0, y0, z0), (x1, y1, z1) = min_pos, max_pos
        for x in range(x0, x1 + 1):
            for y in range(y0, y1 + 1):
                for z in range(z0, z1 + 1):
                    self.get_or_generate_chunk((x, y, z))

    def contains_chunk(self, position: Sequence[int]) -> bool:
        return tuple(position) in self._chunks

    def set_view_distance(self, view_distance: int) -> None:
        """Change the view distance in chunks; values below 1 become 1."""
        self.config.view_distance = max(1, view_distance)

    def view_distance(self) -> int:
        return self.config.view_distance

    def clear(self) -> None:
        """Drop every chunk."""
        self._chunks.clear()
        self._last_camera_chunk = None