"""Voxel blocks and chunks, Perlin terrain, block textures, chunk streaming and span rasterization of quads."""

__version__ = "0.1.0"