#!/usr/bin/env python3
"""
tile_lookup.py - Walk pixel grids tile by tile and build/merge/resolve lookups.

A lookup maps an encoded tile string to its ordinal. Ordinals are dense and
follow insertion order, so iterating a lookup enumerates tiles by ordinal.

Scan orders:
  rows     tile row outer, tile column inner (tilesets, tilemaps)
  columns  tile column outer, tile row inner (sprites)
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

import numpy as np

from tile_codec import SPRITE_RAMP, TILE_SIZE, TILESET_RAMP, dec_hex, encode_tile, tiles_string

Lookup = Dict[str, int]


class MissingTileError(Exception):
    def __init__(self, encoding: str, tx: int, ty: int):
        super().__init__(f"Tile is missing from tileset: {encoding}")
        self.encoding = encoding
        self.tx = tx
        self.ty = ty


def red_channel(pixels: np.ndarray) -> np.ndarray:
    arr = np.asarray(pixels)
    if arr.ndim == 3:
        return arr[:, :, 0]
    if arr.ndim != 2:
        raise ValueError(f"Pixel grid must be 2D or 3D, got shape {arr.shape}")
    return arr


def tile_dims(pixels: np.ndarray) -> Tuple[int, int]:
    height, width = red_channel(pixels).shape
    return width // TILE_SIZE, height // TILE_SIZE


def tile_count(pixels: np.ndarray) -> int:
    x_tiles, y_tiles = tile_dims(pixels)
    return x_tiles * y_tiles


def iter_tiles(
    pixels: np.ndarray,
    order: str = "rows",
    ramp: np.ndarray = TILESET_RAMP,
) -> Iterator[Tuple[int, int, str]]:
    red = red_channel(pixels)
    x_tiles, y_tiles = tile_dims(red)
    if order == "rows":
        coords = ((tx, ty) for ty in range(y_tiles) for tx in range(x_tiles))
    elif order == "columns":
        coords = ((tx, ty) for tx in range(x_tiles) for ty in range(y_tiles))
    else:
        raise ValueError(f"Unknown scan order: {order}")
    for tx, ty in coords:
        x0 = tx * TILE_SIZE
        y0 = ty * TILE_SIZE
        block = red[y0:y0 + TILE_SIZE, x0:x0 + TILE_SIZE]
        yield tx, ty, encode_tile(block, ramp)


def build_lookup(pixels: np.ndarray) -> Lookup:
    lookup: Lookup = {}
    for _, _, tile in iter_tiles(pixels):
        if tile not in lookup:
            lookup[tile] = len(lookup)
    return lookup


def lookup_to_tiles_string(lookup: Lookup) -> str:
    return tiles_string(lookup.keys())


def pixels_to_sprite_data(pixels: np.ndarray) -> str:
    return tiles_string(tile for _, _, tile in iter_tiles(pixels, order="columns", ramp=SPRITE_RAMP))


def merge_lookups(lookups: Iterable[Lookup]) -> Lookup:
    merged: Lookup = {}
    for lookup in lookups:
        for tile in lookup:
            if tile not in merged:
                merged[tile] = len(merged)
    return merged


def resolve_tilemap(pixels: np.ndarray, lookup: Lookup, offset: int = 0) -> List[int]:
    out: List[int] = []
    for tx, ty, tile in iter_tiles(pixels):
        if tile not in lookup:
            raise MissingTileError(tile, tx, ty)
        out.append(lookup[tile] + offset)
    return out


def tilemap_to_string(indices: Iterable[int]) -> str:
    return ",".join(dec_hex(i) for i in indices)
