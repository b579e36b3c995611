#!/usr/bin/env python3
"""
tileset_image.py - Render a tile lookup back into a grayscale tileset grid.

Layout: 16 tiles per row, left to right then top to bottom. The grid is
min(n*8, 128) pixels wide and 8*ceil(n/16) pixels tall.
"""

from __future__ import annotations

import math
from typing import Dict, Tuple

import numpy as np

from tile_codec import INDEX_COLORS, TILE_SIZE, TILESET_MAX_WIDTH, TILESET_TILES_PER_ROW, decode_tile


def tileset_size(count: int) -> Tuple[int, int]:
    width = min(count * TILE_SIZE, TILESET_MAX_WIDTH)
    height = TILE_SIZE * math.ceil(count / TILESET_TILES_PER_ROW)
    return width, height


def tile_origin(ordinal: int) -> Tuple[int, int]:
    return (
        TILE_SIZE * (ordinal % TILESET_TILES_PER_ROW),
        TILE_SIZE * (ordinal // TILESET_TILES_PER_ROW),
    )


def render_tileset(lookup: Dict[str, int]) -> np.ndarray:
    width, height = tileset_size(len(lookup))
    img = np.zeros((height, width), dtype=np.uint8)
    # Placement follows enumeration order, not the stored ordinal.
    for position, tile in enumerate(lookup):
        ox, oy = tile_origin(position)
        img[oy:oy + TILE_SIZE, ox:ox + TILE_SIZE] = INDEX_COLORS[decode_tile(tile)]
    return img
