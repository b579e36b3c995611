#!/usr/bin/env python3
"""
tile_codec.py - 2bpp 8x8 tile quantization and hex bitplane encoding.

Encoded tile format (one tile):
  0xLL,0xHH,  x 8 rows  (LL = low bitplane, HH = high bitplane)

Column 0 of a row is the most significant bit of both plane bytes. The
trailing comma is always emitted; callers joining several tiles trim exactly
one comma from the end of the whole string (see tiles_string).
"""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

TILE_SIZE = 8
TILE_BYTES = TILE_SIZE * 2
TILESET_TILES_PER_ROW = 16
TILESET_MAX_WIDTH = TILE_SIZE * TILESET_TILES_PER_ROW

# Bit weight of each column, column 0 first.
COLUMN_WEIGHTS = np.array([1 << (TILE_SIZE - 1 - x) for x in range(TILE_SIZE)], dtype=np.int64)


class TileFormatError(ValueError):
    pass


def quantize_tileset(value: int) -> int:
    if value < 40:
        return 3
    if value < 120:
        return 2
    if value < 220:
        return 1
    return 0


def quantize_sprite(value: int) -> int:
    if value < 40:
        return 3
    if value < 120:
        return 0
    if value < 220:
        return 2
    return 1


def color_from_index(index: int) -> int:
    # Not the inverse of either ramp; tilesets rendered from encodings are lossy.
    if index == 0:
        return 255
    if index == 1:
        return 200
    if index == 2:
        return 100
    return 0


TILESET_RAMP = np.array([quantize_tileset(v) for v in range(256)], dtype=np.uint8)
SPRITE_RAMP = np.array([quantize_sprite(v) for v in range(256)], dtype=np.uint8)
INDEX_COLORS = np.array([color_from_index(i) for i in range(4)], dtype=np.uint8)


def quantize_block(block: np.ndarray, ramp: np.ndarray = TILESET_RAMP) -> np.ndarray:
    samples = np.clip(np.asarray(block), 0, 255).astype(np.uint8)
    return ramp[samples]


def hex_byte(value: int) -> str:
    return f"0x{value & 0xFF:02X}"


def dec_hex(value: int) -> str:
    """Format a tilemap entry; negative values wrap modulo 256."""
    return hex_byte((256 + value) % 256)


def encode_tile(block: np.ndarray, ramp: np.ndarray = TILESET_RAMP) -> str:
    """Encode an 8x8 block of samples (indexed [y, x]) into its tile string."""
    idx = quantize_block(block, ramp)
    if idx.shape != (TILE_SIZE, TILE_SIZE):
        raise TileFormatError(f"Tile block must be {TILE_SIZE}x{TILE_SIZE}, got {idx.shape}")
    low = (idx & 1).astype(np.int64) @ COLUMN_WEIGHTS
    high = (idx >> 1).astype(np.int64) @ COLUMN_WEIGHTS
    out: List[str] = []
    for lo, hi in zip(low, high):
        out.append(f"{hex_byte(int(lo))},{hex_byte(int(hi))},")
    return "".join(out)


def parse_tile_string(text: str) -> List[int]:
    out: List[int] = []
    for tok in text.split(","):
        tok = tok.strip()
        if not tok:
            continue
        try:
            out.append(int(tok, 16))
        except ValueError as e:
            raise TileFormatError(f"Invalid hex token in tile: {tok!r}") from e
    return out


def decode_tile(text: str) -> np.ndarray:
    """Decode a tile string into an 8x8 array of colour indices ([y, x])."""
    data = parse_tile_string(text)
    if len(data) != TILE_BYTES:
        raise TileFormatError(f"Expected {TILE_BYTES} bytes per tile, got {len(data)}: {text}")
    out = np.zeros((TILE_SIZE, TILE_SIZE), dtype=np.uint8)
    for row in range(TILE_SIZE):
        lo = data[2 * row]
        hi = data[2 * row + 1]
        for bit in range(TILE_SIZE):
            mask = 1 << bit
            index = (1 if lo & mask else 0) + (2 if hi & mask else 0)
            out[row, TILE_SIZE - 1 - bit] = index
    return out


def tiles_string(encodings: Iterable[str]) -> str:
    return "".join(encodings)[:-1]
