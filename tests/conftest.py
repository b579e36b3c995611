from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Sample value whose tileset quantization is each colour index 0..3.
WHITE = 255
LIGHT = 200
DARK = 100
BLACK = 0


def solid_tile(index: int) -> str:
    lo = 0xFF if index & 1 else 0x00
    hi = 0xFF if index & 2 else 0x00
    return f"0x{lo:02X},0x{hi:02X}," * 8


def tile_grid(rows):
    """Build a grid of solid 8x8 tiles from rows of sample values."""
    return np.vstack([
        np.hstack([np.full((8, 8), v, dtype=np.uint8) for v in row])
        for row in rows
    ])


@pytest.fixture
def write_png(tmp_path: Path):
    def _write(name: str, pixels) -> Path:
        path = tmp_path / name
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
        return path
    return _write
