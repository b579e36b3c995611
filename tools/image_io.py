#!/usr/bin/env python3
"""
image_io.py - Decode images into pixel grids and encode grids back to PNG.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

ImageSource = Union[str, Path, bytes, bytearray]


class ImageLoadError(Exception):
    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path
        self.message = message


def source_name(source: ImageSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return "<bytes>"
    return str(source)


def load_pixels(source: ImageSource) -> np.ndarray:
    """Decode an image file or buffer into an RGBA array indexed [y, x, channel]."""
    name = source_name(source)
    fp = io.BytesIO(bytes(source)) if isinstance(source, (bytes, bytearray)) else source
    try:
        with Image.open(fp) as img:
            img.load()
            rgba = img.convert("RGBA")
    except FileNotFoundError as e:
        raise ImageLoadError(name, f"Image file not found: {name}") from e
    except UnidentifiedImageError as e:
        raise ImageLoadError(name, f"Not a valid image file: {name}") from e
    return np.asarray(rgba, dtype=np.uint8)


def save_pixels(pixels: np.ndarray, out_file: Optional[Union[str, Path]] = None) -> bytes:
    """Encode a single-channel grid as PNG; also write it when out_file is set."""
    arr = np.clip(np.asarray(pixels), 0, 255).astype(np.uint8)
    if arr.ndim != 2:
        raise ValueError(f"Expected a single-channel grid, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError("Cannot encode an empty image")
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    data = buf.getvalue()
    if out_file:
        out_path = Path(out_file)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(data)
    return data
