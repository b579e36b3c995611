#!/usr/bin/env python3
"""
tilekit.py - Image-level conversions built on tile_lookup and tileset_image.

  image_to_tiles_string         image -> deduplicated tileset string
  image_to_sprite_string        image -> column-major sprite data string
  image_and_tileset_to_tilemap  image + tileset image -> tilemap string
  images_to_tileset_image       images -> merged tileset PNG bytes

Sources are file paths or raw image bytes.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Union

from image_io import ImageSource, load_pixels, save_pixels
from tile_lookup import (
    Lookup,
    build_lookup,
    lookup_to_tiles_string,
    merge_lookups,
    pixels_to_sprite_data,
    resolve_tilemap,
    tilemap_to_string,
)
from tileset_image import render_tileset


def image_to_lookup(source: ImageSource) -> Lookup:
    return build_lookup(load_pixels(source))


def image_to_tiles_string(source: ImageSource) -> str:
    return lookup_to_tiles_string(image_to_lookup(source))


def image_to_sprite_string(source: ImageSource) -> str:
    return pixels_to_sprite_data(load_pixels(source))


def image_and_tileset_to_tilemap(source: ImageSource, tileset_source: ImageSource, offset: int = 0) -> str:
    lookup = image_to_lookup(tileset_source)
    return tilemap_to_string(resolve_tilemap(load_pixels(source), lookup, offset))


def load_lookups(sources: Sequence[ImageSource], jobs: int = 1) -> List[Lookup]:
    """Build one lookup per source, returned in input order."""
    if jobs <= 1 or len(sources) <= 1:
        return [image_to_lookup(s) for s in sources]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        # map() yields in submission order, whatever order decodes finish in.
        return list(pool.map(image_to_lookup, sources))


def images_to_tileset_image(
    sources: Sequence[ImageSource],
    out_file: Optional[Union[str, Path]] = None,
    jobs: int = 1,
) -> bytes:
    merged = merge_lookups(load_lookups(sources, jobs))
    return save_pixels(render_tileset(merged), out_file)
