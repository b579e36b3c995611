#!/usr/bin/env python3
"""
tilemapc.py - Resolve a map image against a tileset image into a tilemap.

Every 8x8 tile of the map image must appear in the tileset image. Entries are
written as 0xXX tokens; --offset shifts every index (negative values wrap
modulo 256).

Usage:
  python tools/tilemapc.py level1.png tileset.png --offset 128 -o level1_map.inc
"""

from __future__ import annotations

import argparse
import os
import sys

from image_io import ImageLoadError, load_pixels
from tile_lookup import MissingTileError, build_lookup, resolve_tilemap, tilemap_to_string


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="Map image")
    ap.add_argument("tileset", help="Tileset image the map is drawn from")
    ap.add_argument("--offset", type=int, default=0, help="Value added to every tile index")
    ap.add_argument("-o", "--output", default="", help="Output tilemap string (default: stdout)")
    args = ap.parse_args()

    try:
        lookup = build_lookup(load_pixels(args.tileset))
        indices = resolve_tilemap(load_pixels(args.input), lookup, args.offset)
    except ImageLoadError as e:
        print(f"{os.path.abspath(e.path)}: error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except MissingTileError as e:
        path = os.path.abspath(args.input)
        print(f"{path}: error: tile ({e.tx},{e.ty}): {e}", file=sys.stderr)
        sys.exit(1)
    text = tilemap_to_string(indices)

    if not args.output:
        print(text)
        return
    try:
        os.makedirs(os.path.dirname(os.path.abspath(args.output)), exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        print(f"{os.path.abspath(args.output)}: error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Wrote {args.output} ({len(indices)} entries, {len(lookup)} tileset tiles)")


if __name__ == "__main__":
    main()
