#!/usr/bin/env python3
"""
tilesc.py - Compile an image into a deduplicated 2bpp tileset string.

Outputs:
  - tileset string (stdout, or -o file)
  - .json   Optional debug (unique tiles with their ordinals)

Usage:
  python tools/tilesc.py tiles.png -o tiles.inc --json AUTO
"""

from __future__ import annotations

import argparse
import json
import os
import sys

from gen_paths import ANALYSIS_ROOT, project_root
from image_io import ImageLoadError, load_pixels
from tile_lookup import build_lookup, lookup_to_tiles_string, tile_count, tile_dims


def debug_info(path: str, pixels, lookup) -> dict:
    x_tiles, y_tiles = tile_dims(pixels)
    return {
        "source": path,
        "width": int(pixels.shape[1]),
        "height": int(pixels.shape[0]),
        "tiles_x": x_tiles,
        "tiles_y": y_tiles,
        "tile_count": tile_count(pixels),
        "unique_tiles": len(lookup),
        "tiles": [{"index": idx, "encoding": tile} for tile, idx in lookup.items()],
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="Input image")
    ap.add_argument("-o", "--output", default="", help="Output tileset string (default: stdout)")
    ap.add_argument("--json", default="", help="Output debug .json (AUTO for the analysis dir)")
    args = ap.parse_args()

    try:
        pixels = load_pixels(args.input)
    except ImageLoadError as e:
        print(f"{os.path.abspath(e.path)}: error: {e.message}", file=sys.stderr)
        sys.exit(1)
    lookup = build_lookup(pixels)
    text = lookup_to_tiles_string(lookup)
    # Keep stdout clean when it carries the tileset string.
    log = sys.stdout if args.output else sys.stderr

    if args.output:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(args.output)), exist_ok=True)
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            print(f"{os.path.abspath(args.output)}: error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Wrote {args.output} ({len(lookup)} tiles)")
    else:
        print(text)

    if args.json == "AUTO":
        name = os.path.splitext(os.path.basename(args.input))[0]
        args.json = os.path.join(project_root(), ANALYSIS_ROOT, "tiles", f"{name}.json")
    if args.json:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(args.json)), exist_ok=True)
            with open(args.json, "w", encoding="utf-8") as f:
                json.dump(debug_info(args.input, pixels, lookup), f, indent=2)
        except OSError as e:
            print(f"{os.path.abspath(args.json)}: error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Wrote {args.json}", file=log)


if __name__ == "__main__":
    main()
