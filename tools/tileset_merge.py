#!/usr/bin/env python3
"""
tileset_merge.py - Merge the unique tiles of several images into one tileset PNG.

Tiles are numbered in input order: every tile of the first image, then the
tiles of the second image not already seen, and so on. The output grid is 16
tiles wide.

Usage:
  python tools/tileset_merge.py font.png ui.png level1.png -o tileset.png
  python tools/tileset_merge.py images/*.png -j 4 --json AUTO
"""

from __future__ import annotations

import argparse
import json
import os
import sys

from gen_paths import ANALYSIS_ROOT, GEN_ROOT, project_root
from image_io import ImageLoadError, save_pixels
from tile_lookup import merge_lookups
from tilekit import load_lookups
from tileset_image import render_tileset, tileset_size


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("inputs", nargs="+", help="Input images, in merge order")
    ap.add_argument("-o", "--output", default="", help="Output PNG (defaults to gen/assets/tileset.png)")
    ap.add_argument("-j", "--jobs", type=int, default=1, help="Images decoded in parallel")
    ap.add_argument("--json", default="", help="Output debug .json (AUTO for the analysis dir)")
    args = ap.parse_args()

    root = project_root()
    if not args.output:
        args.output = os.path.join(root, GEN_ROOT, "assets", "tileset.png")
    if args.json == "AUTO":
        name = os.path.splitext(os.path.basename(args.output))[0]
        args.json = os.path.join(root, ANALYSIS_ROOT, "tiles", f"{name}.json")

    try:
        lookups = load_lookups(args.inputs, args.jobs)
    except ImageLoadError as e:
        print(f"{os.path.abspath(e.path)}: error: {e.message}", file=sys.stderr)
        sys.exit(1)
    merged = merge_lookups(lookups)
    if not merged:
        print(f"{os.path.abspath(args.inputs[0])}: error: no 8x8 tiles found in inputs", file=sys.stderr)
        sys.exit(1)

    try:
        data = save_pixels(render_tileset(merged), args.output)
    except OSError as e:
        print(f"{os.path.abspath(args.output)}: error: {e}", file=sys.stderr)
        sys.exit(1)
    width, height = tileset_size(len(merged))
    print(f"Wrote {args.output} ({len(merged)} tiles, {width}x{height}, {len(data)} bytes)")

    if args.json:
        debug = {
            "output": args.output,
            "width": width,
            "height": height,
            "tile_count": len(merged),
            "sources": [
                {"path": path, "unique_tiles": len(lookup)}
                for path, lookup in zip(args.inputs, lookups)
            ],
            "tiles": [{"index": idx, "encoding": tile} for tile, idx in merged.items()],
        }
        try:
            os.makedirs(os.path.dirname(os.path.abspath(args.json)), exist_ok=True)
            with open(args.json, "w", encoding="utf-8") as f:
                json.dump(debug, f, indent=2)
        except OSError as e:
            print(f"{os.path.abspath(args.json)}: error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Wrote {args.json}")


if __name__ == "__main__":
    main()
