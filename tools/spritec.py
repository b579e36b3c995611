#!/usr/bin/env python3
"""
spritec.py - Compile an image into linear 2bpp sprite data.

Tiles are emitted column by column (top to bottom, then the next column)
using the sprite colour ramp. Nothing is deduplicated.

Usage:
  python tools/spritec.py hero.png -o hero.inc
"""

from __future__ import annotations

import argparse
import os
import sys

from image_io import ImageLoadError, load_pixels
from tile_lookup import pixels_to_sprite_data, tile_count


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="Input image")
    ap.add_argument("-o", "--output", default="", help="Output sprite data (default: stdout)")
    args = ap.parse_args()

    try:
        pixels = load_pixels(args.input)
    except ImageLoadError as e:
        print(f"{os.path.abspath(e.path)}: error: {e.message}", file=sys.stderr)
        sys.exit(1)
    text = pixels_to_sprite_data(pixels)

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
    print(f"Wrote {args.output} ({tile_count(pixels)} tiles)")


if __name__ == "__main__":
    main()
