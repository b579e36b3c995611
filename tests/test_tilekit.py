import io

import numpy as np
import pytest
from PIL import Image

from conftest import BLACK, DARK, LIGHT, WHITE, solid_tile, tile_grid
from image_io import ImageLoadError, load_pixels, save_pixels
from tile_lookup import MissingTileError
from tilekit import (
    image_and_tileset_to_tilemap,
    image_to_sprite_string,
    image_to_tiles_string,
    images_to_tileset_image,
    load_lookups,
)


def decode_png(data: bytes) -> np.ndarray:
    with Image.open(io.BytesIO(data)) as img:
        return np.asarray(img.convert("L"))


def test_load_pixels_from_path_and_bytes(write_png):
    grid = tile_grid([[BLACK, DARK]])
    path = write_png("grid.png", grid)
    pixels = load_pixels(path)
    assert pixels.shape == (8, 16, 4)
    assert np.array_equal(pixels[:, :, 0], grid)
    assert np.array_equal(load_pixels(path.read_bytes()), pixels)
    assert np.array_equal(load_pixels(str(path)), pixels)


def test_load_pixels_rgb_uses_red(write_png):
    rgb = np.zeros((8, 8, 3), dtype=np.uint8)
    rgb[:, :, 0] = WHITE
    pixels = load_pixels(write_png("rgb.png", rgb))
    assert (pixels[:, :, 0] == WHITE).all()
    assert (pixels[:, :, 3] == 255).all()


def test_load_pixels_errors(tmp_path):
    with pytest.raises(ImageLoadError) as excinfo:
        load_pixels(tmp_path / "missing.png")
    assert excinfo.value.path.endswith("missing.png")

    junk = tmp_path / "junk.png"
    junk.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError):
        load_pixels(junk)
    with pytest.raises(ImageLoadError) as excinfo:
        load_pixels(b"not an image")
    assert excinfo.value.path == "<bytes>"


def test_save_pixels_returns_png_and_writes(tmp_path):
    grid = tile_grid([[BLACK, WHITE]])
    out = tmp_path / "nested" / "out.png"
    data = save_pixels(grid, out)
    assert data.startswith(b"\x89PNG")
    assert out.read_bytes() == data
    assert np.array_equal(decode_png(data), grid)
    assert save_pixels(grid) == data


def test_save_pixels_rejects_bad_grids():
    with pytest.raises(ValueError):
        save_pixels(np.zeros((0, 0), dtype=np.uint8))
    with pytest.raises(ValueError):
        save_pixels(np.zeros((8, 8, 3), dtype=np.uint8))


def test_image_to_tiles_string_solid_black(write_png):
    path = write_png("black.png", np.zeros((8, 8), dtype=np.uint8))
    assert image_to_tiles_string(path) == ("0xFF,0xFF," * 8)[:-1]


def test_image_to_tiles_string_dedups(write_png):
    path = write_png("pair.png", tile_grid([[BLACK, WHITE, BLACK]]))
    assert image_to_tiles_string(path) == (solid_tile(3) + solid_tile(0))[:-1]


def test_image_to_sprite_string(write_png):
    path = write_png("sprite.png", tile_grid([[WHITE], [WHITE]]))
    assert image_to_sprite_string(path) == ("0xFF,0x00," * 16)[:-1]


def test_image_and_tileset_to_tilemap(write_png):
    tileset = write_png("tileset.png", tile_grid([[BLACK, WHITE, DARK]]))
    level = write_png("level.png", tile_grid([[DARK, BLACK], [WHITE, WHITE]]))
    assert image_and_tileset_to_tilemap(level, tileset) == "0x02,0x00,0x01,0x01"
    assert image_and_tileset_to_tilemap(level, tileset, 0x80) == "0x82,0x80,0x81,0x81"
    assert image_and_tileset_to_tilemap(level.read_bytes(), tileset.read_bytes(), -1) == "0x01,0xFF,0x00,0x00"


def test_image_and_tileset_to_tilemap_missing(write_png):
    tileset = write_png("tileset.png", tile_grid([[BLACK]]))
    level = write_png("level.png", tile_grid([[BLACK, LIGHT]]))
    with pytest.raises(MissingTileError) as excinfo:
        image_and_tileset_to_tilemap(level, tileset)
    assert excinfo.value.encoding == solid_tile(1)


def test_load_lookups_keeps_input_order(write_png):
    paths = [
        write_png(f"img{i}.png", tile_grid([[v, BLACK]]))
        for i, v in enumerate((WHITE, DARK, LIGHT, BLACK))
    ]
    serial = load_lookups(paths)
    parallel = load_lookups(paths, jobs=4)
    assert [list(l.items()) for l in serial] == [list(l.items()) for l in parallel]
    assert list(serial[0]) == [solid_tile(0), solid_tile(3)]
    assert list(serial[3]) == [solid_tile(3)]


def test_images_to_tileset_image(write_png, tmp_path):
    a = write_png("a.png", tile_grid([[BLACK, WHITE]]))
    b = write_png("b.png", tile_grid([[WHITE, DARK], [LIGHT, BLACK]]))
    out = tmp_path / "gen" / "tileset.png"
    data = images_to_tileset_image([a, b], out)
    assert out.read_bytes() == data
    assert np.array_equal(decode_png(data), tile_grid([[BLACK, WHITE, DARK, LIGHT]]))
    assert images_to_tileset_image([a, b], jobs=2) == data


def test_images_to_tileset_image_wraps_rows(write_png):
    rng = np.random.default_rng(3)
    # 20 distinct tiles: each differs in its top row.
    tiles = []
    for n in range(20):
        block = np.full((8, 8), WHITE, dtype=np.uint8)
        block[0, :] = [BLACK if (n >> bit) & 1 else WHITE for bit in range(8)]
        tiles.append(block)
    rng.shuffle(tiles)
    strip = np.hstack(tiles)
    data = images_to_tileset_image([write_png("strip.png", strip)])
    img = decode_png(data)
    assert img.shape == (16, 128)
    assert np.array_equal(img[0:8, 0:8], tiles[0])
    assert np.array_equal(img[8:16, 0:8], tiles[16])
    assert np.array_equal(img[8:16, 24:32], tiles[19])
