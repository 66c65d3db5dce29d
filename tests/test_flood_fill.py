import pytest
from PIL import Image

from touchup_editor.core.editor_tools import flood_fill

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def colors(img):
    return set(img.getdata())


def test_uniform_raster_is_filled_completely():
    img = Image.new("RGBA", (100, 100), WHITE)
    assert flood_fill(img, (50, 50), BLACK, tolerance=30) == 100 * 100
    assert colors(img) == {BLACK}


@pytest.mark.parametrize("tolerance", [0, 1, 50, 100])
@pytest.mark.parametrize("seed", [(0, 0), (31, 7), (39.9, 19.9)])
def test_uniform_fill_any_tolerance_any_seed(tolerance, seed):
    img = Image.new("RGBA", (40, 20), (12, 200, 90, 255))
    flood_fill(img, seed, (200, 10, 10, 128), tolerance=tolerance)
    assert colors(img) == {(200, 10, 10, 128)}


def test_fill_alpha_is_written_not_blended():
    img = Image.new("RGBA", (5, 5), WHITE)
    flood_fill(img, (2, 2), (0, 0, 0, 128), tolerance=0)
    assert img.getpixel((0, 0)) == (0, 0, 0, 128)


def test_same_color_fill_is_noop():
    img = Image.new("RGBA", (100, 100), WHITE)
    assert flood_fill(img, (50, 50), WHITE, tolerance=30) == 0
    assert colors(img) == {WHITE}


def test_near_same_color_within_threshold_is_noop():
    img = Image.new("RGBA", (10, 10), WHITE)
    assert flood_fill(img, (5, 5), (251, 251, 251, 251), tolerance=100) == 0
    assert colors(img) == {WHITE}


def test_fill_color_inside_tolerance_terminates():
    # the written color still matches the target; must not loop
    img = Image.new("RGBA", (30, 30), WHITE)
    assert flood_fill(img, (3, 3), (245, 245, 245, 255), tolerance=30) == 900
    assert colors(img) == {(245, 245, 245, 255)}


def test_fill_stops_at_boundary():
    img = Image.new("RGBA", (20, 20), WHITE)
    for y in range(20):
        img.putpixel((10, y), BLACK)
    flood_fill(img, (2, 2), (255, 0, 0, 255), tolerance=10)
    assert img.getpixel((9, 19)) == (255, 0, 0, 255)
    assert img.getpixel((10, 5)) == BLACK
    assert img.getpixel((11, 5)) == WHITE


def test_fill_reaches_around_obstacles():
    # U-shaped wall: region inside the U connects to the outside via the bottom
    img = Image.new("RGBA", (20, 20), WHITE)
    for y in range(0, 15):
        img.putpixel((5, y), BLACK)
        img.putpixel((14, y), BLACK)
    for x in range(5, 15):
        img.putpixel((x, 0), BLACK)
    flood_fill(img, (10, 5), (0, 0, 255, 255), tolerance=0)
    assert img.getpixel((0, 0)) == (0, 0, 255, 255)
    assert img.getpixel((19, 0)) == (0, 0, 255, 255)
    assert img.getpixel((5, 3)) == BLACK


def test_diagonal_neighbors_are_not_connected():
    img = Image.new("RGBA", (3, 3), BLACK)
    img.putpixel((0, 0), WHITE)
    img.putpixel((1, 1), WHITE)
    flood_fill(img, (0, 0), (255, 0, 0, 255), tolerance=0)
    assert img.getpixel((0, 0)) == (255, 0, 0, 255)
    assert img.getpixel((1, 1)) == WHITE


def test_tolerance_is_euclidean_over_four_channels():
    img = Image.new("RGBA", (3, 1), WHITE)
    # distance sqrt(3 * 20^2) ~= 34.6
    img.putpixel((1, 0), (235, 235, 235, 255))
    img.putpixel((2, 0), WHITE)
    flood_fill(img, (0, 0), BLACK, tolerance=17)  # threshold 34
    assert img.getpixel((1, 0)) == (235, 235, 235, 255)
    assert img.getpixel((2, 0)) == WHITE

    img2 = Image.new("RGBA", (3, 1), WHITE)
    img2.putpixel((1, 0), (235, 235, 235, 255))
    flood_fill(img2, (0, 0), BLACK, tolerance=18)  # threshold 36
    assert colors(img2) == {BLACK}


def test_seed_outside_raster_is_noop():
    img = Image.new("RGBA", (10, 10), WHITE)
    assert flood_fill(img, (-1, 4), BLACK) == 0
    assert flood_fill(img, (4, 10), BLACK) == 0
    assert colors(img) == {WHITE}


def test_fill_at_edges_and_corners():
    img = Image.new("RGBA", (7, 5), WHITE)
    flood_fill(img, (6.5, 4.5), BLACK, tolerance=0)
    assert colors(img) == {BLACK}
