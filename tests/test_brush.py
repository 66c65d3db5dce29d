import math

from PIL import Image

from touchup_editor.core.editor_tools import flood_fill, pick_color, stamp, stroke_segment

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def test_stamp_covers_disc_only():
    img = Image.new("RGBA", (41, 41), WHITE)
    assert stamp(img, 20, 20, 20, color=(0, 0, 0))
    for y in range(41):
        for x in range(41):
            inside = (x + 0.5 - 20) ** 2 + (y + 0.5 - 20) ** 2 <= 100
            assert (img.getpixel((x, y)) == BLACK) == inside, (x, y)


def test_stamp_half_opacity_blends_source_over():
    img = Image.new("RGBA", (10, 10), WHITE)
    stamp(img, 5, 5, 4, color=(0, 0, 0), opacity=0.5)
    r, g, b, a = img.getpixel((5, 5))
    assert a == 255
    assert 120 <= r <= 135 and r == g == b
    assert img.getpixel((0, 0)) == WHITE


def test_stamp_off_image_is_noop():
    img = Image.new("RGBA", (10, 10), WHITE)
    assert not stamp(img, -50, -50, 10, color=(0, 0, 0))
    assert img.getpixel((0, 0)) == WHITE


def test_stamp_clipped_at_edge():
    img = Image.new("RGBA", (10, 10), WHITE)
    assert stamp(img, 0, 0, 6, color=(0, 0, 0))
    assert img.getpixel((0, 0)) == BLACK
    assert img.getpixel((2, 0)) == BLACK
    assert img.getpixel((3, 0)) == WHITE


def test_erase_clears_alpha_ignoring_opacity():
    img = Image.new("RGBA", (20, 20), (10, 20, 30, 255))
    stamp(img, 10, 10, 8, opacity=0.1, erase=True)
    assert img.getpixel((10, 10))[3] == 0
    assert img.getpixel((10, 13))[3] == 0
    assert img.getpixel((10, 14))[3] == 255
    assert img.getpixel((0, 0)) == (10, 20, 30, 255)


def test_horizontal_stroke_has_no_gaps():
    img = Image.new("RGBA", (120, 30), WHITE)
    stroke_segment(img, (0, 0), (100, 0), 20, color=(0, 0, 0))
    for x in range(0, 101):
        for y in range(0, 10):
            assert img.getpixel((x, y)) == BLACK, (x, y)


def test_diagonal_stroke_covers_path():
    img = Image.new("RGBA", (80, 80), WHITE)
    p0, p1 = (10.0, 10.0), (65.5, 52.25)
    stroke_segment(img, p0, p1, 6, color=(0, 0, 0))
    length = math.hypot(p1[0] - p0[0], p1[1] - p0[1])
    ux, uy = (p1[0] - p0[0]) / length, (p1[1] - p0[1]) / length
    for y in range(80):
        for x in range(80):
            t = max(0.0, min(length, (x + 0.5 - p0[0]) * ux + (y + 0.5 - p0[1]) * uy))
            cx, cy = p0[0] + ux * t, p0[1] + uy * t
            # a little inside the brush edge, to stay clear of float rounding
            if math.hypot(x + 0.5 - cx, y + 0.5 - cy) <= 2.5:
                assert img.getpixel((x, y)) == BLACK, (x, y)


def test_stroke_stamps_one_per_unit_plus_end():
    img = Image.new("RGBA", (20, 20), WHITE)
    assert stroke_segment(img, (0, 0), (10, 0), 2) == 11
    assert stroke_segment(img, (0, 0), (3.5, 0), 2) == 5
    assert stroke_segment(img, (4, 4), (4, 4), 2) == 1


def painted(img):
    return [(x, y) for y in range(img.height) for x in range(img.width) if img.getpixel((x, y)) == BLACK]


def test_one_pixel_stamp_paints_the_pixel_under_the_point():
    img = Image.new("RGBA", (4, 4), WHITE)
    assert stamp(img, 0.5, 0.5, 1, color=(0, 0, 0))
    assert painted(img) == [(0, 0)]


def test_brush_picker_and_fill_agree_on_the_pixel():
    img = Image.new("RGBA", (8, 8), WHITE)
    stamp(img, 3.7, 4.9, 1, color=(0, 0, 0))
    assert painted(img) == [(3, 4)]
    assert pick_color(img, 3.7, 4.9) == (0, 0, 0)

    img = Image.new("RGBA", (8, 8), WHITE)
    img.putpixel((3, 4), (0, 0, 0, 255))
    assert flood_fill(img, (3.7, 4.9), (255, 0, 0, 255)) == 1
    assert img.getpixel((3, 4)) == (255, 0, 0, 255)


def test_one_pixel_stroke_is_continuous():
    img = Image.new("RGBA", (12, 3), WHITE)
    stroke_segment(img, (0.5, 1.5), (9.5, 1.5), 1, color=(0, 0, 0))
    assert painted(img) == [(x, 1) for x in range(10)]
