from PIL import Image, ImageDraw

LIGHT = (220, 220, 220, 255)
DARK = (180, 180, 180, 255)


def create_checkerboard(size: tuple[int, int], square_size: int = 8) -> Image.Image:
    """Gray checkerboard shown behind transparent pixels."""
    w, h = size
    bg = Image.new("RGBA", (max(1, w), max(1, h)), LIGHT)
    draw = ImageDraw.Draw(bg)
    for row, y in enumerate(range(0, h, square_size)):
        for x in range(((row + 1) % 2) * square_size, w, square_size * 2):
            draw.rectangle([x, y, x + square_size - 1, y + square_size - 1], fill=DARK)
    return bg
