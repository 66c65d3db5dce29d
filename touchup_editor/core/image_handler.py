from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

SUPPORTED_INPUTS = (".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif", ".tif", ".tiff")


def decode_image(data: bytes) -> Image.Image:
    """
    Decode encoded image bytes (PNG, JPEG, WEBP, ...) into an RGBA raster at
    its native pixel size.
    """
    if not data:
        raise ValueError("No image data.")
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Cannot decode image: {e}") from e
    return img.convert("RGBA")


def encode_png(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG", optimize=True)
    return buf.getvalue()


def load_image_with_alpha(path: str | Path) -> Image.Image:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    if p.suffix.lower() not in SUPPORTED_INPUTS:
        raise ValueError(f"Unsupported format: {p.suffix}")
    return decode_image(p.read_bytes())


def save_png_bytes(data: bytes, out_path: str | Path) -> Path:
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    return p
