# backend/utils/images.py
import re
import time
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageOps

ALLOWED_CONTENT_TYPE = re.compile(r"^image/(jpeg|jpg|png|webp)$", re.IGNORECASE)

_EXTENSION = re.compile(r"\.[^/.]+$")
_UNSAFE = re.compile(r"[^\w\-]+", re.ASCII)


def is_allowed_image(content_type: Optional[str]) -> bool:
    return bool(content_type and ALLOWED_CONTENT_TYPE.match(content_type))


def safe_basename(filename: Optional[str], limit: int = 40) -> str:
    """'My photo (1).PNG' -> 'My_photo_1_' : no extension, word chars only, at most `limit` chars."""
    base = _EXTENSION.sub("", filename or "image")
    return _UNSAFE.sub("_", base)[:limit]


def jpeg_filename(original: Optional[str]) -> str:
    return f"{int(time.time() * 1000)}-{safe_basename(original)}.jpg"


def save_as_jpeg(data: bytes, out_path: Path, quality: int = 85) -> Path:
    """Decode any Pillow-readable image, apply its EXIF orientation and write it as JPEG."""
    with Image.open(BytesIO(data)) as img:
        img = ImageOps.exif_transpose(img)
        if img.mode != "RGB":
            img = img.convert("RGB")
        img.save(out_path, "JPEG", quality=quality)
    return out_path
