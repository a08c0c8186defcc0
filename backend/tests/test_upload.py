"""Tests for POST /api/upload and the filename helpers."""

from io import BytesIO

import pytest
from PIL import Image

from config import settings
from utils.images import is_allowed_image, safe_basename


def _image_bytes(fmt="PNG", size=(40, 20), mode="RGB", **save_args):
    buf = BytesIO()
    Image.new(mode, size, color=(200, 30, 30) if mode == "RGB" else (200, 30, 30, 128)).save(buf, fmt, **save_args)
    return buf.getvalue()


def _files_in(directory):
    return set(p.name for p in directory.iterdir()) if directory.exists() else set()


@pytest.mark.parametrize("content_type, allowed", [
    ("image/jpeg", True),
    ("image/jpg", True),
    ("image/png", True),
    ("image/webp", True),
    ("IMAGE/PNG", True),
    ("image/gif", False),
    ("text/plain", False),
    ("image/png; charset=binary", False),
    ("", False),
    (None, False),
])
def test_is_allowed_image(content_type, allowed):
    assert is_allowed_image(content_type) is allowed


@pytest.mark.parametrize("original, expected", [
    ("photo.png", "photo"),
    ("My photo (1).PNG", "My_photo_1_"),
    ("archive.tar.gz", "archive_tar"),
    ("zdjęcie-przód.webp", "zdj_cie-prz_d"),
    (None, "image"),
    ("", "image"),
    ("x" * 60 + ".jpg", "x" * 40),
])
def test_safe_basename(original, expected):
    assert safe_basename(original) == expected


def test_upload_png_is_stored_as_jpeg(client, upload_dir):
    resp = client.post("/api/upload", files={"file": ("Front View.png", _image_bytes("PNG"), "image/png")})
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["success"] is True
    assert body["url"].startswith("/uploads/")
    assert body["url"].endswith("-Front_View.jpg")

    stored = upload_dir / body["url"].rsplit("/", 1)[1]
    assert stored.exists()
    with Image.open(stored) as img:
        assert img.format == "JPEG"
        assert img.size == (40, 20)

    served = client.get(body["url"])
    assert served.status_code == 200
    assert served.content == stored.read_bytes()


def test_upload_transparent_webp(client, upload_dir):
    data = _image_bytes("WEBP", mode="RGBA")
    resp = client.post("/api/upload", files={"file": ("logo.webp", data, "image/webp")})
    assert resp.status_code == 200, resp.text
    with Image.open(upload_dir / resp.json()["url"].rsplit("/", 1)[1]) as img:
        assert img.mode == "RGB"


def test_upload_applies_exif_orientation(client, upload_dir):
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 CW on display
    data = _image_bytes("JPEG", size=(40, 20), exif=exif)

    resp = client.post("/api/upload", files={"file": ("phone.jpg", data, "image/jpeg")})
    assert resp.status_code == 200, resp.text
    with Image.open(upload_dir / resp.json()["url"].rsplit("/", 1)[1]) as img:
        assert img.size == (20, 40)


def test_upload_rejects_non_image_before_writing(client, upload_dir):
    before = _files_in(upload_dir)
    resp = client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Only image files (jpg, png, webp) are allowed"}
    assert _files_in(upload_dir) == before


def test_upload_without_file(client):
    resp = client.post("/api/upload")
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded"}


def test_upload_too_large(client, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024)
    before = _files_in(upload_dir)
    resp = client.post("/api/upload", files={"file": ("big.png", b"\0" * 2048, "image/png")})
    assert resp.status_code == 413
    assert resp.json() == {"error": "File too large"}
    assert _files_in(upload_dir) == before


def test_upload_corrupt_image_is_500(client):
    resp = client.post("/api/upload", files={"file": ("broken.png", b"definitely not a png", "image/png")})
    assert resp.status_code == 500
    assert resp.json()["error"]
