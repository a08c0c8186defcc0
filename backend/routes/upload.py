# backend/routes/upload.py
from typing import Optional
from fastapi import APIRouter, HTTPException, UploadFile, File
import logging

from config import settings
from schemas.order import UploadResult
from utils.images import is_allowed_image, jpeg_filename, save_as_jpeg

router = APIRouter(prefix="/api", tags=["Upload"])
logger = logging.getLogger(__name__)


# Accept one image, normalize it to JPEG and return its public URL
@router.post("/upload", response_model=UploadResult)
def upload_image(file: Optional[UploadFile] = File(None)):
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    try:
        if not is_allowed_image(file.content_type):
            raise HTTPException(status_code=400, detail="Only image files (jpg, png, webp) are allowed")

        limit = settings.MAX_UPLOAD_BYTES
        data = file.file.read(limit + 1)
        if len(data) > limit:
            raise HTTPException(status_code=413, detail="File too large")
    finally:
        file.file.close()

    upload_dir = settings.upload_dir
    filename = jpeg_filename(file.filename)
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        save_as_jpeg(data, upload_dir / filename, quality=settings.JPEG_QUALITY)
    except Exception as e:
        logger.exception("UPLOAD ERROR: %s", e)
        raise HTTPException(status_code=500, detail=str(e) or "Upload failed")

    url = f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{filename}"
    logger.info("Stored upload %s (%d bytes in)", url, len(data))
    return UploadResult(url=url)
