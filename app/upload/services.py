# python imports
import logging
import re
from datetime import date
from io import BytesIO

# package imports
from flask import current_app
from PIL import Image, UnidentifiedImageError

# project imports
from app.libs.aws.s3 import StorageError
from app.libs.errors import UploadError

# app imports
from .constants import ALLOWED_IMAGE_TYPES, FOLDER_PATTERN

logger = logging.getLogger(__name__)


class UploadService:
    @staticmethod
    def validate_image(data: bytes, content_type: str, max_bytes: int):
        """Reject uploads that are not a decodable image of an allowed type and size"""
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise UploadError("Unsupported file type", status_code=415)

        if len(data) > max_bytes:
            raise UploadError(
                f"File too large (max {max_bytes // (1024 * 1024)}MB)", status_code=413
            )

        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
            logger.warning(f"Rejected undecodable image: {e}")
            raise UploadError("Invalid image file")

    @staticmethod
    def upload_image(file, folder, today=None):
        """Validate an uploaded file and store it, returning its public URL"""
        if file is None or not file.filename or not folder:
            raise UploadError("File and folder are required")

        folder = folder.strip().strip("/")
        if not re.match(FOLDER_PATTERN, folder):
            raise UploadError("Invalid folder")

        data = file.read()
        if not data:
            raise UploadError("Empty file provided")

        content_type = (file.mimetype or "").lower()
        UploadService.validate_image(
            data, content_type, current_app.config["UPLOAD_MAX_BYTES"]
        )

        s3 = current_app.extensions["s3"]
        today = today or date.today()
        key = s3.generate_s3_key(folder, file.filename, today=today)
        try:
            url = s3.put_object(
                data,
                key,
                content_type=content_type,
                metadata={"uploaded": today.isoformat(), "folder": folder},
            )
        except StorageError:
            raise UploadError("Upload failed", status_code=502)

        logger.info(f"Uploaded {file.filename} ({len(data)} bytes) to {key}")
        return url
