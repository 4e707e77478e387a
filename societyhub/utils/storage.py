# ================================
# LOCAL FILE STORAGE (utils/storage.py)
# ================================

from fastapi import UploadFile
from typing import Dict, Any
from pathlib import Path
import os
import re
import time
import secrets
import logging

from societyhub.config import settings
from societyhub.core.exceptions import AppException, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

ALLOWED_EXTENSIONS = {
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "jpg", "jpeg", "png",
}

ALLOWED_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/plain",
    "image/jpeg",
    "image/jpg",
    "image/png",
}

class LocalStorage:
    """Stores uploaded documents on the local filesystem under UPLOAD_DIR"""

    def __init__(self, base_dir: str = None, max_size: int = None):
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR)
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE

    def _ensure_dir(self):
        self.base_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _safe_name(filename: str) -> str:
        name = os.path.basename(filename or "file")
        return re.sub(r"[^A-Za-z0-9._-]", "_", name)

    @staticmethod
    def validate_type(filename: str, content_type: str):
        extension = Path(filename or "").suffix.lower().lstrip(".")
        if extension not in ALLOWED_EXTENSIONS or (content_type or "").lower() not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                "Invalid file type. Only PDF, DOC, DOCX, XLS, XLSX, PPT, PPTX, TXT, JPG, JPEG, PNG files are allowed"
            )

    async def save(self, file: UploadFile) -> Dict[str, Any]:
        """
        Validate and persist an upload.

        Returns:
            Dict with the stored path, original name, size and MIME type
        """
        self.validate_type(file.filename, file.content_type)

        chunks = []
        file_size = 0
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            file_size += len(chunk)
            if file_size > self.max_size:
                raise AppException(
                    detail=f"File size exceeds maximum allowed size of {self.max_size // (1024 * 1024)}MB",
                    status_code=413,
                    error_code="FILE_TOO_LARGE"
                )
            chunks.append(chunk)
        content = b"".join(chunks)

        self._ensure_dir()
        stored_name = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-{self._safe_name(file.filename)}"
        path = self.base_dir / stored_name
        path.write_bytes(content)

        logger.info(f"Stored upload {file.filename} as {path} ({file_size} bytes)")

        return {
            "path": str(path),
            "file_name": file.filename,
            "file_size": file_size,
            "file_type": file.content_type,
        }

    def delete(self, path: str) -> bool:
        """Remove a stored file; False when it was already gone"""
        try:
            os.remove(path)
            logger.info(f"Deleted stored file: {path}")
            return True
        except FileNotFoundError:
            logger.warning(f"Stored file already missing: {path}")
            return False

    @staticmethod
    def exists(path: str) -> bool:
        return bool(path) and os.path.isfile(path)
