# apps/api/app/services/image_storage.py
# Avatar yükleme: upload(file) -> url
# - cloudinary: imzalı REST upload (httpx)
# - local: MEDIA_DIR altına yazar, MEDIA_URL altında servis edilir (geliştirme)
from __future__ import annotations

import hashlib
import os
import time
from typing import Protocol
from uuid import uuid4

import httpx
from fastapi import UploadFile

from app.core.errors import InternalError
from app.core.logging import get_logger

logger = get_logger(__name__)


class ImageStorage(Protocol):
    async def upload(self, file: UploadFile) -> str: ...


class LocalImageStorage:
    def __init__(self, media_dir: str, media_url: str = "/media"):
        self.media_dir = media_dir
        self.media_url = media_url.rstrip("/")

    async def upload(self, file: UploadFile) -> str:
        ext = os.path.splitext(file.filename or "")[1].lower()
        name = f"{uuid4().hex}{ext}"
        os.makedirs(self.media_dir, exist_ok=True)
        data = await file.read()
        try:
            with open(os.path.join(self.media_dir, name), "wb") as fh:
                fh.write(data)
        except OSError as e:
            logger.error("avatar.upload.local_failed error=%s", e)
            raise InternalError(f"avatar upload failed: {e}", tag="avatar_upload_failed") from e
        logger.info("avatar.upload.local name=%s bytes=%s", name, len(data))
        return f"{self.media_url}/{name}"


class CloudinaryImageStorage:
    API_BASE = "https://api.cloudinary.com/v1_1"

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30.0):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def _signature(self, params: dict[str, str]) -> str:
        payload = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return hashlib.sha1(f"{payload}{self.api_secret}".encode("utf-8")).hexdigest()

    async def upload(self, file: UploadFile) -> str:
        params = {"timestamp": str(int(time.time()))}
        form = {**params, "api_key": self.api_key, "signature": self._signature(params)}
        data = await file.read()
        files = {"file": (file.filename or "avatar", data, file.content_type or "application/octet-stream")}
        url = f"{self.API_BASE}/{self.cloud_name}/image/upload"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as c:
                r = await c.post(url, data=form, files=files)
                r.raise_for_status()
                body = r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("avatar.upload.cloudinary_failed error=%s", e)
            raise InternalError(f"avatar upload failed: {e}", tag="avatar_upload_failed") from e
        secure_url = body.get("secure_url") or body.get("url")
        if not secure_url:
            raise InternalError("avatar upload returned no url", tag="avatar_upload_failed")
        logger.info("avatar.upload.cloudinary public_id=%s", body.get("public_id"))
        return secure_url


def build_image_storage(settings) -> ImageStorage:
    if settings.IMAGE_STORAGE == "cloudinary":
        if not (settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_API_KEY and settings.CLOUDINARY_API_SECRET):
            raise RuntimeError("IMAGE_STORAGE=cloudinary requires CLOUDINARY_* settings")
        return CloudinaryImageStorage(
            settings.CLOUDINARY_CLOUD_NAME,
            settings.CLOUDINARY_API_KEY,
            settings.CLOUDINARY_API_SECRET,
            timeout=settings.UPLOAD_TIMEOUT,
        )
    return LocalImageStorage(settings.MEDIA_DIR, settings.MEDIA_URL)
