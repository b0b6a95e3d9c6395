"""
Image uploads to the third-party CDN (Cloudinary unsigned upload presets).

The profile photo and company logo flows both upload first and only write
their document once a secure URL came back.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

import requests
from fastapi import UploadFile

from iain import config

LOG = logging.getLogger(__name__)

executor = ThreadPoolExecutor(max_workers=2)

DEFAULT_UPLOAD_ERROR = "Cloudinary upload failed."


class ImageUploadError(Exception):
    """The image host rejected the upload or could not be reached."""

    def __init__(self, message: str = DEFAULT_UPLOAD_ERROR):
        super().__init__(message)
        self.message = message


def post_image(filename: str, contents: bytes, content_type: str, upload_preset: str) -> str:
    """Multipart POST to the upload endpoint. Returns the secure URL."""
    try:
        response = requests.post(
            config.CLOUDINARY_UPLOAD_URL,
            files={"file": (filename, contents, content_type)},
            data={"upload_preset": upload_preset},
            timeout=config.UPLOAD_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        LOG.error("Cloudinary upload error: %s", e)
        raise ImageUploadError(str(e)) from e

    if not response.ok:
        try:
            message = (response.json().get("error") or {}).get("message")
        except ValueError:
            message = None
        LOG.error("Cloudinary upload rejected (%s): %s", response.status_code, message)
        raise ImageUploadError(message or DEFAULT_UPLOAD_ERROR)

    secure_url = response.json().get("secure_url")
    if not secure_url:
        raise ImageUploadError("Cloudinary response did not include a secure URL.")
    return secure_url


async def upload_image(file: UploadFile, upload_preset: str) -> str:
    contents = await file.read()
    if not contents:
        raise ImageUploadError("The selected image is empty.")

    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        executor,
        post_image,
        file.filename or "upload",
        contents,
        file.content_type or "application/octet-stream",
        upload_preset,
    )
