"""Profile image storage on local disk under randomized filenames."""

from __future__ import annotations

import secrets
import time
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.config import get_settings

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif"})
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif"})


class ImageStore:
	def __init__(self, directory: str | Path | None = None, max_bytes: int | None = None):
		settings = get_settings()
		self.directory = Path(directory or settings.upload_dir)
		self.max_bytes = max_bytes or settings.upload_max_bytes

	@staticmethod
	def is_present(upload: UploadFile | None) -> bool:
		return upload is not None and bool(upload.filename)

	async def save(self, upload: UploadFile, field_name: str = "imagePhoto") -> str:
		"""Validate and persist an uploaded image, returning the stored filename."""
		extension = Path(upload.filename or "").suffix.lower()
		content_type = (upload.content_type or "").lower()
		if extension not in ALLOWED_IMAGE_EXTENSIONS or content_type not in ALLOWED_IMAGE_TYPES:
			raise ValueError("Only image files (jpeg, jpg, png, gif) are allowed.")

		data = await upload.read(self.max_bytes + 1)
		if not data:
			raise ValueError("Uploaded image is empty.")
		if len(data) > self.max_bytes:
			raise ValueError(f"Image exceeds the {self.max_bytes // (1024 * 1024)} MB upload limit.")

		filename = f"{field_name}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"
		await run_in_threadpool(self._write, filename, data)
		return filename

	def _write(self, filename: str, data: bytes) -> None:
		self.directory.mkdir(parents=True, exist_ok=True)
		(self.directory / filename).write_bytes(data)

	async def discard(self, filename: str) -> None:
		"""Remove a stored image; a file that is already gone is ignored."""
		await run_in_threadpool((self.directory / filename).unlink, missing_ok=True)
