"""Local file storage for uploaded article files."""

import logging
import re
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

UPLOAD_PREFIX = "articles/"


class FileStorage:
    """Stores uploaded files on disk and maps references to public URLs."""

    def __init__(self, root: str, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def save(self, filename: str, data: bytes) -> str:
        """
        Write an uploaded file.

        Args:
            filename: Client-supplied file name
            data: File bytes

        Returns:
            Storage reference relative to the storage root
        """
        safe_name = _UNSAFE_CHARS.sub("_", Path(filename or "upload").name) or "upload"
        reference = f"{UPLOAD_PREFIX}{int(time.time() * 1000)}_{safe_name}"
        path = self.root / reference
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info(f"Stored {len(data)} bytes at {reference}")
        return reference

    def public_url(self, reference: str) -> str:
        """
        Resolve a stored reference to a full public URL.

        Absolute URLs are returned unchanged. Relative references are joined
        onto the public base URL, dropping a doubled upload prefix
        (articles/articles/...) left by older uploads.
        """
        if reference.startswith(("http://", "https://")):
            return reference
        relative = reference.lstrip("/")
        while relative.startswith(UPLOAD_PREFIX * 2):
            relative = relative[len(UPLOAD_PREFIX):]
        return f"{self.public_base_url}/{relative}"

    def delete(self, reference: str) -> None:
        if reference.startswith(self.public_base_url + "/"):
            reference = reference[len(self.public_base_url) + 1:]
        (self.root / reference).unlink(missing_ok=True)
        logger.info(f"Removed stored file {reference}")
