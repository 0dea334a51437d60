"""Local disk storage for uploaded images."""
import logging
import re
import secrets
import time
from pathlib import Path
from typing import BinaryIO, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from ...core.config import MAX_UPLOAD_BYTES, UPLOAD_DIR
from ...core.errors import ValidationFailed

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
CHUNK_SIZE = 64 * 1024


def sanitize_filename(filename: Optional[str]) -> str:
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


class LocalFileStore:
    """Stores files flat in one directory, under generated unique names."""

    def __init__(self, root: str = UPLOAD_DIR, max_bytes: int = MAX_UPLOAD_BYTES):
        self.root = Path(root)
        self.max_bytes = max_bytes

    def _write(self, source: BinaryIO, target: Path) -> int:
        """Copies ``source`` to ``target`` in chunks, giving up past ``max_bytes``."""
        self.root.mkdir(parents=True, exist_ok=True)
        written = 0
        too_large = False
        with target.open("wb") as out:
            while True:
                chunk = source.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > self.max_bytes:
                    too_large = True
                    break
                out.write(chunk)
        if too_large:
            target.unlink(missing_ok=True)
            raise ValidationFailed(f"File is larger than {self.max_bytes} bytes")
        return written

    async def save(self, upload: UploadFile) -> str:
        """
        Writes an uploaded file to disk off the event loop.

        Args:
            upload: The multipart file received by the route.

        Returns:
            The stored filename, unique within the store.

        Raises:
            ValidationFailed: If the file exceeds ``max_bytes``.
        """
        filename = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-{sanitize_filename(upload.filename)}"
        size = await run_in_threadpool(self._write, upload.file, self.root / filename)
        logger.info(f"Stored upload {filename} ({size} bytes)")
        return filename

    def path_for(self, filename: str) -> Optional[Path]:
        # Only bare names produced by save() are served.
        if not filename or filename != Path(filename).name or filename in (".", ".."):
            return None
        path = self.root / filename
        if not path.is_file():
            return None
        return path


def get_file_store() -> LocalFileStore:
    return LocalFileStore(UPLOAD_DIR)
