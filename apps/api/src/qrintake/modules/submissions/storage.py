"""
Resume Storage

Stores uploaded resumes and returns a reference saved on the submission.
Type and size filtering happen before a file reaches this layer.
"""

import asyncio
import logging
import re
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from qrintake.core.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


class ResumeStorage(Protocol):
    async def store(self, filename: str, content: bytes) -> str: ...

    async def open(self, ref: str) -> Path: ...

    async def delete(self, ref: str) -> None: ...


def safe_filename(filename: str) -> str:
    """Replace anything but letters, digits, dots and dashes with underscores."""
    return _UNSAFE_CHARS.sub("_", Path(filename).name) or "resume"


class LocalResumeStorage:
    """Writes resumes to a directory on local disk."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    async def store(self, filename: str, content: bytes) -> str:
        stamp = datetime.now(UTC).strftime("%Y%m%d%H%M%S")
        ref = f"{stamp}_{uuid.uuid4().hex[:8]}_{safe_filename(filename)}"

        await asyncio.to_thread(self._write, ref, content)
        logger.info(f"Resume stored: {ref}")
        return ref

    def _write(self, ref: str, content: bytes) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        (self.base_dir / ref).write_bytes(content)

    async def open(self, ref: str) -> Path:
        """
        Resolve a stored reference to a file path.

        Raises:
            FileNotFoundError: If the reference is unknown or escapes the base dir
        """
        path = (self.base_dir / ref).resolve()
        if self.base_dir.resolve() not in path.parents or not path.is_file():
            raise FileNotFoundError(ref)
        return path

    async def delete(self, ref: str) -> None:
        """Remove a stored resume. Unknown references are ignored."""
        path = (self.base_dir / ref).resolve()
        if self.base_dir.resolve() not in path.parents:
            return
        await asyncio.to_thread(path.unlink, missing_ok=True)
        logger.info(f"Resume removed: {ref}")


def get_resume_storage() -> ResumeStorage:
    """FastAPI dependency providing the configured storage backend."""
    return LocalResumeStorage(settings.upload_dir)
