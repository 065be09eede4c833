"""Local filesystem storage for uploaded note files."""

import asyncio
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileRepository:
    """
    Stores one uploaded file per note id under a fixed root directory.

    Files are named `{note_id}_{original_name}`. Note ids are never reused,
    so names never collide. The note id -> path mapping lives in memory only;
    the files themselves survive a restart.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self._paths: dict[int, Path] = {}

    @staticmethod
    def file_name_for(note_id: int, original_name: str) -> str:
        """
        Build the stored file name for a note.

        Directory components of the client-supplied name are dropped so the
        file always lands directly under the root.
        """
        base = os.path.basename(original_name.replace("\\", "/")) or "upload"
        return f"{note_id}_{base}"

    async def save_file(self, data: bytes, original_name: str, note_id: int) -> Path:
        """
        Write `data` to disk and record it for `note_id`.

        Returns only after the bytes have been flushed and fsynced.

        Raises:
            OSError: If the write fails (disk full, permissions, ...)
        """
        path = self.root / self.file_name_for(note_id, original_name)
        await asyncio.to_thread(self._write, path, data)
        self._paths[note_id] = path
        logger.info("Saved %d bytes for note %d at %s", len(data), note_id, path)
        return path

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        with open(path, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())

    def get_file_path(self, note_id: int) -> Path | None:
        return self._paths.get(note_id)
