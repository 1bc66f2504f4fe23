"""
Temporary workspace — private scratch files used to round-trip a document
through an external editor.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from ..errors import CleanupError
from .loader import load_document

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "flagshell-"
SCRATCH_SUFFIX = ".json"


@dataclass
class ScratchFile:
    """Handle to one scratch file on disk."""
    path: str
    released: bool = False


class TemporaryWorkspace:
    """Creates, reads back and removes scratch files.

    Parameters
    ----------
    temp_dir:
        Directory for scratch files; ``None`` uses the system default.
    on_warning:
        Called with a message when a scratch file cannot be removed.
    """

    def __init__(
        self,
        temp_dir: str | None = None,
        on_warning: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._temp_dir = temp_dir
        self._on_warning = on_warning

    def create(self, content: bytes) -> ScratchFile:
        """Write *content* to a new private file (mode 0600)."""
        fd, path = tempfile.mkstemp(
            prefix=SCRATCH_PREFIX, suffix=SCRATCH_SUFFIX, dir=self._temp_dir,
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        except OSError:
            # Don't leave a half-written file behind
            self._unlink_quietly(path)
            raise
        logger.debug("[Workspace] Created %s (%d bytes)", path, len(content))
        return ScratchFile(path=path)

    def read(self, scratch: ScratchFile) -> bytes:
        return load_document(scratch.path)

    def release(self, scratch: ScratchFile) -> None:
        """Delete the scratch file.  Failures are reported, never raised."""
        if scratch.released:
            return
        scratch.released = True
        try:
            self._remove(scratch.path)
        except CleanupError as exc:
            logger.warning("[Workspace] %s", exc)
            if self._on_warning is not None:
                self._on_warning(str(exc))

    @contextmanager
    def scratch(self, content: bytes) -> Iterator[ScratchFile]:
        """Yield a scratch file seeded with *content*; always released."""
        handle = self.create(content)
        try:
            yield handle
        finally:
            self.release(handle)

    @staticmethod
    def _remove(path: str) -> None:
        try:
            os.unlink(path)
        except FileNotFoundError:
            # Some editors replace the file on save; gone is fine
            logger.debug("[Workspace] %s already removed", path)
        except OSError as exc:
            raise CleanupError(
                f"Unable to delete temporary file {path}: {exc}") from exc

    @staticmethod
    def _unlink_quietly(path: str) -> None:
        try:
            os.unlink(path)
        except OSError as exc:
            logger.warning("[Workspace] Failed to remove %s: %s", path, exc)
