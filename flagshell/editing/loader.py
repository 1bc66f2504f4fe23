"""Document loader — reads the edited scratch file back."""

from __future__ import annotations

import logging

from ..errors import DocumentReadError

logger = logging.getLogger(__name__)


def load_document(path: str) -> bytes:
    """Return the full contents of *path*.

    Raises DocumentReadError when the file cannot be read.  Callers treat
    this as recoverable: the user may fix it by editing again.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        logger.warning("[Edit] Unable to read %s: %s", path, exc)
        raise DocumentReadError(f"Unable to read file: {exc}") from exc
    logger.debug("[Edit] Loaded %d bytes from %s", len(data), path)
    return data
