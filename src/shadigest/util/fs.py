"""Chunked file reader feeding the digest engine"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from shadigest.core.errors import DigestIOError

log = logging.getLogger(__name__)


def iter_file_chunks(path: str | Path, chunk_size: int) -> Iterator[bytes]:
    """Yield the file's bytes in chunks of at most chunk_size; OSError becomes DigestIOError."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    path = Path(path)
    try:
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                yield chunk
    except OSError as e:
        log.debug("read failed for %s: %s", path, e)
        raise DigestIOError(path, e.strerror or str(e)) from e
