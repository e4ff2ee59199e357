"""Public digest API: one-shot, incremental, stream and file entry points"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from shadigest.core.constants import DEFAULT_CHUNK_SIZE
from shadigest.core.engine import Sha256
from shadigest.util.fs import iter_file_chunks

log = logging.getLogger(__name__)

_HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")


def digest(data: bytes | str, encoding: str = "utf-8") -> str:
    """Return the 64-char lowercase hex SHA-256 of data (text is encoded first)."""
    if isinstance(data, str):
        data = data.encode(encoding)
    return Sha256(data).hexdigest()


def digest_incremental_update(state: Optional[Sha256], chunk: bytes) -> Sha256:
    """Feed chunk into state, creating a fresh engine when state is None."""
    if state is None:
        state = Sha256()
    state.update(chunk)
    return state


def digest_incremental_finalize(state: Sha256) -> str:
    return state.hexdigest()


def digest_stream(chunks: Iterable[bytes]) -> str:
    """Hash every chunk the source yields. Source errors propagate; nothing is finalized."""
    engine = Sha256()
    for chunk in chunks:
        engine.update(chunk)
    return engine.hexdigest()


def digest_file(path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Stream a file through the engine. Raises DigestIOError if it cannot be read."""
    log.debug("hashing %s (chunk_size=%d)", path, chunk_size)
    result = digest_stream(iter_file_chunks(path, chunk_size))
    log.debug("%s  %s", result, path)
    return result


def normalize_hex(expected: str) -> str:
    """Lowercase and strip an expected digest; ValueError unless it is 64 hex chars."""
    value = expected.strip().lower()
    if not _HEX_DIGEST.match(value):
        raise ValueError(f"Invalid SHA-256 hex digest: {expected!r}")
    return value


def verify_file(path: str | Path, expected: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """True when the file's digest equals expected (case and surrounding whitespace ignored)."""
    expected = normalize_hex(expected)
    return digest_file(path, chunk_size) == expected
