"""Incremental SHA-256 digest engine (FIPS 180-4)"""

from __future__ import annotations

from enum import Enum

from shadigest.core.constants import BLOCK_SIZE, DIGEST_SIZE, H_INITIAL, K, MASK_32, MASK_64
from shadigest.core.errors import InvalidUseError


class EngineState(str, Enum):
    active = "active"
    finalized = "finalized"


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK_32


def _schedule(block: bytes) -> list[int]:
    """Expand a 64-byte block into the 64-word message schedule W0..W63."""
    w = [int.from_bytes(block[i:i + 4], "big") for i in range(0, BLOCK_SIZE, 4)]
    for i in range(16, 64):
        x, y = w[i - 15], w[i - 2]
        s0 = _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)
        s1 = _rotr(y, 17) ^ _rotr(y, 19) ^ (y >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def compress(state: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    """Run the 64 compression rounds over one block and fold the result into state."""
    w = _schedule(block)
    a, b, c, d, e, f, g, h = state
    for i in range(64):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + ch + K[i] + w[i]) & MASK_32
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & MASK_32
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & MASK_32, c, b, a, (t1 + t2) & MASK_32
    return tuple((x + y) & MASK_32 for x, y in zip(state, (a, b, c, d, e, f, g, h)))


def padding(length: int) -> bytes:
    """Return the SHA-256 tail for a message of `length` bytes: 0x80, zeros, 64-bit bit length."""
    zeros = (BLOCK_SIZE - 1 - 8 - length) % BLOCK_SIZE
    return b"\x80" + b"\x00" * zeros + ((length * 8) & MASK_64).to_bytes(8, "big")


class Sha256:
    """Streaming SHA-256 hasher.

    Lifecycle is active -> finalized. `update` after `finalize` raises
    InvalidUseError; calling `finalize` again returns the cached digest.
    `reset` returns the engine to its initial state.

    Instances are not safe for concurrent mutation from several threads.
    """

    name = "sha256"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: bytes = b""):
        self.reset()
        self.update(data)

    def reset(self) -> None:
        self._h = H_INITIAL
        self._buffer = bytearray()
        self._length = 0
        self._digest: bytes | None = None
        self._state = EngineState.active

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def bytes_processed(self) -> int:
        """Total bytes passed to update since the last reset (mod 2**64)."""
        return self._length

    def update(self, data: bytes) -> None:
        if self._state is EngineState.finalized:
            raise InvalidUseError("update() called on a finalized engine; call reset() first")
        try:
            data = memoryview(data).cast("B")
        except TypeError as e:
            raise TypeError(f"expected a bytes-like object, got {type(data).__name__}") from e

        self._length = (self._length + len(data)) & MASK_64

        offset = 0
        if self._buffer:
            take = min(BLOCK_SIZE - len(self._buffer), len(data))
            self._buffer += data[:take]
            offset = take
            if len(self._buffer) < BLOCK_SIZE:
                return
            self._h = compress(self._h, bytes(self._buffer))
            self._buffer.clear()

        end = offset + (len(data) - offset) // BLOCK_SIZE * BLOCK_SIZE
        for i in range(offset, end, BLOCK_SIZE):
            self._h = compress(self._h, bytes(data[i:i + BLOCK_SIZE]))
        self._buffer += data[end:]

    def finalize(self) -> bytes:
        """Pad, process the final block(s) and return the 32-byte digest."""
        if self._digest is not None:
            return self._digest

        tail = bytes(self._buffer) + padding(self._length)
        h = self._h
        for i in range(0, len(tail), BLOCK_SIZE):
            h = compress(h, tail[i:i + BLOCK_SIZE])

        self._h = h
        self._buffer.clear()
        self._digest = b"".join(x.to_bytes(4, "big") for x in h)
        self._state = EngineState.finalized
        return self._digest

    def hexdigest(self) -> str:
        return self.finalize().hex()

    def copy(self) -> Sha256:
        """Return an independent engine holding the same partial state."""
        if self._state is EngineState.finalized:
            raise InvalidUseError("copy() called on a finalized engine")
        clone = Sha256()
        clone._h = self._h
        clone._buffer = bytearray(self._buffer)
        clone._length = self._length
        return clone

    def __repr__(self) -> str:
        return f"<Sha256 {self._state.value} bytes_processed={self._length}>"
