"""SHA-256 digest engine, written out from FIPS 180-4.

Nothing here calls hashlib. The engine is the whole point of the shim:
the same code has to run on targets where the platform digest is not
available or not trusted, and it has to be auditable line by line.

Structure (Merkle-Damgard):
    - 8 x 32-bit chaining words, initialised from the fractional parts
      of the square roots of the first 8 primes.
    - Input is consumed in 64-byte blocks. Each block is expanded into a
      64-word message schedule and mixed into the chaining words over
      64 rounds using the round constants K (cube roots of the first 64
      primes).
    - Finalisation appends 0x80, zero bytes, and the message length in
      bits as a 64-bit big-endian integer, so that the padded length is
      a multiple of 64 bytes.

Python ints are unbounded, so every addition is masked back to 32 bits.

Two entry points:
    sha256(data)                       -- one-shot
    Sha256().update(a).update(b).finalize()  -- streaming, O(1) memory

Both must agree: feeding a message in any split produces the same digest
as hashing it in one piece.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

DIGEST_SIZE = 32
BLOCK_SIZE = 64

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_H0 = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_HEX_DIGITS = frozenset("0123456789abcdef")


@dataclass(frozen=True, slots=True)
class Digest:
    """A 32-byte SHA-256 output. Compared byte for byte."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes):
            raise TypeError(
                f"Digest value must be bytes, got {type(self.value).__name__}"
            )
        if len(self.value) != DIGEST_SIZE:
            raise ValueError(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(self.value)}"
            )

    @classmethod
    def fromhex(cls, text: str) -> Digest:
        """Parse exactly 64 lowercase hex characters.

        Uppercase is rejected on purpose: the exchange format only ever
        renders lowercase, so "A" where "a" was written is an alteration.
        """
        if (
            not isinstance(text, str)
            or len(text) != DIGEST_SIZE * 2
            or not _HEX_DIGITS.issuperset(text)
        ):
            raise ValueError(f"Not a 64-character lowercase hex digest: {text!r}")
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.value.hex()


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


def _compress(state: list[int], block) -> None:
    """Mix one 64-byte block into the 8 chaining words, in place."""
    w = list(struct.unpack(">16I", block))
    for i in range(16, 64):
        w15 = w[i - 15]
        w2 = w[i - 2]
        s0 = _rotr(w15, 7) ^ _rotr(w15, 18) ^ (w15 >> 3)
        s1 = _rotr(w2, 17) ^ _rotr(w2, 19) ^ (w2 >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK32)

    a, b, c, d, e, f, g, h = state
    for i in range(64):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + ch + _K[i] + w[i]) & _MASK32
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & _MASK32

        h = g
        g = f
        f = e
        e = (d + t1) & _MASK32
        d = c
        c = b
        b = a
        a = (t1 + t2) & _MASK32

    state[0] = (state[0] + a) & _MASK32
    state[1] = (state[1] + b) & _MASK32
    state[2] = (state[2] + c) & _MASK32
    state[3] = (state[3] + d) & _MASK32
    state[4] = (state[4] + e) & _MASK32
    state[5] = (state[5] + f) & _MASK32
    state[6] = (state[6] + g) & _MASK32
    state[7] = (state[7] + h) & _MASK32


class Sha256:
    """Incremental SHA-256.

    update() may be called any number of times; finalize() exactly once.
    A partial trailing block waits in a fixed 64-byte buffer until more
    input fills it or finalize() pads it, so memory does not grow with
    the amount of data hashed.
    """

    __slots__ = ("_state", "_buffer", "_buffered", "_length", "_finalized")

    def __init__(self, data: bytes = b"") -> None:
        self._state: list[int] = list(_H0)
        self._buffer = bytearray(BLOCK_SIZE)
        self._buffered = 0
        self._length = 0  # total bytes fed so far
        self._finalized = False
        if data:
            self.update(data)

    def update(self, data: bytes | bytearray | memoryview) -> Sha256:
        """Feed more bytes. Returns self so calls can be chained."""
        if self._finalized:
            raise RuntimeError("Cannot update() a digest that was already finalized")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Expected a bytes-like object, got {type(data).__name__}"
            )

        view = memoryview(data).cast("B")
        n = len(view)
        self._length += n
        pos = 0

        if self._buffered:
            take = min(BLOCK_SIZE - self._buffered, n)
            self._buffer[self._buffered:self._buffered + take] = view[:take]
            self._buffered += take
            pos = take
            if self._buffered < BLOCK_SIZE:
                return self
            _compress(self._state, self._buffer)
            self._buffered = 0

        while n - pos >= BLOCK_SIZE:
            _compress(self._state, view[pos:pos + BLOCK_SIZE])
            pos += BLOCK_SIZE

        rest = n - pos
        if rest:
            self._buffer[:rest] = view[pos:]
            self._buffered = rest
        return self

    def finalize(self) -> Digest:
        """Pad, process the last block(s), and return the digest."""
        if self._finalized:
            raise RuntimeError("finalize() may only be called once")
        self._finalized = True

        bit_length = (self._length * 8) & _MASK64
        # 0x80 + zeros so that buffered + padding + 8 length bytes is a
        # multiple of the block size. Always at least one padding byte.
        pad_len = (55 - self._buffered) % BLOCK_SIZE + 1
        tail = (
            bytes(self._buffer[:self._buffered])
            + b"\x80"
            + b"\x00" * (pad_len - 1)
            + struct.pack(">Q", bit_length)
        )
        for offset in range(0, len(tail), BLOCK_SIZE):
            _compress(self._state, tail[offset:offset + BLOCK_SIZE])

        return Digest(struct.pack(">8I", *self._state))

    def hexdigest(self) -> str:
        """finalize() and render as 64 lowercase hex characters."""
        return self.finalize().hex()


def sha256(data: bytes | bytearray | memoryview) -> Digest:
    """One-shot SHA-256 of a byte string (empty input included)."""
    return Sha256().update(data).finalize()
