"""Storage key prefixes: xxHash-based pallet hashing and hex prefix parsing."""

from __future__ import annotations

import re
import string
from collections.abc import Iterable

_MASK = 0xFFFFFFFFFFFFFFFF
_P1 = 11400714785074694791
_P2 = 14029467366897019727
_P3 = 1609587929392839161
_P4 = 9650029242287828579
_P5 = 2870177450012600261

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & _MASK


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * _P2) & _MASK
    return (_rotl(acc, 31) * _P1) & _MASK


def _merge(acc: int, value: int) -> int:
    acc ^= _round(0, value)
    return (acc * _P1 + _P4) & _MASK


def xxhash64(data: bytes, seed: int = 0) -> int:
    """Return the 64-bit xxHash of ``data`` with the given seed."""
    data = bytes(data)
    seed &= _MASK
    length = len(data)
    pos = 0

    if length >= 32:
        lanes = [
            (seed + _P1 + _P2) & _MASK,
            (seed + _P2) & _MASK,
            seed,
            (seed - _P1) & _MASK,
        ]
        while pos + 32 <= length:
            lanes = [
                _round(acc, int.from_bytes(data[pos + 8 * i : pos + 8 * i + 8], "little"))
                for i, acc in enumerate(lanes)
            ]
            pos += 32
        v1, v2, v3, v4 = lanes
        h = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _MASK
        for acc in lanes:
            h = _merge(h, acc)
    else:
        h = (seed + _P5) & _MASK

    h = (h + length) & _MASK

    while pos + 8 <= length:
        lane = int.from_bytes(data[pos : pos + 8], "little")
        h ^= _round(0, lane)
        h = (_rotl(h, 27) * _P1 + _P4) & _MASK
        pos += 8

    if pos + 4 <= length:
        lane = int.from_bytes(data[pos : pos + 4], "little")
        h ^= (lane * _P1) & _MASK
        h = (_rotl(h, 23) * _P2 + _P3) & _MASK
        pos += 4

    for byte in data[pos:]:
        h ^= (byte * _P5) & _MASK
        h = (_rotl(h, 11) * _P1) & _MASK

    h ^= h >> 33
    h = (h * _P2) & _MASK
    h ^= h >> 29
    h = (h * _P3) & _MASK
    h ^= h >> 32
    return h


def twox_128(data: bytes) -> bytes:
    """Return the 16-byte TwoX-128 hash: two seeded xxHash64 digests, little endian."""
    return b"".join(xxhash64(data, seed).to_bytes(8, "little") for seed in (0, 1))


def parse_hash(value: str) -> str:
    """Validate a hex string with optional ``0x`` prefix and return it without the prefix."""
    offset = 0
    if value.startswith("0x"):
        value = value[2:]
        offset = 2
    for pos, char in enumerate(value):
        if char not in string.hexdigits:
            raise ValueError(
                "Expected block hash, found illegal hex character at position: "
                f"{offset + pos}"
            )
    return value


def decode_prefixes(prefixes: Iterable[str], pallets: Iterable[str]) -> list[bytes]:
    """Turn hex prefixes and pallet names into raw storage key prefixes.

    Hex prefixes come first, in order, followed by the TwoX-128 hash of each pallet name.
    """
    result: list[bytes] = []
    for prefix in prefixes:
        if not _HEX_RE.fullmatch(prefix):
            raise ValueError(
                "Failed to parse prefix key, should be in hex format "
                f"(without leading 0x): {prefix}"
            )
        result.append(bytes.fromhex(prefix))
    result.extend(twox_128(name.encode("utf-8")) for name in pallets)
    return result