"""Writing storage key/value pairs in the hex snapshot line format."""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import IO, Union

logger = logging.getLogger(__name__)

Entry = tuple[bytes, bytes]


def storage_iter(storage: Mapping[bytes, bytes]) -> Iterator[Entry]:
    """Yield every ``(key, value)`` of ``storage`` in ascending key order."""
    for key in sorted(storage):
        yield key, storage[key]


def format_entry(key: bytes, value: bytes) -> str:
    """Format one entry as a raw chain spec ``top`` line, without the newline."""
    return f'"0x{bytes(key).hex()}": "0x{bytes(value).hex()}",'


def filter_entries(entries: Iterable[Entry], prefixes: Sequence[bytes]) -> Iterator[Entry]:
    """Keep entries whose key starts with one of ``prefixes``; keep all if there are none."""
    prefixes = tuple(bytes(p) for p in prefixes)
    for key, value in entries:
        if not prefixes or bytes(key).startswith(prefixes):
            yield key, value


def write_hex_snap(
    entries: Iterable[Entry],
    prefixes: Sequence[bytes],
    output: Union[str, "os.PathLike[str]", IO[str]],
) -> int:
    """Write the matching entries, one per line, to a path or text stream.

    Returns the number of entries written.
    """
    if prefixes:
        logger.info("Will only keep prefixes: %s", [bytes(p).hex() for p in prefixes])

    if hasattr(output, "write"):
        context = contextlib.nullcontext(output)
    else:
        try:
            context = open(output, "w", encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to create output file: %s", exc)
            raise

    count = 0
    with context as stream:
        for key, value in filter_entries(entries, prefixes):
            stream.write(format_entry(key, value) + "\n")
            count += 1
    return count