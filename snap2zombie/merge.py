"""Merging a hex snapshot into the ``top`` storage of a raw chain spec."""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import IO, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

SIZE_WARNING_THRESHOLD = 2 * 1024 * 1024 * 1024

_TOP_RE = re.compile(r'"top":\s*\{')


@dataclass
class MergeStats:
    """Counters describing what a merge changed."""

    removed_keys: int = 0
    inserted_keys: int = 0
    skipped_from_snapshot: int = 0


def build_deletion_regex(prefixes: Sequence[bytes]) -> re.Pattern[str]:
    """Build a regex matching a storage line whose key starts with one of ``prefixes``.

    A matching line looks like ``"0x<prefix><hex digits>":`` with optional
    leading whitespace and optional whitespace before the colon.
    """
    alternatives = "|".join(bytes(p).hex() for p in prefixes)
    return re.compile(rf'^\s*"0x(?:{alternatives})[0-9a-fA-F]*"\s*:')


def _lines(stream: IO[str]) -> Iterator[str]:
    """Yield lines without their ``\\n`` or ``\\r\\n`` terminator."""
    for line in stream:
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        yield line


def _open_for_reading(path: PathLike, what: str) -> IO[str]:
    try:
        return open(path, encoding="utf-8", newline="")
    except OSError as exc:
        logger.error("Failed to open %s file: %s", what, exc)
        raise


def _merge_streams(
    spec: Iterable[str],
    patch: IO[str],
    deletion: re.Pattern[str],
    all_keys: bool,
    writer: IO[str],
    stats: MergeStats,
) -> None:
    inserted = False
    inside_top = False
    trailing_comma_edge_case = False

    for line in spec:
        if inside_top and "}" in line:
            inside_top = False
            if trailing_comma_edge_case:
                logger.warning("Need to manually remove trailing comma from top object")
        if inside_top and (all_keys or deletion.search(line)):
            stats.removed_keys += 1
            continue

        writer.write(line + "\n")
        trailing_comma_edge_case = False

        if not inserted and _TOP_RE.search(line):
            inside_top = True
            for patch_line in _lines(patch):
                if all_keys or deletion.search(patch_line):
                    writer.write(patch_line + "\n")
                    stats.inserted_keys += 1
                else:
                    stats.skipped_from_snapshot += 1
            inserted = True
            # An empty remainder of "top" would leave a trailing comma; only report it.
            trailing_comma_edge_case = True


def merge_into_raw(
    chain_spec_path: PathLike,
    hex_snapshot_path: PathLike,
    prefixes: Sequence[bytes] = (),
    output_path: Optional[PathLike] = None,
    all_keys: bool = False,
) -> MergeStats:
    """Replace keys under ``prefixes`` in a raw chain spec with those of a hex snapshot.

    With ``all_keys`` every key of the ``top`` object is replaced by the whole
    snapshot. The file is processed line by line and written through a
    temporary file that finally replaces ``output_path`` (by default the input).
    """
    prefixes = [bytes(p) for p in prefixes]
    if prefixes:
        logger.info(
            "Will remove these key prefixes from original chain spec, "
            "and copy them from the hex snapshot: %s",
            [p.hex() for p in prefixes],
        )
    if not prefixes and not all_keys:
        raise ValueError("Add at least one --pallet arg, or pass --all flag")

    deletion = build_deletion_regex(prefixes)
    target = chain_spec_path if output_path is None else output_path
    directory = os.path.dirname(os.path.abspath(chain_spec_path))
    stats = MergeStats()

    fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as writer:
            with _open_for_reading(chain_spec_path, "chain spec") as spec:
                with _open_for_reading(hex_snapshot_path, "hex snapshot") as patch:
                    _merge_streams(_lines(spec), patch, deletion, all_keys, writer, stats)
        os.replace(temp_path, target)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(temp_path)
        raise

    logger.info("Removed %d keys from existing chain spec", stats.removed_keys)
    logger.info("Inserted %d new keys from snapshot", stats.inserted_keys)
    if stats.skipped_from_snapshot > 0:
        logger.info(
            "%d keys not inserted from snapshot based on pallet prefix",
            stats.skipped_from_snapshot,
        )

    final_size = os.path.getsize(target)
    logger.info("Final file size: %d bytes", final_size)
    if final_size < SIZE_WARNING_THRESHOLD:
        logger.warning(
            "Output file size is less than 2GB, zombienet will attempt to modify it "
            "and that may fail"
        )
        logger.warning(
            "Use pad-with-spaces subcommand to workaround that. "
            "Note that this may not be needed, so try without it first."
        )
    return stats