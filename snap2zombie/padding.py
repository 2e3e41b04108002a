"""Grow a file to a target size by appending a padding byte."""

from __future__ import annotations

import logging
import os
import shutil
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SIZE = 2 * 1024 * 1024 * 1024
DEFAULT_PAD_BYTE = 0x20
CHUNK_SIZE = 1024 * 1024

PathLike = Union[str, "os.PathLike[str]"]


def pad_with_spaces(
    chain_spec_path: PathLike,
    output_path: Optional[PathLike] = None,
    ascii_code: Optional[int] = None,
    target_size: Optional[int] = None,
) -> int:
    """Pad a file up to ``target_size`` bytes and return how many bytes were added.

    With ``output_path`` the input is first copied there and the copy is padded;
    otherwise the input is padded in place.
    """
    pad_byte = DEFAULT_PAD_BYTE if ascii_code is None else ascii_code
    if not 0 <= pad_byte <= 255:
        raise ValueError(f"ascii code must be between 0 and 255, got {pad_byte}")
    target = DEFAULT_TARGET_SIZE if target_size is None else target_size
    if target < 0:
        raise ValueError(f"target size must not be negative, got {target}")

    if output_path is not None:
        try:
            shutil.copyfile(chain_spec_path, output_path)
        except OSError as exc:
            logger.error("Failed to open input or output file: %s", exc)
            raise
        path = output_path
    else:
        path = chain_spec_path

    current_size = os.path.getsize(path)
    logger.info("Current file size: %d bytes", current_size)
    logger.info("Target file size:  %d bytes", target)

    if current_size >= target:
        logger.info("No padding needed")
        return 0

    padding_needed = target - current_size
    logger.info("Padding file with %d additional bytes", padding_needed)

    chunk = bytes([pad_byte]) * CHUNK_SIZE
    remaining = padding_needed
    with open(path, "ab") as handle:
        while remaining > 0:
            step = min(CHUNK_SIZE, remaining)
            handle.write(chunk[:step])
            remaining -= step
        handle.flush()
    return padding_needed