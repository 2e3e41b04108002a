"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Optional

from snap2zombie.merge import merge_into_raw
from snap2zombie.padding import pad_with_spaces
from snap2zombie.prefixes import decode_prefixes, parse_hash

logger = logging.getLogger(__name__)


def _hex_prefix(value: str) -> str:
    try:
        return parse_hash(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _byte(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid byte value: {value!r}") from None
    if not 0 <= number <= 255:
        raise argparse.ArgumentTypeError(f"byte value out of range 0..255: {value}")
    return number


def _size(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"size must not be negative: {value}")
    return number


def _run_merge(args: argparse.Namespace) -> None:
    prefixes = decode_prefixes(args.prefix, args.pallet)
    merge_into_raw(
        args.chain_spec_path,
        args.hex_snapshot_path,
        prefixes,
        args.output_path,
        args.all,
    )


def _run_pad(args: argparse.Namespace) -> None:
    pad_with_spaces(
        args.chain_spec_path,
        args.output_path,
        args.ascii_code,
        args.target_size,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="snap2zombie",
        description="Merge hex snapshots into raw chain specs and prepare them for zombienet.",
    )
    actions = parser.add_subparsers(dest="action", metavar="ACTION")
    actions.required = True

    merge = actions.add_parser(
        "merge-into-raw", help="Merge hex snapshot into raw chain spec file"
    )
    merge.add_argument(
        "-p",
        "--pallet",
        nargs="+",
        action="extend",
        default=[],
        help="A pallet whose storage is taken from the snapshot. Can be repeated.",
    )
    merge.add_argument(
        "--prefix",
        nargs="+",
        action="extend",
        default=[],
        type=_hex_prefix,
        help="Storage key prefixes to take from the snapshot, as hex strings.",
    )
    merge.add_argument(
        "--chain-spec-path",
        required=True,
        help="The input chain spec path to read. Must be in raw format.",
    )
    merge.add_argument(
        "--hex-snapshot-path", required=True, help="The hex snapshot path to read."
    )
    merge.add_argument(
        "--output-path", help="Output path, defaults to input chain spec path."
    )
    merge.add_argument(
        "--all",
        action="store_true",
        help="Remove ALL keys from original chain spec, copy all from the snapshot.",
    )
    merge.set_defaults(handler=_run_merge)

    pad = actions.add_parser(
        "pad-with-spaces",
        help="Increase size of a file by padding with a single byte",
    )
    pad.add_argument(
        "--chain-spec-path",
        required=True,
        help="The input chain spec path to read. Must be in raw format.",
    )
    pad.add_argument(
        "--output-path", help="Output path, defaults to input chain spec path."
    )
    pad.add_argument(
        "--ascii-code",
        type=_byte,
        help="Character to use for padding, default 32 (whitespace).",
    )
    pad.add_argument(
        "--target-size", type=_size, help="Target size in bytes, default 2GiB."
    )
    pad.set_defaults(handler=_run_pad)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the exit status."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    try:
        args.handler(args)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0