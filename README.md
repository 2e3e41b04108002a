# snap2zombie

Tools for preparing large raw chain spec files for zombienet:

- write storage key/value pairs as hex snapshot lines
  (`"0x<key>": "0x<value>",`), optionally keeping only keys under given
  prefixes;
- merge a hex snapshot into the `"top"` object of a raw chain spec,
  replacing either the keys under selected pallets / key prefixes or
  every key;
- pad a file up to a target size (2 GiB by default) with a single byte,
  which keeps zombienet from trying to rewrite very large chain specs.

It has no dependencies outside the standard library.

## Installation

```console
pip install .
```

## Command line

The `snap2zombie` command has two subcommands.

### `merge-into-raw`

Merge the `PooledStaking` pallet storage from a hex snapshot into a raw
chain spec, writing the result to a new file:

```console
snap2zombie merge-into-raw \
    --chain-spec-path raw-spec.json \
    --hex-snapshot-path state.hexsnap \
    --pallet PooledStaking \
    --output-path merged-spec.json
```

- `-p` / `--pallet NAME...` – pallets whose keys are taken from the
  snapshot; each name becomes the key prefix `twox_128(name)`. May be
  repeated.
- `--prefix HEX...` – key prefixes given directly as hex, with or without
  a leading `0x`. May be repeated.
- `--all` – drop every key from the original `"top"` object and copy
  every line of the snapshot instead.
- `--output-path` – where to write the result; without it the chain spec
  is replaced in place.

At least one `--pallet` or `--prefix`, or `--all`, is required. The
files are processed line by line: lines inside `"top"` whose key starts
with one of the prefixes are removed, and the matching snapshot lines
are inserted right after the `"top": {` line. The result is written to
a temporary file next to the chain spec and then moved into place.

If every remaining key of `"top"` was removed, the last inserted line
keeps its trailing comma; this is reported as a warning and must be
fixed by hand. When the result is smaller than 2 GiB a warning suggests
`pad-with-spaces`.

### `pad-with-spaces`

```console
snap2zombie pad-with-spaces --chain-spec-path merged-spec.json
```

- `--target-size BYTES` – size to reach, default 2 GiB (2147483648).
- `--ascii-code N` – padding byte, 0–255, default 32 (a space).
- `--output-path` – copy the input there and pad the copy instead of
  changing the input.

A file that is already at or above the target size is left as it is.

Errors such as missing files or malformed prefixes are logged and the
command exits with status 1.

## Library use

```python
from snap2zombie.prefixes import decode_prefixes, parse_hash, twox_128
from snap2zombie.hexsnap import storage_iter, write_hex_snap
from snap2zombie.merge import merge_into_raw
from snap2zombie.padding import pad_with_spaces

# Hex prefixes (without 0x) first, then twox_128 of each pallet name.
prefixes = decode_prefixes([parse_hash("0x26aa394eea5630e07c48ae0c9558cef7")], ["PooledStaking"])

storage = {b"\x01\x02": b"\xff"}
written = write_hex_snap(storage_iter(storage), prefixes, "state.hexsnap")

stats = merge_into_raw("raw-spec.json", "state.hexsnap", prefixes, "merged-spec.json", False)
print(stats.removed_keys, stats.inserted_keys, stats.skipped_from_snapshot)

added = pad_with_spaces("merged-spec.json", None, None, None)
```

- `snap2zombie.prefixes`: `xxhash64(data, seed)`, `twox_128(data)`,
  `parse_hash(value)` (validates hex, strips `0x`, raises `ValueError`),
  `decode_prefixes(prefixes, pallets)`.
- `snap2zombie.hexsnap`: `storage_iter(storage)` yields a mapping's
  entries in ascending key order; `format_entry(key, value)`;
  `filter_entries(entries, prefixes)`; `write_hex_snap(entries, prefixes,
  output)` writes to a path or text stream and returns the number of
  lines written.
- `snap2zombie.merge`: `merge_into_raw(...)` returns a `MergeStats`;
  `build_deletion_regex(prefixes)` builds the pattern used to select
  key lines.
- `snap2zombie.padding`: `pad_with_spaces(...)` returns the number of
  bytes appended.

## What it does not do

The package cannot read or create state snapshot files and cannot fetch
state from a node. Writing a hex snapshot needs the storage key/value
pairs to be supplied by the caller (for example as a mapping passed to
`storage_iter`), and there is no command for that step; the command line
only offers `merge-into-raw` and `pad-with-spaces`.