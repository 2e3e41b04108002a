import pytest

from snap2zombie.prefixes import decode_prefixes, parse_hash, twox_128, xxhash64


def test_xxhash64_empty_input_known_value():
    assert xxhash64(b"", 0) == 0xEF46DB3751D8E999


def test_twox_128_system_pallet():
    assert twox_128(b"System").hex() == "26aa394eea5630e07c48ae0c9558cef7"


def test_twox_128_timestamp_pallet():
    assert twox_128(b"Timestamp").hex() == "f0c365c3cf59d671eb72da0e7a4113c4"


@pytest.mark.parametrize("data", [b"", b"a", b"abcd", b"abcdefgh", b"x" * 31, b"y" * 32, b"z" * 77])
def test_twox_128_is_concatenation_of_seeded_hashes(data):
    digest = twox_128(data)
    assert len(digest) == 16
    assert digest[:8] == xxhash64(data, 0).to_bytes(8, "little")
    assert digest[8:] == xxhash64(data, 1).to_bytes(8, "little")


@pytest.mark.parametrize("length", [0, 3, 4, 7, 8, 15, 31, 32, 33, 64, 100])
def test_xxhash64_fits_in_64_bits_and_is_deterministic(length):
    data = bytes(range(length))
    value = xxhash64(data, 0)
    assert 0 <= value < 2**64
    assert xxhash64(data, 0) == value


def test_xxhash64_seed_and_length_change_result():
    data = bytes(range(40))
    assert xxhash64(data, 0) != xxhash64(data, 1)
    hashes = {xxhash64(data[:n], 0) for n in range(41)}
    assert len(hashes) == 41


def test_parse_hash_strips_prefix():
    assert parse_hash("0xabcDEF12") == "abcDEF12"


def test_parse_hash_without_prefix():
    assert parse_hash("359e684f") == "359e684f"


def test_parse_hash_reports_position_with_prefix_offset():
    with pytest.raises(ValueError, match="position: 4"):
        parse_hash("0xabzz")


def test_parse_hash_reports_position_without_prefix():
    with pytest.raises(ValueError, match="position: 0"):
        parse_hash("g123")


def test_decode_prefixes_hex_then_pallets():
    result = decode_prefixes(["0a0b", "ff"], ["System"])
    assert result == [bytes.fromhex("0a0b"), b"\xff", twox_128(b"System")]


def test_decode_prefixes_empty():
    assert decode_prefixes([], []) == []


@pytest.mark.parametrize("bad", ["abc", "0x12", "zz", "12 34"])
def test_decode_prefixes_rejects_invalid_hex(bad):
    with pytest.raises(ValueError, match="Failed to parse prefix key"):
        decode_prefixes([bad], [])