import pytest

from snap2zombie.padding import CHUNK_SIZE, pad_with_spaces


def test_pad_in_place_with_default_byte(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_bytes(b'{"a": 1}')
    added = pad_with_spaces(spec, None, None, 100)
    data = spec.read_bytes()
    assert len(data) == 100
    assert added == 100 - len(b'{"a": 1}')
    assert data.startswith(b'{"a": 1}')
    assert set(data[len(b'{"a": 1}') :]) == {0x20}


def test_pad_to_output_leaves_input_untouched(tmp_path):
    spec = tmp_path / "spec.json"
    out = tmp_path / "out.json"
    spec.write_bytes(b"abc")
    added = pad_with_spaces(spec, out, ord("x"), 10)
    assert spec.read_bytes() == b"abc"
    assert out.read_bytes() == b"abc" + b"x" * 7
    assert added == 7


def test_no_padding_when_already_large_enough(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_bytes(b"0123456789")
    assert pad_with_spaces(spec, None, None, 10) == 0
    assert pad_with_spaces(spec, None, None, 5) == 0
    assert spec.read_bytes() == b"0123456789"


def test_padding_across_chunk_boundary(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_bytes(b"start")
    target = CHUNK_SIZE * 2 + 17
    added = pad_with_spaces(spec, None, 0, target)
    data = spec.read_bytes()
    assert len(data) == target
    assert added == target - len(b"start")
    assert data[len(b"start") :].count(0) == added


def test_invalid_ascii_code_raises(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_bytes(b"abc")
    with pytest.raises(ValueError):
        pad_with_spaces(spec, None, 256, 10)
    assert spec.read_bytes() == b"abc"


def test_missing_input_raises(tmp_path):
    with pytest.raises(OSError):
        pad_with_spaces(tmp_path / "missing.json", tmp_path / "out.json", None, 10)