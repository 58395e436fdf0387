from __future__ import annotations

import pytest

from shared.cipher import is_valid
from shared.protocol.errors import ArgumentError, ContentError
from shared.utils import generate_key, read_symbols
from shared.utils.keygen import main as keygen_main


def test_read_symbols_strips_one_newline(tmp_path):
    path = tmp_path / "plaintext"
    path.write_bytes(b"HELLO WORLD\n")
    assert read_symbols(path) == ("HELLO WORLD", 11)


def test_read_symbols_crlf_and_no_newline(tmp_path):
    crlf = tmp_path / "crlf"
    crlf.write_bytes(b"ABC\r\n")
    bare = tmp_path / "bare"
    bare.write_bytes(b"ABC")
    assert read_symbols(crlf) == ("ABC", 3)
    assert read_symbols(bare) == ("ABC", 3)


def test_read_symbols_rejects_bad_bytes(tmp_path):
    path = tmp_path / "bad"
    path.write_bytes(b"HELLO$WORLD\n")
    with pytest.raises(ContentError):
        read_symbols(path)


def test_read_symbols_rejects_inner_newline(tmp_path):
    path = tmp_path / "multiline"
    path.write_bytes(b"HELLO\nWORLD\n")
    with pytest.raises(ContentError):
        read_symbols(path)


def test_read_symbols_missing_file(tmp_path):
    with pytest.raises(ArgumentError):
        read_symbols(tmp_path / "missing")


def test_generate_key():
    key = generate_key(64)
    assert len(key) == 64
    assert is_valid(key)
    with pytest.raises(ArgumentError):
        generate_key(0)


def test_keygen_cli(capsys):
    assert keygen_main(["15"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("\n")
    assert len(out) == 16
    assert is_valid(out[:-1])


@pytest.mark.parametrize("argv", [[], ["-3"], ["abc"], ["1", "2"]])
def test_keygen_cli_bad_arguments(argv, capsys):
    assert keygen_main(argv) == 1
    assert capsys.readouterr().out == ""
