from __future__ import annotations

import pytest

from shared.cipher import Mode
from shared.protocol import CipherRequest
from shared.protocol.errors import ContentError


def test_build_valid_request():
    request = CipherRequest.build("NPYX", "AAAAA")
    assert request.text == "NPYX"
    assert request.apply(Mode.DECRYPT) == "NPYX"


def test_from_frames():
    request = CipherRequest.from_frames(b"HELLO", b"BBBBB")
    assert request.apply(Mode.ENCRYPT) == "IFMMP"


def test_short_key_rejected():
    with pytest.raises(ContentError):
        CipherRequest.build("HELLO", "KEY")


def test_bad_symbols_rejected():
    with pytest.raises(ContentError):
        CipherRequest.build("hello", "AAAAA")
    with pytest.raises(ContentError):
        CipherRequest.build("HELLO", "AAAA$")


def test_non_ascii_frame_rejected():
    with pytest.raises(ContentError):
        CipherRequest.from_frames(b"\xffAB", b"AAA")
