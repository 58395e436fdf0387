from __future__ import annotations

import asyncio

from shared.cipher import Mode
from shared.protocol import HandshakeState, Role, accept_peer, announce, identify


def test_identify_known_roles():
    assert identify(b"otp_dec") is Role.OTP_DEC
    assert identify(b"otp_enc\n") is Role.OTP_ENC
    assert identify(b"otp_decoder") is None
    assert identify(b"\xff\xfe") is None


def test_role_for_mode():
    assert Role.for_mode(Mode.DECRYPT) is Role.OTP_DEC
    assert Role.for_mode(Mode.ENCRYPT) is Role.OTP_ENC


def test_accept_expected_role(make_stream):
    stream = make_stream([b"otp_dec@@@"])
    state = asyncio.run(accept_peer(stream, Role.OTP_DEC))
    assert state is HandshakeState.VERIFIED
    assert bytes(stream.writer.data) == b"GOOD@@@"


def test_reject_wrong_role(make_stream):
    stream = make_stream([b"otp_enc@@@"])
    state = asyncio.run(accept_peer(stream, Role.OTP_DEC))
    assert state is HandshakeState.REJECTED
    assert bytes(stream.writer.data) == b"BAD@@@"


def test_announce_sends_role_and_reads_reply(make_stream):
    stream = make_stream([b"GOOD@@@"])
    assert asyncio.run(announce(stream, Role.OTP_ENC)) is HandshakeState.VERIFIED
    assert bytes(stream.writer.data) == b"otp_enc@@@"


def test_announce_rejected(make_stream):
    stream = make_stream([b"BAD@@@"])
    assert asyncio.run(announce(stream, Role.OTP_DEC)) is HandshakeState.REJECTED


def test_announce_is_lenient(make_stream):
    stream = make_stream([b"WHATEVER@@@"])
    assert asyncio.run(announce(stream, Role.OTP_DEC)) is HandshakeState.VERIFIED
