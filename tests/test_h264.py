import struct

import pytest

from rtpmedia.h264 import (
    ANNEXB_NALU_START_CODE,
    H264Packet,
    H264PacketError,
    NilPacketError,
    ShortPacketError,
    UnhandledNaluTypeError,
)


def stap_a(*nalus):
    return b"\x18" + b"".join(struct.pack(">H", len(n)) + n for n in nalus)


def test_single_nalu_annex_b():
    nalu = b"\x41\x9a\x02\x03"
    assert H264Packet().unmarshal(nalu) == ANNEXB_NALU_START_CODE + nalu


def test_single_nalu_avc():
    nalu = b"\x65\x88\x84\x00"
    assert H264Packet(is_avc=True).unmarshal(nalu) == struct.pack(">I", len(nalu)) + nalu


@pytest.mark.parametrize("payload", [b"", None])
def test_nil_payload(payload):
    with pytest.raises(NilPacketError):
        H264Packet().unmarshal(payload)


def test_stap_a_two_nalus():
    sps, pps = b"\x67\x42\x00\x1f", b"\x68\xce\x3c\x80"
    out = H264Packet().unmarshal(stap_a(sps, pps))
    assert out == ANNEXB_NALU_START_CODE + sps + ANNEXB_NALU_START_CODE + pps


def test_stap_a_trailing_byte_ignored():
    nalu = b"\x67\x01"
    out = H264Packet().unmarshal(stap_a(nalu) + b"\x00")
    assert out == ANNEXB_NALU_START_CODE + nalu


def test_stap_a_truncated():
    data = stap_a(b"\x67\x01\x02\x03")
    with pytest.raises(ShortPacketError):
        H264Packet().unmarshal(data[:-1])


def test_fu_a_reassembly():
    nalu = b"\x65\x10\x20\x30\x40\x50"
    first = bytes([0x7C, 0x85]) + nalu[1:3]
    middle = bytes([0x7C, 0x05]) + nalu[3:5]
    last = bytes([0x7C, 0x45]) + nalu[5:]
    packet = H264Packet()
    assert packet.unmarshal(first) == b""
    assert packet.unmarshal(middle) == b""
    assert packet.unmarshal(last) == ANNEXB_NALU_START_CODE + nalu


def test_fu_a_short():
    with pytest.raises(ShortPacketError):
        H264Packet().unmarshal(b"\x1c")


@pytest.mark.parametrize("first_byte", [0x00, 0x0D, 0x12, 0x19, 0x1D, 0x1F])
def test_unhandled_types(first_byte):
    with pytest.raises(UnhandledNaluTypeError):
        H264Packet().unmarshal(bytes([first_byte, 0x00]))


def test_errors_share_base():
    with pytest.raises(H264PacketError):
        H264Packet().unmarshal(b"\x1c")


@pytest.mark.parametrize(
    "payload, expected",
    [
        (b"\x65", False),
        (b"\x65\x00", True),
        (b"\x7c\x85", True),
        (b"\x7c\x05", False),
        (b"\x7d\x85", True),
        (b"\x7d\x45", False),
    ],
)
def test_is_partition_head(payload, expected):
    assert H264Packet.is_partition_head(payload) is expected


@pytest.mark.parametrize("marker", [True, False])
def test_final_packet_follows_marker(marker):
    assert H264Packet.is_detected_final_packet_in_sequence(marker) is marker