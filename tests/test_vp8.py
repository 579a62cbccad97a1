import pytest

from rtpmedia.vp8 import (
    VP8NilPacketError,
    VP8Packet,
    VP8PacketError,
    VP8ShortPacketError,
)


def test_empty_payload_raises_nil_error():
    with pytest.raises(VP8NilPacketError):
        VP8Packet().unmarshal(b"")


def test_nil_error_is_a_packet_error():
    with pytest.raises(VP8PacketError):
        VP8Packet().unmarshal(None)


def test_minimal_descriptor():
    packet = VP8Packet()
    assert packet.unmarshal(b"\x10abc") == b"abc"
    assert packet.start_of_partition is True
    assert packet.extended is False
    assert packet.partition_index == 0
    assert packet.picture_id == 0


def test_partition_index_and_non_reference():
    packet = VP8Packet()
    assert packet.unmarshal(bytes([0x20 | 0x03]) + b"z") == b"z"
    assert packet.non_reference is True
    assert packet.partition_index == 3
    assert packet.start_of_partition is False


def test_descriptor_only_gives_empty_payload():
    assert VP8Packet().unmarshal(b"\x10") == b""


def test_extended_byte_missing():
    with pytest.raises(VP8ShortPacketError):
        VP8Packet().unmarshal(b"\x80")


def test_picture_id_missing():
    with pytest.raises(VP8ShortPacketError):
        VP8Packet().unmarshal(b"\x80\x80")


def test_long_picture_id_truncated():
    with pytest.raises(VP8ShortPacketError):
        VP8Packet().unmarshal(b"\x80\x80\x80")


def test_tl0_missing():
    with pytest.raises(VP8ShortPacketError):
        VP8Packet().unmarshal(b"\x80\x40")


def test_tid_missing():
    with pytest.raises(VP8ShortPacketError):
        VP8Packet().unmarshal(b"\x80\x20")


def test_short_picture_id():
    packet = VP8Packet()
    assert packet.unmarshal(bytes([0x90, 0x80, 0x2A]) + b"data") == b"data"
    assert packet.has_picture_id is True
    assert packet.picture_id == 0x2A


def test_all_extensions():
    picture_id = 0x0123
    tl0 = 0x05
    tid, sync, key_idx = 2, 1, 7
    descriptor = bytes(
        [
            0x90,
            0xF0,
            0x80 | (picture_id >> 8),
            picture_id & 0xFF,
            tl0,
            (tid << 6) | (sync << 5) | key_idx,
        ]
    )
    packet = VP8Packet()
    assert packet.unmarshal(descriptor + b"frame") == b"frame"
    assert packet.has_picture_id and packet.has_tl0_pic_idx
    assert packet.has_tid and packet.has_key_idx
    assert packet.picture_id == picture_id
    assert packet.tl0_pic_idx == tl0
    assert packet.tid == tid
    assert packet.layer_sync is True
    assert packet.key_idx == key_idx


def test_key_idx_without_tid():
    key_idx = 9
    packet = VP8Packet()
    assert packet.unmarshal(bytes([0x80, 0x10, 0xC0 | key_idx]) + b"x") == b"x"
    assert packet.tid == 0
    assert packet.layer_sync is False
    assert packet.key_idx == key_idx


def test_fields_reset_between_packets():
    packet = VP8Packet()
    packet.unmarshal(bytes([0x90, 0x80, 0x2A]) + b"a")
    packet.unmarshal(b"\x00b")
    assert packet.picture_id == 0
    assert packet.has_picture_id is False


@pytest.mark.parametrize(
    "payload, expected",
    [(b"", False), (b"\x10", True), (b"\x00\x10", False), (b"\x90", True)],
)
def test_is_partition_head(payload, expected):
    assert VP8Packet.is_partition_head(payload) is expected