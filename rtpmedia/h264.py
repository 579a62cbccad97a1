"""Reassembly of H264 access units from RTP payloads (RFC 6184)."""

from __future__ import annotations

ANNEXB_NALU_START_CODE = b"\x00\x00\x00\x01"
NALU_START_CODE = b"\x00\x00\x01"

NALU_TYPE_BITMASK = 0x1F
NALU_REF_IDC_BITMASK = 0x60
FU_START_BITMASK = 0x80
FU_END_BITMASK = 0x40

STAPA_NALU_TYPE = 24
FUA_NALU_TYPE = 28
FUB_NALU_TYPE = 29
SPS_NALU_TYPE = 7
PPS_NALU_TYPE = 8
AUD_NALU_TYPE = 9
FILLER_NALU_TYPE = 12
IDR_NALU_TYPE = 5

FUA_HEADER_SIZE = 2
STAPA_HEADER_SIZE = 1
STAPA_NALU_LENGTH_SIZE = 2

_SINGLE_NALU_TYPES = frozenset([*range(1, 13), *range(19, 24)])


class H264PacketError(ValueError):
    """Base class for H264 payload parsing errors."""


class NilPacketError(H264PacketError):
    """The payload is missing or empty."""


class ShortPacketError(H264PacketError):
    """The payload ends before the data it announces."""


class UnhandledNaluTypeError(H264PacketError):
    """The payload carries a NAL unit type this parser does not handle."""


class H264Packet:
    """Stateful H264 depayloader that buffers FU-A fragments between calls."""

    def __init__(self, is_avc: bool = False) -> None:
        self.is_avc = is_avc
        self._fua_buffer = bytearray()

    def unmarshal(self, payload) -> bytes:
        """Return the NAL units carried by ``payload``, framed as Annex B or AVC.

        An FU-A fragment that does not end its NAL unit yields ``b""``.
        """
        if not payload:
            raise NilPacketError("empty H264 payload")
        return self._parse_body(bytes(payload))

    @staticmethod
    def is_partition_head(payload) -> bool:
        """Tell whether ``payload`` starts an H264 partition."""
        if payload is None or len(payload) < 2:
            return False
        nalu_type = payload[0] & NALU_TYPE_BITMASK
        if nalu_type in (FUA_NALU_TYPE, FUB_NALU_TYPE):
            return bool(payload[1] & FU_START_BITMASK)
        return True

    @staticmethod
    def is_detected_final_packet_in_sequence(marker) -> bool:
        """Tell whether the RTP marker bit is set, which ends an access unit."""
        return bool(marker)

    def _package(self, nalu: bytes) -> bytes:
        if self.is_avc:
            return len(nalu).to_bytes(4, "big") + nalu
        return ANNEXB_NALU_START_CODE + nalu

    def _parse_body(self, payload: bytes) -> bytes:
        nalu_type = payload[0] & NALU_TYPE_BITMASK

        if nalu_type in _SINGLE_NALU_TYPES:
            return self._package(payload)

        if nalu_type == STAPA_NALU_TYPE:
            return self._parse_stap_a(payload)

        if nalu_type == FUA_NALU_TYPE:
            return self._parse_fu_a(payload)

        raise UnhandledNaluTypeError(f"unhandled NAL unit type {nalu_type}")

    def _parse_stap_a(self, payload: bytes) -> bytes:
        output = bytearray()
        offset = STAPA_HEADER_SIZE
        while offset + STAPA_NALU_LENGTH_SIZE <= len(payload):
            nalu_size = int.from_bytes(payload[offset:offset + STAPA_NALU_LENGTH_SIZE], "big")
            offset += STAPA_NALU_LENGTH_SIZE
            if offset + nalu_size > len(payload):
                raise ShortPacketError("STAP-A NAL unit runs past the payload")
            output += self._package(payload[offset:offset + nalu_size])
            offset += nalu_size
        return bytes(output)

    def _parse_fu_a(self, payload: bytes) -> bytes:
        if len(payload) < FUA_HEADER_SIZE:
            raise ShortPacketError("FU-A payload shorter than its header")
        self._fua_buffer += payload[FUA_HEADER_SIZE:]
        if not payload[1] & FU_END_BITMASK:
            return b""
        header = (payload[0] & NALU_REF_IDC_BITMASK) | (payload[1] & NALU_TYPE_BITMASK)
        complete = bytes([header]) + bytes(self._fua_buffer)
        self._fua_buffer.clear()
        return self._package(complete)