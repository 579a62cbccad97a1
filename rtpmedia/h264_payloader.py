"""Splitting of Annex B H264 streams into RTP payloads (RFC 6184)."""

from __future__ import annotations

from .h264 import (
    AUD_NALU_TYPE,
    FILLER_NALU_TYPE,
    FU_END_BITMASK,
    FU_START_BITMASK,
    FUA_HEADER_SIZE,
    FUA_NALU_TYPE,
    NALU_REF_IDC_BITMASK,
    NALU_START_CODE,
    NALU_TYPE_BITMASK,
    PPS_NALU_TYPE,
    SPS_NALU_TYPE,
    STAPA_HEADER_SIZE,
    STAPA_NALU_LENGTH_SIZE,
)

ANNEXB_NALU_START_CODE = b"\x00\x00\x00\x01"
STAPA_HEADER = 0x78


def _length_prefix(nalu: bytes) -> bytes:
    return (len(nalu) & 0xFFFF).to_bytes(STAPA_NALU_LENGTH_SIZE, "big")


class H264Payloader:
    """Cuts an H264 byte stream into RTP payloads no larger than an MTU.

    SPS and PPS NAL units are remembered and, unless STAP-A is disabled,
    aggregated with the next NAL unit into a single STAP-A payload.
    """

    def __init__(self, is_avc: bool = False, disable_stapa: bool = False) -> None:
        self.is_avc = is_avc
        self.disable_stapa = disable_stapa
        self._sps = b""
        self._pps = b""

    @property
    def sps(self) -> bytes:
        """The stored sequence parameter set, or ``b""``."""
        return self._sps

    @property
    def pps(self) -> bytes:
        """The stored picture parameter set, or ``b""``."""
        return self._pps

    def set_sps(self, nalu) -> None:
        """Store ``nalu`` as the sequence parameter set."""
        self._sps = bytes(nalu) if nalu else b""

    def set_pps(self, nalu) -> None:
        """Store ``nalu`` as the picture parameter set."""
        self._pps = bytes(nalu) if nalu else b""

    def clear_sps_pps(self) -> None:
        """Forget the stored SPS and PPS."""
        self._sps = b""
        self._pps = b""

    def payload(self, mtu: int, data) -> list[bytes]:
        """Return the RTP payloads for the Annex B stream ``data``."""
        if not data:
            return []
        buffer = bytes(data)
        payloads: list[bytes] = []
        for nalu in self._split_nalus(buffer):
            payloads.extend(self._emit(mtu, nalu))
        return payloads

    @staticmethod
    def _split_nalus(buffer: bytes):
        size = len(buffer)
        start = 0
        while start < size:
            next_start = buffer.find(NALU_START_CODE, start + 3)
            if next_start < 0:
                next_start = size

            if buffer.startswith(ANNEXB_NALU_START_CODE, start):
                offset = 4
            elif buffer.startswith(NALU_START_CODE, start):
                offset = 3
            elif start == 0:
                offset = 0
            else:
                offset = 3

            nalu = buffer[start + offset:next_start]
            if nalu:
                yield nalu
            start = next_start

    def _emit(self, mtu: int, nalu: bytes) -> list[bytes]:
        nalu_type = nalu[0] & NALU_TYPE_BITMASK

        if nalu_type in (AUD_NALU_TYPE, FILLER_NALU_TYPE):
            pass
        elif not self.disable_stapa and nalu_type == SPS_NALU_TYPE:
            self.set_sps(nalu)
        elif not self.disable_stapa and nalu_type == PPS_NALU_TYPE:
            self.set_pps(nalu)
        elif not self.disable_stapa and self._sps and self._pps:
            stapa_size = (
                STAPA_HEADER_SIZE
                + STAPA_NALU_LENGTH_SIZE + len(self._sps)
                + STAPA_NALU_LENGTH_SIZE + len(self._pps)
                + STAPA_NALU_LENGTH_SIZE + len(nalu)
            )
            if stapa_size <= mtu:
                packet = b"".join(
                    [
                        bytes([STAPA_HEADER]),
                        _length_prefix(self._sps), self._sps,
                        _length_prefix(self._pps), self._pps,
                        _length_prefix(nalu), nalu,
                    ]
                )
                self.clear_sps_pps()
                return [packet]

        if len(nalu) <= mtu:
            return [nalu]
        return self._fu_a_packets(mtu, nalu)

    @staticmethod
    def _fu_a_packets(mtu: int, nalu: bytes) -> list[bytes]:
        if len(nalu) <= 1:
            return []
        max_fragment_size = mtu - FUA_HEADER_SIZE
        if max_fragment_size <= 0:
            raise ValueError(f"MTU {mtu} leaves no room for FU-A fragments")

        indicator = (nalu[0] & NALU_REF_IDC_BITMASK) | FUA_NALU_TYPE
        nalu_type = nalu[0] & NALU_TYPE_BITMASK
        body = nalu[1:]
        packets = []
        for index in range(0, len(body), max_fragment_size):
            fragment = body[index:index + max_fragment_size]
            header = nalu_type
            if index == 0:
                header |= FU_START_BITMASK
            if index + max_fragment_size >= len(body):
                header |= FU_END_BITMASK
            packets.append(bytes([indicator, header]) + fragment)
        return packets