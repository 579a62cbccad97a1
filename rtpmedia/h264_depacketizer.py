"""Depacketizer that turns H264 RTP payloads into media data."""

from __future__ import annotations

from .h264 import (
    FU_START_BITMASK,
    FUA_NALU_TYPE,
    IDR_NALU_TYPE,
    NALU_TYPE_BITMASK,
    STAPA_HEADER_SIZE,
    STAPA_NALU_LENGTH_SIZE,
    STAPA_NALU_TYPE,
    H264Packet,
)


class H264Depacketizer:
    """Depacketizes H264 RTP payloads and classifies them."""

    def __init__(self, is_avc: bool = False) -> None:
        self._packet = H264Packet(is_avc=is_avc)

    @property
    def is_avc(self) -> bool:
        """Whether output uses AVC length prefixes instead of Annex B start codes."""
        return self._packet.is_avc

    @is_avc.setter
    def is_avc(self, value: bool) -> None:
        self._packet.is_avc = value

    def unmarshal(self, packet) -> bytes:
        """Return the H264 media in ``packet``; raises H264PacketError on bad input."""
        return self._packet.unmarshal(packet)

    def is_partition_head(self, payload) -> bool:
        """Tell whether ``payload`` starts a partition."""
        return H264Packet.is_partition_head(payload)

    def is_partition_tail(self, marker, payload) -> bool:
        """Tell whether the packet ends a frame; for H264 the marker bit decides."""
        return H264Packet.is_detected_final_packet_in_sequence(marker)

    def is_key_frame(self, payload) -> bool:
        """Tell whether ``payload`` carries an IDR picture or begins one."""
        if not payload:
            return False
        nalu_type = payload[0] & NALU_TYPE_BITMASK
        if nalu_type == IDR_NALU_TYPE:
            return True

        size = len(payload)
        if nalu_type == STAPA_NALU_TYPE and size >= 3:
            offset = STAPA_HEADER_SIZE
            while offset + STAPA_NALU_LENGTH_SIZE < size:
                nalu_size = int.from_bytes(payload[offset:offset + STAPA_NALU_LENGTH_SIZE], "big")
                offset += STAPA_NALU_LENGTH_SIZE
                if offset < size and (payload[offset] & NALU_TYPE_BITMASK) == IDR_NALU_TYPE:
                    return True
                offset += nalu_size

        if nalu_type == FUA_NALU_TYPE and size >= 2:
            is_start = bool(payload[1] & FU_START_BITMASK)
            if is_start and (payload[1] & NALU_TYPE_BITMASK) == IDR_NALU_TYPE:
                return True

        return False