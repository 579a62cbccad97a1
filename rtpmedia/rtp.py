"""Parsing of RTP packets as laid out in RFC 3550."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Optional

_FIXED_HEADER = struct.Struct(">BBHII")
_EXTENSION_HEADER = struct.Struct(">HH")


class RTPParseError(ValueError):
    """Raised when a buffer does not hold a well-formed RTP packet."""


@dataclass
class RTPPacket:
    """A parsed RTP packet: header fields, CSRC list, extension and payload."""

    version: int = 0
    padding: bool = False
    extension: bool = False
    csrc_count: int = 0
    marker: bool = False
    payload_type: int = 0
    sequence_number: int = 0
    timestamp: int = 0
    ssrc: int = 0
    csrcs: list[int] = field(default_factory=list)
    extension_header_id: int = 0
    extension_length: int = 0
    extension_value: Optional[bytes] = None
    padding_size: int = 0
    payload: bytes = b""

    @classmethod
    def unmarshal(cls, data) -> "RTPPacket":
        """Parse ``data`` into a packet, raising RTPParseError if it is malformed."""
        buffer = bytes(data)
        size = len(buffer)
        if size < _FIXED_HEADER.size:
            raise RTPParseError(f"RTP header needs 12 bytes, got {size}")

        first, second, sequence_number, timestamp, ssrc = _FIXED_HEADER.unpack_from(buffer)
        packet = cls(
            version=(first >> 6) & 0x03,
            padding=bool((first >> 5) & 0x01),
            extension=bool((first >> 4) & 0x01),
            csrc_count=first & 0x0F,
            marker=bool((second >> 7) & 0x01),
            payload_type=second & 0x7F,
            sequence_number=sequence_number,
            timestamp=timestamp,
            ssrc=ssrc,
        )

        header_size = _FIXED_HEADER.size + packet.csrc_count * 4
        if size < header_size:
            raise RTPParseError("packet too short for its CSRC list")
        packet.csrcs = list(
            struct.unpack_from(f">{packet.csrc_count}I", buffer, _FIXED_HEADER.size)
        )

        if packet.extension:
            if size < header_size + _EXTENSION_HEADER.size:
                raise RTPParseError("packet too short for its extension header")
            packet.extension_header_id, packet.extension_length = _EXTENSION_HEADER.unpack_from(
                buffer, header_size
            )
            extension_size = packet.extension_length * 4
            value_start = header_size + _EXTENSION_HEADER.size
            if size < value_start + extension_size:
                raise RTPParseError("packet too short for its extension data")
            packet.extension_value = buffer[value_start:value_start + extension_size]
            header_size = value_start + extension_size

        payload_size = size - header_size
        if packet.padding and payload_size > 0:
            packet.padding_size = buffer[-1]
            if packet.padding_size == 0 or packet.padding_size > payload_size:
                raise RTPParseError(f"invalid padding size {packet.padding_size}")
            payload_size -= packet.padding_size
        else:
            packet.padding_size = 0

        packet.payload = buffer[header_size:header_size + payload_size]
        return packet