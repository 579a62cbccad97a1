"""Length-prefixed media frames sent over a WebTransport stream."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

_HEADER = struct.Struct(">BQI")


class FrameType(enum.IntEnum):
    """Kind of data carried by a frame."""

    RTP = 0


@dataclass(frozen=True)
class Frame:
    """A typed, timestamped chunk of data."""

    type: FrameType
    timestamp: int
    data: bytes

    def serialize(self) -> bytes:
        """Return type (1 byte), timestamp (8 bytes) and size (4 bytes), big-endian, then data."""
        data = bytes(self.data)
        header = _HEADER.pack(
            int(self.type) & 0xFF,
            self.timestamp & 0xFFFFFFFFFFFFFFFF,
            len(data) & 0xFFFFFFFF,
        )
        return header + data