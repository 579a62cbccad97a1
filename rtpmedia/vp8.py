"""Parsing of the VP8 RTP payload descriptor (RFC 7741)."""

from __future__ import annotations


class VP8PacketError(ValueError):
    """Base class for VP8 payload parsing errors."""


class VP8NilPacketError(VP8PacketError):
    """The payload is missing or empty."""


class VP8ShortPacketError(VP8PacketError):
    """The payload ends inside its descriptor."""


class VP8Packet:
    """The VP8 payload descriptor of the most recently parsed RTP payload."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        # Required header
        self.extended = False
        self.non_reference = False
        self.start_of_partition = False
        self.partition_index = 0
        # Extended control bits
        self.has_picture_id = False
        self.has_tl0_pic_idx = False
        self.has_tid = False
        self.has_key_idx = False
        # Optional extension
        self.picture_id = 0
        self.tl0_pic_idx = 0
        self.tid = 0
        self.layer_sync = False
        self.key_idx = 0

    def unmarshal(self, packet) -> bytes:
        """Parse the descriptor of ``packet`` and return the VP8 data after it."""
        if not packet:
            raise VP8NilPacketError("empty VP8 payload")
        data = bytes(packet)
        size = len(data)
        index = 0

        def need(count: int = 1) -> None:
            if index + count > size:
                raise VP8ShortPacketError("VP8 payload descriptor is truncated")

        first = data[index]
        self.extended = bool(first & 0x80)
        self.non_reference = bool(first & 0x20)
        self.start_of_partition = bool(first & 0x10)
        self.partition_index = first & 0x07
        index += 1

        if self.extended:
            need()
            control = data[index]
            self.has_picture_id = bool(control & 0x80)
            self.has_tl0_pic_idx = bool(control & 0x40)
            self.has_tid = bool(control & 0x20)
            self.has_key_idx = bool(control & 0x10)
            index += 1
        else:
            self.has_picture_id = False
            self.has_tl0_pic_idx = False
            self.has_tid = False
            self.has_key_idx = False

        if self.has_picture_id:
            need()
            if data[index] & 0x80:
                need(2)
                self.picture_id = ((data[index] & 0x7F) << 8) | data[index + 1]
                index += 2
            else:
                self.picture_id = data[index]
                index += 1
        else:
            self.picture_id = 0

        if self.has_tl0_pic_idx:
            need()
            self.tl0_pic_idx = data[index]
            index += 1
        else:
            self.tl0_pic_idx = 0

        if self.has_tid or self.has_key_idx:
            need()
            value = data[index]
            if self.has_tid:
                self.tid = value >> 6
                self.layer_sync = bool((value >> 5) & 0x01)
            else:
                self.tid = 0
                self.layer_sync = False
            self.key_idx = value & 0x1F if self.has_key_idx else 0
            index += 1
        else:
            self.tid = 0
            self.layer_sync = False
            self.key_idx = 0

        return data[index:]

    @staticmethod
    def is_partition_head(payload) -> bool:
        """Tell whether ``payload`` has its S bit set."""
        if not payload:
            return False
        return bool(payload[0] & 0x10)