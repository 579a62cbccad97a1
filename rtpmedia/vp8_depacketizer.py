"""Depacketizer that turns VP8 RTP payloads into media data."""

from __future__ import annotations

from .vp8 import VP8Packet


class VP8Depacketizer:
    """Depacketizes VP8 RTP payloads and reports on the last one parsed."""

    def __init__(self) -> None:
        self._packet = VP8Packet()

    def unmarshal(self, packet) -> bytes:
        """Return the VP8 data in ``packet``; raises VP8PacketError on bad input."""
        return self._packet.unmarshal(packet)

    def is_partition_head(self, payload) -> bool:
        """Tell whether ``payload`` starts a partition."""
        return VP8Packet.is_partition_head(payload)

    def is_partition_tail(self, marker, payload) -> bool:
        """Tell whether the packet ends a frame; for VP8 the marker bit decides."""
        return bool(marker)

    @property
    def picture_id(self) -> int:
        """Picture ID of the last parsed payload."""
        return self._packet.picture_id

    def is_key_frame(self) -> bool:
        """Tell whether the last payload starts partition 0 of a frame."""
        return self._packet.start_of_partition and self._packet.partition_index == 0