"""Splitting of VP8 frames into RTP payloads (RFC 7741)."""

from __future__ import annotations

VP8_HEADER_SIZE = 1
_PICTURE_ID_MASK = 0x7FFF


class VP8Payloader:
    """Cuts VP8 frames into RTP payloads no larger than an MTU."""

    def __init__(self, enable_picture_id: bool = False, picture_id: int = 0) -> None:
        self.enable_picture_id = enable_picture_id
        self.picture_id = picture_id

    @property
    def picture_id(self) -> int:
        """Picture ID to be written for the next frame, 15 bits."""
        return self._picture_id

    @picture_id.setter
    def picture_id(self, value: int) -> None:
        self._picture_id = value & _PICTURE_ID_MASK

    def _header_size(self) -> int:
        if not self.enable_picture_id or self._picture_id == 0:
            return VP8_HEADER_SIZE
        if self._picture_id < 128:
            return VP8_HEADER_SIZE + 2
        return VP8_HEADER_SIZE + 3

    def _descriptor(self, header_size: int, first: bool) -> bytearray:
        header = bytearray(header_size)
        header[0] = 0x10 if first else 0x00
        if header_size == VP8_HEADER_SIZE + 2:
            header[0] |= 0x80
            header[1] = 0x80
            header[2] = self._picture_id & 0x7F
        elif header_size == VP8_HEADER_SIZE + 3:
            header[0] |= 0x80
            header[1] = 0x80
            header[2] = 0x80 | ((self._picture_id >> 8) & 0x7F)
            header[3] = self._picture_id & 0xFF
        return header

    def payload(self, mtu: int, data) -> list[bytes]:
        """Return the RTP payloads for the VP8 frame ``data``.

        Returns an empty list for empty data or an MTU too small for any data.
        """
        if not data:
            return []
        frame = bytes(data)
        header_size = self._header_size()
        max_fragment_size = mtu - header_size
        if max_fragment_size <= 0:
            return []

        payloads = [
            bytes(self._descriptor(header_size, index == 0))
            + frame[index:index + max_fragment_size]
            for index in range(0, len(frame), max_fragment_size)
        ]
        self.picture_id = self._picture_id + 1
        return payloads