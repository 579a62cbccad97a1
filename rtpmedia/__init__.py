"""RTP packet parsing, H.264/VP8 payload packetizing and depacketizing, and stream framing."""

__version__ = "0.1.0"

__all__ = [
    "rtp",
    "h264",
    "h264_depacketizer",
    "h264_payloader",
    "frame",
    "vp8",
    "vp8_depacketizer",
    "vp8_payloader",
]