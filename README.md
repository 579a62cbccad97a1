# rtpmedia

Pure-Python building blocks for moving video over RTP:

- `rtpmedia.rtp.RTPPacket.unmarshal` parses an RTP packet (RFC 3550). It reads
  the header fields, the CSRC list, the header extension, the padding and the
  payload. A malformed packet raises `RTPParseError`, which is a `ValueError`.
- `rtpmedia.h264.H264Packet` and `rtpmedia.h264_depacketizer.H264Depacketizer`
  rebuild H.264 NAL units from RTP payloads. They handle single NAL units,
  STAP-A aggregates and FU-A fragments. Output is Annex B by default, or
  4-byte length-prefixed AVC when `is_avc` is true. Bad payloads raise a
  subclass of `H264PacketError`: `NilPacketError`, `ShortPacketError` or
  `UnhandledNaluTypeError`.
- `rtpmedia.h264_payloader.H264Payloader` splits an Annex B H.264 stream into
  RTP payloads no larger than an MTU.
  - NAL units that are too large are fragmented with FU-A.
  - AUD and filler NAL units are dropped.
  - Unless `disable_stapa` is set, SPS and PPS are held back and sent together
    with the next NAL unit in one STAP-A, as long as that STAP-A fits the MTU.
- `rtpmedia.vp8.VP8Packet` and `rtpmedia.vp8_depacketizer.VP8Depacketizer`
  parse the VP8 payload descriptor (RFC 7741) and return the VP8 data after it.
  Bad payloads raise `VP8NilPacketError` or `VP8ShortPacketError`, both
  subclasses of `VP8PacketError`.
- `rtpmedia.vp8_payloader.VP8Payloader` splits VP8 frames into RTP payloads. It
  can write an optional 15-bit picture ID, which goes up by one after each frame.
- `rtpmedia.frame.Frame` frames a payload for a byte stream. Each frame is a
  type byte, a big-endian 8-byte timestamp and a big-endian 4-byte length,
  followed by the data.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Receiving H.264 over RTP

```python
from rtpmedia.rtp import RTPPacket, RTPParseError
from rtpmedia.h264 import H264PacketError
from rtpmedia.h264_depacketizer import H264Depacketizer

depacketizer = H264Depacketizer()

def on_datagram(datagram: bytes, out) -> None:
    try:
        packet = RTPPacket.unmarshal(datagram)
        nalus = depacketizer.unmarshal(packet.payload)
    except (RTPParseError, H264PacketError):
        return
    out.write(nalus)
```

`H264Depacketizer.unmarshal` returns empty bytes while an FU-A fragment is
still being collected. It returns the whole NAL unit once the end fragment
arrives. The depacketizer also offers `is_partition_head(payload)`,
`is_partition_tail(marker, payload)` and `is_key_frame(payload)`.

## Sending H.264

```python
from rtpmedia.h264_payloader import H264Payloader

payloader = H264Payloader()
for rtp_payload in payloader.payload(1200, annexb_access_unit):
    ...  # wrap in an RTP header and send
```

`payload` raises `ValueError` when a NAL unit needs FU-A fragmentation and the
MTU is 2 or less. `set_sps`, `set_pps` and `clear_sps_pps` set or clear the
stored parameter sets directly.

## VP8

```python
from rtpmedia.vp8_payloader import VP8Payloader
from rtpmedia.vp8_depacketizer import VP8Depacketizer

payloader = VP8Payloader(enable_picture_id=True, picture_id=1)
chunks = payloader.payload(1200, vp8_frame)

depacketizer = VP8Depacketizer()
media = depacketizer.unmarshal(chunks[0])
print(depacketizer.picture_id, depacketizer.is_key_frame())
```

`VP8Payloader.payload` returns an empty list in two cases: when the frame is
empty, and when the MTU leaves no room for data after the descriptor.

## Stream framing

```python
from rtpmedia.frame import Frame, FrameType

wire = Frame(FrameType.RTP, 1700000000000, rtp_bytes).serialize()
```

## What this package does not do

The package parses RTP packets but does not build them. It has no RTP header
writer, no jitter buffer, no sockets, and no WebTransport or other network
transport. Sending and receiving the payloads it produces is up to the caller.

## Tests

```
pip install .[test]
pytest
```