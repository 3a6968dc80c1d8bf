"""
Exceptions raised when a telemetry frame is rejected.

Every failure mode of validation and decoding has its own subclass of
:class:`FrameError` so callers can either catch the base class ("frame
rejected") or react to a specific kind.  No partial decode result is ever
produced alongside one of these errors.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations


class FrameError(ValueError):
    """Base class for all frame rejection errors."""

    kind: str = "frame_error"


class ShortFrame(FrameError):
    """Buffer length differs from the fixed frame length."""

    kind = "short_frame"

    def __init__(self, length: int, expected: int) -> None:
        self.length = length
        self.expected = expected
        super().__init__(f"Frame is {length} bytes, expected {expected}")


class BadMagic(FrameError):
    """First byte of the buffer is not the frame header."""

    kind = "bad_magic"

    def __init__(self, header: int, expected: int) -> None:
        self.header = header
        self.expected = expected
        super().__init__(f"Frame header is 0x{header:02X}, expected 0x{expected:02X}")


class InvalidSerial(FrameError):
    """Serial number bytes are not printable ASCII text."""

    kind = "invalid_serial"

    def __init__(self, data: bytes) -> None:
        self.data = data
        super().__init__(f"Serial number bytes {data.hex()} are not printable text")


class InvalidTimestamp(FrameError):
    """Timestamp bytes do not form a valid date and time."""

    kind = "invalid_timestamp"

    def __init__(self, data: bytes, reason: str) -> None:
        self.data = data
        super().__init__(f"Timestamp bytes {data.hex()} are invalid: {reason}")


class FieldOutOfRange(FrameError):
    """A field would be read past the end of the frame."""

    kind = "field_out_of_range"

    def __init__(self, field_id: str, offset: int, width: int, length: int) -> None:
        self.field_id = field_id
        self.offset = offset
        self.width = width
        super().__init__(
            f"Field '{field_id}' at offset {offset} with width {width} "
            f"extends past frame length {length}"
        )
