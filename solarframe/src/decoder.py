"""
Pure decoder that converts a raw telemetry frame into a DecodedFrame.

Validates the buffer, extracts the device serial number and timestamp,
then walks the field registry in order, reading each raw integer at the
field's offset and applying the field's scale and bias.

Raw value width, byte order and signedness are decoder-wide settings (see
:class:`~solarframe.src.config.DecoderSettings`), not per-field properties.

The timestamp at ``DATETIME_OFFSET`` is six single bytes:
``year - 2000, month, day, hour, minute, second``.  The device carries no
time zone, so the result is a naive datetime in device-local time.

Decoding has no side effects and shares no mutable state, so a single
:class:`Decoder` may be used from any number of threads.

CHANGELOG:
- 2026-10-18: Module-level decode() reuses one default decoder with built-in settings
- 2026-10-18: Drop duplicate rejection log; callers log with context
- 2026-10-17: Initial creation (STORY-007)

TODO:
- None
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Iterator
from datetime import datetime

from solarframe.src.config import DecoderSettings
from solarframe.src.errors import (
    FieldOutOfRange,
    InvalidSerial,
    InvalidTimestamp,
)
from solarframe.src.fields import (
    DATETIME_OFFSET,
    FIELDS,
    MAGIC_LENGTH,
    SERIAL_RANGE,
    Field,
)
from solarframe.src.models import DecodedFrame, Measurement
from solarframe.src.validator import validate

logger = logging.getLogger(__name__)

TIMESTAMP_WIDTH: int = 6
"""Number of bytes in the frame timestamp."""

_TIMESTAMP_YEAR_BASE = 2000

Buffer = bytes | bytearray | memoryview


# ---------------------------------------------------------------------------
# Sub-field extraction
# ---------------------------------------------------------------------------


def extract_serial(buffer: Buffer) -> str:
    """Return the device serial number held in ``SERIAL_RANGE``.

    Trailing NUL and space padding is removed.

    Raises:
        InvalidSerial: If the bytes are not printable ASCII or are all padding.
    """
    data = bytes(buffer[SERIAL_RANGE.start : SERIAL_RANGE.stop])
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError as exc:
        raise InvalidSerial(data) from exc

    text = text.rstrip("\x00 ")
    if not text or not text.isprintable():
        raise InvalidSerial(data)
    return text


def extract_timestamp(buffer: Buffer) -> datetime:
    """Return the device-local timestamp starting at ``DATETIME_OFFSET``.

    Raises:
        InvalidTimestamp: If the bytes do not form a valid date and time.
    """
    data = bytes(buffer[DATETIME_OFFSET : DATETIME_OFFSET + TIMESTAMP_WIDTH])
    if len(data) != TIMESTAMP_WIDTH:
        raise InvalidTimestamp(data, f"expected {TIMESTAMP_WIDTH} bytes")

    year, month, day, hour, minute, second = data
    try:
        return datetime(
            _TIMESTAMP_YEAR_BASE + year, month, day, hour, minute, second
        )
    except ValueError as exc:
        raise InvalidTimestamp(data, str(exc)) from exc


def read_raw(buffer: Buffer, field: Field, settings: DecoderSettings) -> int:
    """Read the raw integer for *field* using the decoder-wide encoding.

    Raises:
        FieldOutOfRange: If the read would extend past ``MAGIC_LENGTH``.
    """
    end = field.offset + settings.raw_width
    if field.offset < 0 or end > MAGIC_LENGTH:
        raise FieldOutOfRange(field.id, field.offset, settings.raw_width, MAGIC_LENGTH)
    return int.from_bytes(
        buffer[field.offset : end],
        settings.byte_order,  # type: ignore[arg-type]
        signed=settings.signed,
    )


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class Decoder:
    """Decodes telemetry frames against the field registry.

    Args:
        settings: Raw value encoding.  Loaded from the environment when
            omitted.
        fields: Field registry to apply.  Defaults to :data:`FIELDS`.
    """

    def __init__(
        self,
        settings: DecoderSettings | None = None,
        fields: tuple[Field, ...] = FIELDS,
    ) -> None:
        self.settings = settings if settings is not None else DecoderSettings()
        self.fields = fields

    def decode(self, buffer: Buffer) -> DecodedFrame:
        """Validate and decode a single frame.

        Args:
            buffer: Raw frame bytes.

        Returns:
            A :class:`DecodedFrame` with one measurement per registry field,
            in registry order.

        Raises:
            FrameError: Any subclass, if the frame is rejected.  No partial
                result is produced.
        """
        validate(buffer)
        serial = extract_serial(buffer)
        timestamp = extract_timestamp(buffer)
        measurements = tuple(self._measure(buffer, f) for f in self.fields)

        logger.debug(
            "Decoded frame serial=%s ts=%s fields=%d",
            serial,
            timestamp.isoformat(),
            len(measurements),
        )
        return DecodedFrame(
            serial=serial,
            timestamp=timestamp,
            measurements=measurements,
        )

    def decode_many(self, buffers: Iterable[Buffer]) -> Iterator[DecodedFrame]:
        """Decode frames lazily, raising on the first rejected frame."""
        for buffer in buffers:
            yield self.decode(buffer)

    def _measure(self, buffer: Buffer, field: Field) -> Measurement:
        raw = read_raw(buffer, field, self.settings)
        return Measurement(
            id=field.id,
            name=field.name,
            group=field.group,
            unit=field.unit,
            field_type=field.field_type,
            raw=raw,
            value=field.to_physical(raw),
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


DEFAULT_SETTINGS: DecoderSettings = DecoderSettings.model_construct()
"""Built-in encoding (2-byte big-endian unsigned), never read from the environment."""


@functools.cache
def _default_decoder() -> Decoder:
    return Decoder(DEFAULT_SETTINGS)


def decode(buffer: Buffer, settings: DecoderSettings | None = None) -> DecodedFrame:
    """Validate and decode *buffer*.

    Without *settings* a single shared decoder using :data:`DEFAULT_SETTINGS`
    is reused, so the result depends only on *buffer*.  Environment settings
    apply only where asked for, via ``Decoder()`` or the command-line tool.

    See :meth:`Decoder.decode`.
    """
    decoder = _default_decoder() if settings is None else Decoder(settings)
    return decoder.decode(buffer)
