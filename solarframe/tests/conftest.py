"""
Shared test fixtures for frame decoder tests.

Provides environment isolation for DecoderSettings and a frame builder that
produces well-formed 292-byte telemetry frames with chosen raw field values.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from solarframe.src.fields import (
    ALL_FIELDS,
    DATETIME_OFFSET,
    MAGIC_HEADER,
    MAGIC_LENGTH,
    SERIAL_RANGE,
)

# All DecoderSettings environment variable names, used for cleanup.
_ALL_DECODER_ENV_VARS = (
    "SOLARFRAME_RAW_WIDTH",
    "SOLARFRAME_BYTE_ORDER",
    "SOLARFRAME_SIGNED",
    "SOLARFRAME_LOG_LEVEL",
)

DEFAULT_SERIAL = b"ABCDEFGHIJ"
# 2026-10-17 12:30:45 as year-2000, month, day, hour, minute, second
DEFAULT_TIMESTAMP = bytes([26, 10, 17, 12, 30, 45])

FrameBuilder = Callable[..., bytearray]


@pytest.fixture(autouse=True)
def _clean_decoder_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all decoder env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_DECODER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def build_frame(
    raw: dict[str, int] | None = None,
    *,
    serial: bytes = DEFAULT_SERIAL,
    timestamp: bytes = DEFAULT_TIMESTAMP,
    width: int = 2,
    byte_order: str = "big",
    signed: bool = False,
    fill: int = 0,
) -> bytearray:
    """Return a valid frame with *raw* values written at their field offsets.

    Args:
        raw: Mapping of field id to raw integer.  Unlisted fields keep *fill*.
        serial: Bytes written at ``SERIAL_RANGE``.
        timestamp: Bytes written at ``DATETIME_OFFSET``.
        width: Raw value width in bytes.
        byte_order: Raw value byte order.
        signed: Encode raw values as two's complement.
        fill: Byte value used for every position not otherwise set.
    """
    buf = bytearray([fill] * MAGIC_LENGTH)
    buf[0] = MAGIC_HEADER
    buf[SERIAL_RANGE.start : SERIAL_RANGE.start + len(serial)] = serial
    buf[DATETIME_OFFSET : DATETIME_OFFSET + len(timestamp)] = timestamp
    for field_id, value in (raw or {}).items():
        offset = ALL_FIELDS[field_id].offset
        buf[offset : offset + width] = value.to_bytes(
            width, byte_order, signed=signed  # type: ignore[arg-type]
        )
    return buf


@pytest.fixture()
def frame_builder() -> FrameBuilder:
    """Return the :func:`build_frame` helper."""
    return build_frame
