"""
Structural validation of raw telemetry frames.

Field offsets in the registry assume a buffer of exactly ``MAGIC_LENGTH``
bytes starting with ``MAGIC_HEADER``.  :func:`validate` must pass before
any field is read.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-006)

TODO:
- None
"""

from __future__ import annotations

import logging

from solarframe.src.errors import BadMagic, ShortFrame
from solarframe.src.fields import MAGIC_HEADER, MAGIC_LENGTH

logger = logging.getLogger(__name__)


def validate(buffer: bytes | bytearray | memoryview) -> None:
    """Check that *buffer* is a well-formed telemetry frame.

    Args:
        buffer: Raw frame bytes.

    Raises:
        ShortFrame: If the buffer length is not ``MAGIC_LENGTH``.
        BadMagic: If the first byte is not ``MAGIC_HEADER``.
    """
    length = len(buffer)
    if length != MAGIC_LENGTH:
        raise ShortFrame(length, MAGIC_LENGTH)
    if buffer[0] != MAGIC_HEADER:
        raise BadMagic(buffer[0], MAGIC_HEADER)
    logger.debug("Frame of %d bytes passed validation", length)
