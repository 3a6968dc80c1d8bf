"""
Decoder configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
The raw value encoding (byte width, byte order, signedness) is a property
of the decoder as a whole rather than of individual fields, and has to be
confirmed against frames captured from the device.  It is therefore kept
configurable instead of being baked into the field registry.

All variables use the ``SOLARFRAME_`` prefix, e.g. ``SOLARFRAME_RAW_WIDTH=4``.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-004)

TODO:
- None
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

_VALID_WIDTHS = (2, 4)
_VALID_BYTE_ORDERS = ("big", "little")


class DecoderSettings(BaseSettings):
    """Frame decoder configuration.

    Settings instances are frozen so a single instance can be shared by any
    number of concurrent decode calls.

    Attributes:
        raw_width: Width in bytes of every raw field value (2 or 4).
        byte_order: Byte order of raw field values, ``"big"`` or ``"little"``.
        signed: Interpret raw field values as two's complement.
        log_level: Root log level name used by the command-line tool.
    """

    raw_width: int = 2
    byte_order: str = "big"
    signed: bool = False
    log_level: str = "INFO"

    @field_validator("raw_width")
    @classmethod
    def raw_width_must_be_supported(cls, v: int) -> int:
        """Validate raw value width is 16 or 32 bits."""
        if v not in _VALID_WIDTHS:
            raise ValueError("SOLARFRAME_RAW_WIDTH must be 2 or 4")
        return v

    @field_validator("byte_order")
    @classmethod
    def byte_order_must_be_valid(cls, v: str) -> str:
        """Validate byte order and normalise its case."""
        v = v.lower()
        if v not in _VALID_BYTE_ORDERS:
            raise ValueError("SOLARFRAME_BYTE_ORDER must be 'big' or 'little'")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"SOLARFRAME_LOG_LEVEL '{v}' is not a logging level")
        return v

    model_config = {
        "env_prefix": "SOLARFRAME_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "frozen": True,
    }
