"""
Command-line tool that decodes captured telemetry frames to JSON lines.

Each input file holds one captured frame, either as raw bytes or, with
``--hex``, as hexadecimal text (whitespace ignored).  Every decoded frame is
written to stdout as one JSON object:

    {"file": ..., "serial": ..., "timestamp": ..., "values": {id: value}}

Rejected frames are logged and skipped; the exit status is 1 if any frame
was rejected or unreadable, 2 if the configuration is invalid, 0 otherwise.

Raw value encoding defaults come from ``SOLARFRAME_*`` environment variables
and can be overridden per run with ``--raw-width``, ``--byte-order`` and
``--signed``.  Use these to compare candidate encodings against a device's
own display when confirming the frame layout.

Usage:
    solarframe frame.bin
    solarframe --hex --raw-width 4 --byte-order little capture1.hex capture2.hex

CHANGELOG:
- 2026-10-18: Exit 2 on invalid configuration; add --no-signed; startup config summary
- 2026-10-17: Initial creation (STORY-008)

TODO:
- None
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from solarframe.src.config import DecoderSettings
from solarframe.src.decoder import Decoder
from solarframe.src.errors import FrameError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on stderr.

    Args:
        level: Root log level name.
    """

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Frame input
# ---------------------------------------------------------------------------


def read_frame(path: Path, *, hex_input: bool) -> bytes:
    """Read one captured frame from *path*.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If *hex_input* is set and the file is not valid hex.
    """
    if hex_input:
        text = path.read_text(encoding="ascii")
        return bytes.fromhex("".join(text.split()))
    return path.read_bytes()


def _frame_record(path: Path, decoder: Decoder, data: bytes) -> dict[str, object]:
    frame = decoder.decode(data)
    return {
        "file": str(path),
        "serial": frame.serial,
        "timestamp": frame.timestamp.isoformat(),
        "values": frame.values(),
    }


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        prog="solarframe",
        description="Decode captured inverter telemetry frames to JSON lines",
    )
    p.add_argument("files", nargs="+", type=Path, help="Captured frame files")
    p.add_argument(
        "--hex", action="store_true", dest="hex_input",
        help="Files contain hexadecimal text instead of raw bytes",
    )
    p.add_argument(
        "--raw-width", type=int, choices=(2, 4), dest="raw_width",
        help="Raw field width in bytes (default from SOLARFRAME_RAW_WIDTH or 2)",
    )
    p.add_argument(
        "--byte-order", choices=("big", "little"), dest="byte_order",
        help="Raw field byte order (default from SOLARFRAME_BYTE_ORDER or big)",
    )
    p.add_argument(
        "--signed", action=argparse.BooleanOptionalAction, default=None,
        help="Interpret raw field values as two's complement (--no-signed to force unsigned)",
    )
    p.add_argument("--log-level", dest="log_level", help="Log level (default INFO)")
    return p.parse_args(argv)


def build_settings(args: argparse.Namespace) -> DecoderSettings:
    """Build decoder settings from the environment, overridden by CLI flags."""
    overrides = {
        key: getattr(args, key)
        for key in ("raw_width", "byte_order", "signed", "log_level")
        if getattr(args, key) is not None
    }
    return DecoderSettings(**overrides)


def run(args: argparse.Namespace, settings: DecoderSettings, out: TextIO) -> int:
    """Decode every input file and write one JSON line per accepted frame.

    Returns:
        Process exit status: 0 if every frame decoded, 1 otherwise.
    """
    decoder = Decoder(settings)
    rejected = 0

    for path in args.files:
        try:
            data = read_frame(path, hex_input=args.hex_input)
        except (OSError, ValueError) as exc:
            logger.error("Cannot read frame from %s: %s", path, exc)
            rejected += 1
            continue

        try:
            record = _frame_record(path, decoder, data)
        except FrameError as exc:
            logger.error("Rejected frame in %s (%s): %s", path, exc.kind, exc)
            rejected += 1
            continue

        out.write(json.dumps(record) + "\n")

    logger.info(
        "Processed %d file(s): %d decoded, %d rejected",
        len(args.files),
        len(args.files) - rejected,
        rejected,
    )
    return 1 if rejected else 0


def log_config_summary(settings: DecoderSettings) -> None:
    """Log the effective decoder settings at startup."""
    logger.info(
        "Decoder starting with config: "
        "raw_width=%s, byte_order=%s, signed=%s, log_level=%s",
        settings.raw_width,
        settings.byte_order,
        settings.signed,
        settings.log_level,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Synchronous entrypoint.

    Returns:
        Process exit status: 0 if every frame decoded, 1 if any frame was
        rejected or unreadable, 2 if the configuration is invalid.
    """
    args = parse_args(argv)
    try:
        settings = build_settings(args)
    except ValidationError as exc:
        configure_logging()
        logger.error("Invalid decoder configuration: %s", exc)
        return 2

    configure_logging(settings.log_level)
    log_config_summary(settings)
    return run(args, settings, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
