"""
Pydantic models for decoded telemetry frames.

Defines the Measurement model (one decoded field) and the DecodedFrame
model that represents a single telemetry frame after every registry field
has been converted to engineering units.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from solarframe.src.fields import FieldType


class Measurement(BaseModel):
    """A single decoded field value.

    Attributes:
        id: Field identifier from the registry (e.g. ``"grid_voltage"``).
        name: Human-readable field label.
        group: Field group label (``"Battery"``, ``"Grid"``, ...).
        unit: Engineering unit of *value*.
        field_type: Quantity kind of the field.
        raw: Unconverted integer read from the frame.
        value: Physical value, ``raw * scale + bias``.
    """

    id: str
    name: str
    group: str
    unit: str
    field_type: FieldType
    raw: int
    value: float

    model_config = {"frozen": True}


class DecodedFrame(BaseModel):
    """A fully decoded telemetry frame.

    Attributes:
        serial: Device serial number taken from the frame.
        timestamp: Device-local time at which the frame was produced.
        measurements: One entry per registry field, in registry order.
    """

    serial: str
    timestamp: datetime
    measurements: tuple[Measurement, ...]

    model_config = {"frozen": True}

    def get(self, field_id: str) -> Measurement | None:
        """Return the measurement for *field_id*, or ``None`` if absent."""
        for m in self.measurements:
            if m.id == field_id:
                return m
        return None

    def values(self) -> dict[str, float]:
        """Return ``{field id: physical value}`` in registry order."""
        return {m.id: m.value for m in self.measurements}

    def by_group(self) -> dict[str, list[Measurement]]:
        """Return measurements keyed by group, preserving registry order."""
        groups: dict[str, list[Measurement]] = {}
        for m in self.measurements:
            groups.setdefault(m.group, []).append(m)
        return groups
