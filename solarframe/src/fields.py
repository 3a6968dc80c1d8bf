"""
Inverter telemetry frame layout -- single source of truth.

Defines the frame constants (length, header byte, serial and timestamp
locations) and every measurement field carried in a 292-byte telemetry
frame: its byte offset, group, identifier, scaling factor, bias and unit.

Fields are never built by hand.  Each quantity kind has exactly one
constructor below which fixes scale, bias and unit for that kind, so two
voltage fields can never disagree about their encoding.

The physical value of a field is ``raw * scale + bias``.  Temperatures are
transmitted unsigned with a +100 °C offset, so raw 1000 decodes to 0.0 °C.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Frame constants
# ---------------------------------------------------------------------------

MAGIC_LENGTH: int = 292
"""Exact length in bytes of a recognised telemetry frame."""

MAGIC_HEADER: int = 0xA5
"""First byte of every telemetry frame."""

SERIAL_RANGE: range = range(11, 21)
"""Byte range holding the 10-character ASCII device serial number."""

DATETIME_OFFSET: int = 37
"""Byte offset at which the frame timestamp starts."""


# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


class FieldType(Enum):
    """Kind of physical quantity carried by a field."""

    CHARGE = "charge"
    CURRENT = "current"
    ENERGY = "energy"
    FREQUENCY = "frequency"
    POWER = "power"
    STATE_OF_CHARGE = "state_of_charge"
    TEMPERATURE = "temperature"
    VOLTAGE = "voltage"


@dataclass(frozen=True, slots=True)
class Field:
    """Location and conversion rule of one measurement within a frame.

    Attributes:
        field_type: Quantity kind of the measurement.
        offset: Byte index into the frame where the raw value starts.
        group: Category label for grouping (``"Battery"``, ``"Grid"``, ...).
            Not unique.
        name: Human-readable label.
        id: Stable machine-readable identifier, unique across the registry.
        scale: Multiplicative factor applied to the raw integer.
        bias: Additive offset applied after scaling.
        unit: Engineering unit string (e.g. ``"W"``, ``"kWh"``, ``"°C"``).
    """

    field_type: FieldType
    offset: int
    group: str
    name: str
    id: str
    scale: float
    bias: float
    unit: str

    def to_physical(self, raw: int) -> float:
        """Convert a raw integer read from the frame to its physical value."""
        return raw * self.scale + self.bias


# ---------------------------------------------------------------------------
# Canonical constructors -- one per FieldType
# ---------------------------------------------------------------------------


def power(offset: int, group: str, id: str) -> Field:
    return Field(FieldType.POWER, offset, group, "Power", id, 1.0, 0.0, "W")


def voltage(offset: int, group: str, id: str) -> Field:
    return Field(FieldType.VOLTAGE, offset, group, "Voltage", id, 0.1, 0.0, "V")


def current(offset: int, group: str, id: str) -> Field:
    return Field(FieldType.CURRENT, offset, group, "Current", id, 0.01, 0.0, "A")


def temperature_name(offset: int, group: str, name: str, id: str) -> Field:
    """Temperature field with an explicit label (e.g. ``"DC Temperature"``)."""
    return Field(FieldType.TEMPERATURE, offset, group, name, id, 0.1, -100.0, "°C")


def temperature(offset: int, group: str, id: str) -> Field:
    return temperature_name(offset, group, "Temperature", id)


def frequency(offset: int, group: str, id: str) -> Field:
    return Field(FieldType.FREQUENCY, offset, group, "Frequency", id, 0.01, 0.0, "Hz")


def energy(offset: int, group: str, name: str, id: str) -> Field:
    """Cumulative energy counter in kWh.

    Totals are spaced 4-8 bytes apart in the frame, which suggests 32-bit
    counters.  Where the high word lives has not been confirmed from captured
    frames, so energy uses the same decoder-wide width as every other field.
    """
    return Field(FieldType.ENERGY, offset, group, name, id, 0.1, 0.0, "kWh")


def charge(offset: int, group: str, name: str, id: str) -> Field:
    return Field(FieldType.CHARGE, offset, group, name, id, 1.0, 0.0, "Ah")


def state_of_charge(offset: int, group: str, id: str) -> Field:
    return Field(FieldType.STATE_OF_CHARGE, offset, group, "SOC", id, 1.0, 0.0, "%")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

FIELDS: tuple[Field, ...] = (
    energy(70, "Battery", "Total charge", "battery_charge_total"),
    energy(74, "Battery", "Total discharge", "battery_discharge_total"),
    energy(82, "Grid", "Total import", "grid_import_total"),
    energy(88, "Grid", "Total export", "grid_export_total"),
    frequency(84, "Grid", "grid_frequency"),
    energy(96, "Load", "Total consumption", "load_consumption_total"),
    temperature_name(106, "Inverter", "DC Temperature", "inverter_temperature_dc"),
    temperature_name(108, "Inverter", "AC Temperature", "inverter_temperature_ac"),
    energy(118, "PV", "Total production", "pv_production_total"),
    charge(140, "Battery", "Capacity", "battery_capacity"),
    voltage(176, "Grid", "grid_voltage"),
    voltage(184, "Load", "load_voltage"),
    power(216, "Grid", "grid_power"),
    power(228, "Load", "load_power"),
    temperature(240, "Battery", "battery_temperature"),
    state_of_charge(244, "Battery", "battery_soc"),
    power(248, "PV", "pv_power"),
    power(256, "Battery", "battery_power"),
    current(258, "Battery", "battery_current"),
    frequency(260, "Load", "load_frequency"),
)
"""Every decodable field, in output order."""

ALL_FIELDS: dict[str, Field] = {f.id: f for f in FIELDS}
"""Flat lookup of every field by id."""

GROUPS: tuple[str, ...] = tuple(dict.fromkeys(f.group for f in FIELDS))
"""Distinct group labels in order of first appearance."""


def fields_in_group(group: str) -> tuple[Field, ...]:
    """Return the fields belonging to *group*, in registry order."""
    return tuple(f for f in FIELDS if f.group == group)
