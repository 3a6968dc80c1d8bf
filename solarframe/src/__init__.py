"""
Frame decoder package for hybrid inverter telemetry.

Validates fixed-length 0xA5 telemetry frames captured from a solar inverter
logger and decodes them into scaled physical measurements using a single
field registry.

CHANGELOG:
- 2026-10-17: Initial creation (STORY-001)

TODO:
- None
"""
