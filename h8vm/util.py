"""
H8VM - Byte/word helpers

All 16-bit values in the machine are big-endian: the high byte lives at
the lower address and is fetched first.
"""


def high_and_low_value(value: int) -> tuple:
    """Split a 16-bit value into (high, low) bytes."""
    high = (value >> 8) & 0xFF
    low = value & 0xFF
    return high, low


def wide_value(high: int, low: int) -> int:
    """Combine two bytes into a 16-bit value (high byte first)."""
    return ((high & 0xFF) << 8) | (low & 0xFF)
