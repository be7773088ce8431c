"""Numeric-string helpers for operands used around the signing pipeline."""

from __future__ import annotations

from starkcache.errors.exceptions import InvalidOperandError

_PADDED_HEX_WIDTH = 64  # 32 bytes


def to_padded_hex(value: int) -> str:
    """Convert an operand to a 32-byte hex string (no 0x prefix)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidOperandError(f"Cannot format {value!r} as hex", value=value)
    return format(value, "x").zfill(_PADDED_HEX_WIDTH)


def parse_operand(text: str | int) -> int:
    """Parse a ``0x``-prefixed hex or decimal string into an operand."""
    if isinstance(text, int) and not isinstance(text, bool):
        value = text
    elif isinstance(text, str):
        raw = text.strip().lower()
        try:
            value = int(raw, 16) if raw.startswith("0x") else int(raw, 10)
        except ValueError as e:
            raise InvalidOperandError(f"Not a hex or decimal number: {text!r}", value=text) from e
    else:
        raise InvalidOperandError(f"Unsupported operand type: {type(text).__name__}", value=text)

    if value < 0:
        raise InvalidOperandError(f"Operand must be non-negative: {text!r}", value=text)
    return value
