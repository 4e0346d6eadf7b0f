import string
from enum import Enum


class HexParse(Enum):
    INVALID = "invalid"


# returned instead of a byte, never equal to any valid value (including 0)
INVALID = HexParse.INVALID

MAX_BYTE = 0xFF
_HEX_DIGITS = set(string.hexdigits)


def parse_hex_byte(text):
    """
    Parse a hex byte as typed by the user.

    Empty or whitespace-only input is the shorthand for 0 (unmapped), an optional
    0x/0X prefix is accepted. Returns INVALID for anything that is not a hex number
    in the range 0..255.
    """
    if text is None:
        return 0
    text = text.strip()
    if not text:
        return 0
    if text[:2].lower() == "0x":
        text = text[2:]
    if not text or not set(text) <= _HEX_DIGITS:
        return INVALID
    value = int(text, 16)
    if value > MAX_BYTE:
        return INVALID
    return value


def is_valid(value):
    return value is not INVALID


def format_hex_byte(value: int) -> str:
    return f"{value:02X}"


def format_optional_hex_byte(value) -> str:
    """Same as format_hex_byte, but unset values (0, None or INVALID) become an empty string"""
    if value is None or value is INVALID or value == 0:
        return ""
    return format_hex_byte(value)
