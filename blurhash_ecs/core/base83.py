"""Base83 numeral system used by the blurhash wire format.

The alphabet order is part of the format: the index of a character is its
digit value.

Example:
    >>> encode83(3429, 2)
    'fQ'
    >>> decode83('fQ')
    3429
"""

from __future__ import annotations

from blurhash_ecs.errors import BlurhashFormatError, BlurhashRangeError

ALPHABET = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "#$%*+,-.:;=?@[]^_{|}~"
)
BASE = len(ALPHABET)

_DIGITS = {char: index for index, char in enumerate(ALPHABET)}


def is_base83(text: str) -> bool:
    """Return True if every character of ``text`` is a Base83 digit."""
    return all(char in _DIGITS for char in text)


def decode83(text: str) -> int:
    """Decode a Base83 string to an unsigned integer.

    Args:
        text: One or more Base83 characters, most significant first

    Returns:
        Decoded integer value

    Raises:
        BlurhashFormatError: If ``text`` is empty or holds a character
            outside the alphabet
    """
    if not text:
        raise BlurhashFormatError("Cannot decode an empty Base83 string")

    value = 0
    for position, char in enumerate(text):
        digit = _DIGITS.get(char)
        if digit is None:
            raise BlurhashFormatError(
                f"Invalid Base83 character {char!r} at position {position}"
            )
        value = value * BASE + digit
    return value


def encode83(value: int, length: int) -> str:
    """Encode a non-negative integer as a zero-padded Base83 string.

    Args:
        value: Integer to encode
        length: Exact number of digits to emit

    Returns:
        Base83 string of ``length`` characters

    Raises:
        BlurhashRangeError: If ``value`` is negative or needs more than
            ``length`` digits
    """
    value = int(value)
    if value < 0:
        raise BlurhashRangeError(f"Cannot encode negative value {value}")
    if value // (BASE**length) != 0:
        raise BlurhashRangeError(
            f"Value {value} does not fit in {length} Base83 digits"
        )

    digits = []
    for _ in range(length):
        value, digit = divmod(value, BASE)
        digits.append(ALPHABET[digit])
    return "".join(reversed(digits))
