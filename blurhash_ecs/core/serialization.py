"""Blurhash string serialization, validation and introspection.

Wire format (all digits Base83):
  [Size flag: 1 digit]
    - (num_y - 1) * 9 + (num_x - 1), num_x and num_y in [1, 9]
  [Quantized maximum AC: 1 digit]
    - 0-82, real bound is (value + 1) / 166
  [DC: 4 digits]
    - 24-bit packed sRGB average colour
  [AC: 2 digits each, num_x * num_y - 1 entries]
    - base-19 packed signed amplitudes in basis order x + y * num_x

A well-formed string is therefore exactly 4 + 2 * num_x * num_y long.
"""

from __future__ import annotations

from blurhash_ecs.components.coefficients import (
    MAX_AC_VALUE,
    MAX_COMPONENTS,
    QuantizedCoefficients,
)
from blurhash_ecs.core.base83 import decode83, encode83, is_base83
from blurhash_ecs.errors import BlurhashFormatError

MIN_LENGTH = 6
SIZE_FLAG_DIGITS = 1
MAX_AC_DIGITS = 1
DC_DIGITS = 4
AC_DIGITS = 2
HEADER_SIZE = SIZE_FLAG_DIGITS + MAX_AC_DIGITS + DC_DIGITS
MAX_SIZE_FLAG = MAX_COMPONENTS * MAX_COMPONENTS - 1
MAX_DC_VALUE = 0xFFFFFF


def expected_length(num_x: int, num_y: int) -> int:
    """Return the string length declared by a component grid."""
    return 4 + 2 * num_x * num_y


def encode_size_flag(num_x: int, num_y: int) -> int:
    """Pack a component grid into a size flag value."""
    return (num_y - 1) * MAX_COMPONENTS + (num_x - 1)


def decode_size_flag(size_flag: int) -> tuple[int, int]:
    """Unpack a size flag value into ``(num_x, num_y)``.

    Raises:
        BlurhashFormatError: If the flag describes more than 9 rows
    """
    if not 0 <= size_flag <= MAX_SIZE_FLAG:
        raise BlurhashFormatError(
            f"Size flag {size_flag} outside [0, {MAX_SIZE_FLAG}]"
        )
    num_y, num_x = divmod(size_flag, MAX_COMPONENTS)
    return num_x + 1, num_y + 1


def validate_blurhash(blurhash: str) -> tuple[int, int]:
    """Check that a blurhash is well-formed and return its grid.

    Args:
        blurhash: Candidate blurhash string

    Returns:
        ``(num_x, num_y)``

    Raises:
        BlurhashFormatError: If the string is not a str, is shorter than 6
            characters, holds non-Base83 characters, or its length does not
            match the declared grid
    """
    if not isinstance(blurhash, str):
        raise BlurhashFormatError(f"Expected str, got {type(blurhash).__name__}")
    if len(blurhash) < MIN_LENGTH:
        raise BlurhashFormatError(
            f"Blurhash must be at least {MIN_LENGTH} characters, got {len(blurhash)}"
        )
    if not is_base83(blurhash):
        invalid = sorted({char for char in blurhash if not is_base83(char)})
        raise BlurhashFormatError(f"Blurhash contains invalid characters {invalid}")

    num_x, num_y = decode_size_flag(decode83(blurhash[0]))
    expected = expected_length(num_x, num_y)
    if len(blurhash) != expected:
        raise BlurhashFormatError(
            f"Blurhash length {len(blurhash)} does not match "
            f"{num_x}x{num_y} components (expected {expected})"
        )
    return num_x, num_y


def is_valid(blurhash: str | None) -> bool:
    """Return whether ``blurhash`` is a well-formed blurhash string."""
    if not blurhash:
        return False
    try:
        validate_blurhash(blurhash)
    except BlurhashFormatError:
        return False
    return True


def components(blurhash: str | None) -> tuple[int, int] | None:
    """Return the ``(num_x, num_y)`` grid a blurhash declares.

    Returns None when the string is empty or too short, when its size flag
    describes a tenth row, or when its length does not match the declared
    grid.

    Raises:
        BlurhashFormatError: If the string holds non-Base83 characters
    """
    if not blurhash or len(blurhash) < MIN_LENGTH:
        return None
    if not is_base83(blurhash):
        invalid = sorted({char for char in blurhash if not is_base83(char)})
        raise BlurhashFormatError(f"Blurhash contains invalid characters {invalid}")

    size_flag = decode83(blurhash[0])
    if size_flag > MAX_SIZE_FLAG:
        return None
    num_x, num_y = decode_size_flag(size_flag)
    if len(blurhash) != expected_length(num_x, num_y):
        return None
    return num_x, num_y


def serialize_blurhash(quantized: QuantizedCoefficients) -> str:
    """Pack quantized coefficients into a blurhash string.

    Raises:
        TypeError: If ``quantized`` is not a QuantizedCoefficients
    """
    if not isinstance(quantized, QuantizedCoefficients):
        raise TypeError(f"Expected QuantizedCoefficients, got {type(quantized)}")

    parts = [
        encode83(encode_size_flag(quantized.num_x, quantized.num_y), SIZE_FLAG_DIGITS),
        encode83(quantized.quantized_max_ac, MAX_AC_DIGITS),
        encode83(quantized.dc, DC_DIGITS),
    ]
    parts.extend(encode83(value, AC_DIGITS) for value in quantized.ac)
    return "".join(parts)


def deserialize_blurhash(blurhash: str) -> QuantizedCoefficients:
    """Unpack a blurhash string into quantized coefficients.

    Raises:
        BlurhashFormatError: If the string is malformed
    """
    num_x, num_y = validate_blurhash(blurhash)

    dc = decode83(blurhash[2:HEADER_SIZE])
    if dc > MAX_DC_VALUE:
        raise BlurhashFormatError(f"DC value {dc} does not fit in 24 bits")

    ac = []
    for start in range(HEADER_SIZE, len(blurhash), AC_DIGITS):
        value = decode83(blurhash[start : start + AC_DIGITS])
        if value > MAX_AC_VALUE:
            raise BlurhashFormatError(
                f"AC value {value} at position {start} outside [0, {MAX_AC_VALUE}]"
            )
        ac.append(value)

    return QuantizedCoefficients(
        num_x=num_x,
        num_y=num_y,
        quantized_max_ac=decode83(blurhash[1]),
        dc=dc,
        ac=ac,
    )
