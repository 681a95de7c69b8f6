"""Exception types raised by the codec.

All errors derive from ``ValueError`` so callers that already guard
against bad input with ``except ValueError`` keep working.
"""


class BlurhashError(ValueError):
    """Base class for all blurhash errors."""


class BlurhashFormatError(BlurhashError):
    """The blurhash string is malformed.

    Raised for strings that are too short, contain characters outside the
    Base83 alphabet, or whose length does not match the declared grid.
    """


class BlurhashRangeError(BlurhashError):
    """A numeric argument is outside its allowed range.

    Raised for non-positive output dimensions or punch, component counts
    outside [1, 9], pixel buffers of the wrong size, and Base83 values that
    do not fit the requested digit count.
    """
