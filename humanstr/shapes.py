"""
Fixed-format markers for specialized built-in shapes.

Each marker is a single line and never looks inside the value beyond its size or
other header fields, so rendering cost does not depend on the contents.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import datetime as dt
import re
from email.utils import format_datetime
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, safe_str

# Typecode families of array.array; the bit width comes from itemsize
_SIGNED_CODES = frozenset("bhilq")
_UNSIGNED_CODES = frozenset("BHILQ")
_FLOAT_CODES = frozenset("fd")
_UNICODE_CODES = frozenset("uw")

# Inline flag letters in the order Python prints them; the implicit UNICODE flag is omitted
_PATTERN_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.LOCALE, "L"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


# Methods --------------------------------------------------------------------------------------------------------------

def quote(text: str, max_str: int = 1024) -> str:
    """
    Wrap text in double quotes, or summarize it when longer than max_str.

    Embedded quotes are not escaped; the output is for humans only.

    Examples:
        >>> quote("abc")
        '"abc"'
        >>> quote("a" * 2000)
        '"...string of len 2000"'
    """
    if len(text) > max_str:
        return f'"...string of len {len(text)}"'
    return f'"{text}"'


def typed_array_name(typecode: str, itemsize: int) -> str:
    """
    Name of the fixed-width array type matching an array.array typecode.

    Examples:
        >>> typed_array_name("B", 1)
        'Uint8Array'
        >>> typed_array_name("q", 8)
        'BigInt64Array'
        >>> typed_array_name("d", 8)
        'Float64Array'
    """
    bits = itemsize * 8
    if typecode in _SIGNED_CODES:
        return f"BigInt{bits}Array" if bits > 32 else f"Int{bits}Array"
    if typecode in _UNSIGNED_CODES:
        return f"BigUint{bits}Array" if bits > 32 else f"Uint{bits}Array"
    if typecode in _FLOAT_CODES:
        return f"Float{bits}Array"
    if typecode in _UNICODE_CODES:
        return "UnicodeArray"
    return "array"


def typed_array_marker(value: array.array) -> str:
    return f"{typed_array_name(value.typecode, value.itemsize)}(len: {len(value)})"


def binary_marker(value: bytes | bytearray) -> str:
    return f"{class_name(value)}(byteLength: {len(value)})"


def buffer_view_marker(value: memoryview) -> str:
    """Marker for a memoryview; a released view has no size left to report."""
    try:
        nbytes, fmt = value.nbytes, value.format
    except ValueError:
        return "memoryview(released)"
    return f"memoryview(byteLength: {nbytes}, format: {fmt})"


def datetime_marker(value: dt.date) -> str:
    """
    RFC-1123 text of a date or datetime in UTC.

    Aware datetimes are converted to UTC, naive ones are taken to be UTC already,
    and plain dates stand for midnight UTC.

    Examples:
        >>> datetime_marker(dt.datetime(1970, 1, 1))
        'Thu, 01 Jan 1970 00:00:00 GMT'
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        else:
            value = value.astimezone(dt.timezone.utc)
    else:
        value = dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    return format_datetime(value, usegmt=True)


def pattern_marker(value: re.Pattern) -> str:
    """
    Marker for a compiled regular expression.

    Examples:
        >>> pattern_marker(re.compile(r"\\d+", re.I | re.M))
        'Pattern(/\\\\d+/im)'
    """
    source = value.pattern
    if isinstance(source, bytes):
        source = source.decode("ascii", "backslashreplace")
    flags = "".join(letter for flag, letter in _PATTERN_FLAGS if value.flags & flag)
    return f"Pattern(/{source}/{flags})"


def sized_marker(value: Any) -> str:
    return f"{class_name(value)}(size: {len(value)})"


def empty_marker(value: Any) -> str:
    """Type name with empty parentheses, for values whose contents are not inspected."""
    # type() rather than class_name(): weak proxies forward __class__ to their referent
    return f"{type(value).__name__}()"


def error_marker(value: BaseException, max_str: int = 1024) -> str:
    """
    Exception type name with its message.

    Examples:
        >>> error_marker(ValueError("bad input"))
        'ValueError("bad input")'
    """
    return f"{class_name(value)}({quote(safe_str(value), max_str)})"


def callable_marker(value: Any) -> str:
    return "function(){...}"


def class_marker(value: type) -> str:
    return f"<class: {class_name(value)}>"
