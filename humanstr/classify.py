"""
Value classification for the humanstr renderer.

classify() maps any Python object to exactly one Kind. The checks run in a fixed
priority order and the first match wins, so the result is total and mutually
exclusive: anything not recognized, or anything whose inspection raises, is UNKNOWN.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import asyncio
import collections.abc as abc
import concurrent.futures
import dataclasses
import datetime as dt
import enum
import functools
import inspect
import numbers
import re
import types
import weakref
from collections import UserString
from enum import StrEnum, unique
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .options import RenderOptions
from .sentinels import UNDEFINED, _SentinelBase

_PENDING_TYPES = (
    asyncio.Future,  # Includes asyncio.Task
    concurrent.futures.Future,
    types.CoroutineType,
    types.GeneratorType,
    types.AsyncGeneratorType,
)

_WEAK_TYPES = (
    weakref.WeakKeyDictionary,
    weakref.WeakValueDictionary,
    weakref.WeakSet,
    weakref.ReferenceType,  # Includes WeakMethod
)

# Handled by their own kinds, never as generic sequences
_NON_SEQUENCE_TYPES = (str, UserString, bytes, bytearray, memoryview, array.array)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(StrEnum):
    """
    Closed set of value kinds recognized by the renderer.

    Members are listed in classification priority order.
    """
    NAMED = "named"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    NUMBER = "number"
    SYMBOL = "symbol"
    SEQUENCE = "sequence"
    TYPED_ARRAY = "typed_array"
    BINARY = "binary"
    BUFFER_VIEW = "buffer_view"
    DATETIME = "datetime"
    PATTERN = "pattern"
    WEAK_COLLECTION = "weak_collection"
    KEYED_COLLECTION = "keyed_collection"
    ERROR = "error"
    PENDING = "pending"
    CALLABLE = "callable"
    CLASS = "class"
    MAPPING = "mapping"
    RECORD = "record"
    UNKNOWN = "unknown"

    @property
    def category(self) -> str:
        """Logical category: 'primitive', 'container', 'specialized' or 'unknown'."""
        if self in _PRIMITIVE_KINDS:
            return "primitive"
        if self in _CONTAINER_KINDS:
            return "container"
        if self is Kind.UNKNOWN:
            return "unknown"
        return "specialized"


_PRIMITIVE_KINDS = frozenset({
    Kind.STRING, Kind.BOOLEAN, Kind.NULL, Kind.UNDEFINED, Kind.NUMBER, Kind.SYMBOL,
})

_CONTAINER_KINDS = frozenset({Kind.SEQUENCE, Kind.MAPPING, Kind.RECORD})


# Methods --------------------------------------------------------------------------------------------------------------

def classify(value: Any, options: RenderOptions | None = None) -> Kind:
    """
    Classify a value for rendering.

    Args:
        value: Any Python object.
        options: Render options; only the named objects table is consulted.

    Returns:
        The Kind of the value. Never raises.

    Examples:
        >>> classify("abc")
        <Kind.STRING: 'string'>
        >>> classify([1, 2])
        <Kind.SEQUENCE: 'sequence'>
        >>> classify({1, 2})
        <Kind.KEYED_COLLECTION: 'keyed_collection'>
        >>> classify(object())
        <Kind.UNKNOWN: 'unknown'>
    """
    try:
        return _classify(value, options)
    except Exception:
        return Kind.UNKNOWN


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify(value: Any, options: RenderOptions | None) -> Kind:
    if options is not None and options.named_objects and options.get_name(value) is not None:
        return Kind.NAMED

    # Weak proxies forward __class__ to their referent, so test the real type before any isinstance()
    if type(value) in weakref.ProxyTypes:
        return Kind.WEAK_COLLECTION

    # Primitives
    if isinstance(value, (str, UserString)):
        return Kind.STRING
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if value is None:
        return Kind.NULL
    if value is UNDEFINED:
        return Kind.UNDEFINED
    if isinstance(value, numbers.Number):
        return Kind.NUMBER
    if isinstance(value, (enum.Enum, _SentinelBase)) or value is Ellipsis or value is NotImplemented:
        return Kind.SYMBOL

    # Ordered sequences; named tuples show their fields by name instead
    if isinstance(value, tuple) and hasattr(type(value), "_fields"):
        return Kind.RECORD
    if isinstance(value, abc.Sequence) and not isinstance(value, _NON_SEQUENCE_TYPES):
        return Kind.SEQUENCE

    # Specialized shapes
    if isinstance(value, array.array):
        return Kind.TYPED_ARRAY
    if isinstance(value, (bytes, bytearray)):
        return Kind.BINARY
    if isinstance(value, memoryview):
        return Kind.BUFFER_VIEW
    if isinstance(value, dt.date):
        return Kind.DATETIME
    if isinstance(value, re.Pattern):
        return Kind.PATTERN
    if isinstance(value, _WEAK_TYPES):
        return Kind.WEAK_COLLECTION
    if isinstance(value, (abc.Set, abc.MappingView)):
        return Kind.KEYED_COLLECTION
    if isinstance(value, BaseException):
        return Kind.ERROR
    if isinstance(value, _PENDING_TYPES):
        return Kind.PENDING
    if inspect.isroutine(value) or isinstance(value, functools.partial):
        return Kind.CALLABLE
    if isinstance(value, type):
        return Kind.CLASS

    # Generic mappings and attribute records
    if isinstance(value, abc.Mapping):
        return Kind.MAPPING
    if _is_record(value):
        return Kind.RECORD

    return Kind.UNKNOWN


def _is_record(value: Any) -> bool:
    """Check if the object exposes attribute state that can be listed as keys."""
    if dataclasses.is_dataclass(value):
        return True
    if isinstance(getattr(value, "__dict__", None), dict):
        return True
    return any(getattr(cls, "__slots__", ()) for cls in type(value).__mro__[:-1])
