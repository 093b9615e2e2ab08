"""
Sentinel objects used by humanstr.

All sentinels are singletons and must be compared by identity ('is').

Sentinels:
    UNSET: An optional argument that was not provided (distinct from None)
    UNDEFINED: An absent value; rendered as ``undefined``, where None renders as ``null``

Helper Functions:
    ifunset: Return default if value is UNSET, otherwise return value

Example:
    >>> from humanstr.render import render
    >>> render({"id": 7, "parent": UNDEFINED}, compact=True)
    '{"id":7,"parent":undefined}'
"""

from typing import Any, Callable, Final

__all__ = [
    'UNSET',
    'UNDEFINED',
    'UnsetType',
    'UndefinedType',
    'ifunset',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for sentinel singletons.

    The renderer classifies instances of this class as symbol-like values and prints their name.
    """
    __slots__ = ('_name',)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Marks keyword arguments of RenderOptions.merge() and render() that were not provided.
    """
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNSET")


class UndefinedType(_SentinelBase):
    """
    Sentinel type for UNDEFINED.

    Stands for a value that is absent altogether, as opposed to None which is present and empty.
    """
    _instance: 'UndefinedType | None' = None

    def __new__(cls) -> 'UndefinedType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNDEFINED")


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""

UNDEFINED: Final[UndefinedType] = UndefinedType()
"""
Sentinel representing an absent value.

Useful for attributes or mapping entries that were never assigned, where None would be a legitimate value.
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifunset(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Args:
        value: The value to check. If not UNSET, this value is returned.
        default: The fallback value when value is UNSET.
        default_factory: Callable returning the fallback value. Takes precedence over default.

    Returns:
        The value itself if not UNSET, otherwise the default (or result of default_factory).

    Raises:
        ValueError: If both default and default_factory are provided.

    Example:
        >>> ifunset(UNSET, default=100)
        100
        >>> ifunset(None, default=100) is None
        True
    """
    if value is not UNSET:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default
