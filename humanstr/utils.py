"""
Utilities shared across humanstr modules.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix user classes with their module name.
            Builtin classes are never qualified.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class C: ...
        >>> class_name(C, fully_qualified=True)
        '__main__.C'
    """
    # type() ignores a __class__ override, which may raise
    cls = obj if issubclass(type(obj), type) else type(obj)
    name = getattr(cls, "__name__", None)
    if not isinstance(name, str):
        name = "object"

    module = getattr(cls, "__module__", None)
    if fully_qualified and isinstance(module, str) and module != "builtins":
        return f"{module}.{name}"
    return name


def safe_str(obj: Any) -> str:
    """
    Defensive str() call - handle broken __str__ methods gracefully
    """
    try:
        str_ = str(obj)
    except Exception as e:
        str_ = f"<{class_name(obj)} object (str failed: {class_name(e)})>"
    return str_
