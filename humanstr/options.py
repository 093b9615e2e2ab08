"""
Configuration for the humanstr renderer.

RenderOptions is an immutable dataclass: derive variants with merge() or one of the
preset constructors instead of mutating an instance.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifunset
from .utils import class_name

OnError = Literal["ignore", "warn"]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderOptions:
    """
    Rendering controls for render().

    Attributes:
        compact: Single-line output. When False, containers put each entry on its own
            indented line.
        limit: Maximum number of sequence elements or mapping keys to render. A container
            above the limit is replaced by a one-line summary; there is no partial listing.
            0 is taken literally and elides every non-empty container; it is not a
            shorthand for the default of 100.
        max_str: Strings longer than this render as a length summary instead of their content.
        indent: Spaces per nesting level in indented mode.
        max_depth: Containers nested deeper than this render as '[...]' or '{...}'.
            None means no depth cap.
        type_comments: Prefix the body of non-mapping objects with '/* ClassName */'.
        on_error: 'warn' issues a RuntimeWarning when inspecting a value fails;
            'ignore' falls back to '<unknown>' silently.
        named_objects: Read-only table of host-registered singletons, keyed by id().
            Use add_named_object() to extend it.

    Class Methods:
        logging_options(): Short single-line output suitable for log records
        debug_options(): Full indented output with warnings on broken objects

    Examples:
        >>> opts = RenderOptions(compact=True, limit=10)
        >>> opts.merge(limit=20).limit
        20

        >>> import math
        >>> opts = RenderOptions().add_named_object(math, "[module math]")
        >>> opts.get_name(math)
        '[module math]'
    """

    compact: bool = False
    limit: int = 100
    max_str: int = 1024
    indent: int = 2
    max_depth: int | None = None
    type_comments: bool = True
    on_error: OnError = "ignore"
    named_objects: Mapping[int, tuple[Any, str]] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    def __post_init__(self):
        for name in ("compact", "type_comments"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be bool, but got {class_name(value)}")

        for name in ("limit", "max_str", "indent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be int, but got {class_name(value)}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, but got {value}")

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise TypeError(f"max_depth must be int | None, but got {class_name(self.max_depth)}")
            if self.max_depth < 0:
                raise ValueError(f"max_depth must be non-negative, but got {self.max_depth}")

        if self.on_error not in ("ignore", "warn"):
            raise ValueError(f"on_error must be 'ignore' or 'warn', not {self.on_error!r}")

        if not isinstance(self.named_objects, Mapping):
            raise TypeError(f"named_objects must be a Mapping, but got {class_name(self.named_objects)}")
        if not isinstance(self.named_objects, MappingProxyType):
            object.__setattr__(self, "named_objects", MappingProxyType(dict(self.named_objects)))

    # Class Methods ------------------------------------

    @classmethod
    def logging_options(cls) -> "RenderOptions":
        """
        Create a RenderOptions instance configured for log records.

        Returns:
            RenderOptions: Single-line output with tighter limits on size and depth.
        """
        return cls(compact=True, limit=20, max_str=256, max_depth=4)

    @classmethod
    def debug_options(cls) -> "RenderOptions":
        """
        Create a RenderOptions instance configured for interactive debugging.

        Returns:
            RenderOptions: Indented output that warns about values that fail to render.
        """
        return cls(compact=False, on_error="warn")

    # Methods ------------------------------------------

    def merge(self,
              compact: bool | UnsetType = UNSET,
              limit: int | UnsetType = UNSET,
              max_str: int | UnsetType = UNSET,
              indent: int | UnsetType = UNSET,
              max_depth: int | None | UnsetType = UNSET,
              type_comments: bool | UnsetType = UNSET,
              on_error: OnError | UnsetType = UNSET,
              ) -> "RenderOptions":
        """
        Create a new RenderOptions instance with merged configuration.

        Parameters left UNSET are inherited from the current instance, so None can be
        passed explicitly to clear max_depth. Named objects are always carried over.

        Returns:
            New RenderOptions instance.
        """
        return RenderOptions(
            compact=ifunset(compact, default=self.compact),
            limit=ifunset(limit, default=self.limit),
            max_str=ifunset(max_str, default=self.max_str),
            indent=ifunset(indent, default=self.indent),
            max_depth=ifunset(max_depth, default=self.max_depth),
            type_comments=ifunset(type_comments, default=self.type_comments),
            on_error=ifunset(on_error, default=self.on_error),
            named_objects=self.named_objects,
        )

    def add_named_object(self, obj: Any, name: str) -> "RenderOptions":
        """
        Register a singleton that should render as a fixed name.

        The lookup is by identity, so equal but distinct objects are not matched.
        The options instance keeps a reference to obj while it is registered.

        Args:
            obj: The object to register.
            name: Text rendered in place of the object.

        Returns:
            New RenderOptions instance with the object registered.

        Raises:
            TypeError: If name is not a str.
        """
        if not isinstance(name, str):
            raise TypeError(f"name must be str, but got {class_name(name)}")
        table = dict(self.named_objects)
        table[id(obj)] = (obj, name)
        return self._with_named_objects(table)

    def remove_named_object(self, obj: Any) -> "RenderOptions":
        """
        Unregister a named object. Unknown objects are ignored.

        Returns:
            New RenderOptions instance without the object.
        """
        table = dict(self.named_objects)
        table.pop(id(obj), None)
        return self._with_named_objects(table)

    def get_name(self, obj: Any) -> str | None:
        """Return the registered name of obj, or None if it is not registered."""
        entry = self.named_objects.get(id(obj))
        if entry is not None and entry[0] is obj:
            return entry[1]
        return None

    def _with_named_objects(self, table: dict[int, tuple[Any, str]]) -> "RenderOptions":
        return RenderOptions(
            compact=self.compact,
            limit=self.limit,
            max_str=self.max_str,
            indent=self.indent,
            max_depth=self.max_depth,
            type_comments=self.type_comments,
            on_error=self.on_error,
            named_objects=MappingProxyType(table),
        )
