"""
Human-readable rendering of arbitrary Python values.

render() produces a deterministic pseudo-JSON text tree for logs, debugging output and
test failure messages. It is not valid JSON and is not meant to be parsed back.

The renderer classifies each value (see humanstr.classify), dispatches to a renderer for
that kind, and composes containers into an indented or compact tree. Oversized containers
and strings are replaced by one-line summaries, containers already on the current path
render as '<cycle>', and any value that fails during inspection renders as '<unknown>'.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import math
import os
import warnings
from collections import UserString
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from . import shapes
from .classify import Kind, _classify, classify
from .options import RenderOptions
from .sentinels import UNDEFINED, UNSET, UnsetType, _SentinelBase
from .utils import class_name, safe_str

UNKNOWN = "<unknown>"
CYCLE = "<cycle>"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderContext:
    """
    Per-call state threaded through recursion.

    Attributes:
        options: Resolved render options.
        depth: Nesting level of the value being rendered; 0 for the root.
        ancestors: id() of every container on the path from the root to this value.
    """
    options: RenderOptions
    depth: int = 0
    ancestors: frozenset[int] = frozenset()

    def descend(self, container: Any, options: RenderOptions | None = None) -> "RenderContext":
        """Context for the children of container, one level deeper."""
        return RenderContext(
            options=self.options if options is None else options,
            depth=self.depth + 1,
            ancestors=self.ancestors | {id(container)},
        )

    @property
    def entry_sep(self) -> str:
        """Separator between container entries."""
        if self.options.compact:
            return ","
        return ",\n" + " " * ((self.depth + 1) * self.options.indent)

    @property
    def open_sep(self) -> str:
        """Whitespace after the opening delimiter."""
        if self.options.compact:
            return ""
        return "\n" + " " * ((self.depth + 1) * self.options.indent)

    @property
    def close_sep(self) -> str:
        """Whitespace before the closing delimiter."""
        if self.options.compact:
            return ""
        return "\n" + " " * (self.depth * self.options.indent)

    @property
    def key_sep(self) -> str:
        """Whitespace between a key's colon and its value."""
        return "" if self.options.compact else " "


# Methods --------------------------------------------------------------------------------------------------------------

def render(
    value: Any,
    options: RenderOptions | None = None,
    *,
    compact: bool | UnsetType = UNSET,
    limit: int | UnsetType = UNSET,
    max_str: int | UnsetType = UNSET,
    indent: int | UnsetType = UNSET,
    max_depth: int | None | UnsetType = UNSET,
    type_comments: bool | UnsetType = UNSET,
    on_error: str | UnsetType = UNSET,
) -> str:
    """
    Render any value as human-readable pseudo-JSON text.

    Args:
        value: Any Python object.
        options: Base options; defaults to RenderOptions().
        compact, limit, max_str, indent, max_depth, type_comments, on_error:
            Per-call overrides merged over options, see RenderOptions.

    Returns:
        The rendered text. Never raises for any value.

    Raises:
        TypeError: If options is not a RenderOptions, or an override has the wrong type.
        ValueError: If an override has an invalid value.

    Examples:
        >>> render({"a": [0, 1, 2]}, compact=True)
        '{"a":[0,1,2]}'

        >>> print(render({"a": ["x", "y"]}))
        {
          "a": [
            "x",
            "y"
          ]
        }

        >>> render(list(range(101)))
        '[...101 elements]'

        >>> render(ValueError("bad input"))
        'ValueError("bad input")'
    """
    if options is None:
        options = RenderOptions()
    elif not isinstance(options, RenderOptions):
        raise TypeError(f"options must be RenderOptions | None, but got {class_name(options)}")

    overrides = dict(compact=compact, limit=limit, max_str=max_str, indent=indent,
                     max_depth=max_depth, type_comments=type_comments, on_error=on_error)
    if any(v is not UNSET for v in overrides.values()):
        options = options.merge(**overrides)

    return _render(value, RenderContext(options=options))


# Private Methods ------------------------------------------------------------------------------------------------------

def _render(value: Any, ctx: RenderContext) -> str:
    """Classify value and dispatch to its renderer; failures degrade to UNKNOWN."""
    try:
        kind = _classify(value, ctx.options)
        return _RENDERERS[kind](value, ctx)
    except Exception as e:
        if ctx.options.on_error == "warn":
            warnings.warn(
                f"Failed to render {class_name(value, fully_qualified=True)}: {class_name(e)}: {safe_str(e)}",
                RuntimeWarning,
                stacklevel=2,
                skip_file_prefixes=(os.path.dirname(__file__),),
            )
        return UNKNOWN


def _compose(open_ch: str, parts: list[str], close_ch: str, ctx: RenderContext, head: str = "") -> str:
    """Join rendered entries between delimiters using the indentation of ctx."""
    return open_ch + head + ctx.open_sep + ctx.entry_sep.join(parts) + ctx.close_sep + close_ch


def _too_deep(ctx: RenderContext) -> bool:
    max_depth = ctx.options.max_depth
    return max_depth is not None and ctx.depth > max_depth


# Primitives ---------------------------------------------------------

def _render_string(value: str | UserString, ctx: RenderContext) -> str:
    # Boxed strings unwrap to their plain text; str subclasses may override __str__
    text = value.data if isinstance(value, UserString) else str.__str__(value)
    return shapes.quote(text, ctx.options.max_str)


def _render_boolean(value: bool, ctx: RenderContext) -> str:
    return "true" if value else "false"


def _render_null(value: None, ctx: RenderContext) -> str:
    return "null"


def _render_undefined(value: Any, ctx: RenderContext) -> str:
    return "undefined"


def _render_number(value: Any, ctx: RenderContext) -> str:
    if isinstance(value, int):
        try:
            return int.__repr__(value)
        except ValueError:
            # Above sys.get_int_max_str_digits()
            return f"<int of {value.bit_length()} bits>"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return float.__repr__(value)
    return str(value)


def _render_symbol(value: Any, ctx: RenderContext) -> str:
    if value is Ellipsis:
        return "Ellipsis"
    if value is NotImplemented:
        return "NotImplemented"
    if isinstance(value, _SentinelBase):
        return value.name
    if value.name is None:
        # Flag pseudo-members without a name
        return str(value)
    return f"{class_name(value)}.{value.name}"


def _render_named(value: Any, ctx: RenderContext) -> str:
    return ctx.options.get_name(value)


def _render_unknown(value: Any, ctx: RenderContext) -> str:
    return UNKNOWN


# Containers ---------------------------------------------------------

def _render_sequence(seq: Any, ctx: RenderContext) -> str:
    """
    Render an ordered sequence.

    A sequence led by a number stays on one line in both modes; any other sequence
    puts each element on its own line unless compact.
    """
    if id(seq) in ctx.ancestors:
        return CYCLE

    count = len(seq)
    if count > ctx.options.limit:
        return f"[...{count} elements]"
    if count == 0:
        return "[]"
    if _too_deep(ctx):
        return "[...]"

    # Snapshot at most count items in case the sequence grows while rendering
    items = list(islice(iter(seq), count))
    if not items:
        return "[]"

    if classify(items[0], ctx.options) is Kind.NUMBER:
        inline = ctx.descend(seq, ctx.options.merge(compact=True))
        parts = [_render(x, inline) for x in items]
        return "[" + ("," + ctx.key_sep).join(parts) + "]"

    children = ctx.descend(seq)
    parts = [_render(x, children) for x in items]
    return _compose("[", parts, "]", ctx)


def _render_mapping(mp: Any, ctx: RenderContext) -> str:
    return _render_entries(mp, iter(mp.items()), ctx, head="")


def _render_record(obj: Any, ctx: RenderContext) -> str:
    head = f"/* {class_name(obj)} */" if ctx.options.type_comments else ""
    return _render_entries(obj, _record_items(obj), ctx, head=head)


def _render_entries(container: Any, items: Iterator[tuple[Any, Any]], ctx: RenderContext, head: str) -> str:
    """
    Render key-value entries between braces.

    Keys are counted lazily and counting stops at limit + 1, so a huge mapping is
    never walked in full.
    """
    if id(container) in ctx.ancestors:
        return CYCLE

    entries = list(islice(items, ctx.options.limit + 1))
    if len(entries) > ctx.options.limit:
        return "{" + head + "...large object}"
    if not entries:
        return "{" + head + "}"
    if _too_deep(ctx):
        return "{" + head + "...}"

    children = ctx.descend(container)
    parts = [
        f"{_render_key(k, ctx)}:{ctx.key_sep}{_render(v, children)}"
        for k, v in entries
    ]
    return _compose("{", parts, "}", ctx, head=head)


def _render_key(key: Any, ctx: RenderContext) -> str:
    """Keys always render as quoted strings."""
    if isinstance(key, str):
        text = str.__str__(key)
    else:
        text = _render(key, RenderContext(
            options=ctx.options.merge(compact=True),
            depth=ctx.depth,
            ancestors=ctx.ancestors,
        ))
    return shapes.quote(text, ctx.options.max_str)


def _record_items(obj: Any) -> Iterator[tuple[str, Any]]:
    """
    Yield (name, value) pairs describing an object's state.

    Named tuples yield their fields, dataclasses their fields (UNDEFINED when never assigned),
    other objects their __dict__ entries followed by assigned __slots__.
    """
    cls = type(obj)
    if isinstance(obj, tuple) and hasattr(cls, "_fields"):
        yield from zip(cls._fields, obj)
        return

    if dataclasses.is_dataclass(obj):
        for f in dataclasses.fields(obj):
            yield f.name, getattr(obj, f.name, UNDEFINED)
        return

    seen = set()
    attrs = getattr(obj, "__dict__", None)
    if isinstance(attrs, dict):
        for name, value in list(attrs.items()):
            seen.add(name)
            yield name, value

    for klass in cls.__mro__[:-1]:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in seen:
                continue
            seen.add(name)
            attr = name
            if name.startswith("__") and not name.endswith("__"):
                attr = f"_{klass.__name__.lstrip('_')}{name}"
            value = getattr(obj, attr, _UNASSIGNED)
            if value is not _UNASSIGNED:
                yield name, value


# Specialized shapes -------------------------------------------------

def _render_error(value: BaseException, ctx: RenderContext) -> str:
    return shapes.error_marker(value, ctx.options.max_str)


def _shape(marker: Callable[[Any], str]) -> Callable[[Any, RenderContext], str]:
    """Adapt a single-argument marker to the renderer signature."""

    def renderer(value: Any, ctx: RenderContext) -> str:
        return marker(value)

    return renderer


_UNASSIGNED = object()

_RENDERERS: dict[Kind, Callable[[Any, RenderContext], str]] = {
    Kind.NAMED: _render_named,
    Kind.STRING: _render_string,
    Kind.BOOLEAN: _render_boolean,
    Kind.NULL: _render_null,
    Kind.UNDEFINED: _render_undefined,
    Kind.NUMBER: _render_number,
    Kind.SYMBOL: _render_symbol,
    Kind.SEQUENCE: _render_sequence,
    Kind.TYPED_ARRAY: _shape(shapes.typed_array_marker),
    Kind.BINARY: _shape(shapes.binary_marker),
    Kind.BUFFER_VIEW: _shape(shapes.buffer_view_marker),
    Kind.DATETIME: _shape(shapes.datetime_marker),
    Kind.PATTERN: _shape(shapes.pattern_marker),
    Kind.WEAK_COLLECTION: _shape(shapes.empty_marker),
    Kind.KEYED_COLLECTION: _shape(shapes.sized_marker),
    Kind.ERROR: _render_error,
    Kind.PENDING: _shape(shapes.empty_marker),
    Kind.CALLABLE: _shape(shapes.callable_marker),
    Kind.CLASS: _shape(shapes.class_marker),
    Kind.MAPPING: _render_mapping,
    Kind.RECORD: _render_record,
    Kind.UNKNOWN: _render_unknown,
}
