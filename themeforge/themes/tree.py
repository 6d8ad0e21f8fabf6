"""Deep clone, deep merge and dotted-path lookup over theme property trees.

A property tree is built from four node kinds: scalars (``str``, ``int``,
``float``, ``bool``, ``None``), dates, lists (``list`` or ``tuple``) and
records (any ``Mapping``). Trees are assumed to be acyclic.
"""

from __future__ import annotations

from datetime import date, time
from enum import Enum
from typing import Any, Callable, Mapping

from themeforge.errors import UnsupportedNodeError

_SCALAR_TYPES = (str, bool, int, float)
_DATE_TYPES = (date, time)  # datetime is a date subclass

UnsupportedHandler = Callable[[str, Any], None]


class NodeKind(Enum):
    SCALAR = "scalar"
    DATE = "date"
    LIST = "list"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


def node_kind(value: Any) -> NodeKind:
    """Classify a value into one of the property tree node kinds."""
    if value is None or isinstance(value, _SCALAR_TYPES):
        return NodeKind.SCALAR
    if isinstance(value, _DATE_TYPES):
        return NodeKind.DATE
    if isinstance(value, (list, tuple)):
        return NodeKind.LIST
    if isinstance(value, Mapping):
        return NodeKind.RECORD
    return NodeKind.UNSUPPORTED


def deep_clone(value: Any) -> Any:
    """Return a structural copy of ``value`` sharing no mutable substructure.

    Raises UnsupportedNodeError for values outside the four node kinds.
    """
    kind = node_kind(value)
    if kind is NodeKind.SCALAR or kind is NodeKind.DATE:
        # str/int/float/bool/None and date objects are immutable.
        return value
    if kind is NodeKind.LIST:
        items = [deep_clone(item) for item in value]
        return tuple(items) if isinstance(value, tuple) else items
    if kind is NodeKind.RECORD:
        return {key: deep_clone(item) for key, item in value.items()}
    raise UnsupportedNodeError(f"Cannot clone value of type {type(value).__name__}")


def deep_merge(
    target: Any,
    source: Any,
    *,
    on_unsupported: UnsupportedHandler | None = None,
    _path: str = "",
) -> Any:
    """Merge ``source`` over ``target``.

    Records merge key by key. Every other source value (scalar, date, list,
    ``None``) replaces the target value wholesale; lists are never merged
    element-wise. Values outside the known node kinds also replace, and are
    reported through ``on_unsupported`` with their dotted path.
    """
    source_kind = node_kind(source)
    if source_kind is not NodeKind.RECORD:
        if source_kind is NodeKind.UNSUPPORTED and on_unsupported is not None:
            on_unsupported(_path, source)
        return source

    merged: dict[str, Any] = dict(target) if node_kind(target) is NodeKind.RECORD else {}
    for key, value in source.items():
        child_path = f"{_path}.{key}" if _path else str(key)
        if node_kind(value) is NodeKind.RECORD:
            merged[key] = deep_merge(
                merged.get(key),
                value,
                on_unsupported=on_unsupported,
                _path=child_path,
            )
        else:
            if node_kind(value) is NodeKind.UNSUPPORTED and on_unsupported is not None:
                on_unsupported(child_path, value)
            merged[key] = value
    return merged


def lookup(tree: Any, path: str) -> tuple[bool, Any]:
    """Walk ``path`` one key per dot-separated segment.

    Returns ``(True, value)`` when every segment exists, otherwise
    ``(False, None)``. A missing key or a non-record intermediate ends the walk.
    """
    if not path:
        return False, None
    current = tree
    for key in path.split("."):
        if node_kind(current) is not NodeKind.RECORD or key not in current:
            return False, None
        current = current[key]
    return True, current


def leaf_paths(tree: Any, prefix: str = "") -> list[str]:
    """List the dotted paths of every non-record value in ``tree``."""
    paths: list[str] = []
    if node_kind(tree) is not NodeKind.RECORD:
        return paths
    for key, value in tree.items():
        current = f"{prefix}.{key}" if prefix else str(key)
        if node_kind(value) is NodeKind.RECORD:
            paths.extend(leaf_paths(value, current))
        else:
            paths.append(current)
    return paths
