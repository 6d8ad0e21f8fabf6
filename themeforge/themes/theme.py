"""Theme entity with fallible read accessors."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping

from themeforge.diagnostics import Diagnostics
from themeforge.errors import ErrorCode
from themeforge.themes.constants import IDENTITY_FIELDS, PROPERTY_GROUPS
from themeforge.themes.models import (
    BreakpointName,
    PropertyTree,
    ThemeData,
    ThemeProperties,
    ThemeType,
    ThemeVariant,
    enum_value,
)
from themeforge.themes.result import ThemeResult
from themeforge.themes.tree import deep_clone, deep_merge, lookup

COMPONENT = "Theme"

_NUMBER_TYPES = (int, float)


def _identity_field(name: str) -> property:
    return property(lambda self: getattr(self._data, name), doc=f"Identity field ``{name}``.")


def _property_group(name: str) -> property:
    return property(
        lambda self: getattr(self._properties, name),
        doc=f"Property tree ``{name}``.",
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool)


class Theme:
    """A named, read-only bundle of identity metadata and style property trees.

    Accessors never raise: they return a ThemeResult. ``clone`` and ``merge``
    build new Theme instances and leave this one untouched. The property
    trees must not be mutated after construction.
    """

    def __init__(
        self,
        data: ThemeData,
        properties: ThemeProperties,
        *,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._data = data
        self._properties = properties
        self._diagnostics = diagnostics or Diagnostics()
        self._diagnostics.debug(
            COMPONENT,
            "__init__",
            "Creating theme",
            {
                "theme_id": getattr(data, "id", None),
                "theme_name": getattr(data, "name", None),
                "theme_type": enum_value(getattr(data, "type", None)),
                "theme_variant": enum_value(getattr(data, "variant", None)),
            },
        )

    id = _identity_field("id")
    name = _identity_field("name")
    display_name = _identity_field("display_name")
    description = _identity_field("description")
    type = _identity_field("type")
    variant = _identity_field("variant")
    is_active = _identity_field("is_active")
    supports_dark_mode = _identity_field("supports_dark_mode")
    opposite_theme = _identity_field("opposite_theme")
    version = _identity_field("version")
    author = _identity_field("author")
    tags = _identity_field("tags")

    colors = _property_group("colors")
    typography = _property_group("typography")
    spacing = _property_group("spacing")
    border_radius = _property_group("border_radius")
    shadows = _property_group("shadows")
    animation = _property_group("animation")
    breakpoints = _property_group("breakpoints")
    theme_classes = _property_group("theme_classes")
    custom = _property_group("custom")
    metadata = _property_group("metadata")
    responsive = _property_group("responsive")

    @property
    def data(self) -> ThemeData:
        return self._data

    @property
    def properties(self) -> ThemeProperties:
        return self._properties

    @property
    def diagnostics(self) -> Diagnostics:
        return self._diagnostics

    def __repr__(self) -> str:
        return f"Theme(id={self.id!r}, name={self.name!r}, type={enum_value(self.type)!r})"

    # -- accessors --

    def get_color(self, path: str) -> ThemeResult[str]:
        """Return the color string at a dotted path inside the color tree."""
        if not isinstance(path, str) or not path:
            return ThemeResult.fail(
                "Color path is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        try:
            self._diagnostics.debug(
                COMPONENT, "get_color", "Getting color by path", {"theme_id": self.id, "path": path}
            )
            found, value = lookup(self.colors, path)
            if found and isinstance(value, str):
                return ThemeResult.ok(value)
            return ThemeResult.fail(f"Color not found at path: {path}", ErrorCode.NOT_FOUND)
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._log_error("get_color", "Error getting color", exc, path=path)
            return ThemeResult.from_exception("Error getting color", exc)

    def get_spacing(self, size: str) -> ThemeResult[float]:
        return self._scale_value(
            "get_spacing", "Spacing", lambda: _child(self.spacing, "scale"), size, numeric=True
        )

    def get_font_size(self, size: str) -> ThemeResult[float]:
        return self._scale_value(
            "get_font_size",
            "Font size",
            lambda: _child(self.typography, "font_size"),
            size,
            numeric=True,
        )

    def get_border_radius(self, size: str) -> ThemeResult[float]:
        return self._scale_value(
            "get_border_radius", "Border radius", lambda: self.border_radius, size, numeric=True
        )

    def get_shadow(self, size: str) -> ThemeResult[str]:
        return self._scale_value("get_shadow", "Shadow", lambda: self.shadows, size, numeric=False)

    def get_animation_duration(self, size: str) -> ThemeResult[float]:
        return self._scale_value(
            "get_animation_duration",
            "Animation duration",
            lambda: _child(self.animation, "duration"),
            size,
            numeric=True,
        )

    def supports_breakpoint(self, breakpoint: BreakpointName | str) -> ThemeResult[bool]:
        """Report whether the breakpoint key exists, whatever its value."""
        key = enum_value(breakpoint)
        if not isinstance(key, str) or not key:
            return ThemeResult.fail(
                "Breakpoint name is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        try:
            self._diagnostics.debug(
                COMPONENT,
                "supports_breakpoint",
                "Checking breakpoint support",
                {"theme_id": self.id, "breakpoint": key},
            )
            breakpoints = self.breakpoints
            if not isinstance(breakpoints, Mapping):
                return ThemeResult.fail(
                    f"Theme {self.id!r} has malformed breakpoints", ErrorCode.VALIDATION_FAILED
                )
            return ThemeResult.ok(key in breakpoints)
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._log_error("supports_breakpoint", "Error checking breakpoint support", exc)
            return ThemeResult.from_exception("Error checking breakpoint support", exc)

    def get_opposite_theme(self) -> ThemeResult[str | None]:
        """Return the id of the light/dark counterpart, or None."""
        try:
            return ThemeResult.ok(self.opposite_theme or None)
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._log_error("get_opposite_theme", "Error getting opposite theme", exc)
            return ThemeResult.from_exception("Error getting opposite theme", exc)

    # -- derivation --

    def clone(self) -> ThemeResult[Theme]:
        """Return a new Theme with the same identity and deep-copied property trees."""
        try:
            self._diagnostics.debug(COMPONENT, "clone", "Cloning theme", {"theme_id": self.id})
            data = dataclasses.replace(self._data, tags=tuple(self._data.tags or ()))
            properties = ThemeProperties(
                **{group: deep_clone(getattr(self._properties, group)) for group in PROPERTY_GROUPS}
            )
            return ThemeResult.ok(Theme(data, properties, diagnostics=self._diagnostics))
        except Exception as exc:
            self._log_error("clone", "Error cloning theme", exc)
            return ThemeResult.from_exception("Error cloning theme", exc)

    def merge(self, partial: Mapping[str, Any] | Theme | None) -> ThemeResult[Theme]:
        """Return a new Theme with ``partial`` layered over this one.

        Identity fields present (and not None) in ``partial`` replace this
        theme's values. Property groups are deep-merged with ``partial``
        winning at the leaves; lists are replaced, never combined.
        """
        if partial is None:
            return ThemeResult.ok(self)
        if isinstance(partial, Theme):
            try:
                overrides: Mapping[str, Any] = partial.to_dict()
            except Exception as exc:
                self._log_error("merge", "Error merging theme", exc)
                return ThemeResult.from_exception("Error merging theme", exc)
        elif isinstance(partial, Mapping):
            overrides = partial
        else:
            return ThemeResult.fail(
                "Merge input must be a mapping or a Theme", ErrorCode.INVALID_ARGUMENT
            )

        unknown = sorted(
            str(key) for key in overrides if key not in IDENTITY_FIELDS and key not in PROPERTY_GROUPS
        )
        if unknown:
            return ThemeResult.fail(
                f"Unsupported merge keys: {', '.join(unknown)}", ErrorCode.INVALID_ARGUMENT
            )
        tags = overrides.get("tags")
        if tags is not None and not isinstance(tags, (list, tuple)):
            return ThemeResult.fail(
                "Merge field 'tags' must be a list of strings", ErrorCode.INVALID_ARGUMENT
            )

        try:
            self._diagnostics.debug(
                COMPONENT,
                "merge",
                "Merging theme",
                {"theme_id": self.id, "other_theme_id": overrides.get("id") or "unknown"},
            )
            identity = {
                field: overrides[field] if overrides.get(field) is not None else getattr(self._data, field)
                for field in IDENTITY_FIELDS
            }
            identity["type"] = ThemeType(identity["type"])
            identity["variant"] = ThemeVariant(identity["variant"])
            identity["tags"] = tuple(identity["tags"] or ())

            properties: dict[str, Any] = {}
            for group in PROPERTY_GROUPS:
                current = getattr(self._properties, group)
                override = overrides.get(group)
                if override is None:
                    properties[group] = current
                else:
                    properties[group] = deep_merge(
                        current, override, on_unsupported=self._flag_unsupported_leaf
                    )

            merged = Theme(
                ThemeData(**identity),
                ThemeProperties(**properties),
                diagnostics=self._diagnostics,
            )
            return ThemeResult.ok(merged)
        except Exception as exc:
            self._log_error("merge", "Error merging theme", exc)
            return ThemeResult.from_exception("Error merging theme", exc)

    def to_dict(self) -> dict[str, Any]:
        """Return identity and property trees as plain data (enums as strings)."""
        result: dict[str, Any] = {}
        for field in IDENTITY_FIELDS:
            value = getattr(self._data, field)
            if field == "tags":
                value = list(value or ())
            result[field] = enum_value(value)
        for group in PROPERTY_GROUPS:
            tree: PropertyTree | None = getattr(self._properties, group)
            if tree is not None:
                result[group] = deep_clone(tree)
        return result

    # -- helpers --

    def _scale_value(
        self,
        operation: str,
        label: str,
        scale_getter: Callable[[], Any],
        size: str,
        *,
        numeric: bool,
    ) -> ThemeResult[Any]:
        key = enum_value(size)
        if not isinstance(key, str) or not key:
            return ThemeResult.fail(
                f"{label} size is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        try:
            self._diagnostics.debug(
                COMPONENT, operation, f"Getting {label.lower()} by size", {"theme_id": self.id, "size": key}
            )
            scale = scale_getter()
            if isinstance(scale, Mapping) and key in scale:
                value = scale[key]
                matches = _is_number(value) if numeric else isinstance(value, str)
                if matches:
                    return ThemeResult.ok(value)
            return ThemeResult.fail(f"{label} not found for size: {key}", ErrorCode.NOT_FOUND)
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._log_error(operation, f"Error getting {label.lower()}", exc, size=key)
            return ThemeResult.from_exception(f"Error getting {label.lower()}", exc)

    def _flag_unsupported_leaf(self, path: str, value: Any) -> None:
        self._diagnostics.warning(
            COMPONENT,
            "merge",
            "Replacing unsupported value during merge",
            {"theme_id": self.id, "path": path, "value_type": type(value).__name__},
        )

    def _log_error(self, operation: str, message: str, exc: Exception, **context: Any) -> None:
        self._diagnostics.error(
            COMPONENT,
            operation,
            message,
            {"theme_id": getattr(self._data, "id", None), "error": str(exc), **context},
        )


def _child(tree: Any, key: str) -> Any:
    if isinstance(tree, Mapping):
        return tree.get(key)
    return None
