"""Stateless lookups of style values from a theme, with fallbacks."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from themeforge.diagnostics import Diagnostics
from themeforge.errors import ErrorCode
from themeforge.themes.constants import (
    INTROSPECTED_GROUPS,
    PROPERTY_GROUPS,
    RECOMMENDED_COLOR_GROUPS,
    RECOMMENDED_TYPOGRAPHY_KEYS,
    REQUIRED_PROPERTY_GROUPS,
)
from themeforge.themes.models import BreakpointName, ValidationReport, enum_value
from themeforge.themes.result import ThemeResult
from themeforge.themes.theme import Theme
from themeforge.themes.tree import leaf_paths, lookup

COMPONENT = "ThemePropertyResolver"


class _Missing:
    """Marker for an omitted fallback, so ``None`` can be a real fallback."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class ThemePropertyResolver:
    """Resolve theme values by path or scale name.

    Holds no theme state; every call is a function of its arguments. A
    missing theme is always a failure. When the lookup itself fails and a
    fallback was supplied, the fallback is returned as a success.
    """

    def __init__(self, diagnostics: Diagnostics | None = None) -> None:
        self._diagnostics = diagnostics or Diagnostics()

    # -- scale and path accessors --

    def resolve_color(self, theme: Theme, path: str, fallback: Any = MISSING) -> ThemeResult[str]:
        return self._delegate("resolve_color", theme, lambda t: t.get_color(path), path, fallback)

    def resolve_spacing(self, theme: Theme, size: str, fallback: Any = MISSING) -> ThemeResult[float]:
        def accessor(t: Theme) -> ThemeResult[float]:
            result = t.get_spacing(size)
            if result.success or enum_value(size) != "base":
                return result
            base = t.spacing.get("base") if isinstance(t.spacing, Mapping) else None
            if isinstance(base, (int, float)) and not isinstance(base, bool):
                return ThemeResult.ok(base)
            return result

        return self._delegate("resolve_spacing", theme, accessor, size, fallback)

    def resolve_font_size(self, theme: Theme, size: str, fallback: Any = MISSING) -> ThemeResult[float]:
        return self._delegate(
            "resolve_font_size", theme, lambda t: t.get_font_size(size), size, fallback
        )

    def resolve_border_radius(
        self, theme: Theme, size: str, fallback: Any = MISSING
    ) -> ThemeResult[float]:
        return self._delegate(
            "resolve_border_radius", theme, lambda t: t.get_border_radius(size), size, fallback
        )

    def resolve_shadow(self, theme: Theme, size: str, fallback: Any = MISSING) -> ThemeResult[str]:
        return self._delegate("resolve_shadow", theme, lambda t: t.get_shadow(size), size, fallback)

    def resolve_animation_duration(
        self, theme: Theme, size: str, fallback: Any = MISSING
    ) -> ThemeResult[float]:
        return self._delegate(
            "resolve_animation_duration",
            theme,
            lambda t: t.get_animation_duration(size),
            size,
            fallback,
        )

    def resolve_theme_class(
        self, theme: Theme, class_name: str, fallback: Any = MISSING
    ) -> ThemeResult[Mapping[str, Any] | None]:
        """Look up a named style class; an unknown class is a successful None."""
        if theme is None:
            return _missing_theme()

        def accessor(t: Theme) -> ThemeResult[Any]:
            if not isinstance(class_name, str) or not class_name:
                return ThemeResult.fail(
                    "Theme class name is required and must be a string",
                    ErrorCode.INVALID_ARGUMENT,
                )
            classes = t.theme_classes
            if isinstance(classes, Mapping) and class_name in classes:
                return ThemeResult.ok(classes[class_name])
            if fallback is not MISSING:
                return ThemeResult.fail(f"Theme class not found: {class_name}", ErrorCode.NOT_FOUND)
            return ThemeResult.ok(None)

        return self._delegate("resolve_theme_class", theme, accessor, class_name, fallback)

    def resolve_custom_property(
        self, theme: Theme, path: str, fallback: Any = MISSING
    ) -> ThemeResult[Any]:
        def accessor(t: Theme) -> ThemeResult[Any]:
            return _resolve_path(t.custom, path, "Custom property")

        return self._delegate("resolve_custom_property", theme, accessor, path, fallback)

    # -- layered resolution --

    def resolve_with_inheritance(
        self,
        theme: Theme,
        path: str,
        fallback: Any = MISSING,
        *,
        ancestors: Iterable[Theme] = (),
    ) -> ThemeResult[Any]:
        """Resolve a root-relative path (``colors.primary.main``) through a chain.

        The theme is consulted first, then each ancestor in order, then the
        fallback.
        """

        def accessor(t: Theme) -> ThemeResult[Any]:
            result = _resolve_path(_root_tree(t), path, "Property")
            if result.success:
                return result
            for ancestor in ancestors:
                if not isinstance(ancestor, Theme):
                    continue
                inherited = _resolve_path(_root_tree(ancestor), path, "Property")
                if inherited.success:
                    self._diagnostics.debug(
                        COMPONENT,
                        "resolve_with_inheritance",
                        "Resolved from ancestor",
                        {"theme_id": t.id, "ancestor_id": ancestor.id, "path": path},
                    )
                    return inherited
            return ThemeResult.fail(
                f"Property not found with inheritance: {path} in theme {t.id}",
                ErrorCode.NOT_FOUND,
            )

        return self._delegate("resolve_with_inheritance", theme, accessor, path, fallback)

    def resolve_for_breakpoint(
        self,
        theme: Theme,
        path: str,
        breakpoint: BreakpointName | str,
        fallback: Any = MISSING,
    ) -> ThemeResult[Any]:
        """Resolve a root-relative path, preferring the breakpoint's override layer."""
        key = enum_value(breakpoint)

        def accessor(t: Theme) -> ThemeResult[Any]:
            supported = t.supports_breakpoint(key)
            if not supported.success:
                return supported
            if not supported.data:
                return ThemeResult.fail(
                    f"Theme {t.id} does not support breakpoint {key}", ErrorCode.NOT_FOUND
                )
            responsive = t.responsive
            if isinstance(responsive, Mapping):
                override = _resolve_path(responsive.get(key), path, "Breakpoint override")
                if override.success:
                    return override
            base = _resolve_path(_root_tree(t), path, "Property")
            if base.success:
                return base
            return ThemeResult.fail(
                f"Property not found for breakpoint: {path} in theme {t.id}", ErrorCode.NOT_FOUND
            )

        return self._delegate("resolve_for_breakpoint", theme, accessor, path, fallback)

    def supports_breakpoint(
        self, theme: Theme, breakpoint: BreakpointName | str
    ) -> ThemeResult[bool]:
        return self._delegate(
            "supports_breakpoint", theme, lambda t: t.supports_breakpoint(breakpoint), breakpoint
        )

    # -- introspection --

    def get_available_properties(self, theme: Theme) -> ThemeResult[list[str]]:
        """List every dotted leaf path across the theme's property trees."""

        def accessor(t: Theme) -> ThemeResult[list[str]]:
            paths: list[str] = []
            for group in INTROSPECTED_GROUPS:
                paths.extend(leaf_paths(getattr(t, group), group))
            return ThemeResult.ok(paths)

        return self._delegate("get_available_properties", theme, accessor, None)

    def validate_theme_properties(self, theme: Theme) -> ThemeResult[ValidationReport]:
        """Audit structural completeness without rejecting anything."""

        def accessor(t: Theme) -> ThemeResult[ValidationReport]:
            errors: list[str] = []
            warnings: list[str] = []
            if not t.id:
                errors.append("Theme ID is required")
            if not t.name:
                errors.append("Theme name is required")
            for group in REQUIRED_PROPERTY_GROUPS:
                if not isinstance(getattr(t, group), Mapping):
                    errors.append(f"Theme {group} is required")

            if isinstance(t.colors, Mapping):
                for key in RECOMMENDED_COLOR_GROUPS:
                    if not t.colors.get(key):
                        warnings.append(f"{key.capitalize()} colors are recommended")
            if isinstance(t.typography, Mapping):
                for key in RECOMMENDED_TYPOGRAPHY_KEYS:
                    if not t.typography.get(key):
                        warnings.append(f"Typography {key} is recommended")
            if isinstance(t.breakpoints, Mapping):
                for name, value in t.breakpoints.items():
                    if isinstance(value, bool) or not isinstance(value, (int, float)):
                        warnings.append(f"Breakpoint {name} should be a number of pixels")
            if t.opposite_theme and t.opposite_theme == t.id:
                warnings.append("Opposite theme refers to the theme itself")

            return ThemeResult.ok(
                ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)
            )

        return self._delegate("validate_theme_properties", theme, accessor, None)

    # -- internals --

    def _delegate(
        self,
        operation: str,
        theme: Theme,
        accessor: Callable[[Theme], ThemeResult[Any]],
        selector: Any,
        fallback: Any = MISSING,
    ) -> ThemeResult[Any]:
        if theme is None:
            return _missing_theme()
        theme_id = getattr(getattr(theme, "data", None), "id", None)
        context = {"theme_id": theme_id, "selector": enum_value(selector)}
        self._diagnostics.debug(COMPONENT, operation, "Resolving", context)

        if not isinstance(theme, Theme):
            result: ThemeResult[Any] = ThemeResult.fail(
                f"Expected a Theme, got {type(theme).__name__}", ErrorCode.INVALID_ARGUMENT
            )
        else:
            try:
                result = accessor(theme)
            except Exception as exc:
                self._diagnostics.error(
                    COMPONENT, operation, "Error resolving", {**context, "error": str(exc)}
                )
                result = ThemeResult.from_exception(f"Error in {operation}", exc)

        if not result.success and fallback is not MISSING:
            self._diagnostics.debug(
                COMPONENT, operation, "Using fallback", {**context, "reason": result.error}
            )
            return ThemeResult.ok(fallback)
        return result


def _missing_theme() -> ThemeResult[Any]:
    return ThemeResult.fail("Theme is required", ErrorCode.INVALID_ARGUMENT)


def _root_tree(theme: Theme) -> dict[str, Any]:
    return {group: getattr(theme, group) for group in PROPERTY_GROUPS if group != "responsive"}


def _resolve_path(tree: Any, path: str, label: str) -> ThemeResult[Any]:
    if not isinstance(path, str) or not path:
        return ThemeResult.fail(f"{label} path is required and must be a string", ErrorCode.INVALID_ARGUMENT)
    found, value = lookup(tree, path)
    if not found or value is None:
        return ThemeResult.fail(f"{label} not found: {path}", ErrorCode.NOT_FOUND)
    return ThemeResult.ok(value)
