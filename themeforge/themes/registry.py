"""In-memory theme registry indexed by id, name, type and variant."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from themeforge.diagnostics import Diagnostics
from themeforge.errors import ErrorCode
from themeforge.themes.constants import REQUIRED_PROPERTY_GROUPS
from themeforge.themes.models import (
    RegistrationAction,
    RegistrationRecord,
    RegistryStatistics,
    ThemeType,
    ThemeVariant,
    enum_value,
)
from themeforge.themes.result import ThemeResult
from themeforge.themes.theme import Theme

COMPONENT = "ThemeRegistry"

ThemeFilter = Callable[[Theme], bool]


class ThemeRegistry:
    """Stores themes and keeps four indexes consistent.

    Every registered theme has one entry in the id store, one in the name
    index, and one membership in each of its type and variant index buckets.
    Mutations hold an internal lock, so the name check and the four inserts
    are atomic to other threads.
    """

    def __init__(self, diagnostics: Diagnostics | None = None) -> None:
        self._diagnostics = diagnostics or Diagnostics()
        self._lock = threading.RLock()
        self._themes: dict[str, Theme] = {}
        self._themes_by_name: dict[str, Theme] = {}
        # Buckets are id-keyed dicts so enumeration follows insertion order.
        self._themes_by_type: dict[str, dict[str, Theme]] = {}
        self._themes_by_variant: dict[str, dict[str, Theme]] = {}
        self._history: list[RegistrationRecord] = []
        self._diagnostics.info(COMPONENT, "__init__", "Theme registry initialized")

    def __len__(self) -> int:
        return len(self._themes)

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._themes

    # -- mutation --

    def register_theme(self, theme: Theme) -> ThemeResult[None]:
        """Validate and index a theme; duplicate ids or names are rejected."""
        if theme is None:
            return ThemeResult.fail("Theme is required", ErrorCode.INVALID_ARGUMENT)
        if not isinstance(theme, Theme):
            return ThemeResult.fail(
                f"Expected a Theme, got {type(theme).__name__}", ErrorCode.INVALID_ARGUMENT
            )
        theme_id = getattr(theme.data, "id", None)
        try:
            self._diagnostics.info(
                COMPONENT,
                "register_theme",
                "Registering theme",
                {"theme_id": theme_id, "theme_name": getattr(theme.data, "name", None)},
            )
            problems = validate_theme(theme)
            if problems:
                return ThemeResult.fail(
                    f"Theme validation failed: {problems[0]}", ErrorCode.VALIDATION_FAILED
                )

            with self._lock:
                if theme.id in self._themes:
                    return ThemeResult.fail(
                        f"Theme with ID {theme.id!r} is already registered",
                        ErrorCode.DUPLICATE_ID,
                    )
                existing = self._themes_by_name.get(theme.name)
                if existing is not None and existing.id != theme.id:
                    return ThemeResult.fail(
                        f"Theme name {theme.name!r} is already used by theme {existing.id!r}",
                        ErrorCode.DUPLICATE_NAME,
                    )

                self._themes[theme.id] = theme
                self._themes_by_name[theme.name] = theme
                self._themes_by_type.setdefault(enum_value(theme.type), {})[theme.id] = theme
                self._themes_by_variant.setdefault(enum_value(theme.variant), {})[theme.id] = theme
                self._record(theme, "register")
                total = len(self._themes)

            self._diagnostics.info(
                COMPONENT,
                "register_theme",
                "Theme registered successfully",
                {"theme_id": theme.id, "total_themes": total},
            )
            return ThemeResult.ok()
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._diagnostics.error(
                COMPONENT, "register_theme", "Error registering theme",
                {"theme_id": theme_id, "error": str(exc)},
            )
            return ThemeResult.from_exception("Error registering theme", exc)

    def register_themes(self, themes: Iterable[Theme]) -> ThemeResult[None]:
        """Register themes in order, stopping at the first failure."""
        for theme in themes:
            result = self.register_theme(theme)
            if not result.success:
                return result
        return ThemeResult.ok()

    def unregister_theme(self, theme_id: str) -> ThemeResult[bool]:
        """Remove a theme from every index. ``False`` means nothing was registered."""
        if not isinstance(theme_id, str) or not theme_id:
            return ThemeResult.fail(
                "Theme ID is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        try:
            self._diagnostics.info(
                COMPONENT, "unregister_theme", "Unregistering theme", {"theme_id": theme_id}
            )
            with self._lock:
                theme = self._themes.get(theme_id)
                if theme is None:
                    self._diagnostics.warning(
                        COMPONENT, "unregister_theme", "Theme not found", {"theme_id": theme_id}
                    )
                    return ThemeResult.ok(False)

                del self._themes[theme_id]
                if self._themes_by_name.get(theme.name) is theme:
                    del self._themes_by_name[theme.name]
                _discard(self._themes_by_type, enum_value(theme.type), theme_id)
                _discard(self._themes_by_variant, enum_value(theme.variant), theme_id)
                self._record(theme, "unregister")
                total = len(self._themes)

            self._diagnostics.info(
                COMPONENT,
                "unregister_theme",
                "Theme unregistered successfully",
                {"theme_id": theme_id, "total_themes": total},
            )
            return ThemeResult.ok(True)
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._diagnostics.error(
                COMPONENT, "unregister_theme", "Error unregistering theme",
                {"theme_id": theme_id, "error": str(exc)},
            )
            return ThemeResult.from_exception("Error unregistering theme", exc)

    def clear(self) -> None:
        """Drop every theme, index entry and history record."""
        with self._lock:
            self._diagnostics.info(
                COMPONENT, "clear", "Clearing all themes", {"total_themes": len(self._themes)}
            )
            self._themes.clear()
            self._themes_by_name.clear()
            self._themes_by_type.clear()
            self._themes_by_variant.clear()
            self._history.clear()

    # -- lookup --

    def get_theme(self, theme_id: str) -> ThemeResult[Theme | None]:
        if not isinstance(theme_id, str) or not theme_id:
            return ThemeResult.fail(
                "Theme ID is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        theme = self._themes.get(theme_id)
        self._diagnostics.debug(
            COMPONENT, "get_theme", "Theme found" if theme else "Theme not found", {"theme_id": theme_id}
        )
        return ThemeResult.ok(theme)

    def get_theme_by_name(self, name: str) -> ThemeResult[Theme | None]:
        if not isinstance(name, str) or not name:
            return ThemeResult.fail(
                "Theme name is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        theme = self._themes_by_name.get(name)
        self._diagnostics.debug(
            COMPONENT,
            "get_theme_by_name",
            "Theme found" if theme else "Theme not found",
            {"theme_name": name},
        )
        return ThemeResult.ok(theme)

    def get_themes(self, theme_filter: ThemeFilter | None = None) -> ThemeResult[list[Theme]]:
        """Return all themes, or those accepted by ``theme_filter``."""
        if theme_filter is not None and not callable(theme_filter):
            return ThemeResult.fail("Filter must be a function", ErrorCode.INVALID_ARGUMENT)
        try:
            with self._lock:
                themes = list(self._themes.values())
            if theme_filter is not None:
                themes = [theme for theme in themes if theme_filter(theme)]
            self._diagnostics.debug(
                COMPONENT,
                "get_themes",
                "Returning themes",
                {"has_filter": theme_filter is not None, "count": len(themes)},
            )
            return ThemeResult.ok(themes)
        except Exception as exc:
            self._diagnostics.error(
                COMPONENT, "get_themes", "Error getting themes", {"error": str(exc)}
            )
            return ThemeResult.from_exception("Error getting themes", exc)

    def get_themes_by_type(self, theme_type: ThemeType | str) -> ThemeResult[list[Theme]]:
        return self._bucket("get_themes_by_type", "Theme type", self._themes_by_type, theme_type)

    def get_themes_by_variant(self, variant: ThemeVariant | str) -> ThemeResult[list[Theme]]:
        return self._bucket(
            "get_themes_by_variant", "Theme variant", self._themes_by_variant, variant
        )

    def get_opposite_theme(self, theme_id: str) -> ThemeResult[Theme | None]:
        """Return the registered counterpart of ``theme_id``, if any."""
        found = self.get_theme(theme_id)
        if not found.success:
            return found
        if found.data is None:
            return ThemeResult.fail(f"Theme not found: {theme_id}", ErrorCode.NOT_FOUND)
        opposite_id = found.data.get_opposite_theme()
        if not opposite_id.success:
            return ThemeResult(success=False, error=opposite_id.error, code=opposite_id.code)
        if not opposite_id.data:
            return ThemeResult.ok(None)
        return ThemeResult.ok(self._themes.get(opposite_id.data))

    def get_active_themes(self) -> ThemeResult[list[Theme]]:
        return self.get_themes(lambda theme: bool(theme.is_active))

    def get_inactive_themes(self) -> ThemeResult[list[Theme]]:
        return self.get_themes(lambda theme: not theme.is_active)

    def get_themes_supporting_dark_mode(self) -> ThemeResult[list[Theme]]:
        return self.get_themes(lambda theme: bool(theme.supports_dark_mode))

    # -- utility reads --

    def theme_count(self) -> int:
        return len(self._themes)

    def all_theme_ids(self) -> list[str]:
        return list(self._themes.keys())

    def all_theme_names(self) -> list[str]:
        return list(self._themes_by_name.keys())

    def has_theme(self, theme_id: str) -> bool:
        return theme_id in self._themes

    def has_theme_name(self, name: str) -> bool:
        return name in self._themes_by_name

    def statistics(self) -> RegistryStatistics:
        with self._lock:
            return RegistryStatistics(
                total_themes=len(self._themes),
                themes_by_type={key: len(bucket) for key, bucket in self._themes_by_type.items()},
                themes_by_variant={
                    key: len(bucket) for key, bucket in self._themes_by_variant.items()
                },
                registration_history=len(self._history),
            )

    def registration_history(self) -> list[RegistrationRecord]:
        with self._lock:
            return list(self._history)

    # -- internals --

    def _bucket(
        self,
        operation: str,
        label: str,
        index: Mapping[str, Mapping[str, Theme]],
        key: Any,
    ) -> ThemeResult[list[Theme]]:
        raw = enum_value(key)
        if not isinstance(raw, str) or not raw:
            return ThemeResult.fail(
                f"{label} is required and must be a string", ErrorCode.INVALID_ARGUMENT
            )
        with self._lock:
            themes = list(index.get(raw, {}).values())
        self._diagnostics.debug(
            COMPONENT, operation, "Themes found", {"key": raw, "count": len(themes)}
        )
        return ThemeResult.ok(themes)

    def _record(self, theme: Theme, action: RegistrationAction) -> None:
        self._history.append(
            RegistrationRecord(theme=theme, timestamp=datetime.now(timezone.utc), action=action)
        )


def validate_theme(theme: Theme) -> list[str]:
    """Return registration problems for ``theme``; empty means it may be registered."""
    data = theme.data
    props = theme.properties
    problems: list[str] = []
    for field in ("id", "name", "display_name"):
        value = getattr(data, field, None)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"Theme {field} is required and must be a string")
    if not isinstance(getattr(data, "type", None), ThemeType):
        problems.append("Theme type is required and must be a ThemeType")
    if not isinstance(getattr(data, "variant", None), ThemeVariant):
        problems.append("Theme variant is required and must be a ThemeVariant")
    for flag in ("is_active", "supports_dark_mode"):
        if not isinstance(getattr(data, flag, None), bool):
            problems.append(f"Theme {flag} must be a boolean")
    for group in REQUIRED_PROPERTY_GROUPS:
        if not isinstance(getattr(props, group, None), Mapping):
            problems.append(f"Theme {group} is required")
    return problems


def _discard(index: dict[str, dict[str, Theme]], key: str, theme_id: str) -> None:
    bucket = index.get(key)
    if bucket is None:
        return
    bucket.pop(theme_id, None)
    if not bucket:
        del index[key]
