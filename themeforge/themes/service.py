"""Theme selection and persistence service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from themeforge.config.settings import AppSettings
from themeforge.diagnostics import Diagnostics, configure_logging
from themeforge.errors import ErrorCode
from themeforge.themes.bundle import discover_bundles, write_bundle
from themeforge.themes.constants import DEFAULT_THEME_ID
from themeforge.themes.defaults import builtin_themes
from themeforge.themes.registry import ThemeRegistry
from themeforge.themes.resolver import MISSING, ThemePropertyResolver
from themeforge.themes.result import ThemeResult
from themeforge.themes.theme import Theme

COMPONENT = "ThemeService"


class ThemeService:
    """Load themes into a registry, track the active one and persist the choice."""

    def __init__(
        self,
        settings: AppSettings,
        registry: ThemeRegistry,
        resolver: ThemePropertyResolver | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry
        self._diagnostics = diagnostics or Diagnostics()
        self._resolver = resolver or ThemePropertyResolver(self._diagnostics)
        self._active_theme_id = ""
        self._builtin_ids: set[str] = set()

    @property
    def registry(self) -> ThemeRegistry:
        return self._registry

    @property
    def active_theme_id(self) -> str:
        return self._active_theme_id

    @property
    def active_theme(self) -> Theme | None:
        if not self._active_theme_id:
            return None
        return self._registry.get_theme(self._active_theme_id).data

    @property
    def user_themes_dir(self) -> Path:
        return Path(self._settings.user_themes_dir)

    def reload_themes(self, *, include_user: bool = True) -> list[str]:
        """Rebuild the registry from built-ins and user bundles; return load errors."""
        self._registry.clear()
        errors: list[str] = []
        self._builtin_ids = set()
        for theme in builtin_themes(self._diagnostics):
            result = self._registry.register_theme(theme)
            if result.success:
                self._builtin_ids.add(theme.id)
            else:
                errors.append(f"Built-in theme {theme.id!r}: {result.error}")

        if include_user:
            themes, load_errors = discover_bundles(self.user_themes_dir, diagnostics=self._diagnostics)
            errors.extend(load_errors)
            for theme in themes:
                if theme.id in self._builtin_ids:
                    errors.append(f"User theme {theme.id!r} may not replace a built-in theme; skipping.")
                    continue
                result = self._registry.register_theme(theme)
                if not result.success:
                    errors.append(f"User theme {theme.id!r}: {result.error}")

        if self._active_theme_id and not self._registry.has_theme(self._active_theme_id):
            self._active_theme_id = ""
        self._diagnostics.info(
            COMPONENT,
            "reload_themes",
            "Themes reloaded",
            {"theme_count": self._registry.theme_count(), "errors": len(errors)},
        )
        return errors

    def available_themes(self) -> list[Theme]:
        themes = self._registry.get_themes().data or []
        return sorted(themes, key=lambda theme: (0 if theme.id in self._builtin_ids else 1, theme.name.lower()))

    def activate_theme(self, theme_id: str, *, persist: bool = True) -> ThemeResult[Theme]:
        found = self._registry.get_theme(theme_id)
        if not found.success:
            return ThemeResult.fail(found.error or "Invalid theme id", found.code or ErrorCode.INVALID_ARGUMENT)
        theme = found.data
        if theme is None:
            return ThemeResult.fail(f"Theme not found: {theme_id}", ErrorCode.NOT_FOUND)

        self._active_theme_id = theme.id
        if persist:
            self._settings.theme_id = theme.id
        self._settings.theme_last_known_good_id = theme.id
        self._diagnostics.info(
            COMPONENT, "activate_theme", "Activated theme", {"theme_id": theme.id, "persist": persist}
        )
        return ThemeResult.ok(theme)

    def apply_startup_theme(self) -> ThemeResult[Theme]:
        requested = self._settings.theme_id
        fallback = self._settings.theme_last_known_good_id
        candidates = [requested, fallback, DEFAULT_THEME_ID]
        seen: set[str] = set()

        for candidate in candidates:
            if not candidate or candidate in seen:
                continue
            seen.add(candidate)
            result = self.activate_theme(candidate, persist=True)
            if result.success:
                return result
            self._diagnostics.warning(
                COMPONENT, "apply_startup_theme", "Startup candidate unavailable", {"theme_id": candidate}
            )
        return ThemeResult.fail(
            "No registered theme is available for startup", ErrorCode.NOT_FOUND
        )

    def toggle_dark_mode(self) -> ThemeResult[Theme]:
        """Switch to the active theme's light/dark counterpart."""
        active = self.active_theme
        if active is None:
            return ThemeResult.fail("No active theme", ErrorCode.NOT_FOUND)
        opposite = self._registry.get_opposite_theme(active.id)
        if not opposite.success:
            return ThemeResult.fail(opposite.error or "Opposite lookup failed", opposite.code or ErrorCode.OPERATION_FAILED)
        if opposite.data is None:
            return ThemeResult.fail(
                f"Theme {active.id!r} has no registered opposite theme", ErrorCode.NOT_FOUND
            )
        return self.activate_theme(opposite.data.id)

    def resolve_color(self, path: str, fallback: Any = MISSING) -> ThemeResult[str]:
        """Resolve a color from the active theme."""
        return self._resolver.resolve_color(self.active_theme, path, fallback)

    def configure_logging(self) -> logging.Logger:
        """Start the rotating log file in the configured directory and level."""
        return configure_logging(self._settings.log_dir, self._settings.log_level)

    def export_active_theme(
        self, directory: Path | str, *, exported_by: str = "themeforge"
    ) -> ThemeResult[Path]:
        """Write the active theme to ``directory`` as ``<id>.<export format>``."""
        active = self.active_theme
        if active is None:
            return ThemeResult.fail("No active theme", ErrorCode.NOT_FOUND)
        fmt = self._settings.export_format
        target = Path(directory) / f"{active.id}.{fmt}"
        result = write_bundle(
            active, target, exported_by=exported_by, fmt=fmt, diagnostics=self._diagnostics
        )
        if result.success:
            self._diagnostics.info(
                COMPONENT,
                "export_active_theme",
                "Exported active theme",
                {"theme_id": active.id, "path": str(target)},
            )
        return result
