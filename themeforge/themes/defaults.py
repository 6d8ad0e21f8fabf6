"""Default property trees and the built-in material themes."""

from __future__ import annotations

from typing import Any

from themeforge.diagnostics import Diagnostics
from themeforge.themes.constants import DEFAULT_DARK_THEME_ID, DEFAULT_THEME_ID, DEFAULT_THEME_VERSION
from themeforge.themes.models import ThemeData, ThemeProperties, ThemeType, ThemeVariant
from themeforge.themes.theme import Theme
from themeforge.themes.tree import deep_clone, deep_merge

DEFAULT_COLORS: dict[str, Any] = {
    "primary": {"main": "#1976d2", "light": "#42a5f5", "dark": "#1565c0", "contrast": "#ffffff"},
    "secondary": {"main": "#9c27b0", "light": "#ba68c8", "dark": "#7b1fa2", "contrast": "#ffffff"},
    "background": {"default": "#ffffff", "paper": "#f5f5f5", "elevated": "#ffffff"},
    "text": {"primary": "#212121", "secondary": "#757575", "disabled": "#bdbdbd", "hint": "#9e9e9e"},
    "status": {
        "success": "#2e7d32",
        "warning": "#ed6c02",
        "error": "#d32f2f",
        "info": "#0288d1",
    },
    "ui": {"border": "#e0e0e0", "divider": "#e0e0e0", "overlay": "rgba(0, 0, 0, 0.5)"},
    "semantic": {},
}

DEFAULT_TYPOGRAPHY: dict[str, Any] = {
    "font_family": {
        "primary": "Roboto, Helvetica, Arial, sans-serif",
        "monospace": "Roboto Mono, Consolas, monospace",
    },
    "font_size": {
        "xs": 12,
        "sm": 14,
        "base": 16,
        "lg": 18,
        "xl": 20,
        "2xl": 24,
        "3xl": 30,
        "4xl": 36,
    },
    "font_weight": {"light": 300, "normal": 400, "medium": 500, "bold": 700},
    "line_height": {"tight": 1.25, "normal": 1.5, "relaxed": 1.75},
    "letter_spacing": {"tight": -0.5, "normal": 0, "wide": 0.5},
}

DEFAULT_SPACING: dict[str, Any] = {
    "base": 8,
    "scale": {"xs": 4, "sm": 8, "md": 16, "lg": 24, "xl": 32, "2xl": 48, "3xl": 64},
}

DEFAULT_BORDER_RADIUS: dict[str, Any] = {
    "none": 0,
    "sm": 2,
    "base": 4,
    "md": 6,
    "lg": 8,
    "xl": 12,
    "full": 9999,
}

DEFAULT_SHADOWS: dict[str, Any] = {
    "none": "none",
    "sm": "0 1px 2px rgba(0, 0, 0, 0.05)",
    "base": "0 1px 3px rgba(0, 0, 0, 0.12), 0 1px 2px rgba(0, 0, 0, 0.24)",
    "md": "0 4px 6px rgba(0, 0, 0, 0.1)",
    "lg": "0 10px 15px rgba(0, 0, 0, 0.1)",
    "xl": "0 20px 25px rgba(0, 0, 0, 0.15)",
}

DEFAULT_ANIMATION: dict[str, Any] = {
    "duration": {"fast": 150, "normal": 300, "slow": 500, "very_slow": 1000},
    "easing": {
        "linear": "linear",
        "ease_in": "cubic-bezier(0.4, 0, 1, 1)",
        "ease_out": "cubic-bezier(0, 0, 0.2, 1)",
        "ease_in_out": "cubic-bezier(0.4, 0, 0.2, 1)",
    },
    "properties": ["opacity", "transform", "background-color", "color"],
}

DEFAULT_BREAKPOINTS: dict[str, Any] = {
    "xs": 0,
    "sm": 576,
    "md": 768,
    "lg": 992,
    "xl": 1200,
    "2xl": 1400,
}

_DARK_COLORS: dict[str, Any] = {
    "primary": {"main": "#90caf9", "light": "#e3f2fd", "dark": "#42a5f5", "contrast": "#0d1b2a"},
    "secondary": {"main": "#ce93d8", "light": "#f3e5f5", "dark": "#ab47bc", "contrast": "#1a0d1f"},
    "background": {"default": "#121212", "paper": "#1e1e1e", "elevated": "#2c2c2c"},
    "text": {"primary": "#ffffff", "secondary": "#b0b0b0", "disabled": "#6b6b6b", "hint": "#808080"},
    "ui": {"border": "#333333", "divider": "#333333", "overlay": "rgba(0, 0, 0, 0.7)"},
}


def default_properties() -> ThemeProperties:
    """Return a fresh copy of the default property trees."""
    return ThemeProperties(
        colors=deep_clone(DEFAULT_COLORS),
        typography=deep_clone(DEFAULT_TYPOGRAPHY),
        spacing=deep_clone(DEFAULT_SPACING),
        border_radius=deep_clone(DEFAULT_BORDER_RADIUS),
        shadows=deep_clone(DEFAULT_SHADOWS),
        animation=deep_clone(DEFAULT_ANIMATION),
        breakpoints=deep_clone(DEFAULT_BREAKPOINTS),
        theme_classes={},
        custom={},
    )


def builtin_theme_specs() -> list[tuple[ThemeData, ThemeProperties]]:
    """Identity and properties of the bundled light and dark themes."""
    light_props = default_properties()
    dark_defaults = default_properties()
    dark_props = ThemeProperties(
        colors=deep_merge(dark_defaults.colors, _DARK_COLORS),
        typography=dark_defaults.typography,
        spacing=dark_defaults.spacing,
        border_radius=dark_defaults.border_radius,
        shadows=dark_defaults.shadows,
        animation=dark_defaults.animation,
        breakpoints=dark_defaults.breakpoints,
        theme_classes=dark_defaults.theme_classes,
        custom=dark_defaults.custom,
    )
    light = ThemeData(
        id=DEFAULT_THEME_ID,
        name="Material Light",
        display_name="Material Light",
        type=ThemeType.MATERIAL,
        variant=ThemeVariant.DEFAULT,
        supports_dark_mode=True,
        description="Material palette on a light background.",
        opposite_theme=DEFAULT_DARK_THEME_ID,
        version=DEFAULT_THEME_VERSION,
        author="ThemeForge",
        tags=("builtin", "light"),
    )
    dark = ThemeData(
        id=DEFAULT_DARK_THEME_ID,
        name="Material Dark",
        display_name="Material Dark",
        type=ThemeType.MATERIAL,
        variant=ThemeVariant.DEFAULT,
        supports_dark_mode=True,
        description="Material palette on a dark background.",
        opposite_theme=DEFAULT_THEME_ID,
        version=DEFAULT_THEME_VERSION,
        author="ThemeForge",
        tags=("builtin", "dark"),
    )
    return [(light, light_props), (dark, dark_props)]


def builtin_themes(diagnostics: Diagnostics | None = None) -> list[Theme]:
    """Return new instances of the bundled themes."""
    return [
        Theme(data, properties, diagnostics=diagnostics)
        for data, properties in builtin_theme_specs()
    ]
