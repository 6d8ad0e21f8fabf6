"""Shared theme builders for the test suite."""

from __future__ import annotations

from typing import Any

import pytest

from themeforge.diagnostics import RecordingDiagnostics
from themeforge.themes.models import ThemeData, ThemeProperties, ThemeType, ThemeVariant
from themeforge.themes.theme import Theme


def make_properties(**overrides: Any) -> ThemeProperties:
    values: dict[str, Any] = {
        "colors": {
            "primary": {"main": "#1976d2", "light": "#42a5f5", "dark": "#1565c0"},
            "background": {"default": "#ffffff"},
            "text": {"primary": "#212121"},
            "semantic": {"brand": {"primary": "#ff5722"}},
        },
        "typography": {
            "font_family": {"primary": "Roboto"},
            "font_size": {"sm": 14, "base": 16, "lg": 18},
        },
        "spacing": {"base": 8, "scale": {"xs": 4, "sm": 8, "md": 16, "zero": 0}},
        "border_radius": {"none": 0, "sm": 2, "md": 6},
        "shadows": {"none": "none", "md": "0 4px 6px rgba(0, 0, 0, 0.1)"},
        "animation": {
            "duration": {"fast": 150, "normal": 300},
            "easing": {"linear": "linear"},
            "properties": ["opacity", "transform"],
        },
        "breakpoints": {"xs": 0, "sm": 576, "md": 768},
        "theme_classes": {"card": {"padding": 16, "background": "#fafafa"}},
        "custom": {"brand": {"logo": {"width": 120}}},
    }
    values.update(overrides)
    return ThemeProperties(**values)


def make_data(**overrides: Any) -> ThemeData:
    values: dict[str, Any] = {
        "id": "t1",
        "name": "Test Theme",
        "display_name": "Test Theme",
        "type": ThemeType.MATERIAL,
        "variant": ThemeVariant.DEFAULT,
    }
    values.update(overrides)
    return ThemeData(**values)


def make_theme(diagnostics=None, properties: ThemeProperties | None = None, **data: Any) -> Theme:
    return Theme(make_data(**data), properties or make_properties(), diagnostics=diagnostics)


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture
def theme(diagnostics: RecordingDiagnostics) -> Theme:
    return make_theme(diagnostics)
