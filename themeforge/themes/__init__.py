"""Theme framework exports."""

from themeforge.themes.constants import DEFAULT_DARK_THEME_ID, DEFAULT_THEME_ID
from themeforge.themes.factory import ThemeFactory
from themeforge.themes.models import (
    BreakpointName,
    ThemeData,
    ThemeProperties,
    ThemeType,
    ThemeValidationError,
    ThemeVariant,
    ValidationReport,
)
from themeforge.themes.registry import ThemeRegistry
from themeforge.themes.resolver import ThemePropertyResolver
from themeforge.themes.result import ThemeResult
from themeforge.themes.service import ThemeService
from themeforge.themes.theme import Theme

__all__ = [
    "DEFAULT_DARK_THEME_ID",
    "DEFAULT_THEME_ID",
    "BreakpointName",
    "Theme",
    "ThemeData",
    "ThemeFactory",
    "ThemeProperties",
    "ThemePropertyResolver",
    "ThemeRegistry",
    "ThemeResult",
    "ThemeService",
    "ThemeType",
    "ThemeValidationError",
    "ThemeVariant",
    "ValidationReport",
]
