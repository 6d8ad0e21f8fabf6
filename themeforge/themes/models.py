"""Theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, Mapping

if TYPE_CHECKING:
    from themeforge.themes.theme import Theme

PropertyTree = Mapping[str, Any]


class ThemeValidationError(ValueError):
    """Raised when a theme configuration fails validation."""


class ThemeType(str, Enum):
    """Theme category."""

    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"
    MATERIAL = "material"
    CUSTOM = "custom"


class ThemeVariant(str, Enum):
    """Semantic style role of a theme, orthogonal to its category."""

    DEFAULT = "default"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class BreakpointName(str, Enum):
    """Named viewport width thresholds."""

    XS = "xs"
    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"
    XXL = "2xl"


@dataclass(frozen=True, slots=True)
class ThemeData:
    """Identity and descriptive metadata of a theme."""

    id: str
    name: str
    display_name: str
    type: ThemeType
    variant: ThemeVariant = ThemeVariant.DEFAULT
    is_active: bool = False
    supports_dark_mode: bool = False
    description: str | None = None
    opposite_theme: str | None = None
    version: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ThemeProperties:
    """Style property trees of a theme.

    Each group is a nested mapping of plain data: strings, numbers, booleans,
    dates, lists and further mappings. The seven leading groups are mandatory
    for registration; the constructor does not enforce that.
    """

    colors: PropertyTree
    typography: PropertyTree
    spacing: PropertyTree
    border_radius: PropertyTree
    shadows: PropertyTree
    animation: PropertyTree
    breakpoints: PropertyTree
    theme_classes: PropertyTree | None = None
    custom: PropertyTree | None = None
    metadata: PropertyTree | None = None
    responsive: PropertyTree | None = None


RegistrationAction = Literal["register", "unregister"]


@dataclass(frozen=True, slots=True)
class RegistrationRecord:
    """One entry of the registry history log."""

    theme: Theme
    timestamp: datetime
    action: RegistrationAction


@dataclass(frozen=True, slots=True)
class RegistryStatistics:
    """Snapshot of registry counts."""

    total_themes: int
    themes_by_type: dict[str, int]
    themes_by_variant: dict[str, int]
    registration_history: int


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Structural audit of a theme's property trees."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def enum_value(value: Any) -> Any:
    """Return ``value.value`` for enum members, otherwise ``value`` unchanged."""
    return value.value if isinstance(value, Enum) else value
