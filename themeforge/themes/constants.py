"""Theme framework constants."""

from __future__ import annotations

DEFAULT_THEME_ID = "material-light"
DEFAULT_DARK_THEME_ID = "material-dark"
BUNDLE_SCHEMA_VERSION = "1.0.0"
DEFAULT_THEME_VERSION = "1.0.0"

REQUIRED_PROPERTY_GROUPS: tuple[str, ...] = (
    "colors",
    "typography",
    "spacing",
    "border_radius",
    "shadows",
    "animation",
    "breakpoints",
)

OPTIONAL_PROPERTY_GROUPS: tuple[str, ...] = (
    "theme_classes",
    "custom",
    "metadata",
    "responsive",
)

PROPERTY_GROUPS: tuple[str, ...] = REQUIRED_PROPERTY_GROUPS + OPTIONAL_PROPERTY_GROUPS

IDENTITY_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "display_name",
    "description",
    "type",
    "variant",
    "is_active",
    "supports_dark_mode",
    "opposite_theme",
    "version",
    "author",
    "tags",
)

# Groups listed by ThemePropertyResolver.get_available_properties.
INTROSPECTED_GROUPS: tuple[str, ...] = REQUIRED_PROPERTY_GROUPS + ("theme_classes", "custom")

RECOMMENDED_COLOR_GROUPS: tuple[str, ...] = ("primary", "background", "text")
RECOMMENDED_TYPOGRAPHY_KEYS: tuple[str, ...] = ("font_size", "font_family")

METADATA_TIMESTAMP_KEYS: tuple[str, ...] = ("created_at", "updated_at")

BUNDLE_FORMATS: tuple[str, ...] = ("json", "yaml")
