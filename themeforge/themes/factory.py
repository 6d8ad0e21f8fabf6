"""Theme construction from value objects or plain configuration mappings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from themeforge.diagnostics import Diagnostics
from themeforge.errors import ErrorCode
from themeforge.themes.constants import (
    DEFAULT_THEME_VERSION,
    IDENTITY_FIELDS,
    METADATA_TIMESTAMP_KEYS,
    PROPERTY_GROUPS,
    REQUIRED_PROPERTY_GROUPS,
)
from themeforge.themes.defaults import default_properties
from themeforge.themes.models import (
    ThemeData,
    ThemeProperties,
    ThemeType,
    ThemeValidationError,
    ThemeVariant,
)
from themeforge.themes.registry import validate_theme
from themeforge.themes.result import ThemeResult
from themeforge.themes.theme import Theme
from themeforge.themes.tree import deep_clone, deep_merge

COMPONENT = "ThemeFactory"

_WRAPPER_KEYS = {"theme", "metadata"}
_MAX_ID_LEN = 64
_MAX_SHORT_FIELD_LEN = 120


class ThemeFactory:
    """Build validated Theme instances."""

    def __init__(self, diagnostics: Diagnostics | None = None) -> None:
        self._diagnostics = diagnostics or Diagnostics()

    def create_theme(self, data: ThemeData, properties: ThemeProperties) -> ThemeResult[Theme]:
        """Wrap identity and properties in a Theme, rejecting anything unregistrable."""
        if not isinstance(data, ThemeData) or not isinstance(properties, ThemeProperties):
            return ThemeResult.fail(
                "create_theme expects ThemeData and ThemeProperties", ErrorCode.INVALID_ARGUMENT
            )
        theme = Theme(data, properties, diagnostics=self._diagnostics)
        problems = validate_theme(theme)
        if problems:
            self._diagnostics.warning(
                COMPONENT, "create_theme", "Theme rejected", {"theme_id": data.id, "problems": problems}
            )
            return ThemeResult.fail(
                f"Theme validation failed: {'; '.join(problems)}", ErrorCode.VALIDATION_FAILED
            )
        self._diagnostics.debug(COMPONENT, "create_theme", "Theme created", {"theme_id": data.id})
        return ThemeResult.ok(theme)

    def create_from_config(
        self, config: Mapping[str, Any], *, apply_defaults: bool = True
    ) -> ThemeResult[Theme]:
        """Build a theme from ``{"theme": {...}, "metadata": {...}}`` or a flat mapping.

        Supplied property groups are deep-merged over the default trees, so a
        config only needs to name what it changes. With ``apply_defaults``
        off the groups are taken as given, which is what bundle import needs.
        """
        if not isinstance(config, Mapping):
            return ThemeResult.fail("Theme config must be a mapping", ErrorCode.INVALID_ARGUMENT)
        try:
            data, properties = _parse_config(config, apply_defaults=apply_defaults)
        except ThemeValidationError as exc:
            self._diagnostics.warning(
                COMPONENT, "create_from_config", "Invalid theme config", {"error": str(exc)}
            )
            return ThemeResult.fail(str(exc), ErrorCode.VALIDATION_FAILED)
        except Exception as exc:  # pragma: no cover - defensive boundary
            self._diagnostics.error(
                COMPONENT, "create_from_config", "Error building theme", {"error": str(exc)}
            )
            return ThemeResult.from_exception("Error creating theme from config", exc)
        return self.create_theme(data, properties)


def _parse_config(
    config: Mapping[str, Any], *, apply_defaults: bool
) -> tuple[ThemeData, ThemeProperties]:
    wrapper_meta: Mapping[str, Any] = {}
    if isinstance(config.get("theme"), Mapping):
        unknown = sorted(str(key) for key in config if key not in _WRAPPER_KEYS)
        if unknown:
            raise ThemeValidationError(f"Theme config: unsupported keys found: {', '.join(unknown)}")
        wrapper_meta = _optional_mapping(config, "metadata")
        body: Mapping[str, Any] = config["theme"]
    else:
        body = config

    unknown = sorted(
        str(key) for key in body if key not in IDENTITY_FIELDS and key not in PROPERTY_GROUPS
    )
    if unknown:
        raise ThemeValidationError(f"Theme config: unsupported keys found: {', '.join(unknown)}")

    strict = apply_defaults
    theme_id = _required_str(body, "id", max_len=_MAX_ID_LEN, strict=strict)
    name = _required_str(body, "name", max_len=_MAX_SHORT_FIELD_LEN, strict=strict)
    theme_type = _enum_field(body, "type", ThemeType, default=None)
    variant = _enum_field(body, "variant", ThemeVariant, default=ThemeVariant.DEFAULT)

    version = _first_present(body.get("version"), wrapper_meta.get("version"), strict=strict)
    if version is None and apply_defaults:
        version = DEFAULT_THEME_VERSION
    author = _first_present(body.get("author"), wrapper_meta.get("author"), strict=strict)
    tags = body.get("tags") or ()
    if isinstance(tags, str) or not isinstance(tags, (list, tuple)):
        raise ThemeValidationError("Theme config: field 'tags' must be a list of strings")

    data = ThemeData(
        id=theme_id,
        name=name,
        display_name=_display_name(body, name, strict=strict),
        type=theme_type,
        variant=variant,
        is_active=_bool_field(body, "is_active"),
        supports_dark_mode=_bool_field(body, "supports_dark_mode"),
        description=_optional_str(body, "description", strict=strict),
        opposite_theme=_optional_str(body, "opposite_theme", strict=strict),
        version=str(version) if version is not None else None,
        author=str(author) if author is not None else None,
        tags=tuple(str(tag) for tag in tags),
    )

    defaults = default_properties() if apply_defaults else None
    groups: dict[str, Any] = {}
    for group in PROPERTY_GROUPS:
        base = getattr(defaults, group) if defaults is not None else None
        supplied = body.get(group)
        if supplied is None:
            groups[group] = base
            continue
        if not isinstance(supplied, Mapping):
            raise ThemeValidationError(f"Theme config: group {group!r} must be a mapping")
        if base is None:
            groups[group] = deep_clone(supplied)
        else:
            groups[group] = deep_merge(base, deep_clone(supplied))

    if apply_defaults:
        metadata = dict(groups.get("metadata") or {})
        for key, value in wrapper_meta.items():
            metadata.setdefault(key, value)
        now = datetime.now(timezone.utc)
        for key in METADATA_TIMESTAMP_KEYS:
            metadata.setdefault(key, now)
        metadata.setdefault("version", data.version)
        if data.author is not None:
            metadata.setdefault("author", data.author)
        groups["metadata"] = metadata

    for group in REQUIRED_PROPERTY_GROUPS:
        if not isinstance(groups.get(group), Mapping):
            raise ThemeValidationError(f"Theme config: group {group!r} is required")
    return data, ThemeProperties(**groups)


def _required_str(data: Mapping[str, Any], key: str, *, max_len: int, strict: bool = True) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ThemeValidationError(f"Theme config: field {key!r} must be a non-empty string")
    if not strict:
        # Imported values already passed registration; keep them exactly.
        return value
    cleaned = value.strip()
    if len(cleaned) > max_len:
        raise ThemeValidationError(f"Theme config: field {key!r} exceeds max length {max_len}")
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise ThemeValidationError(f"Theme config: field {key!r} must be a single line string")
    return cleaned


def _optional_str(data: Mapping[str, Any], key: str, *, strict: bool = True) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ThemeValidationError(f"Theme config: field {key!r} must be a string")
    if not strict:
        return value
    return value.strip() or None


def _display_name(data: Mapping[str, Any], name: str, *, strict: bool) -> str:
    value = _optional_str(data, "display_name", strict=strict)
    return name if value is None else value


def _first_present(*values: Any, strict: bool) -> Any:
    for value in values:
        if value is None:
            continue
        if strict and not value:
            continue
        return value
    return None


def _optional_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ThemeValidationError(f"Theme config: {key!r} must be a mapping")
    return value


def _bool_field(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ThemeValidationError(f"Theme config: field {key!r} must be a boolean")
    return value


def _enum_field(data: Mapping[str, Any], key: str, enum_type: Any, *, default: Any) -> Any:
    raw = data.get(key)
    if raw is None:
        if default is None:
            raise ThemeValidationError(f"Theme config: field {key!r} is required")
        return default
    try:
        return enum_type(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ThemeValidationError(
            f"Theme config: field {key!r} must be one of {allowed}, got {raw!r}"
        ) from None
