"""Theme bundle export, import and directory discovery."""

from __future__ import annotations

import json
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from themeforge.diagnostics import Diagnostics
from themeforge.errors import ErrorCode
from themeforge.themes.constants import (
    BUNDLE_FORMATS,
    BUNDLE_SCHEMA_VERSION,
    METADATA_TIMESTAMP_KEYS,
)
from themeforge.themes.factory import ThemeFactory
from themeforge.themes.models import ThemeValidationError
from themeforge.themes.result import ThemeResult
from themeforge.themes.theme import Theme

COMPONENT = "ThemeBundle"

_BUNDLE_KEYS = {"metadata", "theme", "dependencies", "custom"}
_BUNDLE_METADATA_KEYS = {"version", "exported_at", "exported_by"}
_DEPENDENCY_KEYS = {"themes", "breakpoints", "units"}
_BUNDLE_SUFFIXES = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_MAX_BUNDLE_BYTES = 256 * 1024
_MAX_BUNDLE_CANDIDATES = 200


def export_theme(
    theme: Theme,
    *,
    exported_by: str = "themeforge",
    fmt: str = "json",
    dependencies: Mapping[str, Any] | None = None,
    custom: Mapping[str, Any] | None = None,
    diagnostics: Diagnostics | None = None,
) -> ThemeResult[str]:
    """Serialize ``theme`` to a self-describing bundle document."""
    diag = diagnostics or Diagnostics()
    if not isinstance(theme, Theme):
        return ThemeResult.fail("A Theme is required for export", ErrorCode.INVALID_ARGUMENT)
    if fmt not in BUNDLE_FORMATS:
        return ThemeResult.fail(
            f"Unsupported bundle format {fmt!r}", ErrorCode.BUNDLE_UNSUPPORTED_FORMAT
        )
    try:
        bundle = _build_bundle(theme, exported_by, dependencies, custom)
        text = _dump(bundle, fmt)
    except ThemeValidationError as exc:
        return ThemeResult.fail(str(exc), ErrorCode.INVALID_ARGUMENT)
    except Exception as exc:
        diag.error(COMPONENT, "export_theme", "Error exporting theme", {"theme_id": theme.id, "error": str(exc)})
        return ThemeResult.from_exception("Error exporting theme", exc)
    diag.info(COMPONENT, "export_theme", "Theme exported", {"theme_id": theme.id, "format": fmt})
    return ThemeResult.ok(text)


def import_theme(
    text: str,
    fmt: str | None = None,
    *,
    diagnostics: Diagnostics | None = None,
) -> ThemeResult[Theme]:
    """Rebuild a Theme from a bundle document; ``fmt`` is detected when omitted."""
    diag = diagnostics or Diagnostics()
    parsed = _parse_bundle(text, fmt)
    if not parsed.success:
        diag.warning(COMPONENT, "import_theme", "Rejected bundle", {"error": parsed.error})
        return ThemeResult.fail(parsed.error or "Invalid bundle", parsed.code or ErrorCode.BUNDLE_INVALID)
    body = dict(parsed.data["theme"])
    metadata = body.get("metadata")
    if isinstance(metadata, Mapping):
        body["metadata"] = _restore_timestamps(metadata)
    result = ThemeFactory(diag).create_from_config(body, apply_defaults=False)
    if result.success:
        diag.info(COMPONENT, "import_theme", "Theme imported", {"theme_id": result.data.id})
    return result


def validate_theme_config(text: str, fmt: str | None = None) -> ThemeResult[bool]:
    """Check that ``text`` parses as a bundle and builds a valid theme."""
    result = import_theme(text, fmt)
    if not result.success:
        return ThemeResult.fail(result.error or "Invalid bundle", result.code or ErrorCode.BUNDLE_INVALID)
    return ThemeResult.ok(True)


def write_bundle(
    theme: Theme,
    path: Path,
    *,
    exported_by: str = "themeforge",
    fmt: str | None = None,
    dependencies: Mapping[str, Any] | None = None,
    custom: Mapping[str, Any] | None = None,
    diagnostics: Diagnostics | None = None,
) -> ThemeResult[Path]:
    """Export ``theme`` to ``path``; the format follows the suffix unless given."""
    path = Path(path)
    fmt = fmt or _BUNDLE_SUFFIXES.get(path.suffix.lower(), "json")
    exported = export_theme(
        theme,
        exported_by=exported_by,
        fmt=fmt,
        dependencies=dependencies,
        custom=custom,
        diagnostics=diagnostics,
    )
    if not exported.success:
        return ThemeResult.fail(exported.error or "Export failed", exported.code or ErrorCode.OPERATION_FAILED)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(exported.data, encoding="utf-8")
    except OSError as exc:
        return ThemeResult.from_exception(f"Unable to write {path}", exc)
    return ThemeResult.ok(path)


def read_bundle(path: Path, *, diagnostics: Diagnostics | None = None) -> ThemeResult[Theme]:
    """Import a bundle file, enforcing the size ceiling."""
    path = Path(path)
    try:
        text = _read_text_limited(path, max_bytes=_MAX_BUNDLE_BYTES)
    except FileNotFoundError:
        return ThemeResult.fail(f"Bundle not found: {path}", ErrorCode.FILE_NOT_FOUND)
    except ThemeValidationError as exc:
        return ThemeResult.fail(str(exc), ErrorCode.BUNDLE_INVALID)
    except OSError as exc:
        return ThemeResult.from_exception(f"Unable to read {path}", exc)
    result = import_theme(text, _BUNDLE_SUFFIXES.get(path.suffix.lower()), diagnostics=diagnostics)
    if not result.success:
        return ThemeResult.fail(f"{path}: {result.error}", result.code or ErrorCode.BUNDLE_INVALID)
    return result


def discover_bundles(
    root: Path, *, diagnostics: Diagnostics | None = None
) -> tuple[list[Theme], list[str]]:
    """Load every bundle file directly under ``root``.

    Per-file problems are collected as messages; one bad file never stops
    the scan.
    """
    root = Path(root)
    themes: list[Theme] = []
    errors: list[str] = []
    if not root.exists():
        return themes, errors
    try:
        all_files = sorted(
            path
            for path in root.iterdir()
            if path.suffix.lower() in _BUNDLE_SUFFIXES and not path.is_dir()
        )
    except OSError as exc:
        errors.append(f"Failed to list themes in {root}: {exc}")
        return themes, errors

    candidates: list[Path] = []
    for path in all_files:
        if path.is_symlink():
            errors.append(f"Skipping symlink theme bundle: {path}")
            continue
        candidates.append(path)
    if len(candidates) > _MAX_BUNDLE_CANDIDATES:
        errors.append(
            f"Theme bundle limit exceeded in {root}; "
            f"only first {_MAX_BUNDLE_CANDIDATES} files were scanned."
        )
        candidates = candidates[:_MAX_BUNDLE_CANDIDATES]

    for path in candidates:
        result = read_bundle(path, diagnostics=diagnostics)
        if result.success:
            themes.append(result.data)
        else:
            errors.append(result.error or f"Could not load {path}")
    return themes, errors


# -- internals --


def _build_bundle(
    theme: Theme,
    exported_by: str,
    dependencies: Mapping[str, Any] | None,
    custom: Mapping[str, Any] | None,
) -> dict[str, Any]:
    bundle: dict[str, Any] = {
        "metadata": {
            "version": BUNDLE_SCHEMA_VERSION,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "exported_by": exported_by,
        },
        "theme": _to_plain(theme.to_dict()),
    }
    if dependencies is not None:
        if not isinstance(dependencies, Mapping):
            raise ThemeValidationError("Bundle dependencies must be a mapping")
        _reject_unknown_keys(dependencies, allowed=_DEPENDENCY_KEYS, context="bundle dependencies")
        bundle["dependencies"] = _to_plain(dependencies)
    if custom is not None:
        if not isinstance(custom, Mapping):
            raise ThemeValidationError("Bundle custom section must be a mapping")
        bundle["custom"] = _to_plain(custom)
    return bundle


def _dump(bundle: Mapping[str, Any], fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(dict(bundle), sort_keys=False, allow_unicode=True)
    return json.dumps(bundle, indent=2, ensure_ascii=False)


def _parse_bundle(text: str, fmt: str | None) -> ThemeResult[dict[str, Any]]:
    if not isinstance(text, str) or not text.strip():
        return ThemeResult.fail("Bundle text is empty", ErrorCode.BUNDLE_INVALID)
    if fmt is None:
        fmt = "json" if text.lstrip().startswith("{") else "yaml"
    if fmt not in BUNDLE_FORMATS:
        return ThemeResult.fail(
            f"Unsupported bundle format {fmt!r}", ErrorCode.BUNDLE_UNSUPPORTED_FORMAT
        )
    try:
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except json.JSONDecodeError as exc:
        return ThemeResult.fail(f"Invalid JSON bundle: {exc}", ErrorCode.BUNDLE_INVALID)
    except yaml.YAMLError as exc:
        return ThemeResult.fail(f"Invalid YAML bundle: {exc}", ErrorCode.BUNDLE_INVALID)
    if not isinstance(data, dict):
        return ThemeResult.fail("Expected a mapping at the bundle root", ErrorCode.BUNDLE_INVALID)

    try:
        _reject_unknown_keys(data, allowed=_BUNDLE_KEYS, context="bundle")
        metadata = data.get("metadata")
        if not isinstance(metadata, Mapping):
            raise ThemeValidationError("bundle: 'metadata' must be a mapping")
        _reject_unknown_keys(metadata, allowed=_BUNDLE_METADATA_KEYS, context="bundle metadata")
        version = metadata.get("version")
        if version != BUNDLE_SCHEMA_VERSION:
            raise ThemeValidationError(
                f"bundle: unsupported version {version!r}; expected {BUNDLE_SCHEMA_VERSION!r}"
            )
        if not isinstance(data.get("theme"), Mapping):
            raise ThemeValidationError("bundle: 'theme' must be a mapping")
        dependencies = data.get("dependencies")
        if dependencies is not None:
            if not isinstance(dependencies, Mapping):
                raise ThemeValidationError("bundle: 'dependencies' must be a mapping")
            _reject_unknown_keys(dependencies, allowed=_DEPENDENCY_KEYS, context="bundle dependencies")
    except ThemeValidationError as exc:
        return ThemeResult.fail(str(exc), ErrorCode.BUNDLE_INVALID)
    return ThemeResult.ok(data)


def _to_plain(value: Any) -> Any:
    """Convert dates to ISO strings and tuples to lists so both formats round-trip."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(key): _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


def _restore_timestamps(metadata: Mapping[str, Any]) -> dict[str, Any]:
    restored = dict(metadata)
    for key in METADATA_TIMESTAMP_KEYS:
        value = restored.get(key)
        if isinstance(value, str):
            try:
                restored[key] = datetime.fromisoformat(value)
            except ValueError:
                continue
    return restored


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(str(key) for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise ThemeValidationError(f"{context}: unsupported keys found: {joined}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    size = path.stat().st_size
    if size > max_bytes:
        raise ThemeValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ThemeValidationError(f"Unable to read {path}: {exc}") from exc
