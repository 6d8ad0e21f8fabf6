"""Tests for ThemeService startup, activation and reload behavior."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from themeforge.errors import ErrorCode
from themeforge.themes.bundle import import_theme, write_bundle
from themeforge.themes.constants import DEFAULT_DARK_THEME_ID, DEFAULT_THEME_ID
from themeforge.themes.factory import ThemeFactory
from themeforge.themes.registry import ThemeRegistry
from themeforge.themes.service import ThemeService


def _settings(tmp_path: Path, theme_id: str = DEFAULT_THEME_ID, last_good: str = DEFAULT_THEME_ID):
    settings = MagicMock()
    settings.user_themes_dir = tmp_path / "themes"
    settings.theme_id = theme_id
    settings.theme_last_known_good_id = last_good
    settings.export_format = "json"
    settings.log_level = "INFO"
    settings.log_dir = tmp_path / "logs"
    return settings


def _user_theme(theme_id: str, name: str):
    return ThemeFactory().create_from_config({"id": theme_id, "name": name, "type": "custom"}).data


@pytest.fixture
def service(tmp_path: Path, diagnostics) -> ThemeService:
    svc = ThemeService(_settings(tmp_path), ThemeRegistry(diagnostics), diagnostics=diagnostics)
    svc.reload_themes()
    return svc


def test_reload_registers_builtins(service):
    assert set(service.registry.all_theme_ids()) == {DEFAULT_THEME_ID, DEFAULT_DARK_THEME_ID}


def test_reload_loads_user_bundles_and_reports_conflicts(tmp_path: Path, diagnostics):
    settings = _settings(tmp_path)
    write_bundle(_user_theme("sunset", "Sunset"), settings.user_themes_dir / "sunset.json")
    write_bundle(_user_theme(DEFAULT_THEME_ID, "Impostor"), settings.user_themes_dir / "impostor.json")
    service = ThemeService(settings, ThemeRegistry(diagnostics), diagnostics=diagnostics)

    errors = service.reload_themes()

    assert service.registry.has_theme("sunset")
    assert not service.registry.has_theme_name("Impostor")
    assert any("may not replace a built-in theme" in error for error in errors)
    assert [theme.id for theme in service.available_themes()][-1] == "sunset"


def test_reload_can_skip_user_themes(tmp_path: Path):
    settings = _settings(tmp_path)
    write_bundle(_user_theme("sunset", "Sunset"), settings.user_themes_dir / "sunset.json")
    service = ThemeService(settings, ThemeRegistry())

    assert service.reload_themes(include_user=False) == []
    assert not service.registry.has_theme("sunset")


def test_activate_theme_persists_selection(service):
    result = service.activate_theme(DEFAULT_DARK_THEME_ID)
    assert result.success
    assert service.active_theme_id == DEFAULT_DARK_THEME_ID
    assert service.active_theme is result.data
    assert service._settings.theme_id == DEFAULT_DARK_THEME_ID
    assert service._settings.theme_last_known_good_id == DEFAULT_DARK_THEME_ID


def test_activate_without_persist_keeps_requested_id(service):
    service.activate_theme(DEFAULT_DARK_THEME_ID, persist=False)
    assert service._settings.theme_id == DEFAULT_THEME_ID
    assert service._settings.theme_last_known_good_id == DEFAULT_DARK_THEME_ID


def test_activate_unknown_theme_fails(service):
    result = service.activate_theme("missing")
    assert not result.success
    assert result.code is ErrorCode.NOT_FOUND
    assert service.active_theme_id == ""


def test_startup_falls_back_to_last_known_good(tmp_path: Path):
    settings = _settings(tmp_path, theme_id="missing", last_good=DEFAULT_DARK_THEME_ID)
    service = ThemeService(settings, ThemeRegistry())
    service.reload_themes()

    result = service.apply_startup_theme()

    assert result.success
    assert service.active_theme_id == DEFAULT_DARK_THEME_ID
    assert settings.theme_id == DEFAULT_DARK_THEME_ID


def test_startup_falls_back_to_default(tmp_path: Path):
    settings = _settings(tmp_path, theme_id="missing", last_good="also-missing")
    service = ThemeService(settings, ThemeRegistry())
    service.reload_themes()

    assert service.apply_startup_theme().data.id == DEFAULT_THEME_ID


def test_startup_fails_with_empty_registry(tmp_path: Path):
    service = ThemeService(_settings(tmp_path), ThemeRegistry())
    result = service.apply_startup_theme()
    assert not result.success
    assert result.code is ErrorCode.NOT_FOUND


def test_toggle_dark_mode(service):
    assert not service.toggle_dark_mode().success
    service.activate_theme(DEFAULT_THEME_ID)

    assert service.toggle_dark_mode().data.id == DEFAULT_DARK_THEME_ID
    assert service.toggle_dark_mode().data.id == DEFAULT_THEME_ID


def test_resolve_color_uses_active_theme(service):
    # no active theme: a fallback cannot stand in for the theme itself
    assert not service.resolve_color("primary.main", "#000").success
    service.activate_theme(DEFAULT_DARK_THEME_ID)
    assert service.resolve_color("background.default").data == "#121212"
    assert service.resolve_color("missing", "#abcdef").data == "#abcdef"


def test_export_active_theme_uses_configured_format(service, tmp_path: Path):
    assert service.export_active_theme(tmp_path / "out").code is ErrorCode.NOT_FOUND
    service.activate_theme(DEFAULT_DARK_THEME_ID)
    service._settings.export_format = "yaml"

    result = service.export_active_theme(tmp_path / "out")

    assert result.success, result.error
    assert result.data == tmp_path / "out" / f"{DEFAULT_DARK_THEME_ID}.yaml"
    imported = import_theme(result.data.read_text(encoding="utf-8"))
    assert imported.data.to_dict() == service.active_theme.to_dict()


def test_configure_logging_reads_settings(service, tmp_path: Path, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "themeforge.themes.service.configure_logging",
        lambda log_dir, level: calls.append((log_dir, level)),
    )
    service._settings.log_level = "DEBUG"

    service.configure_logging()

    assert calls == [(tmp_path / "logs", "DEBUG")]
