"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themeforge.themes.constants import BUNDLE_FORMATS, DEFAULT_THEME_ID

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class AppSettings:
    """Wraps QSettings for persistent theme configuration.

    With no ``path`` the platform's native store is used; with a ``path`` the
    settings live in that INI file.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        if path is None:
            self._qs = QSettings("ThemeForge", "ThemeForge")
        else:
            self._qs = QSettings(str(path), QSettings.Format.IniFormat)

    # -- theme selection --

    @property
    def theme_id(self) -> str:
        return self._theme_value("themes/theme_id")

    @theme_id.setter
    def theme_id(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME_ID
        self._qs.setValue("themes/theme_id", cleaned)

    @property
    def theme_last_known_good_id(self) -> str:
        return self._theme_value("themes/last_known_good_id")

    @theme_last_known_good_id.setter
    def theme_last_known_good_id(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME_ID
        self._qs.setValue("themes/last_known_good_id", cleaned)

    # -- user themes --

    @property
    def user_themes_dir(self) -> Path:
        raw = self._qs.value("themes/user_dir", "", type=str)
        value = (raw or "").strip()
        if value:
            return Path(value)
        path = self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @user_themes_dir.setter
    def user_themes_dir(self, value: Path | str) -> None:
        self._qs.setValue("themes/user_dir", str(value or "").strip())

    # -- export --

    @property
    def export_format(self) -> str:
        raw = self._qs.value("export/format", "json", type=str)
        fmt = (raw or "").strip().lower()
        if fmt in BUNDLE_FORMATS:
            return fmt
        return "json"

    @export_format.setter
    def export_format(self, value: str) -> None:
        fmt = (value or "").strip().lower()
        if fmt not in BUNDLE_FORMATS:
            fmt = "json"
        self._qs.setValue("export/format", fmt)

    # -- logging --

    @property
    def log_level(self) -> str:
        raw = self._qs.value("logging/level", "INFO", type=str)
        level = (raw or "").strip().upper()
        if level in _LOG_LEVELS:
            return level
        return "INFO"

    @log_level.setter
    def log_level(self, value: str) -> None:
        level = (value or "").strip().upper()
        if level not in _LOG_LEVELS:
            level = "INFO"
        self._qs.setValue("logging/level", level)

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sync(self) -> None:
        self._qs.sync()

    def _theme_value(self, key: str) -> str:
        raw = self._qs.value(key, DEFAULT_THEME_ID, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_THEME_ID

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themeforge"
