"""Tests for ThemeFactory and the built-in themes."""

from __future__ import annotations

from datetime import datetime

from conftest import make_data, make_properties

from themeforge.errors import ErrorCode
from themeforge.themes.constants import DEFAULT_DARK_THEME_ID, DEFAULT_THEME_ID
from themeforge.themes.defaults import DEFAULT_BREAKPOINTS, builtin_themes, default_properties
from themeforge.themes.factory import ThemeFactory
from themeforge.themes.models import ThemeType, ThemeVariant
from themeforge.themes.registry import ThemeRegistry


def test_create_theme_validates_groups():
    factory = ThemeFactory()
    assert factory.create_theme(make_data(), make_properties()).success

    result = factory.create_theme(make_data(), make_properties(typography=None))
    assert not result.success
    assert result.code is ErrorCode.VALIDATION_FAILED


def test_create_theme_rejects_wrong_types():
    result = ThemeFactory().create_theme({"id": "x"}, make_properties())
    assert result.code is ErrorCode.INVALID_ARGUMENT


class TestCreateFromConfig:
    def test_flat_config_merges_over_defaults(self):
        result = ThemeFactory().create_from_config(
            {
                "id": "ocean",
                "name": "Ocean",
                "type": "light",
                "colors": {"primary": {"main": "#006994"}},
            }
        )
        assert result.success
        theme = result.data
        assert theme.display_name == "Ocean"
        assert theme.variant is ThemeVariant.DEFAULT
        assert theme.version == "1.0.0"
        assert theme.get_color("primary.main").data == "#006994"
        assert theme.get_color("primary.light").data == "#42a5f5"
        assert theme.get_spacing("md").data == 16
        assert isinstance(theme.metadata["created_at"], datetime)

    def test_wrapped_config_uses_wrapper_metadata(self):
        result = ThemeFactory().create_from_config(
            {
                "theme": {"id": "night", "name": "Night", "type": ThemeType.DARK},
                "metadata": {"author": "Ada", "version": "2.1.0"},
            }
        )
        theme = result.data
        assert theme.author == "Ada"
        assert theme.version == "2.1.0"
        assert theme.metadata["author"] == "Ada"

    def test_required_fields(self):
        factory = ThemeFactory()
        for config in (
            {"name": "No id", "type": "light"},
            {"id": "x", "type": "light"},
            {"id": "x", "name": "No type"},
            {"id": "x", "name": "Bad", "type": "neon"},
            {"id": "x", "name": "Bad", "type": "light", "variant": "loud"},
        ):
            result = factory.create_from_config(config)
            assert not result.success, config
            assert result.code is ErrorCode.VALIDATION_FAILED

    def test_rejects_unknown_keys_and_bad_groups(self):
        factory = ThemeFactory()
        assert not factory.create_from_config(
            {"id": "x", "name": "X", "type": "light", "palette": {}}
        ).success
        assert not factory.create_from_config(
            {"id": "x", "name": "X", "type": "light", "colors": ["red"]}
        ).success
        assert not factory.create_from_config({"id": "x\ny", "name": "X", "type": "light"}).success

    def test_non_mapping_config(self):
        assert ThemeFactory().create_from_config("theme").code is ErrorCode.INVALID_ARGUMENT


class TestDefaults:
    def test_default_properties_are_fresh_copies(self):
        first = default_properties()
        first.spacing["scale"]["md"] = 999
        assert default_properties().spacing["scale"]["md"] == 16

    def test_breakpoint_thresholds(self):
        assert DEFAULT_BREAKPOINTS == {"xs": 0, "sm": 576, "md": 768, "lg": 992, "xl": 1200, "2xl": 1400}

    def test_builtin_themes_register_and_pair(self):
        registry = ThemeRegistry()
        assert registry.register_themes(builtin_themes()).success
        assert registry.get_opposite_theme(DEFAULT_THEME_ID).data.id == DEFAULT_DARK_THEME_ID
        assert registry.get_opposite_theme(DEFAULT_DARK_THEME_ID).data.id == DEFAULT_THEME_ID

        dark = registry.get_theme(DEFAULT_DARK_THEME_ID).data
        assert dark.get_color("background.default").data == "#121212"
        assert dark.get_color("status.error").data == "#d32f2f"
