"""Tests for error classification and the result type."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from themeforge.errors import (
    ErrorCode,
    ThemeForgeError,
    UnsupportedNodeError,
    classify_exception,
)
from themeforge.themes.result import ThemeResult


class TestClassifyException:
    def test_file_errors(self):
        assert classify_exception(FileNotFoundError("gone")).code is ErrorCode.FILE_NOT_FOUND
        assert classify_exception(PermissionError("nope")).code is ErrorCode.FILE_ACCESS_DENIED

    def test_decode_errors(self):
        with pytest.raises(json.JSONDecodeError) as json_exc:
            json.loads("{bad")
        assert classify_exception(json_exc.value).code is ErrorCode.BUNDLE_INVALID

        with pytest.raises(yaml.YAMLError) as yaml_exc:
            yaml.safe_load("a: [unclosed")
        assert classify_exception(yaml_exc.value).code is ErrorCode.BUNDLE_INVALID

    def test_internal_and_default(self):
        assert classify_exception(UnsupportedNodeError("fn")).code is ErrorCode.INTERNAL_ERROR
        assert classify_exception(KeyError("x")).code is ErrorCode.INTERNAL_ERROR
        assert classify_exception(RuntimeError("boom")).code is ErrorCode.OPERATION_FAILED

    def test_passes_through_existing_error(self):
        error = ThemeForgeError(ErrorCode.NOT_FOUND)
        assert classify_exception(error) is error


def test_error_defaults_message_and_describes_context():
    error = ThemeForgeError(ErrorCode.DUPLICATE_ID, path=Path("/tmp/theme.json"), details={"id": "t1"})
    assert error.message == "A theme with this id is already registered."
    assert str(Path("/tmp/theme.json")) in str(error)
    assert "id=t1" in str(error)


class TestThemeResult:
    def test_ok_and_fail(self):
        ok = ThemeResult.ok(5)
        assert ok and ok.data == 5 and ok.error is None
        fail = ThemeResult.fail("nope", ErrorCode.NOT_FOUND)
        assert not fail
        assert fail.code is ErrorCode.NOT_FOUND

    def test_from_exception_keeps_description(self):
        result = ThemeResult.from_exception("Error cloning theme", UnsupportedNodeError("bad leaf"))
        assert result.error == "Error cloning theme: bad leaf"
        assert result.code is ErrorCode.INTERNAL_ERROR

    def test_unwrap(self):
        assert ThemeResult.ok("x").unwrap() == "x"
        with pytest.raises(ThemeForgeError) as exc:
            ThemeResult.fail("missing", ErrorCode.NOT_FOUND).unwrap()
        assert exc.value.code is ErrorCode.NOT_FOUND
