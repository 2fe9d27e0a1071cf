"""Tests for option validation and environment defaults."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from fieldretype.config import RewriteConfig, default_log_level
from fieldretype.errors import ConfigurationError
from fieldretype.models import Locator, RewriteSpec

SPEC = RewriteSpec(from_type="string", to_type="[]byte")


def _config(**locator: object) -> RewriteConfig:
    return RewriteConfig(file=Path("main.go"), locator=Locator(**locator), spec=SPEC)


@pytest.mark.parametrize(
    "locator",
    [{"line": "4"}, {"line": "4,8"}, {"record": "foo"}, {"record": "foo", "field": "bar"}, {"all": True}],
)
def test_valid_locators(locator: dict[str, object]) -> None:
    _config(**locator).validate_options()


def test_missing_file() -> None:
    config = RewriteConfig(locator=Locator(all=True), spec=SPEC)
    with pytest.raises(ConfigurationError, match="no file is passed"):
        config.validate_options()


def test_missing_locator() -> None:
    with pytest.raises(ConfigurationError, match="-line, -struct or -all is not passed"):
        _config().validate_options()


def test_line_and_struct_are_exclusive() -> None:
    with pytest.raises(ConfigurationError, match="cannot be used together"):
        _config(line="4", record="foo").validate_options()


def test_field_requires_struct() -> None:
    with pytest.raises(ConfigurationError, match="-field is requiring -struct"):
        _config(field="bar", all=True).validate_options()


def test_gofmt_binary_from_environment() -> None:
    with patch.dict(os.environ, {"FIELDRETYPE_GOFMT": "/opt/go/bin/gofmt"}):
        assert _config(all=True).gofmt_binary == "/opt/go/bin/gofmt"


def test_gofmt_binary_default() -> None:
    with patch.dict(os.environ, {}, clear=True):
        assert _config(all=True).gofmt_binary == "gofmt"


def test_log_level_from_environment() -> None:
    with patch.dict(os.environ, {"FIELDRETYPE_LOG_LEVEL": "debug"}):
        assert default_log_level() == "DEBUG"
