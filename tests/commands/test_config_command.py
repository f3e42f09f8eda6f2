"""Tests for the ``taskhub config`` commands and the top-level app."""

# pylint: disable=redefined-outer-name

import json

from typer.testing import CliRunner

from taskhub import __version__
from taskhub.main import app
from taskhub.utils import exit_codes

runner = CliRunner()


def test_config_get_all(tmp_config):
    result = runner.invoke(app, ["config", "get", "-o", "json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["default_page_size"] == 10
    assert data["output_format"] == "table"


def test_config_get_single_key(tmp_config):
    result = runner.invoke(app, ["config", "get", "log_level", "-o", "json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"log_level": "INFO"}


def test_config_set_then_get(tmp_config):
    result = runner.invoke(app, ["config", "set", "default_page_size", "25"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["config", "get", "default_page_size", "-o", "json"])
    assert json.loads(result.stdout) == {"default_page_size": 25}


def test_configured_output_format_is_default(tmp_config):
    runner.invoke(app, ["config", "set", "output_format", "json"])

    result = runner.invoke(app, ["config", "get", "output_format"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"output_format": "json"}


def test_config_set_unknown_key(tmp_config):
    result = runner.invoke(app, ["config", "set", "colour", "blue"])

    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "Unknown config key" in result.output


def test_config_set_invalid_value(tmp_config):
    result = runner.invoke(app, ["config", "set", "default_page_size", "500"])
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS


def test_version(tmp_config):
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
