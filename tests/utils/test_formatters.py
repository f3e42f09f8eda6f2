"""Tests for output formatters."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import yaml

from taskhub.utils.ui.formatters import format_output

TASK = {
    "id": "t1",
    "title": "Write report",
    "description": None,
    "due_date": "2025-04-01T00:00:00",
    "priority": "high",
    "completed": False,
    "labels": [{"id": "l1", "name": "work", "color": None}],
    "created_at": None,
    "updated_at": None,
}


def test_json_output(capsys):
    format_output(TASK, "json")
    assert json.loads(capsys.readouterr().out) == TASK


def test_yaml_output(capsys):
    format_output({"tasks": [TASK], "updated_count": 1}, "yaml")
    assert yaml.safe_load(capsys.readouterr().out) == {"tasks": [TASK], "updated_count": 1}


def test_task_page_table(capsys):
    format_output({"tasks": [TASK], "total": 3, "page": 1, "limit": 1}, "table")

    out = capsys.readouterr().out
    assert "Write report" in out
    assert "work" in out
    assert "1 of 3" in out


def test_single_item_table_shows_label_names(capsys):
    format_output(TASK, "table")

    out = capsys.readouterr().out
    assert "Write report" in out
    assert "work" in out
    assert "l1" not in out


def test_default_format_comes_from_config(capsys):
    config_service = MagicMock()
    config_service.config.output_format = "json"

    with patch(
        "taskhub.services.config_service.get_config_service", return_value=config_service
    ):
        format_output({"answer": 42})

    assert json.loads(capsys.readouterr().out) == {"answer": 42}
