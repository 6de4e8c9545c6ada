# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for logging across modules."""

import logging

import pytest
from click.testing import CliRunner

from splinde.cli import main
from splinde.data import load_tree_file
from splinde.editor import TreeEditor
from splinde.notifications import NotificationCenter
from splinde.tree.actions import set_note


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_log_level_option_configures_logging(report_file):
    """--log-level INFO should set the root level."""
    result = CliRunner().invoke(main, ["--log-level", "INFO", "--data", str(report_file), "show"])
    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.INFO


def test_cli_log_level_default_is_warning(report_file):
    result = CliRunner().invoke(main, ["--data", str(report_file), "show"])
    assert result.exit_code == 0
    assert logging.getLogger().level == logging.WARNING
    assert "Loaded tree" not in result.output


def test_cli_log_level_case_insensitive(report_file):
    result = CliRunner().invoke(main, ["--log-level", "debug", "--data", str(report_file), "show"])
    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.DEBUG


def test_cli_log_level_rejects_unknown():
    result = CliRunner().invoke(main, ["--log-level", "LOUD", "version"])
    assert result.exit_code == 2


def test_load_tree_file_logs(report_file, caplog):
    with caplog.at_level(logging.INFO, logger="splinde.data"):
        load_tree_file(report_file)
    assert "Loaded tree 'Report'" in caplog.text


def test_dispatch_logs_at_debug(report_tree, caplog):
    editor = TreeEditor(report_tree)
    with caplog.at_level(logging.DEBUG, logger="splinde"):
        editor.add_entry([])
    assert any(r.name == "splinde.editor" and "Dispatching" in r.message for r in caplog.records)
    assert any(r.name == "splinde.notifications" for r in caplog.records)


def test_noop_logged_at_info(report_tree, caplog):
    editor = TreeEditor(report_tree)
    with caplog.at_level(logging.INFO, logger="splinde"):
        editor.dispatch(set_note([1], "sections have no notes"))
    assert "left the tree unchanged" in caplog.text


def test_notification_expiry_logged(caplog):
    now = [0.0]
    center = NotificationCenter(default_duration_ms=10, clock=lambda: now[0])
    center.emit("brief")
    now[0] = 1.0
    with caplog.at_level(logging.DEBUG, logger="splinde.notifications"):
        assert center.active() == []
    assert "Notification expired" in caplog.text
