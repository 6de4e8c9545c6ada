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

"""Pytest configuration and shared fixtures for splinde tests."""

import pytest

from splinde.tree.model import Entry, Section


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and SPLINDE_* settings."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in (
        "SPLINDE_HOST",
        "SPLINDE_PORT",
        "SPLINDE_NOTIFY_DURATION_MS",
        "SPLINDE_DATA",
        "SPLINDE_PRECISION",
        "SPLINDE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def report_data():
    """Report(A=10, B(C=5)) in raw exchange shape."""
    return {
        "name": "Report",
        "children": [
            {"name": "A", "note": "", "value": 10},
            {
                "name": "B",
                "children": [
                    {"name": "C", "note": "", "value": 5},
                ],
            },
        ],
    }


@pytest.fixture
def report_tree():
    """Raw Report(A=10, B(C=5)) tree."""
    return Section(
        "Report",
        (
            Entry("A", value=10),
            Section("B", (Entry("C", value=5),)),
        ),
    )


@pytest.fixture
def report_file(tmp_path, report_data):
    import json

    path = tmp_path / "report.json"
    path.write_text(json.dumps(report_data))
    return path
