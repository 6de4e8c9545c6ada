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

"""Tree data sources: the bundled demo report and tree files on disk."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from splinde.tree.model import Section, TreeFormatError, tree_from_dict

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

DEMO_DATA: dict[str, Any] = {
    "name": "Annual Report",
    "children": [
        {
            "name": "Sales",
            "children": [
                {"name": "Q1 Sales", "note": "Winter campaign", "value": 125000},
                {"name": "Q2 Sales", "note": "Spring launch", "value": 148500},
                {"name": "Q3 Sales", "note": "", "value": 132250},
                {"name": "Q4 Sales", "note": "Holiday season", "value": 189750},
            ],
        },
        {
            "name": "Marketing",
            "children": [
                {"name": "Digital Campaigns", "note": "Search and social", "value": 45000},
                {"name": "Event Sponsorships", "note": "Two trade fairs", "value": 22500},
            ],
        },
        {
            "name": "R&D",
            "children": [
                {"name": "New Product Development", "note": "", "value": 98000},
                {"name": "Innovation Lab", "note": "Prototype hardware", "value": 37500.5},
            ],
        },
        {
            "name": "Operations",
            "children": [
                {
                    "name": "HR",
                    "children": [
                        {"name": "HR tool", "note": "Annual licence", "value": 12000},
                    ],
                },
                {"name": "Logistics", "note": "", "value": 56300},
                {"name": "Customer Support", "note": "Outsourced night shift", "value": 41200},
            ],
        },
    ],
}


def demo_data() -> dict[str, Any]:
    """A fresh copy of the demo report in raw exchange shape."""
    return copy.deepcopy(DEMO_DATA)


def demo_tree() -> Section:
    return tree_from_dict(DEMO_DATA)


def read_tree_data(path: Path) -> Any:
    """Read raw tree data from a JSON or YAML file.

    Raises:
        TreeFormatError: If the file cannot be read or parsed
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise TreeFormatError(f"Error reading {path}: {e}")

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise TreeFormatError(f"Invalid YAML in {path}: {e}")

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise TreeFormatError(f"Invalid JSON in {path}: {e}")


def load_tree_file(path: Path) -> Section:
    """Load a raw tree from disk (JSON, or YAML by file suffix)."""
    tree = tree_from_dict(read_tree_data(path))
    logger.info("Loaded tree '%s' from %s", tree.name, path)
    return tree


def load_tree(path: Path | None) -> Section:
    """Load ``path`` if given, else the demo report."""
    if path is None:
        logger.debug("No data file configured; using demo data")
        return demo_tree()
    return load_tree_file(path)
