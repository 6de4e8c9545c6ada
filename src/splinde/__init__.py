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

"""SPLINDE - a tree editor for reports whose sections total their entries.

Public API:
    - tree_from_dict: exchange data -> raw Section
    - aggregate: raw tree -> annotated tree
    - apply: (annotated tree, action) -> raw tree | None
    - TreeEditor: editing session with notifications

Example:
    from splinde import TreeEditor, demo_tree

    editor = TreeEditor(demo_tree())
    editor.set_value([0, 0], 130000)
    print(editor.tree.aggregate)
"""

__version__ = "0.1.0"

from splinde.data import demo_data, demo_tree, load_tree_file
from splinde.editor import EditResult, TreeEditor
from splinde.errors import SplindeError
from splinde.notifications import Notification, NotificationCenter, Severity
from splinde.tree import (
    Action,
    AddLeaf,
    AddSection,
    Entry,
    PathError,
    RemoveNode,
    Section,
    Update,
    aggregate,
    apply,
    rename,
    resolve,
    set_note,
    set_value,
    tree_from_dict,
)

__all__ = [
    "__version__",
    "Action",
    "AddLeaf",
    "AddSection",
    "EditResult",
    "Entry",
    "Notification",
    "NotificationCenter",
    "PathError",
    "RemoveNode",
    "Section",
    "Severity",
    "SplindeError",
    "TreeEditor",
    "Update",
    "aggregate",
    "apply",
    "demo_data",
    "demo_tree",
    "load_tree_file",
    "rename",
    "resolve",
    "set_note",
    "set_value",
    "tree_from_dict",
]
