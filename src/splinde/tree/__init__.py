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

"""Tree model, aggregation, navigation and structural edits.

Public API:
    - tree_from_dict: exchange data -> raw Section
    - aggregate: raw/annotated node -> annotated node
    - resolve: (tree, path) -> node
    - apply: (tree, action) -> raw Section | None

Example:
    from splinde.tree import tree_from_dict, aggregate, apply, set_value

    tree = aggregate(tree_from_dict(data))
    edited = apply(tree, set_value([0], 20))
    if edited is not None:
        tree = aggregate(edited)
"""

from splinde.tree.actions import (
    Action,
    ActionError,
    ActionType,
    AddLeaf,
    AddSection,
    RemoveNode,
    Update,
    UpdateField,
    action_from_dict,
    coerce_value,
    rename,
    set_note,
    set_value,
)
from splinde.tree.aggregator import (
    Aggregator,
    SumAggregator,
    aggregate,
    aggregate_tree,
    is_consistent,
    iter_nodes,
    leaf_total,
)
from splinde.tree.model import (
    Entry,
    Node,
    NodeKind,
    Section,
    TreeFormatError,
    new_entry,
    new_section,
    node_from_dict,
    tree_from_dict,
)
from splinde.tree.mutator import apply
from splinde.tree.navigation import (
    PathError,
    check_child_index,
    format_path,
    node_name_at,
    parse_path,
    resolve,
)

__all__ = [
    # Model
    "Entry",
    "Node",
    "NodeKind",
    "Section",
    "TreeFormatError",
    "new_entry",
    "new_section",
    "node_from_dict",
    "tree_from_dict",
    # Aggregation
    "Aggregator",
    "SumAggregator",
    "aggregate",
    "aggregate_tree",
    "is_consistent",
    "iter_nodes",
    "leaf_total",
    # Navigation
    "PathError",
    "check_child_index",
    "format_path",
    "node_name_at",
    "parse_path",
    "resolve",
    # Actions
    "Action",
    "ActionError",
    "ActionType",
    "AddLeaf",
    "AddSection",
    "RemoveNode",
    "Update",
    "UpdateField",
    "action_from_dict",
    "coerce_value",
    "rename",
    "set_note",
    "set_value",
    # Mutation
    "apply",
]
