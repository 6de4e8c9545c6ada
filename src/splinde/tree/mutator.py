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

"""Structural edit application.

``apply`` rebuilds every section on the chain from the root to the edited
node and reuses everything else. Rebuilt sections come back raw (their
``aggregate`` cleared) because their sums are stale; callers run the result
through ``splinde.tree.aggregator.aggregate`` before using it.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Sequence

from splinde.tree.actions import (
    Action,
    AddLeaf,
    AddSection,
    RemoveNode,
    Update,
    UpdateField,
    coerce_value,
)
from splinde.tree.model import Entry, Node, Section, new_entry, new_section
from splinde.tree.navigation import PathError, check_child_index

logger = logging.getLogger(__name__)


def _rebuild(
    node: Node,
    path: Sequence[int],
    edit: Callable[[Node], Node],
    full_path: Sequence[int],
) -> Node:
    """Apply ``edit`` to the node at ``path`` and rebuild its ancestors.

    When ``edit`` hands back the same object the original node is returned,
    so a no-op leaves the whole tree untouched.
    """
    if not path:
        return edit(node)

    index = path[0]
    if isinstance(node, Entry):
        raise PathError(f"Cannot descend into entry '{node.name}' (path {list(full_path)})", full_path)
    check_child_index(node, index, full_path)

    child = node.children[index]
    updated = _rebuild(child, path[1:], edit, full_path)
    if updated is child:
        return node

    children = node.children[:index] + (updated,) + node.children[index + 1:]
    return replace(node, children=children, aggregate=None)


def _update_field(update: Update) -> Callable[[Node], Node]:
    def edit(node: Node) -> Node:
        if update.field is UpdateField.NAME:
            return replace(node, name=str(update.value))
        if isinstance(node, Section):
            # value and note only exist on entries
            logger.info(
                "Ignoring %s update on section '%s'", update.field.value, node.name
            )
            return node
        if update.field is UpdateField.VALUE:
            return replace(node, value=coerce_value(update.value))
        return replace(node, note=str(update.value))

    return edit


def _append_child(factory: Callable[[], Node]) -> Callable[[Node], Node]:
    def edit(node: Node) -> Node:
        if isinstance(node, Entry):
            logger.info("Entry '%s' cannot have children; ignoring add", node.name)
            return node
        return replace(node, children=node.children + (factory(),), aggregate=None)

    return edit


def _remove_child(index: int, full_path: Sequence[int]) -> Callable[[Node], Node]:
    def edit(parent: Node) -> Node:
        if isinstance(parent, Entry):
            raise PathError(
                f"Cannot remove a child of entry '{parent.name}' (path {list(full_path)})",
                full_path,
            )
        check_child_index(parent, index, full_path)
        children = parent.children[:index] + parent.children[index + 1:]
        return replace(parent, children=children, aggregate=None)

    return edit


def apply(root: Section, action: Action) -> Section | None:
    """Apply one action to a tree.

    Args:
        root: The current tree (normally annotated)
        action: The edit to apply

    Returns:
        The edited tree in raw shape, the unchanged ``root`` for a no-op, or
        None when the action asks to remove the root

    Raises:
        PathError: If the action's path does not fit ``root``
    """
    if isinstance(action, Update):
        return _rebuild(root, action.path, _update_field(action), action.path)

    if isinstance(action, AddLeaf):
        return _rebuild(root, action.path, _append_child(new_entry), action.path)

    if isinstance(action, AddSection):
        return _rebuild(root, action.path, _append_child(new_section), action.path)

    if isinstance(action, RemoveNode):
        path = action.path
        if not path:
            logger.info("Refusing to remove the root section '%s'", root.name)
            return None
        return _rebuild(root, path[:-1], _remove_child(path[-1], path), path)

    raise TypeError(f"Unsupported action: {action!r}")

