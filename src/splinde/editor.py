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

"""Editing session - owns the current tree and applies actions one at a time.

The session is the single writer of its tree. Each dispatch runs the
mutator, re-aggregates the result, swaps it in, and reports the outcome
through the notification centre.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from splinde.notifications import Notification, NotificationCenter, Severity
from splinde.tree.actions import (
    Action,
    AddLeaf,
    AddSection,
    RemoveNode,
    rename,
    set_note,
    set_value,
)
from splinde.tree.aggregator import aggregate_tree
from splinde.tree.model import DEFAULT_ENTRY_NAME, DEFAULT_SECTION_NAME, Section
from splinde.tree.mutator import apply
from splinde.tree.navigation import node_name_at, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditResult:
    """Outcome of a dispatched action."""

    action: Action
    applied: bool
    tree: Section
    notification: Notification | None = None


class TreeEditor:
    """Holds the authoritative annotated tree.

    Args:
        tree: Initial tree, raw or annotated (it is aggregated either way)
        notifications: Where acknowledgments go (a fresh centre by default)
    """

    def __init__(self, tree: Section, notifications: NotificationCenter | None = None):
        self._tree = aggregate_tree(tree)
        self.notifications = notifications or NotificationCenter()

    @property
    def tree(self) -> Section:
        return self._tree

    def load(self, tree: Section) -> None:
        """Replace the whole tree (e.g. after loading new data)."""
        self._tree = aggregate_tree(tree)
        logger.info("Loaded tree '%s'", self._tree.name)

    def dispatch(self, action: Action) -> EditResult:
        """Apply one action against the current tree.

        Raises:
            PathError: If the action's path does not fit the current tree;
                the tree is left as it was
        """
        logger.debug("Dispatching %r", action)
        previous = self._tree

        removed_name = None
        if isinstance(action, RemoveNode) and action.path:
            # the name is gone once the node is
            removed_name = node_name_at(previous, action.path)

        edited = apply(previous, action)

        if edited is None:
            notification = self.notifications.emit(
                "The root section cannot be removed", Severity.ERROR
            )
            return EditResult(action, applied=False, tree=previous, notification=notification)

        if edited is previous:
            logger.info("Action %r left the tree unchanged", action)
            return EditResult(action, applied=False, tree=previous)

        self._tree = aggregate_tree(edited)
        notification = self._acknowledge(action, previous, removed_name)
        return EditResult(action, applied=True, tree=self._tree, notification=notification)

    def _acknowledge(
        self, action: Action, previous: Section, removed_name: str | None
    ) -> Notification | None:
        if isinstance(action, AddLeaf):
            parent = node_name_at(previous, action.path)
            return self.notifications.emit(
                f'Added "{DEFAULT_ENTRY_NAME}" to "{parent}"', Severity.SUCCESS
            )
        if isinstance(action, AddSection):
            parent = node_name_at(previous, action.path)
            return self.notifications.emit(
                f'Added "{DEFAULT_SECTION_NAME}" to "{parent}"', Severity.SUCCESS
            )
        if isinstance(action, RemoveNode):
            return self.notifications.emit(f'Removed "{removed_name}"', Severity.SUCCESS)
        return None

    # Convenience wrappers matching what the UI offers

    def rename(self, path: Sequence[int], name: str) -> EditResult:
        """Rename a node; surrounding whitespace is dropped, unchanged names are ignored."""
        new_name = name.strip()
        action = rename(path, new_name)
        if new_name == resolve(self._tree, path).name:
            return EditResult(action, applied=False, tree=self._tree)
        return self.dispatch(action)

    def set_value(self, path: Sequence[int], value: Any) -> EditResult:
        return self.dispatch(set_value(path, value))

    def set_note(self, path: Sequence[int], note: str) -> EditResult:
        return self.dispatch(set_note(path, note))

    def add_entry(self, path: Sequence[int]) -> EditResult:
        return self.dispatch(AddLeaf(path))

    def add_section(self, path: Sequence[int]) -> EditResult:
        return self.dispatch(AddSection(path))

    def remove(self, path: Sequence[int]) -> EditResult:
        return self.dispatch(RemoveNode(path))
