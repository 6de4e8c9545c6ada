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

"""Aggregation engine for rolling up entry values through the tree."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterator, Protocol

from splinde.tree.model import Entry, Node, Section


class Aggregator(Protocol):
    """Protocol for aggregation strategies."""

    def aggregate(self, node: Node) -> Node:
        """Return the node with derived values populated for its subtree."""
        ...


class SumAggregator:
    """Aggregator that sums entry values over every subtree."""

    def aggregate(self, node: Node) -> Node:
        """Aggregate by summing entry values from all descendants.

        Children are aggregated before their parent. A pre-existing
        ``aggregate`` on the input is never read, so the pass can be re-run
        on annotated trees and on edited trees with stale sums.

        Args:
            node: The node to aggregate (recursively processes children)

        Returns:
            The entry unchanged, or a new Section with ``aggregate`` set
        """
        if isinstance(node, Entry):
            return node

        children = tuple(self.aggregate(child) for child in node.children)

        total = 0
        for child in children:
            if isinstance(child, Entry):
                total += child.value
            else:
                total += child.aggregate

        return replace(node, children=children, aggregate=total)


_default_aggregator = SumAggregator()


def aggregate(node: Node, aggregator: Aggregator | None = None) -> Node:
    """Aggregate a node and everything below it.

    Args:
        node: Raw or annotated node
        aggregator: Strategy to use (defaults to SumAggregator)

    Returns:
        The annotated node
    """
    return (aggregator or _default_aggregator).aggregate(node)


def aggregate_tree(root: Section) -> Section:
    """Aggregate a whole tree; the result is always a Section."""
    return _default_aggregator.aggregate(root)


def leaf_total(node: Node) -> float:
    """Sum every entry value under ``node`` without reading aggregates."""
    if isinstance(node, Entry):
        return node.value
    return sum((leaf_total(child) for child in node.children), 0)


def iter_nodes(node: Node) -> Iterator[tuple[tuple[int, ...], Node]]:
    """Yield ``(path, node)`` pairs depth-first, parents before children."""

    def _walk(current: Node, path: tuple[int, ...]) -> Iterator[tuple[tuple[int, ...], Node]]:
        yield path, current
        if isinstance(current, Section):
            for index, child in enumerate(current.children):
                yield from _walk(child, path + (index,))

    return _walk(node, ())


def is_consistent(node: Node) -> bool:
    """Check that every section's aggregate equals its subtree sum."""
    for _, current in iter_nodes(node):
        if isinstance(current, Section):
            if current.aggregate is None:
                return False
            if not math.isclose(current.aggregate, leaf_total(current), abs_tol=1e-9):
                return False
    return True
