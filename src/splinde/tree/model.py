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

"""Tree model - immutable dataclasses for the report hierarchy.

A tree is made of two node kinds. Entries are leaves holding a numeric
value and a note. Sections hold an ordered tuple of children and, once
aggregated, the sum of every entry value below them.

Nodes are frozen: edits build new nodes (see ``splinde.tree.mutator``) and
previously returned trees stay valid snapshots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from splinde.errors import SplindeError

DEFAULT_ENTRY_NAME = "New Entry"
DEFAULT_SECTION_NAME = "New Section"


class TreeFormatError(SplindeError):
    """Raised when input data does not describe a well-formed tree."""

    pass


class NodeKind(str, Enum):
    """Discriminator tag carried by every node."""

    ENTRY = "entry"
    SECTION = "section"


@dataclass(frozen=True)
class Entry:
    """A leaf node: a named value with a free-text note."""

    name: str
    note: str = ""
    value: float = 0
    kind: NodeKind = field(default=NodeKind.ENTRY, init=False)

    def to_dict(self, include_aggregate: bool = True) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "name": self.name,
            "note": self.note,
            "value": self.value,
        }


@dataclass(frozen=True)
class Section:
    """An internal node with ordered children.

    ``aggregate`` is None for a raw section and holds the subtree sum once
    the section has been through the aggregator.
    """

    name: str
    children: tuple[Node, ...] = ()
    aggregate: float | None = None
    kind: NodeKind = field(default=NodeKind.SECTION, init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_annotated(self) -> bool:
        return self.aggregate is not None

    def to_dict(self, include_aggregate: bool = True) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary.

        With ``include_aggregate=False`` the result is the raw exchange shape
        accepted by :func:`tree_from_dict`.
        """
        result: dict[str, Any] = {
            "type": self.kind.value,
            "name": self.name,
            "children": [
                child.to_dict(include_aggregate=include_aggregate)
                for child in self.children
            ],
        }
        if include_aggregate and self.aggregate is not None:
            result["aggregate"] = self.aggregate
        return result


Node = Union[Entry, Section]


def new_entry() -> Entry:
    """The entry appended by an add-entry action."""
    return Entry(name=DEFAULT_ENTRY_NAME, note="", value=0)


def new_section() -> Section:
    """The section appended by an add-section action."""
    return Section(name=DEFAULT_SECTION_NAME, children=())


def is_entry(node: Node) -> bool:
    return node.kind is NodeKind.ENTRY


def is_section(node: Node) -> bool:
    return node.kind is NodeKind.SECTION


def _classify(data: dict[str, Any], where: list[int]) -> NodeKind:
    """Work out the node kind from an explicit tag or, failing that, shape."""
    tag = data.get("type")
    if tag is not None:
        try:
            return NodeKind(tag)
        except ValueError:
            raise TreeFormatError(f"Unknown node type '{tag}' at {where}")

    has_children = "children" in data
    has_leaf_fields = any(key in data for key in ("value", "sum", "note"))
    if has_children and has_leaf_fields:
        raise TreeFormatError(
            f"Node at {where} has both children and entry fields"
        )
    if has_children:
        return NodeKind.SECTION
    if has_leaf_fields:
        return NodeKind.ENTRY
    raise TreeFormatError(f"Cannot tell whether node at {where} is an entry or a section")


def _parse_value(raw: Any, where: list[int]) -> float:
    if isinstance(raw, bool):
        raise TreeFormatError(f"Entry value at {where} must be a number, got {raw!r}")
    value = raw
    if isinstance(raw, str):
        try:
            value = float(raw)
        except ValueError:
            value = None
    if isinstance(value, float) and not math.isfinite(value):
        raise TreeFormatError(f"Entry value at {where} must be a finite number, got {raw!r}")
    if isinstance(value, (int, float)):
        return value
    raise TreeFormatError(f"Entry value at {where} must be a number, got {raw!r}")


def node_from_dict(data: Any, _where: list[int] | None = None) -> Node:
    """Build a node (and its subtree) from exchange data.

    Entries accept ``value`` or the legacy ``sum`` key. Any ``aggregate``
    carried by a section is ignored; sums are always recomputed.
    """
    where = _where if _where is not None else []
    if not isinstance(data, dict):
        raise TreeFormatError(f"Node at {where} must be an object, got {type(data).__name__}")

    name = data.get("name")
    if not isinstance(name, str):
        raise TreeFormatError(f"Node at {where} is missing a string 'name'")

    kind = _classify(data, where)
    if kind is NodeKind.ENTRY:
        raw_value = data.get("value", data.get("sum", 0))
        note = data.get("note", "")
        if not isinstance(note, str):
            raise TreeFormatError(f"Entry note at {where} must be a string")
        return Entry(name=name, note=note, value=_parse_value(raw_value, where))

    children = data.get("children", [])
    if not isinstance(children, list):
        raise TreeFormatError(f"Section children at {where} must be a list")
    return Section(
        name=name,
        children=tuple(
            node_from_dict(child, where + [index])
            for index, child in enumerate(children)
        ),
    )


def tree_from_dict(data: Any) -> Section:
    """Build a raw tree; the root must be a section."""
    root = node_from_dict(data)
    if not isinstance(root, Section):
        raise TreeFormatError("The root of a tree must be a section, not an entry")
    return root
