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

"""Tree navigation: resolving positional paths against a tree snapshot."""

from __future__ import annotations

from typing import Sequence

from splinde.errors import SplindeError
from splinde.tree.model import Entry, Node, Section

Path = tuple[int, ...]

ROOT_PATH_ALIASES = ("", ".", "root")


class PathError(SplindeError):
    """Raised when a path does not address a node in the given tree.

    Paths are positional and only valid against the snapshot they were built
    from, so this signals a stale or hand-made path rather than bad user input.
    """

    def __init__(self, message: str, path: Sequence[int] = ()):
        super().__init__(message)
        self.path = tuple(path)


def check_child_index(section: Section, index: object, path: Sequence[int]) -> int:
    """Validate ``index`` as a child position of ``section``.

    Raises:
        PathError: If the index is not a non-negative integer or is out of
            range for ``section``
    """
    # bool is an int subclass; True must not address child 1
    if isinstance(index, bool) or not isinstance(index, int):
        raise PathError(f"Path elements must be integers, got {index!r} in {list(path)}", path)
    if index < 0:
        raise PathError(f"Negative index {index} in path {list(path)}", path)
    if index >= len(section.children):
        raise PathError(
            f"Index {index} out of range for section '{section.name}' "
            f"with {len(section.children)} children (path {list(path)})",
            path,
        )
    return index


def resolve(root: Node, path: Sequence[int]) -> Node:
    """Return the node at ``path``; the empty path is the root itself.

    Raises:
        PathError: If the path descends through an entry or an index is out
            of range at some depth
    """
    node = root
    for depth, index in enumerate(path):
        if isinstance(node, Entry):
            raise PathError(
                f"Cannot descend into entry '{node.name}' at depth {depth} of path {list(path)}",
                path,
            )
        node = node.children[check_child_index(node, index, path)]
    return node


def resolve_section(root: Node, path: Sequence[int]) -> Section | None:
    """Like :func:`resolve`, but returns None when the target is an entry."""
    node = resolve(root, path)
    return node if isinstance(node, Section) else None


def node_name_at(root: Node, path: Sequence[int]) -> str:
    """Name of the node at ``path`` (used to describe a node before removing it)."""
    return resolve(root, path).name


def parse_path(text: str) -> Path:
    """Parse the dotted textual form of a path.

    ``"1.0"`` is the first child of the second child of the root. An empty
    string, ``"."`` or ``"root"`` is the root.

    Raises:
        PathError: If any component is not a non-negative integer
    """
    stripped = text.strip()
    if stripped.lower() in ROOT_PATH_ALIASES:
        return ()

    path: list[int] = []
    for part in stripped.split("."):
        part = part.strip()
        if not part.isdecimal():
            raise PathError(f"Invalid path '{text}': '{part}' is not a non-negative integer")
        path.append(int(part))
    return tuple(path)


def format_path(path: Sequence[int]) -> str:
    """Inverse of :func:`parse_path`; the root formats as ``root``."""
    if not path:
        return "root"
    return ".".join(str(index) for index in path)
