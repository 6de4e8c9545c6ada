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

"""Edit actions - the complete mutation surface of a tree.

Every edit is one of four tagged variants. Rename, value and note edits are
all an :class:`Update` of a single field; :func:`rename`, :func:`set_value`
and :func:`set_note` build them.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Sequence, Union

from splinde.errors import SplindeError

# Leading numeric prefix, the way a browser number input's parseFloat reads it
_NUMBER_PREFIX = re.compile(
    r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


class ActionError(SplindeError):
    """Raised when an action payload cannot be turned into an action."""

    pass


class ActionType(str, Enum):
    """Wire tag of each action variant."""

    UPDATE = "update"
    ADD_ENTRY = "add-entry"
    ADD_SECTION = "add-section"
    REMOVE_NODE = "remove-node"


class UpdateField(str, Enum):
    """Fields an update may replace."""

    NAME = "name"
    VALUE = "value"
    NOTE = "note"


def coerce_value(raw: Any) -> float:
    """Turn user input into an entry value.

    Anything that does not start with a finite number becomes 0 rather than
    an error: ``"12.5"`` -> 12.5, ``"12abc"`` -> 12, ``"abc"`` -> 0,
    ``"1e999"`` -> 0.
    """
    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return raw if math.isfinite(raw) else 0
    match = _NUMBER_PREFIX.match(str(raw).lstrip())
    if not match:
        return 0
    value = float(match.group(0))
    return value if math.isfinite(value) else 0


def _as_path(path: Sequence[int]) -> tuple[int, ...]:
    return tuple(path)


@dataclass(frozen=True)
class Update:
    """Replace one field of the node at ``path``."""

    path: tuple[int, ...]
    field: UpdateField
    value: Any

    type: ClassVar[ActionType] = ActionType.UPDATE

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))
        object.__setattr__(self, "field", UpdateField(self.field))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "path": list(self.path),
            "field": self.field.value,
            "value": self.value,
        }


@dataclass(frozen=True)
class AddLeaf:
    """Append a default entry to the section at ``path``."""

    path: tuple[int, ...] = ()

    type: ClassVar[ActionType] = ActionType.ADD_ENTRY

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "path": list(self.path)}


@dataclass(frozen=True)
class AddSection:
    """Append a default, empty section to the section at ``path``."""

    path: tuple[int, ...] = ()

    type: ClassVar[ActionType] = ActionType.ADD_SECTION

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "path": list(self.path)}


@dataclass(frozen=True)
class RemoveNode:
    """Delete the node at ``path``. The root cannot be removed."""

    path: tuple[int, ...]

    type: ClassVar[ActionType] = ActionType.REMOVE_NODE

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "path": list(self.path)}


Action = Union[Update, AddLeaf, AddSection, RemoveNode]


def rename(path: Sequence[int], name: str) -> Update:
    return Update(path, UpdateField.NAME, name)


def set_value(path: Sequence[int], value: Any) -> Update:
    return Update(path, UpdateField.VALUE, coerce_value(value))


def set_note(path: Sequence[int], note: str) -> Update:
    return Update(path, UpdateField.NOTE, note)


# "sum" is what older payloads call an entry's value
_FIELD_ALIASES = {"sum": UpdateField.VALUE}


def action_from_dict(data: Any) -> Action:
    """Build an action from its wire form.

    Raises:
        ActionError: On an unknown type, a missing or non-list path, or an
            update without a valid field and value
    """
    if not isinstance(data, dict):
        raise ActionError(f"Action must be an object, got {type(data).__name__}")

    raw_type = data.get("type")
    try:
        action_type = ActionType(raw_type)
    except ValueError:
        valid = ", ".join(t.value for t in ActionType)
        raise ActionError(f"Unknown action type '{raw_type}'. Valid types: {valid}")

    path = data.get("path")
    if not isinstance(path, (list, tuple)):
        raise ActionError(f"Action '{action_type.value}' needs a list 'path'")

    if action_type is ActionType.ADD_ENTRY:
        return AddLeaf(path)
    if action_type is ActionType.ADD_SECTION:
        return AddSection(path)
    if action_type is ActionType.REMOVE_NODE:
        return RemoveNode(path)

    raw_field = data.get("field")
    if raw_field in _FIELD_ALIASES:
        update_field = _FIELD_ALIASES[raw_field]
    else:
        try:
            update_field = UpdateField(raw_field)
        except ValueError:
            valid = ", ".join(f.value for f in UpdateField)
            raise ActionError(f"Unknown update field '{raw_field}'. Valid fields: {valid}")

    if "value" not in data:
        raise ActionError("Update action needs a 'value'")

    value = data["value"]
    if update_field is UpdateField.VALUE:
        return set_value(path, value)
    if update_field is UpdateField.NOTE:
        return set_note(path, "" if value is None else str(value))
    return rename(path, "" if value is None else str(value))
