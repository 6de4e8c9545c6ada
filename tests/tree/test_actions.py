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

"""Tests for tree/actions.py."""

import math

import pytest

from splinde.tree.actions import (
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


@pytest.mark.parametrize(
    "raw, expected",
    [
        (5, 5),
        (2.5, 2.5),
        ("12.5", 12.5),
        ("  7", 7),
        ("12abc", 12),
        ("1e3", 1000),
        ("-4", -4),
        (".5", 0.5),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        (float("nan"), 0),
        ("NaN", 0),
    ],
)
def test_coerce_value(raw, expected):
    assert coerce_value(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Infinity", "-Infinity", "1e999", "-1e999", "inf", math.inf, -math.inf, 1e308 * 10],
)
def test_coerce_value_non_finite_becomes_zero(raw):
    assert coerce_value(raw) == 0


def test_set_value_never_stores_non_finite():
    action = action_from_dict({"type": "update", "path": [0], "field": "value", "value": "1e999"})
    assert action.value == 0
    assert math.isfinite(set_value([0], "Infinity").value)


def test_builders_make_updates():
    assert rename([1], "B2") == Update((1,), UpdateField.NAME, "B2")
    assert set_value([0], "20") == Update((0,), UpdateField.VALUE, 20.0)
    assert set_note((0,), "hi") == Update((0,), UpdateField.NOTE, "hi")


def test_update_accepts_field_string():
    update = Update([0], "note", "x")
    assert update.field is UpdateField.NOTE
    assert update.path == (0,)


def test_action_types():
    assert Update((), "name", "x").type is ActionType.UPDATE
    assert AddLeaf().type is ActionType.ADD_ENTRY
    assert AddSection().type is ActionType.ADD_SECTION
    assert RemoveNode((0,)).type is ActionType.REMOVE_NODE


def test_to_dict_wire_shape():
    assert set_value([1, 0], 3).to_dict() == {
        "type": "update", "path": [1, 0], "field": "value", "value": 3,
    }
    assert AddLeaf([1]).to_dict() == {"type": "add-entry", "path": [1]}
    assert RemoveNode([1, 0]).to_dict() == {"type": "remove-node", "path": [1, 0]}


def test_action_from_dict_structural():
    assert action_from_dict({"type": "add-entry", "path": [1]}) == AddLeaf((1,))
    assert action_from_dict({"type": "add-section", "path": []}) == AddSection(())
    assert action_from_dict({"type": "remove-node", "path": [0]}) == RemoveNode((0,))


def test_action_from_dict_update_coerces_value():
    action = action_from_dict({"type": "update", "path": [0], "field": "value", "value": "12abc"})
    assert action == Update((0,), UpdateField.VALUE, 12)


def test_action_from_dict_sum_alias():
    action = action_from_dict({"type": "update", "path": [0], "field": "sum", "value": 3})
    assert action.field is UpdateField.VALUE


def test_action_from_dict_rename_stringifies():
    action = action_from_dict({"type": "update", "path": [], "field": "name", "value": 7})
    assert action.value == "7"


def test_action_from_dict_round_trips_to_dict():
    for action in (rename([1], "X"), set_note([0], "n"), AddSection([1]), RemoveNode([0])):
        assert action_from_dict(action.to_dict()) == action


@pytest.mark.parametrize(
    "payload, message",
    [
        ("nope", "must be an object"),
        ({"type": "explode", "path": []}, "Unknown action type"),
        ({"type": "add-entry"}, "needs a list 'path'"),
        ({"type": "add-entry", "path": "1.0"}, "needs a list 'path'"),
        ({"type": "update", "path": [0], "field": "colour", "value": 1}, "Unknown update field"),
        ({"type": "update", "path": [0], "field": "name"}, "needs a 'value'"),
    ],
)
def test_action_from_dict_rejects(payload, message):
    with pytest.raises(ActionError, match=message):
        action_from_dict(payload)
