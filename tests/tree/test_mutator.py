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

"""Tests for tree/mutator.py."""

import logging

import pytest

from splinde.tree.actions import AddLeaf, AddSection, RemoveNode, rename, set_note, set_value
from splinde.tree.aggregator import aggregate_tree, is_consistent
from splinde.tree.model import DEFAULT_ENTRY_NAME, DEFAULT_SECTION_NAME, Entry, Section
from splinde.tree.mutator import apply
from splinde.tree.navigation import PathError, resolve


@pytest.fixture
def annotated(report_tree):
    return aggregate_tree(report_tree)


def _edit(tree, action):
    """Apply and re-aggregate, the way an editing session does."""
    return aggregate_tree(apply(tree, action))


class TestWalkthrough:
    """Report(A=10, B(C=5)) through a sequence of edits."""

    def test_initial_totals(self, annotated):
        assert annotated.aggregate == 15
        assert annotated.children[1].aggregate == 5

    def test_set_value_then_add_then_remove(self, annotated):
        tree = _edit(annotated, set_value([0], 20))
        assert tree.children[0].value == 20
        assert tree.aggregate == 25

        tree = _edit(tree, AddLeaf([1]))
        section_b = tree.children[1]
        assert [child.name for child in section_b.children] == ["C", DEFAULT_ENTRY_NAME]
        assert section_b.aggregate == 5
        assert tree.aggregate == 25

        tree = _edit(tree, RemoveNode([1, 0]))
        section_b = tree.children[1]
        assert [child.name for child in section_b.children] == [DEFAULT_ENTRY_NAME]
        assert section_b.aggregate == 0
        assert tree.aggregate == 20
        assert is_consistent(tree)


def test_apply_does_not_modify_input(annotated):
    before = annotated.to_dict()
    apply(annotated, set_value([1, 0], 99))
    apply(annotated, RemoveNode([0]))
    assert annotated.to_dict() == before


def test_unchanged_siblings_are_shared(annotated):
    result = apply(annotated, set_value([0], 1))
    assert result.children[1] is annotated.children[1]
    assert result.children[0] is not annotated.children[0]


def test_rebuilt_ancestors_lose_aggregate(annotated):
    result = apply(annotated, set_value([1, 0], 1))
    assert result.aggregate is None
    assert result.children[1].aggregate is None


def test_rename_entry_and_section(annotated):
    result = apply(annotated, rename([1], "Costs"))
    assert result.children[1].name == "Costs"
    assert result.children[1].children == annotated.children[1].children
    result = apply(annotated, rename([], "Budget"))
    assert result.name == "Budget"


def test_set_note(annotated):
    result = apply(annotated, set_note([1, 0], "checked"))
    assert result.children[1].children[0] == Entry("C", "checked", 5)


def test_value_update_on_section_is_noop(annotated, caplog):
    with caplog.at_level(logging.INFO, logger="splinde.tree.mutator"):
        result = apply(annotated, set_value([1], 50))
    assert result is annotated
    assert "Ignoring value update on section 'B'" in caplog.text


def test_note_update_on_section_is_noop(annotated):
    assert apply(annotated, set_note([], "x")) is annotated


def test_add_section_appends_empty_section(annotated):
    result = aggregate_tree(apply(annotated, AddSection([])))
    added = result.children[-1]
    assert added == Section(DEFAULT_SECTION_NAME, (), aggregate=0)
    assert result.aggregate == 15


def test_add_entry_to_root(annotated):
    result = apply(annotated, AddLeaf([]))
    assert len(result.children) == 3
    assert result.children[2] == Entry(DEFAULT_ENTRY_NAME, "", 0)


def test_add_to_entry_is_noop(annotated):
    assert apply(annotated, AddLeaf([0])) is annotated
    assert apply(annotated, AddSection([0])) is annotated


def test_remove_root_returns_none(annotated):
    assert apply(annotated, RemoveNode([])) is None


def test_remove_whole_section(annotated):
    result = _edit(annotated, RemoveNode([1]))
    assert [child.name for child in result.children] == ["A"]
    assert result.aggregate == 10


def test_remove_last_child_leaves_empty_section(annotated):
    result = _edit(annotated, RemoveNode([1, 0]))
    assert result.children[1].children == ()
    assert result.children[1].aggregate == 0


@pytest.mark.parametrize(
    "action",
    [
        set_value([5], 1),
        rename([0, 0], "x"),
        AddLeaf([3]),
        RemoveNode([2]),
        RemoveNode([0, 0]),
        RemoveNode([1, 4]),
        set_note([-1], "x"),
    ],
)
def test_invalid_paths_raise(annotated, action):
    with pytest.raises(PathError):
        apply(annotated, action)


def test_unsupported_action_type(annotated):
    with pytest.raises(TypeError, match="Unsupported action"):
        apply(annotated, object())


def test_update_changes_only_ancestor_totals():
    tree = aggregate_tree(Section("R", (
        Section("X", (Entry("x1", value=1), Entry("x2", value=2))),
        Section("Y", (Entry("y1", value=4),)),
    )))
    result = _edit(tree, set_value([0, 1], 10))
    assert result.aggregate == 15
    assert result.children[0].aggregate == 11
    assert result.children[1].aggregate == 4
    assert result.children[0].children[0] is tree.children[0].children[0]


def test_remove_middle_child_shifts_later_siblings():
    tree = aggregate_tree(Section("R", (
        Entry("a", value=1),
        Entry("b", value=2),
        Entry("c", value=4),
    )))
    result = _edit(tree, RemoveNode([1]))
    assert [child.name for child in result.children] == ["a", "c"]
    assert resolve(result, [1]).name == "c"
    assert result.aggregate == 5
