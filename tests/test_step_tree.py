"""Tests for the step tree builder."""

import pytest

from virgil.core import (
    NavigationEntry,
    build_navigation_map,
    build_tree,
    flatten_tree,
)
from virgil.models import WalkthroughStep


def make_step(step_id: int, parent_id: int | None = None, title: str | None = None):
    """Create a test step."""
    return WalkthroughStep(id=step_id, title=title or f"Step {step_id}", parent_id=parent_id)


def ids(steps: list[WalkthroughStep]) -> list[int]:
    return [step.id for step in steps]


class TestBuildTree:
    """Tests for build_tree."""

    def test_flat_list_is_all_roots(self) -> None:
        steps = [make_step(1), make_step(2), make_step(3)]
        forest = build_tree(steps)
        assert [node.step.id for node in forest] == [1, 2, 3]
        assert all(not node.children for node in forest)

    def test_missing_parent_becomes_root(self) -> None:
        """A parentId pointing nowhere makes the step a root, not a dropout."""
        steps = [make_step(1), make_step(2, parent_id=1), make_step(3, parent_id=99)]
        forest = build_tree(steps)

        assert [node.step.id for node in forest] == [1, 3]
        assert [child.step.id for child in forest[0].children] == [2]

    def test_siblings_keep_source_order(self) -> None:
        steps = [make_step(10), make_step(30, parent_id=10), make_step(20, parent_id=10)]
        forest = build_tree(steps)
        assert [child.step.id for child in forest[0].children] == [30, 20]

    def test_child_before_parent_in_source(self) -> None:
        steps = [make_step(2, parent_id=1), make_step(1)]
        forest = build_tree(steps)
        assert [node.step.id for node in forest] == [1]
        assert forest[0].children[0].step.id == 2

    def test_nodes_reference_caller_steps(self) -> None:
        steps = [make_step(1), make_step(2, parent_id=1)]
        forest = build_tree(steps)
        assert forest[0].step is steps[0]
        assert forest[0].children[0].step is steps[1]

    def test_self_parent_becomes_root(self) -> None:
        forest = build_tree([make_step(1, parent_id=1)])
        assert [node.step.id for node in forest] == [1]

    def test_cycle_is_broken(self) -> None:
        """Every step of a parent cycle still shows up exactly once."""
        steps = [make_step(1, parent_id=2), make_step(2, parent_id=1), make_step(3, parent_id=2)]
        forest = build_tree(steps)
        flat = flatten_tree(forest)

        assert sorted(ids(flat)) == [1, 2, 3]
        assert len(forest) == 1

    def test_duplicate_ids_attach_to_first(self) -> None:
        """Children of a duplicated id attach to the first step with that id."""
        first = make_step(1, title="First")
        second = make_step(1, title="Second")
        child = make_step(2, parent_id=1)
        forest = build_tree([first, second, child])

        assert [node.step.title for node in forest] == ["First", "Second"]
        assert forest[0].children[0].step is child
        assert not forest[1].children

    def test_deep_chain(self) -> None:
        """Deep hierarchies must not hit the recursion limit."""
        steps = [make_step(1)] + [make_step(n, parent_id=n - 1) for n in range(2, 5001)]
        flat = flatten_tree(build_tree(steps))
        assert ids(flat) == list(range(1, 5001))

    def test_empty(self) -> None:
        assert build_tree([]) == []
        assert flatten_tree([]) == []
        assert build_navigation_map([], []) == {}


class TestFlattenTree:
    """Tests for flatten_tree."""

    def test_pre_order(self) -> None:
        """Parent first, then its children, then the next sibling."""
        steps = [make_step(1), make_step(2, parent_id=1), make_step(3), make_step(4, parent_id=2)]
        assert ids(flatten_tree(build_tree(steps))) == [1, 2, 4, 3]

    def test_differs_from_source_order(self) -> None:
        steps = [make_step(1), make_step(2), make_step(3, parent_id=1)]
        assert ids(flatten_tree(build_tree(steps))) == [1, 3, 2]


class TestNavigationMap:
    """Tests for build_navigation_map."""

    def test_neighbours(self) -> None:
        steps = [make_step(1), make_step(2, parent_id=1), make_step(3), make_step(4, parent_id=2)]
        forest = build_tree(steps)
        flat = flatten_tree(forest)
        navigation = build_navigation_map(forest, flat)

        index = {step.id: position for position, step in enumerate(flat)}
        assert navigation[index[4]] == NavigationEntry(
            parent_index=index[2], prev_sibling_index=None, next_sibling_index=None
        )
        assert navigation[index[3]] == NavigationEntry(
            parent_index=None, prev_sibling_index=index[1], next_sibling_index=None
        )
        assert navigation[index[1]] == NavigationEntry(
            parent_index=None, prev_sibling_index=None, next_sibling_index=index[3]
        )
        assert navigation[index[2]].parent_index == index[1]

    def test_every_index_present(self) -> None:
        steps = [make_step(n, parent_id=(n // 2 or None)) for n in range(1, 16)]
        forest = build_tree(steps)
        flat = flatten_tree(forest)
        navigation = build_navigation_map(forest, flat)
        assert sorted(navigation) == list(range(len(flat)))

    def test_siblings_link_both_ways(self) -> None:
        steps = [make_step(1), make_step(2, parent_id=1), make_step(3, parent_id=1)]
        forest = build_tree(steps)
        flat = flatten_tree(forest)
        navigation = build_navigation_map(forest, flat)

        assert navigation[1].next_sibling_index == 2
        assert navigation[2].prev_sibling_index == 1
        assert navigation[2].parent_index == 0


class TestRepeatedStepObject:
    """The same step object passed twice still gets two flat positions."""

    def test_navigation_for_shared_object(self) -> None:
        step = make_step(1)
        forest = build_tree([step, step])
        flat = flatten_tree(forest)
        navigation = build_navigation_map(forest, flat)

        assert flat == [step, step]
        assert sorted(navigation) == [0, 1]
        assert navigation[0].next_sibling_index == 1
        assert navigation[1].prev_sibling_index == 0

    def test_mismatched_flat_list(self) -> None:
        forest = build_tree([make_step(1), make_step(2)])
        with pytest.raises(ValueError, match="flat_steps"):
            build_navigation_map(forest, [])
