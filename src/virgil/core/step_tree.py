"""Step hierarchy: tree building, flattening and navigation.

Steps form a forest through their ``parent_id``. The forest is a derived
view rebuilt from the flat step list; nodes reference the caller's step
objects rather than copying them. The pre-order flattening of the forest
defines linear next/previous navigation.
"""

from dataclasses import dataclass, field

from ..models import WalkthroughStep


@dataclass(eq=False)
class StepTreeNode:
    """A step and its ordered children."""

    step: WalkthroughStep
    children: list["StepTreeNode"] = field(default_factory=list)


@dataclass(frozen=True)
class NavigationEntry:
    """Flat indices of a step's hierarchical neighbours (None when absent)."""

    parent_index: int | None
    prev_sibling_index: int | None
    next_sibling_index: int | None


def build_tree(steps: list[WalkthroughStep]) -> list[StepTreeNode]:
    """Build a forest of step nodes from parent pointers.

    Siblings keep their order from ``steps``. A step whose ``parent_id``
    matches no step, or matches itself, becomes a root. When steps form a
    parent cycle, the first cycle member reached is promoted to a root so
    that every step appears in the forest exactly once. When several steps
    share an id, parent references resolve to the first of them.

    Args:
        steps: Steps in source order

    Returns:
        Root nodes in source order
    """
    nodes = [StepTreeNode(step) for step in steps]
    index_by_id: dict[int, int] = {}
    for position, step in enumerate(steps):
        index_by_id.setdefault(step.id, position)

    parent_of: list[int | None] = [None] * len(nodes)
    for position, step in enumerate(steps):
        if step.parent_id is None:
            continue
        parent = index_by_id.get(step.parent_id)
        if parent is None or parent == position:
            continue
        parent_of[position] = parent
        nodes[parent].children.append(nodes[position])

    positions = {id(node): position for position, node in enumerate(nodes)}
    reached = [False] * len(nodes)

    def mark(start: int) -> None:
        stack = [nodes[start]]
        while stack:
            node = stack.pop()
            reached[positions[id(node)]] = True
            stack.extend(node.children)

    for position in range(len(nodes)):
        if parent_of[position] is None:
            mark(position)

    # Anything unreached hangs off a parent cycle
    for position in range(len(nodes)):
        if reached[position]:
            continue
        seen: set[int] = set()
        current = position
        while current not in seen:
            seen.add(current)
            current = parent_of[current]  # type: ignore[assignment]
        parent = parent_of[current]
        nodes[parent].children.remove(nodes[current])  # type: ignore[index]
        parent_of[current] = None
        mark(current)

    return [nodes[p] for p in range(len(nodes)) if parent_of[p] is None]


def _pre_order(forest: list[StepTreeNode]) -> list[StepTreeNode]:
    order: list[StepTreeNode] = []
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(reversed(node.children))
    return order


def flatten_tree(forest: list[StepTreeNode]) -> list[WalkthroughStep]:
    """Return steps in pre-order depth-first order."""
    return [node.step for node in _pre_order(forest)]


def build_navigation_map(
    forest: list[StepTreeNode], flat_steps: list[WalkthroughStep]
) -> dict[int, NavigationEntry]:
    """Map each flat index to its parent and sibling flat indices.

    Indices are assigned per tree node, so the same step object appearing
    twice in the input still gets two entries.

    Args:
        forest: Root nodes from build_tree
        flat_steps: flatten_tree(forest)

    Returns:
        Dict keyed by flat index

    Raises:
        ValueError: If flat_steps is not the flattening of forest
    """
    order = _pre_order(forest)
    if len(order) != len(flat_steps):
        raise ValueError(
            f"flat_steps has {len(flat_steps)} steps but the forest has {len(order)} nodes"
        )
    flat_index = {id(node): position for position, node in enumerate(order)}
    navigation: dict[int, NavigationEntry] = {}

    stack: list[tuple[list[StepTreeNode], int | None]] = [(forest, None)]
    while stack:
        siblings, parent_index = stack.pop()
        indices = [flat_index[id(node)] for node in siblings]
        for position, node in enumerate(siblings):
            navigation[indices[position]] = NavigationEntry(
                parent_index=parent_index,
                prev_sibling_index=indices[position - 1] if position > 0 else None,
                next_sibling_index=(
                    indices[position + 1] if position + 1 < len(siblings) else None
                ),
            )
            if node.children:
                stack.append((node.children, indices[position]))
    return navigation
