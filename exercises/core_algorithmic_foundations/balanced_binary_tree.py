"""Height-balanced binary tree detection.

A binary tree is height-balanced when, for every node, the heights of the left
and right subtrees differ by at most one.  This module ships two answers to
that question so they can be compared against each other:

* ``is_balanced`` – the reference check.  It recomputes ``height`` from scratch
  for every node it inspects and is therefore ``O(n²)`` on degenerate trees.
* ``is_balanced_efficient`` – a single post-order pass.  ``check_height``
  returns either ``Balanced(height)`` or ``UNBALANCED`` and the latter is
  propagated to the caller as soon as it appears, so no subtree is examined
  twice and nothing is examined after the first imbalance.

``is_balanced_iterative`` computes the same answer with an explicit stack for
trees deeper than the interpreter's recursion limit.

The empty tree is ``None`` and has height ``-1``; a single node has height
``0``.  All checkers assume an acyclic tree and never mutate their input.
``ensure_acyclic`` is available to callers that cannot guarantee this.

Helpers for building, rendering and walking trees in level order are provided
for tests and the command line demonstrations.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Iterable, List, Optional, Union


@dataclass(slots=True)
class TreeNode:
    """Node representation used for binary tree algorithms."""

    value: Any
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None


class TreeStructureError(ValueError):
    """Raised when a node graph is not a strict tree."""


@dataclass(frozen=True, slots=True)
class Balanced:
    """Subtree is balanced and has the given height."""

    height: int


class Unbalanced:
    """Subtree contains at least one unbalanced node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNBALANCED"


UNBALANCED = Unbalanced()

HeightResult = Union[Balanced, Unbalanced]
VisitHook = Optional[Callable[[TreeNode], None]]


def height(node: Optional[TreeNode], *, on_visit: VisitHook = None) -> int:
    """Return the height of *node* in edges, ``-1`` for the empty tree."""

    if node is None:
        return -1
    if on_visit is not None:
        on_visit(node)
    return 1 + max(
        height(node.left, on_visit=on_visit),
        height(node.right, on_visit=on_visit),
    )


def is_balanced(root: Optional[TreeNode], *, on_visit: VisitHook = None) -> bool:
    """Return ``True`` when *root* is height-balanced.

    Reference implementation: every node asks ``height`` for both children,
    so nodes deep in the tree are measured once per ancestor.
    """

    if root is None:
        return True
    left_height = height(root.left, on_visit=on_visit)
    right_height = height(root.right, on_visit=on_visit)
    return (
        abs(left_height - right_height) <= 1
        and is_balanced(root.left, on_visit=on_visit)
        and is_balanced(root.right, on_visit=on_visit)
    )


def check_height(node: Optional[TreeNode], *, on_visit: VisitHook = None) -> HeightResult:
    """Return ``Balanced(height)`` for *node* or ``UNBALANCED``.

    The right subtree is not visited when the left one is already unbalanced.
    """

    if node is None:
        return Balanced(-1)
    if on_visit is not None:
        on_visit(node)

    left = check_height(node.left, on_visit=on_visit)
    if left is UNBALANCED:
        return UNBALANCED

    right = check_height(node.right, on_visit=on_visit)
    if right is UNBALANCED:
        return UNBALANCED

    if abs(left.height - right.height) > 1:
        return UNBALANCED
    return Balanced(1 + max(left.height, right.height))


def is_balanced_efficient(root: Optional[TreeNode], *, on_visit: VisitHook = None) -> bool:
    """Return ``True`` when *root* is height-balanced, in ``O(n)`` time."""

    return check_height(root, on_visit=on_visit) is not UNBALANCED


def is_balanced_iterative(root: Optional[TreeNode], *, on_visit: VisitHook = None) -> bool:
    """Stack-based equivalent of :func:`is_balanced_efficient`.

    Nodes are pushed as ``(node, expanded)`` pairs.  A node is visited when it
    is first expanded and its height is folded once both children have been
    resolved, left before right, so the traversal stops at the same node as
    the recursive version.
    """

    if root is None:
        return True

    heights: List[int] = []
    stack: List[tuple[Optional[TreeNode], bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if node is None:
            heights.append(-1)
            continue
        if expanded:
            right_height = heights.pop()
            left_height = heights.pop()
            if abs(left_height - right_height) > 1:
                return False
            heights.append(1 + max(left_height, right_height))
            continue

        if on_visit is not None:
            on_visit(node)
        stack.append((node, True))
        # Right is pushed first so the left subtree resolves first.
        stack.append((node.right, False))
        stack.append((node.left, False))

    return True


def ensure_acyclic(root: Optional[TreeNode]) -> int:
    """Return the node count of *root*, raising if any node is reachable twice.

    Nodes are tracked by identity, so shared subtrees are rejected as well as
    true cycles.
    """

    if root is None:
        return 0
    seen: set[int] = set()
    stack: List[TreeNode] = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            raise TreeStructureError(
                f"Node with value {node.value!r} is reachable more than once"
            )
        seen.add(id(node))
        for child in (node.left, node.right):
            if child is not None:
                stack.append(child)
    return len(seen)


def tree_size(root: Optional[TreeNode]) -> int:
    """Return the number of nodes in *root*."""

    count = 0
    stack: List[Optional[TreeNode]] = [root]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        count += 1
        stack.append(node.left)
        stack.append(node.right)
    return count


def render_tree(root: Optional[TreeNode]) -> str:
    """Render *root* level-by-level, marking missing nodes with ``·``.

    The renderer stops once the entire level is empty, ensuring that the output
    contains no trailing placeholder-only rows.  Every missing node still
    reserves both child cells, so row ``d`` always holds ``2**d`` cells and the
    output grows exponentially with depth; use it for shallow trees only.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    queue: Deque[Optional[TreeNode]] = deque([root])

    while queue:
        level_nodes: List[str] = []
        next_level_has_real_node = False
        for _ in range(len(queue)):
            node = queue.popleft()
            if node is None:
                level_nodes.append("·")
                queue.extend((None, None))
                continue

            level_nodes.append(str(node.value))
            queue.extend((node.left, node.right))
            if node.left is not None or node.right is not None:
                next_level_has_real_node = True

        lines.append(" ".join(level_nodes))
        if not next_level_has_real_node:
            break

    return "\n".join(lines)


def build_tree_from_level_order(values: Iterable[Any]) -> Optional[TreeNode]:
    """Construct a binary tree from a level-order sequence.

    ``None`` entries mark missing children and are not followed by children of
    their own.  Returns ``None`` for an empty sequence or a ``None`` root.
    """

    iterator = iter(values)
    first = next(iterator, None)
    if first is None:
        return None

    root = TreeNode(first)
    queue: Deque[TreeNode] = deque([root])
    exhausted = object()

    while queue:
        node = queue.popleft()
        left_value = next(iterator, exhausted)
        if left_value is exhausted:
            break
        if left_value is not None:
            node.left = TreeNode(left_value)
            queue.append(node.left)

        right_value = next(iterator, exhausted)
        if right_value is exhausted:
            break
        if right_value is not None:
            node.right = TreeNode(right_value)
            queue.append(node.right)

    return root


def level_order_traversal(root: Optional[TreeNode]) -> List[Any]:
    """Return the tree's level-order traversal including ``None`` holes."""

    if root is None:
        return []
    result: List[Any] = []
    queue: Deque[Optional[TreeNode]] = deque([root])
    while queue:
        node = queue.popleft()
        if node is None:
            result.append(None)
            continue
        result.append(node.value)
        queue.append(node.left)
        queue.append(node.right)
    while result and result[-1] is None:
        result.pop()
    return result


__all__ = [
    "Balanced",
    "HeightResult",
    "TreeNode",
    "TreeStructureError",
    "UNBALANCED",
    "Unbalanced",
    "build_tree_from_level_order",
    "check_height",
    "ensure_acyclic",
    "height",
    "is_balanced",
    "is_balanced_efficient",
    "is_balanced_iterative",
    "level_order_traversal",
    "render_tree",
    "tree_size",
]
