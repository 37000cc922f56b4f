from __future__ import annotations

import random
import sys
from typing import Callable, List, Optional

import pytest

from exercises.core_algorithmic_foundations.balance_profiler import (
    left_chain,
    perfect_tree,
    random_tree,
)
from exercises.core_algorithmic_foundations.balanced_binary_tree import (
    UNBALANCED,
    Balanced,
    TreeNode,
    TreeStructureError,
    build_tree_from_level_order,
    check_height,
    ensure_acyclic,
    height,
    is_balanced,
    is_balanced_efficient,
    is_balanced_iterative,
    level_order_traversal,
    render_tree,
    tree_size,
)

CHECKERS: List[Callable[..., bool]] = [
    is_balanced,
    is_balanced_efficient,
    is_balanced_iterative,
]


def test_empty_tree_is_balanced() -> None:
    for checker in CHECKERS:
        assert checker(None) is True


def test_single_node_is_balanced() -> None:
    for checker in CHECKERS:
        assert checker(TreeNode(1)) is True


def test_height_base_cases() -> None:
    assert height(None) == -1
    assert height(TreeNode(1)) == 0
    assert height(TreeNode(1, TreeNode(2))) == 1


def test_check_height_returns_tagged_results() -> None:
    assert check_height(None) == Balanced(-1)
    assert check_height(TreeNode(1)) == Balanced(0)
    assert check_height(perfect_tree(3)) == Balanced(2)
    assert check_height(left_chain(3)) is UNBALANCED


def test_known_balanced_example() -> None:
    root = TreeNode(1, TreeNode(2, TreeNode(4), TreeNode(5)), TreeNode(3))
    for checker in CHECKERS:
        assert checker(root) is True


def test_left_chain_of_four_is_unbalanced() -> None:
    root = TreeNode(1, TreeNode(2, TreeNode(3, TreeNode(4))))
    for checker in CHECKERS:
        assert checker(root) is False


def test_two_node_chain_is_balanced() -> None:
    root = TreeNode(1, right=TreeNode(2))
    for checker in CHECKERS:
        assert checker(root) is True


@pytest.mark.parametrize("h", [-1, 0, 1, 3])
def test_subtree_heights_differing_by_one_are_balanced(h: int) -> None:
    root = TreeNode(0, left=perfect_tree(h + 1), right=perfect_tree(h + 2))
    assert height(root.left) == h
    assert height(root.right) == h + 1
    for checker in CHECKERS:
        assert checker(root) is True


@pytest.mark.parametrize("h", [-1, 0, 1, 3])
def test_subtree_heights_differing_by_two_are_unbalanced(h: int) -> None:
    root = TreeNode(0, left=perfect_tree(h + 3), right=perfect_tree(h + 1))
    assert height(root.left) == h + 2
    assert height(root.right) == h
    for checker in CHECKERS:
        assert checker(root) is False


def test_imbalance_deep_inside_otherwise_balanced_tree() -> None:
    root = perfect_tree(4)
    assert root is not None
    leaf = root.right.right.right
    leaf.left = TreeNode(100, TreeNode(101))
    for checker in CHECKERS:
        assert checker(root) is False


@pytest.mark.parametrize("seed", range(25))
def test_checkers_agree_on_random_trees(seed: int) -> None:
    rng = random.Random(seed)
    for size in (0, 1, 2, 5, 17, 60):
        root = random_tree(size, rng)
        expected = is_balanced(root)
        assert is_balanced_efficient(root) is expected
        assert is_balanced_iterative(root) is expected


def test_checkers_agree_on_every_small_tree_shape() -> None:
    def shapes(n: int) -> List[Optional[TreeNode]]:
        if n == 0:
            return [None]
        result: List[Optional[TreeNode]] = []
        for left_size in range(n):
            for left in shapes(left_size):
                for right in shapes(n - 1 - left_size):
                    result.append(TreeNode(n, left, right))
        return result

    for n in range(8):
        for root in shapes(n):
            expected = is_balanced(root)
            assert is_balanced_efficient(root) is expected
            assert is_balanced_iterative(root) is expected


@pytest.mark.parametrize("checker", [is_balanced_efficient, is_balanced_iterative])
def test_single_pass_checkers_visit_each_node_at_most_once(
    checker: Callable[..., bool],
) -> None:
    rng = random.Random(7)
    for size in (1, 10, 100, 300):
        root = random_tree(size, rng)
        visited: List[int] = []
        checker(root, on_visit=lambda node: visited.append(id(node)))
        assert len(visited) <= size
        assert len(visited) == len(set(visited))


@pytest.mark.parametrize("checker", [is_balanced_efficient, is_balanced_iterative])
def test_unbalanced_left_subtree_short_circuits_right(
    checker: Callable[..., bool],
) -> None:
    right = perfect_tree(5)
    root = TreeNode(0, left=TreeNode(1, TreeNode(2, TreeNode(3))), right=right)
    right_ids = set()
    stack = [right]
    while stack:
        node = stack.pop()
        if node is not None:
            right_ids.add(id(node))
            stack.extend((node.left, node.right))

    visited: List[int] = []
    assert checker(root, on_visit=lambda node: visited.append(id(node))) is False
    assert right_ids.isdisjoint(visited)
    assert len(visited) == 4


def test_naive_checker_revisits_nodes() -> None:
    root = perfect_tree(6)
    visits = 0

    def count(_node: TreeNode) -> None:
        nonlocal visits
        visits += 1

    assert is_balanced(root, on_visit=count) is True
    assert visits > tree_size(root)


def test_iterative_checker_handles_trees_deeper_than_recursion_limit() -> None:
    depth = sys.getrecursionlimit() + 500
    chain = left_chain(depth)
    assert is_balanced_iterative(chain) is False

    root = TreeNode(0)
    node = root
    for value in range(1, depth):
        node.right = TreeNode(value)
        node = node.right
    assert is_balanced_iterative(root) is False


def test_checkers_do_not_mutate_input() -> None:
    values = [1, 2, 3, None, 5, None, 7]
    root = build_tree_from_level_order(values)
    for checker in CHECKERS:
        checker(root)
    assert level_order_traversal(root) == values


def test_ensure_acyclic_counts_nodes() -> None:
    assert ensure_acyclic(None) == 0
    assert ensure_acyclic(perfect_tree(3)) == 7


def test_ensure_acyclic_rejects_shared_and_cyclic_nodes() -> None:
    shared = TreeNode(2)
    with pytest.raises(TreeStructureError):
        ensure_acyclic(TreeNode(1, shared, shared))

    root = TreeNode(1, TreeNode(2))
    root.left.right = root
    with pytest.raises(TreeStructureError):
        ensure_acyclic(root)


def test_tree_node_accepts_opaque_values() -> None:
    root = TreeNode("root", TreeNode(("a", 1)), TreeNode(None))
    assert tree_size(root) == 3
    assert is_balanced_efficient(root)


def test_render_tree_renders_structure_with_placeholders() -> None:
    root = TreeNode(1, TreeNode(2, right=TreeNode(4)), TreeNode(3))
    expected = "\n".join(["1", "2 3", "· 4 · ·"])
    assert render_tree(root) == expected


def test_render_tree_empty_tree() -> None:
    assert render_tree(None) == "<empty>"


def test_render_tree_trims_placeholder_only_levels() -> None:
    root = TreeNode(1, TreeNode(2), TreeNode(3))
    assert render_tree(root) == "\n".join(["1", "2 3"])


def test_build_tree_from_level_order_roundtrip() -> None:
    balanced_values = [1, 2, 3, None, 5, None, 7]
    balanced_root = build_tree_from_level_order(balanced_values)
    assert level_order_traversal(balanced_root) == balanced_values
    assert is_balanced_efficient(balanced_root) is True

    unbalanced_values = [1, 2, None, 3, None, 4]
    unbalanced_root = build_tree_from_level_order(unbalanced_values)
    assert level_order_traversal(unbalanced_root) == unbalanced_values
    assert is_balanced_efficient(unbalanced_root) is False


def test_build_tree_from_level_order_empty_inputs() -> None:
    assert build_tree_from_level_order([]) is None
    assert build_tree_from_level_order([None, 1, 2]) is None


@pytest.mark.parametrize("seed", range(10))
def test_iterative_checker_visits_in_recursive_order(seed: int) -> None:
    rng = random.Random(seed)
    for size in (1, 8, 40, 150):
        root = random_tree(size, rng)
        recursive_order: List[int] = []
        iterative_order: List[int] = []
        is_balanced_efficient(root, on_visit=lambda node: recursive_order.append(id(node)))
        is_balanced_iterative(root, on_visit=lambda node: iterative_order.append(id(node)))
        assert iterative_order == recursive_order


def test_render_tree_rows_double_in_width() -> None:
    rows = render_tree(left_chain(6)).splitlines()
    assert [len(row.split(" ")) for row in rows] == [1, 2, 4, 8, 16, 32]
    assert rows[-1].split(" ")[0] == "6"
