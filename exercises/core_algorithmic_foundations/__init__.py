"""Core algorithmic exercise implementations."""

from .balanced_binary_tree import (
    UNBALANCED,
    Balanced,
    HeightResult,
    TreeNode,
    TreeStructureError,
    Unbalanced,
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
from .balance_profiler import (
    BalanceProfile,
    ProfilerInputError,
    left_chain,
    perfect_tree,
    profile_checkers,
    random_tree,
    render_profiles,
    write_profiles_to_csv,
)

__all__ = [
    "Balanced",
    "BalanceProfile",
    "HeightResult",
    "ProfilerInputError",
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
    "left_chain",
    "level_order_traversal",
    "perfect_tree",
    "profile_checkers",
    "random_tree",
    "render_profiles",
    "render_tree",
    "tree_size",
    "write_profiles_to_csv",
]
