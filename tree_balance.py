"""Command line demonstration of the balanced binary tree checkers.

Runs the reference ``is_balanced`` and the single-pass
``is_balanced_efficient`` on a small balanced tree and on a left-leaning
chain, then prints both answers together with a level-order ASCII rendering of
each tree.  A disagreement with the expected answer is a bug and aborts the
run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from exercises.core_algorithmic_foundations.balanced_binary_tree import (
    TreeNode,
    build_tree_from_level_order,
    is_balanced,
    is_balanced_efficient,
    render_tree,
)


@dataclass(frozen=True)
class DemoCase:
    """Container describing a tree example and its expected balance status."""

    name: str
    values: Iterable[Optional[int]]
    expected_balance: bool

    def build(self) -> Optional[TreeNode]:
        """Materialise the tree associated with this demo case."""

        return build_tree_from_level_order(self.values)


def _iter_demo_cases() -> Iterator[DemoCase]:
    """Yield the built-in demonstration cases."""

    #      1          1
    #     / \        /
    #    2   3      2
    #   / \        /
    #  4   5      3
    #            /
    #           4
    yield DemoCase(
        name="Balanced",
        values=[1, 2, 3, 4, 5],
        expected_balance=True,
    )
    yield DemoCase(
        name="Skewed",
        values=[1, 2, None, 3, None, 4],
        expected_balance=False,
    )


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _format_report(case: DemoCase, tree: Optional[TreeNode]) -> List[str]:
    """Return formatted output lines for *case* and its *tree*."""

    naive = is_balanced(tree)
    efficient = is_balanced_efficient(tree)
    for label, actual in (("naive", naive), ("efficient", efficient)):
        if actual != case.expected_balance:
            raise RuntimeError(
                "Demo case expectation mismatch:"
                f" {case.name} expected {case.expected_balance}"
                f" but the {label} checker returned {actual}"
            )

    header = (
        f"{case.name} tree balanced?"
        f" naive={_yes_no(naive)} efficient={_yes_no(efficient)}"
        f" (expected: {_yes_no(case.expected_balance)})"
    )
    return [header, render_tree(tree)]


def main() -> None:
    """Execute the demonstration flow for all configured cases."""

    for case in _iter_demo_cases():
        for line in _format_report(case, case.build()):
            print(line)
        print()


if __name__ == "__main__":
    main()
