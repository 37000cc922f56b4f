"""Compare the balance checkers on generated trees.

The naive checker recomputes subtree heights for every ancestor while the
single-pass checkers visit each node at most once.  This module makes that
difference observable:

* ``perfect_tree``, ``left_chain`` and ``random_tree`` build deterministic
  inputs of a requested size.
* ``profile_checkers`` runs every checker on the same tree, counting node
  visits and wall time, and asserts that all of them agree.
* ``write_profiles_to_csv`` and ``render_profiles`` persist or display the
  collected metrics.
* ``main`` is the CLI entry point.
"""

from __future__ import annotations

import argparse
import csv
import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from .balanced_binary_tree import (
    TreeNode,
    is_balanced,
    is_balanced_efficient,
    is_balanced_iterative,
    tree_size,
)

logger = logging.getLogger(__name__)

DEFAULT_SHAPE = "random"
DEFAULT_SIZE = 255
DEFAULT_SEED = 13

Checker = Callable[..., bool]

CHECKERS: Tuple[Tuple[str, Checker], ...] = (
    ("naive", is_balanced),
    ("recursive", is_balanced_efficient),
    ("iterative", is_balanced_iterative),
)


class ProfilerInputError(ValueError):
    """Raised when a tree generator receives invalid arguments."""


@dataclass(frozen=True)
class BalanceProfile:
    """Metrics captured for a single balance checker run."""

    name: str
    result: bool
    visits: int
    time_seconds: float

    def to_row(self) -> List[str]:
        """Serialise the profile for CSV persistence."""

        return [
            self.name,
            str(self.result),
            str(self.visits),
            f"{self.time_seconds:.9f}",
        ]


def _require_non_negative(value: int, label: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ProfilerInputError(f"{label} must be an integer")
    if value < 0:
        raise ProfilerInputError(f"{label} must be non-negative")


def perfect_tree(depth: int) -> Optional[TreeNode]:
    """Return a perfect tree with ``depth`` levels, values in level order."""

    _require_non_negative(depth, "depth")
    if depth == 0:
        return None
    nodes = [TreeNode(index + 1) for index in range(2**depth - 1)]
    for index, node in enumerate(nodes):
        left, right = 2 * index + 1, 2 * index + 2
        if right < len(nodes):
            node.left = nodes[left]
            node.right = nodes[right]
    return nodes[0]


def left_chain(length: int) -> Optional[TreeNode]:
    """Return a tree of ``length`` nodes where each node is a left child."""

    _require_non_negative(length, "length")
    root: Optional[TreeNode] = None
    for value in range(length, 0, -1):
        root = TreeNode(value, left=root)
    return root


def random_tree(size: int, rng: random.Random) -> Optional[TreeNode]:
    """Return a random binary tree with exactly ``size`` nodes.

    Every new node descends from the root taking random turns until it finds a
    free child slot, which produces a mix of bushy and stringy subtrees.
    """

    _require_non_negative(size, "size")
    if size == 0:
        return None
    root = TreeNode(1)
    for value in range(2, size + 1):
        node = root
        while True:
            if rng.random() < 0.5:
                if node.left is None:
                    node.left = TreeNode(value)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = TreeNode(value)
                    break
                node = node.right
    return root


def build_tree(shape: str, size: int, seed: int = DEFAULT_SEED) -> Optional[TreeNode]:
    """Build a tree of ``size`` nodes for the named ``shape``.

    ``perfect`` rounds ``size`` down to the largest perfect tree that fits.
    """

    if shape == "chain":
        return left_chain(size)
    if shape == "random":
        return random_tree(size, random.Random(seed))
    if shape == "perfect":
        _require_non_negative(size, "size")
        return perfect_tree((size + 1).bit_length() - 1)
    raise ProfilerInputError(f"Unknown tree shape: {shape!r}")


def profile_checkers(root: Optional[TreeNode]) -> Tuple[BalanceProfile, ...]:
    """Run every checker on *root* and return their metrics.

    A checker that exceeds the interpreter recursion limit is logged and left
    out of the result, so deep trees still report the iterative checker.
    Raises ``AssertionError`` when no checker completes, when the completed
    checkers disagree or when a single-pass checker visits more nodes than the
    tree contains.
    """

    size = tree_size(root)
    profiles: List[BalanceProfile] = []
    for name, checker in CHECKERS:
        visits = 0

        def _count(_node: TreeNode) -> None:
            nonlocal visits
            visits += 1

        start = time.perf_counter()
        try:
            result = checker(root, on_visit=_count)
        except RecursionError:
            logger.warning(
                "%s checker exceeded the recursion limit after %d visits; skipped",
                name,
                visits,
            )
            continue
        elapsed = time.perf_counter() - start
        logger.debug("%s checker: result=%s visits=%d elapsed=%.6fs", name, result, visits, elapsed)
        profiles.append(
            BalanceProfile(name=name, result=result, visits=visits, time_seconds=elapsed)
        )

    if not profiles:
        raise AssertionError("No balance checker completed")

    results = {profile.name: profile.result for profile in profiles}
    if len(set(results.values())) != 1:
        raise AssertionError(f"Balance checkers produced divergent results: {results}")

    for profile in profiles:
        if profile.name != "naive" and profile.visits > size:
            raise AssertionError(
                f"{profile.name} checker visited {profile.visits} nodes"
                f" in a tree of {size}"
            )
    return tuple(profiles)


def write_profiles_to_csv(
    path: Path, profiles: Iterable[BalanceProfile], *, newline: str = ""
) -> None:
    """Persist profiling results to ``path`` using a deterministic header."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline=newline) as handle:
        writer = csv.writer(handle)
        writer.writerow(["algorithm", "result", "visits", "time_seconds"])
        for profile in profiles:
            writer.writerow(profile.to_row())


def render_profiles(
    profiles: Sequence[BalanceProfile],
    *,
    title: str = "Balance checkers",
    console: Optional[Console] = None,
) -> None:
    """Print *profiles* as a table."""

    console = console or Console()
    table = Table(title=title)
    table.add_column("Algorithm", style="cyan")
    table.add_column("Balanced")
    table.add_column("Visits", justify="right")
    table.add_column("Time (ms)", justify="right")
    for profile in profiles:
        table.add_row(
            profile.name,
            "yes" if profile.result else "no",
            str(profile.visits),
            f"{profile.time_seconds * 1000:.3f}",
        )
    console.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for profiling the balance checkers."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--shape",
        choices=["perfect", "chain", "random"],
        default=DEFAULT_SHAPE,
        help="Shape of the generated tree.",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_SIZE,
        help="Number of nodes to generate (rounded down for perfect trees).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help="Seed for the random shape.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional destination CSV file for profiling results.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.size < 0:
        parser.error("--size must be non-negative")

    root = build_tree(args.shape, args.size, args.seed)
    try:
        profiles = profile_checkers(root)
    except AssertionError as exc:
        logger.error("Failed to profile balance checkers: %s", exc)
        return 1

    render_profiles(profiles, title=f"{args.shape} tree, {tree_size(root)} nodes")
    if args.output is not None:
        write_profiles_to_csv(args.output, profiles)
        logger.info("Profiles written to %s", args.output)
    return 0


__all__ = [
    "BalanceProfile",
    "CHECKERS",
    "ProfilerInputError",
    "build_tree",
    "left_chain",
    "main",
    "perfect_tree",
    "profile_checkers",
    "random_tree",
    "render_profiles",
    "write_profiles_to_csv",
]


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
