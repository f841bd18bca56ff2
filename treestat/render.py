# treestat/render.py

"""
Walking and drawing several roots.

:class:`TreeWalk` builds each requested root in turn and yields its nodes in
pre-order, accumulating global totals as it goes. Roots that cannot be read
are skipped. :func:`draw_tree` and :func:`build_and_draw_tree` render plain
(uncoloured) tree diagrams as strings.
"""


from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from treestat.config import TreeConfig
from treestat.tree import FsNode, PathUnreadable, build_tree, iter_tree

logger = logging.getLogger(__name__)


@dataclass
class Totals:
    """Directory, file and byte totals over one or more roots."""

    directories: int = 0
    files: int = 0
    size: int = 0

    def add(self, root: FsNode) -> None:
        """Add the aggregates of a built root."""
        self.directories += root.dir_count
        self.files += root.file_count
        self.size += root.total_size


@dataclass
class TreeWalk:
    """
    Pre-order walk over several roots.

    Iterating builds the roots one by one, in the order given: a root is
    built, its aggregates are added to ``totals``, and all of its nodes are
    yielded before the next root is built. Unreadable roots are logged and
    recorded in ``skipped``. Each new iteration starts again from scratch.

    Parameters
    ----------
    paths : Iterable[pathlib.Path | str]
        Root paths to walk.
    config : TreeConfig, optional
        Walk configuration shared by every root.
    """

    paths: Iterable[Path | str]
    config: TreeConfig = field(default_factory=TreeConfig)
    totals: Totals = field(default_factory=Totals, init=False)
    skipped: list[PathUnreadable] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        # paths may be a one-shot iterator; keep them for re-iteration
        self.paths = list(self.paths)

    def roots(self) -> Iterator[FsNode]:
        """Build and yield each readable root, updating totals."""
        self.totals = Totals()
        self.skipped = []
        for path in self.paths:
            try:
                root = build_tree(path, self.config)
            except PathUnreadable as exc:
                logger.warning("Skipping %s: %s", path, exc.strerror)
                self.skipped.append(exc)
                continue
            self.totals.add(root)
            yield root

    def __iter__(self) -> Iterator[FsNode]:
        """Yield the nodes of every readable root, in pre-order."""
        for root in self.roots():
            yield from iter_tree(root)


def draw_tree(root: FsNode, *, full_path: bool = False) -> str:
    """Render a built tree as a plain multi-line diagram."""
    return "\n".join(
        node.prefix + node.display_name(full_path=full_path) for node in iter_tree(root)
    )


def build_and_draw_tree(
    root: Path | str,
    config: TreeConfig | None = None,
    *,
    full_path: bool = False,
) -> str:
    """
    Build the tree for ``root`` and render it as a string.

    Equivalent to ``draw_tree(build_tree(root, config))``. Nothing is printed.

    Raises
    ------
    PathUnreadable
        If ``root`` cannot be stat'd.
    """

    return draw_tree(build_tree(root, config), full_path=full_path)
