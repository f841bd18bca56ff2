# treestat/config.py

"""
Walk configuration.

A single immutable value groups every toggle that influences how a tree is
built: depth limit, hidden-entry visibility, directory-only listing, symlink
following and sibling ordering. It is passed explicitly to the builder, so
two walks with different settings never interfere with each other.
"""


from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class TreeConfig:
    """
    Options controlling tree construction.

    Parameters
    ----------
    max_depth : int, default=0
        Maximum depth to list. Directories at a depth lower than this value
        have their entries listed; ``0`` means unbounded.
    show_hidden : bool, default=False
        Whether entries whose name starts with ``.`` are kept.
    only_dirs : bool, default=False
        Whether non-directory entries are dropped.
    follow_symlinks : bool, default=False
        Whether symbolic links to directories are descended into.
    dirs_first : bool, default=True
        Whether directories are ordered before other entries.
    """

    max_depth: int = 0
    show_hidden: bool = False
    only_dirs: bool = False
    follow_symlinks: bool = False
    dirs_first: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

    def replace(self, **changes) -> TreeConfig:
        """Return a copy of this configuration with ``changes`` applied."""
        return replace(self, **changes)

    def lists_children_at(self, depth: int) -> bool:
        """Whether a directory found at ``depth`` has its entries listed."""
        return self.max_depth == 0 or depth < self.max_depth
