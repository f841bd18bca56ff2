"""
treestat — annotated filesystem trees.

This package builds an in-memory tree for one or more root paths and exposes,
for every node, what is needed to print it as a tree diagram:

- depth, drawing prefix and last-sibling state,
- metadata captured at discovery (type, size, mtime, mode, owner),
- aggregated directory, file and byte counts.

Trees are ``anytree`` nodes built from an explicit, immutable
:class:`TreeConfig`; traversal is a plain pre-order generator.
"""

from __future__ import annotations

__version__ = "0.3.0"

from .config import TreeConfig
from .filters import Entry, Metadata, apply_filter, make_filter, order_entries
from .tree import DirectoryListingFailed, FsNode, PathUnreadable, build_tree, iter_tree
from .render import Totals, TreeWalk, build_and_draw_tree, draw_tree

__all__ = [
    "TreeConfig",
    "Entry",
    "Metadata",
    "make_filter",
    "apply_filter",
    "order_entries",
    "FsNode",
    "PathUnreadable",
    "DirectoryListingFailed",
    "build_tree",
    "iter_tree",
    "Totals",
    "TreeWalk",
    "draw_tree",
    "build_and_draw_tree",
]
