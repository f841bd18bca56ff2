# treestat/tree.py

"""
Filesystem tree construction.

This module builds an in-memory tree of :class:`FsNode` objects for a root
path, in a single depth-first pass. Each node keeps the metadata captured when
its entry was discovered, its position among its siblings, the ancestor depths
at which a vertical connector must be drawn, and bottom-up aggregates (bytes,
directory count, file count) that are final before its parent reads them.

Nodes are ``anytree`` nodes, so the usual anytree iterators and renderers work
on a built tree. The main entry points are :func:`build_tree` and
:func:`iter_tree`.
"""


from __future__ import annotations

import logging
import os
import stat
from datetime import datetime
from pathlib import Path
from typing import Iterator

from anytree import NodeMixin, PreOrderIter

from treestat.config import TreeConfig
from treestat.filters import Entry, Metadata, apply_filter, make_filter, order_entries
from treestat.format import owner_name

logger = logging.getLogger(__name__)

BRANCH = "├── "
LAST_BRANCH = "└── "
VERTICAL = "│   "
BLANK = "    "


class PathUnreadable(OSError):
    """A requested root path could not be stat'd."""


class DirectoryListingFailed(OSError):
    """The entries of a directory could not be enumerated."""


class FsNode(NodeMixin):
    """
    One filesystem entry in a built tree.

    ``children``, ``parent`` and ``depth`` are provided by
    :class:`anytree.NodeMixin`; since anytree reserves ``path`` for the
    ancestry tuple, the filesystem location is stored in ``fs_path``.

    For a file, ``total_size`` is its own size, ``file_count`` is 1 and
    ``dir_count`` is 0. For a directory, ``dir_count`` starts at 1 and every
    aggregate receives the sum of its children's aggregates.
    """

    def __init__(
        self,
        entry: Entry,
        *,
        parent: FsNode | None = None,
        sibling_index: int = 0,
        is_last: bool = True,
        continuation_depths: tuple[int, ...] = (),
        given_path: str | None = None,
    ) -> None:
        self.name = entry.name
        self.fs_path = entry.path
        self.given_path = str(entry.path) if given_path is None else given_path
        self.metadata = entry.metadata
        self.sibling_index = sibling_index
        self.is_last = is_last
        self.continuation_depths = continuation_depths
        self.listing_error: DirectoryListingFailed | None = None
        if entry.metadata.is_dir:
            self.total_size, self.dir_count, self.file_count = 0, 1, 0
        else:
            self.total_size, self.dir_count, self.file_count = entry.metadata.size, 0, 1
        self.parent = parent

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.fs_path)!r}, depth={self.depth})"

    @property
    def is_dir(self) -> bool:
        """Whether the entry is listed as a directory."""
        return self.metadata.is_dir

    @property
    def is_symlink(self) -> bool:
        """Whether the entry itself is a symbolic link."""
        return self.metadata.is_symlink

    @property
    def is_executable(self) -> bool:
        """Whether a non-directory entry has any execute bit set."""
        return self.metadata.is_executable

    @property
    def mode(self) -> int:
        """Raw ``st_mode`` of the entry."""
        return self.metadata.mode

    @property
    def uid(self) -> int:
        """Owning user id."""
        return self.metadata.uid

    @property
    def mtime(self) -> datetime:
        """Modification time, in local time."""
        return datetime.fromtimestamp(self.metadata.mtime)

    @property
    def permissions(self) -> str:
        """``ls``-style permission string, e.g. ``drwxr-xr-x``."""
        return stat.filemode(self.metadata.mode)

    @property
    def owner(self) -> str:
        """Owning user name, or the numeric id when it has no name."""
        return owner_name(self.metadata.uid)

    def display_name(self, full_path: bool = False) -> str:
        """
        Return the name shown for this node.

        Roots show their path exactly as given. Other nodes show their
        basename, or their joined path when ``full_path`` is set.
        """

        if self.depth == 0:
            return self.given_path
        if full_path:
            return str(self.fs_path)
        return self.name

    @property
    def prefix(self) -> str:
        """
        Branch drawing for this node.

        One column per depth from 0 to ``depth - 1``: a vertical connector
        where the ancestor at that depth has more siblings below it, blank
        otherwise. The last column is a branch or last-branch glyph. Roots
        have no prefix.
        """

        depth = self.depth
        if depth == 0:
            return ""
        continued = set(self.continuation_depths)
        columns = [VERTICAL if d in continued else BLANK for d in range(depth)]
        columns.append(LAST_BRANCH if self.is_last else BRANCH)
        return "".join(columns)


def _read_entry(path: Path, name: str, follow_symlinks: bool, *, given: str | None = None) -> Entry:
    """
    Capture an entry with a symlink-preserving stat.

    ``given`` is the path string exactly as supplied by the caller, used for
    the stat instead of ``path`` when present: ``Path`` drops a trailing
    slash, and ``lstat("link/")`` resolves the link while ``lstat("link")``
    does not.

    Raises
    ------
    OSError
        If the entry cannot be stat'd.
    """

    location = path if given is None else given
    st = os.lstat(location)
    target = None
    if follow_symlinks and stat.S_ISLNK(st.st_mode):
        try:
            target = os.stat(location)
        except OSError:
            # dangling link
            target = None
    return Entry(name=name, path=path, metadata=Metadata.from_stat(st, target=target))


def _scan_dir(path: Path, follow_symlinks: bool) -> list[Entry]:
    """
    List the immediate entries of a directory, in listing order.

    Entries removed between the listing and their stat are skipped. Failing
    to open or read the directory itself raises ``OSError``.
    """

    entries: list[Entry] = []
    with os.scandir(path) as it:
        for de in it:
            try:
                entries.append(_read_entry(path / de.name, de.name, follow_symlinks))
            except OSError as exc:
                logger.debug("Skipping %s: %s", path / de.name, exc)
    return entries


def build_tree(root: Path | str, config: TreeConfig | None = None) -> FsNode:
    """
    Build the node tree for a root path.

    The root is stat'd without following it, and is always included even if
    the filter would reject it (a hidden root given explicitly is shown). Below
    the root, each listed directory is filtered, ordered and recursed into
    until ``config.max_depth`` is reached. A directory that cannot be listed
    keeps zero children, and the failure is recorded on its ``listing_error``.

    Parameters
    ----------
    root : pathlib.Path | str
        Path of the root entry. It is kept as given for display.
    config : TreeConfig | None, optional
        Walk configuration. Defaults to ``TreeConfig()``.

    Returns
    -------
    FsNode
        The fully built root node, with final aggregates.

    Raises
    ------
    PathUnreadable
        If the root path cannot be stat'd.
    """

    config = config or TreeConfig()
    accept = make_filter(config)
    given = os.fspath(root)
    root = Path(given)

    try:
        entry = _read_entry(root, root.name or given, config.follow_symlinks, given=given)
    except OSError as exc:
        raise PathUnreadable(exc.errno, exc.strerror or str(exc), given) from exc

    def grow(node: FsNode, ancestry: frozenset[tuple[int, int]]) -> None:
        """
        List, filter and order the entries of ``node`` and attach them.

        ``ancestry`` holds the (device, inode) pairs of the directories above
        ``node`` and is only tracked when symlinks are followed.
        """

        if not node.is_dir or not config.lists_children_at(node.depth):
            return

        if config.follow_symlinks:
            try:
                st = os.stat(node.fs_path)
            except OSError as exc:
                fail(node, exc)
                return
            key = (st.st_dev, st.st_ino)
            if key in ancestry:
                logger.warning("Symbolic link loop at %s, not descending", node.fs_path)
                return
            ancestry = ancestry | {key}

        try:
            entries = _scan_dir(node.fs_path, config.follow_symlinks)
        except OSError as exc:
            fail(node, exc)
            return

        entries = order_entries(apply_filter(entries, accept), dirs_first=config.dirs_first)

        # children draw a connector at our depth only if we have siblings below
        continuation = node.continuation_depths
        if not node.is_last:
            continuation = continuation + (node.depth,)

        last = len(entries) - 1
        for i, child_entry in enumerate(entries):
            child = FsNode(
                child_entry,
                parent=node,
                sibling_index=i,
                is_last=i == last,
                continuation_depths=continuation,
            )
            grow(child, ancestry)
            node.total_size += child.total_size
            node.dir_count += child.dir_count
            node.file_count += child.file_count

    def fail(node: FsNode, exc: OSError) -> None:
        """Log a listing failure and record it on ``node``."""
        logger.warning("Cannot list directory %s: %s", node.fs_path, exc)
        error = DirectoryListingFailed(exc.errno, exc.strerror or str(exc), str(node.fs_path))
        error.__cause__ = exc
        node.listing_error = error

    node = FsNode(entry, given_path=given)
    grow(node, frozenset())
    return node


def iter_tree(root: FsNode) -> Iterator[FsNode]:
    """
    Iterate over a built tree in pre-order.

    The iterator is lazy and reads only the built nodes; calling this again on
    the same root yields the same sequence.
    """

    return PreOrderIter(root)
