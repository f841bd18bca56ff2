# treestat/filters.py

"""
Directory entry selection and ordering.

Entries are the raw material of the tree builder: a name, a path and the
metadata captured once by ``lstat`` when the entry is discovered. This module
holds the two pure steps applied to every directory listing before it is
turned into nodes:

- a filter predicate derived from the walk configuration,
- a stable sibling ordering (optionally directories first).
"""


from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from treestat.config import TreeConfig


@dataclass(frozen=True)
class Metadata:
    """
    Filesystem attributes captured at discovery time.

    ``is_dir`` is the effective directory flag: a symbolic link counts as a
    directory only when links are followed and its target is a directory.
    ``size`` is the ``lstat`` size, or the target size for a followed link, and
    is only meaningful for non-directories.
    """

    is_dir: bool
    is_symlink: bool
    is_executable: bool
    size: int
    mtime: float
    mode: int
    uid: int

    @classmethod
    def from_stat(cls, st: os.stat_result, *, target: os.stat_result | None = None) -> Metadata:
        """
        Build metadata from an ``lstat`` result.

        Parameters
        ----------
        st : os.stat_result
            Result of a symlink-preserving stat call.
        target : os.stat_result | None, optional
            For a symbolic link that is followed, the stat of its target. The
            link then takes its directory flag, executable bit and size from
            the target. Permission bits and ownership stay the link's own.

        Returns
        -------
        Metadata
            The captured attributes.
        """

        is_symlink = stat.S_ISLNK(st.st_mode)
        effective = target if is_symlink and target is not None else st
        is_dir = stat.S_ISDIR(effective.st_mode)
        return cls(
            is_dir=is_dir,
            is_symlink=is_symlink,
            is_executable=not is_dir and bool(effective.st_mode & 0o111),
            size=effective.st_size,
            mtime=st.st_mtime,
            mode=st.st_mode,
            uid=st.st_uid,
        )


@dataclass(frozen=True)
class Entry:
    """A named filesystem entry together with its captured metadata."""

    name: str
    path: Path
    metadata: Metadata

    @property
    def is_hidden(self) -> bool:
        """Whether the name starts with a dot."""
        return self.name.startswith(".")

    @property
    def is_dir(self) -> bool:
        """Effective directory flag, see :class:`Metadata`."""
        return self.metadata.is_dir


def make_filter(config: TreeConfig) -> Callable[[Entry], bool]:
    """
    Return the acceptance predicate for a configuration.

    The two rules are independent and combine with a logical AND:
    hidden entries are rejected unless ``show_hidden`` is set, and
    non-directories are rejected when ``only_dirs`` is set.

    Parameters
    ----------
    config : TreeConfig
        Walk configuration.

    Returns
    -------
    Callable[[Entry], bool]
        Predicate evaluated independently for each entry.
    """

    show_hidden = config.show_hidden
    only_dirs = config.only_dirs

    def accept(entry: Entry) -> bool:
        """Return ``True`` if ``entry`` passes both rules."""
        if not show_hidden and entry.is_hidden:
            return False
        if only_dirs and not entry.is_dir:
            return False
        return True

    return accept


def apply_filter(entries: Iterable[Entry], accept: Callable[[Entry], bool]) -> list[Entry]:
    """Keep the entries accepted by ``accept``, preserving their order."""
    return [e for e in entries if accept(e)]


def order_entries(entries: Iterable[Entry], *, dirs_first: bool = True) -> list[Entry]:
    """
    Order sibling entries.

    Names are compared case-sensitively by code point. With ``dirs_first``,
    directories come before every other entry and each group is ordered by
    name. The sort is stable, so entries comparing equal keep their listing
    order.

    Parameters
    ----------
    entries : Iterable[Entry]
        Siblings to order.
    dirs_first : bool, default=True
        Whether directories are placed before other entries.

    Returns
    -------
    list[Entry]
        The ordered entries.
    """

    if dirs_first:
        return sorted(entries, key=lambda e: (not e.is_dir, e.name))
    return sorted(entries, key=lambda e: e.name)
