# treestat/format.py

"""
Text formatting for tree lines.

These helpers turn the read-only accessors of a built node into the single
line of text printed for it: optional bracketed details (permissions, owner,
size, date), the drawing prefix and the coloured name. They only read nodes
and never touch the filesystem, except for owner lookups in the password
database.
"""


from __future__ import annotations

import pwd
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from treestat.render import Totals
    from treestat.tree import FsNode

KILO = 1 << 10
MEGA = KILO << 10
GIGA = MEGA << 10
TERA = GIGA << 10

DIR_COLOR = "\033[1;34m"
LINK_COLOR = "\033[1;36m"
EXEC_COLOR = "\033[1;32m"
RESET = "\033[m"


@dataclass(frozen=True)
class LineOptions:
    """Which details are shown on each line."""

    permissions: bool = False
    owner: bool = False
    size: bool = False
    human: bool = False
    date: bool = False
    full_path: bool = False
    no_prefix: bool = False
    color: bool = True


def human_size(size: int) -> str:
    """
    Render a byte count with a binary unit suffix, right-aligned.

    Examples
    --------
    >>> human_size(512)
    '   512B'
    >>> human_size(1536)
    '   1.5K'
    """

    for limit, unit in ((TERA, "T"), (GIGA, "G"), (MEGA, "M"), (KILO, "K")):
        if size > limit:
            return f"{size / limit:6.1f}{unit}"
    return f"{size:6d}B"


def format_date(when: datetime) -> str:
    """Render a timestamp as ``YYYY.MM.DD HH:MM``."""
    return when.strftime("%Y.%m.%d %H:%M")


@lru_cache(maxsize=None)
def owner_name(uid: int) -> str:
    """Resolve a user id to a login name, falling back to the numeric id."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def colorize(node: FsNode, text: str) -> str:
    """Wrap ``text`` in the ANSI colour matching the kind of ``node``."""
    if node.is_dir:
        return f"{DIR_COLOR}{text}{RESET}"
    if node.is_symlink:
        return f"{LINK_COLOR}{text}{RESET}"
    if node.is_executable:
        return f"{EXEC_COLOR}{text}{RESET}"
    return text


def format_node(node: FsNode, options: LineOptions | None = None) -> str:
    """
    Format the output line of a node.

    Parameters
    ----------
    node : FsNode
        Node to format.
    options : LineOptions | None, optional
        Details to include. Defaults to a plain coloured line.

    Returns
    -------
    str
        ``prefix[details] name`` or ``prefixname`` when no detail is shown.
    """

    options = options or LineOptions()
    # (separator, text) pairs; the separator is dropped for the first detail
    details: list[tuple[str, str]] = []
    if options.permissions:
        details.append(("", node.permissions))
    if options.owner:
        details.append(("  ", f"{node.owner:<10}"))
    if options.human:
        details.append((" ", human_size(node.total_size)))
    elif options.size:
        details.append((" ", f"{node.total_size:10d}"))
    if options.date:
        details.append(("  ", format_date(node.mtime)))

    prefix = "" if options.no_prefix else node.prefix
    name = node.display_name(full_path=options.full_path)
    if options.color:
        name = colorize(node, name)
    if not details:
        return f"{prefix}{name}"
    info = details[0][1] + "".join(sep + text for sep, text in details[1:])
    return f"{prefix}[{info}] {name}"


def format_totals(totals: Totals) -> str:
    """Render the closing summary line, e.g. ``10B used in 2 directories, 1 files``."""
    return f"{human_size(totals.size).strip()} used in {totals.directories} directories, {totals.files} files"
