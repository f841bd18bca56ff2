# treestat/cli.py

"""
Command-line entry point.

Prints one line per node for each requested root, followed by a totals line.
Short flags may be grouped (``-adh`` is ``-a -d -h``).
"""


from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from treestat import __version__
from treestat.config import TreeConfig
from treestat.format import LineOptions, format_node, format_totals
from treestat.render import TreeWalk


def split_flags(args: Sequence[str]) -> list[str]:
    """Expand grouped single-character flags: ``-ab`` becomes ``-a -b``."""
    out: list[str] = []
    for arg in args:
        if arg.startswith("-") and not arg.startswith("--") and len(arg) > 2:
            out.extend(f"-{c}" for c in arg[1:])
        else:
            out.append(arg)
    return out


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    ``-h`` selects human-readable sizes, so help is only available as
    ``--help``.
    """

    parser = argparse.ArgumentParser(
        prog="treestat",
        description="List directory contents as a tree, with sizes and totals.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", default=["."], help="Roots to display (default: .)")
    parser.add_argument("-a", dest="show_hidden", action="store_true", help="Display all files")
    parser.add_argument("-d", dest="only_dirs", action="store_true", help="Display only directories")
    parser.add_argument("-l", dest="follow_symlinks", action="store_true", help="Follow symbolic links")
    parser.add_argument("-p", dest="permissions", action="store_true", help="Display permissions")
    parser.add_argument(
        "-L", dest="max_depth", type=int, default=3, metavar="N",
        help=(
            "Max depth to explore, infinite if 0 (default: 3). "
            "Depth counts from the root: -L 1 shows each root and its "
            "immediate entries, -L 2 adds their contents"
        ),
    )
    parser.add_argument("-u", dest="owner", action="store_true", help="Display owner")
    parser.add_argument("-s", dest="size", action="store_true", help="Display size in bytes")
    parser.add_argument("-h", dest="human", action="store_true", help="Display size in human format")
    parser.add_argument("-D", dest="date", action="store_true", help="Display last modified date")
    parser.add_argument("-f", dest="full_path", action="store_true", help="Display full path on each file")
    parser.add_argument("-i", dest="no_prefix", action="store_true", help="Don't display indentations")
    parser.add_argument("-n", dest="no_color", action="store_true", help="Don't display colors")
    parser.add_argument("--help", action="help", help="Print this help")
    parser.add_argument("-v", action="version", version=__version__, help="Print the version")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the command line.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit status, always 0; unreadable roots are only reported.
    """

    parser = build_parser()
    args = parser.parse_args(split_flags(sys.argv[1:] if argv is None else argv))

    logging.basicConfig(
        level=logging.WARNING,
        format=f"{parser.prog}: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    # negative depths mean unbounded, like 0
    config = TreeConfig(
        max_depth=max(args.max_depth, 0),
        show_hidden=args.show_hidden,
        only_dirs=args.only_dirs,
        follow_symlinks=args.follow_symlinks,
        dirs_first=True,
    )
    options = LineOptions(
        permissions=args.permissions,
        owner=args.owner,
        size=args.size,
        human=args.human,
        date=args.date,
        full_path=args.full_path,
        no_prefix=args.no_prefix,
        color=not args.no_color,
    )

    walk = TreeWalk(args.paths, config)
    for node in walk:
        print(format_node(node, options))
    print()
    print(format_totals(walk.totals))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
