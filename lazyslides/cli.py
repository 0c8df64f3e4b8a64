"""Command-line front door for lazyslides.

Parses CLI options, resolves the starting path and the file filter, and
either prints the result of a few navigation steps or launches the
interactive terminal viewer.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import AccessError, EmptyBuffer, NoParentDirectory, OutOfRange
from .file_tree_model import FilterSpec, normalize_extension
from .runtime import ViewerSession, run_viewer
from .runtime.config import load_filter_spec, load_logging_config, save_filter_spec
from .runtime.logs import configure_logging, default_log_path


def _extension_list(value: str) -> list[str]:
    """argparse type for comma-separated extension lists."""
    extensions = [part for part in (piece.strip() for piece in value.split(",")) if normalize_extension(part)]
    if not extensions:
        raise argparse.ArgumentTypeError("expected at least one extension")
    return extensions


def _filter_from_args(args: argparse.Namespace) -> FilterSpec | None:
    if args.glob is not None:
        return FilterSpec.from_glob(args.glob)
    if args.ext is not None:
        return FilterSpec.from_extensions(args.ext)
    return None


def run_once(
    path: Path,
    filter_spec: FilterSpec,
    root: Path | None = None,
    *,
    move: int = 0,
    next_dir: bool = False,
    prev_dir: bool = False,
    data_uri: bool = False,
) -> str:
    """Open a session, apply the directory jump and then the move, and report.

    Returns the landing path, or its data URI when ``data_uri`` is set.
    """
    session = ViewerSession.open(path, filter_spec, root=root)
    if next_dir:
        session.step_next_directory()
    if prev_dir:
        session.step_prev_directory()
    if data_uri:
        return session.show(move).payload
    return str(session.move_by(move))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Step through images across a directory tree as one ordered sequence."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Image file (or directory) to start from. Defaults to current directory.",
    )
    filters = parser.add_mutually_exclusive_group()
    filters.add_argument(
        "--ext",
        type=_extension_list,
        default=None,
        help="Comma-separated file extensions to show (case-insensitive).",
    )
    filters.add_argument("--glob", default=None, help="Shell-glob pattern file names must match.")
    parser.add_argument("--root", default=None, help="Never walk above this directory.")
    parser.add_argument("--save-filter", action="store_true", help="Remember the chosen filter as the default.")
    parser.add_argument("--move", type=int, default=None, help="Move N files (negative moves backward), print and exit.")
    jumps = parser.add_mutually_exclusive_group()
    jumps.add_argument("--next-dir", action="store_true", help="Jump to the next directory with matches.")
    jumps.add_argument("--prev-dir", action="store_true", help="Jump to the previous directory with matches.")
    parser.add_argument("--data-uri", action="store_true", help="Print the landing image as a data: URI.")
    parser.add_argument("--nopager", action="store_true", help="Print the landing path without the interactive viewer.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR).")
    parser.add_argument(
        "--log-file",
        nargs="?",
        type=Path,
        const=default_log_path(),
        default=None,
        help="Also log to a rotating file (default location when no path is given).",
    )
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and navigate from the given path.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(load_logging_config(args.log_level, args.log_file))

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    root: Path | None = None
    if args.root is not None:
        root = Path(args.root)
        if not root.is_dir():
            raise SystemExit(f"Root is not a directory: {root}")

    try:
        filter_spec = _filter_from_args(args)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if filter_spec is None:
        filter_spec = load_filter_spec()
    elif args.save_filter:
        save_filter_spec(filter_spec)

    one_shot = (
        args.nopager
        or args.data_uri
        or args.move is not None
        or args.next_dir
        or args.prev_dir
        or not sys.stdin.isatty()
        or not sys.stdout.isatty()
    )
    try:
        if one_shot:
            result = run_once(
                path,
                filter_spec,
                root,
                move=args.move or 0,
                next_dir=args.next_dir,
                prev_dir=args.prev_dir,
                data_uri=args.data_uri,
            )
            sys.stdout.write(result + "\n")
            return
        final_path = run_viewer(path, filter_spec, root=root)
    except (OutOfRange, NoParentDirectory) as exc:
        raise SystemExit(f"Cannot move further: {exc}") from exc
    except AccessError as exc:
        raise SystemExit(f"Cannot read directory: {exc.path}") from exc
    except EmptyBuffer as exc:
        raise SystemExit(f"No matching files: {exc}") from exc
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    sys.stdout.write(f"{final_path}\n")


if __name__ == "__main__":
    main()
