"""
CLI entry point — argument parsing and the edit command.
"""

from __future__ import annotations

import argparse
import logging

from .api import FlagApiClient
from .config import Config
from .console import Console, setup_logger
from .editing import PatchComment, edit_document
from .errors import EditAborted, FlagShellError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flagshell",
        description="flagshell — administer feature-flag projects, environments and flags")
    parser.add_argument("--config", default=None,
                        help="Path to .flagshell.yaml config file")
    parser.add_argument("--verbose", action="store_true",
                        help="Also log to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    edit = sub.add_parser("edit", help="Edit a resource as JSON in your editor")
    edit.add_argument("resource", nargs="?", default=None,
                      help="API path of the resource, e.g. projects/default")
    edit.add_argument("--file", default=None,
                      help="Edit a local JSON file and print the patch")
    edit.add_argument("--editor", default=None,
                      help="Editor command (default: from config)")
    edit.add_argument("--dry-run", action="store_true",
                      help="Print the patch instead of sending it")
    edit.add_argument("--json", action="store_true",
                      help="Print results as JSON")
    return parser


def _show_patch(console: Console, patch: PatchComment, json_output: bool) -> None:
    if json_output:
        console.print_json(patch.to_dict())
        return
    console.println(f"Comment: {patch.comment}")
    for op in patch.patch:
        line = f"  {op.op:<8} {op.path}"
        if op.op != "remove":
            line += f" = {op.value!r}"
        console.println(line)


def _run_edit(args, cfg: Config, console: Console) -> int:
    editor = args.editor or cfg.EDITOR
    json_output = args.json or cfg.JSON_OUTPUT

    if args.file:
        with open(args.file, "rb") as f:
            original = f.read()
        patch = edit_document(original, editor, console=console, temp_dir=cfg.TEMP_DIR)
        if patch is None:
            console.println("No changes")
            return 0
        console.print_json(patch.to_dict())
        return 0

    if not args.resource:
        console.error("Please supply a resource path or --file")
        return 1

    client = FlagApiClient(cfg.API_BASE_URL, cfg.API_TOKEN, timeout=cfg.API_TIMEOUT)
    original = client.get_resource(args.resource)
    patch = edit_document(original, editor, console=console, temp_dir=cfg.TEMP_DIR)
    if patch is None:
        console.println("No changes")
        return 0

    if args.dry_run:
        _show_patch(console, patch, json_output)
        return 0

    updated = client.patch_resource(args.resource, patch)
    logger.info("[Cli] Patched %s with %d operation(s)", args.resource, len(patch.patch))
    if json_output:
        console.print_json(updated)
    else:
        console.println(f"Updated {args.resource}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        cfg = Config.load(args.config)
    except FlagShellError as exc:
        console.error(str(exc))
        return 1

    setup_logger(cfg.LOG_DIR, verbose=args.verbose)

    try:
        if args.command == "edit":
            return _run_edit(args, cfg, console)
    except EditAborted:
        return 1
    except (FlagShellError, OSError) as exc:
        logger.error("[Cli] %s failed: %s", args.command, exc)
        console.error(str(exc))
        return 1
    return 0
