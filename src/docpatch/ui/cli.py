from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from docpatch.adapters.json_files import PatchFileError
from docpatch.app import patch_files
from docpatch.config import ConfigurationError, configure_logging, get_patch_config
from docpatch.domain import PatchError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply JSON Patch documents")
    parser.add_argument("--verbose", action="store_true", help="Log every applied operation")
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply_cmd = subparsers.add_parser("apply", help="Apply a patch file to a JSON document")
    apply_cmd.add_argument("patch", type=Path, help="JSON file holding the patch (an array)")
    apply_cmd.add_argument("document", type=Path, help="JSON file holding the document")
    target = apply_cmd.add_mutually_exclusive_group()
    target.add_argument(
        "--output",
        type=Path,
        help="Write the patched document here instead of stdout",
    )
    target.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite the document file with the patched document",
    )
    apply_cmd.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indentation of the written JSON, 0 for compact (defaults to config)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
        configure_logging(verbose=parsed_args.verbose)
        config = get_patch_config()
        if parsed_args.indent is not None:
            config = replace(config, indent=parsed_args.indent)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "apply":
            result = patch_files(
                parsed_args.patch,
                parsed_args.document,
                output=parsed_args.output,
                in_place=parsed_args.in_place,
                config=config,
            )
            if result.written_to is None:
                sys.stdout.write(result.text + "\n")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except PatchFileError:
        log.exception("Cannot read or write JSON files")
        sys.exit(2)
    except PatchError:
        log.exception("Patch failed")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error while patching")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
