"""Shared logging helpers for docpatch."""

from __future__ import annotations

import logging
import sys


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Initialise the root logger for command-line use.

    Records go to stderr so that patched documents written to stdout stay clean.
    ``verbose`` lowers the level to DEBUG, which logs every applied operation. Pass
    ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
