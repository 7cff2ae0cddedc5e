"""Logging configuration for the command-line tools.

Library code only ever calls ``logging.getLogger(__name__)``; handlers
are installed once, by the CLI, through :func:`setup_logging`.

Usage
-----
::

    from pluginreg.core.logging import setup_logging

    setup_logging(verbose=True)
"""
from __future__ import annotations

import logging


def setup_logging(quiet: bool = False, verbose: bool = False, debug: bool = False) -> None:
    """Configure the root logger with a Rich handler on stderr.

    Flag precedence is ``debug > verbose > quiet > normal``:

    - quiet:   ERROR
    - normal:  WARNING
    - verbose: INFO
    - debug:   DEBUG, with rich tracebacks

    Parameters
    ----------
    quiet:
        Only show errors.
    verbose:
        Show informational messages such as configuration counts.
    debug:
        Show everything, including per-plugin resolution traces.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
