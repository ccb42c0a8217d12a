"""Logging setup shared by CLI entry points.

Log records go to stderr through Rich so they never interleave with the
findings printed on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(*, verbose: bool = False, console: Console | None = None) -> None:
    """Configure the root logger once per process.

    - WARNING and above by default, DEBUG with `verbose`.
    - Noisy transport loggers (httpx/httpcore) stay at WARNING.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root.addHandler(handler)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
