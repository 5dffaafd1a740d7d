"""structlog setup shared by the model-scout server and CLI.

The server logs JSON lines by default (``MODEL_SCOUT_LOG_JSON``) so catalog
refreshes and upstream failures can be shipped as-is. The CLI switches to
console rendering at WARNING, or DEBUG with ``--verbose``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(json_output: bool = True, log_level: str = "INFO") -> None:
    """Route structlog and stdlib logging (uvicorn, httpx) to stderr.

    Args:
        json_output: JSON lines for the server, colored console output for the CLI.
        log_level: Level name from ``MODEL_SCOUT_LOG_LEVEL`` or the CLI flags.
            Unknown names fall back to INFO.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]

    if json_output:
        renderer: list[Any] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]

    # The CLI prints tables on stdout, so log lines go to stderr
    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return the logger a model_scout module logs catalog and request events on."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Tag the log lines of the current request, e.g. with its method and path."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop tags left over from the previous request on this context."""
    structlog.contextvars.clear_contextvars()
