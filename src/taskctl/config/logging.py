"""structlog setup for taskctl.

Log events go to stderr so stdout stays clean for command output: console
rendering by default, one JSON object per line with ``--log-json``.

The acting user travels through structlog's contextvars. Once
:func:`bind_actor` has run, every event a command emits carries
``actor_id``, including events from code that never sees the actor.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

APP_LOGGER = "taskctl"

# Third-party loggers that stay at WARNING even under --verbose.
_NOISY_LOGGERS = ("sqlalchemy",)


def bind_actor(actor_id: str | None) -> None:
    """Tag later log events in this context with *actor_id*; None clears it."""
    if actor_id is None:
        structlog.contextvars.unbind_contextvars("actor_id")
    else:
        structlog.contextvars.bind_contextvars(actor_id=actor_id)


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(pre_chain: list[Processor], log_json: bool) -> logging.Handler:
    renderer: Processor
    if log_json:
        pre_chain = [*pre_chain, structlog.processors.format_exc_info]
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route taskctl and library logging through one stderr handler.

    Args:
        verbose: Show taskctl DEBUG events. Otherwise only WARNING and above.
        log_json: Render JSON lines instead of console output.

    Safe to call more than once; the root handler is replaced, not stacked.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(pre_chain, log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
