"""structlog setup for a browdi invocation.

Log records from ``logging.getLogger(__name__)`` in the library modules go
through structlog's ``ProcessorFormatter`` on stderr, so stdout stays free
for command results and piped JSON.

Two renderers:
- console (default): colored only when stderr is a terminal
- JSON lines (``--log-json``)
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers held at WARNING even with -v. SQLAlchemy logs every
# statement at INFO and pluggy traces each hook call at DEBUG, which would
# bury the dispatch messages.
_QUIET_LIBRARIES: tuple[str, ...] = ("sqlalchemy", "pluggy")


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route browdi and library logging to stderr.

    Called once per invocation by the CLI context. Calling it again
    replaces the root handler rather than adding another.

    Args:
        verbose: Let ``browdi.*`` loggers emit DEBUG (launch argv, registry
            contents, remembered defaults). Otherwise WARNING and up, which
            covers failed launches and failed store writes.
        log_json: Emit one JSON object per line instead of console text.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stderr_handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("browdi").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
