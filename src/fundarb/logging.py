"""structlog setup for the fundarb CLI and library callers.

Events are snake_case names with key/value context, routed through the
standard library root logger so third-party records share one format.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

_NAMESPACE = "fundarb"


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(json_format: bool) -> structlog.types.Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    # Plain text: output is often piped or captured.
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route all log records to one handler on ``stream``.

    Args:
        log_level: Root level name; unknown names fall back to INFO.
        json_format: One JSON object per line instead of key=value text.
        stream: Defaults to ``sys.stderr``, leaving stdout to command output.
    """
    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_format),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger named ``fundarb.<name>`` (names already under it are kept)."""
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return structlog.get_logger(name)
