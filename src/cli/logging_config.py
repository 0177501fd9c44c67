"""Structured logging configuration using structlog."""

import logging
import re
import sys

import structlog

# Patterns to redact from log output
_REDACT_PATTERNS = [
    # Visitor ids: v_<epoch-ms>_<random>, keep the timestamp part for correlation
    (re.compile(r"\b(v_\d+_)[a-z0-9]+\b"), r"\1REDACTED"),
    # Email addresses typed into comments
    (re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "REDACTED@email"),
    # UK phone numbers typed into comments
    (re.compile(r"\b0\d{3,4}[ -]?\d{3}[ -]?\d{3,4}\b"), "REDACTED-phone"),
]

# Per-request access and transport chatter, shown only at DEBUG
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _redact_sensitive(_, __, event_dict: dict) -> dict:
    """Structlog processor to mask visitor ids and personal details."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            for pattern, replacement in _REDACT_PATTERNS:
                value = pattern.sub(replacement, value)
            event_dict[key] = value
    return event_dict


def _shared_processors() -> list:
    """Processors applied to both structlog and stdlib (uvicorn, httpx) records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            [
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive,
    ]


def _quiet_noisy_loggers(log_level: int) -> None:
    noisy_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def setup_logging(json_mode: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging through one redacting chain on stderr.

    Args:
        json_mode: JSON lines (for the API server behind a log collector).
                   False = human-readable console output (for the CLI).
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=False)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)
    _quiet_noisy_loggers(log_level)
