# src/statecheck/core/logging.py
"""Log output for specification runs.

Library modules log through structlog.get_logger(__name__) and never set up
output themselves. A test suite or script calls configure_logging() once to
choose console or JSON rendering.

Run context:
    run_specification() binds the search seed and settings with
    structlog.contextvars for the duration of a search, so every event of
    that search (generator rejections, command errors in the runner, the
    shrink summary) carries the seed needed to reproduce it. The chain below
    merges those contextvars into each event.

Failures:
    A SpecificationFailure passed as an event field is expanded into the
    failing commands, the attempt number and the error before rendering, so
    JSON output stays machine-readable instead of holding an object repr.

stdlib records, including those of subjects under test, are routed through
the same chain by ProcessorFormatter.
"""

import logging
import sys

import structlog
from structlog.stdlib import ProcessorFormatter
from structlog.typing import EventDict, Processor, WrappedLogger

from statecheck.contracts.errors import SpecificationFailure
from statecheck.reporting import format_command

# Hypothesis reports every example at DEBUG; searches run hundreds of them
_QUIET_LOGGERS: tuple[str, ...] = ("hypothesis",)


def expand_specification_failures(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace SpecificationFailure values with their commands, attempt and error."""
    for key, value in event_dict.items():
        if isinstance(value, SpecificationFailure):
            event_dict[key] = {
                "commands": [format_command(entry) for entry in value.commands],
                "attempt": value.attempt,
                "error": f"{type(value.error).__name__}: {value.error}",
            }
    return event_dict


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        expand_specification_failures,
    ]


def _render_chain(json_output: bool) -> list[Processor]:
    if json_output:
        # Live subjects and results are not JSON types; fall back to repr
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer(default=repr)]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route statecheck's events (and stdlib logging) to stdout.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        json_output: Render one JSON object per line instead of console text
        level: Root log level name (DEBUG shows command errors and rejections)
    """
    log_level = logging.getLevelNamesMapping()[level.upper()]
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must pick up later reconfiguration
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[ProcessorFormatter.remove_processors_meta, *_render_chain(json_output)],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
