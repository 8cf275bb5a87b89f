"""
Structlog setup shared by formctrl and the standard library.

Domain diagnostics are written through `logging` (the domain does not know
structlog); the handler installed here renders those records with the same
processor chain as native structlog events, so values are masked either way.
"""

import logging
import os
from typing import List

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    JSONRenderer,
    KeyValueRenderer,
    TimeStamper,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import BoundLogger, ExtraAdder, ProcessorFormatter, add_logger_name
from structlog.typing import Processor

from .sanitizers import ControlValueProcessor


def get_logger(name: str) -> BoundLogger:
    """Structlog logger bound to the formctrl service and environment."""
    return structlog.get_logger(name).bind(
        service="formctrl",
        environment=os.getenv("FORMCTRL_ENVIRONMENT", "development"),
    )


def configure_logging(
    environment: str = "development",
    log_level: str = "INFO",
    json_logs: bool = True,
    include_caller_info: bool = True,
) -> None:
    """
    Route structlog events and stdlib records to one stderr handler.

    Args:
        environment: development, staging, production or test
        log_level: Level name; unknown names fall back to INFO
        json_logs: JSON lines when True, key=value pairs otherwise
        include_caller_info: Add file, function and line (development only)
    """
    level = _level_number(log_level)
    processors = _shared_processors(environment, include_caller_info)

    structlog.configure(
        processors=processors + [ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=[ExtraAdder()] + processors,
            processors=[ProcessorFormatter.remove_processors_meta, _renderer(json_logs)],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def _shared_processors(environment: str, include_caller_info: bool) -> List[Processor]:
    processors: List[Processor] = [
        merge_contextvars,
        TimeStamper(fmt="ISO", utc=True),
        add_log_level,
        add_logger_name,
    ]
    if include_caller_info and environment == "development":
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ],
                additional_ignores=["structlog", "logging"],
            )
        )
    # Masking stays last
    processors += [format_exc_info, ControlValueProcessor()]
    return processors


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return JSONRenderer(sort_keys=True)
    return KeyValueRenderer(key_order=["timestamp", "level", "event", "logger"])


def _level_number(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
