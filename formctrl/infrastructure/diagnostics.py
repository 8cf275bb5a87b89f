"""Structlog implementation of the diagnostics port."""

from typing import Any

from formctrl.domain.ports import DiagnosticsPort
from formctrl.shared.logging import get_logger


class StructlogDiagnostics(DiagnosticsPort):
    """Diagnostics emitted as structlog events."""

    def __init__(self, logger_name: str = "formctrl.diagnostics", **context: Any) -> None:
        """
        Initialize diagnostics with a bound logger.

        Args:
            logger_name: Logger name
            **context: Fields bound to every event (e.g. form="signup")
        """
        self._logger = get_logger(logger_name).bind(**context)

    def warning(self, event: str, **fields: Any) -> None:
        self._logger.warning(event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._logger.error(event, **fields)
