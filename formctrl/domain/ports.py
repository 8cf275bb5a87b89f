"""Domain ports for formctrl.

Controls and collections never raise on bad input coming from the UI; they
report what happened through a `DiagnosticsPort` and keep going. Callers
inject an implementation (see `formctrl.infrastructure.diagnostics`); the
default writes to the standard library logger.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any


class DiagnosticsPort(ABC):
    """Port for non-fatal diagnostics emitted by controls and collections."""
    
    @abstractmethod
    def warning(self, event: str, **fields: Any) -> None:
        """
        Report a recoverable problem.
        
        Args:
            event: Event name (e.g. "collection_set_value_missed")
            **fields: Structured context for the event
        """
        pass
    
    @abstractmethod
    def error(self, event: str, **fields: Any) -> None:
        """
        Report a failure that was caught and converted into a soft result.
        
        Args:
            event: Event name (e.g. "interceptor_failed")
            **fields: Structured context for the event
        """
        pass


class LoggingDiagnostics(DiagnosticsPort):
    """Diagnostics written to a standard library logger."""
    
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("formctrl.domain")
    
    def warning(self, event: str, **fields: Any) -> None:
        self._logger.warning(event, extra={"diagnostic": fields})
    
    def error(self, event: str, **fields: Any) -> None:
        self._logger.error(event, extra={"diagnostic": fields})


def default_diagnostics() -> DiagnosticsPort:
    """Diagnostics used when the caller injects none."""
    return LoggingDiagnostics()
