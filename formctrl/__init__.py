"""
formctrl: form controls with type-aware filtering and validation.

Example:
    >>> from formctrl import Ctrl, ControlType
    >>> ctrl = Ctrl({"name": "cpf", "type": ControlType.CPF, "value": "52998224725"})
    >>> ctrl.value
    '529.982.247-25'
    >>> ctrl.validate()
    True
"""

from formctrl.application.blueprints import build_collection, parse_blueprints
from formctrl.config import Config, setup_logging
from formctrl.domain.collection import CtrlCollection
from formctrl.domain.ctrl import Ctrl
from formctrl.domain.enums import ControlState, ControlType
from formctrl.domain.errors import DomainError, InvalidBlueprintError, MissingControlNameError
from formctrl.domain.messages import ENGLISH, DefaultMessages
from formctrl.domain.ports import DiagnosticsPort, LoggingDiagnostics
from formctrl.domain.props import (
    create_empty_props,
    map_default_props,
    to_numeric_string,
    validate_ctrl_props,
)
from formctrl.domain.types import ControlProps, OptionItem
from formctrl.formats.registry import FormatRegistry, default_registry
from formctrl.infrastructure.diagnostics import StructlogDiagnostics
from formctrl.shared.logging import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ControlProps",
    "ControlState",
    "ControlType",
    "Ctrl",
    "CtrlCollection",
    "DefaultMessages",
    "DiagnosticsPort",
    "DomainError",
    "ENGLISH",
    "FormatRegistry",
    "InvalidBlueprintError",
    "LoggingDiagnostics",
    "MissingControlNameError",
    "OptionItem",
    "StructlogDiagnostics",
    "build_collection",
    "configure_logging",
    "create_empty_props",
    "default_registry",
    "get_logger",
    "map_default_props",
    "parse_blueprints",
    "setup_logging",
    "to_numeric_string",
    "validate_ctrl_props",
]
