"""
Data sanitizers for logging control values.

Diagnostics carry control names and, now and then, control values. Values
of password, document and card controls never reach the log output.
"""

import re
from typing import Any

from structlog.types import EventDict, WrappedLogger

# Sensitive field patterns that should be masked
SENSITIVE_PATTERNS = [
    r"password",
    r"pwd",
    r"secret",
    r"token",
    r"cpf",
    r"cnpj",
    r"pis",
    r"credit_card",
    r"card_number",
    r"cvv",
]

# Control types whose `value` field is always redacted
SENSITIVE_CONTROL_TYPES = {"PASSWORD", "CPF", "CNPJ", "PIS", "CREDIT_CARD"}

# Fields that should be partially masked
PARTIAL_MASK_FIELDS = {
    "email": lambda v: _mask_email(v),
    "phone": lambda v: _mask_phone(v),
    "cep": lambda v: _mask_cep(v),
}

REDACTED = "***REDACTED***"


class ControlValueProcessor:
    """
    Structlog processor masking sensitive control data.

    Applies to structlog events and to stdlib records routed through
    `ProcessorFormatter`, including their nested `diagnostic` payload.
    """

    def __call__(
        self,
        logger: WrappedLogger,
        name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Process log event and mask sensitive data."""
        return sanitize_for_log(event_dict)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize a dictionary for logging.

    Args:
        data: Dictionary to sanitize

    Returns:
        Sanitized dictionary with masked sensitive data
    """
    sanitized = {}
    value_is_sensitive = str(data.get("control_type", "")).upper() in SENSITIVE_CONTROL_TYPES

    for key, value in data.items():
        # Values of sensitive controls
        if key == "value" and value_is_sensitive:
            sanitized[key] = REDACTED
        # Check if field name indicates sensitive data
        elif _is_sensitive_field(key):
            sanitized[key] = REDACTED
        # Check if field should be partially masked
        elif key in PARTIAL_MASK_FIELDS:
            if value is not None:
                sanitized[key] = PARTIAL_MASK_FIELDS[key](str(value))
            else:
                sanitized[key] = None
        # Recursively sanitize nested dictionaries
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_log(value)
        # Sanitize lists
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized


def mask_sensitive_data(data_type: str, value: str) -> str:
    """
    Mask sensitive data according to its type.

    Args:
        data_type: Type of data to mask
        value: Value to mask

    Returns:
        Masked value
    """
    if not value:
        return "***"

    maskers = {
        "email": _mask_email,
        "phone": _mask_phone,
        "cep": _mask_cep,
    }

    masker = maskers.get(data_type, lambda v: "***MASKED***")
    return masker(value)


def _is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data."""
    field_lower = field_name.lower()
    return any(re.search(pattern, field_lower) for pattern in SENSITIVE_PATTERNS)


def _mask_email(value: str) -> str:
    """Mask email keeping domain."""
    if "@" in value:
        local, domain = value.rsplit("@", 1)
        if len(local) > 2:
            return f"{local[0]}***@{domain}"
        return f"***@{domain}"
    return "***"


def _mask_phone(value: str) -> str:
    """Mask phone number keeping the last 2 digits."""
    digits = re.sub(r"\D", "", value)
    if len(digits) > 4:
        return f"***{digits[-2:]}"
    return "***"


def _mask_cep(value: str) -> str:
    """Mask postal code keeping the region digit."""
    digits = re.sub(r"\D", "", value)
    if len(digits) == 8:
        return f"{digits[0]}****-***"
    return "***"
