"""Property defaulting and value coercion for controls."""

import re
from dataclasses import fields, replace
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from .enums import ControlState, ControlType
from .errors import InvalidBlueprintError
from .messages import ENGLISH, DefaultMessages
from .ports import DiagnosticsPort
from .types import ControlProps, OptionItem

PropsInput = Union[ControlProps, Mapping[str, Any]]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_NUMBER_STRIP = re.compile(r"[^\d\-().,]+")
_NON_DIGIT = re.compile(r"\D")

# Limit rules whose default message interpolates the limit value.
_LIMIT_RULES = ("max_length", "min_length", "max_answers", "min_answers")

# Integer-only fields.
_INT_FIELDS = _LIMIT_RULES + ("cols", "rows")

# Format messages that are always populated, whatever the control type.
_FORMAT_RULES = ("date", "cnpj", "cpf", "pis", "credit_card", "email", "url")


def create_empty_props() -> ControlProps:
    """Generate default, empty, props for a `Ctrl` instance."""
    return ControlProps()


def map_default_props(
    props: Optional[PropsInput],
    messages: Optional[DefaultMessages] = None,
    diagnostics: Optional[DiagnosticsPort] = None,
) -> ControlProps:
    """
    Merge caller props over the empty props and fill in the derived defaults.

    Keys may be snake_case or camelCase (`requiredMessage`); keys that are
    absent or `None` keep their default and unknown keys are ignored.

    Args:
        props: Blueprint mapping or `ControlProps` to map
        messages: Catalog used for blank rule messages
        diagnostics: Receives a notice when the legacy `interceptor` key is used

    Returns:
        A new, fully-defaulted `ControlProps`

    Raises:
        InvalidBlueprintError: If `type`, `state`, `regex`, `options`, the
            callbacks or the numeric limits can't be interpreted
    """
    messages = messages or ENGLISH
    mapped = replace(create_empty_props(), **_collect_overrides(props, diagnostics))
    _check_callables(mapped)
    _check_limits(mapped)

    if mapped.required is True and _is_blank(mapped.required_message):
        mapped.required_message = messages.required

    for rule in _LIMIT_RULES:
        limit = getattr(mapped, rule)
        if limit and _is_blank(getattr(mapped, f"{rule}_message")):
            template = getattr(messages, rule)
            setattr(mapped, f"{rule}_message", template.format(limit=limit))

    if mapped.regex and _is_blank(mapped.regex_message):
        mapped.regex_message = messages.regex

    for rule in _FORMAT_RULES:
        if _is_blank(getattr(mapped, f"{rule}_message")):
            setattr(mapped, f"{rule}_message", getattr(messages, rule))

    mapped.type = _coerce_enum(ControlType, mapped.type, "type")
    mapped.state = _coerce_enum(ControlState, mapped.state, "state")
    mapped.regex = _coerce_regex(mapped.regex)
    mapped.options = _coerce_options(mapped.options)
    mapped.value = coerce_value(mapped.type, mapped.value)

    return mapped


def coerce_value(control_type: ControlType, value: Any) -> Any:
    """
    Coerce a raw value into the shape its control type expects.

    Falsy values of the plain types (including `0` and `False`) collapse
    into an empty string.
    """
    if control_type == ControlType.BOOLEAN:
        return value is True
    if control_type == ControlType.NUMBER:
        return _NUMBER_STRIP.sub("", value) if isinstance(value, str) else value
    if control_type.is_option_bearing():
        if isinstance(value, (list, tuple)):
            return list(value)
        return []
    return value or ""


def validate_ctrl_props(props: Any) -> bool:
    """
    Simple validation of props before building a `Ctrl`.

    Args:
        props: Props to validate

    Returns:
        True if props is a mapping/`ControlProps` carrying a non-empty `name`
    """
    if isinstance(props, ControlProps):
        name = props.name
    elif isinstance(props, Mapping):
        name = props.get("name")
    else:
        return False

    return name is not None and name != ""


def to_numeric_string(value: Any) -> str:
    """
    Remove all non-digit characters from a string or number.

    Anything that is not a string or a number yields an empty string.
    Floats are written out in positional notation before stripping.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return ""
    if isinstance(value, str):
        text = value.strip()
    elif isinstance(value, float):
        # Positional notation: 1e20 has 21 digits, not 3
        text = format(Decimal(repr(value)), "f")
    else:
        text = str(value)
    return _NON_DIGIT.sub("", text)


def props_to_dict(props: ControlProps) -> Dict[str, Any]:
    """Shallow dictionary of every property, keeping callables and patterns."""
    return {f.name: getattr(props, f.name) for f in fields(props)}


def _collect_overrides(
    props: Optional[PropsInput],
    diagnostics: Optional[DiagnosticsPort],
) -> Dict[str, Any]:
    """Normalize caller props into `ControlProps` keyword overrides."""
    if props is None:
        return {}
    if isinstance(props, ControlProps):
        source: Mapping[str, Any] = props_to_dict(props)
    elif isinstance(props, Mapping):
        source = props
    else:
        raise InvalidBlueprintError("props", "Props must be a mapping")

    known = ControlProps.field_names()
    overrides: Dict[str, Any] = {}
    legacy_interceptor = None

    for key, value in source.items():
        if value is None:
            continue
        normalized = _to_snake_case(str(key))
        if normalized == "interceptor":
            legacy_interceptor = value
        elif normalized in known:
            overrides[normalized] = value

    if legacy_interceptor is not None and "interceptors" not in overrides:
        if diagnostics is not None:
            diagnostics.warning(
                "deprecated_interceptor_key",
                name=overrides.get("name", ""),
                hint="use `interceptors`",
            )
        overrides["interceptors"] = legacy_interceptor

    return overrides


def _to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _is_blank(text: Optional[str]) -> bool:
    return text is None or str(text).strip() == ""


def _check_callables(props: ControlProps) -> None:
    if props.on_change is not None and not callable(props.on_change):
        raise InvalidBlueprintError("on_change", "on_change must be callable")

    interceptors = props.interceptors
    if interceptors is None or callable(interceptors):
        return
    if not isinstance(interceptors, (list, tuple)) or not all(callable(i) for i in interceptors):
        raise InvalidBlueprintError(
            "interceptors", "Interceptors must be a callable or a list of callables"
        )


def _check_limits(props: ControlProps) -> None:
    for field_name in _INT_FIELDS:
        limit = getattr(props, field_name)
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int)):
            raise InvalidBlueprintError(field_name, f"{field_name} must be an integer")


def _coerce_enum(enum_cls, raw: Any, field_name: str):
    if isinstance(raw, enum_cls):
        return raw
    try:
        if isinstance(raw, str) and not raw.lstrip("-").isdigit():
            return enum_cls[raw.strip().upper()]
        return enum_cls(int(raw))
    except (KeyError, ValueError, TypeError):
        raise InvalidBlueprintError(field_name, f"Unknown {enum_cls.__name__} value")


def _coerce_regex(raw: Any):
    if raw is None or raw == "":
        return None
    if isinstance(raw, re.Pattern):
        return raw
    if not isinstance(raw, str):
        raise InvalidBlueprintError("regex", "Regex must be a pattern or a string")
    try:
        return re.compile(raw)
    except re.error:
        raise InvalidBlueprintError("regex", "Invalid regex pattern")


def _coerce_options(raw: Any):
    if not isinstance(raw, (list, tuple)):
        raise InvalidBlueprintError("options", "Options must be a list")
    try:
        return [OptionItem.from_value(option) for option in raw]
    except ValueError as e:
        raise InvalidBlueprintError("options", str(e))


__all__ = [
    "create_empty_props",
    "map_default_props",
    "coerce_value",
    "validate_ctrl_props",
    "to_numeric_string",
    "props_to_dict",
]
