"""Ctrl entity: a single named, typed and validatable form field.

A control is built once from a blueprint and then mutated in place for the
life of the form: the renderer calls the change hooks on user interaction,
the caller runs `validate()` before submitting.
"""

from collections.abc import Sized
from typing import Any, Callable, Dict, List, Optional

from formctrl.formats.registry import FormatRegistry, default_registry

from .enums import ControlState, ControlType
from .errors import MissingControlNameError
from .messages import ENGLISH, DefaultMessages
from .ports import DiagnosticsPort, default_diagnostics
from .props import PropsInput, map_default_props, to_numeric_string

_DEFAULT_FORMATS = default_registry()


class Ctrl:
    """
    Multi-purpose control, mostly useful for HTML inputs.

    Every write of `value` goes through `assign_value`, which applies the
    type-specific filter of the format registry (e.g. the CPF mask).
    Interceptors run before that filter, once at construction and on every
    explicit change event.
    """

    def __init__(
        self,
        props: Optional[PropsInput],
        formats: Optional[FormatRegistry] = None,
        diagnostics: Optional[DiagnosticsPort] = None,
        messages: Optional[DefaultMessages] = None,
    ) -> None:
        """
        Initialize control from a blueprint.

        Args:
            props: Blueprint mapping or `ControlProps`; only `name` is mandatory
            formats: Filters/validators per type, defaults to the built-in ones
            diagnostics: Port receiving non-fatal diagnostics
            messages: Catalog used for blank rule messages

        Raises:
            MissingControlNameError: If `name` is empty after defaulting
            InvalidBlueprintError: If the blueprint can't be interpreted
        """
        self._formats = formats or _DEFAULT_FORMATS
        self._diagnostics = diagnostics or default_diagnostics()
        self._messages = messages or ENGLISH

        mapped = map_default_props(props, self._messages, self._diagnostics)
        if not mapped.name:
            self._diagnostics.error("control_missing_name", control_type=mapped.type.name)
            raise MissingControlNameError()

        self.type: ControlType = mapped.type
        self.name: str = mapped.name
        self.alias: str = mapped.alias
        self.info_text: str = mapped.info_text
        self.description: str = mapped.description
        self.label: str = mapped.label
        self.autocomplete: bool = mapped.autocomplete
        self.disabled: bool = mapped.disabled
        self.options = mapped.options
        self.state: ControlState = mapped.state
        self.dirty: bool = mapped.dirty
        self.placeholder: str = mapped.placeholder
        self.custom: bool = mapped.custom
        self.custom_class = mapped.custom_class
        self.wrap_class = mapped.wrap_class
        self.on_change = mapped.on_change
        self.interceptors = mapped.interceptors
        self.message: str = mapped.message
        self.required: bool = mapped.required
        self.required_message: str = mapped.required_message
        self.max_length = mapped.max_length
        self.max_length_message: str = mapped.max_length_message
        self.min_length = mapped.min_length
        self.min_length_message: str = mapped.min_length_message
        self.max_answers = mapped.max_answers
        self.max_answers_message: str = mapped.max_answers_message
        self.min_answers = mapped.min_answers
        self.min_answers_message: str = mapped.min_answers_message
        self.regex = mapped.regex
        self.regex_message: str = mapped.regex_message
        self.date_message: str = mapped.date_message
        self.cnpj_message: str = mapped.cnpj_message
        self.cpf_message: str = mapped.cpf_message
        self.pis_message: str = mapped.pis_message
        self.credit_card_message: str = mapped.credit_card_message
        self.email_message: str = mapped.email_message
        self.url_message: str = mapped.url_message
        self.cols = mapped.cols
        self.rows = mapped.rows

        # Interceptors see the blueprint value before the type filter
        self._value: Any = None
        self.assign_value(self.apply_interceptors(mapped.value))

    @property
    def value(self) -> Any:
        """Current control value."""
        return self._value

    def assign_value(self, value: Any) -> "Ctrl":
        """Store a value after running it through the type-specific filter."""
        self._value = self._formats.filter(self.type, value)
        return self

    def apply_interceptors(self, value: Any) -> Any:
        """
        Apply the configured interceptors to a value, FIFO.

        When an interceptor raises, the failure is reported and the value
        produced by the last successful step is returned.

        Args:
            value: Value to intercept

        Returns:
            The intercepted value
        """
        interceptors = self.interceptors
        if not interceptors:
            return value

        chain: List[Callable[[Any], Any]] = (
            [interceptors] if callable(interceptors) else list(interceptors)
        )

        for step, interceptor in enumerate(chain):
            try:
                value = interceptor(value)
            except Exception as e:
                self._diagnostics.error(
                    "interceptor_failed",
                    control=self.name,
                    control_type=self.type.name,
                    step=step,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                break

        return value

    def get_type(self) -> str:
        """Input type tag for the renderer."""
        return _WIDGET_KINDS.get(self.type, "text")

    def reset_state(self, clean: bool = False) -> None:
        """
        Reset the control state to default.

        Args:
            clean: When True, also clears the `dirty` flag
        """
        self.message = ""
        self.state = ControlState.NORMAL
        if clean is True:
            self.dirty = False

    def invalidate(self, message: str = "") -> "Ctrl":
        """
        Force the control into the error state.

        Used to report failures found elsewhere, e.g. server-side validation.

        Args:
            message: Message to show, a generic one when empty
        """
        self.state = ControlState.ERROR
        self.message = message or self._messages.invalid
        return self

    def is_value_selected(self, option: Any) -> bool:
        """Check if an option is present on the value list."""
        return isinstance(self._value, list) and option in self._value

    def on_boolean_change(self, value: Any) -> None:
        """
        Handle a boolean toggle from the renderer.

        Receives the previously displayed value and stores its negation.
        Booleans are not intercepted.
        """
        self.assign_value(not value)
        self._changed(value)

    def on_value_change(self, value: Any) -> None:
        """Handle a value change from the renderer."""
        self.assign_value(self.apply_interceptors(value))
        self._changed(value)

    def on_value_toggle(self, value: Any) -> None:
        """
        Toggle a value on the selection list (CHECKBOX_GROUP, MULTIPLE_OPTION).

        When the current value is not a list, a new single-item list is
        started without looking at the previous value.
        """
        intercepted = self.apply_interceptors(value)

        if not isinstance(self._value, list):
            selected = [intercepted]
        else:
            selected = list(self._value)
            if intercepted in selected:
                selected.remove(intercepted)
            else:
                selected.append(intercepted)

        self.assign_value(selected)
        self._changed(value)

    def validate(self) -> bool:
        """
        Validate the control.

        Every rule is evaluated in a fixed order and each failing rule
        overwrites `state` and `message`, so the last failing rule decides
        what is displayed.
        """
        self.reset_state()

        results = [
            self._validate_required(),
            self._validate_min_length(),
            self._validate_max_length(),
            self._validate_min_answers(),
            self._validate_max_answers(),
            self._validate_regex(),
            self._validate_format(ControlType.DATE, self.date_message),
            self._validate_format(ControlType.EMAIL, self.email_message),
            self._validate_format(ControlType.URL, self.url_message),
            self._validate_format(ControlType.CNPJ, self.cnpj_message),
            self._validate_format(ControlType.CPF, self.cpf_message),
            self._validate_format(ControlType.PIS, self.pis_message),
            self._validate_format(ControlType.CREDIT_CARD, self.credit_card_message),
        ]

        return all(results)

    def to_json(self) -> Dict[str, Any]:
        """Curated dictionary for display and debugging, without callables or
        rule messages."""
        return {
            "name": self.name,
            "alias": self.alias,
            "info_text": self.info_text,
            "description": self.description,
            "label": self.label,
            "autocomplete": self.autocomplete,
            "value": self._value,
            "disabled": self.disabled,
            "options": [option.to_dict() for option in self.options],
            "state": int(self.state),
            "placeholder": self.placeholder,
            "type": int(self.type),
            "custom": self.custom,
            "custom_class": self.custom_class,
            "wrap_class": self.wrap_class,
            "required": self.required,
            "max_length": self.max_length,
            "min_length": self.min_length,
            "max_answers": self.max_answers,
            "min_answers": self.min_answers,
            "regex": self.regex.pattern if self.regex is not None else None,
            "cols": self.cols,
            "rows": self.rows,
        }

    def __repr__(self) -> str:
        return f"Ctrl(name={self.name!r}, type={self.type.name})"

    def __str__(self) -> str:
        return f"<Ctrl name={self.name}>"

    def _changed(self, raw_value: Any) -> None:
        self.reset_state()
        self.dirty = True
        if self.on_change:
            self.on_change(None, raw_value)

    def _fail(self, message: str) -> bool:
        self.message = message
        self.state = ControlState.ERROR
        return False

    def _measured_value(self) -> Any:
        """Value used by the length rules; documents count digits only."""
        if self.type.is_digit_normalized():
            return to_numeric_string(self._value)
        return self._value

    def _validate_required(self) -> bool:
        if self.required and not self._value:
            return self._fail(self.required_message)
        return True

    def _validate_min_length(self) -> bool:
        value = self._measured_value()
        if (
            self.min_length
            and self.min_length > 1
            and value
            and isinstance(value, Sized)
            and len(value) < self.min_length
        ):
            return self._fail(self.min_length_message)
        return True

    def _validate_max_length(self) -> bool:
        value = self._measured_value()
        if (
            self.max_length
            and self.max_length > 1
            and value
            and isinstance(value, Sized)
            and len(value) > self.max_length
        ):
            return self._fail(self.max_length_message)
        return True

    def _validate_min_answers(self) -> bool:
        if (
            self.min_answers
            and self.min_answers > 1
            and isinstance(self._value, list)
            and len(self._value) < self.min_answers
        ):
            return self._fail(self.min_answers_message)
        return True

    def _validate_max_answers(self) -> bool:
        if (
            self.max_answers
            and self.max_answers > 1
            and isinstance(self._value, list)
            and len(self._value) > self.max_answers
        ):
            return self._fail(self.max_answers_message)
        return True

    def _validate_regex(self) -> bool:
        if self.regex is not None and self._value and not self.regex.search(_as_text(self._value)):
            return self._fail(self.regex_message)
        return True

    def _validate_format(self, control_type: ControlType, message: str) -> bool:
        if (
            self.type == control_type
            and self._value
            and not self._formats.validate(control_type, self._value)
        ):
            return self._fail(message)
        return True


_WIDGET_KINDS = {
    ControlType.SINGLE_OPTION: "radio",
    ControlType.RADIO_GROUP: "radio",
    ControlType.MULTIPLE_OPTION: "checkbox",
    ControlType.CHECKBOX_GROUP: "checkbox",
    ControlType.BOOLEAN: "checkbox",
    ControlType.DROPDOWN: "select",
    ControlType.TEXTAREA: "textarea",
    ControlType.CNPJ: "tel",
    ControlType.CPF: "tel",
    ControlType.PIS: "tel",
    ControlType.CREDIT_CARD: "tel",
    ControlType.PHONE: "tel",
    ControlType.CEP: "tel",
    ControlType.PASSWORD: "password",
    ControlType.EMAIL: "email",
}


def _as_text(value: Any) -> str:
    """Text a regex is tested against; lists join with commas."""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)
