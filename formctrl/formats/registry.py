"""Format collaborators keyed by control type.

Controls look up two kinds of collaborators here:

- filters, applied on every write of a control value (masking)
- validators, boolean predicates used by the validation chain
"""

from typing import Any, Callable, Dict, Optional

from formctrl.domain.enums import ControlType

from .documents import Cnpj, Cpf, Pis
from .generic import Cep, CreditCard, DateString, Email, Phone, Url

Filter = Callable[[Any], Any]
Validator = Callable[[Any], bool]


class FormatRegistry:
    """Filters and validators per `ControlType`."""
    
    def __init__(
        self,
        filters: Optional[Dict[ControlType, Filter]] = None,
        validators: Optional[Dict[ControlType, Validator]] = None,
    ) -> None:
        self._filters: Dict[ControlType, Filter] = dict(filters or {})
        self._validators: Dict[ControlType, Validator] = dict(validators or {})
    
    def register_filter(self, control_type: ControlType, filter_fn: Filter) -> "FormatRegistry":
        """Set the filter for a type, replacing any previous one."""
        self._filters[ControlType(control_type)] = filter_fn
        return self
    
    def register_validator(
        self,
        control_type: ControlType,
        validator: Validator,
    ) -> "FormatRegistry":
        """Set the validator for a type, replacing any previous one."""
        self._validators[ControlType(control_type)] = validator
        return self
    
    def has_filter(self, control_type: ControlType) -> bool:
        return control_type in self._filters
    
    def has_validator(self, control_type: ControlType) -> bool:
        return control_type in self._validators
    
    def filter(self, control_type: ControlType, value: Any) -> Any:
        """Filter a value; types without a filter store values unmodified."""
        filter_fn = self._filters.get(control_type)
        return filter_fn(value) if filter_fn else value
    
    def validate(self, control_type: ControlType, value: Any) -> bool:
        """Run the validator of a type; types without one always pass."""
        validator = self._validators.get(control_type)
        return bool(validator(value)) if validator else True
    
    def copy(self) -> "FormatRegistry":
        """Independent registry with the same collaborators."""
        return FormatRegistry(self._filters, self._validators)


def default_registry() -> FormatRegistry:
    """Registry wired with the built-in filters and validators."""
    return FormatRegistry(
        filters={
            ControlType.CEP: Cep.filter,
            ControlType.PHONE: Phone.filter,
            ControlType.CPF: Cpf.filter,
            ControlType.CNPJ: Cnpj.filter,
            ControlType.PIS: Pis.filter,
            ControlType.DATE: DateString.filter,
        },
        validators={
            ControlType.DATE: DateString.validate,
            ControlType.EMAIL: Email.validate,
            ControlType.URL: Url.validate,
            ControlType.CNPJ: Cnpj.validate,
            ControlType.CPF: Cpf.validate,
            ControlType.PIS: Pis.validate,
            ControlType.CREDIT_CARD: CreditCard.validate,
        },
    )
