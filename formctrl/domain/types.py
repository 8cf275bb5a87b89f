"""Type signatures for control blueprints.

`ControlProps` is the fully-defaulted configuration of a control. Callers
usually hand in plain mappings (blueprints) and let
`formctrl.domain.props.map_default_props` turn them into `ControlProps`.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Pattern, Sequence, Union

from .enums import ControlState, ControlType

# Receives a value and returns it modified.
Interceptor = Callable[[Any], Any]

# Called as `(event, value)`; `event` is always None, the renderer owns events.
ChangeCallback = Callable[[Any, Any], None]

Interceptors = Union[Interceptor, Sequence[Interceptor], None]


@dataclass(frozen=True)
class OptionItem:
    """Option for the DROPDOWN, SINGLE_OPTION, MULTIPLE_OPTION,
    CHECKBOX_GROUP and RADIO_GROUP types."""
    
    name: str
    value: Any
    custom: bool = False
    disabled: bool = False
    inline: bool = False
    
    @classmethod
    def from_value(cls, option: Union["OptionItem", Mapping[str, Any]]) -> "OptionItem":
        """Build an option from a mapping, keeping existing items as they are."""
        if isinstance(option, OptionItem):
            return option
        if not isinstance(option, Mapping) or "name" not in option:
            raise ValueError("Option must be a mapping with a `name` key")
        
        return cls(
            name=option["name"],
            value=option.get("value"),
            custom=bool(option.get("custom", False)),
            disabled=bool(option.get("disabled", False)),
            inline=bool(option.get("inline", False)),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "value": self.value,
            "custom": self.custom,
            "disabled": self.disabled,
            "inline": self.inline,
        }


@dataclass
class ControlProps:
    """Every property a `Ctrl` carries, with neutral defaults."""
    
    name: str = ""
    alias: str = ""
    info_text: str = ""
    description: str = ""
    label: str = ""
    autocomplete: bool = False
    value: Any = ""
    disabled: bool = False
    options: List[OptionItem] = field(default_factory=list)
    state: ControlState = ControlState.NORMAL
    dirty: bool = False
    placeholder: str = ""
    type: ControlType = ControlType.DEFAULT
    custom: bool = False
    custom_class: Optional[str] = None
    wrap_class: Optional[str] = None
    on_change: Optional[ChangeCallback] = None
    interceptors: Interceptors = None
    message: str = ""
    required: bool = False
    required_message: str = ""
    max_length: Optional[int] = None
    max_length_message: str = ""
    min_length: Optional[int] = None
    min_length_message: str = ""
    max_answers: Optional[int] = None
    max_answers_message: str = ""
    min_answers: Optional[int] = None
    min_answers_message: str = ""
    regex: Optional[Pattern[str]] = None
    regex_message: str = ""
    date_message: str = ""
    cnpj_message: str = ""
    cpf_message: str = ""
    pis_message: str = ""
    credit_card_message: str = ""
    email_message: str = ""
    url_message: str = ""
    cols: Optional[int] = None
    rows: Optional[int] = None
    
    @classmethod
    def field_names(cls) -> frozenset:
        """Names of every declared property."""
        return frozenset(f.name for f in fields(cls))
