"""Domain enums for formctrl."""

from enum import IntEnum


class ControlState(IntEnum):
    """Feedback state of a control.

    VALID is reserved for explicit use by callers; the validation chain
    only ever leaves a control in NORMAL or ERROR.
    """
    ERROR = -1
    NORMAL = 0
    VALID = 1


class ControlType(IntEnum):
    """Input types available for a control.

    The integer codes are part of the serialized blueprint format:
    0-10 basic types, 11-20 alternate names, 21-30 documents,
    31-40 generic strings and 999 for hidden inputs.
    """
    # Basic input types
    DEFAULT = 0
    SINGLE_OPTION = 1
    MULTIPLE_OPTION = 2
    DROPDOWN = 3
    TEXTAREA = 4
    BOOLEAN = 5
    PASSWORD = 6
    DATE = 7
    NUMBER = 8

    # Alternate names for basic types
    CHECKBOX_GROUP = 11
    RADIO_GROUP = 12

    # Document input types
    CNPJ = 21
    CPF = 22
    PIS = 23

    # Generic types
    CREDIT_CARD = 31
    EMAIL = 32
    PHONE = 33
    URL = 34
    CEP = 35

    HIDDEN = 999

    def is_option_bearing(self) -> bool:
        """Check if the value of this type is a list of selected options."""
        return self in OPTION_TYPES

    def is_digit_normalized(self) -> bool:
        """Check if length rules count only the digits of the value."""
        return self in DIGIT_NORMALIZED_TYPES


OPTION_TYPES = frozenset({
    ControlType.DROPDOWN,
    ControlType.RADIO_GROUP,
    ControlType.CHECKBOX_GROUP,
    ControlType.SINGLE_OPTION,
    ControlType.MULTIPLE_OPTION,
})

DIGIT_NORMALIZED_TYPES = frozenset({
    ControlType.CNPJ,
    ControlType.CPF,
    ControlType.PIS,
    ControlType.CREDIT_CARD,
    ControlType.PHONE,
    ControlType.DATE,
})
