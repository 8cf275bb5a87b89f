"""Digit sanitizing and display masks shared by the format filters."""

import re
from typing import Any, Optional

_NON_DIGIT = re.compile(r"\D")

DIGIT = "#"


def digits_only(value: str) -> str:
    """Strip every non-digit character."""
    return _NON_DIGIT.sub("", value)


def sanitize(value: Any, length: int = 11) -> Optional[str]:
    """
    Sanitize a document number to digits, left-padded with zeroes.
    
    Args:
        value: String or number to sanitize
        length: Expected document length, 0 disables padding/limit
        
    Returns:
        The digit string, or None when empty or longer than `length`
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str) or value.strip() == "":
        return None
    
    digits = digits_only(value)
    if digits == "":
        return None
    
    if length > 0:
        if len(digits) > length:
            return None
        digits = digits.zfill(length)
    
    return digits


def is_repeated(digits: str) -> bool:
    """Check for sequences like 00000000000 that pass the checksums."""
    return len(set(digits)) == 1


def apply_mask(digits: str, mask: str) -> str:
    """
    Apply a display mask progressively.
    
    Each `#` consumes one digit; literal characters are written only while
    digits remain, so partial input gets a partial mask. Digits beyond the
    mask capacity are dropped.
    """
    result = []
    position = 0
    
    for char in mask:
        if position >= len(digits):
            break
        if char == DIGIT:
            result.append(digits[position])
            position += 1
        else:
            result.append(char)
    
    return "".join(result)


def mask_text(value: Any, mask: str) -> Any:
    """
    Mask a raw input value for display.
    
    `None` becomes an empty string, numbers are masked like strings and
    any other non-text value is returned untouched.
    """
    if value is None:
        return ""
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return value
    return apply_mask(digits_only(value), mask)
