"""Filters and validators for generic string inputs: postal code, phone,
date, e-mail, URL and credit card numbers."""

import re
from datetime import date, datetime
from typing import Any
from urllib.parse import urlparse

from .masks import digits_only, mask_text


class Cep:
    """Brazilian postal code (CEP)."""
    
    MASK = "#####-###"
    
    @classmethod
    def filter(cls, value: Any) -> Any:
        """Mask as XXXXX-XXX."""
        return mask_text(value, cls.MASK)


class Phone:
    """Brazilian phone number with area code, landline or mobile."""
    
    LANDLINE_MASK = "(##) ####-####"
    MOBILE_MASK = "(##) #####-####"
    
    @classmethod
    def filter(cls, value: Any) -> Any:
        """Mask as (XX) XXXX-XXXX, or (XX) XXXXX-XXXX for 11 digits."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and len(digits_only(value)) > 10:
            return mask_text(value, cls.MOBILE_MASK)
        return mask_text(value, cls.LANDLINE_MASK)


class DateString:
    """Date strings in the DD/MM/YYYY format."""
    
    MASK = "##/##/####"
    FORMAT = "%d/%m/%Y"
    
    _ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
    _SHAPE = re.compile(r"^\d{2}/\d{2}/\d{4}$")
    
    @classmethod
    def filter(cls, value: Any) -> Any:
        """Normalize dates and ISO strings to DD/MM/YYYY, masking partial input."""
        if isinstance(value, (date, datetime)):
            return value.strftime(cls.FORMAT)
        if isinstance(value, str):
            iso = cls._ISO_DATE.match(value.strip())
            if iso:
                year, month, day = iso.groups()
                return f"{day}/{month}/{year}"
        return mask_text(value, cls.MASK)
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Check the value is a real calendar date."""
        if not isinstance(value, str) or not cls._SHAPE.match(value):
            return False
        try:
            datetime.strptime(value, cls.FORMAT)
        except ValueError:
            return False
        return True


class Email:
    """E-mail addresses."""
    
    _PATTERN = re.compile(r"^\w+([.+-]\w+)*@\w+([.-]\w+)*\.\w{2,9}$")
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Check address syntax."""
        return isinstance(value, str) and bool(cls._PATTERN.match(value.strip()))


class Url:
    """Absolute web URLs."""
    
    SCHEMES = ("http", "https", "ftp")
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Check for a supported scheme and a host."""
        if not isinstance(value, str) or not value or re.search(r"\s", value):
            return False
        
        parsed = urlparse(value)
        if parsed.scheme not in cls.SCHEMES or not parsed.netloc:
            return False
        
        host = parsed.hostname or ""
        return bool(re.match(r"^[A-Za-z0-9]([A-Za-z0-9.-]*[A-Za-z0-9])?$", host))


class CreditCard:
    """Credit card numbers."""
    
    _PATTERN = re.compile(r"^[\d\s-]+$")
    
    @classmethod
    def validate_digit(cls, value: Any) -> bool:
        """Check for 13 to 19 digits, allowing spaces and dashes as separators."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not cls._PATTERN.match(value.strip()):
            return False
        return 13 <= len(digits_only(value)) <= 19
    
    @classmethod
    def validate_modulo(cls, value: Any) -> bool:
        """Luhn (mod 10) check."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            return False
        
        digits = digits_only(value)
        if not digits:
            return False
        
        total = 0
        for index, char in enumerate(reversed(digits)):
            digit = int(char)
            if index % 2 == 1:
                digit *= 2
                if digit > 9:
                    digit -= 9
            total += digit
        
        return total % 10 == 0
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Both the digit pattern and the Luhn check must pass."""
        return cls.validate_digit(value) and cls.validate_modulo(value)
