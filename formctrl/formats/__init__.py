"""Format filters and validators consumed by controls."""

from .documents import Cnpj, Cpf, Pis
from .generic import Cep, CreditCard, DateString, Email, Phone, Url
from .registry import FormatRegistry, default_registry

__all__ = [
    "Cep",
    "Cnpj",
    "Cpf",
    "CreditCard",
    "DateString",
    "Email",
    "FormatRegistry",
    "Phone",
    "Pis",
    "Url",
    "default_registry",
]
