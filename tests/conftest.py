"""Test configuration and shared fixtures."""

import pytest

from formctrl.domain.collection import CtrlCollection
from formctrl.domain.enums import ControlType
from tests.fakes import FakeDiagnostics


@pytest.fixture
def diagnostics() -> FakeDiagnostics:
    """Recording diagnostics port."""
    return FakeDiagnostics()


@pytest.fixture
def valid_cpf() -> str:
    """Valid CPF number, digits only."""
    return "52998224725"


@pytest.fixture
def valid_cnpj() -> str:
    """Valid CNPJ number, digits only."""
    return "11222333000181"


@pytest.fixture
def valid_pis() -> str:
    """Valid PIS number, digits only."""
    return "12054375634"


@pytest.fixture
def valid_credit_card() -> str:
    """Luhn-valid card number."""
    return "4111111111111111"


@pytest.fixture
def signup_form(diagnostics: FakeDiagnostics) -> CtrlCollection:
    """Signup form with a named address group and an anonymous group."""
    form = CtrlCollection("signup", diagnostics=diagnostics)
    form.add({"name": "email", "type": ControlType.EMAIL, "required": True, "alias": "mail"})
    form.add({"name": "cpf", "type": ControlType.CPF})

    address = CtrlCollection("address", diagnostics=diagnostics)
    address.add({"name": "cep", "type": ControlType.CEP})
    address.add({"name": "number", "type": ControlType.NUMBER})
    form.add(address)

    form.add([
        {"name": "token", "type": ControlType.HIDDEN, "required": True},
        {"name": "terms", "type": ControlType.BOOLEAN},
    ])
    return form
