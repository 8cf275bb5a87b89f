"""Default validation messages.

Templates with a `{limit}` placeholder receive the literal limit value of
the rule they describe.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DefaultMessages:
    """Catalog of messages used when a blueprint leaves a rule message blank."""
    
    required: str = "This field is required."
    max_length: str = 'Max length accepted is "{limit}" characters.'
    min_length: str = 'Min length accepted is "{limit}" characters.'
    max_answers: str = 'You can\'t choose more than "{limit}" options.'
    min_answers: str = 'Please choose at least "{limit}" options.'
    regex: str = "The current value doesn't match the regular expression."
    date: str = "Invalid date value."
    cnpj: str = "Invalid CNPJ number."
    cpf: str = "Invalid CPF number."
    pis: str = "Invalid PIS number."
    credit_card: str = "Invalid credit card number."
    email: str = "Invalid email address provided."
    url: str = "Invalid URL provided."
    invalid: str = "Invalid input value provided"


ENGLISH = DefaultMessages()
