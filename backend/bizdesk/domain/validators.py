"""Brazilian document validation and display formatting.

Pure functions — no framework or I/O dependencies. CPF identifies a person
(11 digits), CNPJ a company (14 digits); both end in two check digits
computed with a mod-11 scheme.
"""

import re

from bizdesk.domain.entities.client import ClientType

_NON_DIGITS = re.compile(r"\D")


def only_digits(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def validate_cpf(cpf: str) -> bool:
    digits = only_digits(cpf)
    if len(digits) != 11 or len(set(digits)) == 1:
        return False

    numbers = [int(d) for d in digits]
    for position in (9, 10):
        total = sum(numbers[i] * (position + 1 - i) for i in range(position))
        check = (total * 10) % 11
        if check == 10:
            check = 0
        if check != numbers[position]:
            return False
    return True


def validate_cnpj(cnpj: str) -> bool:
    digits = only_digits(cnpj)
    if len(digits) != 14 or len(set(digits)) == 1:
        return False

    numbers = [int(d) for d in digits]
    for position in (12, 13):
        total = 0
        weight = 2
        for i in range(position - 1, -1, -1):
            total += numbers[i] * weight
            weight = 2 if weight == 9 else weight + 1
        remainder = total % 11
        check = 0 if remainder < 2 else 11 - remainder
        if check != numbers[position]:
            return False
    return True


def validate_document(document: str, client_type: ClientType) -> bool:
    """Validate a CPF for individuals or a CNPJ for organizations."""
    if client_type == ClientType.INDIVIDUAL:
        return validate_cpf(document)
    return validate_cnpj(document)


def format_document(document: str, client_type: ClientType) -> str:
    """Apply the 000.000.000-00 / 00.000.000/0000-00 mask. Unknown lengths pass through."""
    digits = only_digits(document)
    if client_type == ClientType.INDIVIDUAL and len(digits) == 11:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    if client_type == ClientType.ORGANIZATION and len(digits) == 14:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    return document


def format_phone(phone: str) -> str:
    digits = only_digits(phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone


def format_currency(value: float) -> str:
    """Format as Brazilian real, e.g. ``R$ 1.234,56``."""
    formatted = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {formatted}"
