"""Student credential scheme.

Legacy convention: a student's password is the first six digits of their CPF,
set when the admin creates the account. This is a low-entropy credential; it
is kept only for compatibility with existing accounts and can be replaced by
``STUDENT_PASSWORD_SCHEME=random`` (random password plus a reset email).
"""

import re
import secrets

STUDENT_PASSWORD_LENGTH = 6

_NON_DIGITS = re.compile(r"\D")


def cpf_digits(cpf: str) -> str:
    """Strip punctuation from a CPF ("123.456.789-09" -> "12345678909")."""
    return _NON_DIGITS.sub("", cpf or "")


def student_password_from_cpf(cpf: str) -> str:
    digits = cpf_digits(cpf)
    if len(digits) < STUDENT_PASSWORD_LENGTH:
        raise ValueError(
            f"CPF must contain at least {STUDENT_PASSWORD_LENGTH} digits"
        )
    return digits[:STUDENT_PASSWORD_LENGTH]


def generate_student_password(cpf: str, scheme: str) -> str:
    """Initial password for an admin-created student account."""
    if scheme == "cpf_prefix":
        return student_password_from_cpf(cpf)
    return secrets.token_urlsafe(16)
