"""Form validation.

validate() maps form values to an error mapping of field name to message.
Every rule runs on every call; an empty mapping means the form may be
submitted. The function is total over string input and never raises.
"""

import math
import re
from collections.abc import Callable, Mapping

from record_editor.models import FIELD_NAMES, FormState
from record_editor.observability.logging import get_logger

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"[0-9]{10}")
NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

ErrorState = dict[str, str]


def _validate_name(value: str) -> str | None:
    if not value.strip():
        return "Name is required"
    return None


def _validate_username(value: str) -> str | None:
    if not value.strip():
        return "Username is required"
    return None


def _validate_email(value: str) -> str | None:
    if not value:
        return "Email is required"
    if not EMAIL_PATTERN.search(value):
        return "Email address is invalid"
    return None


def _validate_phone(value: str) -> str | None:
    if not value:
        return "Phone is required"
    if not PHONE_PATTERN.fullmatch(value):
        return "Phone number is invalid (must be 10 digits)"
    return None


def _validate_balance(value: str) -> str | None:
    if not value:
        return "Balance is required"
    if parse_positive_number(value) is None:
        return "Balance must be a positive number"
    return None


FIELD_RULES: dict[str, Callable[[str], str | None]] = {
    "name": _validate_name,
    "username": _validate_username,
    "email": _validate_email,
    "phone": _validate_phone,
    "balance": _validate_balance,
}


def parse_positive_number(value: str) -> float | None:
    """Return the value as a float if it is a finite decimal number above zero."""
    text = value.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def validate(fields: FormState | Mapping[str, str]) -> ErrorState:
    """Validate form values.

    Args:
        fields: A FormState or a mapping of field name to value; missing
            fields count as empty

    Returns:
        Field name to error message, empty when the form is valid
    """
    values = fields.as_fields() if isinstance(fields, FormState) else fields

    errors: ErrorState = {}
    for name in FIELD_NAMES:
        message = FIELD_RULES[name](values.get(name) or "")
        if message is not None:
            errors[name] = message

    if errors:
        logger.debug("form_validation_failed", fields=sorted(errors), error_count=len(errors))

    return errors
