"""Form validation shared by the submit gate and the inline field messages."""

from __future__ import annotations

import re
from typing import Any, Mapping

# "at least" rather than "exactly"; longer numbers keep their country prefix
PHONE_MIN_DIGITS = 10

_DIGITS = re.compile(r"[0-9]+")


def is_email_valid(email: str | None) -> bool:
    return bool(email) and "@" in email and "." in email


def is_digits(phone: str | None) -> bool:
    return bool(phone) and _DIGITS.fullmatch(phone) is not None


def is_phone_valid(phone: str | None) -> bool:
    return is_digits(phone) and len(phone) >= PHONE_MIN_DIGITS


def _get(form: Any, field: str) -> str:
    if isinstance(form, Mapping):
        return form.get(field) or ""
    return getattr(form, field, "") or ""


def field_errors(form: Any) -> dict[str, str]:
    """Inline messages keyed by field name.

    Empty email and phone fields stay quiet until the user types something;
    ``can_submit`` still rejects them.
    """
    errors: dict[str, str] = {}
    email = _get(form, "email")
    phone = _get(form, "phone")
    if not _get(form, "name"):
        errors["name"] = "Name is required"
    if email and not is_email_valid(email):
        errors["email"] = "Please enter a valid email address"
    if phone and not is_digits(phone):
        errors["phone"] = "Please enter numbers only"
    elif phone and len(phone) < PHONE_MIN_DIGITS:
        errors["phone"] = f"Phone must be at least {PHONE_MIN_DIGITS} digits"
    return errors


def can_submit(form: Any) -> bool:
    return (
        bool(_get(form, "name"))
        and is_email_valid(_get(form, "email"))
        and is_phone_valid(_get(form, "phone"))
    )
