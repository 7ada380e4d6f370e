"""Helpers for HTML form submissions.

Forms post flat ``application/x-www-form-urlencoded`` bodies. Nested
sections use dotted names (``config.primary_color``) and checkboxes are
present only when ticked.
"""

from typing import Any

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from taskboard.core.errors.handlers import FieldError


TRUTHY_VALUES = frozenset({"true", "on", "1", "yes"})


async def read_form(request: Request) -> dict[str, str]:
    """Read the submitted form as a flat dict of strings (file uploads ignored)."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def checkbox(form: dict[str, str], key: str) -> bool:
    """Interpret a checkbox field."""
    return form.get(key, "").strip().lower() in TRUTHY_VALUES


def optional_text(value: str | None) -> str | None:
    """Strip a text field, mapping blank input to None."""
    if value is None:
        return None
    return value.strip() or None


def section(form: dict[str, str], prefix: str) -> dict[str, str]:
    """Extract the fields of a dotted form section, without the prefix."""
    marker = f"{prefix}."
    return {
        key[len(marker):]: value
        for key, value in form.items()
        if key.startswith(marker)
    }


def field_errors(exc: PydanticValidationError) -> list[FieldError]:
    """Flatten a pydantic validation error into per-field messages."""
    errors: list[FieldError] = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field = ".".join(str(part) for part in loc) if loc else "form"
        message: Any = error.get("msg", "Invalid value")
        # Custom validators raise ValueError; drop pydantic's prefix
        if isinstance(message, str) and message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append(FieldError(field=field, message=message, type=error.get("type")))
    return errors
