"""Input bounds shared by the forum services."""

from __future__ import annotations

from enum import StrEnum
from typing import TypeVar

from sprout_community.core.errors import ValidationError

TITLE_MIN, TITLE_MAX = 5, 100
CONTENT_MIN, CONTENT_MAX = 20, 5000
REASON_MIN, REASON_MAX = 10, 500
COMMENT_MIN, COMMENT_MAX = 1, 1000

E = TypeVar("E", bound=StrEnum)


def bounded_text(field: str, value: object, minimum: int, maximum: int) -> str:
    """Return ``value`` stripped, or raise if it is not a string within bounds."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    text = value.strip()
    if len(text) < minimum:
        raise ValidationError(f"{field} must be at least {minimum} characters")
    if len(text) > maximum:
        raise ValidationError(f"{field} must be at most {maximum} characters")
    return text


def choice(field: str, value: object, enum_cls: type[E]) -> E:
    """Return the enum member named by ``value`` or raise ``ValidationError``."""
    try:
        return enum_cls(value)
    except ValueError as err:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field} must be one of: {allowed}") from err
