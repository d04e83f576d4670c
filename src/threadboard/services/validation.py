"""Input normalization shared by the message and voting services."""

from __future__ import annotations

from threadboard.core.settings import settings
from threadboard.services.errors import ValidationError


def clean_content(content: object) -> str:
    """Return trimmed message content or raise ValidationError.

    Length is checked after trimming and must fall within
    ``[1, settings.content_max_length]``.
    """
    if not isinstance(content, str):
        raise ValidationError("Content must be a string")
    text = content.strip()
    if not text:
        raise ValidationError("Content must not be empty")
    if len(text) > settings.content_max_length:
        raise ValidationError(
            f"Content must be at most {settings.content_max_length} characters"
        )
    return text


def clean_principal(value: object, field: str) -> str:
    """Return a validated principal identifier."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    principal = value.strip()
    if not principal:
        raise ValidationError(f"{field} is required")
    if principal != value or len(principal) > settings.principal_max_length:
        raise ValidationError(f"{field} is malformed")
    return principal
