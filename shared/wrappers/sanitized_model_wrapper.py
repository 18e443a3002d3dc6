import re
from typing import Any

from pydantic import BaseModel, model_validator

SCRIPT_BLOCK_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
JAVASCRIPT_URL_PATTERN = re.compile(r"javascript:", re.IGNORECASE)
INLINE_HANDLER_PATTERN = re.compile(r"on\w+\s*=", re.IGNORECASE)
INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def sanitize_string(value: str) -> str:
    cleaned = SCRIPT_BLOCK_PATTERN.sub("", value)
    cleaned = JAVASCRIPT_URL_PATTERN.sub("", cleaned)
    cleaned = INLINE_HANDLER_PATTERN.sub("", cleaned)
    cleaned = INVISIBLE_CHARS_PATTERN.sub("", cleaned)
    return cleaned.strip()


def deep_clean(value: Any):
    """Recursively strip script injection patterns out of request input."""

    if isinstance(value, BaseModel):
        data = value.model_dump()
        return type(value)(**deep_clean(data))

    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    if isinstance(value, str):
        return sanitize_string(value)

    return value


class SanitizedModel(BaseModel):
    """Base for request bodies: every string field is cleaned before validation."""

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return deep_clean(values)
        return values
