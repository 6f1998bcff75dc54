"""Cleanup for free text that staff and visitors type into public forms"""

import html
import re
from typing import Optional

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """HTML-escape text before it is interpolated into an email body"""
    if not isinstance(value, str):
        return value
    return html.escape(value, quote=True)


def validate_and_sanitize_input(value: str, max_length: int = 500) -> str:
    """
    Trim a submitted field and strip control characters.

    Raises:
        ValueError: when the trimmed text is longer than max_length
    """
    if not value:
        return ""

    cleaned = str(value).strip()
    if len(cleaned) > max_length:
        raise ValueError(f"Must be at most {max_length} characters")
    return _CONTROL_CHARS.sub("", cleaned)
