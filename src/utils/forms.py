# src/utils/forms.py
from typing import Optional
from .exceptions import BadRequestException


def optional_int(value: Optional[str], field: str) -> Optional[int]:
    """Multipart form value as int; blank means absent"""
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise BadRequestException(f"{field} must be an integer")
