from __future__ import annotations

from core.errors import ValidationError


def normalize_key(key: str, *, max_chars: int) -> str:
    # Surrounding whitespace is not part of the key: " a " and "a" are one entry.
    key_clean = (key or "").strip()
    if not key_clean:
        raise ValidationError("key must be non-empty")
    if len(key_clean) > max_chars:
        raise ValidationError(f"key must be at most {max_chars} characters")
    return key_clean
