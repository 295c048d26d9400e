from __future__ import annotations

from libris.errors import ValidationError

MAX_ISBN = 2**64 - 1
MAX_ISBN_DIGITS = len(str(MAX_ISBN))


def parse_isbn(raw) -> int:
    """Parse an ISBN token as an unsigned 64-bit integer."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError("Malformed ISBN")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not text.isdigit() or not text.isascii() or len(text) > MAX_ISBN_DIGITS:
            raise ValidationError("Malformed ISBN")
        value = int(text)
    if value < 0 or value > MAX_ISBN:
        raise ValidationError("Malformed ISBN")
    return value


def parse_page(raw) -> int:
    """Lenient page number: anything unusable means page 1."""
    try:
        page = int(str(raw).strip())
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def parse_int(raw, field: str, minimum: int | None = None, maximum: int | None = None) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must be at most {maximum}")
    return value


def require_text(raw, field: str) -> str:
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def parse_key(raw, field: str) -> str:
    """Row ids arrive as strings (or numbers from loose JSON clients)."""
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise ValidationError(f"{field} is malformed" if raw is not None else f"{field} is required")
    return require_text(raw, field)
