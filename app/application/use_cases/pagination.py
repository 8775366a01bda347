"""Opaque cursors for paginated list use cases."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Callable, Sequence
from typing import TypeVar

from app.domain.entities import Page
from app.domain.errors import ValidationError

T = TypeVar("T")

MAX_PAGE_SIZE = 100
_CURSOR_PREFIX = "offset:"


def encode_cursor(offset: int) -> str:
    raw = f"{_CURSOR_PREFIX}{offset}".encode("ascii")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_cursor(cursor: str | None) -> int:
    """Return the offset stored in ``cursor``; ``None`` starts from the top."""

    if not cursor:
        return 0
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii")).decode("ascii")
    except (binascii.Error, UnicodeError) as exc:
        raise ValidationError("Invalid pagination cursor") from exc
    if not raw.startswith(_CURSOR_PREFIX) or not raw[len(_CURSOR_PREFIX):].isdigit():
        raise ValidationError("Invalid pagination cursor")
    return int(raw[len(_CURSOR_PREFIX):])


def ensure_limit(limit: int, *, maximum: int = MAX_PAGE_SIZE) -> int:
    if limit < 1 or limit > maximum:
        raise ValidationError(f"Limit must be between 1 and {maximum}")
    return limit


def paginate(
    fetch: Callable[[int, int], Sequence[T]], *, limit: int, cursor: str | None
) -> Page[T]:
    """Fetch one page through ``fetch(skip, limit)``.

    One extra row is requested to learn whether another page exists.
    """

    offset = decode_cursor(cursor)
    rows = list(fetch(offset, ensure_limit(limit) + 1))
    next_cursor = encode_cursor(offset + limit) if len(rows) > limit else None
    return Page(items=tuple(rows[:limit]), next_cursor=next_cursor)


__all__ = ["decode_cursor", "encode_cursor", "ensure_limit", "paginate"]
