"""Query parsing and pagination for ``GET /users``."""

from __future__ import annotations

import re
from collections.abc import Sequence

from userstore.models import User

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_positive_int(value: str | None, default: int) -> int:
    """Parse a query value, falling back to ``default`` unless it is a positive integer."""
    if value is None or not _INTEGER.fullmatch(value):
        return default
    number = int(value)
    return number if number >= 1 else default


def filter_by_country(users: Sequence[User], country: str) -> list[User]:
    # Exact, case-sensitive match; an empty filter keeps everything.
    if not country:
        return list(users)
    return [u for u in users if u.country == country]


def paginate(users: Sequence[User], page: int, page_size: int) -> list[User]:
    start = min((page - 1) * page_size, len(users))
    end = min(start + page_size, len(users))
    return list(users[start:end])
