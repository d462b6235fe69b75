# Overview: Request decorators for API routes.

import re
from functools import wraps

from .errors import BadRequestError

_INT_RE = re.compile(r"-?\d+")


def parse_id(value) -> int:
    """Parse a path id; anything but a plain integer is a 400 "Invalid ID"."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value)
    raise BadRequestError("Invalid ID")


def require_int_ids(f):
    """
    Convert every `*_id` / `id` path parameter to int before the view runs.

    Routes declare ids as plain `<x_id>` (not `<int:x_id>`) so a non-numeric
    id reaches here and is rejected with 400 instead of an unmatched-route 404.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        for key, value in list(kwargs.items()):
            if key == "id" or key.endswith("_id"):
                kwargs[key] = parse_id(value)
        return f(*args, **kwargs)

    return decorated_function
