"""Identifier generation for stored entities."""

import secrets
import string

from radical_api.db.time import now_ms

_BASE36 = string.digits + string.ascii_lowercase


def random_suffix(length: int = 5) -> str:
    """Return ``length`` random lowercase base36 characters."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def new_id(prefix: str) -> str:
    """Return an identifier of the form ``<prefix>_<epoch-ms>_<suffix>``."""
    return f"{prefix}_{now_ms()}_{random_suffix()}"


def new_citizen_id() -> str:
    """Return the identifier assigned to users created by a first login."""
    return f"citizen_{random_suffix(9)}"


def new_citizen_name() -> str:
    """Return a display name such as ``Citizen 4271``."""
    return f"Citizen {1000 + secrets.randbelow(9000)}"
