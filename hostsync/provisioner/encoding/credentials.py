"""Ephemeral credentials for newly created provider users."""

from __future__ import annotations

import uuid
from collections.abc import Callable


class CredentialFactory:
    """Produces a fresh password for every user creation.

    Passwords are random UUID4 strings (122 bits from ``os.urandom``) and are
    never derived from other fields.  A custom ``generator`` can be injected,
    e.g. to make tests deterministic.
    """

    def __init__(self, generator: Callable[[], str] | None = None) -> None:
        self._generator = generator or _uuid4

    def new_credential(self) -> str:
        return self._generator()


def _uuid4() -> str:
    return str(uuid.uuid4())
