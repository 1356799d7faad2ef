from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

TOKEN_COOKIE: Final[str] = "token"
EMAIL_COOKIE: Final[str] = "email"
NAME_COOKIE: Final[str] = "name"
ID_COOKIE: Final[str] = "id"


@dataclass(frozen=True)
class Identity:
    """Who is asking, as far as the request cookies say.

    Nothing here is validated; the backend decides what the token is worth.
    """

    id: str | None = None
    email: str | None = None
    name: str | None = None
    token: str | None = None

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> Identity:
        return cls(
            id=cookies.get(ID_COOKIE) or None,
            email=cookies.get(EMAIL_COOKIE) or None,
            name=cookies.get(NAME_COOKIE) or None,
            token=cookies.get(TOKEN_COOKIE) or None,
        )

    def as_user(self) -> dict[str, Any]:
        """User fields for the initial state; absent fields are left out."""

        user = {"id": self.id, "email": self.email, "name": self.name}
        return {k: v for k, v in user.items() if v is not None}
