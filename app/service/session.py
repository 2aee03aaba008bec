from __future__ import annotations

import hmac

from fastapi import Request


class CookieSessionOracle:
    """Treat a request as logged in when its session cookie matches the panel token.

    With no token configured nobody is logged in, so every gated route stays
    hidden.
    """

    def __init__(self, *, cookie_name: str = "session", token: str | None = None) -> None:
        self._cookie_name = cookie_name
        self._token = token

    def is_authenticated(self, request: Request) -> bool:
        if not self._token:
            return False
        presented = request.cookies.get(self._cookie_name)
        if not presented:
            return False
        return hmac.compare_digest(presented.encode(), self._token.encode())
