"""Steps for signing customers in."""

from __future__ import annotations

import typing as t

__all__ = ["sign_in"]


def sign_in(context: dict[str, t.Any]) -> None:
    """Sign the default customer in.

    @given ("a signed-in customer")
    """
    context["customer"] = "alice"
