"""Sign-out step, exported as the module's default step."""

from __future__ import annotations

import typing as t


def default(context: dict[str, t.Any]) -> None:
    """@when ("the customer signs out")"""
    context.pop("customer", None)
