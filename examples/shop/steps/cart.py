"""Steps manipulating and inspecting the shopping cart."""

from __future__ import annotations

import typing as t

__all__ = ["add_item", "cart_holds_one_item", "empty_cart", "wishlist_untouched"]


def _cart(context: dict[str, t.Any]) -> list[str]:
    return context.setdefault("cart", [])


def empty_cart(context: dict[str, t.Any]) -> None:
    """Start from, or check for, a cart with nothing in it.

    @given ("the cart is empty")
    @then ("the cart is empty")
    """
    assert not _cart(context)


def add_item(context: dict[str, t.Any]) -> None:
    """@when ("the customer adds an item")"""
    _cart(context).append("teapot")


def cart_holds_one_item(context: dict[str, t.Any]) -> None:
    """@then ("the cart holds one item")"""
    assert len(_cart(context)) == 1


def wishlist_untouched(context: dict[str, t.Any]) -> None:
    """@but ("the wishlist is untouched")"""
    assert not context.get("wishlist")
