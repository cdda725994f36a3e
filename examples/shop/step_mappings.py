# this file was auto-generated by '../../step_mappings/generator.py'
# ruff: noqa: E501
from __future__ import annotations

import typing as t

from . import steps as step

StepMappings: t.TypeAlias = t.Mapping[str, t.Callable[..., t.Any]]

given_step_mappings: StepMappings = {
    "a signed-in customer": step.sign_in,
    "the cart is empty": step.empty_cart,
}
GivenStep = t.Literal[
    "a signed-in customer",
    "the cart is empty",
]

when_step_mappings: StepMappings = {
    "the customer adds an item": step.add_item,
    "the customer signs out": step.logout,
}
WhenStep = t.Literal[
    "the customer adds an item",
    "the customer signs out",
]

then_step_mappings: StepMappings = {
    "the cart holds one item": step.cart_holds_one_item,
    "the cart is empty": step.empty_cart,
}
ThenStep = t.Literal[
    "the cart holds one item",
    "the cart is empty",
]

but_step_mappings: StepMappings = {
    "the wishlist is untouched": step.wishlist_untouched,
}
ButStep = t.Literal[
    "the wishlist is untouched",
]
