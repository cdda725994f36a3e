"""Barrel re-exporting every shop step function as ``step.<name>``."""

from .cart import *  # noqa: F403
from .login import *  # noqa: F403
from .logout import default as logout

__all__ = [
    name
    for name in globals()
    if not name.startswith("_") and name != "annotations"
]
