"""A tiny shop whose behaviour is described by annotated step functions."""
