"""Wrap-around snake arcade game: rules in ``logic``, the pygame game in ``app``."""

__version__ = "0.1.0"
__all__ = ["logic", "app"]