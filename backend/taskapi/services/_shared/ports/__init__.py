"""
taskapi.services._shared.ports
==============================

Collection of *ports* (hexagonal interfaces) that define the contracts for
token signing and token persistence.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`, :class:`~.DecodeStatus`,
    :class:`~.DecodeResult` and :class:`~.DecodedToken`.

- :mod:`token_store`:
    Defines :class:`~.TokenStore`, :class:`~.TokenRecord` and the
    :class:`~.InMemoryTokenStore` double.

Design Notes
------------
Concrete adapters (PyJWT, SQLAlchemy, Redis) live under ``taskapi.infra``.
"""

from __future__ import annotations

from .token_codec import DecodedToken, DecodeResult, DecodeStatus, TokenCodec
from .token_store import InMemoryTokenStore, TokenRecord, TokenStore

__all__ = [
    "TokenCodec",
    "DecodeStatus",
    "DecodeResult",
    "DecodedToken",
    "TokenStore",
    "TokenRecord",
    "InMemoryTokenStore",
]
