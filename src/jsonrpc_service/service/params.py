"""Key normalization for validated params.

Runs after validation only. String keys become interned identifiers and
every object becomes a Params mapping, recursively through nested objects
and arrays, so handlers can read ``params.x`` as well as ``params["x"]``.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Any


class Params(dict):
    """A dict whose keys are also readable as attributes.

    Keys that collide with dict methods (``items``, ``keys``...) or that are
    not identifiers stay reachable with item access.
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None


def _normalize_key(key: Any) -> Any:
    if isinstance(key, str):
        return sys.intern(key)
    return key


def normalize_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return Params((_normalize_key(k), normalize_keys(v)) for k, v in value.items())
    if isinstance(value, list):
        return [normalize_keys(item) for item in value]
    return value
