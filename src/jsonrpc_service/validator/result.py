"""Validation outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Valid:
    """Params passed every rule."""

    params: Any


@dataclass(frozen=True)
class Invalid:
    """Per-field error messages, keyed by field name."""

    errors: Mapping[str, list[str]]

    def __post_init__(self) -> None:
        frozen = MappingProxyType({key: list(messages) for key, messages in self.errors.items()})
        object.__setattr__(self, "errors", frozen)

    def to_dict(self) -> dict[str, list[str]]:
        return {key: list(messages) for key, messages in self.errors.items()}


ValidationResult = Valid | Invalid
