from __future__ import annotations

import itertools
from typing import Iterable

from asphalt_core.units import parse_float


class ValidationError(ValueError):
    """Input rejected at a store entry point; the store is left unchanged."""


def require_float(value: object, label: str) -> float:
    number = parse_float(value)
    if number is None:
        raise ValidationError(f"{label} must be a number.")
    return number


def require_positive(value: object, label: str) -> float:
    number = require_float(value, label)
    if number <= 0:
        raise ValidationError(f"{label} must be greater than zero.")
    return number


def require_text(value: object, label: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{label} is required.")
    return text


def id_counter(existing: Iterable[object]) -> "itertools.count[int]":
    """Fresh ids continuing after the largest id already present."""

    start = max((int(getattr(item, "id")) for item in existing), default=0) + 1
    return itertools.count(start)
