"""
Menu API — Dish Identifier Parsing
====================================

What:  Turns the raw `{id}` path segment into a tagged identifier.
How:   parse_dish_identifier() returns exactly one of NativeId, SequentialId
       or InvalidIdentifier. DishService dispatches on the variant.

Accepted forms:
    "3f1c2b9e-8a7d-4e6f-9b0a-1c2d3e4f5a6b"   → NativeId (canonical UUID text)
    "42", " 7 ", "-1"                         → SequentialId
    anything else                             → InvalidIdentifier
"""

import re
import uuid
from dataclasses import dataclass
from typing import Union

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_INT_RE = re.compile(r"^[+-]?[0-9]+$")

# Longer integers are clamped instead of converted.
_MAX_INT_DIGITS = 64


@dataclass(frozen=True)
class NativeId:
    value: uuid.UUID


@dataclass(frozen=True)
class SequentialId:
    value: int


@dataclass(frozen=True)
class InvalidIdentifier:
    raw: str


DishIdentifier = Union[NativeId, SequentialId, InvalidIdentifier]


def parse_dish_identifier(raw: str) -> DishIdentifier:
    """
    Classify a dish identifier string.

    Only the canonical hyphenated UUID form counts as a native identifier;
    32-digit strings are integers, not hex UUIDs. Only ASCII digits count.
    Integers too long to convert keep their sign and are clamped to
    10**64, which no stored dish can match.
    """
    candidate = raw.strip()
    if _UUID_RE.match(candidate):
        return NativeId(uuid.UUID(candidate))
    if _INT_RE.match(candidate):
        digits = candidate.lstrip("+-").lstrip("0")
        if len(digits) > _MAX_INT_DIGITS:
            limit = 10 ** _MAX_INT_DIGITS
            return SequentialId(-limit if candidate.startswith("-") else limit)
        return SequentialId(int(candidate))
    return InvalidIdentifier(raw)
