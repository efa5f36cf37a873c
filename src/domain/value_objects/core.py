"""
Core value objects for the catalog domain.

UNSET marks a patch field the caller did not supply. It is distinct from
None so a patch can tell "leave unchanged" apart from "set to nothing".
"""

from enum import Enum
from typing import Final, Literal, TypeVar

T = TypeVar("T")


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset.UNSET

# A patch field either carries a value or is UNSET
Maybe = T | Literal[_Unset.UNSET]


def is_set(value: object) -> bool:
    """True when a patch field was supplied by the caller."""
    return value is not UNSET
