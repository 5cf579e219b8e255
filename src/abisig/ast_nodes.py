"""Data model produced by the signature parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Array dimension written as ``[]``.
UNBOUNDED = -1


class DataLocation(Enum):
    UNSPECIFIED = ""
    STORAGE = "storage"
    CALLDATA = "calldata"
    MEMORY = "memory"


class SignatureKind(Enum):
    UNKNOWN = ""  # no keyword given; validated like a function
    FUNCTION = "function"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    EVENT = "event"
    ERROR = "error"


class InputKind(Enum):
    """What grammar a piece of raw text matches, see ``classify_input``."""

    INVALID = "invalid"
    TYPE = "type"
    ARRAY = "array"
    TUPLE = "tuple"
    STRUCT = "struct"
    FUNCTION = "function"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    EVENT = "event"
    ERROR = "error"


@dataclass(frozen=True)
class Parameter:
    """An argument, return value, tuple field or standalone type.

    Exactly one of ``type_name`` and the tuple shape applies: elementary
    parameters have a non-empty ``type_name`` and no fields, tuples have an
    empty ``type_name`` and zero or more ``tuple_fields``.
    """

    name: str = ""
    type_name: str = ""
    tuple_fields: tuple[Parameter, ...] = ()
    array_dims: tuple[int, ...] = ()  # outermost first, UNBOUNDED for []
    indexed: bool = False
    data_location: DataLocation = DataLocation.UNSPECIFIED

    @property
    def is_tuple(self) -> bool:
        return not self.type_name

    @property
    def is_array(self) -> bool:
        return bool(self.array_dims)

    def render(self) -> str:
        from abisig.formatter import render_parameter

        return render_parameter(self)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Signature:
    """A function, constructor, fallback, receive, event or error declaration."""

    kind: SignatureKind = SignatureKind.UNKNOWN
    name: str = ""
    inputs: tuple[Parameter, ...] = ()
    outputs: tuple[Parameter, ...] = ()
    modifiers: tuple[str, ...] = ()

    def render(self) -> str:
        from abisig.formatter import render_signature

        return render_signature(self)

    def __str__(self) -> str:
        return self.render()
