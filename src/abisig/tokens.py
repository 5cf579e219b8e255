"""Character classes and keyword tables for the signature grammar."""

from __future__ import annotations

from abisig.ast_nodes import DataLocation, SignatureKind


def is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_identifier_symbol(ch: str) -> bool:
    return ch == "$" or ch == "_"


def is_identifier_start(ch: str) -> bool:
    """Identifiers start with a letter, ``_`` or ``$``, never a digit."""
    return is_alpha(ch) or is_identifier_symbol(ch)


def is_identifier_part(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch) or is_identifier_symbol(ch)


def is_whitespace(ch: str) -> bool:
    return ch in (" ", "\t", "\n", "\r")


# Declaration keywords, tried in this order. None is a prefix of another.
SIGNATURE_KEYWORDS: dict[str, SignatureKind] = {
    "function": SignatureKind.FUNCTION,
    "constructor": SignatureKind.CONSTRUCTOR,
    "fallback": SignatureKind.FALLBACK,
    "receive": SignatureKind.RECEIVE,
    "event": SignatureKind.EVENT,
    "error": SignatureKind.ERROR,
}

# Keywords allowed between a parameter's type and its name. The first
# match wins, and only one is consumed per parameter.
INDEXED = "indexed"
PARAMETER_KEYWORDS: dict[str, DataLocation | None] = {
    INDEXED: None,
    "storage": DataLocation.STORAGE,
    "memory": DataLocation.MEMORY,
    "calldata": DataLocation.CALLDATA,
}

TUPLE_OPEN = "tuple("
RETURNS = "returns"
STRUCT = "struct"
ANONYMOUS = "anonymous"
