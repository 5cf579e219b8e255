"""Work out which grammar a piece of text belongs to."""

from __future__ import annotations

from abisig.ast_nodes import InputKind, SignatureKind
from abisig.errors import SignatureError
from abisig.parser import Parser

_SIGNATURE_INPUT_KINDS: dict[SignatureKind, InputKind] = {
    SignatureKind.UNKNOWN: InputKind.FUNCTION,
    SignatureKind.FUNCTION: InputKind.FUNCTION,
    SignatureKind.CONSTRUCTOR: InputKind.CONSTRUCTOR,
    SignatureKind.FALLBACK: InputKind.FALLBACK,
    SignatureKind.RECEIVE: InputKind.RECEIVE,
    SignatureKind.EVENT: InputKind.EVENT,
    SignatureKind.ERROR: InputKind.ERROR,
}


def _as_parameter(text: str) -> InputKind:
    param = Parser(text).parse_parameter()
    if param.array_dims:
        return InputKind.ARRAY
    if param.is_tuple:
        return InputKind.TUPLE
    return InputKind.TYPE


def _as_signature(text: str) -> InputKind:
    return _SIGNATURE_INPUT_KINDS[Parser(text).parse_signature().kind]


def _as_struct(text: str) -> InputKind:
    Parser(text).parse_struct()
    return InputKind.STRUCT


def classify_input(text: str) -> InputKind:
    """Classify ``text`` as a type, array, tuple, struct or signature kind.

    The parameter grammar is tried first, then the signature grammar, then
    the struct grammar, so text valid under more than one (a bare ``foo``
    is both a type and a function name) resolves to the earliest. Returns
    ``InputKind.INVALID`` when nothing matches; never raises.
    """
    if not text.strip(" \t\n\r;"):
        return InputKind.INVALID
    for attempt in (_as_parameter, _as_signature, _as_struct):
        try:
            return attempt(text)
        except SignatureError:
            continue
    return InputKind.INVALID
