"""Parser and canonical printer for Ethereum ABI signatures."""

from abisig.ast_nodes import (
    UNBOUNDED,
    DataLocation,
    InputKind,
    Parameter,
    Signature,
    SignatureKind,
)
from abisig.classify import classify_input
from abisig.config import ParserOptions
from abisig.errors import (
    KindMismatchError,
    NumberFormatError,
    SemanticError,
    SignatureError,
    SignatureSyntaxError,
    TrailingInputError,
)
from abisig.formatter import render_parameter, render_signature, render_struct
from abisig.parser import (
    Parser,
    parse_parameter,
    parse_signature,
    parse_signature_as,
    parse_struct,
)

__version__ = "0.1.0"

__all__ = [
    "UNBOUNDED",
    "DataLocation",
    "InputKind",
    "KindMismatchError",
    "NumberFormatError",
    "Parameter",
    "Parser",
    "ParserOptions",
    "SemanticError",
    "Signature",
    "SignatureError",
    "SignatureKind",
    "SignatureSyntaxError",
    "TrailingInputError",
    "classify_input",
    "parse_parameter",
    "parse_signature",
    "parse_signature_as",
    "parse_struct",
    "render_parameter",
    "render_signature",
    "render_struct",
]
