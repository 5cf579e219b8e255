"""Recursive-descent parser for ABI signatures, parameters and structs.

The grammar is a relaxed form of Solidity's: parameter names, the
``function`` keyword and the ``returns`` keyword are optional, so
``function foo(uint256 a) external returns (bool ok)`` and
``foo(uint256)(bool)`` describe the same function.
"""

from __future__ import annotations

from abisig.ast_nodes import (
    UNBOUNDED,
    DataLocation,
    Parameter,
    Signature,
    SignatureKind,
)
from abisig.checker import check_signature
from abisig.config import ParserOptions
from abisig.cursor import Cursor
from abisig.errors import (
    KindMismatchError,
    SemanticError,
    SignatureError,
    SignatureSyntaxError,
    TrailingInputError,
)
from abisig.source import Span
from abisig.tokens import (
    INDEXED,
    PARAMETER_KEYWORDS,
    RETURNS,
    SIGNATURE_KEYWORDS,
    STRUCT,
    TUPLE_OPEN,
    is_identifier_start,
)


class Parser:
    """Parses one signature, parameter or struct definition from text."""

    def __init__(
        self,
        text: str,
        name: str = "<input>",
        options: ParserOptions | None = None,
    ) -> None:
        self.cursor = Cursor(text, name)
        self.options = options or ParserOptions()
        self._depth = 0

    # ── Error helpers ────────────────────────────────────────────

    def _error(
        self,
        cls: type[SignatureError],
        message: str,
        pos: int | None = None,
        length: int = 1,
        **kwargs,
    ) -> SignatureError:
        return cls(
            message,
            self.cursor.span(pos, length),
            source=self.cursor.source,
            **kwargs,
        )

    def _unexpected(self, expected: str) -> SignatureError:
        return self._error(
            SignatureSyntaxError,
            f"unexpected {self.cursor.describe_next()}, {expected} expected",
        )

    def _span_from(self, start: int) -> Span:
        return self.cursor.span(start, max(self.cursor.pos - start, 1))

    def _finish(self, what: str) -> None:
        """Reject anything but whitespace and semicolons after a parse."""
        cur = self.cursor
        cur.skip_whitespace()
        if not cur.only_trailing_whitespace_or_semicolons():
            raise self._error(
                TrailingInputError,
                f"unexpected token {cur.describe_next()} at the end of the {what}",
            )

    # ── Entry points ─────────────────────────────────────────────

    def parse_signature(self, expected_kind: SignatureKind | None = None) -> Signature:
        """Parse the whole input as a signature."""
        self.cursor.skip_whitespace()
        sig = self._parse_signature(expected_kind)
        self._finish("signature")
        return sig

    def parse_parameter(self) -> Parameter:
        """Parse the whole input as a single parameter."""
        self.cursor.skip_whitespace()
        param = self._parse_parameter()
        self._finish("type definition")
        return param

    def parse_struct(self) -> Parameter:
        """Parse the whole input as a struct definition."""
        self.cursor.skip_whitespace()
        param = self._parse_struct()
        self._finish("struct definition")
        return param

    # ── Parameters ───────────────────────────────────────────────

    def _parse_parameter(self) -> Parameter:
        cur = self.cursor
        # Composite types open with a parenthesis (or ``tuple(``), elementary
        # types with an identifier character.
        type_name = ""
        fields: tuple[Parameter, ...] = ()
        if cur.peek_byte("(") or cur.peek_literal(TUPLE_OPEN):
            fields, dims = self._parse_composite_type()
        elif cur.has_more() and is_identifier_start(cur.peek()):
            type_name, dims = self._parse_elementary_type()
        else:
            raise self._unexpected("type")

        indexed = False
        location = DataLocation.UNSPECIFIED
        name = ""
        if cur.at_whitespace():
            cur.skip_whitespace()
            for keyword, keyword_location in PARAMETER_KEYWORDS.items():
                if cur.consume_keyword(keyword):
                    if keyword == INDEXED:
                        indexed = True
                    else:
                        location = keyword_location
                    if cur.at_whitespace():
                        cur.skip_whitespace()
                        name = cur.scan_identifier()
                    break
            else:
                name = cur.scan_identifier()

        return Parameter(
            name=name,
            type_name=type_name,
            tuple_fields=fields,
            array_dims=dims,
            indexed=indexed,
            data_location=location,
        )

    def _parse_composite_type(self) -> tuple[tuple[Parameter, ...], tuple[int, ...]]:
        """Parse ``(p1, p2, ...)`` plus any array suffix."""
        cur = self.cursor
        start = cur.pos
        if not (cur.consume_literal(TUPLE_OPEN) or cur.consume_byte("(")):
            raise self._unexpected("'('")
        if not cur.has_more():
            raise self._error(
                SignatureSyntaxError,
                "unexpected end of input, composite type expected",
            )

        self._depth += 1
        try:
            if self._depth > self.options.max_depth:
                raise self._error(
                    SignatureSyntaxError,
                    f"tuples nested too deep (limit is {self.options.max_depth})",
                    start,
                )
            fields: list[Parameter] = []
            cur.skip_whitespace()
            if not cur.consume_byte(")"):
                while True:
                    cur.skip_whitespace()
                    fields.append(self._parse_parameter())
                    cur.skip_whitespace()
                    if cur.consume_byte(","):
                        cur.skip_whitespace()
                        if cur.consume_byte(")"):
                            break
                        continue
                    if cur.consume_byte(")"):
                        break
                    raise self._unexpected("',' or ')'")
        finally:
            self._depth -= 1

        return tuple(fields), self._parse_array_dims()

    def _parse_elementary_type(self) -> tuple[str, tuple[int, ...]]:
        """Parse a type name plus any array suffix. Any identifier is a type."""
        type_name = self.cursor.scan_identifier()
        return type_name, self._parse_array_dims()

    def _parse_array_dims(self) -> tuple[int, ...]:
        cur = self.cursor
        dims: list[int] = []
        while cur.consume_byte("["):
            start = cur.pos
            value, present = cur.scan_decimal()
            if present and value <= 0:
                raise self._error(
                    SemanticError,
                    f"array length must be positive, got {value}",
                    start,
                    cur.pos - start,
                )
            dims.append(value if present else UNBOUNDED)
            if not cur.consume_byte("]"):
                raise self._unexpected("']'")
        return tuple(dims)

    # ── Signatures ───────────────────────────────────────────────

    def _parse_signature(self, expected_kind: SignatureKind | None) -> Signature:
        cur = self.cursor
        start = cur.pos

        kind = self._parse_signature_kind()
        if expected_kind is not None and expected_kind is not SignatureKind.UNKNOWN:
            if kind is SignatureKind.UNKNOWN:
                kind = expected_kind
            elif kind is not expected_kind:
                raise self._error(
                    KindMismatchError,
                    f"expected {expected_kind.value} signature, got {kind.value}",
                    start,
                    len(kind.value),
                )

        cur.skip_whitespace()
        name = cur.scan_identifier()

        cur.skip_whitespace()
        inputs: tuple[Parameter, ...] = ()
        if cur.peek_byte("("):
            inputs = self._parse_parameter_list("input")

        cur.skip_whitespace()
        modifiers = self._parse_modifiers()

        cur.skip_whitespace()
        outputs = self._parse_outputs()

        sig = Signature(
            kind=kind,
            name=name,
            inputs=inputs,
            outputs=outputs,
            modifiers=modifiers,
        )
        check_signature(sig, span=self._span_from(start), source=cur.source)
        return sig

    def _parse_signature_kind(self) -> SignatureKind:
        for keyword, kind in SIGNATURE_KEYWORDS.items():
            if self.cursor.consume_keyword(keyword):
                return kind
        return SignatureKind.UNKNOWN

    def _parse_parameter_list(self, what: str) -> tuple[Parameter, ...]:
        # A parameter list has the syntax of a composite type, except that
        # it cannot be an array.
        start = self.cursor.pos
        fields, dims = self._parse_composite_type()
        if dims:
            raise self._error(
                SemanticError,
                f"{what} list cannot be an array",
                start,
                self.cursor.pos - start,
            )
        return fields

    def _parse_modifiers(self) -> tuple[str, ...]:
        cur = self.cursor
        modifiers: list[str] = []
        while cur.has_more() and not cur.peek_byte("(") and not cur.peek_keyword(RETURNS):
            modifier = cur.scan_identifier()
            if not modifier:
                break
            modifiers.append(modifier)
            if not cur.at_whitespace():
                break
            cur.skip_whitespace()
        return tuple(modifiers)

    def _parse_outputs(self) -> tuple[Parameter, ...]:
        cur = self.cursor
        if cur.consume_keyword(RETURNS):
            cur.skip_whitespace()
            if not cur.peek_byte("("):
                raise self._error(
                    SignatureSyntaxError,
                    f"unexpected {cur.describe_next()}, '(' expected after 'returns'",
                )
        if cur.peek_byte("("):
            return self._parse_parameter_list("output")
        return ()

    # ── Structs ──────────────────────────────────────────────────

    def _parse_struct(self) -> Parameter:
        cur = self.cursor
        if not cur.consume_keyword(STRUCT):
            raise self._unexpected("'struct'")
        cur.skip_whitespace()
        name = cur.scan_identifier()
        if not name:
            raise self._unexpected("struct name")
        cur.skip_whitespace()
        if not cur.consume_byte("{"):
            raise self._unexpected("'{'")

        fields: list[Parameter] = []
        while True:
            cur.skip_whitespace()
            if cur.consume_byte("}"):
                break
            if not cur.has_more() or not is_identifier_start(cur.peek()):
                raise self._unexpected("field type or '}'")
            type_name, dims = self._parse_elementary_type()
            cur.skip_whitespace()
            field_name = cur.scan_identifier()
            if not field_name:
                raise self._unexpected("field name")
            fields.append(Parameter(name=field_name, type_name=type_name, array_dims=dims))
            cur.skip_whitespace()
            if not cur.consume_byte(";"):
                raise self._unexpected("';'")

        return Parameter(name=name, tuple_fields=tuple(fields))


# ── Module-level API ─────────────────────────────────────────────


def parse_signature(text: str, *, options: ParserOptions | None = None) -> Signature:
    """Parse a function, constructor, fallback, receive, event or error signature.

    Examples of accepted input::

        function foo(uint256 memory a, uint256 memory b) internal returns (uint256)
        foo(uint256,uint256)(uint256)
        fallback(bytes calldata input) external returns (bytes memory)
        event Transfer(address indexed from, address indexed to, uint256 value)
    """
    return Parser(text, options=options).parse_signature()


def parse_signature_as(
    kind: SignatureKind,
    text: str,
    *,
    options: ParserOptions | None = None,
) -> Signature:
    """Parse a signature that must be of ``kind``.

    A keyword in the text that names another kind raises
    :class:`KindMismatchError`; a signature without a keyword takes ``kind``.
    """
    return Parser(text, options=options).parse_signature(kind)


def parse_parameter(text: str, *, options: ParserOptions | None = None) -> Parameter:
    """Parse a single type with optional location, ``indexed`` flag and name."""
    return Parser(text, options=options).parse_parameter()


def parse_struct(text: str, *, options: ParserOptions | None = None) -> Parameter:
    """Parse ``struct Name { type field; ... }`` into a named tuple parameter."""
    return Parser(text, options=options).parse_struct()
