"""Kind-specific semantic checks for parsed signatures.

The grammar accepts every declaration kind with the same shape; the
rules that tell a valid constructor from a valid event live here. Checks
run in a fixed order (name, modifiers, outputs, inputs, then the
``indexed`` flag) and the first violation is raised as a
:class:`SemanticError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from abisig.ast_nodes import DataLocation, Parameter, Signature, SignatureKind
from abisig.errors import SemanticError, Suggestion
from abisig.tokens import ANONYMOUS

if TYPE_CHECKING:
    from abisig.source import SourceText, Span

_NAMELESS = frozenset({
    SignatureKind.CONSTRUCTOR,
    SignatureKind.FALLBACK,
    SignatureKind.RECEIVE,
})


def _is_bytes(param: Parameter) -> bool:
    return param.type_name == "bytes" and not param.array_dims


class _Check:
    def __init__(self, sig: Signature, span: Span | None, source: SourceText | None) -> None:
        self.sig = sig
        self.span = span
        self.source = source

    def fail(self, message: str, suggestion: str | None = None) -> None:
        suggestions = [Suggestion(message="", replacement=suggestion)] if suggestion else None
        raise SemanticError(message, self.span, source=self.source, suggestions=suggestions)

    def run(self) -> None:
        sig = self.sig
        kind = sig.kind

        if kind in _NAMELESS and sig.name:
            self.fail(f"unexpected {kind.value} name {sig.name!r}", f"{kind.value}(...)")

        if kind is SignatureKind.CONSTRUCTOR:
            self._check_constructor()
        elif kind is SignatureKind.FALLBACK:
            self._check_fallback()
        elif kind is SignatureKind.RECEIVE:
            self._check_receive()
        elif kind is SignatureKind.EVENT:
            self._check_event()
        elif kind is SignatureKind.ERROR:
            self._check_error()

        if kind is not SignatureKind.EVENT:
            for param in sig.inputs:
                if param.indexed:
                    self.fail(f"unexpected indexed flag on {kind.value or 'function'} input")
        for param in sig.outputs:
            if param.indexed:
                self.fail("unexpected indexed flag on output")

    def _check_constructor(self) -> None:
        if self.sig.modifiers:
            self.fail("unexpected constructor modifiers")
        if self.sig.outputs:
            self.fail("unexpected constructor outputs")

    def _check_fallback(self) -> None:
        sig = self.sig
        pair = "fallback(bytes calldata input) returns (bytes memory output)"
        if sig.outputs:
            if len(sig.outputs) > 1:
                self.fail("unexpected fallback outputs", pair)
            if not _is_bytes(sig.outputs[0]):
                self.fail(f"unexpected fallback output type {sig.outputs[0].render()!r}", pair)
            if not sig.inputs:
                self.fail("fallback returning bytes must take a bytes input", pair)
        if sig.inputs:
            if len(sig.inputs) > 1:
                self.fail("unexpected fallback inputs", pair)
            if not _is_bytes(sig.inputs[0]):
                self.fail(f"unexpected fallback input type {sig.inputs[0].render()!r}", pair)
            if not sig.outputs:
                self.fail("fallback taking a bytes input must return bytes", pair)

    def _check_receive(self) -> None:
        if self.sig.outputs:
            self.fail("unexpected receive outputs")
        if self.sig.inputs:
            self.fail("unexpected receive inputs")

    def _check_event(self) -> None:
        sig = self.sig
        if sig.modifiers and sig.modifiers != (ANONYMOUS,):
            self.fail("unexpected event modifiers; only 'anonymous' is allowed")
        if sig.outputs:
            self.fail("unexpected event outputs")
        if not sig.inputs:
            self.fail("event must have inputs")
        self._check_no_location("event")

    def _check_error(self) -> None:
        if self.sig.modifiers:
            self.fail("unexpected error modifiers")
        if self.sig.outputs:
            self.fail("unexpected error outputs")
        self._check_no_location("error")

    def _check_no_location(self, what: str) -> None:
        for param in self.sig.inputs:
            if param.data_location is not DataLocation.UNSPECIFIED:
                self.fail(f"unexpected {what} input data location {param.data_location.value!r}")


def check_signature(
    sig: Signature,
    *,
    span: Span | None = None,
    source: SourceText | None = None,
) -> None:
    """Raise :class:`SemanticError` if ``sig`` breaks a rule of its kind."""
    _Check(sig, span, source).run()
