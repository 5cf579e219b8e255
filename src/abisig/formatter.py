"""Canonical printer for signatures, parameters and structs.

Output re-parses to an equal value. Whitespace is normalized, the
``returns`` keyword is always written when there are outputs, and the
``tuple`` keyword is never written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abisig.ast_nodes import Parameter, Signature

# Keywords followed by the signature name need a separating space.
_NAMED_KINDS = frozenset({"function", "event", "error"})


class SignatureFormatter:
    """Format parsed nodes back to canonical source text."""

    def format_signature(self, sig: Signature) -> str:
        keyword = sig.kind.value
        if keyword in _NAMED_KINDS:
            head = f"{keyword} {sig.name}"
        elif keyword:
            head = keyword
        else:
            head = sig.name

        text = f"{head}({self._join(sig.inputs)})"
        if sig.modifiers:
            text += " " + " ".join(sig.modifiers)
        if sig.outputs:
            text += f" returns ({self._join(sig.outputs)})"
        return text

    def format_parameter(self, param: Parameter) -> str:
        parts = [self._format_type(param)]
        if param.indexed:
            parts.append("indexed")
        if param.data_location.value:
            parts.append(param.data_location.value)
        if param.name:
            parts.append(param.name)
        return " ".join(parts)

    def format_struct(self, param: Parameter) -> str:
        fields = "".join(f" {self._format_type(f)} {f.name};" for f in param.tuple_fields)
        return f"struct {param.name} {{{fields} }}"

    # ── Helpers ────────────────────────────────────────────────

    def _format_type(self, param: Parameter) -> str:
        if param.type_name:
            text = param.type_name
        else:
            text = f"({self._join(param.tuple_fields)})"
        for dim in param.array_dims:
            text += "[]" if dim < 0 else f"[{dim}]"
        return text

    def _join(self, params: tuple[Parameter, ...]) -> str:
        return ", ".join(self.format_parameter(p) for p in params)


_FORMATTER = SignatureFormatter()


def render_signature(sig: Signature) -> str:
    return _FORMATTER.format_signature(sig)


def render_parameter(param: Parameter) -> str:
    return _FORMATTER.format_parameter(param)


def render_struct(param: Parameter) -> str:
    """Render a struct parameter as ``struct Name { type field; ... }``."""
    return _FORMATTER.format_struct(param)
