"""Diagnostics and the exception taxonomy of the signature parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abisig.source import SourceText, Span


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific input location."""

    span: Span
    message: str


@dataclass(frozen=True)
class Suggestion:
    """A suggested fix."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and suggestions."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic, source: SourceText | None = None) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E100]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}")
            gutter = f"{span.start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            if source is not None:
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} "
                    f"{source.line_at(span.start_line)}"
                )
                if span.start_line == span.end_line:
                    caret_len = max(1, span.end_col - span.start_col + 1)
                    padding = " " * (span.start_col - 1)
                    lines.append(
                        f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                        f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
                    )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        for suggestion in diag.suggestions:
            lines.append(
                f"  {self._c(_BLUE)}try:{self._c(_RESET)} {suggestion.replacement}"
            )

        return "\n".join(lines)


class SignatureError(ValueError):
    """Base class for every parse and validation failure.

    Carries a single :class:`Diagnostic`; the first failure aborts the parse,
    so there is never more than one.
    """

    code = "E000"

    def __init__(
        self,
        message: str,
        span: Span | None = None,
        *,
        source: SourceText | None = None,
        notes: list[str] | None = None,
        suggestions: list[Suggestion] | None = None,
    ) -> None:
        self.span = span
        self.source = source
        labels = [DiagnosticLabel(span=span, message="")] if span is not None else []
        self.diagnostic = Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=message,
            labels=labels,
            suggestions=list(suggestions or []),
            notes=list(notes or []),
        )
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def render(self, *, color: bool = False) -> str:
        """Render the diagnostic against the input that produced it."""
        return DiagnosticRenderer(color=color).render(self.diagnostic, self.source)


class SignatureSyntaxError(SignatureError):
    """The input does not match the grammar."""

    code = "E100"


class TrailingInputError(SignatureSyntaxError):
    """A complete parse left non-whitespace, non-semicolon input behind."""

    code = "E101"


class NumberFormatError(SignatureError):
    """An array bound does not fit the supported integer range."""

    code = "E110"


class SemanticError(SignatureError):
    """The grammar accepted the input but validation rejected it."""

    code = "E200"


class KindMismatchError(SignatureError):
    """The declaration keyword conflicts with the requested kind."""

    code = "E300"
