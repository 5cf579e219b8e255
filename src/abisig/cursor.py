"""Byte-level scanner underlying the signature parser.

The cursor owns no grammar. It exposes lookahead and consume primitives
over the encoded input and never moves backwards.
"""

from __future__ import annotations

from abisig.errors import NumberFormatError
from abisig.source import SourceText, Span
from abisig.tokens import (
    is_digit,
    is_identifier_part,
    is_identifier_start,
    is_whitespace,
)

# Largest array bound accepted by ``scan_decimal``.
MAX_ARRAY_LENGTH = 2**63 - 1


class Cursor:
    """Scans a signature string one byte at a time."""

    def __init__(self, text: str, name: str = "<input>") -> None:
        self.source = SourceText(text, name)
        self.data = text.encode("utf-8")
        self.pos = 0

    # ── Lookahead ────────────────────────────────────────────────

    def has_more(self) -> bool:
        return self.pos < len(self.data)

    def peek(self) -> str:
        """Return the next byte as a one-character string."""
        return chr(self.data[self.pos])

    def peek_byte(self, b: str) -> bool:
        return self.has_more() and self.peek() == b

    def peek_literal(self, lit: str) -> bool:
        return self.data.startswith(lit.encode("ascii"), self.pos)

    def peek_keyword(self, kw: str) -> bool:
        """Like ``peek_literal`` but ``kw`` must not run into an identifier."""
        if not self.peek_literal(kw):
            return False
        end = self.pos + len(kw)
        return end >= len(self.data) or not is_identifier_part(chr(self.data[end]))

    # ── Consumption ──────────────────────────────────────────────

    def consume_byte(self, b: str) -> bool:
        if self.peek_byte(b):
            self.pos += 1
            return True
        return False

    def consume_literal(self, lit: str) -> bool:
        if self.peek_literal(lit):
            self.pos += len(lit)
            return True
        return False

    def consume_keyword(self, kw: str) -> bool:
        if self.peek_keyword(kw):
            self.pos += len(kw)
            return True
        return False

    def skip_whitespace(self) -> None:
        while self.has_more() and is_whitespace(self.peek()):
            self.pos += 1

    def at_whitespace(self) -> bool:
        return self.has_more() and is_whitespace(self.peek())

    def scan_identifier(self) -> str:
        """Consume ``(letter|_|$)(letter|digit|_|$)*``; empty if none starts here."""
        start = self.pos
        if not self.has_more() or not is_identifier_start(self.peek()):
            return ""
        while self.has_more() and is_identifier_part(self.peek()):
            self.pos += 1
        return self.data[start:self.pos].decode("ascii")

    def scan_decimal(self) -> tuple[int, bool]:
        """Consume a run of digits. Returns ``(value, present)``."""
        start = self.pos
        while self.has_more() and is_digit(self.peek()):
            self.pos += 1
        if start == self.pos:
            return 0, False
        digits = self.data[start:self.pos].decode("ascii")
        significant = digits.lstrip("0") or "0"
        # int() rejects strings over 4300 digits, so compare lengths first.
        if len(significant) > len(str(MAX_ARRAY_LENGTH)) or int(significant) > MAX_ARRAY_LENGTH:
            shown = digits if len(digits) <= 24 else digits[:20] + "..."
            raise NumberFormatError(
                f"array length {shown} is out of range",
                self.span(start, self.pos - start),
                source=self.source,
                notes=[f"the largest supported length is {MAX_ARRAY_LENGTH}"],
            )
        return int(significant), True

    def only_trailing_whitespace_or_semicolons(self) -> bool:
        return all(is_whitespace(chr(b)) or b == ord(";") for b in self.data[self.pos:])

    # ── Diagnostics ──────────────────────────────────────────────

    def span(self, pos: int | None = None, length: int = 1) -> Span:
        """Span of ``length`` bytes starting at ``pos`` (default: current)."""
        if pos is None:
            pos = self.pos
        offset = len(self.data[:pos].decode("utf-8", errors="ignore"))
        return self.source.span_at(offset, length)

    def describe_next(self) -> str:
        """Human-readable description of the next character for error messages."""
        if not self.has_more():
            return "end of input"
        if self.data[self.pos] < 0x80:
            return repr(self.peek())
        # Multi-byte UTF-8 sequences are at most 4 bytes long.
        chunk = self.data[self.pos:self.pos + 4].decode("utf-8", errors="ignore")
        return repr(chunk[:1] or self.peek())
