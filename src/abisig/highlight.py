"""Pygments lexer for ABI signatures."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, words
from pygments.token import (
    Keyword,
    Name,
    Number,
    Punctuation,
    Text,
)


class AbiSignatureLexer(RegexLexer):
    """Pygments lexer for Solidity-style ABI signatures and structs."""

    name = "ABI signature"
    aliases = ["abisig", "abi-signature"]
    filenames = ["*.abisig"]
    mimetypes = ["text/x-abi-signature"]

    tokens = {
        "root": [
            (r"\s+", Text),
            # Declaration keywords
            (
                words(
                    (
                        "function",
                        "constructor",
                        "fallback",
                        "receive",
                        "event",
                        "error",
                        "struct",
                    ),
                    prefix=r"\b",
                    suffix=r"\b",
                ),
                Keyword.Declaration,
            ),
            (r"\breturns\b", Keyword),
            # Data locations and the indexed flag
            (
                words(
                    ("indexed", "storage", "memory", "calldata"),
                    prefix=r"\b",
                    suffix=r"\b",
                ),
                Keyword.Pseudo,
            ),
            (r"\btuple(?=\s*\()", Keyword.Type),
            # Elementary ABI types
            (
                r"\b(u?int(8|16|24|32|40|48|56|64|72|80|88|96|104|112|120|128|136"
                r"|144|152|160|168|176|184|192|200|208|216|224|232|240|248|256)?"
                r"|bytes([1-9]|[12][0-9]|3[0-2])?|address|bool|string"
                r"|u?fixed([0-9]+x[0-9]+)?)\b",
                Keyword.Type,
            ),
            # Array bounds
            (r"[0-9]+", Number.Integer),
            (r"[a-zA-Z_$][a-zA-Z0-9_$]*", Name),
            (r"[(),;\[\]{}]", Punctuation),
            (r".", Text),
        ],
    }


def highlight_signature(text: str) -> str:
    """Return ``text`` with ANSI colors for a terminal."""
    return highlight(text, AbiSignatureLexer(), TerminalFormatter()).rstrip("\n")
