"""Shared test helpers for the abisig test suite."""

from __future__ import annotations

import pytest

from abisig.ast_nodes import Parameter, Signature
from abisig.errors import SignatureError
from abisig.parser import parse_signature


def param(type_name: str = "", name: str = "", *, fields=(), dims=(), **kwargs) -> Parameter:
    """Build a Parameter with tuple arguments from terser test input."""
    return Parameter(
        name=name,
        type_name=type_name,
        tuple_fields=tuple(fields),
        array_dims=tuple(dims),
        **kwargs,
    )


def check(source: str) -> Signature:
    """Parse a signature, asserting it round-trips through the printer."""
    sig = parse_signature(source)
    assert parse_signature(sig.render()) == sig, sig.render()
    return sig


def check_fails(source: str, error: type[SignatureError], match: str | None = None) -> SignatureError:
    """Parse a signature, asserting it raises ``error``."""
    with pytest.raises(error, match=match) as info:
        parse_signature(source)
    return info.value
