"""Tests for the canonical printer."""

from __future__ import annotations

import pytest

from abisig.ast_nodes import DataLocation, Signature, SignatureKind
from abisig.formatter import SignatureFormatter, render_struct
from abisig.parser import parse_parameter, parse_signature, parse_struct
from tests.helpers import param


def _roundtrip(source: str) -> str:
    """Parse a signature and format it back to text."""
    return parse_signature(source).render()


class TestSignatureRendering:
    @pytest.mark.parametrize("source, expected", [
        ("foo", "foo()"),
        ("function foo", "function foo()"),
        ("constructor()", "constructor()"),
        ("fallback()", "fallback()"),
        ("receive()", "receive()"),
        ("event foo(int)", "event foo(int)"),
        ("error foo(int)", "error foo(int)"),
        ("foo(int)", "foo(int)"),
        ("foo(int a, int b)", "foo(int a, int b)"),
        ("foo(int[][1][2] a)", "foo(int[][1][2] a)"),
        ("foo()(int)", "foo() returns (int)"),
        ("foo()(int a)", "foo() returns (int a)"),
        ("foo()(int a, int b)", "foo() returns (int a, int b)"),
        ("foo()(int[][1][2] a)", "foo() returns (int[][1][2] a)"),
        ("foo(int storage)", "foo(int storage)"),
        ("foo(int memory)", "foo(int memory)"),
        ("foo(int calldata)", "foo(int calldata)"),
        ("event foo(int indexed)", "event foo(int indexed)"),
        ("foo(int storage a)", "foo(int storage a)"),
        ("foo() internal pure", "foo() internal pure"),
        ("foo() internal pure (int)", "foo() internal pure returns (int)"),
        ("foo((int,int))", "foo((int, int))"),
        ("foo((int,int)[])", "foo((int, int)[])"),
        ("foo(tuple(int,int))", "foo((int, int))"),
        ("  foo ( int  a ,int b ) ;", "foo(int a, int b)"),
        ("constructor ( uint256 x )", "constructor(uint256 x)"),
        (
            "fallback(bytes calldata i)external returns(bytes memory o)",
            "fallback(bytes calldata i) external returns (bytes memory o)",
        ),
    ])
    def test_canonical_form(self, source, expected):
        assert _roundtrip(source) == expected

    def test_str_matches_render(self):
        sig = parse_signature("foo(uint256 a)")
        assert str(sig) == sig.render()

    def test_function_without_name(self):
        sig = Signature(kind=SignatureKind.FUNCTION, inputs=(param("int"),))
        assert sig.render() == "function (int)"
        assert parse_signature(sig.render()) == sig

    def test_kind_adopted_from_parse_as_is_printed(self):
        sig = Signature(kind=SignatureKind.ERROR, name="E", inputs=(param("int"),))
        assert sig.render() == "error E(int)"


class TestParameterRendering:
    def test_elementary(self):
        assert param("uint256").render() == "uint256"

    def test_order_of_parts(self):
        p = param("bytes", "data", dims=[3, -1], data_location=DataLocation.MEMORY)
        assert p.render() == "bytes[3][] memory data"

    def test_indexed(self):
        assert param("address", "from", indexed=True).render() == "address indexed from"

    def test_empty_tuple(self):
        assert param().render() == "()"

    def test_nested_tuple(self):
        p = parse_parameter("((int a,int b)[2] pair, bool)[] list")
        assert p.render() == "((int a, int b)[2] pair, bool)[] list"


class TestStructRendering:
    def test_struct(self):
        p = parse_struct("struct Price{uint256 price;uint256[] history;}")
        assert render_struct(p) == "struct Price { uint256 price; uint256[] history; }"

    def test_empty_struct(self):
        assert render_struct(param(name="Empty")) == "struct Empty { }"

    def test_struct_roundtrip(self):
        p = parse_struct("struct S {\n  address owner;\n  bytes32[4] keys;\n}")
        assert parse_struct(render_struct(p)) == p


class TestRoundTrip:
    @pytest.mark.parametrize("source", [
        "function getPrices(string[] calldata symbols) external view "
        "returns ((uint256 price, uint256 timestamp)[] result)",
        "event Transfer(address indexed from, address indexed to, uint256 value)",
        "event Log(bytes data) anonymous",
        "error InsufficientBalance(uint256 available, uint256 required)",
        "fallback(bytes calldata input) external returns (bytes memory output)",
        "receive() external payable",
        "constructor(address owner, uint8[4] memory weights)",
        "swap((address,uint24)[] path, uint256 amountIn)(uint256 amountOut)",
        "$weird_0(_t $n, ()[] empty)",
        "functional() returnsValue",
    ])
    def test_signature(self, source):
        sig = parse_signature(source)
        assert parse_signature(sig.render()) == sig

    @pytest.mark.parametrize("source", [
        "uint256",
        "(uint256 price, uint256 timestamp)",
        "tuple(int, (bool, string)[2][])[] calldata xs",
        "int memory indexed",
        "int indexed memory",
    ])
    def test_parameter(self, source):
        p = parse_parameter(source)
        assert parse_parameter(p.render()) == p

    def test_formatter_is_idempotent(self):
        formatter = SignatureFormatter()
        sig = parse_signature("foo ( (int a , bool)[] x ) view ( uint )")
        once = formatter.format_signature(sig)
        assert formatter.format_signature(parse_signature(once)) == once
