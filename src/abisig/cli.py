"""abisig command-line interface."""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path

import click

from abisig import __version__
from abisig.ast_nodes import InputKind, SignatureKind
from abisig.classify import classify_input
from abisig.config import AbisigConfig, discover_config
from abisig.errors import SignatureError
from abisig.formatter import render_struct
from abisig.parser import Parser

_KIND_CHOICES = [k.value for k in SignatureKind if k.value]


def _settings(ctx: click.Context) -> AbisigConfig:
    return ctx.obj["config"]


def _color(ctx: click.Context) -> bool:
    return ctx.obj["color"]


def _report(ctx: click.Context, err: SignatureError) -> None:
    click.echo(err.render(color=_color(ctx)), err=True, color=_color(ctx))


def _emit(ctx: click.Context, text: str) -> None:
    if _color(ctx):
        from abisig.highlight import highlight_signature

        text = highlight_signature(text)
    click.echo(text, color=_color(ctx))


def _parser(ctx: click.Context, text: str, name: str = "<input>") -> Parser:
    return Parser(text, name, _settings(ctx).parser)


@click.group()
@click.version_option(__version__, prog_name="abisig")
@click.option("--color/--no-color", default=None, help="Colorize output.")
@click.pass_context
def main(ctx: click.Context, color: bool | None) -> None:
    """Parse and canonicalize Ethereum ABI signatures."""
    try:
        config = discover_config()
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
    if color is None:
        color = config.output.color
    ctx.obj = {"config": config, "color": color}


@main.command()
@click.argument("text")
@click.option(
    "--as", "kind", type=click.Choice(_KIND_CHOICES),
    help="Require the signature to be of this kind.",
)
@click.pass_context
def parse(ctx: click.Context, text: str, kind: str | None) -> None:
    """Parse a signature and print its canonical form."""
    expected = SignatureKind(kind) if kind else None
    try:
        sig = _parser(ctx, text).parse_signature(expected)
    except SignatureError as e:
        _report(ctx, e)
        raise SystemExit(1)
    _emit(ctx, sig.render())


@main.command()
@click.argument("text")
@click.pass_context
def param(ctx: click.Context, text: str) -> None:
    """Parse a single parameter type and print its canonical form."""
    try:
        parameter = _parser(ctx, text).parse_parameter()
    except SignatureError as e:
        _report(ctx, e)
        raise SystemExit(1)
    _emit(ctx, parameter.render())


@main.command()
@click.argument("text")
@click.pass_context
def struct(ctx: click.Context, text: str) -> None:
    """Parse a struct definition and print its canonical form."""
    try:
        parameter = _parser(ctx, text).parse_struct()
    except SignatureError as e:
        _report(ctx, e)
        raise SystemExit(1)
    _emit(ctx, render_struct(parameter))


@main.command()
@click.argument("text")
def classify(text: str) -> None:
    """Print what kind of declaration TEXT is."""
    kind = classify_input(text)
    click.echo(kind.value)
    if kind is InputKind.INVALID:
        raise SystemExit(1)


@main.command()
@click.argument("text")
@click.pass_context
def view(ctx: click.Context, text: str) -> None:
    """Dump the parsed tree of TEXT."""
    kind = classify_input(text)
    parser = _parser(ctx, text)
    try:
        if kind in (InputKind.TYPE, InputKind.ARRAY, InputKind.TUPLE):
            node = parser.parse_parameter()
        elif kind is InputKind.STRUCT:
            node = parser.parse_struct()
        else:
            # Invalid input is parsed as a signature for its diagnostic.
            node = parser.parse_signature()
    except SignatureError as e:
        _report(ctx, e)
        raise SystemExit(1)
    _dump_tree(node, 0)


@main.command(name="format")
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--check", is_flag=True, help="Check formatting without modifying files.")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read from stdin, write to stdout.")
@click.pass_context
def format_cmd(ctx: click.Context, path: str | None, check: bool, use_stdin: bool) -> None:
    """Canonicalize a file of signatures, one per line.

    Blank lines and lines starting with ``#`` are kept as they are.
    """
    if use_stdin or path is None:
        source = sys.stdin.read()
        filename = "<stdin>"
    else:
        source = Path(path).read_text()
        filename = path

    formatted, ok = _format_lines(ctx, source, filename)
    if not ok:
        raise SystemExit(1)

    if check:
        if formatted != source:
            click.echo(f"would reformat {filename}")
            raise SystemExit(1)
        return

    if use_stdin or path is None:
        sys.stdout.write(formatted)
    elif formatted != source:
        Path(path).write_text(formatted)
        click.echo(f"formatted {filename}")


def _format_lines(ctx: click.Context, source: str, filename: str) -> tuple[str, bool]:
    """Format each signature line; returns (text, no errors)."""
    out: list[str] = []
    ok = True
    for lineno, line in enumerate(source.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            out.append(line)
            continue
        try:
            sig = _parser(ctx, line, f"{filename}:{lineno}").parse_signature()
        except SignatureError as e:
            _report(ctx, e)
            ok = False
            out.append(line)
            continue
        out.append(sig.render())
    text = "\n".join(out)
    if source.endswith("\n"):
        text += "\n"
    return text, ok


def _dump_tree(node: object, depth: int) -> None:
    """Print a readable dump of a parsed node."""
    indent = "  " * depth
    click.echo(f"{indent}{type(node).__name__}")

    fields = node.__dataclass_fields__  # type: ignore[attr-defined]
    for field_name in fields:
        value = getattr(node, field_name)
        if isinstance(value, Enum):
            # Unspecified locations and keyword-less kinds are left out.
            if not value.value:
                continue
            value = value.name.lower()
        if not value:
            continue
        if isinstance(value, tuple) and hasattr(value[0], "__dataclass_fields__"):
            click.echo(f"{indent}  {field_name}:")
            for item in value:
                _dump_tree(item, depth + 2)
        elif isinstance(value, tuple):
            click.echo(f"{indent}  {field_name}: {list(value)!r}")
        else:
            click.echo(f"{indent}  {field_name}: {value!r}")
