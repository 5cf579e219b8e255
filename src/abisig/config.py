"""TOML config loading for abisig.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_FILENAME = "abisig.toml"


@dataclass(frozen=True)
class ParserOptions:
    # Deepest tuple nesting accepted before the parser gives up.
    max_depth: int = 64


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class AbisigConfig:
    parser: ParserOptions = field(default_factory=ParserOptions)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find abisig.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> AbisigConfig:
    """Parse an abisig.toml file into an AbisigConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = AbisigConfig()

    if "parser" in data:
        prs = data["parser"]
        max_depth = prs.get("max_depth", 64)
        if not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError(f"{path}: parser.max_depth must be a positive integer")
        config.parser = ParserOptions(max_depth=max_depth)

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(color=bool(out.get("color", True)))

    return config


def discover_config(start_path: Path | None = None) -> AbisigConfig:
    """Load the nearest abisig.toml, falling back to defaults."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return AbisigConfig()
