"""TOML config loading for xxml.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_NAME = "xxml.toml"


@dataclass
class LexerConfig:
    strict: bool = False


@dataclass
class CheckConfig:
    extensions: list[str] = field(default_factory=lambda: [".xxml"])


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class XXMLConfig:
    lexer: LexerConfig = field(default_factory=LexerConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find xxml.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> XXMLConfig:
    """Parse an xxml.toml file into an XXMLConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = XXMLConfig()

    if "lexer" in data:
        lex = data["lexer"]
        config.lexer = LexerConfig(strict=lex.get("strict", False))

    if "check" in data:
        chk = data["check"]
        extensions = chk.get("extensions", [".xxml"])
        config.check = CheckConfig(
            extensions=[ext if ext.startswith(".") else f".{ext}" for ext in extensions],
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(color=diag.get("color", True))

    return config


def discover_config(start_path: Path | None = None) -> XXMLConfig:
    """Load the nearest xxml.toml, or defaults when there is none."""
    try:
        path = find_config(start_path)
    except FileNotFoundError:
        logger.debug("no %s found, using defaults", CONFIG_NAME)
        return XXMLConfig()
    logger.debug("using config %s", path)
    return load_config(path)
