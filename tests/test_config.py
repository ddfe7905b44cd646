"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from pseudolex.cli import build_parser, load_config, main, resolve_options


def _resolve(tmp_path: Path, *extra: str):
    src = tmp_path / "prog.pseudo"
    src.write_text("OUTPUT 1\n", encoding="utf-8")
    ns = build_parser().parse_args([str(src), *extra])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "text"\n')
        assert load_config(cfg, tmp_path) == {"output": {"format": "text"}}

    def test_auto_discover_pseudolex_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pseudolex.toml").write_text("[output]\nsymbols = true\n")
        assert load_config(None, tmp_path)["output"] == {"symbols": True}


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path)
        assert opts.format == "json"
        assert opts.indent == 2
        assert opts.symbols is False

    def test_config_values(self, tmp_path: Path) -> None:
        (tmp_path / "pseudolex.toml").write_text(
            '[output]\nformat = "text"\nindent = 4\nsymbols = true\n'
        )
        opts = _resolve(tmp_path)
        assert opts.format == "text"
        assert opts.indent == 4
        assert opts.symbols is True

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "pseudolex.toml").write_text('[output]\nformat = "text"\nindent = 4\n')
        opts = _resolve(tmp_path, "--format", "json", "--indent", "0")
        assert opts.format == "json"
        assert opts.indent is None

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[output]\nsymbols = true\n")
        opts = _resolve(tmp_path, "--config", str(cfg))
        assert opts.symbols is True

    def test_invalid_format_in_config(self, tmp_path: Path) -> None:
        (tmp_path / "pseudolex.toml").write_text('[output]\nformat = "xml"\n')
        with pytest.raises(argparse.ArgumentTypeError, match="xml"):
            _resolve(tmp_path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pseudolex.toml").write_text("[output\n")
        with pytest.raises(argparse.ArgumentTypeError, match="invalid config"):
            _resolve(tmp_path)

    def test_bad_config_exit_code(self, tmp_path: Path) -> None:
        (tmp_path / "pseudolex.toml").write_text('[output]\nformat = "xml"\n')
        src = tmp_path / "prog.pseudo"
        src.write_text("OUTPUT 1\n", encoding="utf-8")
        assert main([str(src)]) == 2
