"""Command-line interface for pseudolex."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pseudolex.errors import PseudocodeSyntaxError

_FORMATS = ("json", "text")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    indent: int | None
    symbols: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="pseudolex",
        description="Tokenize teaching pseudocode into statement tokens",
    )
    p.add_argument("input", help="Input pseudocode file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=_FORMATS,
        default=None,
        help="Output format (default: json)",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="JSON indentation (default: 2)",
    )
    p.add_argument(
        "--symbols",
        action="store_true",
        default=None,
        help="Also emit declared variable, function and procedure names",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover pseudolex.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-tokenize")
    p.add_argument(
        "--debug",
        action="store_true",
        help="Log classification to stderr and dump tokens",
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "pseudolex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}

    fmt = "json"
    cfg_format = cfg_output.get("format")
    if cfg_format is not None:
        if cfg_format not in _FORMATS:
            raise argparse.ArgumentTypeError(f"invalid output format in config: {cfg_format}")
        fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    indent: int | None = 2
    cfg_indent = cfg_output.get("indent")
    if isinstance(cfg_indent, int) and not isinstance(cfg_indent, bool):
        indent = cfg_indent if cfg_indent > 0 else None
    if args.indent is not None:
        indent = args.indent if args.indent > 0 else None

    symbols = False
    cfg_symbols = cfg_output.get("symbols")
    if isinstance(cfg_symbols, bool):
        symbols = cfg_symbols
    if args.symbols is not None:
        symbols = args.symbols

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        indent=indent,
        symbols=symbols,
        watch=args.watch,
        debug=args.debug,
    )


def render_tokens(options: CliOptions, source: str) -> str:
    """Tokenize *source* and render it in the configured format."""
    from pseudolex.debug import dump_symbols, dump_tokens
    from pseudolex.lexer import tokenize
    from pseudolex.symbols import collect_symbols
    from pseudolex.tokens import token_to_dict

    tokens = tokenize(source)

    if options.debug:
        dump_tokens(tokens, file=sys.stderr)

    symbols = collect_symbols(tokens) if options.symbols else None

    if options.format == "text":
        buf = io.StringIO()
        dump_tokens(tokens, file=buf)
        if symbols is not None:
            dump_symbols(symbols, file=buf)
        return buf.getvalue()

    payload: Any = [token_to_dict(t) for t in tokens]
    if symbols is not None:
        payload = {
            "tokens": payload,
            "symbols": {
                "declared": sorted(symbols.declared),
                "funcs": sorted(symbols.funcs),
                "procs": sorted(symbols.procs),
            },
        }
    return json.dumps(payload, indent=options.indent, ensure_ascii=False) + "\n"


def tokenize_file(options: CliOptions) -> str:
    """Read and tokenize a pseudocode file, returning the rendered output."""
    source = options.input_file.read_text(encoding="utf-8")
    return render_tokens(options, source)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-tokenize on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    out = tokenize_file(options)
                    if options.output_file:
                        options.output_file.write_text(out, encoding="utf-8")
                    else:
                        sys.stdout.write(out)
                        sys.stdout.flush()
                    print(f"Tokenized {options.input_file}", file=sys.stderr)
                except PseudocodeSyntaxError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if options.watch:
        watch_loop(options)
        return 0

    try:
        out = tokenize_file(options)
    except PseudocodeSyntaxError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(out, encoding="utf-8")
    else:
        sys.stdout.write(out)

    return 0
