"""Command-line interface for draig render/check workflows."""
from __future__ import annotations

import argparse
import html
import json
import os
import string
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .diagram import DiagramError, render
from .fit import check_fit
from .resources import load_cheatsheet, load_page_template


@dataclass
class CliError(Exception):
    code: str
    message: str
    hint: Optional[str] = None
    exit_code: int = 1
    file: Optional[str] = None
    line: Optional[int] = None


class UsageError(Exception):
    pass


class FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # pragma: no cover - argparse callback
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = FriendlyArgumentParser(
        prog="draig",
        description="Render pin-based diagram programs to SVG.",
    )
    parser.add_argument("--error-format", choices=["text", "json"], default="text")
    parser.add_argument("--debug", action="store_true")

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render a diagram program to SVG")
    render_parser.add_argument("input", nargs="?", help="Input diagram program file")
    render_parser.add_argument("--text", help="Raw diagram program source")
    render_parser.add_argument("--stdout", action="store_true", help="Write output to stdout")
    render_parser.add_argument("-o", "--output", help="Output path")
    render_parser.add_argument("--html", action="store_true", help="Wrap the SVG in an HTML page")
    render_parser.add_argument("--title", help="HTML page title (defaults to the input name)")

    check_parser = subparsers.add_parser("check", help="Report labels that overflow their shapes")
    check_parser.add_argument("input", nargs="?", help="Input diagram program file")
    check_parser.add_argument("--text", help="Raw diagram program source")
    check_parser.add_argument(
        "--strict", action="store_true", help="Exit with status 1 when any label overflows"
    )

    subparsers.add_parser("cheatsheet", help="Print the command reference")

    return parser


def _read_input(path: Optional[str], text: Optional[str]) -> tuple[str, str, Optional[Path]]:
    if path and text is not None:
        raise CliError(
            "E_ARGS",
            "--text cannot be combined with file input",
            hint="Use either FILE or --text.",
            exit_code=2,
        )

    if text is not None:
        return text, "<text>", None

    if path:
        input_path = Path(path)
        if not input_path.exists():
            raise CliError(
                "E_IO_READ",
                f"input file not found: {input_path}",
                exit_code=2,
                file=str(input_path),
            )
        try:
            return input_path.read_text(encoding="utf-8"), str(input_path), input_path
        except OSError as exc:
            raise CliError(
                "E_IO_READ",
                f"failed to read input file: {input_path}",
                hint=str(exc),
                exit_code=2,
                file=str(input_path),
            )

    if sys.stdin.isatty():
        raise CliError(
            "E_ARGS",
            "no input provided",
            hint="Use a subcommand with FILE, --text, or pipe stdin.",
            exit_code=2,
        )

    data = sys.stdin.read()
    if not data.strip():
        raise CliError(
            "E_ARGS",
            "stdin was empty",
            hint="Pipe a diagram program into stdin.",
            exit_code=2,
        )
    return data, "<stdin>", None


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CliError(
            "E_IO_WRITE",
            f"failed to write output file: {path}",
            hint=str(exc),
            exit_code=4,
            file=str(path),
        )


def wrap_html(svg_text: str, title: str) -> str:
    """Embed rendered SVG in the packaged HTML host page."""
    page = string.Template(load_page_template())
    return page.substitute(title=html.escape(title), svg=svg_text)


def _error_from_exception(exc: Exception, source_name: Optional[str]) -> CliError:
    if isinstance(exc, CliError):
        return exc
    if isinstance(exc, DiagramError):
        return CliError(
            exc.code,
            str(exc),
            hint="Run `draig cheatsheet` for command syntax.",
            exit_code=3,
            file=source_name,
            line=exc.line_number,
        )
    return CliError(
        "E_INTERNAL",
        str(exc) or exc.__class__.__name__,
        hint="Re-run with --debug to see traceback.",
        exit_code=1,
    )


def _emit_error(err: CliError, *, error_format: str) -> None:
    if error_format == "json":
        payload = {
            "ok": False,
            "code": err.code,
            "message": err.message,
            "file": err.file,
            "line": err.line,
            "hint": err.hint,
        }
        sys.stderr.write(json.dumps(payload) + "\n")
        return

    sys.stderr.write(f"error[{err.code}]: {err.message}\n")
    if err.hint:
        sys.stderr.write(f"hint: {err.hint}\n")


def _handle_render(args: argparse.Namespace, context: dict) -> int:
    if args.stdout and args.output:
        raise CliError(
            "E_ARGS",
            "--stdout and --output are mutually exclusive",
            hint="Choose either --stdout or --output.",
            exit_code=2,
        )

    source, source_name, source_path = _read_input(args.input, args.text)
    context["source_name"] = source_name
    output = render(source)
    if args.html:
        title = args.title or (source_path.stem if source_path is not None else "diagram")
        output = wrap_html(output, title)

    if args.stdout or source_path is None:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")
        return 0

    suffix = ".html" if args.html else ".svg"
    output_path = Path(args.output) if args.output else source_path.with_suffix(suffix)
    _write_text(output_path, output)
    print(f"Wrote {output_path}")
    return 0


def _handle_check(args: argparse.Namespace, context: dict) -> int:
    source, source_name, _source_path = _read_input(args.input, args.text)
    context["source_name"] = source_name
    issues = check_fit(source)
    for issue in issues:
        print(f"{source_name}:{issue}")
    if not issues:
        print(f"{source_name}: all labels fit")
    return 1 if issues and args.strict else 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    parser = _build_parser()

    if not raw_argv:
        err = CliError(
            "E_ARGS",
            "missing subcommand",
            hint="Use one of: render, check, cheatsheet.",
            exit_code=2,
        )
        _emit_error(err, error_format="text")
        return err.exit_code

    debug_enabled = "--debug" in raw_argv or os.getenv("DRAIG_DEBUG") == "1"
    error_format = "text"
    if "--error-format" in raw_argv:
        idx = raw_argv.index("--error-format")
        if idx + 1 < len(raw_argv):
            error_format = raw_argv[idx + 1]

    context: dict = {"source_name": None}
    try:
        args = parser.parse_args(raw_argv)
        error_format = args.error_format

        if args.command == "render":
            return _handle_render(args, context)
        if args.command == "check":
            return _handle_check(args, context)
        if args.command == "cheatsheet":
            print(load_cheatsheet())
            return 0

        raise CliError(
            "E_ARGS",
            "missing subcommand",
            hint="Use one of: render, check, cheatsheet.",
            exit_code=2,
        )
    except UsageError as exc:
        err = CliError(
            "E_ARGS",
            str(exc),
            hint="Use subcommands: render, check, cheatsheet.",
            exit_code=2,
        )
        _emit_error(err, error_format=error_format)
        return err.exit_code
    except Exception as exc:  # pragma: no cover - exercised in integration tests
        err = _error_from_exception(exc, context["source_name"])
        _emit_error(err, error_format=error_format)
        if debug_enabled:
            traceback.print_exc(file=sys.stderr)
        return err.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
