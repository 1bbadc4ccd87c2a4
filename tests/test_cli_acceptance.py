from __future__ import annotations

import io
import json
import sys
import tempfile
import unittest
import xml.etree.ElementTree as ET
from pathlib import Path
from unittest import mock

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from draig import cli

PROGRAM = """
Fill ffa
AutoBox a 0 0 100 60 Client
AutoHex b 200 0 100 60 Server
ClearFill
Arrow a_r b_l request
""".strip()


class CLIAcceptanceTests(unittest.TestCase):
    def run_cli(self, argv: list[str], stdin_text: str = "") -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        stdin = io.StringIO(stdin_text)
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr), mock.patch("sys.stdin", stdin):
            code = cli.main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_requires_subcommand(self) -> None:
        code, _out, err = self.run_cli([])
        self.assertEqual(code, 2)
        self.assertIn("E_ARGS", err)
        self.assertIn("subcommand", err)

    def test_render_file_writes_svg(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "input.drg"
            src.write_text(PROGRAM, encoding="utf-8")
            code, out, err = self.run_cli(["render", str(src)])
            self.assertEqual(code, 0, err)
            target = Path(td) / "input.svg"
            self.assertTrue(target.exists())
            self.assertIn("Wrote", out)
            root = ET.fromstring(target.read_text(encoding="utf-8"))
            self.assertEqual(root.get("viewBox"), "-10 -10 320 120")

    def test_render_explicit_output_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "input.drg"
            src.write_text(PROGRAM, encoding="utf-8")
            target = Path(td) / "custom.svg"
            code, _out, err = self.run_cli(["render", str(src), "-o", str(target)])
            self.assertEqual(code, 0, err)
            self.assertTrue(target.exists())
            self.assertFalse((Path(td) / "input.svg").exists())

    def test_render_html_page(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "flow.drg"
            src.write_text(PROGRAM, encoding="utf-8")
            code, _out, err = self.run_cli(["render", str(src), "--html"])
            self.assertEqual(code, 0, err)
            page = (Path(td) / "flow.html").read_text(encoding="utf-8")
            self.assertIn("<title>flow</title>", page)
            self.assertIn("<svg ", page)

    def test_render_html_title_is_escaped(self) -> None:
        code, out, err = self.run_cli(["render", "--text", PROGRAM, "--html", "--title", "A & B"])
        self.assertEqual(code, 0, err)
        self.assertIn("<title>A &amp; B</title>", out)

    def test_render_text_goes_to_stdout(self) -> None:
        code, out, err = self.run_cli(["render", "--text", PROGRAM])
        self.assertEqual(code, 0, err)
        self.assertTrue(out.startswith("<svg "))
        self.assertTrue(out.endswith("\n"))
        ET.fromstring(out)

    def test_render_file_to_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "input.drg"
            src.write_text(PROGRAM, encoding="utf-8")
            code, out, err = self.run_cli(["render", str(src), "--stdout"])
            self.assertEqual(code, 0, err)
            self.assertIn("<svg ", out)
            self.assertFalse((Path(td) / "input.svg").exists())

    def test_render_reads_stdin(self) -> None:
        code, out, err = self.run_cli(["render"], stdin_text="Pin a 0 0\nPin b 10 10\nBox a b")
        self.assertEqual(code, 0, err)
        self.assertIn("<rect ", out)

    def test_empty_stdin_is_rejected(self) -> None:
        code, _out, err = self.run_cli(["render"], stdin_text="   \n")
        self.assertEqual(code, 2)
        self.assertIn("E_ARGS", err)

    def test_stdout_and_output_are_exclusive(self) -> None:
        code, _out, err = self.run_cli(["render", "--text", PROGRAM, "--stdout", "-o", "x.svg"])
        self.assertEqual(code, 2)
        self.assertIn("mutually exclusive", err)

    def test_text_and_file_are_exclusive(self) -> None:
        code, _out, err = self.run_cli(["render", "input.drg", "--text", PROGRAM])
        self.assertEqual(code, 2)
        self.assertIn("E_ARGS", err)

    def test_missing_input_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, _out, err = self.run_cli(["render", str(Path(td) / "nope.drg")])
        self.assertEqual(code, 2)
        self.assertIn("E_IO_READ", err)

    def test_diagram_errors_exit_3_with_code(self) -> None:
        code, _out, err = self.run_cli(["render", "--text", "Pin a 0 0\nBox a"])
        self.assertEqual(code, 3)
        self.assertIn("error[E_ARGUMENT]", err)
        self.assertIn("line 2", err)
        self.assertIn("draig cheatsheet", err)

        code, _out, err = self.run_cli(["render", "--text", "Wobble a b"])
        self.assertEqual(code, 3)
        self.assertIn("E_UNKNOWN_COMMAND", err)

        code, _out, err = self.run_cli(["render", "--text", "AutoBox a 0 0 0 5"])
        self.assertEqual(code, 3)
        self.assertIn("E_DIMENSION", err)

    def test_error_format_json_shape(self) -> None:
        code, _out, err = self.run_cli(["--error-format", "json"])
        self.assertEqual(code, 2)
        payload = json.loads(err)
        self.assertEqual(payload["code"], "E_ARGS")
        self.assertFalse(payload["ok"])

    def test_json_error_names_file_and_line(self) -> None:
        code, _out, err = self.run_cli(
            ["--error-format", "json", "render", "--text", "Pin a 0 0\nLine a b"]
        )
        self.assertEqual(code, 3)
        payload = json.loads(err)
        self.assertEqual(payload["code"], "E_UNDEFINED_PIN")
        self.assertEqual(payload["line"], 2)
        self.assertEqual(payload["file"], "<text>")

    def test_check_reports_overflow(self) -> None:
        program = "Pin a 0 0\nPin b 20 40\nBox a b Supercalifragilistic"
        code, out, err = self.run_cli(["check", "--text", program])
        self.assertEqual(code, 0, err)
        self.assertIn("<text>:line 3: box label", out)

        code, out, _err = self.run_cli(["check", "--text", program, "--strict"])
        self.assertEqual(code, 1)
        self.assertIn("Supercalifragilistic", out)

    def test_check_all_labels_fit(self) -> None:
        code, out, err = self.run_cli(["check", "--strict", "--text", "Pin a 0 0\nPin b 200 100\nBox a b a"])
        self.assertEqual(code, 0, err)
        self.assertIn("all labels fit", out)

    def test_check_invalid_program(self) -> None:
        code, _out, err = self.run_cli(["check", "--text", "Box a b"])
        self.assertEqual(code, 3)
        self.assertIn("E_UNDEFINED_PIN", err)

    def test_cheatsheet_prints_command_reference(self) -> None:
        code, out, err = self.run_cli(["cheatsheet"])
        self.assertEqual(code, 0, err)
        self.assertIn("draig command reference", out)
        self.assertIn("AutoBoxOut", out)
        self.assertIn("FlipArrow", out)

    def test_unknown_subcommand(self) -> None:
        code, _out, err = self.run_cli(["compile"])
        self.assertEqual(code, 2)
        self.assertIn("E_ARGS", err)

    def test_debug_traceback_gate(self) -> None:
        with mock.patch("draig.cli.render", side_effect=RuntimeError("boom")):
            code, _out, err = self.run_cli(["render", "--text", "Pin a 0 0"])
            self.assertEqual(code, 1)
            self.assertIn("E_INTERNAL", err)
            self.assertNotIn("Traceback", err)

        with mock.patch("draig.cli.render", side_effect=RuntimeError("boom")):
            code, _out, err = self.run_cli(["--debug", "render", "--text", "Pin a 0 0"])
            self.assertEqual(code, 1)
            self.assertIn("Traceback", err)


if __name__ == "__main__":
    unittest.main()
