from __future__ import annotations

import sys
import unittest
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from draig import UndefinedPinError, check_fit
from draig.diagram import BOX_TEXT, Label
from draig.fit import TextMeasurer, _wrapped_line_count


class _FixedWidthMeasurer(TextMeasurer):
    """Every character is half the font size wide."""

    def measure(self, text: str, size: float) -> float:
        return len(text) * size / 2


class FitCheckTests(unittest.TestCase):
    def setUp(self) -> None:
        self.measurer = _FixedWidthMeasurer()

    def check(self, program: str):
        return check_fit(program, measurer=self.measurer)

    def test_short_label_fits(self) -> None:
        self.assertEqual(self.check("Pin a 0 0\nPin b 100 40\nBox a b ok"), [])

    def test_long_word_overflows_width(self) -> None:
        (issue,) = self.check("Pin a 0 0\nPin b 50 40\nBox a b abcdefghij")
        self.assertEqual(issue.line_number, 3)
        self.assertEqual(issue.kind, "box")
        self.assertEqual(issue.dimension, "width")
        self.assertAlmostEqual(issue.needed, 60)
        self.assertAlmostEqual(issue.available, 48)
        self.assertIn("line 3", str(issue))

    def test_wrapped_text_overflows_height(self) -> None:
        words = "aa bb cc dd ee ff gg hh ii jj kk ll"
        (issue,) = self.check(f"Pin a 0 0\nPin b 100 20\nBox a b {words}")
        self.assertEqual(issue.dimension, "height")
        self.assertAlmostEqual(issue.needed, 3 * 12 * 1.2)
        self.assertAlmostEqual(issue.available, 20)

    def test_explicit_breaks_count_as_lines(self) -> None:
        self.assertEqual(self.check("Pin a 0 0\nPin b 100 30\nBox a b one\\ntwo"), [])
        (issue,) = self.check("Pin a 0 0\nPin b 100 30\nBox a b one\\ntwo\\nthree")
        self.assertEqual(issue.dimension, "height")

    def test_table_cells_are_checked_separately(self) -> None:
        issues = self.check("Pin a 0 0\nPin b 100 40\nTable a b 2 short|muchtoolong")
        self.assertEqual([issue.text for issue in issues], ["muchtoolong"])
        self.assertAlmostEqual(issues[0].available, 48)

    def test_small_text_uses_smaller_font(self) -> None:
        program = "Pin a 0 0\nPin b 50 40\n{} a b abcdefghij"
        self.assertEqual(len(self.check(program.format("Box"))), 1)
        self.assertEqual(self.check(program.format("SmallBox")), [])

    def test_line_label_longer_than_line(self) -> None:
        (issue,) = self.check("Pin a 0 0\nPin b 20 0\nArrow a b longlabel")
        self.assertEqual(issue.kind, "line")
        self.assertAlmostEqual(issue.needed, 36)
        self.assertAlmostEqual(issue.available, 20)

    def test_line_label_that_fits(self) -> None:
        self.assertEqual(self.check("Pin a 0 0\nPin b 200 0\nLine a b tag"), [])

    def test_shapes_without_text_are_ignored(self) -> None:
        self.assertEqual(self.check("Pin a 0 0\nPin b 5 5\nBox a b\nHex a b\nLine a b"), [])

    def test_wrapped_line_count_fills_each_paragraph(self) -> None:
        label = Label("box", "aa bb cc\n\ndd", BOX_TEXT, 50.0, 100.0, 1)
        # Two words (5 chars, 30px) fit in 36px, three do not.
        self.assertEqual(_wrapped_line_count(label, 36.0, 12.0, self.measurer), 4)
        self.assertEqual(_wrapped_line_count(label, 200.0, 12.0, self.measurer), 3)

    def test_invalid_program_raises(self) -> None:
        with self.assertRaises(UndefinedPinError):
            self.check("Box a b text")


class PillowMeasurerTests(unittest.TestCase):
    def test_measures_with_real_font(self) -> None:
        measurer = TextMeasurer()
        narrow = measurer.measure("i", 12)
        wide = measurer.measure("iiiiiiiiii", 12)
        self.assertGreater(narrow, 0)
        self.assertGreater(wide, narrow)

    def test_font_is_cached_per_size(self) -> None:
        measurer = TextMeasurer()
        self.assertIs(measurer.font(12), measurer.font(12.2))

    def test_default_measurer_flags_obvious_overflow(self) -> None:
        issues = check_fit("Pin a 0 0\nPin b 20 40\nBox a b Supercalifragilistic")
        self.assertEqual([issue.dimension for issue in issues], ["width"])
        self.assertEqual(check_fit("Pin a 0 0\nPin b 200 100\nBox a b a"), [])


if __name__ == "__main__":
    unittest.main()
