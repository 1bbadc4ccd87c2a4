"""Check that diagram labels fit the space their shapes give them."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import ImageFont

from .diagram import BOX_TEXT, LINE_TEXT, SMALL_BOX_TEXT, Label, interpret

# Font sizes of the diagram stylesheet classes at a 16px em.
CLASS_FONT_SIZES: Dict[str, float] = {
    BOX_TEXT: 12.0,
    SMALL_BOX_TEXT: 4.0,
    LINE_TEXT: 8.0,
}
LINE_HEIGHT = 1.2
CELL_PADDING = 2.0

SANS_SERIF_FAMILIES = ["DejaVu Sans", "Helvetica", "Arial", "Liberation Sans"]


@dataclass
class FitIssue:
    line_number: int
    kind: str
    text: str
    dimension: str
    needed: float
    available: float

    def __str__(self) -> str:
        return (
            f"line {self.line_number}: {self.kind} label {self.text!r} needs "
            f"{self.needed:.1f}px of {self.dimension} but has {self.available:.1f}px"
        )


class TextMeasurer:
    """Caches Pillow fonts and measures text widths."""

    FONT_DIRS = [
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/Library/Fonts"),
        Path("~/Library/Fonts").expanduser(),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    def __init__(self, families: Optional[List[str]] = None) -> None:
        self._families = families if families is not None else SANS_SERIF_FAMILIES
        self._font_cache: Dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}
        self._font_paths: Dict[str, Optional[str]] = {}

    def font(self, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        key_size = max(1, int(round(size)))
        if key_size in self._font_cache:
            return self._font_cache[key_size]

        font = None
        candidates = [path for path in map(self._locate_font, self._families) if path]
        candidates.append("DejaVuSans.ttf")
        for candidate in candidates:
            try:
                font = ImageFont.truetype(candidate, key_size)
                break
            except OSError:
                continue
        if font is None:
            font = ImageFont.load_default(size=key_size)

        self._font_cache[key_size] = font
        return font

    def measure(self, text: str, size: float) -> float:
        return float(self.font(size).getlength(text))

    def line_height(self, size: float) -> float:
        return size * LINE_HEIGHT

    def _locate_font(self, family: str) -> Optional[str]:
        key = family.lower()
        if key in self._font_paths:
            return self._font_paths[key]
        normalized = re.sub(r"[^a-z0-9]+", "", key)
        best_match: Optional[Tuple[int, str]] = None
        for directory in self.FONT_DIRS:
            if not directory.exists():
                continue
            for path in directory.rglob("*.ttf"):
                stem = re.sub(r"[^a-z0-9]+", "", path.stem.lower())
                if stem == normalized:
                    score = 0
                elif stem.startswith(normalized):
                    score = 1
                else:
                    continue
                if best_match is None or score < best_match[0]:
                    best_match = (score, str(path))
        resolved = best_match[1] if best_match else None
        self._font_paths[key] = resolved
        return resolved


_TEXT_MEASURER = TextMeasurer()


def check_fit(program: str, measurer: Optional[TextMeasurer] = None) -> List[FitIssue]:
    """Interpret ``program`` and report labels that overflow their shapes."""
    measurer = measurer or _TEXT_MEASURER
    issues: List[FitIssue] = []
    for label in interpret(program).labels:
        issue = _check_label(label, measurer)
        if issue is not None:
            issues.append(issue)
    return issues


def _check_label(label: Label, measurer: TextMeasurer) -> Optional[FitIssue]:
    size = CLASS_FONT_SIZES[label.css_class]
    paragraphs = [part.strip() for part in label.text.split("\n")]

    if label.kind == "line":
        needed = max(measurer.measure(part, size) for part in paragraphs)
        if needed > label.width:
            return FitIssue(label.line_number, label.kind, label.text, "width", needed, label.width)
        return None

    available = max(label.width - CELL_PADDING, 0.0)
    widest = max(
        (measurer.measure(word, size) for part in paragraphs for word in part.split()),
        default=0.0,
    )
    if widest > available:
        return FitIssue(label.line_number, label.kind, label.text, "width", widest, available)

    line_count = _wrapped_line_count(label, available, size, measurer)
    needed = line_count * measurer.line_height(size)
    if needed > label.height:
        return FitIssue(label.line_number, label.kind, label.text, "height", needed, label.height)
    return None


def _wrapped_line_count(
    label: Label, width_limit: float, size: float, measurer: TextMeasurer
) -> int:
    """Lines the label takes when each paragraph is filled word by word."""
    count = 0
    for paragraph in label.text.split("\n"):
        count += 1
        line: List[str] = []
        for word in paragraph.split():
            if line and measurer.measure(" ".join(line + [word]), size) > width_limit:
                count += 1
                line = []
            line.append(word)
    return count


__all__ = ["check_fit", "FitIssue", "TextMeasurer", "CLASS_FONT_SIZES"]
