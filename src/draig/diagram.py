"""Interpreter for the pin-based diagram language.

A program is a list of commands, one per line. Blank lines and lines starting
with ``#`` are ignored. The first token of a line names the command and is
case-insensitive; pin names, colours, numbers and text are case-sensitive.

Pins are named points. ``Pin``, ``Offset``, ``Split``, ``Corner``,
``Project`` and the ``Auto*`` shapes create them, ``Move``, ``MoveTo``,
``MoveOver``, ``Centre`` and ``Reset`` shift them in place. Drawing commands
(``Box``, ``Table``, ``Pill``, ``Hex``, ``TiltBox``, ``TrapBox``, ``BoxOut``,
``BoxIn``, ``Line``, ``Arrow`` and friends) read pins and emit SVG fragments
in command order. The canvas is sized to cover every pin.
"""
from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from . import shapes
from .ringdeque import RingDeque

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XHTML_NS = "http://www.w3.org/1999/xhtml"

MIN_CANVAS = 100
CANVAS_MARGIN = 20
CANVAS_INSET = -10

DIAGRAM_STYLES = (
    ".lineText {font: 0.5em sans-serif;} "
    ".boxText {font: 0.75em sans-serif; display:table-cell;} "
    ".boxTextSmall {font: 0.25em sans-serif; display:table-cell;} "
    "textPath {text-anchor: middle;} "
    ".line {fill: none; stroke-width: 1px; stroke: #888;} "
    ".arrowHead {fill: #888;} "
    "rect {fill: #eef; stroke-width: 1px; stroke: #888;} "
    "polygon {fill: #eef; stroke-width: 1px; stroke: #888;} "
)

BOX_TEXT = "boxText"
SMALL_BOX_TEXT = "boxTextSmall"
LINE_TEXT = "lineText"

_NUMBER = re.compile(r"^[-+]?\d+(?:\.\d+)?$")
_INTEGER = re.compile(r"^[-+]?\d+$")
_TOKEN_SEPARATOR = re.compile(r"[ \t]+")
_LINE_SEPARATOR = re.compile(r"\r\n|\r|\n")
_LITERAL_BREAK = "\\n"

_SIDES = {
    "left": "left",
    "l": "left",
    "right": "right",
    "r": "right",
    "top": "top",
    "t": "top",
    "bottom": "bottom",
    "b": "bottom",
}

# Suffix and position of each generated pin as a fraction of width/height.
_AUTO_PINS = (
    ("_tl", 0.0, 0.0),
    ("_t", 0.5, 0.0),
    ("_tr", 1.0, 0.0),
    ("_l", 0.0, 0.5),
    ("_r", 1.0, 0.5),
    ("_bl", 0.0, 1.0),
    ("_b", 0.5, 1.0),
    ("_br", 1.0, 1.0),
)


class DiagramError(ValueError):
    """Raised when a diagram program is structurally invalid."""

    code = "E_DIAGRAM"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.line_number: Optional[int] = None
        self.source: Optional[str] = None

    def attach(self, line_number: int, source: str) -> None:
        self.line_number = line_number
        self.source = source

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message} in '{self.source}'"


class ArgumentError(DiagramError):
    """Too few arguments, or an argument that does not parse."""

    code = "E_ARGUMENT"


class UndefinedPinError(DiagramError):
    """A command referenced a pin that has not been defined."""

    code = "E_UNDEFINED_PIN"

    def __init__(self, command: str, pin: str) -> None:
        super().__init__(f"{command} -- pin not defined '{pin}'")
        self.pin = pin


class DimensionError(DiagramError):
    """A width, height or column count is out of range."""

    code = "E_DIMENSION"


class UnknownCommandError(DiagramError):
    code = "E_UNKNOWN_COMMAND"

    def __init__(self, keyword: str) -> None:
        super().__init__(f"unknown command '{keyword}'")
        self.keyword = keyword


@dataclass
class Point:
    x: float
    y: float

    def coords(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass
class Label:
    """Text placed by a command, and the room it was given."""

    kind: str
    text: str
    css_class: str
    width: float
    height: float
    line_number: int


@dataclass
class ChartState:
    fill: Optional[str] = None
    stroke: Optional[str] = None
    translate: Point = field(default_factory=lambda: Point(0.0, 0.0))
    line_counter: int = 1
    line_number: int = 0
    labels: List[Label] = field(default_factory=list)

    def next_line_id(self) -> str:
        line_id = f"curve_{self.line_counter}"
        self.line_counter += 1
        return line_id


@dataclass
class Chart:
    pins: Dict[str, Point]
    state: ChartState
    fragments: List[List[ET.Element]]

    @property
    def labels(self) -> List[Label]:
        return self.state.labels


Pins = Dict[str, Point]
Fragment = List[ET.Element]
Handler = Callable[[RingDeque, Pins, ChartState], Fragment]


def render(program: str) -> str:
    """Render a diagram program to an SVG document.

    Raises a ``DiagramError`` subclass, naming the offending line, if the
    program is invalid.
    """
    return to_svg(interpret(program))


def interpret(program: str) -> Chart:
    """Run every command of ``program`` and collect pins, state and fragments."""
    pins: Pins = {}
    state = ChartState()
    fragments: List[Fragment] = []
    for line_number, line in _command_lines(program):
        state.line_number = line_number
        try:
            fragment = _execute(line, pins, state)
        except DiagramError as exc:
            exc.attach(line_number, line)
            raise
        if fragment:
            fragments.append(fragment)
    return Chart(pins=pins, state=state, fragments=fragments)


def to_svg(chart: Chart) -> str:
    width, height = _canvas_size(chart.pins.values())
    root = ET.Element(
        "svg",
        {
            "xmlns:xhtml": XHTML_NS,
            "xmlns:xlink": XLINK_NS,
            "xmlns": SVG_NS,
            "viewBox": f"{CANVAS_INSET} {CANVAS_INSET} {width} {height}",
        },
    )
    style_defs = ET.SubElement(root, "defs")
    style = ET.SubElement(style_defs, "style", {"type": "text/css"})
    style.text = DIAGRAM_STYLES
    root.append(shapes.marker_defs())
    for fragment in chart.fragments:
        root.extend(fragment)

    root.text = "\n"
    for child in root:
        child.tail = "\n"
    return ET.tostring(root, encoding="unicode")


def _command_lines(program: str) -> Iterator[Tuple[int, str]]:
    for line_number, raw in enumerate(_LINE_SEPARATOR.split(program), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        yield line_number, line


def _execute(line: str, pins: Pins, state: ChartState) -> Fragment:
    args = RingDeque(_TOKEN_SEPARATOR.split(line))
    keyword = args.pop_front().lower()
    handler = _COMMANDS.get(keyword)
    if handler is None:
        raise UnknownCommandError(keyword)
    return handler(args, pins, state)


def _canvas_size(points: Iterable[Point]) -> Tuple[int, int]:
    width = MIN_CANVAS
    height = MIN_CANVAS
    for point in points:
        width = int(max(width, point.x))
        height = int(max(height, point.y))
    return width + CANVAS_MARGIN, height + CANVAS_MARGIN


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------


def _require(args: RingDeque, count: int, command: str) -> None:
    if len(args) < count:
        raise ArgumentError(
            f"{command} command too short: needs {count} arguments, got {len(args)}"
        )


def _number(token: str, command: str, what: str) -> float:
    if not _NUMBER.match(token):
        raise ArgumentError(f"{command} -- {what} must be numeric (got {token!r})")
    value = float(token)
    if not math.isfinite(value):
        raise ArgumentError(f"{command} -- {what} is out of range (got {token!r})")
    return value


def _columns(token: str, command: str) -> int:
    if not _INTEGER.match(token):
        raise ArgumentError(f"{command} -- column count must be an integer (got {token!r})")
    columns = int(token)
    if columns < 0:
        raise DimensionError(f"{command} -- table columns not valid: {columns}")
    return columns


def _side(token: str, command: str) -> str:
    try:
        return _SIDES[token.lower()]
    except KeyError:
        raise ArgumentError(
            f"{command} -- side must be left, right, top or bottom (got {token!r})"
        ) from None


def _pin(pins: Pins, name: str, command: str) -> Point:
    try:
        return pins[name]
    except KeyError:
        raise UndefinedPinError(command, name) from None


def _group(names: Iterable[str], pins: Pins, command: str) -> List[Point]:
    return [_pin(pins, name, command) for name in dict.fromkeys(names)]


def _extents(points: List[Point]) -> Tuple[float, float, float, float]:
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def _finite_point(x: float, y: float, command: str) -> Point:
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ArgumentError(f"{command} -- pin coordinates out of range")
    return Point(x, y)


def _shift(points: List[Point], dx: float, dy: float, command: str) -> None:
    # All or nothing: no pin moves if any would leave the finite range.
    moved = [_finite_point(point.x + dx, point.y + dy, command) for point in points]
    for point, target in zip(points, moved):
        point.x, point.y = target.x, target.y


def _place(
    name: str, x: float, y: float, pins: Pins, state: ChartState, command: str
) -> None:
    pins[name] = _finite_point(x + state.translate.x, y + state.translate.y, command)


def _outline(points: List[Tuple[float, float]], state: ChartState, command: str) -> ET.Element:
    if not all(math.isfinite(x) and math.isfinite(y) for x, y in points):
        raise DimensionError(f"{command} -- outline is out of range")
    return shapes.polygon(points, fill=state.fill)


def _trailing_text(args: RingDeque) -> str:
    return " ".join(args)


def _corners(
    args: RingDeque, pins: Pins, command: str
) -> Tuple[float, float, float, float]:
    """Pop two pin names and return left, top, right, bottom."""
    first = _pin(pins, args.pop_front(), command)
    second = _pin(pins, args.pop_front(), command)
    left, right = min(first.x, second.x), max(first.x, second.x)
    top, bottom = min(first.y, second.y), max(first.y, second.y)
    if not (math.isfinite(right - left) and math.isfinite(bottom - top)):
        raise DimensionError(f"{command} -- shape is too large")
    return left, top, right, bottom


# ---------------------------------------------------------------------------
# Pin commands
# ---------------------------------------------------------------------------


def _cmd_pin(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 3, "Pin")
    name = args.pop_front()
    x = _number(args.pop_front(), "Pin", "x")
    y = _number(args.pop_front(), "Pin", "y")
    _place(name, x, y, pins, state, "Pin")
    return []


def _cmd_offset(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 4, "Offset")
    name = args.pop_front()
    source = _pin(pins, args.pop_front(), "Offset")
    dx = _number(args.pop_front(), "Offset", "dx")
    dy = _number(args.pop_front(), "Offset", "dy")
    pins[name] = _finite_point(source.x + dx, source.y + dy, "Offset")
    return []


def _cmd_split(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 3, "Split")
    name = args.pop_front()
    first = _pin(pins, args.pop_front(), "Split")
    second = _pin(pins, args.pop_front(), "Split")
    pins[name] = _finite_point((first.x + second.x) / 2, (first.y + second.y) / 2, "Split")
    return []


def _cmd_corner(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 3, "Corner")
    name = args.pop_front()
    first = _pin(pins, args.pop_front(), "Corner")
    second = _pin(pins, args.pop_front(), "Corner")
    pins[name] = Point(first.x, second.y)
    return []


def _cmd_project(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 4, "Project")
    name = args.pop_front()
    a = _pin(pins, args.pop_front(), "Project")
    b = _pin(pins, args.pop_front(), "Project")
    target = _pin(pins, args.pop_front(), "Project")
    x, y = shapes.project_point(a.coords(), b.coords(), target.coords())
    pins[name] = _finite_point(x, y, "Project")
    return []


def _cmd_move(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 3, "Move")
    dx = _number(args.pop_front(), "Move", "dx")
    dy = _number(args.pop_front(), "Move", "dy")
    _shift(_group(args, pins, "Move"), dx, dy, "Move")
    return []


def _cmd_move_to(
    args: RingDeque, pins: Pins, state: ChartState, *, command: str, centre: bool
) -> Fragment:
    _require(args, 2, command)
    base = _pin(pins, args.pop_front(), command)
    group = _group(args, pins, command)
    x_min, y_min, x_max, y_max = _extents(group)
    if centre:
        dx = base.x - (x_min + x_max) / 2
        dy = base.y - (y_min + y_max) / 2
    else:
        dx = base.x - x_min
        dy = base.y - y_min
    _shift(group, dx, dy, command)
    return []


def _cmd_move_over(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 2, "MoveOver")
    base = _pin(pins, args.pop_front(), "MoveOver")
    # The reference pin only measures the offset; it stays where it is.
    anchor = _pin(pins, args.pop_front(), "MoveOver")
    dx = base.x - anchor.x
    dy = base.y - anchor.y
    _shift(_group(args, pins, "MoveOver"), dx, dy, "MoveOver")
    return []


def _cmd_reset(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 1, "Reset")
    group = _group(args, pins, "Reset")
    x_min, y_min, _, _ = _extents(group)
    _shift(group, -x_min, -y_min, "Reset")
    return []


def _cmd_translate(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 2, "Translate")
    x = _number(args.pop_front(), "Translate", "x")
    y = _number(args.pop_front(), "Translate", "y")
    state.translate = Point(x, y)
    return []


def _cmd_fill(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    state.fill = args.peek_front() if args else None
    return []


def _cmd_stroke(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    state.stroke = args.peek_front() if args else None
    return []


def _cmd_clear_fill(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    state.fill = None
    return []


def _cmd_clear_stroke(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    state.stroke = None
    return []


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def _text_cells(text: str, split: bool) -> RingDeque:
    if split:
        return RingDeque(text.split("|"))
    return RingDeque.from_value(text)


def _text_block(
    state: ChartState,
    left: float,
    top: float,
    width: float,
    height: float,
    cells: RingDeque,
    columns: int,
    css_class: str,
) -> ET.Element:
    rows = max(1, -(-len(cells) // columns))
    for cell in cells:
        if cell.strip():
            state.labels.append(
                Label(
                    kind="box",
                    text=cell.replace(_LITERAL_BREAK, "\n"),
                    css_class=css_class,
                    width=width / columns,
                    height=height / rows,
                    line_number=state.line_number,
                )
            )
    return shapes.text_block(left, top, width, height, cells, columns, css_class)


def _draw_box(
    args: RingDeque,
    pins: Pins,
    state: ChartState,
    *,
    command: str,
    table: bool = False,
    small: bool = False,
) -> Fragment:
    _require(args, 3 if table else 2, command)
    left, top, right, bottom = _corners(args, pins, command)
    columns = _columns(args.pop_front(), command) if table else 1
    width = right - left
    height = bottom - top

    fragment = [shapes.rect(left, top, width, height, fill=state.fill)]
    text = _trailing_text(args)
    if not text:
        return fragment
    cells = _text_cells(text, split=table)
    if columns == 0:
        columns = max(1, math.isqrt(len(cells)))
    css_class = SMALL_BOX_TEXT if small else BOX_TEXT
    fragment.append(_text_block(state, left, top, width, height, cells, columns, css_class))
    return fragment


def _shape_text(
    fragment: Fragment,
    args: RingDeque,
    state: ChartState,
    left: float,
    top: float,
    width: float,
    height: float,
) -> Fragment:
    text = _trailing_text(args)
    if text:
        cells = RingDeque.from_value(text)
        fragment.append(_text_block(state, left, top, width, height, cells, 1, BOX_TEXT))
    return fragment


def _draw_pill(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 2, "Pill")
    left, top, right, bottom = _corners(args, pins, "Pill")
    width = right - left
    height = bottom - top
    radius = min(width, height) / 2
    fragment = [shapes.rect(left, top, width, height, fill=state.fill, radius=radius)]
    return _shape_text(fragment, args, state, left + radius / 2, top, width - radius, height)


def _draw_hex(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 2, "Hex")
    left, top, right, bottom = _corners(args, pins, "Hex")
    width = right - left
    height = bottom - top
    inset = min(width, height) / 2
    fragment = [_outline(shapes.hexagon_points(left, top, right, bottom), state, "Hex")]
    return _shape_text(fragment, args, state, left + inset / 2, top, width - inset, height)


def _draw_tilt_box(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 3, "TiltBox")
    skew = _number(args.pop_front(), "TiltBox", "skew")
    left, top, right, bottom = _corners(args, pins, "TiltBox")
    points = shapes.tilt_points(skew, left, top, right, bottom)
    fragment = [_outline(points, state, "TiltBox")]
    return _shape_text(fragment, args, state, left + skew / 2, top, right - left, bottom - top)


def _draw_trap_box(args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    _require(args, 4, "TrapBox")
    top_expand = _number(args.pop_front(), "TrapBox", "top expansion")
    bottom_expand = _number(args.pop_front(), "TrapBox", "bottom expansion")
    left, top, right, bottom = _corners(args, pins, "TrapBox")
    points = shapes.trapezoid_points(top_expand, bottom_expand, left, top, right, bottom)
    fragment = [_outline(points, state, "TrapBox")]
    return _shape_text(fragment, args, state, left, top, right - left, bottom - top)


def _draw_notch_box(
    args: RingDeque, pins: Pins, state: ChartState, *, command: str, outward: bool
) -> Fragment:
    _require(args, 3, command)
    side = _side(args.pop_front(), command)
    left, top, right, bottom = _corners(args, pins, command)
    points = shapes.notch_points(side, outward, left, top, right, bottom)
    fragment = [_outline(points, state, command)]
    return _shape_text(fragment, args, state, left, top, right - left, bottom - top)


@dataclass(frozen=True)
class _AutoShape:
    """How an ``Auto*`` command hands its arguments to the base shape."""

    command: str
    base: Handler
    params: int = 0
    params_first: bool = True
    notched: bool = False


def _draw_auto(auto: _AutoShape, args: RingDeque, pins: Pins, state: ChartState) -> Fragment:
    command = auto.command
    _require(args, 5 + auto.params, command)
    name = args.pop_front()
    x = _number(args.pop_front(), command, "x")
    y = _number(args.pop_front(), command, "y")
    width = _number(args.pop_front(), command, "width")
    height = _number(args.pop_front(), command, "height")
    if width <= 0:
        raise DimensionError(f"{command} -- invalid width: {shapes.fmt(width)}")
    if height <= 0:
        raise DimensionError(f"{command} -- invalid height: {shapes.fmt(height)}")
    params = [args.pop_front() for _ in range(auto.params)]
    side = _side(params[0], command) if auto.notched else None

    for suffix, fx, fy in _AUTO_PINS:
        _place(name + suffix, x + width * fx, y + height * fy, pins, state, command)

    if side is not None:
        side_length = height if side in ("left", "right") else width
        depth = shapes.notch_depth(side_length)
        nx, ny = shapes.SIDE_NORMALS[side]
        _shift([pins[f"{name}_{side[0]}"]], nx * depth, ny * depth, command)

    corners = [name + "_tl", name + "_br"]
    tokens = params + corners if auto.params_first else corners + params
    return auto.base(RingDeque(tokens + args.to_list()), pins, state)


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


def _draw_line(
    args: RingDeque,
    pins: Pins,
    state: ChartState,
    *,
    command: str,
    arrow: bool,
    flipped: bool,
) -> Fragment:
    _require(args, 2, command)
    start = _pin(pins, args.pop_front(), command).coords()
    end = _pin(pins, args.pop_front(), command).coords()
    text = _trailing_text(args)

    # Text is never drawn upside-down unless asked for.
    right_to_left = start[0] > end[0]
    if right_to_left:
        start, end = end, start
    if flipped:
        right_to_left = not right_to_left
        start, end = end, start

    line_id = state.next_line_id()
    fragment = [
        shapes.line_path(
            line_id, start, end, arrow=arrow, right_to_left=right_to_left, stroke=state.stroke
        )
    ]
    if text:
        state.labels.append(
            Label(
                kind="line",
                text=text.replace(_LITERAL_BREAK, "\n"),
                css_class=LINE_TEXT,
                width=math.hypot(end[0] - start[0], end[1] - start[1]),
                height=0.0,
                line_number=state.line_number,
            )
        )
        fragment.append(
            shapes.line_text(
                line_id,
                text.replace("_", "\u00a0"),
                arrow=arrow,
                right_to_left=right_to_left,
                flipped=flipped,
            )
        )
    return fragment


_BOX = partial(_draw_box, command="Box")
_SMALL_BOX = partial(_draw_box, command="SmallBox", small=True)
_TABLE = partial(_draw_box, command="Table", table=True)
_BOX_OUT = partial(_draw_notch_box, command="BoxOut", outward=True)
_BOX_IN = partial(_draw_notch_box, command="BoxIn", outward=False)

_AUTO_SHAPES = (
    _AutoShape("AutoBox", _BOX),
    _AutoShape("AutoSmallBox", _SMALL_BOX),
    _AutoShape("AutoTable", _TABLE, params=1, params_first=False),
    _AutoShape("AutoPill", _draw_pill),
    _AutoShape("AutoHex", _draw_hex),
    _AutoShape("AutoTiltBox", _draw_tilt_box, params=1),
    _AutoShape("AutoTrapBox", _draw_trap_box, params=2),
    _AutoShape("AutoBoxOut", _BOX_OUT, params=1, notched=True),
    _AutoShape("AutoBoxIn", _BOX_IN, params=1, notched=True),
)

_COMMANDS: Dict[str, Handler] = {
    "pin": _cmd_pin,
    "offset": _cmd_offset,
    "split": _cmd_split,
    "corner": _cmd_corner,
    "project": _cmd_project,
    "move": _cmd_move,
    "moveto": partial(_cmd_move_to, command="MoveTo", centre=False),
    "moveover": _cmd_move_over,
    "centre": partial(_cmd_move_to, command="Centre", centre=True),
    "center": partial(_cmd_move_to, command="Center", centre=True),
    "reset": _cmd_reset,
    "translate": _cmd_translate,
    "group": _cmd_translate,
    "fill": _cmd_fill,
    "stroke": _cmd_stroke,
    "clearfill": _cmd_clear_fill,
    "clearstroke": _cmd_clear_stroke,
    "box": _BOX,
    "smallbox": _SMALL_BOX,
    "table": _TABLE,
    "pill": _draw_pill,
    "hex": _draw_hex,
    "tiltbox": _draw_tilt_box,
    "trapbox": _draw_trap_box,
    "boxout": _BOX_OUT,
    "boxin": _BOX_IN,
    "line": partial(_draw_line, command="Line", arrow=False, flipped=False),
    "flipline": partial(_draw_line, command="FlipLine", arrow=False, flipped=True),
    "arrow": partial(_draw_line, command="Arrow", arrow=True, flipped=False),
    "fliparrow": partial(_draw_line, command="FlipArrow", arrow=True, flipped=True),
}
_COMMANDS.update({auto.command.lower(): partial(_draw_auto, auto) for auto in _AUTO_SHAPES})

COMMAND_NAMES = tuple(sorted(_COMMANDS))


__all__ = [
    "render",
    "interpret",
    "to_svg",
    "Chart",
    "ChartState",
    "Label",
    "Point",
    "DiagramError",
    "ArgumentError",
    "UndefinedPinError",
    "DimensionError",
    "UnknownCommandError",
    "COMMAND_NAMES",
]
