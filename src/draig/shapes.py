"""Geometry helpers and SVG fragment builders for diagram shapes."""
from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence, Tuple

from .ringdeque import RingDeque

Coord = Tuple[float, float]

NOTCH_ANGLE = 45.0
CELL_EDGE = "border-right:thin solid rgb(0,0,0, .4); "
CELL_PADDING = "padding: 0 .3em 0 .3em; "
ROW_EDGE = "border-bottom:thin solid rgb(0,0,0, .4); "
FLIPPED_TEXT = "transform-origin:center;transform-box:fill-box;transform:rotateZ(180deg);"

SIDE_NORMALS: Dict[str, Coord] = {
    "left": (-1.0, 0.0),
    "right": (1.0, 0.0),
    "top": (0.0, -1.0),
    "bottom": (0.0, 1.0),
}

_LINE_BREAK = re.compile(r"\\n|\n")


def fmt(value: float) -> str:
    if math.isclose(value, round(value)):
        return str(int(round(value)))
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def project_point(a: Coord, b: Coord, p: Coord) -> Coord:
    """Orthogonal projection of ``p`` onto the line through ``a`` and ``b``."""
    ex, ey = b[0] - a[0], b[1] - a[1]
    dot = ex * (p[0] - a[0]) + ey * (p[1] - a[1])
    len2 = ex * ex + ey * ey
    if len2 == 0:
        len2 = 1.0
    return a[0] + dot * ex / len2, a[1] + dot * ey / len2


def notch_depth(side_length: float) -> float:
    """Depth of a notch whose base spans the middle half of a side."""
    return side_length / 4 * math.tan(math.radians(NOTCH_ANGLE))


def hexagon_points(left: float, top: float, right: float, bottom: float) -> List[Coord]:
    inset = min(right - left, bottom - top) / 2
    middle = (top + bottom) / 2
    return [
        (left + inset, top),
        (right - inset, top),
        (right, middle),
        (right - inset, bottom),
        (left + inset, bottom),
        (left, middle),
    ]


def tilt_points(skew: float, left: float, top: float, right: float, bottom: float) -> List[Coord]:
    return [(left + skew, top), (right + skew, top), (right, bottom), (left, bottom)]


def trapezoid_points(
    top_expand: float,
    bottom_expand: float,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> List[Coord]:
    return [
        (left - top_expand, top),
        (right + top_expand, top),
        (right + bottom_expand, bottom),
        (left - bottom_expand, bottom),
    ]


def notch_points(
    side: str,
    outward: bool,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> List[Coord]:
    """Rectangle outline, clockwise from top-left, with a triangular notch on ``side``."""
    cx = (left + right) / 2
    cy = (top + bottom) / 2
    half_w = (right - left) / 4
    half_h = (bottom - top) / 4
    sign = 1.0 if outward else -1.0
    nx, ny = SIDE_NORMALS[side]

    points: List[Coord] = [(left, top)]
    if side == "top":
        depth = notch_depth(right - left) * sign
        points += [(cx - half_w, top), (cx, top + ny * depth), (cx + half_w, top)]
    points.append((right, top))
    if side == "right":
        depth = notch_depth(bottom - top) * sign
        points += [(right, cy - half_h), (right + nx * depth, cy), (right, cy + half_h)]
    points.append((right, bottom))
    if side == "bottom":
        depth = notch_depth(right - left) * sign
        points += [(cx + half_w, bottom), (cx, bottom + ny * depth), (cx - half_w, bottom)]
    points.append((left, bottom))
    if side == "left":
        depth = notch_depth(bottom - top) * sign
        points += [(left, cy + half_h), (left + nx * depth, cy), (left, cy - half_h)]
    return points


def _fill_style(fill: Optional[str]) -> Dict[str, str]:
    return {"style": f"fill: #{fill}"} if fill else {}


def rect(
    left: float,
    top: float,
    width: float,
    height: float,
    *,
    fill: Optional[str] = None,
    radius: Optional[float] = None,
) -> ET.Element:
    attrs = {"x": fmt(left), "y": fmt(top), "width": fmt(width), "height": fmt(height)}
    if radius is not None:
        attrs["rx"] = fmt(radius)
        attrs["ry"] = fmt(radius)
    attrs.update(_fill_style(fill))
    return ET.Element("rect", attrs)


def polygon(points: Sequence[Coord], *, fill: Optional[str] = None) -> ET.Element:
    attrs = {"points": " ".join(f"{fmt(x)},{fmt(y)}" for x, y in points)}
    attrs.update(_fill_style(fill))
    return ET.Element("polygon", attrs)


def append_text(element: ET.Element, text: str) -> None:
    """Set ``text`` as element content, turning line breaks into ``xhtml:br``."""
    parts = _LINE_BREAK.split(text)
    element.text = parts[0]
    for part in parts[1:]:
        br = ET.SubElement(element, "xhtml:br")
        br.tail = part


def text_block(
    left: float,
    top: float,
    width: float,
    height: float,
    cells: RingDeque,
    columns: int,
    css_class: str,
) -> ET.Element:
    """Centred, wrapping text laid out as a ``columns``-wide table.

    Cells are consumed from the front of ``cells``. A new row starts each time
    the remaining-column count reaches zero.
    """
    holder = ET.Element(
        "foreignObject",
        {
            "x": fmt(left),
            "y": fmt(top),
            "width": fmt(width),
            "height": fmt(height),
            "transform": "translate(0,0)",
        },
    )
    table = ET.SubElement(
        holder,
        "xhtml:div",
        {"style": f"display: table; height: {fmt(height)}px; margin: auto; padding: 0 1px 0 1px;"},
    )

    column_width = fmt(width / columns)
    cell_count = len(cells)
    first_row = columns > 1
    while cells:
        row = ET.SubElement(table, "xhtml:div", {"style": "display: table-row"})
        remaining = columns
        while cells and remaining > 0:
            remaining -= 1
            edge = CELL_EDGE if remaining > 0 else ""
            if columns > 1:
                edge += CELL_PADDING
            if first_row:
                edge += ROW_EDGE
            if cell_count < 2:
                edge = ""
            cell = ET.SubElement(
                row, "xhtml:div", {"style": f"display: table-cell; {edge}vertical-align: middle;"}
            )
            content = ET.SubElement(
                cell,
                "xhtml:div",
                {
                    "style": f"color:black; text-align:center; width: {column_width}px;",
                    "class": css_class,
                },
            )
            append_text(content, cells.pop_front())
        first_row = False
    return holder


def line_path(
    line_id: str,
    start: Coord,
    end: Coord,
    *,
    arrow: bool,
    right_to_left: bool,
    stroke: Optional[str] = None,
) -> ET.Element:
    attrs: Dict[str, str] = {}
    if arrow:
        if right_to_left:
            attrs["marker-start"] = "url(#arrow_r2l)"
        else:
            attrs["marker-end"] = "url(#arrow_l2r)"
    if stroke:
        attrs["style"] = f"stroke:#{stroke}"
    attrs["class"] = "line"
    attrs["id"] = line_id
    attrs["d"] = f"M{fmt(start[0])},{fmt(start[1])}L{fmt(end[0])},{fmt(end[1])}"
    return ET.Element("path", attrs)


def line_text(
    line_id: str,
    text: str,
    *,
    arrow: bool,
    right_to_left: bool,
    flipped: bool,
) -> ET.Element:
    """Label bound to the path ``line_id``, centred along it."""
    attrs = {"dy": "-2"}
    if arrow:
        attrs["dx"] = "5" if right_to_left else "-5"
    if flipped:
        attrs["style"] = FLIPPED_TEXT
    label = ET.Element("text", attrs)
    text_path = ET.SubElement(
        label,
        "textPath",
        {"xlink:href": f"#{line_id}", "startOffset": "50%", "class": "lineText"},
    )
    append_text(text_path, text)
    return label


def marker_defs() -> ET.Element:
    defs = ET.Element("defs")
    dot = ET.SubElement(
        defs,
        "marker",
        {
            "id": "dot",
            "viewBox": "-10 -10 20 20",
            "refX": "0",
            "refY": "0",
            "markerUnits": "strokeWidth",
            "markerWidth": "10",
            "markerHeight": "10",
            "orient": "auto",
            "style": "fill:#333",
        },
    )
    ET.SubElement(dot, "circle", {"cx": "0", "cy": "0", "r": "3"})
    for marker_id, ref_x, outline in (
        ("arrow_l2r", "10", "M 0 0 L 10 5 L 0 10 z"),
        ("arrow_r2l", "0", "M 10 0 L 0 5 L 10 10 z"),
    ):
        marker = ET.SubElement(
            defs,
            "marker",
            {
                "id": marker_id,
                "viewBox": "0 0 10 10",
                "refX": ref_x,
                "refY": "5",
                "markerUnits": "strokeWidth",
                "markerWidth": "10",
                "markerHeight": "10",
                "orient": "auto",
                "class": "arrowHead",
            },
        )
        ET.SubElement(marker, "path", {"d": outline})
    for child in defs:
        child.tail = "\n"
    return defs


__all__ = [
    "fmt",
    "project_point",
    "notch_depth",
    "hexagon_points",
    "tilt_points",
    "trapezoid_points",
    "notch_points",
    "rect",
    "polygon",
    "append_text",
    "text_block",
    "line_path",
    "line_text",
    "marker_defs",
]
