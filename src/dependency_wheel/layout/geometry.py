"""SVG path generators for ring sectors and chord ribbons.

Angles are in radians, 0 at twelve o'clock, increasing clockwise. Paths are
centred on the origin; translation and the root rotation are applied by the
drawing backend as transforms.
"""

import math
from dataclasses import dataclass

from .chord import TAU, ChordRecord, Group, Subgroup

# Angle 0 points up, while cos/sin put angle 0 on the positive x axis
ANGLE_OFFSET = -math.pi / 2

# Spans closer than this to a full turn are drawn as a complete annulus
FULL_CIRCLE_EPSILON = 1e-6


def _fmt(value: float) -> str:
    """Format a coordinate with at most 4 decimals and no trailing zeros."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def polar_to_cartesian(radius: float, angle: float) -> tuple[float, float]:
    """Convert a wheel angle and radius to (x, y) screen coordinates."""
    a = angle + ANGLE_OFFSET
    return radius * math.cos(a), radius * math.sin(a)


def _point(radius: float, angle: float) -> str:
    x, y = polar_to_cartesian(radius, angle)
    return f"{_fmt(x)},{_fmt(y)}"


def _full_annulus(inner_radius: float, outer_radius: float) -> str:
    r1 = _fmt(outer_radius)
    path = f"M0,{r1}A{r1},{r1} 0 1,1 0,{_fmt(-outer_radius)}A{r1},{r1} 0 1,1 0,{r1}"
    if inner_radius > 0:
        r0 = _fmt(inner_radius)
        path += f"M0,{r0}A{r0},{r0} 0 1,0 0,{_fmt(-inner_radius)}A{r0},{r0} 0 1,0 0,{r0}"
    return path + "Z"


def arc_path(group: Group, inner_radius: float, outer_radius: float) -> str:
    """Ring-sector path for a group between two radii.

    A zero-width group collapses to a single point on the outer radius.

    Args:
        group: Group (or anything with start_angle / end_angle).
        inner_radius: Radius of the inner edge.
        outer_radius: Radius of the outer edge.

    Returns:
        SVG path data.
    """
    a0, a1 = group.start_angle, group.end_angle
    da = a1 - a0

    if da <= 0:
        return f"M{_point(outer_radius, a0)}Z"
    if da >= TAU - FULL_CIRCLE_EPSILON:
        return _full_annulus(inner_radius, outer_radius)

    large_arc = 1 if da > math.pi else 0
    r1 = _fmt(outer_radius)
    path = (
        f"M{_point(outer_radius, a0)}"
        f"A{r1},{r1} 0 {large_arc},1 {_point(outer_radius, a1)}"
    )
    if inner_radius > 0:
        r0 = _fmt(inner_radius)
        path += (
            f"L{_point(inner_radius, a1)}"
            f"A{r0},{r0} 0 {large_arc},0 {_point(inner_radius, a0)}"
        )
    else:
        path += "L0,0"
    return path + "Z"


def _arc_to(radius: float, subgroup: Subgroup) -> str:
    r = _fmt(radius)
    large_arc = 1 if subgroup.end_angle - subgroup.start_angle > math.pi else 0
    return f"A{r},{r} 0 {large_arc},1 {_point(radius, subgroup.end_angle)}"


def _same_ends(a: Subgroup, b: Subgroup) -> bool:
    return a.start_angle == b.start_angle and a.end_angle == b.end_angle


def chord_path(chord: ChordRecord, radius: float) -> str:
    """Ribbon path for a chord.

    Each end is an arc along its sub-arc at ``radius``; the ends are joined
    by quadratic curves with their control point at the centre. Ends of
    different widths give a tapered ribbon.

    Args:
        chord: Chord with source and target sub-arcs.
        radius: Radius at which the ribbon meets the ring.

    Returns:
        SVG path data.
    """
    s, t = chord.source, chord.target
    path = f"M{_point(radius, s.start_angle)}{_arc_to(radius, s)}"
    if _same_ends(s, t):
        path += f"Q 0,0 {_point(radius, s.start_angle)}"
    else:
        path += (
            f"Q 0,0 {_point(radius, t.start_angle)}"
            f"{_arc_to(radius, t)}"
            f"Q 0,0 {_point(radius, s.start_angle)}"
        )
    return path + "Z"


@dataclass(frozen=True)
class LabelPlacement:
    """Where and how to draw a group's label."""

    angle: float
    text_anchor: str
    transform: str


def label_placement(group: Group, radius: float, offset: float = 26) -> LabelPlacement:
    """Place a label just outside the ring, reading outward from the centre.

    Labels past π are flipped so the text is never upside-down.

    Args:
        group: Group being labelled.
        radius: Inner radius of the ring.
        offset: Distance from ``radius`` to the start of the text.

    Returns:
        LabelPlacement with angle, text anchor and SVG transform.
    """
    angle = group.angle
    flipped = angle > math.pi
    transform = f"rotate({_fmt(math.degrees(angle) - 90)})translate({_fmt(radius + offset)})"
    if flipped:
        transform += "rotate(180)"
    return LabelPlacement(
        angle=angle,
        text_anchor="end" if flipped else "start",
        transform=transform,
    )
