"""Chord layout: angular groups and ribbons from an adjacency matrix."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import LayoutError
from ..matrix import DependencyMatrix

logger = logging.getLogger(__name__)

TAU = 2 * math.pi


@dataclass(frozen=True)
class Group:
    """Angular sector of the ring assigned to one node."""

    index: int
    start_angle: float
    end_angle: float
    value: float

    @property
    def angle(self) -> float:
        """Midpoint angle of the sector."""
        return (self.start_angle + self.end_angle) / 2

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class Subgroup:
    """Portion of a group dedicated to one edge (one end of a chord)."""

    index: int  # group owning this sub-arc
    subindex: int  # node at the other end of the edge
    start_angle: float
    end_angle: float
    value: float


@dataclass(frozen=True)
class ChordRecord:
    """Ribbon for the directed dependency source.index -> target.index."""

    source: Subgroup
    target: Subgroup


@dataclass(frozen=True)
class ChordLayout:
    """Output of compute_layout.

    Angles are unrotated; ``rotation`` is the offset that centres the root
    group on angle 0 and is applied by whoever draws the layout.
    """

    groups: tuple[Group, ...]
    chords: tuple[ChordRecord, ...]
    padding: float
    rotation: float

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(self.rotation)

    def rotated_angle(self, group: Group) -> float:
        """Midpoint of a group after rotation, in [-pi, pi]."""
        return normalize_angle(group.angle + self.rotation)


def _subgroup_entries(
    weights: tuple[tuple[float, ...], ...],
    index: int,
) -> list[tuple[bool, int, float]]:
    """List (outgoing, other_index, weight) for every non-zero edge touching a node.

    Entries are sorted by descending weight. Ties keep column order, with the
    outgoing edge before the incoming one for the same column.
    """
    entries: list[tuple[bool, int, float]] = []
    for j in range(len(weights)):
        if j == index:
            continue
        if weights[index][j] > 0:
            entries.append((True, j, weights[index][j]))
        if weights[j][index] > 0:
            entries.append((False, j, weights[j][index]))
    # sorted() is stable, so ties keep insertion order
    return sorted(entries, key=lambda entry: -entry[2])


def compute_layout(
    matrix: DependencyMatrix | Sequence[Sequence[float]],
    padding: float = 0.02,
) -> ChordLayout:
    """Allocate the circle to groups and sub-arcs and build one chord per edge.

    The data angle ``2π - N·padding`` is shared between groups in proportion
    to their outgoing plus incoming weight (diagonal excluded). Each group is
    split into one sub-arc per non-zero outgoing and incoming edge, largest
    first. ``padding`` radians follow every group.

    Both ends of every chord are ``k·weight`` wide, so ribbons from this
    layout never taper. The edges (i, j) and (j, i) are separate ribbons.

    Args:
        matrix: Validated DependencyMatrix, or raw rows to validate.
        padding: Gap between consecutive groups in radians.

    Returns:
        ChordLayout with groups in node order and chords in row-major order.

    Raises:
        ValidationError: If raw rows are malformed.
        LayoutError: If padding is negative or padding * N >= 2π.
    """
    if not isinstance(matrix, DependencyMatrix):
        rows = list(matrix)
        matrix = DependencyMatrix(names=[str(i) for i in range(len(rows))], weights=rows)

    weights = matrix.weights
    n = matrix.size

    if padding < 0:
        raise LayoutError(f"padding must be non-negative, got {padding}")
    if padding * n >= TAU:
        raise LayoutError(
            f"padding {padding} leaves no room for {n} groups "
            f"(padding * {n} = {padding * n:.4f} >= 2π)"
        )

    totals = [matrix.total(i) for i in range(n)]
    grand_total = sum(totals)
    k = (TAU - padding * n) / grand_total if grand_total > 0 else 0.0

    groups: list[Group] = []
    # (source, target) -> sub-arc at the source end / at the target end
    outgoing: dict[tuple[int, int], Subgroup] = {}
    incoming: dict[tuple[int, int], Subgroup] = {}

    x = 0.0
    for i in range(n):
        x0 = x
        for is_outgoing, j, w in _subgroup_entries(weights, i):
            a0 = x
            x += w * k
            sub = Subgroup(index=i, subindex=j, start_angle=a0, end_angle=x, value=w)
            if is_outgoing:
                outgoing[(i, j)] = sub
            else:
                incoming[(j, i)] = sub
        groups.append(Group(index=i, start_angle=x0, end_angle=x, value=totals[i]))
        x += padding

    chords: list[ChordRecord] = []
    for i in range(n):
        for j in range(n):
            if i != j and weights[i][j] > 0:
                chords.append(ChordRecord(source=outgoing[(i, j)], target=incoming[(i, j)]))

    root = groups[0]
    rotation = -root.angle

    logger.debug(
        "Chord layout: %d groups, %d chords, rotation %.4f rad",
        len(groups),
        len(chords),
        rotation,
    )

    return ChordLayout(
        groups=tuple(groups),
        chords=tuple(chords),
        padding=padding,
        rotation=rotation,
    )


def normalize_angle(angle: float) -> float:
    """Normalize angle to [-pi, pi] range."""
    while angle > math.pi:
        angle -= TAU
    while angle < -math.pi:
        angle += TAU
    return angle
