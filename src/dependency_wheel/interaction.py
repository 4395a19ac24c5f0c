"""Hover highlighting and node selection.

Everything here is re-derived from the layout or matrix passed in on each
event; nothing is cached between calls.
"""

import logging
import operator
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .layout.chord import ChordLayout, ChordRecord, Group
from .matrix import DependencyMatrix

logger = logging.getLogger(__name__)

DEFAULT_FADE_OPACITY = 0.1

NodeChosenCallback = Callable[[Any, list[Any], list[Any]], Any]


@dataclass(frozen=True)
class RelatedSet:
    """Neighbourhood of a focused node."""

    focus: int
    group_indices: frozenset[int]

    def includes_chord(self, chord: ChordRecord) -> bool:
        """A chord is related iff one of its ends is the focused node."""
        return chord.source.index == self.focus or chord.target.index == self.focus

    def includes_group(self, index: int) -> bool:
        return index in self.group_indices


def related_set(
    chords: Sequence[ChordRecord],
    groups: Sequence[Group],
    focus: int,
) -> RelatedSet:
    """Find the groups connected to ``focus`` by at least one chord.

    Args:
        chords: Chords of the layout.
        groups: Groups of the layout.
        focus: Index of the focused node.

    Returns:
        RelatedSet containing focus itself and every direct neighbour.

    Raises:
        IndexError: If focus is not a group index.
    """
    if not 0 <= focus < len(groups):
        raise IndexError(f"focus {focus} out of range for {len(groups)} groups")

    related = {focus}
    for chord in chords:
        if chord.source.index == focus:
            related.add(chord.target.index)
        if chord.target.index == focus:
            related.add(chord.source.index)

    return RelatedSet(focus=focus, group_indices=frozenset(related))


def focus_index(element: Any) -> int:
    """Node index an event on ``element`` refers to.

    Chords (anything with a ``source``) focus their source node, groups
    their own index. Integers (including NumPy integers) pass through;
    booleans are rejected.
    """
    if isinstance(element, bool):
        raise TypeError("focus index must be an integer, got bool")
    try:
        return operator.index(element)
    except TypeError:
        pass
    source = getattr(element, "source", None)
    if source is not None:
        return source.index
    return element.index


@dataclass(frozen=True)
class HighlightState:
    """Either neutral (``related`` is None) or focused on one node."""

    related: RelatedSet | None = None
    dim_opacity: float = DEFAULT_FADE_OPACITY

    @property
    def focus(self) -> int | None:
        return self.related.focus if self.related else None

    @property
    def is_neutral(self) -> bool:
        return self.related is None

    def group_opacity(self, index: int) -> float:
        if self.related is None or self.related.includes_group(index):
            return 1.0
        return self.dim_opacity

    def chord_opacity(self, chord: ChordRecord) -> float:
        if self.related is None or self.related.includes_chord(chord):
            return 1.0
        return self.dim_opacity


@dataclass(frozen=True)
class Selection:
    """Values reported for a chosen node."""

    node: Any
    dependencies: list[Any]
    dependents: list[Any]


class InteractionController:
    """Turns pointer events into highlight states and selection callbacks."""

    def __init__(
        self,
        fade_opacity: float = DEFAULT_FADE_OPACITY,
        on_node_chosen: NodeChosenCallback | None = None,
    ) -> None:
        self.fade_opacity = fade_opacity
        self.on_node_chosen = on_node_chosen

    def fade_out(self, layout: ChordLayout, index: int) -> HighlightState:
        """Dim every chord and group not related to ``index``."""
        related = related_set(layout.chords, layout.groups, index)
        logger.debug("Focus on node %d (%d related groups)", index, len(related.group_indices))
        return HighlightState(related=related, dim_opacity=self.fade_opacity)

    def fade_in(self, index: int | None = None) -> HighlightState:
        """Restore full opacity to everything, whichever node was focused."""
        return HighlightState(dim_opacity=self.fade_opacity)

    def selection(self, matrix: DependencyMatrix, index: int) -> Selection:
        """Node value, what it depends on (row) and what depends on it (column)."""
        return Selection(
            node=matrix.value(index),
            dependencies=matrix.dependencies(index),
            dependents=matrix.dependents(index),
        )

    def select(self, matrix: DependencyMatrix, index: int) -> Selection:
        """Compute the selection and pass it to ``on_node_chosen`` if set.

        Exceptions raised by the callback propagate to the caller.
        """
        chosen = self.selection(matrix, index)
        if self.on_node_chosen is not None:
            self.on_node_chosen(chosen.node, chosen.dependencies, chosen.dependents)
        return chosen
