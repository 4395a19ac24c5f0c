"""Chord layout and geometry for dependency wheels.

compute_layout turns an adjacency matrix into angular groups and chords;
arc_path and chord_path turn those into SVG path data.
"""

from .chord import ChordLayout, ChordRecord, Group, Subgroup, compute_layout
from .geometry import LabelPlacement, arc_path, chord_path, label_placement, polar_to_cartesian

__all__ = [
    "Group",
    "Subgroup",
    "ChordRecord",
    "ChordLayout",
    "compute_layout",
    "arc_path",
    "chord_path",
    "LabelPlacement",
    "label_placement",
    "polar_to_cartesian",
]
