"""Dependency wheel: chord-diagram layout and interaction for dependency matrices."""

from .chart import ChordShape, DependencyWheel, GroupShape, Wheel
from .colors import darker, node_color
from .config import ChartConfig, load_config
from .errors import DependencyWheelError, LayoutError, ValidationError
from .interaction import (
    HighlightState,
    InteractionController,
    RelatedSet,
    Selection,
    related_set,
)
from .layout import ChordLayout, ChordRecord, Group, Subgroup, arc_path, chord_path, compute_layout
from .logging_config import setup_logging
from .matrix import DependencyMatrix, Node

__all__ = [
    "DependencyWheel",
    "Wheel",
    "GroupShape",
    "ChordShape",
    "ChartConfig",
    "load_config",
    "DependencyMatrix",
    "Node",
    "compute_layout",
    "ChordLayout",
    "Group",
    "Subgroup",
    "ChordRecord",
    "arc_path",
    "chord_path",
    "node_color",
    "darker",
    "related_set",
    "RelatedSet",
    "HighlightState",
    "InteractionController",
    "Selection",
    "DependencyWheelError",
    "ValidationError",
    "LayoutError",
    "setup_logging",
]
