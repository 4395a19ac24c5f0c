"""Dependency wheel chart: layout, geometry, colours and interaction wired together."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .colors import chord_colors, node_color
from .config import ChartConfig
from .interaction import HighlightState, InteractionController, Selection, focus_index
from .layout import (
    ChordLayout,
    ChordRecord,
    Group,
    LabelPlacement,
    arc_path,
    chord_path,
    compute_layout,
    label_placement,
)
from .matrix import DependencyMatrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupShape:
    """Drawable ring sector plus label for one node."""

    group: Group
    name: str
    fill: str
    stroke: str
    path: str
    label: LabelPlacement

    @property
    def index(self) -> int:
        return self.group.index


@dataclass(frozen=True)
class ChordShape:
    """Drawable ribbon for one directed dependency."""

    chord: ChordRecord
    fill: str
    stroke: str
    path: str

    @property
    def source(self):
        return self.chord.source

    @property
    def target(self):
        return self.chord.target


@dataclass
class Wheel:
    """A rendered dependency wheel.

    Shapes are unrotated and centred on the origin; a backend draws them
    under ``transform`` with ``element_transform`` applied to every group and
    chord. ``state`` is replaced on each pointer event.
    """

    matrix: DependencyMatrix
    layout: ChordLayout
    config: ChartConfig
    groups: tuple[GroupShape, ...]
    chords: tuple[ChordShape, ...]
    controller: InteractionController
    state: HighlightState = field(default_factory=HighlightState)

    @property
    def transform(self) -> str:
        """Moves the wheel centre to the middle of the chart."""
        half = self.config.width / 2
        return f"translate({half:g},{half:g})"

    @property
    def rotation_degrees(self) -> float:
        return self.layout.rotation_degrees

    @property
    def element_transform(self) -> str:
        """Rotation that centres the root node at the top."""
        return f"rotate({self.rotation_degrees:g})"

    def group_opacity(self, index: int) -> float:
        return self.state.group_opacity(index)

    def chord_opacity(self, chord: ChordShape | ChordRecord) -> float:
        record = chord.chord if isinstance(chord, ChordShape) else chord
        return self.state.chord_opacity(record)

    def hover(self, element: Any) -> HighlightState:
        """Pointer entered a group or chord: fade out everything unrelated."""
        self.state = self.controller.fade_out(self.layout, focus_index(element))
        return self.state

    def leave(self, element: Any = None) -> HighlightState:
        """Pointer left a group or chord: restore full opacity."""
        index = focus_index(element) if element is not None else None
        self.state = self.controller.fade_in(index)
        return self.state

    def click(self, element: Any) -> Selection:
        """Group or chord chosen: report the node's dependencies and dependents."""
        return self.controller.select(self.matrix, focus_index(element))

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready scene description for a front-end."""
        return {
            "width": self.config.width,
            "height": self.config.width,
            "transform": self.transform,
            "rotation": self.rotation_degrees,
            "groups": [
                {
                    "index": shape.index,
                    "name": shape.name,
                    "value": shape.group.value,
                    "fill": shape.fill,
                    "stroke": shape.stroke,
                    "path": shape.path,
                    "label": {
                        "text": shape.name,
                        "angle": shape.label.angle,
                        "anchor": shape.label.text_anchor,
                        "transform": shape.label.transform,
                    },
                    "opacity": self.group_opacity(shape.index),
                }
                for shape in self.groups
            ],
            "chords": [
                {
                    "source": shape.source.index,
                    "target": shape.target.index,
                    "value": shape.source.value,
                    "fill": shape.fill,
                    "stroke": shape.stroke,
                    "path": shape.path,
                    "opacity": self.chord_opacity(shape),
                }
                for shape in self.chords
            ],
        }


class DependencyWheel:
    """Chart facade.

    Usage::

        chart = DependencyWheel(width=700, margin=150, padding=0.02)
        wheel = chart.render({
            "nodeNames": ["Main", "A", "B"],
            "matrix": [[0, 1, 1],   # Main depends on A and B
                       [0, 0, 1],   # A depends on B
                       [0, 0, 0]],  # B depends on nothing
        })

    Node 0 is the main package; it is drawn in gray and centred at the top.
    """

    def __init__(self, config: ChartConfig | None = None, **options: Any) -> None:
        config = config or ChartConfig()
        self.config = config.with_options(**options) if options else config
        self.wheel: Wheel | None = None

    def render(self, data: DependencyMatrix | Mapping[str, Any]) -> Wheel:
        """Lay out and build every shape for ``data``.

        Args:
            data: DependencyMatrix, or a mapping with ``nodeNames`` (or
                ``packageNames``), ``matrix`` and optional ``nodes``.

        Returns:
            The new Wheel, which also replaces ``self.wheel``.

        Raises:
            ValidationError: If the data is malformed.
            LayoutError: If the configured padding is too large for the node count.
        """
        matrix = data if isinstance(data, DependencyMatrix) else DependencyMatrix.from_data(data)
        config = self.config
        layout = compute_layout(matrix, config.padding)

        groups = []
        for group in layout.groups:
            name = matrix.names[group.index]
            fill = node_color(group.index, name)
            groups.append(
                GroupShape(
                    group=group,
                    name=name,
                    fill=fill,
                    stroke=fill,
                    path=arc_path(group, config.radius, config.outer_radius),
                    label=label_placement(group, config.radius, config.label_offset),
                )
            )

        chords = []
        for chord in layout.chords:
            fill, stroke = chord_colors(chord, matrix.names)
            chords.append(
                ChordShape(chord=chord, fill=fill, stroke=stroke, path=chord_path(chord, config.radius))
            )

        controller = InteractionController(
            fade_opacity=config.fade_opacity,
            on_node_chosen=config.on_node_chosen,
        )

        self.wheel = Wheel(
            matrix=matrix,
            layout=layout,
            config=config,
            groups=tuple(groups),
            chords=tuple(chords),
            controller=controller,
            state=controller.fade_in(),
        )
        logger.debug(
            "Rendered wheel: %d groups, %d chords, radius %g",
            len(groups),
            len(chords),
            config.radius,
        )
        return self.wheel
