"""Chart configuration."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ValidationError
from .interaction import DEFAULT_FADE_OPACITY, NodeChosenCallback


@dataclass(frozen=True)
class ChartConfig:
    """Size and behaviour of a dependency wheel.

    Attributes:
        width: Width and height of the square chart.
        margin: Space reserved around the ring for labels.
        padding: Gap between groups, in radians.
        ring_width: Thickness of the group ring.
        label_offset: Distance from the inner ring edge to the label text.
        fade_opacity: Opacity of unrelated elements while a node is focused.
        on_node_chosen: Called as (node, dependencies, dependents) on click.
    """

    width: float = 700
    margin: float = 150
    padding: float = 0.02
    ring_width: float = 20
    label_offset: float = 26
    fade_opacity: float = DEFAULT_FADE_OPACITY
    on_node_chosen: NodeChosenCallback | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValidationError(f"width must be positive, got {self.width}")
        if self.margin < 0:
            raise ValidationError(f"margin must be non-negative, got {self.margin}")
        if self.radius <= 0:
            raise ValidationError(
                f"margin {self.margin} leaves no room for the ring in width {self.width}"
            )
        if self.padding < 0:
            raise ValidationError(f"padding must be non-negative, got {self.padding}")
        if self.ring_width < 0:
            raise ValidationError(f"ring_width must be non-negative, got {self.ring_width}")
        if not 0 <= self.fade_opacity <= 1:
            raise ValidationError(f"fade_opacity must be in [0, 1], got {self.fade_opacity}")

    @property
    def radius(self) -> float:
        """Inner radius of the ring; chords meet the ring here."""
        return self.width / 2 - self.margin

    @property
    def outer_radius(self) -> float:
        return self.radius + self.ring_width

    def with_options(self, **changes: Any) -> "ChartConfig":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


# YAML keys use dashes, like CLI flags
_YAML_KEYS = {
    f.name.replace("_", "-"): f.name for f in fields(ChartConfig) if f.name != "on_node_chosen"
}


def load_config(config_path: Path, **overrides: Any) -> ChartConfig:
    """Load chart configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.
        **overrides: Fields that take precedence over the file, e.g. on_node_chosen.

    Returns:
        ChartConfig built from the file's values and the overrides.

    Raises:
        ValidationError: If the file is not a mapping or has unknown keys.
    """
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValidationError(f"{config_path}: expected a mapping at the top level")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in _YAML_KEYS:
            raise ValidationError(
                f"{config_path}: unknown key '{key}' (expected one of {', '.join(sorted(_YAML_KEYS))})"
            )
        values[_YAML_KEYS[key]] = value

    values.update(overrides)
    return ChartConfig(**values)
