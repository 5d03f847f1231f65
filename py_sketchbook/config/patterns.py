"""
Pattern catalog.

Each sketch declares its tweakable parameters ("knobs") with a type, a
default and optional limits. ``resolve_values`` merges user overrides onto
the defaults and rejects anything a knob would not accept.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..core.space_colonization.tree import LEAF_MODES

KnobType = Literal["number", "boolean", "dropdown", "string"]


class Knob(BaseModel):
    """One tweakable parameter."""

    type: KnobType
    label: str
    default: Any = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Optional[List[str]] = None

    def validate_value(self, value: Any) -> Any:
        """Return ``value`` if this knob accepts it, else raise ValueError."""
        if self.type == "number":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{self.label} expects a number, got {value!r}")
            if self.min is not None and value < self.min:
                raise ValueError(f"{self.label} must be >= {self.min}, got {value}")
            if self.max is not None and value > self.max:
                raise ValueError(f"{self.label} must be <= {self.max}, got {value}")
        elif self.type == "boolean":
            if not isinstance(value, bool):
                raise ValueError(f"{self.label} expects a boolean, got {value!r}")
        elif self.type == "dropdown":
            if value not in (self.options or []):
                raise ValueError(f"{self.label} must be one of {self.options}, got {value!r}")
        elif not isinstance(value, str):
            raise ValueError(f"{self.label} expects a string, got {value!r}")
        return value


class PatternSpec(BaseModel):
    """A named sketch and its knobs, keyed by parameter name."""

    name: str
    title: str
    description: str = ""
    knobs: Dict[str, Knob] = Field(default_factory=dict)

    def defaults(self) -> Dict[str, Any]:
        return {key: knob.default for key, knob in self.knobs.items()}


PATTERNS: Dict[str, PatternSpec] = {
    "i-spy": PatternSpec(
        name="i-spy",
        title="I Spy",
        description="Grid partitioned into randomly merged rooms.",
        knobs={
            "n": Knob(type="number", label="Resolution", default=10, min=1),
            "unity": Knob(type="number", label="Unity", default=0.5, min=0, max=1, step=0.05),
        },
    ),
    "pandoras-box": PatternSpec(
        name="pandoras-box",
        title="Pandora's Box",
        description="Grid partitioned into rectangular rooms drawn as nested boxes.",
        knobs={
            "n": Knob(type="number", label="Resolution", default=5, min=1),
            "unity": Knob(type="number", label="Unity", default=0.75, min=0, max=1, step=0.05),
            "padding": Knob(type="number", label="Padding", default=15, min=0),
            "depth": Knob(type="number", label="Depth", default=40, min=0, step=2),
            "stroke_weight": Knob(type="number", label="Stroke Weight", default=2, min=0, step=0.2),
            "fill_color": Knob(type="string", label="Fill Color", default="rgba(255, 255, 255, 1)"),
        },
    ),
    "space-colonization": PatternSpec(
        name="space-colonization",
        title="Space Colonization",
        description="Tree grown toward a cloud of attraction points.",
        knobs={
            "branch_length": Knob(type="number", label="Branch Length", default=8, min=2),
            "min_dist": Knob(type="number", label="Leaf Radius", default=10, min=5),
            "num_leaves": Knob(type="number", label="Leaves", default=1500, min=10, step=10),
            "wat": Knob(type="number", label="wat", default=0, min=0, step=2),
            "leaf_mode": Knob(
                type="dropdown", label="Leaf Mode", default=LEAF_MODES[0], options=list(LEAF_MODES)
            ),
            "shape_width": Knob(type="number", label="Width", default=90, min=2, step=2),
            "show_leaves": Knob(type="boolean", label="Show Leaves", default=False),
        },
    ),
    "flower": PatternSpec(
        name="flower",
        title="Flower",
        description="Petals filled with polar venation.",
        knobs={
            "branch_resolution": Knob(
                type="number", label="Branch Resolution", default=4, min=0.5, step=0.5
            ),
            "branch_length": Knob(type="number", label="Branch Length", default=15, min=1),
            "max_leaves": Knob(type="number", label="Max Leaves", default=7, min=0),
            "growth_rate": Knob(type="number", label="Growth Rate", default=1.5, min=0, step=0.1),
        },
    ),
}


def list_patterns() -> List[str]:
    """Names of every registered pattern."""
    return list(PATTERNS)


def get_pattern(name: str) -> PatternSpec:
    """Pattern by name. Raises KeyError for unknown names."""
    if name not in PATTERNS:
        raise KeyError(f"Unknown pattern '{name}'. Available: {list_patterns()}")
    return PATTERNS[name]


def resolve_values(name: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Pattern defaults with validated overrides applied."""
    pattern = get_pattern(name)
    values = pattern.defaults()
    for key, value in (overrides or {}).items():
        if key not in pattern.knobs:
            raise ValueError(f"Pattern '{name}' has no knob '{key}'")
        values[key] = pattern.knobs[key].validate_value(value)
    return values
