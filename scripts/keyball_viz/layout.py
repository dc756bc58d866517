"""Static physical layout tables.

A layout is an ordered list of slots, one per argument of the layer macro.
Coordinates and sizes are in key units (1.0 = one standard key); the SVG
renderer scales them by the configured key size.
"""

import logging
import math
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import load_yaml

logger = logging.getLogger(__name__)


class PhysicalSlot(BaseModel):
    """Position of one physical key."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    x: float
    y: float
    w: float = Field(1.0, gt=0)
    h: float = Field(1.0, gt=0)
    rotation: float = Field(0.0, description="Degrees clockwise about the key center")
    half: Literal["left", "right"]
    row: str
    cluster: str = "main"

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2

    def corners(self) -> list[tuple[float, float]]:
        """Return the four corners after applying the slot rotation."""
        cx, cy = self.center
        angle = math.radians(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        points = []
        for dx, dy in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
            px, py = dx * self.w / 2, dy * self.h / 2
            points.append((cx + px * cos_a - py * sin_a, cy + px * sin_a + py * cos_a))
        return points


class PhysicalLayout(BaseModel):
    """Ordered slot table for one board geometry."""

    model_config = ConfigDict(frozen=True)

    name: str
    slots: tuple[PhysicalSlot, ...]

    @model_validator(mode="after")
    def check_order(self) -> "PhysicalLayout":
        for position, slot in enumerate(self.slots):
            if slot.index != position:
                raise ValueError(f"slot {position} has index {slot.index}")
        return self

    def slot_count(self) -> int:
        return len(self.slots)

    def slot_at(self, index: int) -> PhysicalSlot:
        if not 0 <= index < len(self.slots):
            raise IndexError(f"{self.name} has no slot {index}")
        return self.slots[index]

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def width(self) -> float:
        return max((x for slot in self.slots for x, _ in slot.corners()), default=0.0)

    @property
    def height(self) -> float:
        return max((y for slot in self.slots for _, y in slot.corners()), default=0.0)


# Vertical offset of each left-half column, outer to inner; mirrored on the right
COLUMN_STAGGER = (0.3, 0.3, 0.1, 0.0, 0.1, 0.2)
RIGHT_HALF_X = 7.5
THUMB_Y = 3.4


def _main_rows() -> list[dict]:
    keys = []
    for row in range(3):
        for col in range(6):
            keys.append(dict(x=col, y=row + COLUMN_STAGGER[col], half="left", row=f"row{row}"))
        for col in range(6):
            keys.append(
                dict(x=RIGHT_HALF_X + col, y=row + COLUMN_STAGGER[5 - col], half="right", row=f"row{row}")
            )
    return keys


def _thumb_row(extension: bool) -> list[dict]:
    # Left thumbs sit two columns in from the outer edge, right ones one column
    # towards the split; the extension keys continue the right row.
    keys = [dict(x=2 + col, y=THUMB_Y, half="left", row="thumb", cluster="thumb") for col in range(5)]
    keys += [
        dict(x=RIGHT_HALF_X - 1 + col, y=THUMB_Y, half="right", row="thumb", cluster="thumb")
        for col in range(3)
    ]
    if extension:
        keys += [
            dict(x=RIGHT_HALF_X + 3 + col, y=THUMB_Y, half="right", row="thumb", cluster="extension")
            for col in range(2)
        ]
    return keys


def _build(name: str, keys: list[dict]) -> PhysicalLayout:
    return PhysicalLayout(
        name=name,
        slots=tuple(PhysicalSlot(index=i, **key) for i, key in enumerate(keys)),
    )


KEYBALL44 = _build("keyball44", _main_rows() + _thumb_row(extension=False))
KEYBALL44_EXT = _build("keyball44_ext", _main_rows() + _thumb_row(extension=True))

LAYOUTS: dict[str, PhysicalLayout] = {
    KEYBALL44.name: KEYBALL44,
    KEYBALL44_EXT.name: KEYBALL44_EXT,
}


def get_layout(name: str) -> PhysicalLayout:
    """Look up a built-in layout table by name."""
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(f"unknown layout {name!r}, known layouts: {', '.join(sorted(LAYOUTS))}") from None


def load_layout(path: Path) -> PhysicalLayout:
    """Load a layout table from YAML.

    The file holds a ``name`` and a ``slots`` list; slot indices are taken
    from list order. Example::

        name: tiny
        slots:
          - {x: 0, y: 0, half: left, row: row0}
          - {x: 1.5, y: 0, half: right, row: row0, rotation: 15}
    """
    data = load_yaml(path)
    if not isinstance(data, dict) or not isinstance(data.get("slots") or [], list):
        raise ValueError(f"layout file {path} must be a mapping with a 'slots' list")
    slots = [
        dict(slot, index=i) if isinstance(slot, dict) else slot
        for i, slot in enumerate(data.get("slots") or [])
    ]
    layout = PhysicalLayout.model_validate({"name": data.get("name", Path(path).stem), "slots": slots})
    logger.debug("loaded layout %s with %d slots from %s", layout.name, len(layout), path)
    return layout
