"""Keymap model and the layer assembler."""

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from .bindings import KeyBinding, parse_binding
from .errors import KeymapError, KeymapSyntaxError, LayoutMismatchError
from .layout import KEYBALL44, PhysicalLayout, PhysicalSlot
from .lexer import slice_keymap
from .splitter import split_call

logger = logging.getLogger(__name__)

LAYOUT_MACRO_PREFIX = "LAYOUT"


@dataclass(frozen=True)
class Layer:
    """Bindings of one layer, one per slot of the physical layout."""

    index: int
    bindings: tuple[KeyBinding, ...]
    layout: PhysicalLayout
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "bindings", tuple(self.bindings))
        if len(self.bindings) != self.layout.slot_count():
            raise LayoutMismatchError(self.layout.slot_count(), len(self.bindings), layer=self.index)

    def keys(self) -> Iterator[tuple[PhysicalSlot, KeyBinding]]:
        """Yield (slot, binding) pairs in slot order."""
        return zip(self.layout.slots, self.bindings)

    @property
    def title(self) -> str:
        return f"Layer {self.index}" if self.name is None else f"Layer {self.index}: {self.name}"

    def __len__(self) -> int:
        return len(self.bindings)


@dataclass(frozen=True)
class Keymap:
    """All layers of a keymap, ordered by index starting at zero."""

    layers: tuple[Layer, ...]
    layout: PhysicalLayout

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))
        for position, layer in enumerate(self.layers):
            if layer.index != position:
                raise ValueError(f"layer at position {position} has index {layer.index}")

    def __getitem__(self, index: int) -> Layer:
        return self.layers[index]

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)


def assemble_layer(
    index: int,
    args: Sequence[str],
    layout: PhysicalLayout,
    name: str | None = None,
) -> Layer:
    """Parse the raw macro arguments of one layer and pair them with slots.

    Raises:
        LayoutMismatchError: If the argument count differs from the slot count
        KeymapSyntaxError: If an argument is malformed
    """
    if len(args) != layout.slot_count():
        raise LayoutMismatchError(layout.slot_count(), len(args), layer=index)

    try:
        bindings = tuple(parse_binding(arg) for arg in args)
    except KeymapError as e:
        raise e.with_layer(index)
    return Layer(index=index, bindings=bindings, layout=layout, name=name)


def parse_keymap(
    text: str,
    layout: PhysicalLayout = KEYBALL44,
    layer_names: Sequence[str] | None = None,
) -> Keymap:
    """Build a Keymap from keymap.c source text.

    Args:
        text: Full keymap.c contents
        layout: Physical layout the layer macro arguments map onto
        layer_names: Optional display names, matched to layers by index

    Raises:
        StructureError: If the keymaps array cannot be located or is malformed
        KeymapSyntaxError: If a layer macro call or binding is malformed
        LayoutMismatchError: If a layer has the wrong number of keys
    """
    names = list(layer_names or [])
    layers = []

    for entry in slice_keymap(text):
        try:
            macro, args = split_call(entry.call)
        except KeymapError as e:
            raise e.with_layer(entry.index)
        if not macro.startswith(LAYOUT_MACRO_PREFIX):
            raise KeymapSyntaxError("unsupported layer macro", token=macro, layer=entry.index)

        name = names[entry.index] if entry.index < len(names) else None
        layers.append(assemble_layer(entry.index, args, layout, name=name))
        logger.debug("parsed layer %d (%s) with %d keys", entry.index, macro, len(args))

    return Keymap(layers=tuple(layers), layout=layout)
