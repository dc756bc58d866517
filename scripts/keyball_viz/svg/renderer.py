"""SVG rendering of a parsed keymap onto its physical layout."""

import logging
import math

from ..config import Config, DrawConfig, ThemeColors
from ..keymap import Keymap, Layer
from ..layout import PhysicalSlot
from .css import generate_keymap_css
from .labels import KeyLabel, LabelResolver
from .utils import escape_xml, fmt, linear_gradient

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


class KeymapRenderer:
    """Draws every layer of a keymap as a block of keys, one block per layer.

    Attributes:
        config: Drawing settings and colors
        labels: Resolver turning bindings into legends and style classes
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.labels = LabelResolver(self.config.key_labels, self.config.draw_config.small_label_len)

    @property
    def draw(self) -> DrawConfig:
        return self.config.draw_config

    @property
    def colors(self) -> ThemeColors:
        return self.config.colors

    def _unit(self) -> tuple[float, float]:
        return self.draw.key_w + self.draw.inner_pad, self.draw.key_h + self.draw.inner_pad

    def slot_box(self, slot: PhysicalSlot) -> tuple[float, float, float, float]:
        """Return (center x, center y, width, height) of a slot relative to its layer origin."""
        unit_w, unit_h = self._unit()
        w = slot.w * self.draw.key_w + (slot.w - 1) * self.draw.inner_pad
        h = slot.h * self.draw.key_h + (slot.h - 1) * self.draw.inner_pad
        return slot.x * unit_w + w / 2, slot.y * unit_h + h / 2, w, h

    def block_size(self, keymap: Keymap) -> tuple[float, float]:
        """Return the width and height of one layer block including its title."""
        unit_w, unit_h = self._unit()
        width = keymap.layout.width * unit_w - self.draw.inner_pad
        height = keymap.layout.height * unit_h - self.draw.inner_pad
        return width, self.draw.title_h + height

    def render(self, keymap: Keymap) -> str:
        """Render the full SVG document."""
        resolved = [
            [self.labels.resolve(binding, layer.index) for binding in layer.bindings]
            for layer in keymap
        ]
        used_layers = sorted(
            {
                int(cls.removeprefix("layer-"))
                for labels in resolved
                for label in labels
                for cls in label.classes
                if cls.startswith("layer-") and cls[6:].isdigit()
            }
        )

        block_w, block_h = self.block_size(keymap)
        n_cols = max(1, min(self.draw.n_columns, len(keymap)))
        n_rows = max(1, math.ceil(len(keymap) / n_cols))
        width = 2 * self.draw.outer_pad_w + n_cols * block_w + (n_cols - 1) * self.draw.layer_gap
        height = 2 * self.draw.outer_pad_h + n_rows * block_h + (n_rows - 1) * self.draw.layer_gap
        logger.debug("rendering %d layers into a %sx%s document", len(keymap), fmt(width), fmt(height))

        parts = [
            f'<svg xmlns="{SVG_NS}" class="keymap" width="{fmt(width)}" height="{fmt(height)}" '
            f'viewBox="0 0 {fmt(width)} {fmt(height)}">',
            self._defs(used_layers),
            "<style>" + generate_keymap_css(self.colors, self.draw, used_layers) + "</style>",
            f'<rect width="100%" height="100%" fill="{self.colors.background}"/>',
        ]

        for position, (layer, labels) in enumerate(zip(keymap, resolved)):
            x = self.draw.outer_pad_w + (position % n_cols) * (block_w + self.draw.layer_gap)
            y = self.draw.outer_pad_h + (position // n_cols) * (block_h + self.draw.layer_gap)
            parts.append(self._layer(layer, labels, x, y))

        parts.append("</svg>")
        return "\n".join(parts) + "\n"

    def _defs(self, used_layers: list[int]) -> str:
        gradients = [
            linear_gradient("keyGradient", *self.colors.key),
            linear_gradient("modifierGradient", *self.colors.modifier),
            linear_gradient("shiftedGradient", *self.colors.shifted),
            linear_gradient("layerTapGradient", *self.colors.layer_tap),
            linear_gradient("specialGradient", *self.colors.custom),
        ]
        gradients += [
            linear_gradient(f"layer{layer}Gradient", *self.colors.layer_gradient(layer))
            for layer in used_layers
        ]
        return "<defs>\n" + "\n".join(gradients) + "\n</defs>"

    def _layer(self, layer: Layer, labels: list[KeyLabel], x: float, y: float) -> str:
        title_y = y + self.draw.title_h - 12
        lines = [
            f'<g class="layer-block" id="layer-{layer.index}">',
            f'<text x="{fmt(x)}" y="{fmt(title_y)}" class="label">{escape_xml(layer.title)}</text>',
        ]
        key_y = y + self.draw.title_h
        for slot, label in zip(layer.layout.slots, labels):
            lines.append(self._key(slot, label, x, key_y))
        lines.append("</g>")
        return "\n".join(lines)

    def _key(self, slot: PhysicalSlot, label: KeyLabel, origin_x: float, origin_y: float) -> str:
        cx, cy, w, h = self.slot_box(slot)
        transform = f"translate({fmt(origin_x + cx)}, {fmt(origin_y + cy)})"
        if slot.rotation:
            transform += f" rotate({fmt(slot.rotation)})"

        classes = " ".join(("key", f"keypos-{slot.index}", *label.classes))
        rx = fmt(self.draw.key_rx)
        tap_y = -4 if label.hold else 0
        lines = [
            f'<g class="{classes}" transform="{transform}">',
            f'<rect rx="{rx}" ry="{rx}" x="{fmt(-w / 2)}" y="{fmt(-h / 2)}" width="{fmt(w)}" height="{fmt(h)}"/>',
            f'<text x="0" y="{tap_y}" class="{self.labels.text_classes(label)}">{escape_xml(label.tap)}</text>',
        ]
        if label.hold:
            lines.append(f'<text x="0" y="{fmt(h / 2 - 6)}" class="hold">{escape_xml(label.hold)}</text>')
        lines.append("</g>")
        return "\n".join(lines)


def render_svg(keymap: Keymap, config: Config | None = None) -> str:
    """Render a keymap as an SVG document.

    The output only depends on the keymap and config, so rendering the same
    input twice gives identical text.
    """
    return KeymapRenderer(config).render(keymap)
