"""SVG rendering of parsed keymaps."""

from .utils import escape_xml, fmt, linear_gradient
from .css import generate_keymap_css
from .labels import KeyLabel, LabelResolver, keycode_label
from .renderer import KeymapRenderer, render_svg

__all__ = [
    # Utils
    "escape_xml",
    "fmt",
    "linear_gradient",
    # CSS
    "generate_keymap_css",
    # Labels
    "KeyLabel",
    "LabelResolver",
    "keycode_label",
    # Renderer
    "KeymapRenderer",
    "render_svg",
]
