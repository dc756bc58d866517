"""
Parse QMK keymap.c files and draw their layers as an SVG diagram.

Targets the Keyball44 split layout; other boards can supply a layout table.

Usage:
    python -m keyball_viz draw keymap.c -o keymap.svg --show-stats
    python -m keyball_viz stats keymap.c --format yaml
    python -m keyball_viz dump-config
"""

from .bindings import KeyBinding, NoOp, Simple, Transparent, Wrapped, parse_binding
from .config import Config, DrawConfig, ThemeColors, load_config
from .errors import KeymapError, KeymapSyntaxError, LayoutMismatchError, StructureError
from .keymap import Keymap, Layer, assemble_layer, parse_keymap
from .layout import KEYBALL44, KEYBALL44_EXT, PhysicalLayout, PhysicalSlot, get_layout, load_layout
from .stats import Stats, compute_stats, format_stats
from .svg.renderer import render_svg

__all__ = [
    # Bindings
    "KeyBinding",
    "NoOp",
    "Simple",
    "Transparent",
    "Wrapped",
    "parse_binding",
    # Config
    "Config",
    "DrawConfig",
    "ThemeColors",
    "load_config",
    # Errors
    "KeymapError",
    "KeymapSyntaxError",
    "LayoutMismatchError",
    "StructureError",
    # Keymap
    "Keymap",
    "Layer",
    "assemble_layer",
    "parse_keymap",
    # Layout
    "KEYBALL44",
    "KEYBALL44_EXT",
    "PhysicalLayout",
    "PhysicalSlot",
    "get_layout",
    "load_layout",
    # Stats
    "Stats",
    "compute_stats",
    "format_stats",
    # Rendering
    "render_svg",
]
