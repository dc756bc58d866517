"""Configuration models and loaders for keymap drawing."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class DrawConfig(BaseModel):
    """Key dimensions and spacing of the rendered diagram, in SVG user units."""

    key_w: float = Field(60.0, ge=20, le=200)
    key_h: float = Field(60.0, ge=20, le=200)
    key_rx: float = Field(5.0, ge=0)
    inner_pad: float = Field(5.0, ge=0, description="Gap between neighbouring keys")
    outer_pad_w: float = Field(20.0, ge=0)
    outer_pad_h: float = Field(20.0, ge=0)
    title_h: float = Field(40.0, ge=0, description="Space reserved for the layer title")
    layer_gap: float = Field(40.0, ge=0, description="Vertical gap between layer blocks")
    n_columns: int = Field(1, ge=1, description="Number of layer blocks per row")
    font_size: int = Field(11, ge=6, le=32)
    small_label_len: int = Field(6, ge=1, description="Labels longer than this use the small font")


class ThemeColors(BaseModel):
    """Fill colors by key category plus the per-layer gradient palette."""

    background: str = "#faf8f3"
    text: str = "#2c3e50"
    stroke: str = "#2c3e50"
    key: tuple[str, str] = ("#e8e8e8", "#d0d0d0")
    transparent: str = "#ecf0f1"
    noop: str = "#95a5a6"
    modifier: tuple[str, str] = ("#a8a8a8", "#888888")
    shifted: tuple[str, str] = ("#dde7f0", "#c3d1de")
    layer_tap: tuple[str, str] = ("#b8d4ea", "#94b8d6")
    custom: tuple[str, str] = ("#7ec4a8", "#5ca888")
    unknown: str = "#f5e6c8"
    # GMK inspired palette: blue, purple, red, orange, teal, green, yellow, grey
    layers: list[tuple[str, str]] = Field(
        default_factory=lambda: [
            ("#7cb0d9", "#5a8fb8"),
            ("#b888c4", "#9668a8"),
            ("#d97c7c", "#c25858"),
            ("#e8a87c", "#d18a58"),
            ("#7ec4a8", "#5ca888"),
            ("#88c47c", "#68a858"),
            ("#d4c47c", "#b8a858"),
            ("#a8a8a8", "#888888"),
        ],
        min_length=1,
    )

    def layer_gradient(self, layer: int) -> tuple[str, str]:
        """Return the gradient for a layer; layer 1 takes the first entry."""
        return self.layers[(layer - 1) % len(self.layers)]


class Config(BaseModel):
    """Top level configuration, usually read from a YAML file."""

    draw_config: DrawConfig = Field(default_factory=DrawConfig)
    colors: ThemeColors = Field(default_factory=ThemeColors)
    layout: str = Field("keyball44", description="Name of a built-in physical layout")
    layout_file: Path | None = Field(None, description="YAML layout table, overrides layout")
    key_labels: dict[str, str] = Field(default_factory=dict, description="Keycode to label overrides")
    layer_names: list[str] = Field(default_factory=list)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | None) -> Config:
    """Load configuration from YAML, falling back to defaults."""
    if path is None or not Path(path).exists():
        return Config()
    return Config.model_validate(load_yaml(path))


def dump_config(config: Config) -> str:
    """Serialize a configuration back to YAML."""
    data = config.model_dump(mode="json")
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=None)
