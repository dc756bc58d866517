"""CSS generation for keymap diagrams."""

from ..config import DrawConfig, ThemeColors

# Uses string formatting for color and size substitution
KEYMAP_CSS_TEMPLATE = """
svg.keymap {{
    font-family: 'SF Mono', 'Monaco', 'Inconsolata', 'Fira Code', monospace;
    font-size: {font_size}px;
    fill: {text};
}}
/* Default key */
g.key rect {{
    fill: url(#keyGradient);
    stroke: {stroke};
    stroke-width: 2;
}}
text {{
    text-anchor: middle;
    dominant-baseline: middle;
    pointer-events: none;
}}
text.tap {{ font-weight: 500; }}
text.small {{ font-size: {small_size}px; }}
text.hold {{
    font-size: {small_size}px;
    dominant-baseline: auto;
    opacity: 0.8;
}}
/* Layer titles */
text.label {{
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    font-size: 20px;
    font-weight: 600;
    text-anchor: start;
    dominant-baseline: auto;
    fill: #34495e;
}}
/* Key categories */
g.trans rect {{ fill: {transparent}; opacity: 0.5; }}
g.trans text {{ opacity: 0.4; }}
g.noop rect {{ fill: {noop}; stroke-dasharray: 4, 4; }}
g.modifier rect {{ fill: url(#modifierGradient); }}
g.shifted rect {{ fill: url(#shiftedGradient); }}
g.layer-tap rect {{ fill: url(#layerTapGradient); }}
g.layer-switch rect {{ fill: url(#layerTapGradient); }}
g.custom rect {{ fill: url(#specialGradient); }}
g.unknown rect {{ fill: {unknown}; }}
"""

LAYER_CSS_TEMPLATE = "g.layer-{layer} rect {{ fill: url(#layer{layer}Gradient); }}\n"


def generate_keymap_css(colors: ThemeColors, draw_config: DrawConfig, layers: list[int]) -> str:
    """Generate CSS for key styling.

    Args:
        colors: Theme colors by key category
        draw_config: Drawing settings, for font sizes
        layers: Layer numbers that need a ``layer-N`` color rule

    Returns:
        CSS string for the SVG <style> element
    """
    css = KEYMAP_CSS_TEMPLATE.format(
        font_size=draw_config.font_size,
        small_size=max(draw_config.font_size - 2, 6),
        text=colors.text,
        stroke=colors.stroke,
        transparent=colors.transparent,
        noop=colors.noop,
        unknown=colors.unknown,
    )
    return css + "".join(LAYER_CSS_TEMPLATE.format(layer=layer) for layer in layers)
