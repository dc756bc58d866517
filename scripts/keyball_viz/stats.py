"""Usage statistics over a parsed keymap."""

from collections import Counter
from dataclasses import dataclass
from typing import Any

from .bindings import KeyBinding, NoOp, Simple, Transparent, Wrapped, base_binding, iter_functions
from .keymap import Keymap


@dataclass(frozen=True)
class LayerStats:
    """Per-layer slot counts; assigned excludes transparent and no-op keys."""

    index: int
    total: int
    assigned: int

    @property
    def unassigned(self) -> int:
        return self.total - self.assigned


@dataclass(frozen=True)
class Stats:
    """Summary derived from a Keymap.

    Attributes:
        keycodes: (keycode, count) pairs, most used first, ties in first-seen order
        layers: Per-layer slot counts in layer order
        functions: Distinct wrapper function names, sorted
    """

    keycodes: tuple[tuple[str, int], ...]
    layers: tuple[LayerStats, ...]
    functions: tuple[str, ...]

    @property
    def function_count(self) -> int:
        return len(self.functions)

    def counts(self) -> dict[str, int]:
        return dict(self.keycodes)

    def most_used(self, n: int | None = None) -> list[tuple[str, int]]:
        return list(self.keycodes[:n])


def normalize_keycode(binding: KeyBinding) -> str | None:
    """Return the keycode a binding is counted under, or None if not counted.

    Wrapped bindings count under their base keycode (``LT(5, KC_L)`` ->
    ``KC_L``); layer-only functions such as ``MO(4)`` count as themselves.
    """
    if isinstance(binding, (Transparent, NoOp)):
        return None
    base = base_binding(binding)
    if base is None:
        return binding.to_source()
    if isinstance(base, Simple):
        return base.code
    return None


def compute_stats(keymap: Keymap) -> Stats:
    """Count keycode usage and assigned slots across all layers."""
    # Counter keeps insertion order, so a stable sort gives first-seen tie breaks
    counter: Counter[str] = Counter()
    functions: set[str] = set()
    layers = []

    for layer in keymap:
        assigned = 0
        for binding in layer.bindings:
            if isinstance(binding, (Simple, Wrapped)):
                assigned += 1
            functions.update(iter_functions(binding))
            keycode = normalize_keycode(binding)
            if keycode is not None:
                counter[keycode] += 1
        layers.append(LayerStats(index=layer.index, total=len(layer), assigned=assigned))

    keycodes = sorted(counter.items(), key=lambda item: -item[1])
    return Stats(keycodes=tuple(keycodes), layers=tuple(layers), functions=tuple(sorted(functions)))


def format_stats(stats: Stats, top: int | None = None) -> str:
    """Render statistics as human readable text."""
    lines = [
        f"Layer {layer.index}: Total Keys: {layer.total}, Assigned Keys: {layer.assigned}, "
        f"Unassigned Keys: {layer.unassigned}"
        for layer in stats.layers
    ]
    lines.append("")
    functions = f" ({', '.join(stats.functions)})" if stats.functions else ""
    lines.append(f"Wrapper functions used: {stats.function_count}{functions}")
    lines.append("")
    lines.append("Keycode usage:")
    entries = stats.most_used(top)
    width = max((len(code) for code, _ in entries), default=0)
    lines.extend(f"  {code:<{width}}  {count}" for code, count in entries)
    return "\n".join(lines)


def stats_to_dict(stats: Stats, top: int | None = None) -> dict[str, Any]:
    """Convert statistics to plain data for YAML output."""
    return {
        "layers": [
            {
                "index": layer.index,
                "total": layer.total,
                "assigned": layer.assigned,
                "unassigned": layer.unassigned,
            }
            for layer in stats.layers
        ],
        "functions": list(stats.functions),
        "keycodes": dict(stats.most_used(top)),
    }
