"""Best-effort legends and style classes for key bindings.

Unknown keycodes are never an error: they fall back to the token with its
``KC_`` prefix removed and the default key style.
"""

from dataclasses import dataclass
from typing import Mapping

from ..bindings import (
    LAYER_FUNCTIONS,
    LAYER_TAP_FUNCTIONS,
    KeyBinding,
    NoOp,
    Simple,
    Transparent,
    Wrapped,
    layer_argument,
    primary_argument,
)

TRANSPARENT_GLYPH = "▽"
NOOP_GLYPH = "✕"

KEY_LABELS = {
    "KC_SCLN": ";",
    "KC_QUOT": "'",
    "KC_GRV": "`",
    "KC_BSLS": "\\",
    "KC_LBRC": "[",
    "KC_RBRC": "]",
    "KC_COMM": ",",
    "KC_DOT": ".",
    "KC_SLSH": "/",
    "KC_MINUS": "-",
    "KC_MINS": "-",
    "KC_EQL": "=",
    "KC_BSPC": "⌫",
    "KC_ENT": "⏎",
    "KC_TAB": "⇥",
    "KC_SPC": "␣",
    "KC_ESC": "Esc",
    "KC_DEL": "Del",
    "KC_INSERT": "Ins",
    "KC_INS": "Ins",
    "KC_LSFT": "⇧",
    "KC_RSFT": "⇧",
    "KC_LCTL": "Ctrl",
    "KC_RCTL": "Ctrl",
    "KC_LALT": "Alt",
    "KC_RALT": "AltGr",
    "KC_LGUI": "Gui",
    "KC_RGUI": "Gui",
    "KC_LEFT": "←",
    "KC_DOWN": "↓",
    "KC_UP": "↑",
    "KC_RIGHT": "→",
    "KC_RGHT": "→",
    "KC_PGUP": "PgUp",
    "KC_PGDN": "PgDn",
    "KC_HOME": "Home",
    "KC_END": "End",
    "KC_PSCR": "PrtSc",
    "KC_SCRL": "ScrLk",
    "KC_PAUSE": "Pause",
    "KC_CAPS": "Caps",
    "KC_NUM": "NumLk",
    "KC_BTN1": "LClick",
    "KC_BTN2": "RClick",
    "KC_BTN3": "MClick",
    "QK_BOOT": "Boot",
}

SHIFTED_LABELS = {
    "KC_1": "!",
    "KC_2": "@",
    "KC_3": "#",
    "KC_4": "$",
    "KC_5": "%",
    "KC_6": "^",
    "KC_7": "&",
    "KC_8": "*",
    "KC_9": "(",
    "KC_0": ")",
    "KC_GRV": "~",
    "KC_MINUS": "_",
    "KC_MINS": "_",
    "KC_EQL": "+",
    "KC_LBRC": "{",
    "KC_RBRC": "}",
    "KC_BSLS": "|",
    "KC_SCLN": ":",
    "KC_QUOT": '"',
    "KC_COMM": "<",
    "KC_DOT": ">",
    "KC_SLSH": "?",
}

MODIFIER_SYMBOLS = {
    "S": "⇧",
    "LSFT": "⇧",
    "RSFT": "⇧",
    "SFT": "⇧",
    "C": "⌃",
    "LCTL": "⌃",
    "RCTL": "⌃",
    "CTL": "⌃",
    "A": "⌥",
    "LALT": "⌥",
    "RALT": "⌥",
    "ALT": "⌥",
    "ALGR": "⌥",
    "G": "◆",
    "LGUI": "◆",
    "RGUI": "◆",
    "GUI": "◆",
    "LCMD": "◆",
    "LWIN": "◆",
    "MEH": "Meh",
    "HYPR": "Hyp",
    "ALL": "Hyp",
}
SHIFT_FUNCTIONS = frozenset({"S", "LSFT", "RSFT"})

MODIFIER_KEYCODES = frozenset(
    {
        "KC_LCTL", "KC_RCTL", "KC_LSFT", "KC_RSFT", "KC_LALT", "KC_RALT", "KC_LGUI", "KC_RGUI",
        "KC_LEFT_CTRL", "KC_RIGHT_CTRL", "KC_LEFT_SHIFT", "KC_RIGHT_SHIFT",
        "KC_LEFT_ALT", "KC_RIGHT_ALT", "KC_LEFT_GUI", "KC_RIGHT_GUI",
    }
)

# Firmware, lighting and pointing device keycodes (Keyball: KBC_, CPI_, SCRL_, AML_)
CUSTOM_PREFIXES = (
    "QK_", "RGB_", "RM_", "BL_", "KBC_", "CPI_", "SCRL_", "AML_", "SSNP_", "KC_BTN", "KC_MS_", "MS_", "RESET",
)


@dataclass(frozen=True)
class KeyLabel:
    """Legend text and style classes for one key.

    Attributes:
        tap: Primary legend, drawn in the key center
        hold: Secondary annotation, drawn small at the bottom; may be empty
        classes: CSS classes added to the key group
    """

    tap: str
    hold: str = ""
    classes: tuple[str, ...] = ()


def is_custom(token: str) -> bool:
    return token.startswith(CUSTOM_PREFIXES)


def keycode_label(code: str, overrides: Mapping[str, str] | None = None) -> str:
    """Return the legend for a bare keycode."""
    if overrides and code in overrides:
        return overrides[code]
    if code in KEY_LABELS:
        return KEY_LABELS[code]
    if code.startswith("KC_") and len(code) > 3:
        return code[3:]
    return code


def _modifier_symbol(token: str) -> str | None:
    name = token.removeprefix("MOD_")
    if name in MODIFIER_SYMBOLS:
        return MODIFIER_SYMBOLS[name]
    if name.endswith("_T"):
        return MODIFIER_SYMBOLS.get(name[:-2])
    return None


def _mod_tap_symbol(binding: Wrapped) -> str | None:
    """Return the hold legend of a mod-tap (``MT(MOD_LCTL, KC_A)``, ``LCTL_T(KC_A)``)."""
    if binding.function == "MT" and len(binding.args) == 2:
        mods = binding.args[0].to_source()
        symbols = [_modifier_symbol(part.strip()) for part in mods.split("|")]
        if all(symbols):
            return "".join(symbols)
        return mods
    if binding.function.endswith("_T"):
        return _modifier_symbol(binding.function)
    return None


class LabelResolver:
    """Derives legends and style classes from bindings.

    Attributes:
        overrides: Keycode to legend mapping checked before the built-in table
        small_len: Legends longer than this get the ``small`` text class
    """

    def __init__(self, overrides: Mapping[str, str] | None = None, small_len: int = 6):
        self.overrides = dict(overrides or {})
        self.small_len = small_len

    def text(self, binding: KeyBinding) -> str:
        """Return only the primary legend of a binding."""
        return self.resolve(binding).tap

    def resolve(self, binding: KeyBinding, layer: int = 0) -> KeyLabel:
        """Resolve the legend of a binding drawn on the given layer.

        Plain keys on layers above zero take that layer's color, as do layer
        switching keys for the layer they target.
        """
        if isinstance(binding, Transparent):
            return KeyLabel(TRANSPARENT_GLYPH, classes=("trans",))
        if isinstance(binding, NoOp):
            return KeyLabel(NOOP_GLYPH, classes=("noop",))
        if isinstance(binding, Simple):
            return self._resolve_simple(binding, layer)
        return self._resolve_wrapped(binding, layer)

    def _resolve_simple(self, binding: Simple, layer: int) -> KeyLabel:
        code = binding.code
        label = keycode_label(code, self.overrides)
        if code in MODIFIER_KEYCODES:
            classes: tuple[str, ...] = ("modifier",)
        elif is_custom(code):
            classes = ("custom",)
        elif layer > 0:
            classes = (f"layer-{layer}",)
        else:
            classes = ()
        return KeyLabel(label, classes=classes)

    def _resolve_wrapped(self, binding: Wrapped, layer: int) -> KeyLabel:
        fn = binding.function
        target = layer_argument(binding)
        layer_hold = f"L{target}" if target is not None else binding.args[0].to_source()

        if fn in LAYER_FUNCTIONS:
            classes = ("layer-switch", f"layer-{target}") if target is not None else ("layer-switch",)
            return KeyLabel(fn, hold=layer_hold, classes=classes)

        primary = primary_argument(binding)
        inner = self.resolve(primary, layer) if primary is not None else KeyLabel(fn)

        if fn in LAYER_TAP_FUNCTIONS:
            return KeyLabel(inner.tap, hold=layer_hold, classes=("layer-tap",))

        if fn in MODIFIER_SYMBOLS and len(binding.args) == 1:
            shifted = None
            if fn in SHIFT_FUNCTIONS and isinstance(primary, Simple):
                shifted = SHIFTED_LABELS.get(primary.code)
            tap = shifted if shifted is not None else MODIFIER_SYMBOLS[fn] + inner.tap
            return KeyLabel(tap, classes=("shifted",) if fn in SHIFT_FUNCTIONS else ("modifier",))

        mod_tap = _mod_tap_symbol(binding)
        if mod_tap is not None:
            return KeyLabel(inner.tap, hold=mod_tap, classes=("modifier",))

        if is_custom(fn):
            return KeyLabel(inner.tap, hold=fn, classes=("custom",))

        rest = ", ".join(arg.to_source() for arg in binding.args[:-1])
        return KeyLabel(inner.tap, hold=f"{fn}({rest})" if rest else fn, classes=("unknown",))

    def text_classes(self, label: KeyLabel) -> str:
        return "tap small" if len(label.tap) > self.small_len else "tap"
