"""Key binding model and the recursive binding parser."""

import re
from dataclasses import dataclass, field
from typing import Iterator

from .errors import KeymapSyntaxError
from .splitter import split_call

TRANSPARENT_TOKENS = frozenset({"_______", "KC_TRNS", "KC_TRANSPARENT"})
NOOP_TOKENS = frozenset({"XXXXXXX", "KC_NO"})

# Functions whose only parameter is a layer number
LAYER_FUNCTIONS = frozenset({"MO", "TO", "TG", "TT", "OSL", "DF", "PDF"})
# Functions taking a layer number first and a keycode or modifier after it
LAYER_TAP_FUNCTIONS = frozenset({"LT", "LM"})

_UNDERSCORES_RE = re.compile(r"^_{3,}$")


@dataclass(frozen=True)
class Transparent:
    """Falls through to the next active layer below."""

    token: str = field(default="_______", compare=False)

    def to_source(self) -> str:
        return self.token


@dataclass(frozen=True)
class NoOp:
    """Explicitly disabled key."""

    token: str = field(default="XXXXXXX", compare=False)

    def to_source(self) -> str:
        return self.token


@dataclass(frozen=True)
class Simple:
    """A bare keycode or parameter, kept verbatim (e.g. ``KC_A``, ``5``)."""

    code: str

    def to_source(self) -> str:
        return self.code


@dataclass(frozen=True)
class Wrapped:
    """A function-style macro applied to one or more sub-bindings.

    Examples: ``S(KC_1)``, ``LT(5, KC_L)``, ``MO(4)``.
    """

    function: str
    args: tuple["KeyBinding", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        if not self.args:
            raise ValueError(f"{self.function}() needs at least one argument")

    def to_source(self) -> str:
        return f"{self.function}({', '.join(arg.to_source() for arg in self.args)})"


KeyBinding = Transparent | NoOp | Simple | Wrapped


def parse_binding(text: str) -> KeyBinding:
    """Parse one macro argument into a KeyBinding.

    Unknown identifiers are accepted as Simple bindings; only malformed
    syntax raises.

    Raises:
        KeymapSyntaxError: For empty tokens or unbalanced parentheses
    """
    token = text.strip()
    if not token:
        raise KeymapSyntaxError("empty key binding", token=text)

    if token in TRANSPARENT_TOKENS or _UNDERSCORES_RE.match(token):
        return Transparent(token)
    if token in NOOP_TOKENS:
        return NoOp(token)

    if "(" in token:
        name, args = split_call(token)
        return Wrapped(name, tuple(parse_binding(arg) for arg in args))

    if ")" in token:
        raise KeymapSyntaxError("unbalanced ')'", token=token)
    return Simple(token)


def primary_argument(binding: Wrapped) -> KeyBinding | None:
    """Return the argument carrying the base keycode of a wrapped binding.

    The keycode is the last argument in QMK's wrapper macros (``S(KC_1)``,
    ``LT(5, KC_L)``, ``MT(MOD_LCTL, KC_A)``). Layer-only functions such as
    ``MO(4)`` have no base keycode and return None.
    """
    if binding.function in LAYER_FUNCTIONS:
        return None
    return binding.args[-1]


def layer_argument(binding: Wrapped) -> int | None:
    """Return the target layer of a layer switching binding, if it is a literal."""
    if binding.function not in LAYER_FUNCTIONS | LAYER_TAP_FUNCTIONS:
        return None
    arg = binding.args[0]
    if not isinstance(arg, Simple):
        return None
    try:
        return int(arg.code, 0)
    except ValueError:
        return None


def base_binding(binding: KeyBinding) -> KeyBinding | None:
    """Descend wrapped bindings through their primary argument.

    Returns the innermost non-wrapped binding, or None when a layer-only
    function is reached.
    """
    while isinstance(binding, Wrapped):
        inner = primary_argument(binding)
        if inner is None:
            return None
        binding = inner
    return binding


def iter_functions(binding: KeyBinding) -> Iterator[str]:
    """Yield every wrapper function name used in a binding, outermost first."""
    if isinstance(binding, Wrapped):
        yield binding.function
        for arg in binding.args:
            yield from iter_functions(arg)
