"""Locate the ``keymaps`` array literal in a keymap.c and slice it into layers."""

import logging
import re
from dataclasses import dataclass

from .errors import KeymapSyntaxError, StructureError
from .splitter import IDENTIFIER_RE

logger = logging.getLogger(__name__)

KEYMAPS_RE = re.compile(r"\bkeymaps\s*((?:\[[^\]]*\]\s*)+)=\s*\{")
ENUM_RE = re.compile(r"\benum\b\s*(?:[A-Za-z_]\w*)?\s*\{([^}]*)\}")
ENTRY_INDEX_RE = re.compile(r"^\[\s*([^\]]*?)\s*\]\s*=\s*(.*)$", re.DOTALL)


@dataclass(frozen=True)
class LayerEntry:
    """One initializer of the keymaps array.

    Attributes:
        index: Layer index, explicit or inferred
        call: Layout macro call text, e.g. ``LAYOUT_universal(...)``
        explicit: Whether the index was written as ``[k] =``
    """

    index: int
    call: str
    explicit: bool


def strip_comments(text: str) -> str:
    """Remove // and /* */ comments, leaving string and char literals untouched.

    Block comments are replaced with a single space so tokens on either side
    stay separate.

    Raises:
        StructureError: On an unterminated block comment
    """
    out: list[str] = []
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        nxt = text[pos + 1] if pos + 1 < length else ""

        if char == "/" and nxt == "/":
            end = text.find("\n", pos)
            pos = length if end < 0 else end
        elif char == "/" and nxt == "*":
            end = text.find("*/", pos + 2)
            if end < 0:
                line = text.count("\n", 0, pos) + 1
                raise StructureError(f"unterminated block comment starting on line {line}")
            out.append(" ")
            pos = end + 2
        elif char in "\"'":
            end = pos + 1
            while end < length and text[end] != char:
                if text[end] == "\\":
                    end += 1
                elif text[end] == "\n":
                    break
                end += 1
            out.append(text[pos:end + 1])
            pos = end + 1
        else:
            out.append(char)
            pos += 1

    return "".join(out)


def find_keymaps_literal(text: str) -> str:
    """Return the text between the braces of the ``keymaps`` initializer.

    Args:
        text: Comment-free C source

    Raises:
        StructureError: If the array is missing, unbalanced or not closed by ``};``
    """
    match = KEYMAPS_RE.search(text)
    if match is None:
        raise StructureError("no 'keymaps' array found")

    start = match.end()
    brace_depth = 1
    paren_depth = 0
    pos = start
    while pos < len(text):
        char = text[pos]
        if char == "{":
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
            if brace_depth == 0:
                break
        elif char == "(":
            paren_depth += 1
        elif char == ")":
            paren_depth -= 1
            if paren_depth < 0:
                raise StructureError("unbalanced ')' in keymaps array")
        pos += 1
    else:
        raise StructureError("unbalanced braces: keymaps array is never closed")

    if paren_depth != 0:
        raise StructureError("unbalanced parentheses in keymaps array")
    if not text[pos + 1:].lstrip().startswith(";"):
        raise StructureError("keymaps array is not terminated by '};'")

    logger.debug("keymaps literal spans characters %d-%d", start, pos)
    return text[start:pos]


def parse_enums(text: str) -> dict[str, int]:
    """Collect enumerator values from all ``enum { ... }`` declarations.

    Only integer literals and plain references to earlier enumerators are
    understood; anything else is skipped together with the enumerators that
    follow it in the same enum.
    """
    values: dict[str, int] = {}
    for match in ENUM_RE.finditer(text):
        current = 0
        for item in match.group(1).split(","):
            item = item.strip()
            if not item:
                continue
            name, _, value = (part.strip() for part in item.partition("="))
            if not IDENTIFIER_RE.match(name):
                break
            if value:
                try:
                    current = int(value, 0)
                except ValueError:
                    if value not in values:
                        break
                    current = values[value]
            values[name] = current
            current += 1
    return values


def _split_entries(body: str) -> list[str]:
    entries = []
    current: list[str] = []
    paren_depth = 0
    brace_depth = 0

    for char in body:
        if char == "(":
            paren_depth += 1
        elif char == ")":
            paren_depth -= 1
        elif char == "{":
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
        elif char == "," and paren_depth == 0 and brace_depth == 0:
            entries.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    if paren_depth != 0 or brace_depth != 0:
        raise StructureError("unbalanced brackets in keymaps array")

    entries.append("".join(current).strip())
    # A trailing comma leaves one empty entry at the end
    if entries and not entries[-1]:
        entries.pop()
    if any(not entry for entry in entries):
        raise StructureError("empty layer entry in keymaps array")
    return entries


def _resolve_index(expr: str, enums: dict[str, int]) -> int:
    try:
        return int(expr, 0)
    except ValueError:
        pass
    if expr in enums:
        return enums[expr]
    raise KeymapSyntaxError("cannot resolve layer index", token=expr)


def split_layer_entries(body: str, enums: dict[str, int] | None = None) -> list[LayerEntry]:
    """Split the keymaps array body into layer entries.

    Entries without an explicit ``[k] =`` designator take the index following
    the previous entry, as C designated initializers do.

    Raises:
        StructureError: On unbalanced brackets, empty entries, duplicate or
            negative indices
        KeymapSyntaxError: If a designator cannot be resolved to an integer
    """
    enums = enums or {}
    entries = []
    seen: set[int] = set()
    next_index = 0

    for raw in _split_entries(body):
        match = ENTRY_INDEX_RE.match(raw)
        if match:
            index = _resolve_index(match.group(1), enums)
            call = match.group(2).strip()
            explicit = True
        else:
            index = next_index
            call = raw
            explicit = False

        if index < 0:
            raise StructureError(f"negative layer index {index}")
        if index in seen:
            raise StructureError(f"duplicate layer index {index}")
        seen.add(index)
        entries.append(LayerEntry(index=index, call=call, explicit=explicit))
        next_index = index + 1

    return entries


def slice_keymap(text: str) -> list[LayerEntry]:
    """Strip comments, find the keymaps array and return its layers by index.

    Raises:
        StructureError: If the array is malformed or layer indices are not
            contiguous from zero
    """
    clean = strip_comments(text)
    body = find_keymaps_literal(clean)
    entries = split_layer_entries(body, parse_enums(clean))
    if not entries:
        raise StructureError("keymaps array has no layers")

    entries.sort(key=lambda entry: entry.index)
    indices = [entry.index for entry in entries]
    if indices != list(range(len(entries))):
        raise StructureError(f"layer indices are not contiguous: {indices}")

    logger.debug("found %d layers", len(entries))
    return entries
