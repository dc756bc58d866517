"""Depth-aware splitting of C macro argument lists."""

import re

from .errors import KeymapSyntaxError

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def split_top_level(text: str) -> list[str]:
    """Split text on commas that are not nested inside parentheses.

    Each piece is stripped of surrounding whitespace. Empty pieces are kept,
    callers decide whether they are an error.

    Raises:
        KeymapSyntaxError: If parentheses are unbalanced
    """
    parts = []
    current: list[str] = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise KeymapSyntaxError("unbalanced ')'", token=text.strip())
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    if depth != 0:
        raise KeymapSyntaxError("unbalanced '('", token=text.strip())

    parts.append("".join(current).strip())
    return parts


def split_call(text: str) -> tuple[str, list[str]]:
    """Split a macro call like ``LT(5, KC_L)`` into its name and arguments.

    Args:
        text: Macro call text, surrounding whitespace is ignored

    Returns:
        (name, args) tuple, e.g. ("LT", ["5", "KC_L"])

    Raises:
        KeymapSyntaxError: On unbalanced parens, an invalid macro name,
            trailing text after the call, or an empty argument
    """
    text = text.strip()
    open_pos = text.find("(")
    if open_pos < 0:
        raise KeymapSyntaxError("expected a macro call", token=text)

    name = text[:open_pos].strip()
    if not IDENTIFIER_RE.match(name):
        raise KeymapSyntaxError("invalid macro name", token=text)

    depth = 0
    close_pos = -1
    for pos in range(open_pos, len(text)):
        char = text[pos]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                close_pos = pos
                break

    if close_pos < 0:
        raise KeymapSyntaxError("unbalanced '('", token=text)
    if text[close_pos + 1:].strip():
        raise KeymapSyntaxError("unexpected text after macro call", token=text)

    args = split_top_level(text[open_pos + 1:close_pos])
    if any(not arg for arg in args):
        raise KeymapSyntaxError("empty macro argument", token=text)

    return name, args
