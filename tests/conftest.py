"""Shared keymap.c fixtures for a 44-key Keyball layout."""

import pytest

BASE_TOKENS = [
    "KC_TAB", "KC_Q", "KC_W", "KC_E", "KC_R", "KC_T",
    "KC_Y", "KC_U", "KC_I", "KC_O", "KC_P", "KC_BSPC",
    "KC_LCTL", "KC_A", "KC_S", "KC_D", "KC_F", "KC_G",
    "KC_H", "KC_J", "KC_K", "LT(5, KC_L)", "KC_SCLN", "KC_ENT",
    "KC_LSFT", "KC_Z", "KC_X", "KC_C", "KC_V", "KC_B",
    "KC_N", "KC_M", "KC_COMM", "KC_DOT", "KC_SLSH", "KC_RSFT",
    "MO(4)", "KC_LALT", "KC_LGUI", "MO(3)", "KC_SPC",
    "MO(1)", "MO(2)", "KC_RALT",
]
LT_SLOT = 21
TRANS_TOKENS = ["_______"] * 44


def layout_call(tokens: list[str], macro: str = "LAYOUT_universal") -> str:
    return f"{macro}(\n    " + ",\n    ".join(tokens) + "\n  )"


def keymap_source(*layers: list[str], body: str | None = None) -> str:
    """Wrap layer token lists in a minimal keymap.c."""
    if body is None:
        body = ",\n".join(f"  [{i}] = {layout_call(tokens)}" for i, tokens in enumerate(layers))
    return (
        "#include QMK_KEYBOARD_H\n"
        "\n"
        "// clang-format off\n"
        "const uint16_t PROGMEM keymaps[][MATRIX_ROWS][MATRIX_COLS] = {\n"
        f"{body}\n"
        "};\n"
        "// clang-format on\n"
        "\n"
        "layer_state_t layer_state_set_user(layer_state_t state) {\n"
        "  return state;\n"
        "}\n"
    )


@pytest.fixture
def base_tokens() -> list[str]:
    return list(BASE_TOKENS)


@pytest.fixture
def keymap_text() -> str:
    return keymap_source(BASE_TOKENS, TRANS_TOKENS)


@pytest.fixture
def keymap_file(tmp_path, keymap_text):
    path = tmp_path / "keymap.c"
    path.write_text(keymap_text, encoding="utf-8")
    return path
