import pytest

from keyball_viz.errors import KeymapSyntaxError
from keyball_viz.splitter import split_call, split_top_level


def test_split_call_layer_tap():
    assert split_call("LT(5, KC_L)") == ("LT", ["5", "KC_L"])


def test_nested_call_is_one_argument():
    name, args = split_call("LAYOUT_universal(KC_TAB, LT(5, KC_L), S(KC_1))")

    assert name == "LAYOUT_universal"
    assert args == ["KC_TAB", "LT(5, KC_L)", "S(KC_1)"]


def test_arguments_are_trimmed():
    assert split_call("  MT( MOD_LCTL ,\n\tKC_A )  ") == ("MT", ["MOD_LCTL", "KC_A"])


def test_split_top_level_keeps_nested_commas():
    assert split_top_level("a, (b, c), d") == ["a", "(b, c)", "d"]


@pytest.mark.parametrize(
    "text",
    [
        "LT(5, KC_L",
        "LT(5, KC_L))",
        "1LT(5)",
        "(5)",
        "L-T(5)",
        "LT(5,)",
        "LT(5,,KC_L)",
        "F()",
        "LT(5) trailing",
        "KC_A",
    ],
)
def test_malformed_calls_raise(text):
    with pytest.raises(KeymapSyntaxError):
        split_call(text)


def test_split_top_level_rejects_stray_close_paren():
    with pytest.raises(KeymapSyntaxError):
        split_top_level("KC_A), KC_B")


def test_error_reports_offending_token():
    with pytest.raises(KeymapSyntaxError) as exc_info:
        split_call("LT(5,)")

    assert exc_info.value.token == "LT(5,)"
    assert "LT(5,)" in str(exc_info.value)
