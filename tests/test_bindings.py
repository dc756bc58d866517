import pytest

from keyball_viz.bindings import (
    NoOp,
    Simple,
    Transparent,
    Wrapped,
    base_binding,
    iter_functions,
    layer_argument,
    parse_binding,
    primary_argument,
)
from keyball_viz.errors import KeymapSyntaxError


@pytest.mark.parametrize("token", ["_______", "KC_TRNS", "KC_TRANSPARENT", "___"])
def test_transparent_tokens(token):
    binding = parse_binding(token)

    assert binding == Transparent()
    assert binding.to_source() == token


@pytest.mark.parametrize("token", ["XXXXXXX", "KC_NO"])
def test_noop_tokens(token):
    assert parse_binding(token) == NoOp()


@pytest.mark.parametrize("token", ["KC_A", "5", "CPI_I100", "KBC_SAVE", "MY_CUSTOM_KEY"])
def test_bare_tokens_are_simple(token):
    assert parse_binding(f"  {token} ") == Simple(token)


def test_layer_tap():
    assert parse_binding("LT(5, KC_L)") == Wrapped("LT", [Simple("5"), Simple("KC_L")])


def test_nested_wrappers_are_kept():
    binding = parse_binding("LCTL(S(KC_A))")

    assert binding == Wrapped("LCTL", [Wrapped("S", [Simple("KC_A")])])
    assert list(iter_functions(binding)) == ["LCTL", "S"]


def test_wrapped_args_inside_are_classified():
    assert parse_binding("LT(1, _______)") == Wrapped("LT", [Simple("1"), Transparent()])


@pytest.mark.parametrize(
    "token",
    ["LT(5, KC_L)", "MT(MOD_LCTL, KC_A)", "LM(2,MOD_LSFT)", "LT(3,  S(KC_1))"],
)
def test_two_argument_round_trip(token):
    assert parse_binding(token).to_source().replace(" ", "") == token.replace(" ", "")


@pytest.mark.parametrize("token", ["", "   ", "KC_A)", "LT(5, KC_L", "LT(5,)"])
def test_malformed_bindings_raise(token):
    with pytest.raises(KeymapSyntaxError):
        parse_binding(token)


def test_wrapped_requires_arguments():
    with pytest.raises(ValueError):
        Wrapped("S", [])


def test_primary_argument_is_the_keycode():
    assert primary_argument(parse_binding("LT(5, KC_L)")) == Simple("KC_L")
    assert primary_argument(parse_binding("S(KC_1)")) == Simple("KC_1")
    assert primary_argument(parse_binding("MO(4)")) is None


def test_layer_argument():
    assert layer_argument(parse_binding("MO(4)")) == 4
    assert layer_argument(parse_binding("LT(5, KC_L)")) == 5
    assert layer_argument(parse_binding("TG(_NAV)")) is None
    assert layer_argument(parse_binding("S(KC_1)")) is None


def test_base_binding_descends_wrappers():
    assert base_binding(parse_binding("LCTL(S(KC_A))")) == Simple("KC_A")
    assert base_binding(parse_binding("LT(2, MO(3))")) is None
    assert base_binding(Simple("KC_B")) == Simple("KC_B")
