import pytest
import yaml

from conftest import BASE_TOKENS, TRANS_TOKENS, keymap_source
from keyball_viz.cli import create_parser, default_output_path, run


def test_draw_writes_output(keymap_file, tmp_path, capsys):
    output = tmp_path / "out.svg"

    assert run(["draw", str(keymap_file), "-o", str(output)]) == 0

    assert output.read_text(encoding="utf-8").startswith("<svg ")
    assert f"Keymap with 2 layers written to {output}" in capsys.readouterr().out


def test_draw_default_output(keymap_file, tmp_path, monkeypatch):
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    assert run(["draw", str(keymap_file)]) == 0
    assert (workdir / "keymap.svg").exists()


def test_default_output_path(tmp_path):
    assert str(default_output_path(tmp_path / "boards" / "keymap.c")) == "keymap.svg"


def test_draw_with_stats(keymap_file, tmp_path, capsys):
    assert run(["draw", str(keymap_file), "-o", str(tmp_path / "out.svg"), "--show-stats"]) == 0

    out = capsys.readouterr().out
    assert "Layer 0: Total Keys: 44" in out
    assert "Wrapper functions used: 2 (LT, MO)" in out


def test_mismatch_leaves_no_output(tmp_path, capsys):
    keymap_file = tmp_path / "keymap.c"
    keymap_file.write_text(keymap_source(BASE_TOKENS[:40]), encoding="utf-8")
    output = tmp_path / "out.svg"

    assert run(["draw", str(keymap_file), "-o", str(output)]) == 1

    err = capsys.readouterr().err
    assert "LayoutMismatchError" in err
    assert "expected 44 keys, got 40" in err
    assert not output.exists()


def test_missing_keymap(tmp_path, capsys):
    assert run(["draw", str(tmp_path / "nope.c")]) == 1
    assert "nope.c" in capsys.readouterr().err


def test_stats_yaml(keymap_file, capsys):
    assert run(["stats", str(keymap_file), "--format", "yaml", "--top", "3"]) == 0

    data = yaml.safe_load(capsys.readouterr().out)
    assert data["layers"][1] == {"index": 1, "total": 44, "assigned": 0, "unassigned": 44}
    assert data["functions"] == ["LT", "MO"]
    assert len(data["keycodes"]) == 3


def test_stats_text(keymap_file, capsys):
    assert run(["stats", str(keymap_file)]) == 0

    out = capsys.readouterr().out
    assert "Layer 1: Total Keys: 44, Assigned Keys: 0, Unassigned Keys: 44" in out
    assert "Keycode usage:" in out


def test_dump_config(capsys):
    assert run(["dump-config"]) == 0

    data = yaml.safe_load(capsys.readouterr().out)
    assert data["draw_config"]["key_w"] == 60
    assert data["layout"] == "keyball44"


def test_config_selects_layout(tmp_path, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("layout: keyball44_ext\nlayer_names: [Base]\n", encoding="utf-8")
    keymap_file = tmp_path / "keymap.c"
    keymap_file.write_text(keymap_source(BASE_TOKENS + ["KC_NO", "KC_NO"], TRANS_TOKENS + ["_______"] * 2))
    output = tmp_path / "out.svg"

    assert run(["-c", str(config_file), "draw", str(keymap_file), "-o", str(output)]) == 0
    assert "Layer 0: Base" in output.read_text(encoding="utf-8")


def test_unknown_layout_in_config(tmp_path, keymap_file, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("layout: planck\n", encoding="utf-8")

    assert run(["-c", str(config_file), "stats", str(keymap_file)]) == 1
    assert "planck" in capsys.readouterr().err


def test_layout_options_are_exclusive():
    parser = create_parser()
    args = parser.parse_args(["draw", "keymap.c", "--layout", "keyball44_ext"])

    assert args.layout == "keyball44_ext"
    assert args.layout_file is None


def test_layout_file_must_be_a_mapping(keymap_file, tmp_path, capsys):
    layout_file = tmp_path / "layout.yaml"
    layout_file.write_text("- {x: 0, y: 0}\n", encoding="utf-8")

    assert run(["stats", str(keymap_file), "--layout-file", str(layout_file)]) == 1
    assert "layout.yaml" in capsys.readouterr().err


def test_undecodable_keymap(tmp_path, capsys):
    keymap_file = tmp_path / "keymap.c"
    keymap_file.write_bytes(b"\xff\xfe keymaps")

    assert run(["stats", str(keymap_file)]) == 1

    err = capsys.readouterr().err
    assert "StructureError" in err
    assert "keymap.c is not valid UTF-8" in err
    assert "configuration" not in err


def test_negative_top_is_rejected(keymap_file, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(["stats", str(keymap_file), "--top", "-1"])

    assert exc_info.value.code == 2
    assert "must be 0 or more" in capsys.readouterr().err
