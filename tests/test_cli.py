# tests/test_cli.py
import json

from PIL import Image

from nineblock.__main__ import main
from nineblock.core.codes import code_from_text


def test_render_writes_png(tmp_path, capsys):
    out = tmp_path / "icons" / "a.png"
    rc = main(["render", "0x1234ABCD", "--size", "16", "-o", str(out)])
    assert rc == 0
    assert capsys.readouterr().out.strip() == str(out.resolve())
    with Image.open(out) as img:
        assert img.size == (16, 16)


def test_render_with_config_file(tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"nineblock": {"cell_size": 8, "background": "#000000"}}), encoding="utf-8")
    out = tmp_path / "b.png"
    assert main(["render", "4", "--size", "24", "--config", str(cfg), "-o", str(out)]) == 0
    with Image.open(out) as img:
        # inverted center cell shows the black background
        assert img.convert("RGB").getpixel((12, 12)) == (0, 0, 0)


def test_decode_prints_json(capsys):
    assert main(["decode", "0xFBFF0000"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["hex"] == "0xfbff0000"
    assert data["spec"]["red"] == 31
    assert data["fill"] == [248, 248, 248]
    assert data["stroke"] == [7, 7, 7]


def test_decode_negative_code(capsys):
    assert main(["decode", "-1"]) == 0
    assert json.loads(capsys.readouterr().out)["code"] == 0xFFFFFFFF


def test_code_command(capsys):
    assert main(["code", "alice", "--salt", "s"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["code"] == code_from_text("alice", "s")


def test_bad_code_reports_error(capsys):
    assert main(["render", "not-a-number"]) == 2
    assert "not an integer code" in capsys.readouterr().err


def test_bad_config_reports_error(tmp_path, capsys):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"palette": "dark"}), encoding="utf-8")
    assert main(["decode", "1", "--config", str(cfg)]) == 2
    assert "unknown keys" in capsys.readouterr().err


def test_decode_writes_json_file(tmp_path, capsys):
    out = tmp_path / "meta" / "decoded.json"
    assert main(["decode", "0xFBFF0000", "--output", str(out)]) == 0
    assert capsys.readouterr().out.strip() == str(out.resolve())
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["hex"] == "0xfbff0000"
    assert data["stroke"] == [7, 7, 7]
    assert [p.name for p in out.parent.iterdir()] == ["decoded.json"]
