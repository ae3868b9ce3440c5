# tests/unit/test_artifacts.py
import json

from PIL import Image

from nineblock.io.artifacts import atomic_write_json, image_to_png_bytes, save_image


def test_save_image_creates_dirs_and_png(tmp_path):
    img = Image.new("RGB", (8, 8), (10, 20, 30))
    out = save_image(img, tmp_path / "a" / "b" / "icon.png")
    assert out.exists()
    with Image.open(out) as back:
        assert back.format == "PNG"
        assert back.size == (8, 8)
        assert back.convert("RGB").getpixel((0, 0)) == (10, 20, 30)
    # no temp files left behind
    assert [p.name for p in out.parent.iterdir()] == ["icon.png"]


def test_save_image_defaults_to_png_for_unknown_suffix(tmp_path):
    out = save_image(Image.new("RGB", (2, 2)), tmp_path / "icon.data")
    assert out.read_bytes().startswith(b"\x89PNG")


def test_atomic_write_json_roundtrip(tmp_path):
    p = atomic_write_json(tmp_path / "spec.json", {"code": 1, "fill": [0, 0, 0]})
    assert json.loads(p.read_text(encoding="utf-8")) == {"code": 1, "fill": [0, 0, 0]}


def test_png_bytes_signature():
    assert image_to_png_bytes(Image.new("RGB", (1, 1))).startswith(b"\x89PNG\r\n\x1a\n")


def test_save_image_png_matches_png_bytes(tmp_path):
    img = Image.new("RGB", (4, 4), (200, 100, 50))
    out = save_image(img, tmp_path / "icon.PNG")
    assert out.read_bytes() == image_to_png_bytes(img)
