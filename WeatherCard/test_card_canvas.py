"""Tests for card canvas backends."""
import os

import pytest
from PIL import Image
from card_canvas import FakeCardCanvas, PILCanvas


def test_fake_canvas_creation():
    """Test creating fake canvas."""
    canvas = FakeCardCanvas(width=350, height=500)

    assert canvas.width == 350
    assert canvas.height == 500
    assert canvas.texts == []
    assert canvas.background is None


def test_fake_canvas_records_text():
    canvas = FakeCardCanvas()

    canvas.draw_text(10, 20, "Pune", 255, 255, 255, font_size=24)

    assert canvas.texts == [(10, 20, "Pune", (255, 255, 255))]
    assert canvas.text_values() == ["Pune"]


def test_fake_canvas_clear():
    canvas = FakeCardCanvas()
    canvas.draw_background("/backgrounds/night.jpeg", (20, 24, 60))
    canvas.draw_text(0, 0, "x", 0, 0, 0)

    canvas.clear()

    assert canvas.texts == []
    assert canvas.background is None
    assert canvas.fill_color == (0, 0, 0)


def test_pil_canvas_fill():
    canvas = PILCanvas(width=40, height=30)

    canvas.fill(100, 150, 200)

    image = canvas.get_image()
    assert image.size == (40, 30)
    assert image.getpixel((0, 0)) == (100, 150, 200)
    assert image.getpixel((39, 29)) == (100, 150, 200)


def test_pil_canvas_background_fallback_without_assets():
    canvas = PILCanvas(width=40, height=30)

    canvas.draw_background("/backgrounds/night.jpeg", (20, 24, 60))

    assert canvas.get_image().getpixel((5, 5)) == (20, 24, 60)


def test_pil_canvas_background_missing_file(tmp_path):
    canvas = PILCanvas(width=40, height=30, assets_dir=str(tmp_path))

    canvas.draw_background("/backgrounds/evening.jpeg", (200, 90, 60))

    assert canvas.get_image().getpixel((5, 5)) == (200, 90, 60)


def test_pil_canvas_background_image(tmp_path):
    backgrounds = tmp_path / "backgrounds"
    backgrounds.mkdir()
    Image.new("RGB", (80, 120), (0, 200, 0)).save(backgrounds / "morning.jpeg")
    canvas = PILCanvas(width=40, height=30, assets_dir=str(tmp_path))

    canvas.draw_background("/backgrounds/morning.jpeg", (255, 0, 0))

    image = canvas.get_image()
    assert image.size == (40, 30)
    r, g, b = image.getpixel((20, 15))
    # JPEG is lossy; the solid green should survive closely
    assert r < 30 and g > 170 and b < 30


def test_pil_canvas_unreadable_background(tmp_path):
    backgrounds = tmp_path / "backgrounds"
    backgrounds.mkdir()
    (backgrounds / "night.jpeg").write_bytes(b"not an image")
    canvas = PILCanvas(width=40, height=30, assets_dir=str(tmp_path))

    canvas.draw_background("/backgrounds/night.jpeg", (20, 24, 60))

    assert canvas.get_image().getpixel((5, 5)) == (20, 24, 60)


def test_pil_canvas_draw_text_changes_pixels():
    canvas = PILCanvas(width=120, height=40)

    canvas.draw_text(5, 5, "Pune", 255, 255, 255, font_size=20)

    colors = canvas.get_image().getcolors(maxcolors=120 * 40)
    assert len(colors) > 1


def test_pil_canvas_save(tmp_path):
    canvas = PILCanvas(width=40, height=30)
    canvas.fill(10, 20, 30)
    out = tmp_path / "card.png"

    canvas.save(str(out))

    assert os.path.exists(out)
    with Image.open(out) as img:
        assert img.size == (40, 30)
        assert img.getpixel((0, 0)) == (10, 20, 30)
