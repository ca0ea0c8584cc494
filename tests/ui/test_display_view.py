# tests/ui/test_display_view.py
from PySide6.QtGui import QColor

from chip8_tracer.ui.display_view import DisplayView

class TestDisplayView:
    def test_set_frame_colors_pixels(self, qapp):
        view = DisplayView(scale=4, foreground="#FFFFFF", background="#000000")
        pixels = [False] * (64 * 32)
        pixels[0] = True
        pixels[64 * 31 + 63] = True

        view.set_frame(pixels)

        image = view.image()
        assert image.width() == 64 and image.height() == 32
        assert QColor(image.pixel(0, 0)) == QColor("#FFFFFF")
        assert QColor(image.pixel(63, 31)) == QColor("#FFFFFF")
        assert QColor(image.pixel(1, 0)) == QColor("#000000")

    def test_size_hint_uses_scale(self, qapp):
        view = DisplayView(scale=5)
        assert view.sizeHint().width() == 320
        assert view.sizeHint().height() == 160
