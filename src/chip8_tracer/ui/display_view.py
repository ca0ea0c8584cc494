# src/chip8_tracer/ui/display_view.py
"""
CHIP-8フレームバッファを描画するウィジェット。
"""
from typing import Sequence

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtCore import Qt, QSize

from chip8_tracer.arch.chip8.display import WIDTH, HEIGHT

# @intent:responsibility 64x32のbool列を受け取り、前景色/背景色で拡大表示します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, foreground: str = "#33FF66", background: str = "#101010", parent=None):
        super().__init__(parent)
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._image = QImage(WIDTH, HEIGHT, QImage.Format_RGB32)
        self._image.fill(self._background)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setFocusPolicy(Qt.NoFocus)

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._scale, HEIGHT * self._scale)

    # @intent:responsibility フレームバッファの内容を内部イメージへ転写し、再描画を要求します。
    def set_frame(self, pixels: Sequence[bool]) -> None:
        fg = self._foreground.rgb()
        bg = self._background.rgb()
        for y in range(HEIGHT):
            base = y * WIDTH
            for x in range(WIDTH):
                self._image.setPixel(x, y, fg if pixels[base + x] else bg)
        self.update()

    def image(self) -> QImage:
        return self._image

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        # アスペクト比2:1を保ったまま最大の整数倍率で中央に配置する
        scale = max(1, min(self.width() // WIDTH, self.height() // HEIGHT))
        w, h = WIDTH * scale, HEIGHT * scale
        x0 = (self.width() - w) // 2
        y0 = (self.height() - h) // 2
        painter.drawImage(x0, y0, self._image.scaled(w, h))
        painter.end()
