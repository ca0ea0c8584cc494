# src/chip8_tracer/arch/chip8/display.py
"""
CHIP-8 モノクロフレームバッファ。
"""
from typing import List

WIDTH = 64
HEIGHT = 32

# @intent:responsibility 64x32ドットの表示内容を、行優先のフラットなbool列として保持します。
# @intent:rationale ダーティ領域は管理しません。バッファ全体が常に表示すべき内容そのものです。
class Display:
    """
    64x32のモノクロフレームバッファ。インデックスは x + y * 64 です。
    """
    def __init__(self):
        self._pixels: List[bool] = [False] * (WIDTH * HEIGHT)

    @property
    def pixels(self) -> List[bool]:
        """表示内容。ホスト側はこのリストを毎フレーム参照します。"""
        return self._pixels

    def clear(self) -> None:
        for index in range(len(self._pixels)):
            self._pixels[index] = False

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[x + y * WIDTH]

    # @intent:responsibility 指定ピクセルをXORで反転し、反転前に点灯していたかを返します。
    # @intent:pre-condition 座標は画面内である必要があります（クリップは呼び出し側の責務）。
    def toggle(self, x: int, y: int) -> bool:
        index = x + y * WIDTH
        was_set = self._pixels[index]
        self._pixels[index] = not was_set
        return was_set

    def rows(self) -> List[List[bool]]:
        return [self._pixels[y * WIDTH:(y + 1) * WIDTH] for y in range(HEIGHT)]

    # @intent:responsibility ターミナル表示やテスト用に、フレームバッファを文字列化します。
    def render_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if pixel else off for pixel in row) for row in self.rows())
