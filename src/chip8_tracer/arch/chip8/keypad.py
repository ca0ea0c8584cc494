# src/chip8_tracer/arch/chip8/keypad.py
"""
CHIP-8 16キーのキーパッド状態。
"""
from typing import List, Optional

KEY_COUNT = 16

# @intent:responsibility 入力協調者が書き込み、コアが読み出す16個の押下状態を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    @property
    def keys(self) -> List[bool]:
        return self._keys

    def set_key(self, key: int, pressed: bool) -> None:
        if not 0 <= key < KEY_COUNT:
            raise IndexError(f"Key index {key} out of range (0x0-0xF).")
        self._keys[key] = pressed

    def press(self, key: int) -> None:
        self.set_key(key, True)

    def release(self, key: int) -> None:
        self.set_key(key, False)

    def release_all(self) -> None:
        for key in range(KEY_COUNT):
            self._keys[key] = False

    # @intent:rationale レジスタ値は0-255を取り得るため、範囲外のキー番号は「押されていない」と扱います。
    def is_pressed(self, key: int) -> bool:
        return 0 <= key < KEY_COUNT and self._keys[key]

    # @intent:responsibility 昇順に走査し、最初に押されているキー番号を返します。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None
