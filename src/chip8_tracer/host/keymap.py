# chip8_tracer/host/keymap.py
"""
物理キーボードのキー名とCHIP-8キー番号の対応付け。

UI層はQtのキーコードをキー名（"1", "Q" など）に変換してからこのモジュールを使います。
"""
from typing import Dict, Optional

from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.config.models import DEFAULT_KEYMAP

# @intent:responsibility キー名からキー番号を解決し、押下・解放をキーパッドに反映します。
class KeyMap:
    def __init__(self, mapping: Optional[Dict[str, int]] = None):
        source = mapping if mapping is not None else DEFAULT_KEYMAP
        self._mapping: Dict[str, int] = {name.upper(): key for name, key in source.items()}

    def resolve(self, key_name: str) -> Optional[int]:
        return self._mapping.get(key_name.upper())

    # @intent:responsibility キーイベントをキーパッドに反映します。
    # @intent:post-condition マップされていないキーは無視し、Falseを返します。
    def apply(self, keypad: Keypad, key_name: str, pressed: bool) -> bool:
        key = self.resolve(key_name)
        if key is None:
            return False
        keypad.set_key(key, pressed)
        return True

    def as_dict(self) -> Dict[str, int]:
        return dict(self._mapping)
