# chip8_tracer/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8のプログラムイメージ（生のビッグエンディアン命令列）を 0x200 から配置します。
"""
from pathlib import Path
from typing import Union

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.errors import RomTooLargeError
from chip8_tracer.arch.chip8.state import MEMORY_SIZE, PROGRAM_START

# @intent:constant プログラム領域に置けるROMの最大サイズ（3584バイト）。
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

class RomLoader:
    """
    CHIP-8 ROMイメージを解析せずにそのままバスへロードするローダー。
    """
    def __init__(self, load_address: int = PROGRAM_START):
        self._load_address = load_address

    # @intent:responsibility ファイルからROMイメージを読み込み、バスへ配置します。
    # @intent:post-condition ロードしたバイト数を返します。
    def load_rom(self, file_path: Union[str, Path], bus: Bus) -> int:
        with open(file_path, 'rb') as f:
            data = f.read()
        return self.load_bytes(data, bus)

    # @intent:responsibility バイト列をバスへ配置します。
    # @intent:pre-condition 空でなく、プログラム領域（0x200-0xFFF）に収まるサイズである必要があります。
    def load_bytes(self, data: bytes, bus: Bus) -> int:
        if not data:
            raise ValueError("ROM image is empty.")
        capacity = MEMORY_SIZE - self._load_address
        if len(data) > capacity:
            raise RomTooLargeError(len(data), capacity)

        bus.load_block(self._load_address, data)
        return len(data)
