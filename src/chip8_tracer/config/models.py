from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:constant COSMAC VIP配列をPCキーボード左側（1234/QWER/ASDF/ZXCV）へ割り当てた既定のキーマップ。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#101010"

@dataclass
class EmulatorConfig:
    cpu_hz: int = 700        # 1秒あたりの命令数
    timer_hz: int = 60       # タイマー減算とフレーム更新の周期
    seed: Optional[int] = None  # Cxnn用の乱数シード（Noneなら非決定的）
    history_limit: int = 1000
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
