# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List
from chip8_tracer.core.state import CpuState

# @intent:constant CHIP-8のメモリレイアウトとスタック構成を定義します。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
STACK_DEPTH = 16
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP）、コールスタック、タイマーを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spは次に使用するスタックスロットを指します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000      # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0

    # @intent:accessor フラグレジスタ(VF)へのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF
