# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 マシンエミュレーションの中心モジュール。

メモリ（Bus）、レジスタ、コールスタック、タイマー、表示、キー状態を所有し、
fetch / execute / push / pop を公開インターフェースとして提供します。
"""
import random
from typing import Dict, List, Optional, Tuple

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from chip8_tracer.transport.bus import Bus, RAM, ROM
from chip8_tracer.arch.chip8.state import Chip8CpuState, MEMORY_SIZE, REGISTER_COUNT
from chip8_tracer.arch.chip8.font import FONTSET, FONT_START
from chip8_tracer.arch.chip8.display import Display
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.peripherals import Peripherals
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8.instructions.base import Chip8Operation, push_address, pop_address
from chip8_tracer.arch.chip8 import disassembler

# @intent:utility_function CHIP-8標準のメモリ構成（フォントROM + 残り全域のRAM）のバスを生成します。
# @intent:rationale 書き込みを禁止するのは80バイトのフォントだけです。0x050-0x1FFの予約領域はプログラムから読み書きできます。
def create_memory_bus() -> Bus:
    font_end = FONT_START + len(FONTSET)
    bus = Bus()
    bus.register_device(FONT_START, font_end - 1, ROM(len(FONTSET)))
    bus.register_device(font_end, MEMORY_SIZE - 1, RAM(MEMORY_SIZE - font_end))
    return bus

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシン。全てのアーキテクチャ状態をこのインスタンスが所有します。
    ドライバは fetch → execute（または step）を繰り返し呼び出し、
    別の周期（60Hz）で tick_timers を呼び出します。
    """
    # @intent:pre-condition busは0x000-0xFFFの全域がマップされている必要があります。省略時は標準構成を生成します。
    def __init__(self, bus: Optional[Bus] = None, rng: Optional[random.Random] = None):
        super().__init__(bus if bus is not None else create_memory_bus())
        self._io = Peripherals(rng=rng if rng is not None else random.Random())
        # フォントは構築時に一度だけ配置する
        self._bus.load_block(FONT_START, FONTSET)

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility レジスタを初期化し、表示とキー状態をクリアします。メモリ内容は保持します。
    def reset(self) -> None:
        super().reset()
        self._io.display.clear()
        self._io.keypad.release_all()

    @property
    def display(self) -> Display:
        return self._io.display

    @property
    def keypad(self) -> Keypad:
        return self._io.keypad

    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # --- Public machine surface ---

    # @intent:responsibility PCの位置からビッグエンディアンの16bitワードを読み、PCを2進めて返します。
    # @intent:pre-condition PC+1はメモリ範囲内である必要があります（範囲外はBusがIndexErrorを送出）。
    def fetch(self) -> int:
        pc = self._state.pc
        opcode = (self._bus.read(pc) << 8) | self._bus.read(pc + 1)
        self._state.pc = (pc + 2) & 0xFFFF
        return opcode

    # @intent:responsibility フェッチ済みのオペコードをデコードして実行し、デコード結果を返します。
    def execute(self, opcode: int) -> Chip8Operation:
        operation = decode_opcode(opcode, (self._state.pc - 2) & 0xFFFF)
        self._execute(operation)
        return operation

    def push(self, address: int) -> None:
        push_address(self._state, address)

    def pop(self) -> int:
        return pop_address(self._state)

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減らします（0未満にはなりません）。
    # @intent:rationale 命令実行ごとではなく、ホスト側の実時間周期（通常60Hz）で呼び出される前提です。
    def tick_timers(self) -> None:
        if self._state.delay_timer > 0:
            self._state.delay_timer -= 1
        if self._state.sound_timer > 0:
            self._state.sound_timer -= 1

    # --- AbstractCpu hooks ---

    def _fetch(self) -> int:
        return self.fetch()

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, (self._state.pc - 2) & 0xFFFF)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._io)

    # --- UI向けAPI ---

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{n:X}": s.v[n] for n in range(REGISTER_COUNT)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return regs

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
