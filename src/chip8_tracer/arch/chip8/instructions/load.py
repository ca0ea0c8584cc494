# src/chip8_tracer/arch/chip8/instructions/load.py
"""
ロード／ストア命令（レジスタ、Iレジスタ、タイマー、メモリ）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.peripherals import Peripherals
from chip8_tracer.arch.chip8.font import FONT_START, GLYPH_HEIGHT
from .base import Chip8Operation, index_address

def execute_ld_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = op.nn

def execute_ld_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = state.v[op.y]

def execute_ld_index(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.i = op.nnn

# --- Timers ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = state.delay_timer

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.delay_timer = state.v[op.x]

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.sound_timer = state.v[op.x]

# --- Memory ---
# @intent:responsibility LD F, Vx: 数字Vxのフォントグリフのアドレスを I に設定します（Vx <= 0xF で有効）。
def execute_ld_font(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.i = (FONT_START + state.v[op.x] * GLYPH_HEIGHT) & 0xFFFF

# @intent:responsibility LD B, Vx: Vxを10進3桁に分解し、百・十・一の位を I, I+1, I+2 へ書き込みます。
def execute_ld_bcd(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    value = state.v[op.x]
    bus.write(index_address(state, 0), value // 100)
    bus.write(index_address(state, 1), (value // 10) % 10)
    bus.write(index_address(state, 2), value % 10)

# @intent:responsibility LD [I], Vx: V0..Vx（xを含む）を I からのメモリへ保存します。Iは変更しません。
def execute_store_registers(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    for reg in range(op.x + 1):
        bus.write(index_address(state, reg), state.v[reg])

# @intent:responsibility LD Vx, [I]: I からのメモリを V0..Vx（xを含む）へ読み込みます。Iは変更しません。
def execute_load_registers(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    for reg in range(op.x + 1):
        state.v[reg] = bus.read(index_address(state, reg))
