# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFを出力に使う命令は、結果をVxへ書いた後でフラグを書き込みます。
x=0xFの場合はフラグが結果を上書きします（既知の挙動であり、ガードしません）。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.peripherals import Peripherals
from .base import Chip8Operation

# --- Immediate ---
# @intent:responsibility ADD Vx, nn: 256で折り返す加算。VFは変更しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

def execute_rnd(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = io.random_byte() & op.nn

# --- 8xy_ family ---
def execute_or(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = state.v[op.x] | state.v[op.y]

def execute_and(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = state.v[op.x] & state.v[op.y]

def execute_xor(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.v[op.x] = state.v[op.x] ^ state.v[op.y]

# @intent:responsibility ADD Vx, Vy: 8bitを超えた場合にVF=1（キャリー）。
def execute_add_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# @intent:responsibility SUB Vx, Vy: Vx-Vy。VF=1は「ボローなし」（Vx >= Vy）を意味します。
def execute_sub(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.v[op.x] = (v1 - v2) & 0xFF
    state.vf = 1 if v1 >= v2 else 0

# @intent:responsibility SUBN Vx, Vy: Vy-Vx。フラグの極性はSUBと同じです。
def execute_subn(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.v[op.x] = (v2 - v1) & 0xFF
    state.vf = 1 if v2 >= v1 else 0

# @intent:responsibility SHR Vx: 右シフト。押し出された最下位ビットをVFへ。
def execute_shr(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    lsb = state.v[op.x] & 0x01
    state.v[op.x] = state.v[op.x] >> 1
    state.vf = lsb

# @intent:responsibility SHL Vx: 左シフト。押し出された最上位ビットをVFへ。
def execute_shl(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    msb = (state.v[op.x] >> 7) & 0x01
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF
    state.vf = msb

# --- Index ---
# @intent:responsibility ADD I, Vx: Iは16bitで折り返します。VFは変更しません。
def execute_add_index(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF
