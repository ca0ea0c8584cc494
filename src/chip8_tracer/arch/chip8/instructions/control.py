# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.peripherals import Peripherals
from .base import Chip8Operation, push_address, pop_address, skip_next

# --- JP / CALL / RET ---
# @intent:responsibility JP nnn: PCを絶対アドレスへ移します。
def execute_jp(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.pc = op.nnn

# @intent:responsibility CALL nnn: 次の命令のアドレス（フェッチ済みのPC）を積んでからジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    push_address(state, state.pc)
    state.pc = op.nnn

def execute_ret(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    state.pc = pop_address(state)

# --- Skip family ---
def execute_se_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    if state.v[op.x] == op.nn:
        skip_next(state)

def execute_sne_byte(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    if state.v[op.x] != op.nn:
        skip_next(state)

def execute_se_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

def execute_sne_reg(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- Keypad ---
# @intent:responsibility SKP Vx: キー番号Vxが押されていれば次の命令をスキップします。
def execute_skp(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    if io.keypad.is_pressed(state.v[op.x]):
        skip_next(state)

def execute_sknp(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    if not io.keypad.is_pressed(state.v[op.x]):
        skip_next(state)

# @intent:responsibility LD Vx, K: 押されているキーを待ちます。
# @intent:rationale スレッドは止めず、PCを2戻して同じ命令を次サイクルで再フェッチさせる協調的なビジーポーリングです。
def execute_wait_key(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    key = io.keypad.first_pressed()
    if key is None:
        state.pc = (state.pc - 2) & 0xFFFF
    else:
        state.v[op.x] = key
