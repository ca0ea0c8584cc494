# src/chip8_tracer/arch/chip8/instructions/graphics.py
"""
表示命令（画面消去、スプライト描画）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.peripherals import Peripherals
from chip8_tracer.arch.chip8.display import WIDTH, HEIGHT
from .base import Chip8Operation, index_address

def execute_cls(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    io.display.clear()

# @intent:responsibility DRW Vx, Vy, n: I から n 行のスプライトをXOR描画し、衝突をVFに報告します。
# @intent:rationale 原点の折り返しは開始時に一度だけ行い、画面外にはみ出したピクセルは折り返さずに捨てます。
def execute_drw(state: Chip8CpuState, bus: Bus, io: Peripherals, op: Chip8Operation) -> None:
    origin_x = state.v[op.x] % WIDTH
    origin_y = state.v[op.y] % HEIGHT
    state.vf = 0

    for row in range(op.n):
        sprite_byte = bus.read(index_address(state, row))
        target_y = origin_y + row
        if target_y >= HEIGHT:
            continue
        for col in range(8):
            if not sprite_byte & (0x80 >> col):
                continue
            target_x = origin_x + col
            if target_x >= WIDTH:
                continue
            # 衝突フラグはスプライト全体で一度立ったら戻さない
            if io.display.toggle(target_x, target_y):
                state.vf = 1
