# chip8_tracer/debugger/trace.py
"""
ヘッドレスのトレース実行。

ウィンドウを開かずに指定命令数だけ実行し、1命令ごとの逆アセンブル行と
最終的なフレームバッファを出力します。
"""
import sys
from typing import Optional, TextIO

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.host.runner import FrameRunner

# @intent:utility_function Snapshotを1行のトレース表示に整形します。
def format_trace_line(snapshot: Snapshot) -> str:
    op = snapshot.operation
    return f"{op.address:03X}  {op.opcode_hex}  {snapshot.metadata.symbol_info}"

# @intent:responsibility 最大steps命令を実行し、トレースを出力します。
# @intent:post-condition 正常終了なら0、コアの異常（未実装オペコード、スタック異常など）なら1を返します。
def run_trace(cpu: Chip8Cpu, steps: int, cpu_hz: int = 700, timer_hz: int = 60,
              out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    debugger = Debugger(cpu, history_limit=1)
    runner = FrameRunner(cpu, cpu_hz=cpu_hz, timer_hz=timer_hz)
    executed = 0

    def traced_step() -> Snapshot:
        nonlocal executed
        snapshot = debugger.step_instruction()
        executed += 1
        print(format_trace_line(snapshot), file=out)
        return snapshot

    status = 0
    try:
        while executed < steps:
            # フレーム途中で指定数に達した場合は、そのフレームを打ち切る
            runner.run_frame(step=traced_step, should_stop=lambda _snapshot: executed >= steps)
    except Chip8Error as e:
        print(f"Error: {e}", file=err)
        status = 1

    print(cpu.display.render_text(), file=out)
    return status
