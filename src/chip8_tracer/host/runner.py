# chip8_tracer/host/runner.py
"""
フレーム単位の実行ペーシング。

命令の実行速度（cpu_hz）とタイマー周期（timer_hz）を分離し、
1フレーム = timer_hz分の1秒として、フレームごとに決まった数の命令を実行した後
タイマーを1回だけ減算します。
"""
from typing import Callable, List, Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.snapshot import Snapshot

# @intent:responsibility 1フレーム分の命令実行とタイマー減算を行います。
# @intent:rationale タイマーは命令ごとではなくフレームごとに減算します。命令数とタイマーを混同すると時間の進みが狂います。
class FrameRunner:
    def __init__(self, cpu: Chip8Cpu, cpu_hz: int = 700, timer_hz: int = 60):
        if cpu_hz <= 0 or timer_hz <= 0:
            raise ValueError("cpu_hz and timer_hz must be positive.")
        self._cpu = cpu
        self._cpu_hz = cpu_hz
        self._timer_hz = timer_hz
        self._frame_count = 0

    @property
    def cycles_per_frame(self) -> int:
        return max(1, round(self._cpu_hz / self._timer_hz))

    @property
    def frame_interval_ms(self) -> int:
        return max(1, round(1000 / self._timer_hz))

    @property
    def frame_count(self) -> int:
        return self._frame_count

    # @intent:responsibility 1フレーム分の命令を実行し、最後にタイマーを1回減算します。
    # @intent:post-condition should_stopがTrueを返した時点で命令実行を打ち切ります（タイマーは減算します）。
    def run_frame(self, step: Optional[Callable[[], Snapshot]] = None,
                  should_stop: Optional[Callable[[Snapshot], bool]] = None) -> List[Snapshot]:
        """
        1フレームを実行し、実行した命令のSnapshotリストを返します。
        stepを渡すと（デバッガ経由など）CPUのstepの代わりに使用します。
        """
        step_fn = step if step is not None else self._cpu.step
        snapshots = []
        for _ in range(self.cycles_per_frame):
            snapshot = step_fn()
            snapshots.append(snapshot)
            if should_stop is not None and should_stop(snapshot):
                break
        self._cpu.tick_timers()
        self._frame_count += 1
        return snapshots
