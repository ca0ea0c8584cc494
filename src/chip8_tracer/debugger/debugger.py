# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.transport.bus import BusAccessType

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_nameはCPUのレジスタマップのキー（"V0", "I", "PC" など）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

_ACCESS_TYPES = {
    BreakpointConditionType.MEMORY_READ: BusAccessType.READ,
    BreakpointConditionType.MEMORY_WRITE: BusAccessType.WRITE,
}

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    実行履歴は history_limit 件まで保持します。
    """
    def __init__(self, cpu: AbstractCpu, history_limit: int = 1000):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers: Dict[str, int] = self._cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
        self._last_snapshot = None
        self._previous_registers = self._cpu.get_register_map()

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def is_running(self) -> bool:
        return self._running

    # @intent:responsibility 現在のPCにPC_MATCHブレークポイントが設定されているかを返します。
    def is_pc_breakpoint(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    # @intent:responsibility 直前に実行した命令のSnapshotに基づき、PC_MATCH以外のブレークポイントを評価します。
    def check_breakpoints(self, snapshot: Snapshot) -> bool:
        current = self._cpu.get_register_map()

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type in _ACCESS_TYPES:
                access_type = _ACCESS_TYPES[bp.condition_type]
                for access in snapshot.bus_activity:
                    if access.access_type == access_type and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in current and current[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                name = bp.register_name
                if name in current and name in self._previous_registers:
                    if current[name] != self._previous_registers[name]:
                        return True
        return False

    # @intent:responsibility CPUを1命令分実行し、その結果のSnapshotを返します。
    def step_instruction(self) -> Snapshot:
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        self._history.append(snapshot)
        return snapshot

    # @intent:responsibility 1命令実行後、ブレークポイントに該当すれば True を返します（UIのフレーム実行用）。
    def step_and_check(self) -> bool:
        snapshot = self.step_instruction()
        if self.check_breakpoints(snapshot) or self.is_pc_breakpoint(self._cpu.get_state().pc):
            return True
        return False

    def run(self, max_steps: Optional[int] = None) -> int:
        """
        ブレークポイントにヒットするか、stop()が呼ばれるか、max_stepsに達するまで実行を継続します。
        実行した命令数を返します。
        """
        self._running = True
        executed = 0

        # 現在のPCにブレークポイントがある場合は、まず1命令進めてから評価を始める
        if max_steps != 0 and self.is_pc_breakpoint(self._cpu.get_state().pc):
            snapshot = self.step_instruction()
            executed += 1
            if self.check_breakpoints(snapshot):
                self._running = False
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#06x}")
                return executed

        while self._running:
            if max_steps is not None and executed >= max_steps:
                break

            current_pc = self._cpu.get_state().pc
            if self.is_pc_breakpoint(current_pc):
                self._running = False
                print(f"Breakpoint hit at PC: {current_pc:#06x}")
                break

            snapshot = self.step_instruction()
            executed += 1

            if self.check_breakpoints(snapshot):
                self._running = False
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#06x}")

        self._running = False
        return executed

    def stop(self) -> None:
        self._running = False
