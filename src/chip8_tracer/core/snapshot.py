# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "1A2B"
    mnemonic: str # 例: "JP"
    operands: List[str] = field(default_factory=list) # 例: ["$A2B"]
    cycle_count: int = 1 # 命令実行に必要なサイクル数

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、シンボル情報など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "JP $A2B"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    stateはスナップショット生成時にコピーされるため、その後の実行で変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
