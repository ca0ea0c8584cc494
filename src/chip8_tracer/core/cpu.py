# chip8_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import copy
from abc import ABC, abstractmethod
from typing import List, Dict, Tuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_tracer.core.state import CpuState
from chip8_tracer.common.types import RegisterLayoutInfo

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        """
        レジスタを初期値に戻し、累計サイクル数をクリアします。
        """
        self._state = self._create_initial_state()
        self._cycle_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility バスへの参照を返します。
    def get_bus(self) -> Bus:
        return self._bus

    def get_cycle_count(self) -> int:
        return self._cycle_count

    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから次の命令（オペコード）をフェッチし、その値を返します。
        """
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        """
        与えられたオペコードを解析し、Operationオブジェクトとして返します。
        """
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        """
        デコードされた命令を実行し、CPUの状態を更新します。
        """
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→フェッチ→デコード→実行→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotオブジェクトを返します。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._bus.get_and_clear_activity_log()

        # 2. フェッチ（PCはフェッチ側で進める）
        opcode = self._fetch()

        # 3. デコード
        operation = self._decode(opcode)

        # 4. 実行
        self._execute(operation)

        # 5. 後処理 & Snapshot生成
        return self._create_snapshot(operation)

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += operation.cycle_count

        symbol_info = operation.mnemonic
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)

        # stateはリストを含む可変オブジェクトなので、履歴として残せるようディープコピーする
        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info),
            bus_activity=bus_activity
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_word, mnemonic) のタプルリストを返す。
        """
        pass
