# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。

オペコードのフィールド分解、デコード済み命令のデータ構造、
コールスタック操作、インデックス相対アドレス計算を提供します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8CpuState, STACK_DEPTH, MEMORY_SIZE

# @intent:data_structure デコード結果の命令種別。デコードは一度だけ行い、実行はこの列挙値で振り分けます。
class InstructionKind(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP_ADDR = "1nnn"
    CALL_ADDR = "2nnn"
    SE_VX_BYTE = "3xnn"
    SNE_VX_BYTE = "4xnn"
    SE_VX_VY = "5xy0"
    LD_VX_BYTE = "6xnn"
    ADD_VX_BYTE = "7xnn"
    LD_VX_VY = "8xy0"
    OR_VX_VY = "8xy1"
    AND_VX_VY = "8xy2"
    XOR_VX_VY = "8xy3"
    ADD_VX_VY = "8xy4"
    SUB_VX_VY = "8xy5"
    SHR_VX = "8xy6"
    SUBN_VX_VY = "8xy7"
    SHL_VX = "8xyE"
    SNE_VX_VY = "9xy0"
    LD_I_ADDR = "Annn"
    RND_VX_BYTE = "Cxnn"
    DRW_VX_VY_N = "Dxyn"
    SKP_VX = "Ex9E"
    SKNP_VX = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    LD_F_VX = "Fx29"
    LD_B_VX = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"

# @intent:data_structure 16bitオペコードを4つのニブルと派生フィールドに分解した結果。
class OpcodeFields(NamedTuple):
    n1: int
    x: int    # n2
    y: int    # n3
    n: int    # n4
    nn: int   # 下位8bit
    nnn: int  # 下位12bit

# @intent:utility_function オペコードをニブルと即値フィールドに分解します。状態は変更しません。
def split_opcode(opcode: int) -> OpcodeFields:
    return OpcodeFields(
        n1=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )

# @intent:responsibility CHIP-8のデコード済み命令。共通のOperationにフィールド値と命令種別を加えます。
# @intent:rationale kindがNoneの場合は未実装オペコードを表します（逆アセンブラはそのまま表示に使います）。
@dataclass(frozen=True)
class Chip8Operation(Operation):
    kind: Optional[InstructionKind] = None
    opcode: int = 0
    address: int = 0
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

# @intent:utility_function コールスタックへ戻りアドレスを積みます。
# @intent:post-condition 満杯の場合はStackOverflowErrorを送出し、状態は変更しません。
def push_address(state: Chip8CpuState, address: int) -> None:
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(state.sp)
    state.stack[state.sp] = address & 0xFFFF
    state.sp += 1

# @intent:utility_function コールスタックから戻りアドレスを取り出します。
# @intent:post-condition 空の場合はStackUnderflowErrorを送出し、状態は変更しません。
def pop_address(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise StackUnderflowError(state.sp)
    state.sp -= 1
    return state.stack[state.sp]

# @intent:utility_function Iレジスタ+オフセットのメモリアドレスを計算します。4KBを超えた分は折り返します。
def index_address(state: Chip8CpuState, offset: int = 0) -> int:
    return (state.i + offset) % MEMORY_SIZE

# @intent:utility_function 次の命令を1つ読み飛ばします。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF
