# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.errors import UnimplementedOpcodeError
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.peripherals import Peripherals
from .base import Chip8Operation, InstructionKind, OpcodeFields, split_opcode
from .maps import (
    FAMILY_MAP, SYSTEM_MAP, REGISTER_COMPARE_MAP, ALU_MAP, KEY_MAP, MISC_MAP,
    FORMAT_MAP, EXECUTE_MAP,
)

# @intent:responsibility ニブルから命令種別を分類します。該当しない場合はNoneを返します。
def classify(opcode: int, fields: OpcodeFields) -> Optional[InstructionKind]:
    if fields.n1 in FAMILY_MAP:
        return FAMILY_MAP[fields.n1]
    if fields.n1 == 0x0:
        return SYSTEM_MAP.get(opcode)
    if fields.n1 in REGISTER_COMPARE_MAP:
        return REGISTER_COMPARE_MAP[fields.n1] if fields.n == 0 else None
    if fields.n1 == 0x8:
        return ALU_MAP.get(fields.n)
    if fields.n1 == 0xE:
        return KEY_MAP.get(fields.nn)
    if fields.n1 == 0xF:
        return MISC_MAP.get(fields.nn)
    return None

# @intent:responsibility CHIP-8のオペコードをデコードし、Chip8Operationを返します。状態は変更しません。
def decode_opcode(opcode: int, pc: int = 0) -> Chip8Operation:
    """
    16bitオペコードをデコードします。
    未知のパターンはmnemonic="UNKNOWN"、kind=Noneとして返し、実行時にエラーとします。
    """
    fields = split_opcode(opcode)
    kind = classify(opcode, fields)
    if kind is None:
        return Chip8Operation(
            opcode_hex=f"{opcode:04X}", mnemonic="UNKNOWN", operands=[f"${opcode:04X}"],
            opcode=opcode, address=pc,
            x=fields.x, y=fields.y, n=fields.n, nn=fields.nn, nnn=fields.nnn,
        )
    mnemonic, templates = FORMAT_MAP[kind]
    values = fields._asdict()
    return Chip8Operation(
        opcode_hex=f"{opcode:04X}",
        mnemonic=mnemonic,
        operands=[template.format(**values) for template in templates],
        kind=kind, opcode=opcode, address=pc,
        x=fields.x, y=fields.y, n=fields.n, nn=fields.nn, nnn=fields.nnn,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:post-condition 未実装のオペコードはUnimplementedOpcodeErrorとして送出し、無視しません。
def execute_instruction(operation: Chip8Operation, state: Chip8CpuState, bus: Bus, io: Peripherals) -> None:
    executor = EXECUTE_MAP.get(operation.kind) if operation.kind is not None else None
    if executor is None:
        raise UnimplementedOpcodeError(operation.opcode, operation.address)
    executor(state, bus, io, operation)
