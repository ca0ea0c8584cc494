# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用し、Bus.peekを使うことでバスアクセスログを汚しません。
"""
from typing import List, Tuple
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import MEMORY_SIZE
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:utility_function 1命令分のテキスト表現を生成します。未知のワードはデータ定義として表示します。
def format_operation(operation) -> str:
    if operation.kind is None:
        return f"DW ${operation.opcode:04X}"
    text = operation.mnemonic
    if operation.operands:
        text += " " + ", ".join(operation.operands)
    return text

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_word, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr < end_addr:
        # 2バイト目がメモリ外になる場合は終了
        if current_addr + 1 >= MEMORY_SIZE:
            break

        opcode = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        operation = decode_opcode(opcode, current_addr)
        result.append((current_addr, f"{opcode:04X}", format_operation(operation)))
        current_addr += 2

    return result
