# chip8_tracer/core/errors.py
"""
コアエンジンが送出する例外の定義。

命令ストリームの異常（未実装オペコード）と、資源制限違反（スタック溢れ）を
通常の実行結果と区別して呼び出し側（ドライバ）に伝えます。
"""

# @intent:responsibility CHIP-8エミュレーションに関する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass

# @intent:responsibility デコード表に存在しないオペコードを実行しようとしたことを表します。
class UnimplementedOpcodeError(Chip8Error):
    """
    未実装（または不正）なオペコード。命令ストリームとしては致命的です。
    """
    def __init__(self, opcode: int, address: int):
        self.opcode = opcode
        self.address = address
        super().__init__(f"Unimplemented opcode 0x{opcode:04X} at 0x{address:03X}")

# @intent:responsibility 16段のコールスタックを超えてpushしようとしたことを表します。
class StackOverflowError(Chip8Error):
    def __init__(self, stack_pointer: int):
        self.stack_pointer = stack_pointer
        super().__init__(f"Call stack overflow (sp={stack_pointer})")

# @intent:responsibility 空のコールスタックからpopしようとしたことを表します。
class StackUnderflowError(Chip8Error):
    def __init__(self, stack_pointer: int):
        self.stack_pointer = stack_pointer
        super().__init__(f"Call stack underflow (sp={stack_pointer})")

# @intent:responsibility プログラム領域に収まらないROMイメージを表します。
class RomTooLargeError(Chip8Error, ValueError):
    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM image of {size} bytes exceeds the {capacity}-byte program area.")
